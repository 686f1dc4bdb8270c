"""Console drivers wiring prompts and displays to each engine."""

import logging
from random import Random

from config import GameConfig
from console_ui.display import RPSDisplay, TicTacToeDisplay, TwentyOneDisplay
from console_ui.prompts import ConsolePrompts
from core.game import TwentyOneMatch
from core.rps import RPSMatch
from core.tic_tac_toe import SUGGESTED_MARKERS, TicTacToeMatch

logger = logging.getLogger(__name__)


def play_twenty_one(
    prompts: ConsolePrompts,
    rng: Random,
    game_config: GameConfig,
    display: TwentyOneDisplay | None = None,
) -> TwentyOneMatch:
    """Play Twenty-One matches until the player declines a replay."""
    display = display or TwentyOneDisplay(
        prompts.console,
        pause_seconds=game_config.pause_seconds,
        target_total=game_config.target_total,
    )
    match = TwentyOneMatch.create(
        prompts.name(),
        source=prompts.hit_or_stay,
        game_config=game_config,
        rng=rng,
    )
    match.subscribe(display)
    logger.info("Twenty-One: %s vs %s", match.player.name, match.dealer.name)

    match.run(
        replay_source=lambda: prompts.yes_no("Would you like to play again?"),
        between_rounds=prompts.wait_for_enter,
    )
    return match


def play_rps(
    prompts: ConsolePrompts,
    rng: Random,
    game_config: GameConfig,
    display: RPSDisplay | None = None,
) -> RPSMatch:
    """Play Rock-Paper-Scissors-Lizard-Spock until the player quits."""
    display = display or RPSDisplay(prompts.console, pause_seconds=game_config.pause_seconds)
    display.welcome()
    match = RPSMatch(prompts.name("What is your name? "), rng=rng, game_config=game_config)

    while True:
        while match.grand_winner is None:
            display.scores(match)
            result = match.play_round(prompts.rps_move())
            display.round_result(match, result)
            display.pause(3)

        display.scores(match)
        display.move_history(match)
        display.grand_winner(match.grand_winner, match.max_wins)
        if not prompts.yes_no("Would you like to play again?"):
            break
        match.reset()

    display.goodbye()
    return match


def play_tic_tac_toe(
    prompts: ConsolePrompts,
    rng: Random,
    game_config: GameConfig,
    display: TicTacToeDisplay | None = None,
) -> TicTacToeMatch:
    """Play Tic-Tac-Toe until the player quits."""
    display = display or TicTacToeDisplay(prompts.console, pause_seconds=game_config.pause_seconds)
    display.welcome()
    name = prompts.name("What is your name? ")
    match = TicTacToeMatch(name, prompts.marker(SUGGESTED_MARKERS), rng=rng, game_config=game_config)

    def toss() -> None:
        prompts.console.print("\nCoin toss will determine who goes first.")
        called_heads = prompts.heads_or_tails()
        heads, first = match.coin_toss(called_heads)
        display.coin_toss(called_heads, heads, first.name)

    toss()
    while True:
        display.board(match)
        while not match.round_over:
            if match.current is match.human:
                match.human_moves(prompts.square(match.board.unmarked_keys()))
            else:
                match.computer_moves()
            display.board(match)

        display.round_result(match)
        winner = match.grand_winner
        if winner is not None:
            display.grand_winner(winner.name, match.max_wins)
            if not prompts.yes_no("Would you like to play again?"):
                break
            match.reset()
            toss()
        else:
            match.next_round()

    display.goodbye()
    return match
