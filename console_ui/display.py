"""Rich-rendered console displays for the three games."""

import time
from typing import Callable

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from core.game.events import EventType, GameEvent
from core.rps import RPSMatch, RPSRound
from core.tic_tac_toe import Board, TicTacToeMatch


class FramedConsole:
    """Console wrapper that frames messages and paces output."""

    def __init__(
        self,
        console: Console | None = None,
        pause_seconds: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.console = console or Console()
        self.pause_seconds = pause_seconds
        self._sleep = sleep

    def framed(self, message: str, style: str = "bold") -> None:
        self.console.print(Panel.fit(message, border_style=style))

    def say(self, message: str, markup: bool = True) -> None:
        self.console.print(message, markup=markup)

    def pause(self, factor: float = 1.0) -> None:
        if self.pause_seconds > 0:
            self._sleep(self.pause_seconds * factor)


_CATEGORY_MESSAGES = {
    "bust": "{loser} busts.",
    "target": "{winner} reached {target}!",
    "total": "{winner} is the closest to {target}.",
    "tie": "Player and dealer hands are equal. Tie game.",
}


class TwentyOneDisplay(FramedConsole):
    """
    Event sink for Twenty-One.

    Subscribe an instance to a match's emitter; it keeps just enough state
    (names, scores, the threshold) to render each event.
    """

    def __init__(self, *args, target_total: int = 21, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.target_total = target_total
        self.scores: list[tuple[str, int]] = []
        self.max_wins = 0
        self._hands: dict[str, list[str]] = {}
        self._handlers: dict[EventType, Callable[[GameEvent], None]] = {
            EventType.MATCH_STARTED: self._on_match_started,
            EventType.MATCH_RESET: self._on_scores,
            EventType.ROUND_STARTED: self._on_round_started,
            EventType.CARD_DEALT: self._on_card_dealt,
            EventType.HANDS_DEALT: self._on_hands_dealt,
            EventType.PARTICIPANT_HITS: self._on_hit,
            EventType.PARTICIPANT_STAYS: self._on_stay,
            EventType.ROUND_ENDED: self._on_round_ended,
            EventType.SCORE_UPDATED: self._on_scores,
            EventType.GRAND_CHAMPION: self._on_grand_champion,
            EventType.MATCH_ENDED: self._on_match_ended,
            EventType.INVALID_ACTION: self._on_invalid,
        }

    def __call__(self, event: GameEvent) -> None:
        handler = self._handlers.get(event.event_type)
        if handler is not None:
            handler(event)

    def _hand_block(self, name: str, cards: list[str], total: str) -> None:
        self.framed(f"{escape(name)}'s cards are:", style="cyan")
        for card in cards:
            self.say(f"\t{card}")
        self.say(f"\tTOTAL => {total}")

    def _on_match_started(self, event: GameEvent) -> None:
        self.scores = list(event.data["scores"])
        self.max_wins = event.data["max_wins"]
        self.framed("Welcome to Twenty One! Let's play!", style="green")

    def _on_scores(self, event: GameEvent) -> None:
        self.scores = list(event.data["scores"])

    def _on_round_started(self, event: GameEvent) -> None:
        self._hands = {}
        lines = [f"FIRST TO {self.max_wins} IS GRAND WINNER!", "CURRENT SCORE:"]
        lines += [f"    {escape(name)} => {score}" for name, score in self.scores]
        self.framed("\n".join(lines))
        self.say("\nDealing cards...\n")
        self.pause(2)

    def _on_card_dealt(self, event: GameEvent) -> None:
        # Keyed by role, names may coincide
        self._hands.setdefault(event.data["role"], []).append(event.data["card"])

    def _on_hands_dealt(self, event: GameEvent) -> None:
        data = event.data
        self._hand_block(data["player"], data["player_cards"], str(data["player_total"]))
        self.say("")
        self._hand_block(
            data["dealer"],
            [data["dealer_showing"]] + ["???"] * data["dealer_hidden"],
            "??",
        )

    def _on_hit(self, event: GameEvent) -> None:
        name = event.data["participant"]
        self.say(f"{escape(name)} hits.")
        if event.data["role"] == "player":
            self._hand_block(name, self._hands["player"], str(event.data["total"]))
        self.pause()

    def _on_stay(self, event: GameEvent) -> None:
        self.say(f"{escape(event.data['participant'])} stays.")
        self.pause()

    def _on_round_ended(self, event: GameEvent) -> None:
        data = event.data
        winner = data["winner"]
        if data["category"] == "bust":
            loser = data["dealer"] if data["winner_role"] == "player" else data["player"]
        else:
            loser = None
        message = _CATEGORY_MESSAGES[data["category"]].format(
            winner=winner, loser=loser, target=self.target_total
        )
        self.say(f"\n[bold]{escape(message)}[/bold]")
        if winner is not None:
            self.say(f"[bold green]{escape(winner)} wins![/bold green]")
        self._hand_block(data["player"], data["player_cards"], str(data["player_total"]))
        self.say("")
        self._hand_block(data["dealer"], data["dealer_cards"], str(data["dealer_total"]))

    def _on_grand_champion(self, event: GameEvent) -> None:
        self.pause(2)
        champion = escape(event.data["champion"])
        self.framed(
            f"{champion} has reached {event.data['max_wins']} wins!\n"
            f"{champion} is grand champion!",
            style="magenta",
        )

    def _on_match_ended(self, event: GameEvent) -> None:
        self.say("Thanks for playing Twenty One! Goodbye.")

    def _on_invalid(self, event: GameEvent) -> None:
        self.say(f"[dim yellow]{event.data.get('message', 'Invalid action')}[/dim yellow]")


class RPSDisplay(FramedConsole):
    """Renders Rock-Paper-Scissors-Lizard-Spock rounds and scores."""

    def welcome(self) -> None:
        self.framed("Welcome to Rock, Paper, Scissors, Lizard, Spock!", style="green")

    def scores(self, match: RPSMatch) -> None:
        table = Table(title=f"First to {match.max_wins} wins it all!")
        table.add_column("Name")
        table.add_column("Score", justify="right")
        table.add_row(escape(match.human_name), str(match.human_score))
        table.add_row(match.opponent.name, str(match.computer_score))
        self.console.print(table)

    def round_result(self, match: RPSMatch, result: RPSRound) -> None:
        self.say(f"{match.human_name} chose {result.human_move}.", markup=False)
        self.say(f"{match.opponent.name} chose {result.computer_move}.", markup=False)
        if result.winner is None:
            self.say("It's a tie!")
        else:
            self.say(f"[bold]{escape(result.winner)} wins![/bold]")

    def move_history(self, match: RPSMatch) -> None:
        table = Table(title="Move history")
        table.add_column("Round", justify="right")
        table.add_column(escape(match.human_name))
        table.add_column(match.opponent.name)
        table.add_column("Winner")
        for number, result in enumerate(match.rounds, start=1):
            table.add_row(
                str(number),
                str(result.human_move),
                str(result.computer_move),
                escape(result.winner) if result.winner is not None else "tie",
            )
        self.console.print(table)

    def grand_winner(self, name: str, max_wins: int) -> None:
        name = escape(name)
        self.framed(f"{name} HAS REACHED {max_wins} WINS! {name} WINS IT ALL!", style="magenta")

    def goodbye(self) -> None:
        self.say("Thanks for playing Rock, Paper, Scissors, Lizard, Spock!")


class TicTacToeDisplay(FramedConsole):
    """Renders the Tic-Tac-Toe board and match scores."""

    def welcome(self) -> None:
        self.framed("Welcome to Tic Tac Toe!", style="green")

    def board(self, match: TicTacToeMatch) -> None:
        lines = [f"FIRST TO {match.max_wins} WINS IT ALL!", "CURRENT SCORE:"]
        for contestant in (match.human, match.computer):
            lines.append(f"    {escape(contestant.name)} => {contestant.score}")
        self.framed("\n".join(lines))
        self.say(
            f"You're a {match.human.marker}. Computer is a {match.computer.marker}", markup=False
        )
        self.say(render_board(match.board), markup=False)

    def coin_toss(self, called_heads: bool, heads: bool, first: str) -> None:
        called = "heads" if called_heads else "tails"
        landed = "heads" if heads else "tails"
        self.say(f"You chose {called}. Coin landed on {landed}. {escape(first)} goes first.")
        self.pause(3)

    def round_result(self, match: TicTacToeMatch) -> None:
        winner = match.round_winner
        if winner is None:
            self.say("Board is full. It's a tie!")
        else:
            self.say(f"[bold]{escape(winner.marker)} wins![/bold]")
        self.pause(3)

    def grand_winner(self, name: str, max_wins: int) -> None:
        name = escape(name)
        self.framed(f"{name} reached {max_wins} wins!\nGrand champion: {name}", style="magenta")

    def goodbye(self) -> None:
        self.say("Thanks for playing Tic Tac Toe! Goodbye!")


def render_board(board: Board) -> str:
    """Plain-text 3x3 grid."""
    spacer = "       |       |"
    divider = "-------+-------+-------"
    blocks = []
    for row in board.rows():
        cells = "|".join(f"   {marker or ' '}   " for marker in row)
        blocks.append("\n".join([spacer, cells, spacer]))
    return f"\n{divider}\n".join(blocks)
