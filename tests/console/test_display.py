"""Tests for the rich console displays."""

from random import Random

import pytest

from console_ui.display import (
    RPSDisplay,
    TicTacToeDisplay,
    TwentyOneDisplay,
    render_board,
)
from core.cards import Card, Deck
from core.game import TwentyOneMatch
from core.participants import Action, make_dealer, make_player
from core.rps import Move, RPSMatch, RPSRound
from core.tic_tac_toe import Board, TicTacToeMatch


@pytest.fixture
def stacked_match(monkeypatch, game_config):
    """A match that deals every round from the given order, player always stays."""

    def _make(tokens: str) -> TwentyOneMatch:
        order = [Card.from_string(token) for token in tokens.split()]
        monkeypatch.setattr("core.game.match.Deck", lambda rng=None: Deck.stacked(order))
        return TwentyOneMatch.create(
            "Alice", source=lambda prompt: Action.STAY, game_config=game_config, rng=Random(0)
        )

    return _make


class TestTwentyOneDisplay:
    def test_dealer_hole_card_hidden_then_revealed(self, console, output, stacked_match):
        match = stacked_match("KH QS KC 7D")
        match.subscribe(TwentyOneDisplay(console))
        match.play_round()

        text = output.getvalue()
        assert "???" in text
        assert "TOTAL => ??" in text
        assert "Alice stays." in text
        assert "Alice is the closest to 21." in text
        assert "Alice wins!" in text
        assert "7 of Diamonds" in text

    def test_bust_message_names_loser(self, console, output, monkeypatch, game_config):
        order = [Card.from_string(t) for t in "KH 6S 9C 8D 9H".split()]
        monkeypatch.setattr("core.game.match.Deck", lambda rng=None: Deck.stacked(order))
        answers = [Action.HIT]
        match = TwentyOneMatch.create(
            "Alice", source=lambda prompt: answers.pop(0), game_config=game_config, rng=Random(0)
        )
        match.subscribe(TwentyOneDisplay(console))
        match.play_round()

        text = output.getvalue()
        assert "Alice hits." in text
        assert "Alice busts." in text
        assert "TOTAL => 25" in text

    def test_tie_message(self, console, output, stacked_match):
        match = stacked_match("KH 7S KC 7D")
        match.subscribe(TwentyOneDisplay(console))
        match.play_round()

        assert "Tie game." in output.getvalue()

    def test_grand_champion_banner(self, console, output, stacked_match):
        match = stacked_match("AH KS 9C 8D")
        match.subscribe(TwentyOneDisplay(console))
        match.run(lambda: False)

        text = output.getvalue()
        assert "Welcome to Twenty One!" in text
        assert "FIRST TO 5 IS GRAND WINNER!" in text
        assert "Alice reached 21!" in text
        assert "Alice is grand champion!" in text
        assert "Goodbye" in text

    def test_scores_shown_each_round(self, console, output, stacked_match):
        match = stacked_match("AH KS 9C 8D")
        match.subscribe(TwentyOneDisplay(console))
        match.run(lambda: False)

        assert "Alice => 4" in output.getvalue()

    def test_player_named_like_dealer(self, console, output, monkeypatch, game_config):
        order = [Card.from_string(t) for t in "2H 3S KC 5D 4H".split()]
        monkeypatch.setattr("core.game.match.Deck", lambda rng=None: Deck.stacked(order))
        match = TwentyOneMatch(
            make_player("Hal"), make_dealer(Random(0), name="Hal"), game_config=game_config
        )
        match.subscribe(TwentyOneDisplay(console))

        match.start_round()
        match.current_round.hit()

        text = output.getvalue()
        assert "4 of Hearts" in text
        assert "TOTAL => 9" in text
        # The dealer's face-down card never reaches the player's hand block
        assert "5 of Diamonds" not in text

    def test_score_lines_for_namesakes(self, console, output, monkeypatch, game_config):
        order = [Card.from_string(t) for t in "AH KS 9C 8D".split()]
        monkeypatch.setattr("core.game.match.Deck", lambda rng=None: Deck.stacked(order))
        match = TwentyOneMatch(
            make_player("Hal"), make_dealer(Random(0), name="Hal"), game_config=game_config
        )
        match.subscribe(TwentyOneDisplay(console))
        match.run(lambda: False)

        text = output.getvalue()
        assert "Hal => 4" in text
        assert "Hal => 0" in text

    def test_pauses_scale_with_setting(self, console, stacked_match):
        slept = []
        match = stacked_match("KH QS KC 7D")
        match.subscribe(TwentyOneDisplay(console, pause_seconds=0.5, sleep=slept.append))
        match.play_round()

        # Deal pause, then the player's stay
        assert slept[:2] == [1.0, 0.5]

    def test_no_pause_when_disabled(self, console, stacked_match):
        slept = []
        match = stacked_match("KH QS KC 7D")
        match.subscribe(TwentyOneDisplay(console, sleep=slept.append))
        match.play_round()

        assert slept == []

    def test_markup_in_names_is_literal(self, console, output, monkeypatch, game_config):
        order = [Card.from_string(t) for t in "KH QS KC 7D".split()]
        monkeypatch.setattr("core.game.match.Deck", lambda rng=None: Deck.stacked(order))
        match = TwentyOneMatch.create(
            "[bold]Al", source=lambda prompt: Action.STAY, game_config=game_config, rng=Random(0)
        )
        match.subscribe(TwentyOneDisplay(console))
        match.play_round()

        assert "[bold]Al wins!" in output.getvalue()


class TestRPSDisplay:
    def test_round_result_and_scores(self, console, output, game_config):
        match = RPSMatch("Alice", rng=Random(0), game_config=game_config, opponent_name="Hal")
        display = RPSDisplay(console)
        display.scores(match)
        display.round_result(match, RPSRound(Move.PAPER, Move.SPOCK, "Alice"))

        text = output.getvalue()
        assert "Alice" in text and "Hal" in text
        assert "Alice chose paper." in text
        assert "Hal chose spock." in text
        assert "Alice wins!" in text

    def test_tie(self, console, output, game_config):
        match = RPSMatch("Alice", rng=Random(0), game_config=game_config, opponent_name="Sonny")
        RPSDisplay(console).round_result(match, RPSRound(Move.PAPER, Move.PAPER, None))
        assert "It's a tie!" in output.getvalue()

    def test_move_history(self, console, output, game_config):
        match = RPSMatch("Alice", rng=Random(0), game_config=game_config, opponent_name="Hal")
        match.rounds.extend(
            [RPSRound(Move.PAPER, Move.SPOCK, "Alice"), RPSRound(Move.LIZARD, Move.LIZARD, None)]
        )
        RPSDisplay(console).move_history(match)

        text = output.getvalue()
        assert "Move history" in text
        assert "spock" in text
        assert "tie" in text


class TestTicTacToeDisplay:
    def test_render_board(self):
        board = Board()
        board.mark(1, "X")
        board.mark(5, "O")
        rows = render_board(board).splitlines()

        assert len(rows) == 11
        assert rows[1] == "   X   |       |       "
        assert rows[5] == "       |   O   |       "
        assert rows[3] == "-------+-------+-------"

    def test_board_shows_markers_and_scores(self, console, output, game_config):
        match = TicTacToeMatch("Alice", "X", rng=Random(0), game_config=game_config)
        TicTacToeDisplay(console).board(match)

        text = output.getvalue()
        assert "You're a X." in text
        assert "Alice => 0" in text

    def test_coin_toss_message(self, console, output):
        TicTacToeDisplay(console).coin_toss(True, False, "Hal")
        assert "You chose heads. Coin landed on tails. Hal goes first." in output.getvalue()

    def test_full_board_tie(self, console, output, game_config):
        match = TicTacToeMatch("Alice", "X", rng=Random(0), game_config=game_config)
        for key in (1, 3, 4, 8, 9):
            match.board.mark(key, "X")
        for key in (2, 5, 6, 7):
            match.board.mark(key, match.computer.marker)
        TicTacToeDisplay(console).round_result(match)

        assert "Board is full. It's a tie!" in output.getvalue()
