"""Tests for Tic-Tac-Toe."""

import pytest
from random import Random

from config import GameConfig
from core.tic_tac_toe import (
    CENTER_SQUARE,
    COMPUTER_MARKERS,
    Board,
    TicTacToeMatch,
    computer_move,
    find_completing_square,
)


def _board(human=(), computer=()) -> Board:
    board = Board()
    for key in human:
        board.mark(key, "X")
    for key in computer:
        board.mark(key, "O")
    return board


class TestBoard:
    def test_new_board_is_empty(self):
        board = Board()
        assert board.unmarked_keys() == list(range(1, 10))
        assert not board.is_full
        assert board.winning_marker is None

    def test_mark_taken_square(self):
        board = _board(human=[1])
        with pytest.raises(ValueError):
            board.mark(1, "O")

    def test_mark_unknown_square(self):
        with pytest.raises(ValueError):
            Board().mark(10, "X")

    @pytest.mark.parametrize("line", [(1, 2, 3), (1, 4, 7), (3, 5, 7)])
    def test_winning_lines(self, line):
        assert _board(human=line).winning_marker == "X"

    def test_full_board_without_winner(self):
        board = _board(human=[1, 3, 4, 8, 9], computer=[2, 5, 6, 7])
        assert board.is_full
        assert not board.someone_won

    def test_rows(self):
        board = _board(human=[1], computer=[9])
        assert board.rows() == [["X", None, None], [None, None, None], [None, None, "O"]]


class TestComputerMove:
    def test_takes_center_first(self, rng):
        assert computer_move(_board(human=[1]), "O", "X", rng) == CENTER_SQUARE

    def test_blocks_human(self, rng):
        board = _board(human=[1, 2], computer=[5])
        assert computer_move(board, "O", "X", rng) == 3

    def test_win_before_block(self, rng):
        board = _board(human=[1, 2], computer=[4, 5])
        assert computer_move(board, "O", "X", rng) == 6

    def test_random_open_square_otherwise(self, rng):
        board = _board(human=[5])
        assert computer_move(board, "O", "X", rng) in board.unmarked_keys()

    def test_full_board_raises(self, rng):
        board = _board(human=[1, 3, 4, 8, 9], computer=[2, 5, 6, 7])
        with pytest.raises(ValueError):
            computer_move(board, "O", "X", rng)

    def test_completing_square_ignores_taken(self):
        board = _board(human=[1, 2, 3])
        assert find_completing_square(board, "X") is None


class TestTicTacToeMatch:
    @pytest.fixture
    def ttt(self, rng, game_config):
        return TicTacToeMatch("Alice", "X", rng=rng, game_config=game_config)

    def test_computer_marker_differs(self, rng, game_config):
        match = TicTacToeMatch("Alice", COMPUTER_MARKERS[0], rng=rng, game_config=game_config)
        assert match.computer.marker != match.human.marker

    @pytest.mark.parametrize("marker", ["", "XY", " "])
    def test_invalid_marker(self, rng, game_config, marker):
        with pytest.raises(ValueError):
            TicTacToeMatch("Alice", marker, rng=rng, game_config=game_config)

    @pytest.mark.parametrize("seed", range(10))
    def test_coin_toss_matches_call(self, seed, game_config):
        match = TicTacToeMatch("Alice", "X", rng=Random(seed), game_config=game_config)
        heads, first = match.coin_toss(call_heads=True)
        assert first is (match.human if heads else match.computer)
        assert match.current is first

    def test_computer_wins_round(self, ttt):
        ttt.human_moves(1)
        assert ttt.computer_moves() == 5
        ttt.human_moves(2)
        assert ttt.computer_moves() == 3
        ttt.human_moves(9)
        assert ttt.computer_moves() == 7

        assert ttt.round_over
        assert ttt.round_winner is ttt.computer
        assert ttt.computer.score == 1
        assert ttt.human.score == 0

    def test_no_moves_after_round_over(self, ttt):
        for key in (1, 2, 9):
            ttt.human_moves(key)
            ttt.computer_moves()
        with pytest.raises(RuntimeError):
            ttt.human_moves(4)

    def test_out_of_turn(self, ttt):
        with pytest.raises(RuntimeError):
            ttt.computer_moves()

    def test_next_round_keeps_scores(self, ttt):
        for key in (1, 2, 9):
            ttt.human_moves(key)
            ttt.computer_moves()
        ttt.next_round()

        assert ttt.board.unmarked_keys() == list(range(1, 10))
        assert ttt.current is ttt.first_mover
        assert ttt.computer.score == 1

    def test_grand_winner(self, rng):
        config = GameConfig(tic_tac_toe_max_wins=1, pause_seconds=0)
        match = TicTacToeMatch("Alice", "X", rng=rng, game_config=config)
        for key in (1, 2, 9):
            match.human_moves(key)
            match.computer_moves()

        assert match.grand_winner is match.computer
        match.reset()
        assert match.grand_winner is None
