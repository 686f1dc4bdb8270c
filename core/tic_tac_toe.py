"""Tic-Tac-Toe board and heuristic computer opponent."""

import logging
from dataclasses import dataclass
from random import Random

from config import GameConfig
from core.random_source import coin_flip, uniform_choice

logger = logging.getLogger(__name__)

SQUARES = range(1, 10)
CENTER_SQUARE = 5
WINNING_LINES: tuple[tuple[int, int, int], ...] = (
    # rows
    (1, 2, 3), (4, 5, 6), (7, 8, 9),
    # columns
    (1, 4, 7), (2, 5, 8), (3, 6, 9),
    # diagonals
    (1, 5, 9), (3, 5, 7),
)
COMPUTER_NAMES = ("R2D2", "Hal", "Chappie", "Sonny", "Number 5")
COMPUTER_MARKERS = ("⁂", "✚", "♞", "✔", "✪", "♬")
SUGGESTED_MARKERS = ("❋", "✖", "❿", "☯", "✯", "✈", "❉")


class Board:
    """Squares 1-9, each empty or holding a marker."""

    def __init__(self) -> None:
        self._squares: dict[int, str | None] = {}
        self.reset()

    def reset(self) -> None:
        self._squares = {key: None for key in SQUARES}

    def __getitem__(self, key: int) -> str | None:
        return self._squares[key]

    def mark(self, key: int, marker: str) -> None:
        """Place a marker on an empty square."""
        if key not in self._squares:
            raise ValueError(f"No such square: {key}")
        if self._squares[key] is not None:
            raise ValueError(f"Square {key} is already marked")
        self._squares[key] = marker

    def unmarked_keys(self) -> list[int]:
        return [key for key, marker in self._squares.items() if marker is None]

    def marked_keys(self, marker: str | None = None) -> list[int]:
        """Squares holding the given marker, or any marker if None."""
        if marker is None:
            return [key for key, m in self._squares.items() if m is not None]
        return [key for key, m in self._squares.items() if m == marker]

    @property
    def is_full(self) -> bool:
        return not self.unmarked_keys()

    @property
    def winning_marker(self) -> str | None:
        for line in WINNING_LINES:
            markers = {self._squares[key] for key in line}
            if len(markers) == 1 and None not in markers:
                return markers.pop()
        return None

    @property
    def someone_won(self) -> bool:
        return self.winning_marker is not None

    def rows(self) -> list[list[str | None]]:
        return [[self._squares[r * 3 + c + 1] for c in range(3)] for r in range(3)]


def find_completing_square(board: Board, marker: str) -> int | None:
    """First open square that completes a line where the marker holds the other two."""
    owned = set(board.marked_keys(marker))
    open_squares = set(board.unmarked_keys())
    for line in WINNING_LINES:
        missing = [key for key in line if key not in owned]
        if len(missing) == 1 and missing[0] in open_squares:
            return missing[0]
    return None


def computer_move(board: Board, computer_marker: str, human_marker: str, rng: Random) -> int:
    """
    Pick the computer's square.

    Centre if open, then a winning square, then a blocking square, then a
    random open square.
    """
    open_squares = board.unmarked_keys()
    if not open_squares:
        raise ValueError("Board is full")
    if CENTER_SQUARE in open_squares:
        return CENTER_SQUARE

    offensive = find_completing_square(board, computer_marker)
    if offensive is not None:
        return offensive
    defensive = find_completing_square(board, human_marker)
    if defensive is not None:
        return defensive
    return uniform_choice(open_squares, rng)


@dataclass
class Contestant:
    name: str
    marker: str
    score: int = 0


class TicTacToeMatch:
    """First to the win threshold; a coin toss decides who opens each match."""

    def __init__(
        self,
        human_name: str,
        human_marker: str,
        rng: Random | None = None,
        game_config: GameConfig | None = None,
    ) -> None:
        self.config = game_config or GameConfig()
        self.rng = rng or Random()

        if len(human_marker) != 1 or human_marker.isspace():
            raise ValueError("Marker must be a single visible character")
        computer_marker = uniform_choice(
            [m for m in COMPUTER_MARKERS if m != human_marker], self.rng
        )

        self.human = Contestant(human_name, human_marker)
        self.computer = Contestant(uniform_choice(COMPUTER_NAMES, self.rng), computer_marker)
        self.board = Board()
        self.first_mover: Contestant = self.human
        self.current: Contestant = self.human

    @property
    def max_wins(self) -> int:
        return self.config.tic_tac_toe_max_wins

    @property
    def grand_winner(self) -> Contestant | None:
        for contestant in (self.human, self.computer):
            if contestant.score >= self.max_wins:
                return contestant
        return None

    @property
    def round_over(self) -> bool:
        return self.board.someone_won or self.board.is_full

    @property
    def round_winner(self) -> Contestant | None:
        marker = self.board.winning_marker
        for contestant in (self.human, self.computer):
            if contestant.marker == marker:
                return contestant
        return None

    def coin_toss(self, call_heads: bool) -> tuple[bool, Contestant]:
        """
        Toss for first move; the human goes first if the call matches.

        Returns:
            Whether the coin landed heads, and who moves first
        """
        heads = coin_flip(self.rng)
        self.first_mover = self.human if heads == call_heads else self.computer
        self.current = self.first_mover
        return heads, self.first_mover

    def human_moves(self, key: int) -> None:
        self._move(self.human, key)

    def computer_moves(self) -> int:
        key = computer_move(self.board, self.computer.marker, self.human.marker, self.rng)
        self._move(self.computer, key)
        return key

    def _move(self, contestant: Contestant, key: int) -> None:
        if self.round_over:
            raise RuntimeError("Round is over")
        if contestant is not self.current:
            raise RuntimeError(f"It is not {contestant.name}'s turn")
        self.board.mark(key, contestant.marker)
        logger.debug("%s marks %d", contestant.name, key)
        self.current = self.computer if contestant is self.human else self.human

        winner = self.round_winner
        if winner is not None:
            winner.score += 1

    def next_round(self) -> None:
        """Clear the board; the match's first mover opens again."""
        self.board.reset()
        self.current = self.first_mover

    def reset(self) -> None:
        """Zero scores for a new match. Call coin_toss() again afterwards."""
        self.human.score = 0
        self.computer.score = 0
        self.next_round()
