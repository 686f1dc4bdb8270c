"""Rock-Paper-Scissors-Lizard-Spock with an adaptive computer opponent."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from random import Random

from config import GameConfig
from core.random_source import uniform_choice, weighted_choice

logger = logging.getLogger(__name__)

OPPONENT_NAMES = ("R2D2", "Hal", "Chappie", "Sonny", "Number 5")
TOTAL_WEIGHT = 100


class Move(Enum):
    """The five moves."""

    ROCK = "rock"
    PAPER = "paper"
    SCISSORS = "scissors"
    LIZARD = "lizard"
    SPOCK = "spock"

    def __str__(self) -> str:
        return self.value

    def beats(self, other: "Move") -> bool:
        """Check if this move defeats the other."""
        return other in WINNING_PAIRS[self]

    @classmethod
    def from_token(cls, token: str) -> "Move":
        """Parse a move name (any case)."""
        try:
            return cls(token.strip().lower())
        except ValueError:
            raise ValueError(f"Invalid move: {token!r}") from None


WINNING_PAIRS: dict[Move, frozenset[Move]] = {
    Move.ROCK: frozenset({Move.SCISSORS, Move.LIZARD}),
    Move.PAPER: frozenset({Move.ROCK, Move.SPOCK}),
    Move.SCISSORS: frozenset({Move.PAPER, Move.LIZARD}),
    Move.LIZARD: frozenset({Move.SPOCK, Move.PAPER}),
    Move.SPOCK: frozenset({Move.ROCK, Move.SCISSORS}),
}


def _single(move: Move) -> dict[Move, int]:
    return {m: TOTAL_WEIGHT if m is move else 0 for m in Move}


def _uniform() -> dict[Move, int]:
    return {m: TOTAL_WEIGHT // len(Move) for m in Move}


# Opening weights per opponent personality
PERSONALITIES: dict[str, dict[Move, int]] = {
    "R2D2": _uniform(),
    "Hal": _single(Move.SPOCK),
    "Chappie": _single(Move.SCISSORS),
    "Sonny": _single(Move.PAPER),
    "Number 5": _uniform(),
}


class Result(Enum):
    """Round result from the computer's point of view."""

    WIN = "win"
    LOSS = "loss"
    TIE = "tie"


@dataclass
class AdaptiveOpponent:
    """
    Computer opponent whose move weights drift toward what has worked.

    Weights always sum to 100 and never go negative.
    """

    name: str
    weights: dict[Move, int]
    step: int = 5
    history: list[Move] = field(default_factory=list)

    @classmethod
    def from_personality(cls, name: str, step: int = 5) -> "AdaptiveOpponent":
        return cls(name=name, weights=dict(PERSONALITIES[name]), step=step)

    def choose(self, rng: Random) -> Move:
        """Sample a move from the current weights."""
        move = weighted_choice(self.weights, rng)
        self.history.append(move)
        return move

    def adjust(self, result: Result) -> None:
        """Shift weight after a round based on how the last move fared."""
        if not self.history or result is Result.TIE:
            return
        last = self.history[-1]
        if result is Result.WIN:
            self._reinforce(last)
        else:
            self._weaken(last)
        logger.debug("%s weights now %s", self.name, {str(m): w for m, w in self.weights.items()})

    def _reinforce(self, move: Move) -> None:
        for other in Move:
            if other is not move and self.weights[other] >= self.step:
                self.weights[move] += self.step
                self.weights[other] -= self.step

    def _weaken(self, move: Move) -> None:
        for other in Move:
            if self.weights[move] == 0:
                break
            if other is not move and self.weights[other] <= TOTAL_WEIGHT - self.step:
                self.weights[move] -= self.step
                self.weights[other] += self.step


@dataclass(frozen=True)
class RPSRound:
    """Both moves and the round winner's name (None on a tie)."""

    human_move: Move
    computer_move: Move
    winner: str | None


class RPSMatch:
    """First to the win threshold against an adaptive opponent."""

    def __init__(
        self,
        human_name: str,
        rng: Random | None = None,
        game_config: GameConfig | None = None,
        opponent_name: str | None = None,
    ) -> None:
        self.config = game_config or GameConfig()
        self.rng = rng or Random()
        self.human_name = human_name
        self.opponent = AdaptiveOpponent.from_personality(
            opponent_name or uniform_choice(OPPONENT_NAMES, self.rng),
            step=self.config.rps_probability_step,
        )
        self.human_score = 0
        self.computer_score = 0
        self.rounds: list[RPSRound] = []

    @property
    def max_wins(self) -> int:
        return self.config.rps_max_wins

    @property
    def grand_winner(self) -> str | None:
        if self.human_score >= self.max_wins:
            return self.human_name
        if self.computer_score >= self.max_wins:
            return self.opponent.name
        return None

    def play_round(self, human_move: Move) -> RPSRound:
        """Resolve one round against the opponent's sampled move."""
        if self.grand_winner is not None:
            raise RuntimeError("Match is over; call reset() to play again")

        computer_move = self.opponent.choose(self.rng)

        if human_move.beats(computer_move):
            winner: str | None = self.human_name
            self.human_score += 1
            self.opponent.adjust(Result.LOSS)
        elif computer_move.beats(human_move):
            winner = self.opponent.name
            self.computer_score += 1
            self.opponent.adjust(Result.WIN)
        else:
            winner = None

        result = RPSRound(human_move, computer_move, winner)
        self.rounds.append(result)
        return result

    def reset(self) -> None:
        """Zero both scores and the round log; the opponent keeps what it learned."""
        self.human_score = 0
        self.computer_score = 0
        self.rounds.clear()
