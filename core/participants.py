"""Twenty-One participants and their decision policies."""

from dataclasses import dataclass, field
from enum import Enum, auto
from random import Random
from typing import Callable, Protocol

from core.hand import TARGET_TOTAL, Hand
from core.random_source import uniform_choice

DEALER_NAMES = ("R2D2", "Hal", "Chappie", "Sonny", "Number 5")
DEALER_TARGET = 17
HIT_OR_STAY_PROMPT = "Choose to (H)IT or (S)TAY: "


class Action(Enum):
    """A hit-or-stay decision."""

    HIT = "hit"
    STAY = "stay"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_token(cls, token: str) -> "Action":
        """Parse 'h', 'hit', 's', 'stay' (any case)."""
        normalized = token.strip().lower()
        for action in cls:
            if normalized in (action.value, action.value[0]):
                return action
        raise ValueError(f"Invalid decision: {token!r}")


class Role(Enum):
    """Which side of the table a participant sits on."""

    PLAYER = auto()
    DEALER = auto()

    def __str__(self) -> str:
        return self.name.lower()


# Given a prompt, returns a validated decision.
DecisionSource = Callable[[str], Action]


class DecisionPolicy(Protocol):
    """Capability every participant exposes to the round."""

    def decide(self, participant: "Participant") -> Action: ...


class HumanPolicy:
    """Defers every decision to an external decision source."""

    def __init__(self, source: DecisionSource, prompt: str = HIT_OR_STAY_PROMPT) -> None:
        self._source = source
        self._prompt = prompt

    def decide(self, participant: "Participant") -> Action:
        return self._source(self._prompt)


class ExternalPolicy:
    """Placeholder for drivers that push decisions via hit()/stay() calls."""

    def decide(self, participant: "Participant") -> Action:
        raise RuntimeError(
            f"{participant.name}'s decisions must be supplied through hit() or stay()"
        )


class DealerPolicy:
    """Stay once the total reaches the threshold, otherwise hit."""

    def __init__(self, threshold: int = DEALER_TARGET) -> None:
        self.threshold = threshold

    def decide(self, participant: "Participant") -> Action:
        return Action.STAY if participant.total >= self.threshold else Action.HIT


@dataclass(eq=False)
class Participant:
    """Name, hand and match score shared by player and dealer."""

    name: str
    role: Role
    policy: DecisionPolicy
    hand: Hand = field(default_factory=Hand)
    score: int = 0

    @property
    def total(self) -> int:
        return self.hand.total

    @property
    def is_dealer(self) -> bool:
        return self.role is Role.DEALER

    def decide(self) -> Action:
        """Ask this participant's policy for the next action."""
        return self.policy.decide(self)

    def reset_hand(self, target_total: int = TARGET_TOTAL) -> None:
        """Start a round with no cards and a zero total."""
        self.hand = Hand(target_total=target_total)

    def __str__(self) -> str:
        return self.name


def make_player(name: str, source: DecisionSource | None = None) -> Participant:
    """Create the human-controlled participant."""
    policy: DecisionPolicy = HumanPolicy(source) if source is not None else ExternalPolicy()
    return Participant(name=name, role=Role.PLAYER, policy=policy)


def make_dealer(
    rng: Random,
    threshold: int = DEALER_TARGET,
    name: str | None = None,
) -> Participant:
    """Create the dealer, drawing a name from the fixed pool if none is given."""
    return Participant(
        name=name or uniform_choice(DEALER_NAMES, rng),
        role=Role.DEALER,
        policy=DealerPolicy(threshold),
    )
