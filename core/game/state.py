"""Round and match state enumerations."""

from enum import Enum, auto


class RoundState(Enum):
    """
    Round state machine states.

    Flow: DEALING → PLAYER_TURN → DEALER_TURN → ROUND_COMPLETE
    """

    # Two cards each, player first
    DEALING = auto()

    # Player hits until they stay or the round ends
    PLAYER_TURN = auto()

    # Dealer applies its fixed policy
    DEALER_TURN = auto()

    # Outcome decided
    ROUND_COMPLETE = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


class MatchState(Enum):
    """
    Match lifecycle.

    Flow: WAITING_FOR_ROUND ⇄ IN_ROUND → GRAND_CHAMPION → WAITING_FOR_ROUND | FINISHED
    """

    WAITING_FOR_ROUND = auto()
    IN_ROUND = auto()
    GRAND_CHAMPION = auto()
    FINISHED = auto()

    def __str__(self) -> str:
        return self.name.replace("_", " ").title()


# Valid match transitions
VALID_TRANSITIONS: dict[MatchState, list[MatchState]] = {
    MatchState.WAITING_FOR_ROUND: [MatchState.IN_ROUND, MatchState.FINISHED],
    MatchState.IN_ROUND: [MatchState.WAITING_FOR_ROUND, MatchState.GRAND_CHAMPION],
    MatchState.GRAND_CHAMPION: [MatchState.WAITING_FOR_ROUND, MatchState.FINISHED],
    MatchState.FINISHED: [],  # Terminal state
}


def is_valid_transition(from_state: MatchState, to_state: MatchState) -> bool:
    """
    Check if a match state transition is valid.

    Args:
        from_state: Current state
        to_state: Desired state

    Returns:
        True if the transition is allowed
    """
    return to_state in VALID_TRANSITIONS.get(from_state, [])
