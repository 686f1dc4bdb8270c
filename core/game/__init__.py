"""Twenty-One round engine, match loop and state management."""

from core.game.events import GameEvent, EventType, EventEmitter
from core.game.state import RoundState, MatchState
from core.game.engine import (
    RoundOutcome,
    TerminalCause,
    TerminalKind,
    TwentyOneRound,
    WinCategory,
    classify_round,
)
from core.game.match import TwentyOneMatch

__all__ = [
    "GameEvent",
    "EventType",
    "EventEmitter",
    "RoundState",
    "MatchState",
    "RoundOutcome",
    "TerminalCause",
    "TerminalKind",
    "TwentyOneRound",
    "WinCategory",
    "classify_round",
    "TwentyOneMatch",
]
