"""Twenty-One round engine with state machine."""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

from transitions import Machine

from core.cards import Card, Deck
from core.hand import TARGET_TOTAL
from core.participants import Action, Participant
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.state import RoundState

logger = logging.getLogger(__name__)


class WinCategory(Enum):
    """How a round was decided."""

    BUST = "bust"
    TARGET = "target"
    TOTAL = "total"
    TIE = "tie"

    def __str__(self) -> str:
        return self.value


class TerminalKind(Enum):
    """Why the round stopped."""

    BUST = auto()
    TARGET = auto()
    DEALER_STAYED = auto()


@dataclass(frozen=True)
class TerminalCause:
    """The condition that ended a round and who triggered it."""

    kind: TerminalKind
    participant: Participant | None = None


@dataclass(frozen=True)
class RoundOutcome:
    """Winner (None on a tie) and win category of a finished round."""

    winner: Participant | None
    category: WinCategory
    player_total: int
    dealer_total: int

    @property
    def is_tie(self) -> bool:
        return self.winner is None

    @property
    def winner_name(self) -> str | None:
        return self.winner.name if self.winner is not None else None

    @property
    def winner_role(self) -> str | None:
        return str(self.winner.role) if self.winner is not None else None


def classify_round(
    cause: TerminalCause,
    player: Participant,
    dealer: Participant,
    target_total: int = TARGET_TOTAL,
) -> RoundOutcome:
    """
    Decide the winner of a terminal round.

    Priority, first match wins:
        bust by X        -> the other participant, BUST
        player on target -> player, TARGET
        dealer on target -> dealer, TARGET
        otherwise        -> higher total, TOTAL (equal totals: no winner, TIE)
    """
    winner: Participant | None
    if cause.kind is TerminalKind.BUST:
        winner = dealer if cause.participant is player else player
        category = WinCategory.BUST
    elif player.total == target_total:
        winner, category = player, WinCategory.TARGET
    elif dealer.total == target_total:
        winner, category = dealer, WinCategory.TARGET
    elif player.total > dealer.total:
        winner, category = player, WinCategory.TOTAL
    elif dealer.total > player.total:
        winner, category = dealer, WinCategory.TOTAL
    else:
        winner, category = None, WinCategory.TIE

    return RoundOutcome(
        winner=winner,
        category=category,
        player_total=player.total,
        dealer_total=dealer.total,
    )


class TwentyOneRound:
    """
    One round of Twenty-One using a state machine.

    The player acts until they stay or the round ends, then the dealer
    applies its policy. Communication happens through events and return
    values only.
    """

    INITIAL_CARDS = 2

    # State machine states
    STATES = [s.name.lower() for s in RoundState]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "begin_turns", "source": "dealing", "dest": "player_turn"},
        {"trigger": "player_draws", "source": "player_turn", "dest": "player_turn"},
        {"trigger": "pass_to_dealer", "source": "player_turn", "dest": "dealer_turn"},
        {"trigger": "dealer_acts", "source": "dealer_turn", "dest": "dealer_turn"},
        {
            "trigger": "finish",
            "source": ["player_turn", "dealer_turn"],
            "dest": "round_complete",
        },
    ]

    def __init__(
        self,
        player: Participant,
        dealer: Participant,
        deck: Deck,
        events: EventEmitter | None = None,
        target_total: int = TARGET_TOTAL,
        on_complete: Callable[[RoundOutcome], None] | None = None,
    ) -> None:
        """
        Initialize a round. Participants' hands must already be empty.

        Args:
            player: The human-controlled participant
            dealer: The policy-driven participant
            deck: Deck owned by this round
            events: Emitter shared with the match (a private one if omitted)
            target_total: Total that wins outright; anything above busts
            on_complete: Called once with the outcome when the round ends
        """
        self.player = player
        self.dealer = dealer
        self.deck = deck
        self.events = events or EventEmitter()
        self.target_total = target_total
        self._on_complete = on_complete

        self.outcome: RoundOutcome | None = None
        self.cause: TerminalCause | None = None
        self.dealer_last_action: Action | None = None

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial="dealing",
            auto_transitions=False,
            model_attribute="_machine_state",
        )

    @property
    def state(self) -> RoundState:
        """Get current round state as enum."""
        return RoundState[self._machine_state.upper()]  # type: ignore

    @property
    def is_complete(self) -> bool:
        return self.state == RoundState.ROUND_COMPLETE

    @property
    def current(self) -> Participant:
        """The participant whose turn it is."""
        return self.dealer if self.state == RoundState.DEALER_TURN else self.player

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to round events."""
        self.events.subscribe(handler, event_type)

    def deal(self) -> bool:
        """
        Deal two cards to the player, then two to the dealer.

        Returns:
            True if the cards were dealt
        """
        if self.state != RoundState.DEALING:
            self._reject("Cards have already been dealt")
            return False

        self.events.emit_new(
            EventType.ROUND_STARTED,
            player=self.player.name,
            dealer=self.dealer.name,
            cards_remaining=self.deck.cards_remaining,
        )

        for participant in (self.player, self.dealer):
            for index in range(self.INITIAL_CARDS):
                # The dealer's second card stays face down until the round ends
                face_up = not (participant is self.dealer and index == 1)
                self._deal_card(participant, face_up=face_up)

        self.events.emit_new(
            EventType.HANDS_DEALT,
            player=self.player.name,
            player_cards=[str(c) for c in self.player.hand],
            player_total=self.player.total,
            dealer=self.dealer.name,
            dealer_showing=str(self.dealer.hand.cards[0]),
            dealer_hidden=len(self.dealer.hand) - 1,
        )
        self.begin_turns()
        self._check_terminal()
        return True

    def _deal_card(self, participant: Participant, face_up: bool = True) -> Card:
        """Draw a card into a participant's hand."""
        card = self.deck.draw()
        increment = participant.hand.add_card(card)
        logger.debug(
            "%s draws %s (+%d, total %d)", participant.name, card, increment, participant.total
        )
        self.events.emit_new(
            EventType.CARD_DEALT,
            participant=participant.name,
            role=str(participant.role),
            card=str(card),
            increment=increment,
            total=participant.total,
            face_up=face_up,
        )
        return card

    def terminal_cause(self) -> TerminalCause | None:
        """Evaluate the end-of-round conditions in priority order."""
        if self.state in (RoundState.DEALING, RoundState.ROUND_COMPLETE):
            return self.cause

        current = self.current
        if current.total > self.target_total:
            return TerminalCause(TerminalKind.BUST, current)
        if self.player.total == self.target_total:
            return TerminalCause(TerminalKind.TARGET, self.player)
        if self.dealer.total == self.target_total:
            return TerminalCause(TerminalKind.TARGET, self.dealer)
        if self.dealer_last_action is Action.STAY:
            return TerminalCause(TerminalKind.DEALER_STAYED, self.dealer)
        return None

    def _check_terminal(self) -> bool:
        """End the round if a terminal condition holds."""
        if self.is_complete:
            return True
        cause = self.terminal_cause()
        if cause is None:
            return False
        self._finish(cause)
        return True

    def _finish(self, cause: TerminalCause) -> None:
        """Classify the round and notify listeners."""
        self.cause = cause
        self.outcome = classify_round(cause, self.player, self.dealer, self.target_total)
        logger.debug("Round over: %s -> %s", cause.kind.name, self.outcome)

        if cause.kind is TerminalKind.BUST and cause.participant is not None:
            self.events.emit_new(
                EventType.PARTICIPANT_BUSTS,
                participant=cause.participant.name,
                role=str(cause.participant.role),
                total=cause.participant.total,
            )
        elif cause.kind is TerminalKind.TARGET and self.outcome.winner is not None:
            self.events.emit_new(
                EventType.TARGET_REACHED,
                participant=self.outcome.winner.name,
                role=self.outcome.winner_role,
            )

        self.finish()
        self.events.emit_new(
            EventType.ROUND_ENDED,
            winner=self.outcome.winner_name,
            winner_role=self.outcome.winner_role,
            category=str(self.outcome.category),
            player=self.player.name,
            dealer=self.dealer.name,
            player_total=self.player.total,
            dealer_total=self.dealer.total,
            player_cards=[str(c) for c in self.player.hand],
            dealer_cards=[str(c) for c in self.dealer.hand],
        )

        if self._on_complete is not None:
            self._on_complete(self.outcome)

    def _apply(self, action: Action) -> None:
        """Apply one decision for the current participant."""
        participant = self.current

        if action is Action.HIT:
            self._deal_card(participant)
            self.events.emit_new(
                EventType.PARTICIPANT_HITS,
                participant=participant.name,
                role=str(participant.role),
                total=participant.total,
            )
            if participant.is_dealer:
                self.dealer_last_action = Action.HIT
                self.dealer_acts()
            else:
                self.player_draws()
            return

        self.events.emit_new(
            EventType.PARTICIPANT_STAYS,
            participant=participant.name,
            role=str(participant.role),
            total=participant.total,
        )
        if participant.is_dealer:
            self.dealer_last_action = Action.STAY
            self.dealer_acts()
        else:
            self.pass_to_dealer()

    def step(self) -> RoundOutcome | None:
        """
        Run one evaluation step: end the round or let the current participant act.

        Returns:
            The outcome once the round is complete, otherwise None
        """
        if self.state == RoundState.DEALING:
            self.deal()
            return self.outcome
        if self._check_terminal():
            return self.outcome
        self._apply(self.current.decide())
        return None

    def play(self) -> RoundOutcome:
        """Deal if needed and step until the round is complete."""
        while not self.is_complete:
            self.step()
        assert self.outcome is not None
        return self.outcome

    def hit(self) -> bool:
        """Player hits (takes another card)."""
        return self._player_action(Action.HIT)

    def stay(self) -> bool:
        """Player stays; the dealer then plays out its turn."""
        return self._player_action(Action.STAY)

    def _player_action(self, action: Action) -> bool:
        if self.state != RoundState.PLAYER_TURN:
            self._reject(f"Cannot {action} in current state", state=self.state.name)
            return False

        self._apply(action)
        self._advance()
        return True

    def _advance(self) -> None:
        """Run dealer decisions until the player must act or the round ends."""
        while not self._check_terminal():
            if self.state == RoundState.PLAYER_TURN:
                return
            self._apply(self.dealer.decide())

    def _reject(self, message: str, **data) -> None:
        self.events.emit_new(EventType.INVALID_ACTION, message=message, **data)

    @property
    def can_hit(self) -> bool:
        """Check if the player may act."""
        return self.state == RoundState.PLAYER_TURN

    @property
    def can_stay(self) -> bool:
        return self.state == RoundState.PLAYER_TURN
