"""Multi-round Twenty-One match with grand champion detection."""

import logging
from random import Random
from typing import Callable

from config import GameConfig
from core.cards import Deck
from core.participants import DecisionSource, Participant, make_dealer, make_player
from core.game.engine import RoundOutcome, TwentyOneRound
from core.game.events import EventEmitter, EventType, GameEvent
from core.game.state import MatchState, is_valid_transition

logger = logging.getLogger(__name__)


class TwentyOneMatch:
    """
    Rounds against the dealer until one side reaches the win threshold.

    Scores persist across rounds and reset only when the player opts to
    replay after a grand champion.
    """

    def __init__(
        self,
        player: Participant,
        dealer: Participant,
        game_config: GameConfig | None = None,
        rng: Random | None = None,
        events: EventEmitter | None = None,
    ) -> None:
        """
        Initialize a match.

        Args:
            player: The human-controlled participant
            dealer: The policy-driven participant
            game_config: Target total and win threshold (defaults if omitted)
            rng: Random number generator used to shuffle every round's deck
            events: Emitter shared by the match and its rounds
        """
        self.config = game_config or GameConfig()
        self.player = player
        self.dealer = dealer
        self.rng = rng or Random()
        self.events = events or EventEmitter()

        self.current_round: TwentyOneRound | None = None
        self.last_outcome: RoundOutcome | None = None
        self.champion: Participant | None = None
        self.rounds_played = 0
        self._state = MatchState.WAITING_FOR_ROUND

    @classmethod
    def create(
        cls,
        player_name: str,
        source: DecisionSource | None = None,
        game_config: GameConfig | None = None,
        rng: Random | None = None,
        events: EventEmitter | None = None,
    ) -> "TwentyOneMatch":
        """
        Build a match with a fresh player and a dealer named from the pool.

        Args:
            player_name: Display name of the human player
            source: Decision source for play(); omit when decisions arrive via hit()/stay()
        """
        game_config = game_config or GameConfig()
        rng = rng or Random()
        player = make_player(player_name, source)
        dealer = make_dealer(rng, threshold=game_config.dealer_target)
        return cls(player, dealer, game_config=game_config, rng=rng, events=events)

    @property
    def state(self) -> MatchState:
        return self._state

    @property
    def max_wins(self) -> int:
        return self.config.twenty_one_max_wins

    @property
    def is_over(self) -> bool:
        """Check if a grand champion has been decided."""
        return self._state in (MatchState.GRAND_CHAMPION, MatchState.FINISHED)

    @property
    def scores(self) -> list[tuple[str, int]]:
        """(name, score) pairs, player first; names may coincide."""
        return [(p.name, p.score) for p in (self.player, self.dealer)]

    def _score_data(self) -> dict[str, object]:
        return {
            "scores": self.scores,
            "player_score": self.player.score,
            "dealer_score": self.dealer.score,
        }

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to match and round events."""
        self.events.subscribe(handler, event_type)

    def _set_state(self, new_state: MatchState) -> None:
        if not is_valid_transition(self._state, new_state):
            raise RuntimeError(f"Invalid match transition {self._state} -> {new_state}")
        logger.debug("Match state %s -> %s", self._state.name, new_state.name)
        self._state = new_state

    def start_round(self) -> bool:
        """
        Shuffle a new deck, clear both hands and deal.

        Returns:
            True if a round was started
        """
        if self._state != MatchState.WAITING_FOR_ROUND:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Cannot start a round in current state",
                state=self._state.name,
            )
            return False

        for participant in (self.player, self.dealer):
            participant.reset_hand(self.config.target_total)

        self._set_state(MatchState.IN_ROUND)
        self.current_round = TwentyOneRound(
            self.player,
            self.dealer,
            Deck(rng=self.rng),
            events=self.events,
            target_total=self.config.target_total,
            on_complete=self._record,
        )
        self.current_round.deal()
        return True

    def _record(self, outcome: RoundOutcome) -> None:
        """Update scores and check for a grand champion."""
        self.last_outcome = outcome
        self.rounds_played += 1
        if outcome.winner is not None:
            outcome.winner.score += 1

        self.events.emit_new(EventType.SCORE_UPDATED, max_wins=self.max_wins, **self._score_data())

        champion = next(
            (p for p in (self.player, self.dealer) if p.score >= self.max_wins),
            None,
        )
        if champion is None:
            self._set_state(MatchState.WAITING_FOR_ROUND)
            return

        self.champion = champion
        self._set_state(MatchState.GRAND_CHAMPION)
        logger.info("%s is grand champion after %d rounds", champion.name, self.rounds_played)
        self.events.emit_new(
            EventType.GRAND_CHAMPION,
            champion=champion.name,
            champion_role=str(champion.role),
            max_wins=self.max_wins,
            **self._score_data(),
        )

    def play_round(self) -> RoundOutcome:
        """Play a full round using each participant's decision policy."""
        if not self.start_round():
            raise RuntimeError(f"Cannot start a round while {self._state}")
        assert self.current_round is not None
        return self.current_round.play()

    def replay(self, play_again: bool) -> bool:
        """
        Answer the replay offer after a grand champion.

        Args:
            play_again: True to reset scores and start a new match

        Returns:
            True if the answer was accepted
        """
        if self._state != MatchState.GRAND_CHAMPION:
            self.events.emit_new(
                EventType.INVALID_ACTION,
                message="Replay is only offered after a grand champion",
                state=self._state.name,
            )
            return False

        if play_again:
            self.player.score = 0
            self.dealer.score = 0
            self.champion = None
            self.current_round = None
            self._set_state(MatchState.WAITING_FOR_ROUND)
            self.events.emit_new(EventType.MATCH_RESET, **self._score_data())
        else:
            self._set_state(MatchState.FINISHED)
            self.events.emit_new(EventType.MATCH_ENDED, **self._score_data())
        return True

    def run(
        self,
        replay_source: Callable[[], bool],
        between_rounds: Callable[[], None] | None = None,
    ) -> None:
        """
        Play matches until the player declines a replay.

        Args:
            replay_source: Asked after each grand champion whether to play again
            between_rounds: Called after every round that does not end the match
        """
        self.events.emit_new(
            EventType.MATCH_STARTED,
            player=self.player.name,
            dealer=self.dealer.name,
            max_wins=self.max_wins,
            **self._score_data(),
        )
        while self._state != MatchState.FINISHED:
            self.play_round()
            if self._state == MatchState.GRAND_CHAMPION:
                self.replay(replay_source())
            elif between_rounds is not None:
                between_rounds()
