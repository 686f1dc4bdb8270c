"""Pytest fixtures for game engine tests."""

import pytest
from random import Random

from config import GameConfig
from core.cards import Card, Deck
from core.hand import Hand
from core.participants import Action, make_dealer, make_player
from core.game import EventEmitter, TwentyOneMatch, TwentyOneRound


def cards(tokens: str) -> list[Card]:
    """Parse a space-separated card list like '9H AS 9C'."""
    return [Card.from_string(token) for token in tokens.split()]


class ScriptedDecisions:
    """Decision source that replays a fixed list of actions and records prompts."""

    def __init__(self, actions: list[Action] | None = None) -> None:
        self.actions = list(actions or [])
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> Action:
        self.prompts.append(prompt)
        if not self.actions:
            raise AssertionError("Decision source asked more often than scripted")
        return self.actions.pop(0)


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return Random(42)


@pytest.fixture
def deck(rng):
    """A shuffled 48-card deck."""
    return Deck(rng=rng)


@pytest.fixture
def empty_hand():
    """An empty hand."""
    return Hand()


@pytest.fixture
def game_config():
    """Default game constants with no pacing."""
    return GameConfig(pause_seconds=0)


@pytest.fixture
def events():
    return EventEmitter()


@pytest.fixture
def make_round(rng, events):
    """
    Build a round over a stacked deck.

    Cards are dealt in order: player, player, dealer, dealer, then hits.
    """

    def _make(card_tokens: str, decisions: list[Action] | None = None):
        source = ScriptedDecisions(decisions)
        player = make_player("Alice", source)
        dealer = make_dealer(rng, name="Hal")
        round_ = TwentyOneRound(player, dealer, Deck.stacked(cards(card_tokens)), events=events)
        return round_, source

    return _make


@pytest.fixture
def match(rng, game_config):
    """A match whose player is driven through hit()/stay()."""
    return TwentyOneMatch.create("Alice", game_config=game_config, rng=rng)
