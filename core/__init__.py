"""Core game engines - 100% UI-agnostic."""

from core.cards import Card, Deck, EmptyDeckError, Face, Suit
from core.hand import Hand, card_increment
from core.participants import Action, Participant, Role, make_dealer, make_player

__all__ = [
    "Card",
    "Deck",
    "EmptyDeckError",
    "Face",
    "Suit",
    "Hand",
    "card_increment",
    "Action",
    "Participant",
    "Role",
    "make_dealer",
    "make_player",
]
