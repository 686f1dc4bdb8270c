"""Card and Deck classes - immutable card representations."""

from dataclasses import dataclass
from enum import Enum
from itertools import product
from random import Random
from typing import Iterable, Iterator


class EmptyDeckError(IndexError):
    """Raised when drawing from a depleted deck.

    A round never comes close to exhausting 48 cards, so this signals a
    sequencing bug rather than a game event.
    """


class Suit(Enum):
    """Card suits."""

    HEARTS = "Hearts"
    CLUBS = "Clubs"
    SPADES = "Spades"
    DIAMONDS = "Diamonds"

    def __str__(self) -> str:
        return self.value


class Face(Enum):
    """The twelve card faces of a Twenty-One deck."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    JOKER = 10
    QUEEN = 11
    KING = 12
    ACE = 13

    def __str__(self) -> str:
        if self.is_numeric:
            return str(self.value)
        return self.name.title()

    @property
    def is_numeric(self) -> bool:
        """Check if this face is one of the numeric ranks 2-9."""
        return self.value <= 9

    @property
    def is_ace(self) -> bool:
        """Check if this face is the Ace."""
        return self == Face.ACE

    @property
    def is_ten_value(self) -> bool:
        """Check if this face always counts 10."""
        return self in (Face.JOKER, Face.QUEEN, Face.KING)


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable playing card."""

    suit: Suit
    face: Face

    def __str__(self) -> str:
        return f"{self.face} of {self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.face.name}, {self.suit.name})"

    @property
    def is_ace(self) -> bool:
        return self.face.is_ace

    @property
    def is_ten_value(self) -> bool:
        return self.face.is_ten_value

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Create a card from a short string like '9H', 'AS', 'jd' (J is the Joker)."""
        s = s.strip().upper()
        if len(s) < 2:
            raise ValueError(f"Invalid card string: {s}")

        face_str = s[:-1]
        suit_str = s[-1]

        face_map = {str(face.value): face for face in Face if face.is_numeric}
        face_map.update(
            {
                "J": Face.JOKER,
                "Q": Face.QUEEN,
                "K": Face.KING,
                "A": Face.ACE,
            }
        )

        suit_map = {
            "H": Suit.HEARTS,
            "C": Suit.CLUBS,
            "S": Suit.SPADES,
            "D": Suit.DIAMONDS,
        }

        if face_str not in face_map:
            raise ValueError(f"Invalid face: {face_str}")
        if suit_str not in suit_map:
            raise ValueError(f"Invalid suit: {suit_str}")

        return cls(suit_map[suit_str], face_map[face_str])


FULL_DECK_SIZE = len(Suit) * len(Face)


class Deck:
    """A shuffled 48-card deck, depleted one card per draw."""

    def __init__(
        self,
        rng: Random | None = None,
        cards: Iterable[Card] | None = None,
    ) -> None:
        """
        Initialize a deck.

        Args:
            rng: Random number generator for shuffling
            cards: Fixed draw order (first card is dealt first); omit for
                all 48 cards in random order
        """
        self._rng = rng or Random()
        self._cards: list[Card] = []
        if cards is None:
            self.reset()
        else:
            self._cards = list(reversed(list(cards)))

    @classmethod
    def stacked(cls, cards: Iterable[Card]) -> "Deck":
        """Build a deck that deals the given cards in order."""
        return cls(cards=cards)

    def reset(self) -> None:
        """Restore all 48 cards in a fresh random order."""
        self._cards = [Card(suit, face) for suit, face in product(Suit, Face)]
        self._rng.shuffle(self._cards)

    def draw(self) -> Card:
        """Draw a card from the top of the deck."""
        if not self._cards:
            raise EmptyDeckError("Cannot draw from empty deck")
        return self._cards.pop()

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self._cards)

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining."""
        return len(self._cards)
