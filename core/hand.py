"""Hand accounting for Twenty-One."""

from dataclasses import dataclass, field
from typing import Iterator

from core.cards import Card

TARGET_TOTAL = 21


def card_increment(card: Card, current_total: int, target_total: int = TARGET_TOTAL) -> int:
    """
    Return what a newly drawn card adds to a running total.

    An Ace counts 11 unless that would push the total past the target, in
    which case it counts 1. The choice is made once, at draw time.
    """
    if card.is_ace:
        return 1 if current_total + 11 > target_total else 11
    if card.is_ten_value:
        return 10
    return card.face.value


@dataclass
class Hand:
    """Cards in draw order plus the running total."""

    target_total: int = TARGET_TOTAL
    cards: list[Card] = field(default_factory=list)
    total: int = 0

    def add_card(self, card: Card) -> int:
        """Add a card and return the increment it contributed."""
        increment = card_increment(card, self.total, self.target_total)
        self.cards.append(card)
        self.total += increment
        return increment

    def clear(self) -> None:
        """Remove all cards and zero the total."""
        self.cards.clear()
        self.total = 0

    @property
    def is_busted(self) -> bool:
        """Check if the total strictly exceeds the target."""
        return self.total > self.target_total

    @property
    def is_target(self) -> bool:
        """Check if the total is exactly the target."""
        return self.total == self.target_total

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self) -> Iterator[Card]:
        return iter(self.cards)

    def __str__(self) -> str:
        cards_str = ", ".join(str(card) for card in self.cards)
        return f"{cards_str} ({self.total})"

    def __repr__(self) -> str:
        return f"Hand({self.cards!r}, total={self.total})"
