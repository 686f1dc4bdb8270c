"""Random helpers that always take an explicit generator."""

from random import Random
from typing import Hashable, Mapping, Sequence, TypeVar

T = TypeVar("T", bound=Hashable)


def weighted_choice(weights: Mapping[T, int], rng: Random) -> T:
    """
    Pick a key with probability proportional to its weight.

    Walks the cumulative distribution in mapping order. Zero-weight keys are
    never chosen.

    Args:
        weights: Non-negative integer weight per option
        rng: Random number generator

    Returns:
        The chosen key
    """
    if any(w < 0 for w in weights.values()):
        raise ValueError("Weights must be non-negative")
    total = sum(weights.values())
    if total <= 0:
        raise ValueError("At least one weight must be positive")

    roll = rng.randrange(total)
    cumulative = 0
    for option, weight in weights.items():
        cumulative += weight
        if roll < cumulative:
            return option

    raise AssertionError("unreachable: roll exceeded cumulative weight")


def uniform_choice(options: Sequence[T], rng: Random) -> T:
    """Pick one option uniformly."""
    return weighted_choice({option: 1 for option in options}, rng)


def coin_flip(rng: Random) -> bool:
    """Unbiased binary choice (True for heads)."""
    return rng.random() < 0.5
