"""
Random sources.

All non-determinism in the engine goes through a RandomSource:

- shuffle: uniform permutation of the deck
- assign_tier: rarity roll (60% / 25% / 15%)
- flip_orientation: upright/reversed coin
- pick: uniform choice among reforge candidates

Tests swap in a seeded source or a scripted one.
"""

import random
from collections.abc import Sequence
from typing import Protocol, TypeVar

from pixelfate.config import TIER_WEIGHTS
from pixelfate.models.card import Rarity, rarity_for_tier

T = TypeVar("T")


class RandomSource(Protocol):
    """Interface for every random decision the engine makes."""

    def shuffle(self, items: Sequence[T]) -> list[T]: ...

    def assign_tier(self) -> int: ...

    def flip_orientation(self) -> bool: ...

    def pick(self, candidates: Sequence[T]) -> T: ...


def _cumulative_thresholds(weights: dict[int, float]) -> list[tuple[float, int]]:
    total = 0.0
    thresholds = []
    for tier in sorted(weights):
        total += weights[tier]
        thresholds.append((total, tier))
    return thresholds


class SystemRandomSource:
    """
    RandomSource backed by `random.Random`.

    Pass a seed for reproducible sequences.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)
        self._thresholds = _cumulative_thresholds(TIER_WEIGHTS)

    def shuffle(self, items: Sequence[T]) -> list[T]:
        """Return a uniformly shuffled copy; the input is not mutated."""
        shuffled = list(items)
        # Fisher-Yates, walking down from the end
        for i in range(len(shuffled) - 1, 0, -1):
            j = self._rng.randint(0, i)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled

    def assign_tier(self) -> int:
        roll = self._rng.random()
        for threshold, tier in self._thresholds:
            if roll < threshold:
                return tier
        # Float rounding can leave the top of [0, 1) uncovered
        return self._thresholds[-1][1]

    def flip_orientation(self) -> bool:
        return self._rng.random() < 0.5

    def pick(self, candidates: Sequence[T]) -> T:
        if not candidates:
            raise ValueError("Cannot pick from an empty candidate list")
        return candidates[self._rng.randrange(len(candidates))]


_default_source = SystemRandomSource()


def shuffle(items: Sequence[T]) -> list[T]:
    """Uniform permutation of `items` using the process-wide source."""
    return _default_source.shuffle(items)


def assign_tier() -> int:
    """Independent rarity roll using the process-wide source."""
    return _default_source.assign_tier()


def rarity_label(tier: int) -> Rarity:
    """Tier -> Bronze / Silver / Gold."""
    return rarity_for_tier(tier)
