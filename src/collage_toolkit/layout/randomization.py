"""
Module: layout.randomization

Purpose:
    Seeded random number generation and biased shuffling. Every bit of
    randomness in the layout core flows through SeededRandom so a layout
    can be reproduced from its seed alone.

Key Classes:
    - SeededRandom: Mulberry32 generator over unsigned 32-bit state

Key Functions:
    - generate_seed(): Fresh seed when the caller supplies none
    - biased_shuffle_by_area(): Size-weighted, reproducible ordering

Algorithm (Mulberry32):
    state += 0x6D2B79F5
    t = imul(state ^ (state >> 15), state | 1)
    t ^= t + imul(t ^ (t >> 7), t | 61)
    out = (t ^ (t >> 14)) / 2**32

    All arithmetic is masked to 32 bits, so the sequence is bit-identical
    with any other Mulberry32 implementation for the same seed.

Dependencies:
    - random, time (std): generate_seed only

Used By:
    - layout.algorithms: Ordering and treemap split jitter
    - layout.controller: Seed generation
"""

from __future__ import annotations

import random
import time
from typing import List, MutableSequence, Sequence, TypeVar

from collage_toolkit.core.models import ImageDimensions

T = TypeVar("T")

_MASK32 = 0xFFFFFFFF
_INCREMENT = 0x6D2B79F5
_TWO_32 = 4294967296.0


def _imul(a: int, b: int) -> int:
    """32-bit wrapping multiply (unsigned result)."""
    return (a * b) & _MASK32


class SeededRandom:
    """
    Reproducible pseudo-random generator (Mulberry32).

    Same seed produces the same sequence on every run and platform.

    Attributes:
        seed: The seed the generator was created with

    Example:
        >>> rng = SeededRandom(42)
        >>> round(rng.next(), 6)
        0.601104
    """

    def __init__(self, seed: int):
        self._seed = int(seed)
        self._state = self._seed & _MASK32

    @property
    def seed(self) -> int:
        """Seed this generator was created with."""
        return self._seed

    @property
    def state(self) -> int:
        """Current 32-bit internal state."""
        return self._state

    def next(self) -> float:
        """Return a float in [0, 1)."""
        self._state = (self._state + _INCREMENT) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / _TWO_32

    def next_int(self, min_value: int, max_value: int) -> int:
        """Return an int in [min_value, max_value)."""
        return int(self.next() * (max_value - min_value)) + min_value

    def next_float(self, min_value: float, max_value: float) -> float:
        """Return a float in [min_value, max_value)."""
        return self.next() * (max_value - min_value) + min_value

    def shuffle(self, items: MutableSequence[T]) -> MutableSequence[T]:
        """Shuffle ``items`` in place (Fisher-Yates) and return it."""
        for i in range(len(items) - 1, 0, -1):
            j = self.next_int(0, i + 1)
            items[i], items[j] = items[j], items[i]
        return items


def generate_seed() -> int:
    """
    Produce a fresh non-negative 31-bit seed.

    The only non-deterministic call in the layout core; used only when
    the caller does not supply a seed.
    """
    return int(time.time() * 1000 * random.random()) & 0x7FFFFFFF


def biased_shuffle_by_area(
    images: Sequence[ImageDimensions],
    rng: SeededRandom,
    bias_factor: float = 0.7,
) -> List[ImageDimensions]:
    """
    Sort by area descending, then shuffle with a bias toward keeping order.

    At position ``i`` the element stays with probability
    ``bias_factor * (1 - i / n)``; otherwise it swaps with an element up to
    ``max(1, floor((n - i) * (1 - bias_factor)))`` positions ahead. Large
    images therefore tend to stay near the front while small ones move
    freely.

    Args:
        images: Images to order (not modified)
        rng: Generator to draw from
        bias_factor: 1.0 keeps the sort almost intact, 0.0 shuffles freely

    Returns:
        New list with the biased ordering
    """
    # sorted() is stable, so equal areas keep their input order
    result = sorted(images, key=lambda img: img.area, reverse=True)
    n = len(result)

    for i in range(n):
        stay_probability = bias_factor * (1 - i / n)
        if rng.next() > stay_probability:
            max_swap_distance = max(1, int((n - i) * (1 - bias_factor)))
            swap_target = min(n - 1, i + rng.next_int(1, max_swap_distance + 1))
            result[i], result[swap_target] = result[swap_target], result[i]

    return result
