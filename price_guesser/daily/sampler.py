"""Seeded pseudo-random stream and shuffle used to pick the daily products.

The generator is mulberry32 with every intermediate value masked to 32 bits,
so a given seed yields the same stream as the deployed browser build.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Sequence, TypeVar

T = TypeVar("T")

UINT32_MASK = 0xFFFFFFFF
UINT32_SCALE = 4294967296.0
MULBERRY_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    return (a * b) & UINT32_MASK


@dataclass
class SeededRandom:
    seed: int
    _state: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._state = self.seed & UINT32_MASK

    def random(self) -> float:
        self._state = (self._state + MULBERRY_INCREMENT) & UINT32_MASK
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & UINT32_MASK
        return ((t ^ (t >> 14)) & UINT32_MASK) / UINT32_SCALE

    __call__ = random


def shuffle_with_seed(items: Sequence[T], random: Callable[[], float]) -> list[T]:
    """Fisher-Yates over a copy of ``items``; the input is left untouched."""
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = math.floor(random() * (i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
