"""
Seeded pseudo-random numbers for the synthetic data generator.

FNV-1a turns a string into a 32-bit seed and Mulberry32 expands it into a
stream of floats in [0, 1). All arithmetic is kept in unsigned 32-bit space
so a given seed always yields the same stream on every platform.
"""

import math
from typing import List, MutableSequence, Sequence, TypeVar

T = TypeVar("T")

UINT32_MASK = 0xFFFFFFFF
FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
MULBERRY_INCREMENT = 0x6D2B79F5


def _imul(a: int, b: int) -> int:
    """Low 32 bits of a 32-bit multiplication."""
    return (a * b) & UINT32_MASK


def fnv1a_32(value: str) -> int:
    """32-bit FNV-1a hash over the string's UTF-16 code units."""
    data = value.encode("utf-16-le")
    hash_value = FNV_OFFSET_BASIS
    for i in range(0, len(data), 2):
        hash_value ^= data[i] | (data[i + 1] << 8)
        hash_value = _imul(hash_value, FNV_PRIME)
    return hash_value


class Mulberry32:
    """Small, fast seeded generator; every draw advances the state."""

    def __init__(self, seed: int):
        self.state = seed & UINT32_MASK

    @classmethod
    def from_key(cls, key: str) -> "Mulberry32":
        """Generator seeded with the FNV-1a hash of ``key``."""
        return cls(fnv1a_32(key))

    def next_float(self) -> float:
        """Next float in [0, 1)."""
        self.state = (self.state + MULBERRY_INCREMENT) & UINT32_MASK
        t = self.state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & UINT32_MASK
        return ((t ^ (t >> 14)) & UINT32_MASK) / 4294967296

    def randint(self, minimum: int, maximum: int) -> int:
        """Uniform integer in [minimum, maximum]."""
        return math.floor(self.next_float() * (maximum - minimum + 1)) + minimum

    def pick(self, options: Sequence[T]) -> T:
        """Uniformly chosen element."""
        return options[int(self.next_float() * len(options))]

    def shuffle(self, values: MutableSequence[T]) -> None:
        """Fisher-Yates shuffle in place."""
        for i in range(len(values) - 1, 0, -1):
            j = int(self.next_float() * (i + 1))
            values[i], values[j] = values[j], values[i]

    def sample(self, values: Sequence[T], count: int) -> List[T]:
        """``count`` distinct elements, by shuffling a copy."""
        pool = list(values)
        self.shuffle(pool)
        return pool[:count]
