"""Additive lagged-Fibonacci source producing the canonical 63-bit stream."""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import (
    MASK63,
    MASK64,
    RNG_FEED,
    RNG_LEN,
    SEED_MODULUS,
    SEED_ZERO_REPLACEMENT,
)
from .cooked import cooked_table, seed_words


def to_int64(value: int) -> int:
    """Wrap an arbitrary int to signed 64-bit two's complement."""
    value = int(value) & MASK64
    return value - (1 << 64) if value >> 63 else value


def normalize_seed(seed: int) -> int:
    """Map a 64-bit seed to the positive 31-bit start of the seeding LCG."""
    seed = to_int64(seed)
    # Truncated remainder: the result takes the sign of the dividend.
    rem = abs(seed) % SEED_MODULUS
    if seed < 0:
        rem = -rem
    if rem < 0:
        rem += SEED_MODULUS
    if rem == 0:
        rem = SEED_ZERO_REPLACEMENT
    return rem


@dataclass
class LaggedFibonacciSource:
    """607-word additive generator with taps 334 and 0.

    Not safe for concurrent use; serialize access or keep one per thread.
    """

    seed_value: int = 1
    _vec: list[int] = field(init=False, repr=False)
    _tap: int = field(init=False, repr=False)
    _feed: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.seed(self.seed_value)

    def seed(self, seed: int) -> None:
        self.seed_value = to_int64(seed)
        self._tap = 0
        self._feed = RNG_FEED

        cooked = cooked_table()
        words = seed_words(normalize_seed(self.seed_value), 40, 20)
        self._vec = [word ^ cooked[i] for i, word in enumerate(words)]

    def uint64(self) -> int:
        self._tap -= 1
        if self._tap < 0:
            self._tap += RNG_LEN

        self._feed -= 1
        if self._feed < 0:
            self._feed += RNG_LEN

        x = (self._vec[self._feed] + self._vec[self._tap]) & MASK64
        self._vec[self._feed] = x
        return x

    def int63(self) -> int:
        return self.uint64() & MASK63
