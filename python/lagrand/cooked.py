"""Derivation of the 607-word table XORed into every seeded source state.

The table is the state of the historical 607/273 additive generator, seeded
with 1, after 7.8e12 steps. The recurrence is linear over Z/2^64, so the state
that far ahead is computed as ``x^N mod P(x)`` with
``P(x) = x^607 - x^334 - 1`` instead of by stepping.
"""

from __future__ import annotations

from collections.abc import Iterator
from functools import lru_cache

from .constants import (
    MASK64,
    RNG_FEED,
    RNG_LEN,
    RNG_TAP,
    SEED_MODULUS,
    SEED_MULTIPLIER,
    SEED_WARMUP,
)

COOKED_STEPS = 7_800_000_000_000

# Product coefficients stay below 607 * 2^128 < 2^138, so 18-byte slots never carry.
_SLOT_BYTES = 18
_WORD_BYTES = 8


def seed_lcg(x: int) -> int:
    return (x * SEED_MULTIPLIER) % SEED_MODULUS


def seed_words(x: int, hi_shift: int, mid_shift: int) -> Iterator[int]:
    """Yield the 607 words of the seeding LCG, three LCG steps per word."""
    for i in range(-SEED_WARMUP, RNG_LEN):
        x = seed_lcg(x)
        if i >= 0:
            u = x << hi_shift
            x = seed_lcg(x)
            u ^= x << mid_shift
            x = seed_lcg(x)
            u ^= x
            yield u & MASK64


def _pack(coeffs: list[int]) -> int:
    return int.from_bytes(
        b"".join(c.to_bytes(_SLOT_BYTES, "little") for c in coeffs), "little"
    )


def _unpack(value: int, count: int) -> list[int]:
    raw = value.to_bytes(count * _SLOT_BYTES, "little")
    return [
        int.from_bytes(raw[k * _SLOT_BYTES : k * _SLOT_BYTES + _WORD_BYTES], "little")
        for k in range(count)
    ]


def _reduce(coeffs: list[int]) -> list[int]:
    # x^d == x^(d-273) + x^(d-607) (mod P)
    for d in range(len(coeffs) - 1, RNG_LEN - 1, -1):
        c = coeffs[d]
        if c:
            coeffs[d - RNG_TAP] += c
            coeffs[d - RNG_LEN] += c
    return [c & MASK64 for c in coeffs[:RNG_LEN]]


def x_pow_mod(n: int) -> list[int]:
    """Coefficients of ``x^n mod P(x)`` over Z/2^64, lowest degree first."""
    if n < 0:
        raise ValueError("exponent must be non-negative")

    result = [1] + [0] * (RNG_LEN - 1)
    for bit in bin(n)[2:]:
        packed = _pack(result)
        result = _reduce(_unpack(packed * packed, 2 * RNG_LEN - 1))
        if bit == "1":
            result = _reduce([0] + result)
    return result


def advance_state(vec: list[int], steps: int) -> list[int]:
    """Return the table of a freshly seeded generator after ``steps`` draws.

    ``vec`` is laid out as the source keeps it right after seeding
    (``tap = 0``, ``feed = 334``). Cell ``p`` holds the sequence element
    written at the latest step congruent to ``334 - p`` modulo 607.
    """
    if len(vec) != RNG_LEN:
        raise ValueError(f"state must hold {RNG_LEN} words")

    # window[j] is y(j - 606); y(0) sits in the feed cell.
    window = [0] * RNG_LEN
    for p, word in enumerate(vec):
        window[(RNG_FEED - 1 - p) % RNG_LEN] = word & MASK64

    extended = list(window)
    for k in range(RNG_LEN, 2 * RNG_LEN - 1):
        extended.append((extended[k - RNG_TAP] + extended[k - RNG_LEN]) & MASK64)

    coeffs = x_pow_mod(steps)
    ahead = [
        sum(c * e for c, e in zip(coeffs, extended[j : j + RNG_LEN])) & MASK64
        for j in range(RNG_LEN)
    ]

    return [ahead[(RNG_FEED - 1 - p - steps) % RNG_LEN] for p in range(RNG_LEN)]


def step_state(vec: list[int], steps: int) -> list[int]:
    """Reference stepping of the same recurrence, for small ``steps``."""
    vec = [w & MASK64 for w in vec]
    tap, feed = 0, RNG_FEED
    for _ in range(steps):
        tap = tap - 1 if tap > 0 else RNG_LEN - 1
        feed = feed - 1 if feed > 0 else RNG_LEN - 1
        vec[feed] = (vec[feed] + vec[tap]) & MASK64
    return vec


@lru_cache(maxsize=1)
def cooked_table() -> tuple[int, ...]:
    start = list(seed_words(1, 20, 10))
    return tuple(advance_state(start, COOKED_STEPS))
