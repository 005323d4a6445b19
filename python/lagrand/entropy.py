"""Seed factory: build a source from a caller seed or from OS entropy."""

from __future__ import annotations

import os
from typing import Protocol

from .errors import EntropyError
from .source import LaggedFibonacciSource

SEED_BYTES = 8


class EntropyReader(Protocol):
    def readinto(self, buffer: bytearray) -> int | None: ...


class SystemEntropy:
    """Entropy reader backed by the operating system random device."""

    def readinto(self, buffer: bytearray) -> int:
        data = os.urandom(len(buffer))
        buffer[: len(data)] = data
        return len(data)


def seed_from_entropy(entropy: EntropyReader | None = None) -> int:
    reader = entropy if entropy is not None else SystemEntropy()
    buffer = bytearray(SEED_BYTES)

    try:
        n = reader.readinto(buffer)
    except OSError as exc:
        raise EntropyError("failed to create seed") from exc

    if n is None or int(n) != SEED_BYTES:
        raise EntropyError("failed to create seed")

    return int.from_bytes(buffer, "big", signed=True)


def make_source(
    seed: int | None = None,
    *,
    entropy: EntropyReader | None = None,
) -> LaggedFibonacciSource:
    """Return a source seeded with ``seed``, or with 8 entropy bytes when omitted."""
    if seed is not None:
        return LaggedFibonacciSource(seed)
    return LaggedFibonacciSource(seed_from_entropy(entropy))
