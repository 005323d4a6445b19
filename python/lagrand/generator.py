"""Generator facade deriving typed values from a lagged-Fibonacci source."""

from __future__ import annotations

import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import numpy as np

from .constants import (
    BYTES_PER_DRAW,
    EXP_R,
    INT31_MAX,
    INT63_MAX,
    MASK32,
    MASK64,
    NORM_R,
)
from .entropy import EntropyReader, make_source
from .errors import DomainError
from .source import LaggedFibonacciSource
from .ziggurat import exponential_tables, normal_tables

_TWO_POW_63 = float(1 << 63)


@dataclass(frozen=True)
class GeneratorConfig:
    """Platform width emulated by ``Random.int_`` and ``Random.intn``."""

    int_bits: int = 64

    def __post_init__(self) -> None:
        if self.int_bits not in (32, 64):
            raise ValueError("int_bits must be 32 or 64")


def _neg_log(u: float) -> float:
    return math.inf if u == 0.0 else -math.log(u)


def _as_int32(v: int) -> int:
    return v - (1 << 32) if v & 0x80000000 else v


class Random:
    """Deterministic random generator over an exclusively owned source.

    A generator is not safe for concurrent use: callers sharing one across
    threads must serialize every call, or keep one generator per thread.
    """

    def __init__(
        self,
        source: LaggedFibonacciSource,
        *,
        config: GeneratorConfig | None = None,
    ) -> None:
        self._src = source
        self.config = config if config is not None else GeneratorConfig()
        self._read_val = 0
        self._read_pos = 0

    @classmethod
    def from_seed(
        cls,
        seed: int | None = None,
        *,
        entropy: EntropyReader | None = None,
        config: GeneratorConfig | None = None,
    ) -> Random:
        return cls(make_source(seed, entropy=entropy), config=config)

    def reseed(self, seed: int) -> None:
        self._src.seed(seed)
        self._read_pos = 0

    def int63(self) -> int:
        return self._src.int63()

    def int31(self) -> int:
        return self._src.int63() >> 32

    def uint32(self) -> int:
        return (self._src.int63() >> 31) & MASK32

    def uint64(self) -> int:
        """Two-draw 64-bit value: ``(int63() >> 31) | (int63() << 32)``.

        This differs from a runtime whose source answers ``Uint64`` with one
        full-width draw. For that value, call ``LaggedFibonacciSource.uint64``
        on the source passed in.
        """
        low = self._src.int63() >> 31
        high = self._src.int63() << 32
        return (low | high) & MASK64

    def int_(self) -> int:
        if self.config.int_bits == 32:
            return self.int31()
        return self.int63()

    def int63n(self, n: int) -> int:
        n = int(n)
        if n <= 0 or n > INT63_MAX:
            raise DomainError(f"invalid argument to int63n: {n}")

        if n & (n - 1) == 0:
            return self.int63() & (n - 1)

        max_ok = INT63_MAX - (1 << 63) % n
        v = self.int63()
        while v > max_ok:
            v = self.int63()
        return v % n

    def int31n(self, n: int) -> int:
        n = int(n)
        if n <= 0 or n > INT31_MAX:
            raise DomainError(f"invalid argument to int31n: {n}")

        if n & (n - 1) == 0:
            return self.int31() & (n - 1)

        max_ok = INT31_MAX - (1 << 31) % n
        v = self.int31()
        while v > max_ok:
            v = self.int31()
        return v % n

    def intn(self, n: int) -> int:
        n = int(n)
        if n <= 0:
            raise DomainError(f"invalid argument to intn: {n}")
        if n <= INT31_MAX:
            return self.int31n(n)
        if self.config.int_bits == 32:
            raise DomainError(f"intn bound {n} exceeds the 32-bit int range")
        return self.int63n(n)

    def _uint32n(self, n: int) -> int:
        # Multiply-shift bound for 0 < n <= 2^31 - 1; used by shuffle.
        v = self.uint32()
        prod = v * n
        low = prod & MASK32
        if low < n:
            thresh = ((1 << 32) - n) % n
            while low < thresh:
                v = self.uint32()
                prod = v * n
                low = prod & MASK32
        return prod >> 32

    def float64(self) -> float:
        while True:
            f = float(self._src.int63()) / _TWO_POW_63
            if f != 1.0:
                return f

    def float32(self) -> np.float32:
        while True:
            f = np.float32(self.float64())
            if f != np.float32(1.0):
                return f

    def expfloat64(self) -> float:
        tables = exponential_tables()
        ke, we, fe = tables.k, tables.w, tables.f
        while True:
            j = self.uint32()
            i = j & 0xFF
            x = j * float(we[i])
            if j < int(ke[i]):
                return x
            if i == 0:
                return EXP_R + _neg_log(self.float64())
            wedge = fe[i] + np.float32(self.float64()) * (fe[i - 1] - fe[i])
            if wedge < np.float32(math.exp(-x)):
                return x

    def normfloat64(self) -> float:
        tables = normal_tables()
        kn, wn, fn = tables.k, tables.w, tables.f
        while True:
            j = _as_int32(self.uint32())
            i = j & 0x7F
            x = j * float(wn[i])
            if abs(j) < int(kn[i]):
                return x

            if i == 0:
                # Tail beyond the base strip.
                while True:
                    x = _neg_log(self.float64()) * (1.0 / NORM_R)
                    y = _neg_log(self.float64())
                    if y + y >= x * x:
                        break
                if j > 0:
                    return NORM_R + x
                return -NORM_R - x

            wedge = fn[i] + np.float32(self.float64()) * (fn[i - 1] - fn[i])
            if wedge < np.float32(math.exp(-0.5 * x * x)):
                return x

    def perm(self, n: int) -> list[int]:
        n = int(n)
        if n < 0:
            raise DomainError(f"invalid argument to perm: {n}")

        # The i == 0 pass swaps m[0] with itself but still consumes a draw.
        m = [0] * n
        for i in range(n):
            j = self.intn(i + 1)
            m[i] = m[j]
            m[j] = i
        return m

    def shuffle(self, n: int, swap: Callable[[int, int], Any]) -> None:
        n = int(n)
        if n < 0:
            raise DomainError(f"invalid argument to shuffle: {n}")

        i = n - 1
        while i > INT31_MAX - 1:
            swap(i, self.int63n(i + 1))
            i -= 1
        while i > 0:
            swap(i, self._uint32n(i + 1))
            i -= 1

    def read(self, buffer: Any) -> int:
        view = memoryview(buffer).cast("B")
        pos = self._read_pos
        val = self._read_val
        for n in range(len(view)):
            if pos == 0:
                val = self._src.int63()
                pos = BYTES_PER_DRAW
            view[n] = val & 0xFF
            val >>= 8
            pos -= 1
        self._read_pos = pos
        self._read_val = val
        return len(view)

    def fill(self, buffer: Any) -> Any:
        self.read(buffer)
        return buffer
