"""Ziggurat layer tables for the exponential and standard normal samplers.

Tables follow Marsaglia & Tsang, "The Ziggurat Method for Generating Random
Variables" (2000): 256 layers for the exponential, 128 for the normal. ``k``
holds the integer acceptance thresholds, ``w`` the layer widths scaled by the
draw range and ``f`` the density at each layer edge, in single precision.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache

import numpy as np

from .constants import EXP_TABLE_SIZE, NORM_R, NORM_TABLE_SIZE

# Layer edge used to build the exponential tables; samplers use EXP_R for the tail.
_EXP_R = 7.697117470131487
_EXP_V = 3.949659822581572e-3
_NORM_V = 9.91256303526217e-3

_M31 = 2147483648.0
_M32 = 4294967296.0


@dataclass(frozen=True)
class ZigguratTables:
    k: np.ndarray
    w: np.ndarray
    f: np.ndarray

    @property
    def size(self) -> int:
        return int(self.k.size)


def _empty(size: int) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    return (
        np.zeros((size,), dtype=np.uint32),
        np.zeros((size,), dtype=np.float32),
        np.zeros((size,), dtype=np.float32),
    )


@lru_cache(maxsize=1)
def normal_tables() -> ZigguratTables:
    k, w, f = _empty(NORM_TABLE_SIZE)
    last = NORM_TABLE_SIZE - 1

    dn = NORM_R
    tn = dn
    q = _NORM_V / math.exp(-0.5 * dn * dn)
    k[0] = int((dn / q) * _M31)
    k[1] = 0
    w[0] = q / _M31
    w[last] = dn / _M31
    f[0] = 1.0
    f[last] = math.exp(-0.5 * dn * dn)

    for i in range(last - 1, 0, -1):
        dn = math.sqrt(-2.0 * math.log(_NORM_V / dn + math.exp(-0.5 * dn * dn)))
        k[i + 1] = int((dn / tn) * _M31)
        tn = dn
        f[i] = math.exp(-0.5 * dn * dn)
        w[i] = dn / _M31

    for arr in (k, w, f):
        arr.setflags(write=False)
    return ZigguratTables(k=k, w=w, f=f)


@lru_cache(maxsize=1)
def exponential_tables() -> ZigguratTables:
    k, w, f = _empty(EXP_TABLE_SIZE)
    last = EXP_TABLE_SIZE - 1

    de = _EXP_R
    te = de
    q = _EXP_V / math.exp(-de)
    k[0] = int((de / q) * _M32)
    k[1] = 0
    w[0] = q / _M32
    w[last] = de / _M32
    f[0] = 1.0
    f[last] = math.exp(-de)

    for i in range(last - 1, 0, -1):
        de = -math.log(_EXP_V / de + math.exp(-de))
        k[i + 1] = int((de / te) * _M32)
        te = de
        f[i] = math.exp(-de)
        w[i] = de / _M32

    for arr in (k, w, f):
        arr.setflags(write=False)
    return ZigguratTables(k=k, w=w, f=f)
