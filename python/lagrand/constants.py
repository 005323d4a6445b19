"""Frozen constants shared by the source, seeding and samplers."""

MASK64 = (1 << 64) - 1
MASK63 = (1 << 63) - 1
MASK32 = (1 << 32) - 1

INT31_MAX = (1 << 31) - 1
INT63_MAX = MASK63

RNG_LEN = 607
RNG_TAP = 273
RNG_FEED = RNG_LEN - RNG_TAP

SEED_MODULUS = INT31_MAX
SEED_MULTIPLIER = 48271
SEED_ZERO_REPLACEMENT = 89482311
SEED_WARMUP = 20

BYTES_PER_DRAW = 7

EXP_TABLE_SIZE = 256
NORM_TABLE_SIZE = 128
EXP_R = 7.69711747013104972
NORM_R = 3.442619855899
