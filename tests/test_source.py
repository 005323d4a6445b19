import pytest
from lagrand import LaggedFibonacciSource, make_source
from lagrand.constants import MASK63, SEED_MODULUS, SEED_ZERO_REPLACEMENT
from lagrand.source import normalize_seed, to_int64

PINNED_SEED = 1275028672939391351


def test_pinned_seed_first_int63() -> None:
    src = make_source(PINNED_SEED)
    assert src.int63() == 5129775219661360826


def test_same_seed_gives_identical_streams() -> None:
    src_a = LaggedFibonacciSource(31415)
    src_b = LaggedFibonacciSource(31415)

    assert [src_a.uint64() for _ in range(2000)] == [src_b.uint64() for _ in range(2000)]


def test_reseed_restarts_canonical_sequence() -> None:
    fresh = LaggedFibonacciSource(PINNED_SEED)
    expected = [fresh.int63() for _ in range(700)]

    src = LaggedFibonacciSource(0)
    for _ in range(123):
        src.int63()
    src.seed(PINNED_SEED)

    assert [src.int63() for _ in range(700)] == expected


def test_int63_is_uint64_with_top_bit_cleared() -> None:
    src_a = LaggedFibonacciSource(7)
    src_b = LaggedFibonacciSource(7)

    for _ in range(1000):
        full = src_a.uint64()
        value = src_b.int63()
        assert 0 <= full < 1 << 64
        assert 0 <= value <= MASK63
        assert value == full & MASK63


def test_different_seeds_give_different_streams() -> None:
    src_a = LaggedFibonacciSource(100)
    src_b = LaggedFibonacciSource(101)

    assert [src_a.int63() for _ in range(10)] != [src_b.int63() for _ in range(10)]


def test_seeds_congruent_modulo_seed_modulus_share_a_stream() -> None:
    src_a = LaggedFibonacciSource(12345)
    src_b = LaggedFibonacciSource(12345 + 3 * SEED_MODULUS)

    assert [src_a.int63() for _ in range(50)] == [src_b.int63() for _ in range(50)]


def test_zero_seed_matches_its_replacement() -> None:
    src_a = LaggedFibonacciSource(0)
    src_b = LaggedFibonacciSource(SEED_ZERO_REPLACEMENT)

    assert [src_a.int63() for _ in range(50)] == [src_b.int63() for _ in range(50)]


@pytest.mark.parametrize(
    ("seed", "expected"),
    [
        (1, 1),
        (0, SEED_ZERO_REPLACEMENT),
        (SEED_MODULUS, SEED_ZERO_REPLACEMENT),
        (SEED_MODULUS + 5, 5),
        (-1, SEED_MODULUS - 1),
        (-SEED_MODULUS - 2, SEED_MODULUS - 2),
        (1 << 64, SEED_ZERO_REPLACEMENT),
    ],
)
def test_normalize_seed(seed: int, expected: int) -> None:
    assert normalize_seed(seed) == expected


def test_to_int64_wraps_twos_complement() -> None:
    assert to_int64(-1) == -1
    assert to_int64((1 << 64) - 1) == -1
    assert to_int64(1 << 63) == -(1 << 63)
    assert to_int64((1 << 63) - 1) == (1 << 63) - 1
    assert to_int64((1 << 64) + 5) == 5


def test_seed_value_tracks_last_seed() -> None:
    src = LaggedFibonacciSource(3)
    src.seed(-(1 << 63))

    assert src.seed_value == -(1 << 63)
