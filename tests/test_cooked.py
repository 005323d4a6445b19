import pytest
from lagrand.constants import MASK64, RNG_LEN
from lagrand.cooked import (
    advance_state,
    cooked_table,
    seed_words,
    step_state,
    x_pow_mod,
)


def _start_vector() -> list[int]:
    return list(seed_words(12345, 40, 20))


@pytest.mark.parametrize("steps", [0, 1, 2, 272, 273, 334, 606, 607, 608, 1500, 4099])
def test_jump_ahead_matches_stepping(steps: int) -> None:
    start = _start_vector()

    assert advance_state(start, steps) == step_state(start, steps)


def test_x_pow_mod_reduces_the_characteristic_polynomial() -> None:
    coeffs = x_pow_mod(RNG_LEN)

    expected = [0] * RNG_LEN
    expected[0] = 1
    expected[334] = 1
    assert coeffs == expected


def test_x_pow_mod_low_degree_is_a_monomial() -> None:
    coeffs = x_pow_mod(5)

    assert coeffs[5] == 1
    assert sum(coeffs) == 1


def test_x_pow_mod_rejects_negative_exponent() -> None:
    with pytest.raises(ValueError, match="non-negative"):
        x_pow_mod(-1)


def test_advance_state_rejects_wrong_length() -> None:
    with pytest.raises(ValueError, match="607 words"):
        advance_state([0] * 10, 3)


def test_seed_words_yield_one_word_per_cell() -> None:
    words = list(seed_words(1, 20, 10))

    assert len(words) == RNG_LEN
    assert all(0 <= w < 1 << 52 for w in words)


def test_cooked_table_is_cached_and_full_width() -> None:
    table = cooked_table()

    assert table is cooked_table()
    assert len(table) == RNG_LEN
    assert all(0 <= w <= MASK64 for w in table)
    assert any(w >> 63 for w in table)
