import math
import struct
from fractions import Fraction

import pytest
from hypothesis import given
from hypothesis import strategies as st

from jsonwriter.diyfp import (
    ALPHA,
    CACHED_POWERS,
    GAMMA,
    Boundaries,
    CachedPower,
    DiyFp,
    compute_boundaries,
    get_cached_power_for_binary_exponent,
)

U64 = st.integers(min_value=0, max_value=(1 << 64) - 1)
NONZERO_U64 = st.integers(min_value=1, max_value=(1 << 64) - 1)
EXP = st.integers(min_value=-1200, max_value=1200)
POSITIVE_DOUBLES = st.floats(
    min_value=5e-324, max_value=1.7976931348623157e308, allow_nan=False, allow_infinity=False
)


def exact(x: DiyFp) -> Fraction:
    return Fraction(x.f) * Fraction(2) ** x.e


def f32_neighbours(value: float) -> tuple[float, float, float]:
    (bits,) = struct.unpack("<I", struct.pack("<f", value))

    def from_bits(b):
        return struct.unpack("<f", struct.pack("<I", b))[0]

    return from_bits(bits), from_bits(bits - 1), from_bits(bits + 1)


def test_sub_same_exponent():
    assert DiyFp(10, 3).sub(DiyFp(4, 3)) == DiyFp(6, 3)


def test_sub_rejects_different_exponents():
    with pytest.raises(ValueError):
        DiyFp(10, 3).sub(DiyFp(4, 2))


def test_sub_rejects_negative_result():
    with pytest.raises(ValueError):
        DiyFp(3, 0).sub(DiyFp(4, 0))


def test_significand_range_checked():
    with pytest.raises(ValueError):
        DiyFp(1 << 64, 0)


@given(U64, U64, EXP, EXP)
def test_mul_is_rounded_upper_half(a, b, ea, eb):
    result = DiyFp(a, ea).mul(DiyFp(b, eb))
    assert result.e == ea + eb + 64
    assert abs(result.f * (1 << 64) - a * b) <= 1 << 63


def test_mul_rounds_ties_up():
    result = DiyFp(1 << 63, 0).mul(DiyFp(1, 0))
    assert result == DiyFp(1, 64)


@given(NONZERO_U64, EXP)
def test_normalize_sets_top_bit_and_keeps_value(f, e):
    n = DiyFp(f, e).normalize()
    assert n.f >> 63 == 1
    assert exact(n) == exact(DiyFp(f, e))


def test_normalize_zero_raises():
    with pytest.raises(ValueError):
        DiyFp(0, 5).normalize()


@given(st.integers(min_value=1, max_value=(1 << 32) - 1), EXP, st.integers(0, 32))
def test_normalize_to_keeps_value(f, e, delta):
    x = DiyFp(f, e)
    y = x.normalize_to(e - delta)
    assert y.e == e - delta
    assert exact(y) == exact(x)


def test_normalize_to_rejects_larger_exponent():
    with pytest.raises(ValueError):
        DiyFp(1, 0).normalize_to(1)


def test_normalize_to_rejects_overflow():
    with pytest.raises(ValueError):
        DiyFp(1 << 63, 0).normalize_to(-1)


@given(POSITIVE_DOUBLES)
def test_boundaries_are_midpoints_for_doubles(value):
    b = compute_boundaries(value)
    assert isinstance(b, Boundaries)
    assert exact(b.w) == Fraction(value)
    assert b.w.f >> 63 == 1
    assert b.plus.f >> 63 == 1
    assert b.minus.e == b.plus.e
    v = Fraction(value)
    assert exact(b.minus) == (v + Fraction(math.nextafter(value, 0.0))) / 2
    if value < 1.7976931348623157e308:
        assert exact(b.plus) == (v + Fraction(math.nextafter(value, math.inf))) / 2
    assert exact(b.minus) < v < exact(b.plus)


def test_boundaries_lower_closer_at_power_of_two():
    b = compute_boundaries(1.0)
    w = exact(b.w)
    assert w == 1
    assert (exact(b.plus) - w) == 2 * (w - exact(b.minus))


def test_boundaries_smallest_denormal():
    b = compute_boundaries(5e-324)
    v = Fraction(5e-324)
    assert exact(b.w) == v
    assert exact(b.minus) == v / 2
    assert exact(b.plus) == v * 3 / 2


def test_boundaries_single_one_upper():
    b = compute_boundaries(1.0, single=True)
    assert exact(b.plus) == 1 + Fraction(1, 2**24)


@pytest.mark.parametrize("value", [0.0, -1.0, math.inf, math.nan, -math.inf])
def test_boundaries_reject_bad_values(value):
    with pytest.raises(ValueError):
        compute_boundaries(value)


def test_cached_power_table_shape():
    assert len(CACHED_POWERS) == 79
    assert CACHED_POWERS[0] == CachedPower(0xAB70FE17C79AC6CA, -1060, -300)
    assert CACHED_POWERS[-1] == CachedPower(0x9E19DB92B4E31BA9, 1013, 324)
    assert [c.k for c in CACHED_POWERS] == list(range(-300, 325, 8))


@given(st.integers(min_value=-1137, max_value=960))
def test_cached_powers_approximate_powers_of_ten(e):
    c = get_cached_power_for_binary_exponent(e)
    assert c.f >> 63 == 1
    approx = Fraction(c.f) * Fraction(2) ** c.e
    target = Fraction(10) ** c.k
    assert abs(approx - target) / target < Fraction(1, 2**63)


def test_cached_power_for_one():
    assert get_cached_power_for_binary_exponent(-63) == CachedPower(0x9C40000000000000, -50, 4)


@given(st.integers(min_value=-1137, max_value=960))
def test_cached_power_exponent_in_range(e):
    c = get_cached_power_for_binary_exponent(e)
    assert ALPHA <= c.e + e + 64 <= GAMMA


@pytest.mark.parametrize("e", [-1501, 1501])
def test_cached_power_rejects_out_of_range(e):
    with pytest.raises(ValueError):
        get_cached_power_for_binary_exponent(e)


def test_cached_power_rejects_exponent_without_entry():
    with pytest.raises(ValueError):
        get_cached_power_for_binary_exponent(1500)