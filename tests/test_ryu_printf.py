import math
from fractions import Fraction

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from fpfmt.ieee754 import Ieee754Bits, Ieee754Format
from fpfmt.ryu_printf import RyuPrintf, max_nonzero_decimal_digits

finite_doubles = st.floats(allow_nan=False, allow_infinity=False).filter(
    lambda v: v != 0.0
)
finite_singles = st.floats(allow_nan=False, allow_infinity=False, width=32).filter(
    lambda v: v != 0.0
)


def _reassemble(rp):
    total = Fraction(0)
    for index, segment in rp.segments():
        total += Fraction(segment) * Fraction(10) ** (-9 * index)
    return total


def test_max_nonzero_decimal_digits():
    assert max_nonzero_decimal_digits(Ieee754Format.BINARY64) == 767
    assert max_nonzero_decimal_digits("binary32") == 112


def test_one_is_a_single_segment():
    rp = RyuPrintf(Ieee754Bits.from_float(1.0))
    assert rp.current_segment == 1
    assert rp.current_segment_index == 0
    assert rp.has_further_nonzero_segments() is False


def test_plain_float_is_accepted():
    rp = RyuPrintf(1.0)
    assert rp.current_segment == 1


@pytest.mark.parametrize("value", [0.0, -0.0])
def test_zero_rejected(value):
    with pytest.raises(ValueError):
        RyuPrintf(Ieee754Bits.from_float(value))


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_non_finite_rejected(value):
    with pytest.raises(ValueError):
        RyuPrintf(Ieee754Bits.from_float(value))


def test_exhausted_generator_stays_zero():
    rp = RyuPrintf(Ieee754Bits.from_float(0.1))
    list(rp.segments())
    assert rp.current_segment == 0
    assert rp.compute_next_segment() is False
    assert rp.current_segment == 0


def test_sign_is_ignored():
    pos = list(RyuPrintf(Ieee754Bits.from_float(123.456)).segments())
    neg = list(RyuPrintf(Ieee754Bits.from_float(-123.456)).segments())
    assert pos == neg


@settings(max_examples=150, deadline=None)
@given(finite_doubles)
def test_segments_reconstruct_binary64(x):
    rp = RyuPrintf(Ieee754Bits.from_float(x))
    assert rp.current_segment != 0
    assert _reassemble(rp) == abs(Fraction(x))


@settings(max_examples=150, deadline=None)
@given(finite_singles)
def test_segments_reconstruct_binary32(x):
    bits = Ieee754Bits.from_float(x, Ieee754Format.BINARY32)
    rp = RyuPrintf(bits)
    assert rp.current_segment != 0
    assert _reassemble(rp) == abs(Fraction(bits.to_float()))


@settings(max_examples=100, deadline=None)
@given(finite_doubles)
def test_segments_are_in_range(x):
    rp = RyuPrintf(Ieee754Bits.from_float(x))
    segs = list(rp.segments())
    assert all(0 <= s < RyuPrintf.segment_divisor for _, s in segs)
    indices = [i for i, _ in segs]
    assert indices == list(range(indices[0], indices[0] + len(indices)))


@settings(max_examples=100, deadline=None)
@given(finite_doubles)
def test_has_further_matches_remainder(x):
    target = abs(Fraction(x))
    rp = RyuPrintf(Ieee754Bits.from_float(x))
    consumed = Fraction(0)
    while True:
        consumed += Fraction(rp.current_segment) * Fraction(10) ** (
            -9 * rp.current_segment_index
        )
        assert rp.has_further_nonzero_segments() == (consumed != target)
        if not rp.compute_next_segment():
            break
    assert consumed == target


@settings(max_examples=100, deadline=None)
@given(st.floats(min_value=1e-300, max_value=1e300))
def test_middle_point_adds_half_ulp(x):
    rp = RyuPrintf(Ieee754Bits.from_float(x), middle_point=True)
    expected = Fraction(x) + Fraction(math.ulp(x)) / 2
    assert _reassemble(rp) == expected


def test_digit_count_bound_holds_for_smallest_subnormal():
    x = Ieee754Bits(1, Ieee754Format.BINARY64).to_float()
    rp = RyuPrintf(Ieee754Bits.from_float(x))
    digits = "".join(
        str(s) if i == 0 else f"{s:09d}" for i, (_, s) in enumerate(rp.segments())
    ).rstrip("0")
    assert len(digits) <= max_nonzero_decimal_digits(Ieee754Format.BINARY64)