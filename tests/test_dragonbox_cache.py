import pytest
from hypothesis import given, strategies as st

from fpfmt.dragonbox_cache import CacheHolder, cache_holder, compute_cache_entry
from fpfmt.ieee754 import Ieee754Format

B32 = Ieee754Format.BINARY32
B64 = Ieee754Format.BINARY64


def test_binary32_table_shape():
    holder = cache_holder(B32)
    assert (holder.cache_bits, holder.min_k, holder.max_k) == (64, -55, 46)
    assert len(holder) == 102


def test_binary64_table_shape():
    holder = cache_holder(B64)
    assert (holder.cache_bits, holder.min_k, holder.max_k) == (128, -342, 326)
    assert len(holder) == 669


def test_accepts_format_name():
    assert cache_holder("binary32") is cache_holder(B32)


@pytest.mark.parametrize(
    "k, expected",
    [
        (-55, 0x9CED737BB6C4183E),
        (-2, 0xA3D70A3D70A3D70B),
        (-1, 0xCCCCCCCCCCCCCCCD),
        (0, 0x8000000000000000),
        (1, 0xA000000000000000),
        (27, 0xCECB8F27F4200F3A),
        (28, 0x813F3978F8940984),
        (46, 0xE0352F62A19E306E),
    ],
)
def test_binary32_known_entries(k, expected):
    assert cache_holder(B32).get(k) == expected


@pytest.mark.parametrize(
    "k, high, low",
    [
        (-342, 0xEEF453D6923BD65A, 0x113FAA2906A13B40),
        (-341, 0x9558B4661B6565F8, 0x4AC7CA59A424C508),
        (-55, 0x9CED737BB6C4183D, 0x55464DD69685606C),
        (-2, 0xA3D70A3D70A3D70A, 0x3D70A3D70A3D70A4),
        (-1, 0xCCCCCCCCCCCCCCCC, 0xCCCCCCCCCCCCCCCD),
        (0, 0x8000000000000000, 0),
        (28, 0x813F3978F8940984, 0x4000000000000000),
        (46, 0xE0352F62A19E306E, 0xD50B2037AD200000),
        (326, 0xF70867153AA2DB38, 0xB8CBEE4FC66D1EA7),
    ],
)
def test_binary64_known_entries(k, high, low):
    assert cache_holder(B64).get(k) == (high << 64) | low


@pytest.mark.parametrize("fmt", [B32, B64])
def test_entries_are_normalized(fmt):
    holder = cache_holder(fmt)
    for k in range(holder.min_k, holder.max_k + 1):
        assert holder.get(k).bit_length() == holder.cache_bits


@pytest.mark.parametrize("fmt", [B32, B64])
def test_lower_half_nonzero_for_negative_k(fmt):
    holder = cache_holder(fmt)
    half_bits = 32 if fmt is B32 else 64
    mask = (1 << half_bits) - 1
    zero_lower_halves = [
        k for k in range(holder.min_k, 0) if (holder.get(k) & mask) == 0
    ]
    assert zero_lower_halves == []


@pytest.mark.parametrize(
    "fmt, half_bits, expected",
    [
        (B32, 32, 0xCCCCCCCD),
        (B64, 64, 0xCCCCCCCCCCCCCCCD),
    ],
)
def test_lower_half_of_k_minus_one(fmt, half_bits, expected):
    mask = (1 << half_bits) - 1
    assert cache_holder(fmt).get(-1) & mask == expected


def test_binary32_agrees_with_binary64_upper_half():
    b32 = cache_holder(B32)
    b64 = cache_holder(B64)
    for k in range(b32.min_k, b32.max_k + 1):
        upper = b64.get(k) >> 64
        expected = upper + 1 if k < 0 else upper
        assert b32.get(k) == expected, k


@pytest.mark.parametrize("k", [-56, 47])
def test_get_out_of_range_binary32(k):
    with pytest.raises(IndexError):
        cache_holder(B32).get(k)


@pytest.mark.parametrize("k", [-343, 327])
def test_get_out_of_range_binary64(k):
    with pytest.raises(IndexError):
        cache_holder(B64).get(k)


def test_membership():
    holder = cache_holder(B32)
    assert -55 in holder
    assert 46 in holder
    assert 47 not in holder


def test_compute_cache_entry_rejects_nonpositive_bits():
    with pytest.raises(ValueError):
        compute_cache_entry(3, 0)


def test_compute_cache_entry_small_widths():
    assert compute_cache_entry(0, 8) == 0x80
    assert compute_cache_entry(1, 8) == 0xA0
    assert compute_cache_entry(-1, 8) == 0xCD


def test_holder_is_a_cache_holder():
    holder = cache_holder(B64)
    assert isinstance(holder, CacheHolder)
    assert holder.format is B64


@given(m=st.integers(min_value=1, max_value=300))
def test_negative_k_is_ceiling(m):
    entry = compute_cache_entry(-m, 64)
    power = 5**m
    shift = 64 + power.bit_length() - 1
    assert entry * power > (1 << shift)
    assert (entry - 1) * power < (1 << shift)