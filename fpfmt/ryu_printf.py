"""Fixed-size decimal segment generator for binary floating-point values.

The decimal expansion of a value is walked from left to right in segments of
nine digits.  Segment ``n`` is ``floor(v * 10^(9n)) mod 10^9``.  The generator
starts at the first nonzero segment, so that segment may have fewer than nine
significant digits.  Every later segment stands for exactly nine digits,
leading zeros included.
"""

from __future__ import annotations

from collections.abc import Iterator

from .ieee754 import Ieee754Bits, Ieee754Format, format_info

SEGMENT_SIZE = 9
SEGMENT_DIVISOR = 10**SEGMENT_SIZE


def _floor_log10_pow2(e: int) -> int:
    """Exact ``floor(e * log10(2))``."""
    if e == 0:
        return 0
    if e > 0:
        return len(str(1 << e)) - 1
    # 2^-e is never a power of ten for e < 0, so the ceiling is its digit count.
    return -len(str(1 << -e))


def _floor_log10_pow5(e: int) -> int:
    """Exact ``floor(e * log10(5))`` for ``e >= 0``."""
    return len(str(5**e)) - 1


def max_nonzero_decimal_digits(fmt) -> int:
    """Upper bound on the number of nonzero significant digits of any value."""
    info = format_info(fmt)
    p = info.significand_bits
    return _floor_log10_pow5(p - info.min_exponent) + _floor_log10_pow2(p) + 2


class RyuPrintf:
    """Pull-style iterator over the nine-digit decimal segments of a value.

    With ``middle_point`` set, the value is taken to be half an ulp above the
    given one, which is the midpoint between it and its successor.  The sign
    is ignored.
    """

    segment_size = SEGMENT_SIZE
    segment_divisor = SEGMENT_DIVISOR

    def __init__(self, bits, middle_point=False) -> None:
        if isinstance(bits, float):
            bits = Ieee754Bits.from_float(bits, Ieee754Format.BINARY64)
        if not bits.is_finite():
            raise ValueError("segments are only defined for finite values")
        if not bits.is_nonzero():
            raise ValueError("zero has no nonzero decimal segment")

        info = bits.info
        p = info.significand_bits
        significand = bits.extract_significand_bits()
        exponent_bits = bits.extract_exponent_bits()

        # The value is (2f + middle_point) * 2^exponent.
        if exponent_bits != 0:
            exponent = exponent_bits + info.exponent_bias - p - 1
            significand |= 1 << p
        else:
            exponent = info.min_exponent - p - 1

        dividend = _floor_log10_pow2(-exponent - p - 2)
        if exponent <= -p - 2:
            index = dividend // SEGMENT_SIZE + 1
        else:
            index = -((-dividend) // SEGMENT_SIZE)

        if exponent < 0:
            max_index = (-exponent + SEGMENT_SIZE - 1) // SEGMENT_SIZE
        else:
            max_index = 0

        self.format = bits.fmt
        self._mantissa = 2 * significand + (1 if middle_point else 0)
        self._exponent = exponent
        self._max_segment_index = max_index
        self._segment_index = index
        self._segment = self._compute_segment()
        while self._segment == 0:
            self._segment_index += 1
            self._segment = self._compute_segment()

    @property
    def current_segment(self) -> int:
        return self._segment

    @property
    def current_segment_index(self) -> int:
        return self._segment_index

    @property
    def max_segment_index(self) -> int:
        return self._max_segment_index

    def _scaled(self) -> tuple[int, int]:
        """Numerator and denominator of ``v * 10^(9n)`` for the current ``n``."""
        decimal_shift = self._segment_index * SEGMENT_SIZE
        numerator = self._mantissa
        denominator = 1
        if self._exponent >= 0:
            numerator <<= self._exponent
        else:
            denominator <<= -self._exponent
        if decimal_shift >= 0:
            numerator *= 10**decimal_shift
        else:
            denominator *= 10**-decimal_shift
        return numerator, denominator

    def _compute_segment(self) -> int:
        numerator, denominator = self._scaled()
        return (numerator // denominator) % SEGMENT_DIVISOR

    def has_further_nonzero_segments(self) -> bool:
        """Whether any digit after the current segment is nonzero."""
        if self._segment_index >= self._max_segment_index:
            return False
        numerator, denominator = self._scaled()
        return numerator % denominator != 0

    def compute_next_segment(self) -> bool:
        """Advance one segment.

        Returns False, leaving the segment at zero, once every remaining
        segment is known to be zero.
        """
        self._segment_index += 1
        if self._segment_index <= self._max_segment_index:
            self._segment = self._compute_segment()
            return True
        self._segment = 0
        return False

    def segments(self) -> Iterator[tuple[int, int]]:
        """Yield ``(index, segment)`` from the current segment to the last one."""
        yield self._segment_index, self._segment
        while self.compute_next_segment():
            yield self._segment_index, self._segment