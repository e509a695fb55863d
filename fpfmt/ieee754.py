"""Bit-level views of IEEE-754 binary32 and binary64 values."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass


class Ieee754Format(enum.Enum):
    """The supported IEEE-754 binary interchange formats."""

    BINARY32 = "binary32"
    BINARY64 = "binary64"


@dataclass(frozen=True)
class FormatInfo:
    """Static layout parameters of an IEEE-754 binary format."""

    format: Ieee754Format
    total_bits: int
    significand_bits: int
    exponent_bits: int
    min_exponent: int
    max_exponent: int
    exponent_bias: int
    decimal_digits: int

    @property
    def sign_mask(self) -> int:
        return 1 << (self.total_bits - 1)

    @property
    def exponent_mask(self) -> int:
        """Mask of the exponent field, in place within the carrier."""
        return ((1 << self.exponent_bits) - 1) << self.significand_bits

    @property
    def significand_mask(self) -> int:
        return (1 << self.significand_bits) - 1


_INFOS = {
    Ieee754Format.BINARY32: FormatInfo(
        format=Ieee754Format.BINARY32,
        total_bits=32,
        significand_bits=23,
        exponent_bits=8,
        min_exponent=-126,
        max_exponent=127,
        exponent_bias=-127,
        decimal_digits=9,
    ),
    Ieee754Format.BINARY64: FormatInfo(
        format=Ieee754Format.BINARY64,
        total_bits=64,
        significand_bits=52,
        exponent_bits=11,
        min_exponent=-1022,
        max_exponent=1023,
        exponent_bias=-1023,
        decimal_digits=17,
    ),
}

_STRUCT_CODES = {
    Ieee754Format.BINARY32: ("<f", "<I"),
    Ieee754Format.BINARY64: ("<d", "<Q"),
}


def format_info(fmt) -> FormatInfo:
    """Return the layout parameters of ``fmt`` (an enum member or its name)."""
    return _INFOS[Ieee754Format(fmt)]


@dataclass(frozen=True)
class Ieee754Bits:
    """The raw bit pattern ``u`` of a floating-point value in format ``fmt``."""

    u: int
    fmt: Ieee754Format = Ieee754Format.BINARY64

    def __post_init__(self) -> None:
        fmt = Ieee754Format(self.fmt)
        object.__setattr__(self, "fmt", fmt)
        total_bits = _INFOS[fmt].total_bits
        if not 0 <= self.u < (1 << total_bits):
            raise ValueError(
                f"bit pattern {self.u:#x} does not fit in {total_bits} bits"
            )

    @property
    def info(self) -> FormatInfo:
        return _INFOS[self.fmt]

    @classmethod
    def from_float(cls, x, fmt=Ieee754Format.BINARY64) -> Ieee754Bits:
        """Encode ``x`` in ``fmt``; raises OverflowError if it does not fit."""
        fmt = Ieee754Format(fmt)
        float_code, int_code = _STRUCT_CODES[fmt]
        (u,) = struct.unpack(int_code, struct.pack(float_code, x))
        return cls(u, fmt)

    def to_float(self) -> float:
        float_code, int_code = _STRUCT_CODES[self.fmt]
        (x,) = struct.unpack(float_code, struct.pack(int_code, self.u))
        return x

    @classmethod
    def positive_zero(cls, fmt=Ieee754Format.BINARY64) -> Ieee754Bits:
        return cls(0, fmt)

    @classmethod
    def negative_zero(cls, fmt=Ieee754Format.BINARY64) -> Ieee754Bits:
        return cls(format_info(fmt).sign_mask, fmt)

    @classmethod
    def positive_infinity(cls, fmt=Ieee754Format.BINARY64) -> Ieee754Bits:
        return cls(format_info(fmt).exponent_mask, fmt)

    @classmethod
    def negative_infinity(cls, fmt=Ieee754Format.BINARY64) -> Ieee754Bits:
        info = format_info(fmt)
        return cls(info.exponent_mask | info.sign_mask, fmt)

    def extract_significand_bits(self) -> int:
        return self.u & self.info.significand_mask

    def extract_exponent_bits(self) -> int:
        info = self.info
        return (self.u >> info.significand_bits) & ((1 << info.exponent_bits) - 1)

    def binary_significand(self) -> int:
        """The significand including the implicit leading bit of normal values."""
        s = self.extract_significand_bits()
        if self.extract_exponent_bits() == 0:
            return s
        return s | (1 << self.info.significand_bits)

    def binary_exponent(self) -> int:
        """The unbiased exponent; subnormals report the minimum exponent."""
        e = self.extract_exponent_bits()
        if e == 0:
            return self.info.min_exponent
        return e + self.info.exponent_bias

    def is_finite(self) -> bool:
        mask = self.info.exponent_mask
        return (self.u & mask) != mask

    def is_nonzero(self) -> bool:
        return (self.u & ~self.info.sign_mask) != 0

    def is_subnormal(self) -> bool:
        """True for subnormals and for both zeros."""
        return (self.u & self.info.exponent_mask) == 0

    def is_positive(self) -> bool:
        """True when the sign bit is clear (includes +0 and positive NaNs)."""
        return (self.u & self.info.sign_mask) == 0

    def is_negative(self) -> bool:
        """True when the sign bit is set (includes -0 and negative NaNs)."""
        return (self.u & self.info.sign_mask) != 0

    def is_positive_infinity(self) -> bool:
        return self.u == self.info.exponent_mask

    def is_negative_infinity(self) -> bool:
        info = self.info
        return self.u == (info.exponent_mask | info.sign_mask)

    def is_infinity(self) -> bool:
        return self.is_positive_infinity() or self.is_negative_infinity()

    def is_nan(self) -> bool:
        return not self.is_finite() and self.extract_significand_bits() != 0