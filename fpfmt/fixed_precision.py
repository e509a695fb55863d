"""Scientific-notation formatting with a fixed number of significand digits."""

from __future__ import annotations

from .ieee754 import Ieee754Bits, Ieee754Format
from .ryu_printf import SEGMENT_SIZE, RyuPrintf


def _significant_digits(bits: Ieee754Bits, count: int) -> tuple[str, int]:
    """Return the first ``count`` significant digits, correctly rounded, and the exponent.

    Ties are broken towards an even last digit, judged on the exact value.
    """
    rp = RyuPrintf(bits)
    digits = str(rp.current_segment)
    exponent = len(digits) - 1 - rp.current_segment_index * SEGMENT_SIZE

    while len(digits) <= count:
        if not rp.compute_next_segment():
            break
        digits += f"{rp.current_segment:0{SEGMENT_SIZE}d}"

    kept = digits[:count].ljust(count, "0")
    rest = digits[count:]

    if rest:
        first_dropped = rest[0]
        if first_dropped > "5":
            round_up = True
        elif first_dropped == "5":
            round_up = (
                rest[1:].strip("0") != ""
                or rp.has_further_nonzero_segments()
                or int(kept[-1]) % 2 != 0
            )
        else:
            round_up = False

        if round_up:
            bumped = str(int(kept) + 1)
            if len(bumped) > count:
                kept = "1" + "0" * (count - 1)
                exponent += 1
            else:
                kept = bumped

    return kept, exponent


def to_chars_fixed_precision_scientific(
    x, precision, fmt=Ieee754Format.BINARY64
) -> str:
    """Format ``x`` in scientific form with ``precision`` digits after the point.

    ``x`` is a float, encoded in ``fmt``, or an :class:`Ieee754Bits`, whose
    own format is used.  Zeros are written without an exponent, infinities
    as ``Infinity`` and NaNs as ``nan``, each with a leading ``-`` when the
    sign bit is set.
    """
    if precision < 0:
        raise ValueError("precision must be nonnegative")

    bits = x if isinstance(x, Ieee754Bits) else Ieee754Bits.from_float(x, fmt)
    sign = "-" if bits.is_negative() else ""

    if not bits.is_finite():
        return sign + ("nan" if bits.is_nan() else "Infinity")

    if not bits.is_nonzero():
        if precision == 0:
            return sign + "0"
        return sign + "0." + "0" * precision

    digits, exponent = _significant_digits(bits, precision + 1)
    mantissa = digits[0] if precision == 0 else f"{digits[0]}.{digits[1:]}"
    exponent_sign = "-" if exponent < 0 else "+"
    return f"{sign}{mantissa}e{exponent_sign}{abs(exponent):02d}"