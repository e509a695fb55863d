"""Min-max Euclid algorithm and the bit-reduction checks built on it."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


@dataclass(frozen=True)
class MinmaxEuclidResult:
    """Extremes of ``a*x mod b`` over ``1 <= x <= n`` and where they occur."""

    min: int
    max: int
    argmin: int
    argmax: int


class RoundDirection(enum.IntEnum):
    FLOOR = 0
    CEILING = 1


@dataclass(frozen=True)
class BitReduction:
    """A reduced constant and the rounding that produced it.

    Equality considers only the resulting number.
    """

    resulting_number: int
    round_direction: RoundDirection = field(compare=False)


def _lower_bits(value: int, bits: int) -> int:
    return value & ((1 << bits) - 1)


def _count_factor_of_2(value: int) -> int:
    return (value & -value).bit_length() - 1


def minmax_euclid(a: int, b: int, n: int) -> MinmaxEuclidResult:
    """Compute min and max of ``a*x mod b`` for ``x`` in ``1..n``."""
    if a <= 0 or b <= 0 or n <= 0:
        raise ValueError("minmax_euclid requires positive a, b and n")

    ai, bi, si, ui = a, b, 1, 0
    while True:
        qi, new_b = divmod(bi, ai)
        if new_b == 0:
            qi -= 1
            new_b = ai
        new_u = qi * si + ui

        if new_u > n:
            k = (n - ui) // si
            return MinmaxEuclidResult(
                min=ai,
                max=b - bi + k * ai,
                argmin=si,
                argmax=ui + k * si,
            )

        pi, new_a = divmod(ai, new_b)
        if new_a == 0:
            pi -= 1
            new_a = new_b
        new_s = pi * new_u + si

        if new_s > n:
            k = (n - si) // new_u
            return MinmaxEuclidResult(
                min=ai - k * new_b,
                max=b - new_b,
                argmin=si + k * new_u,
                argmax=new_u,
            )

        if new_b == bi and new_a == ai:
            # Reached the gcd.
            sum_idx = new_s + new_u
            if sum_idx > n:
                min_value, argmin = new_a, new_s
            else:
                min_value, argmin = 0, sum_idx
            return MinmaxEuclidResult(
                min=min_value, max=b - new_b, argmin=argmin, argmax=new_u
            )

        bi, ui, ai, si = new_b, new_u, new_a, new_s


def multiplier_right_shift(g: int, b: int, l: int, n: int) -> BitReduction | None:
    """Find ``h`` with ``floor(f*g/2^b) == floor(f*h/2^(b-l))`` for ``f`` in ``0..n``.

    ``h`` is ``floor(g/2^l)`` or that plus one; returns None if neither works.
    """
    if n < 1:
        raise ValueError("n must be at least 1")

    if l <= 0:
        return BitReduction(g << -l, RoundDirection.FLOOR)
    if g == 0 or l <= _count_factor_of_2(g):
        return BitReduction(g >> l, RoundDirection.FLOOR)
    if b < 0:
        return None

    divisor = 1 << b
    lower_bits_of_g = _lower_bits(g, l)
    result = minmax_euclid(g - lower_bits_of_g, divisor, n)

    if result.max + lower_bits_of_g * n < divisor:
        return BitReduction(g >> l, RoundDirection.FLOOR)
    if result.min >= ((1 << l) - lower_bits_of_g) * n:
        return BitReduction((g >> l) + 1, RoundDirection.CEILING)
    return None


def required_bits_for_multiplier_right_shift(
    max_g_bits: int, max_b: int, min_l: int, max_l: int, max_n_bits: int
) -> int:
    """Upper bound on the bit width needed by :func:`multiplier_right_shift`."""
    if max_g_bits <= 0 or max_n_bits <= 0:
        raise ValueError("bit counts must be positive")
    if min_l > max_l:
        raise ValueError("min_l must not exceed max_l")

    ret = max_g_bits
    if min_l < 0:
        ret = max_g_bits - min_l
    if max_b > 0:
        ret = max(ret, max_b + 1)
    return max(
        ret,
        max_g_bits + max_n_bits - 1,
        max_l + 1 + max_n_bits - 1,
        max_g_bits + 1,
    )


def reciprocal_left_shift(g: int, b: int, u: int, n: int) -> BitReduction | None:
    """Find ``h`` with ``floor(f*2^b/g) == floor(f*h/2^(u-b))`` for ``f`` in ``0..n``.

    ``h`` is ``floor(2^u/g)`` or that plus one; returns None if neither works.
    """
    if n < 1:
        raise ValueError("n must be at least 1")
    if g == 0:
        raise ValueError("g must be nonzero")

    gp = g
    if b < 0:
        gp <<= -b
        u -= b
        b = 0

    if u < 0:
        if (1 << b) * n < g:
            return BitReduction(0, RoundDirection.FLOOR)
        # A ceiling would need 2^(b-u) == floor(2^b/g) at f = 1, impossible.
        return None

    result = minmax_euclid(1 << b, gp, n)
    pow2_over_g, pow2_mod_g = divmod(1 << u, gp)

    if u <= b:
        shift = b - u
        dividend = gp - result.max
        threshold = (gp - pow2_mod_g) * n
        test_number = dividend >> shift
        if _lower_bits(dividend, shift) == 0:
            threshold += 1
        if test_number >= threshold:
            return BitReduction(pow2_over_g + 1, RoundDirection.CEILING)
        if (result.min >> shift) >= pow2_mod_g * n:
            return BitReduction(pow2_over_g, RoundDirection.FLOOR)
    else:
        shift = u - b
        if (((gp - pow2_mod_g) * n) >> shift) < gp - result.max:
            return BitReduction(pow2_over_g + 1, RoundDirection.CEILING)
        dividend = pow2_mod_g * n
        test_number = dividend >> shift
        if _lower_bits(dividend, shift) != 0:
            test_number += 1
        if test_number <= result.min:
            return BitReduction(pow2_over_g, RoundDirection.FLOOR)

    return None


def required_bits_for_reciprocal_left_shift(
    max_g_bits: int, min_b: int, max_b: int, max_u: int, max_n_bits: int
) -> int:
    """Upper bound on the bit width needed by :func:`reciprocal_left_shift`."""
    if max_g_bits <= 0 or max_n_bits <= 0:
        raise ValueError("bit counts must be positive")
    if min_b > max_b:
        raise ValueError("min_b must not exceed max_b")

    ret = max_g_bits
    if min_b < 0:
        ret = max_g_bits - min_b
        max_u -= min_b
        max_g_bits -= min_b
    return max(
        ret,
        max_b + 1 + max_n_bits - 1,
        max_u + 1 + max_n_bits - 1,
        max_g_bits + max_n_bits,
    )