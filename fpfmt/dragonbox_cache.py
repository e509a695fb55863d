"""Tables of normalized powers of ten used for binary-to-decimal conversion.

Entry ``k`` is ``10^k`` scaled by a power of two so that its most significant
bit sits at position ``cache_bits - 1``.  The power of two in ``10^k`` is
dropped, leaving the normalized ``5^k``.  Nonnegative ``k`` are rounded down
and negative ``k`` are rounded up.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass

from .ieee754 import Ieee754Format

_PARAMETERS = {
    Ieee754Format.BINARY32: (64, -55, 46),
    Ieee754Format.BINARY64: (128, -342, 326),
}


def compute_cache_entry(k: int, cache_bits: int) -> int:
    """Return ``5^k`` normalized to exactly ``cache_bits`` significant bits.

    The value is truncated for ``k >= 0`` and rounded up for ``k < 0``.
    """
    if cache_bits <= 0:
        raise ValueError("cache_bits must be positive")

    if k >= 0:
        power = 5**k
        excess = power.bit_length() - cache_bits
        if excess >= 0:
            return power >> excess
        return power << -excess

    power = 5**-k
    # 2^shift / 5^-k lies in [2^(cache_bits-1), 2^cache_bits).
    shift = cache_bits + power.bit_length() - 1
    quotient, remainder = divmod(1 << shift, power)
    return quotient + 1 if remainder else quotient


@dataclass(frozen=True)
class CacheHolder:
    """The cache table of one format, indexed by decimal exponent ``k``."""

    format: Ieee754Format
    cache_bits: int
    min_k: int
    max_k: int
    entries: tuple[int, ...]

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, k: object) -> bool:
        return isinstance(k, int) and self.min_k <= k <= self.max_k

    def get(self, k: int) -> int:
        """Return the cache entry for ``10^k``."""
        if k not in self:
            raise IndexError(
                f"k = {k} is outside the table range [{self.min_k}, {self.max_k}]"
            )
        return self.entries[k - self.min_k]


@functools.lru_cache(maxsize=None)
def _build(fmt: Ieee754Format) -> CacheHolder:
    cache_bits, min_k, max_k = _PARAMETERS[fmt]
    entries = tuple(
        compute_cache_entry(k, cache_bits) for k in range(min_k, max_k + 1)
    )
    return CacheHolder(fmt, cache_bits, min_k, max_k, entries)


def cache_holder(fmt) -> CacheHolder:
    """Return the cache table for ``fmt`` (an enum member or its name)."""
    return _build(Ieee754Format(fmt))