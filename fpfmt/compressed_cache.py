"""Compressed binary64 power-of-ten cache.

Only every ``compression_ratio``-th entry of the full table is stored.  The
others are recovered by multiplying the nearest stored entry below by a power
of five and renormalizing.  The recovery can undershoot the true entry by a
small amount, and a table of 2-bit corrections makes it exact.
"""

from __future__ import annotations

import argparse
import functools
from dataclasses import dataclass
from pathlib import Path

from .dragonbox_cache import CacheHolder, cache_holder
from .ieee754 import Ieee754Format

COMPRESSION_RATIO = 27
_ERRORS_PER_WORD = 16
_MASK64 = (1 << 64) - 1
_MASK128 = (1 << 128) - 1
DEFAULT_OUTPUT = "results/dragonbox_binary64_compressed_cache_error_table.txt"


def _floor_log2_pow10(e: int) -> int:
    """Exact ``floor(e * log2(10))``."""
    if e >= 0:
        return (10**e).bit_length() - 1
    # 10^-e is never a power of two, so ceil(log2(10^-e)) is its bit length.
    return -((10**-e).bit_length())


def _recover(base: int, kb: int, offset: int) -> int:
    """Approximate the entry for ``10^(kb + offset)`` from the one for ``10^kb``."""
    pow5 = 5**offset
    alpha = _floor_log2_pow10(kb + offset) - _floor_log2_pow10(kb) - offset
    if not 0 < alpha < 64:
        raise ValueError(f"unexpected shift amount {alpha} for k = {kb + offset}")

    high, low = base >> 64, base & _MASK64
    recovered = high * pow5
    middle_low = (((low - (1 if kb < 0 else 0)) & _MASK64) * pow5) & _MASK128
    recovered = (recovered + (middle_low >> 64)) & _MASK128

    combined = (recovered << 64) | (middle_low & _MASK64)
    recovered = (combined >> alpha) & _MASK128
    if kb < 0:
        recovered = (recovered + 1) & _MASK128
    return recovered


def _base_k(k: int, min_k: int) -> int:
    return ((k - min_k) // COMPRESSION_RATIO) * COMPRESSION_RATIO + min_k


def _errors_from(full: CacheHolder) -> tuple[int, ...]:
    words: list[int] = []
    word = 0
    count = 0
    for k in range(full.min_k, full.max_k + 1):
        kb = _base_k(k, full.min_k)
        offset = k - kb
        if offset:
            recovered = _recover(full.get(kb), kb, offset)
            diff = full.get(k) - recovered
            if not 0 <= diff < 4:
                raise ValueError(
                    f"recovered cache entry for k = {k} is off by {diff}"
                )
            word |= diff << (count * 2)
        count += 1
        if count == _ERRORS_PER_WORD:
            words.append(word)
            word = 0
            count = 0
    if count:
        words.append(word)
    return tuple(words)


def compute_error_table() -> list[int]:
    """Compute the 32-bit words of packed 2-bit recovery corrections."""
    return list(_errors_from(cache_holder(Ieee754Format.BINARY64)))


@dataclass(frozen=True)
class CompressedCache:
    """Sparse binary64 cache table plus its correction words."""

    min_k: int
    max_k: int
    compression_ratio: int
    table: tuple[int, ...]
    errors: tuple[int, ...]

    def __contains__(self, k: object) -> bool:
        return isinstance(k, int) and self.min_k <= k <= self.max_k

    def get(self, k: int) -> int:
        """Return the exact cache entry for ``10^k``."""
        if k not in self:
            raise IndexError(
                f"k = {k} is outside the table range [{self.min_k}, {self.max_k}]"
            )
        index = k - self.min_k
        base_index, offset = divmod(index, self.compression_ratio)
        base = self.table[base_index]
        if offset == 0:
            return base
        kb = k - offset
        recovered = _recover(base, kb, offset)
        word = self.errors[index // _ERRORS_PER_WORD]
        error = (word >> ((index % _ERRORS_PER_WORD) * 2)) & 0b11
        return recovered + error


@functools.lru_cache(maxsize=None)
def compressed_cache() -> CompressedCache:
    """Return the compressed binary64 cache."""
    full = cache_holder(Ieee754Format.BINARY64)
    size = (full.max_k - full.min_k + COMPRESSION_RATIO) // COMPRESSION_RATIO
    table = tuple(full.entries[i * COMPRESSION_RATIO] for i in range(size))
    return CompressedCache(
        min_k=full.min_k,
        max_k=full.max_k,
        compression_ratio=COMPRESSION_RATIO,
        table=table,
        errors=_errors_from(full),
    )


def format_error_table(errors) -> str:
    """Render correction words as a declaration, five words per line."""
    parts = ["static constexpr std::uint32_t errors[] = {\n\t"]
    for i, value in enumerate(errors):
        if i:
            parts.append(",\n\t" if i % 5 == 0 else ", ")
        parts.append(f"0x{value:08x}")
    parts.append("\n};")
    return "".join(parts)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate the error table of the compressed binary64 cache."
    )
    parser.add_argument("--output", default=DEFAULT_OUTPUT, help="output file path")
    args = parser.parse_args(argv)

    print("[Generating error table for compressed cache for Dragonbox...]")
    text = format_error_table(compute_error_table())
    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text)
    print("Done.\n\n")
    return 0