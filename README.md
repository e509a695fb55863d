# fpfmt

Exact, pure-Python tools for IEEE-754 binary32 and binary64 numbers:
bit-level inspection, the tables of normalised powers of ten used by
binary-to-decimal conversion, an exact segment-by-segment decimal expansion
of any finite value, and correctly rounded fixed-precision scientific
formatting.

There are no runtime dependencies.

## Modules

### `fpfmt.ieee754`

- `Ieee754Format` – the enumeration `BINARY32` / `BINARY64`.
- `format_info(fmt)` – a `FormatInfo` with the layout of a format
  (`total_bits`, `significand_bits`, `exponent_bits`, `min_exponent`,
  `max_exponent`, `exponent_bias`, `decimal_digits`, and the masks
  `sign_mask`, `exponent_mask`, `significand_mask`). `fmt` may be the enum
  member or its value, such as `"binary32"`.
- `Ieee754Bits(u, fmt)` – a frozen view of a bit pattern; a `ValueError` is
  raised if `u` does not fit in the format.
  - `Ieee754Bits.from_float(x, fmt)` encodes a value (an `OverflowError` if
    it is out of binary32 range); `to_float()` decodes it again.
  - `positive_zero(fmt)`, `negative_zero(fmt)`, `positive_infinity(fmt)`,
    `negative_infinity(fmt)` build the special patterns.
  - `extract_exponent_bits()`, `extract_significand_bits()`,
    `binary_exponent()` (subnormals report the minimum exponent) and
    `binary_significand()` (with the implicit bit for normal values).
  - `is_finite()`, `is_nonzero()`, `is_subnormal()` (true for zeros too),
    `is_positive()`, `is_negative()`, `is_positive_infinity()`,
    `is_negative_infinity()`, `is_infinity()`, `is_nan()`.

### `fpfmt.fixed_precision`

`to_chars_fixed_precision_scientific(x, precision, fmt=Ieee754Format.BINARY64)`
returns `x` in scientific form with exactly `precision` digits after the
first significant digit, rounded half-to-even on the exact binary value,
with an exponent of at least two digits:

```python
>>> from fpfmt.fixed_precision import to_chars_fixed_precision_scientific
>>> to_chars_fixed_precision_scientific(0.1, 20)
'1.00000000000000005551e-01'
>>> to_chars_fixed_precision_scientific(2.5, 0)
'2e+00'
```

`x` is a float, encoded in `fmt`, or an `Ieee754Bits`, whose own format is
used. Zeros are written without an exponent (`0`, `0.000`), infinities as
`Infinity` and NaNs as `nan`, each with a leading `-` when the sign bit is
set. A negative precision raises `ValueError`.

### `fpfmt.ryu_printf`

`RyuPrintf(bits, middle_point=False)` walks the exact decimal expansion of a
finite, nonzero value (an `Ieee754Bits` or a float, taken as binary64) in
nine-digit segments, starting at the first nonzero one; segment `n` is
`floor(v * 10^(9n)) mod 10^9` and the sign is ignored. With `middle_point`
the value is taken half an ulp above the given one.

- `current_segment`, `current_segment_index`, `max_segment_index`
- `compute_next_segment()` advances and returns `False` once all remaining
  segments are zero.
- `has_further_nonzero_segments()` tells whether any nonzero digit remains
  after the current segment.
- `segments()` yields `(index, segment)` pairs from the current segment on.

`max_nonzero_decimal_digits(fmt)` bounds how many nonzero significant digits
any value of the format can have.

### `fpfmt.dragonbox_cache`

`cache_holder(fmt)` returns a `CacheHolder` with the table of normalised
powers of ten for the format (64-bit entries for `k` in `-55..46` for
binary32, 128-bit entries for `k` in `-342..326` for binary64).
`CacheHolder.get(k)` returns an entry and raises `IndexError` outside the
range. `compute_cache_entry(k, cache_bits)` derives a single entry: `5^k`
normalised to `cache_bits` bits, truncated for `k >= 0` and rounded up for
`k < 0`.

### `fpfmt.compressed_cache`

`compressed_cache()` returns a `CompressedCache` that stores one binary64
entry in 27 and recovers the others by multiplying by a power of five plus a
2-bit correction; `CompressedCache.get(k)` returns the exact entry.
`compute_error_table()` rebuilds the list of 32-bit correction words and
`format_error_table(errors)` renders them as a C-style array declaration,
five words per line.

### `fpfmt.minmax_euclid`

`minmax_euclid(a, b, n)` returns a `MinmaxEuclidResult` with the minimum and
maximum of `a*x mod b` over `1 <= x <= n` and where they occur.
`multiplier_right_shift(g, b, l, n)` and `reciprocal_left_shift(g, b, u, n)`
decide whether a truncated multiplier still gives exact quotients for every
input up to `n`, returning a `BitReduction` (the reduced constant and its
rounding direction) or `None`. `required_bits_for_multiplier_right_shift`
and `required_bits_for_reciprocal_left_shift` bound the integer widths those
checks need.

## Command line

Regenerate the correction table of the compressed binary64 cache:

```
fpfmt-error-table
fpfmt-error-table --output path/to/errors.txt
```

The default output file is
`results/dragonbox_binary64_compressed_cache_error_table.txt`; missing
directories are created.

## What this package does not do

It does not produce shortest round-trip decimal strings, it does not format
in fixed-point (non-scientific) form, and it does not parse decimal strings
back into floats. Only fixed-precision scientific formatting is provided.

## Tests

```
pip install -e ".[test]"
pytest
```