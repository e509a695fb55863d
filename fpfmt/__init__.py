"""Exact IEEE-754 inspection, power-of-ten caches, decimal segments and fixed-precision formatting."""

__version__ = "0.1.0"

__all__ = [
    "compressed_cache",
    "dragonbox_cache",
    "fixed_precision",
    "ieee754",
    "minmax_euclid",
    "ryu_printf",
]