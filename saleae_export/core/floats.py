# saleae_export/core/floats.py
from __future__ import annotations


def same_float(a: float, b: float) -> bool:
    """Exact equality that also treats NaN as equal to NaN."""
    return a == b or (a != a and b != b)
