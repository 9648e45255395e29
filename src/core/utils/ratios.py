"""Ratio helpers shared by the insight and progression calculators."""

from __future__ import annotations


def safe_ratio(numerator: int | float, denominator: int | float) -> float:
    """Return ``numerator / denominator``, or 0.0 when the denominator is zero.

    Empty partitions (no served points, no clutch opportunities) report a
    zero rate instead of NaN or a ZeroDivisionError.
    """

    if not denominator:
        return 0.0
    return float(numerator) / float(denominator)


def as_percentage(ratio: float) -> int:
    """Truncate a 0-1 ratio to a whole percentage for display strings."""

    return int(ratio * 100)
