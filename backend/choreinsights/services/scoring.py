"""Rounding helpers shared by the percentage calculators."""

import math


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positives (``round()`` rounds to even)."""
    return int(math.floor(value + 0.5))


def capped_pct(numerator: int, denominator: int) -> int:
    """``numerator / denominator`` as a whole percentage clamped to 0..100.

    A zero denominator yields 0.
    """
    if denominator <= 0:
        return 0
    pct = round_half_up(numerator / denominator * 100)
    return max(0, min(100, pct))
