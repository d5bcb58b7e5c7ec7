"""Rounding helpers shared by the engines."""

import math


def round_half_up(value: float) -> int:
    """Nearest integer with .5 rounding up (Python's round() is banker's)."""
    return int(math.floor(value + 0.5))


def round_to(value: float, places: int = 2) -> float:
    """Round to ``places`` decimals with ties going up, e.g. 0.125 → 0.13."""
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor
