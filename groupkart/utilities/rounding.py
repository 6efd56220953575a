"""Rounding helpers for displayed money amounts and scores."""
import math


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity (80.5 -> 81, -2.5 -> -2).

    Builtin round() rounds halves to even, which would turn 80.5 into 80.
    """
    return math.floor(value + 0.5)

__all__ = ['round_half_up']
