"""Statistical utility functions for safe calculations."""

import math
from typing import Iterable, List, Optional, TypeVar

T = TypeVar("T")


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """
    Safely divide two numbers, returning default if denominator is zero.

    Args:
        numerator: The numerator
        denominator: The denominator
        default: Value to return if denominator is zero

    Returns:
        Result of division or default value
    """
    return numerator / denominator if denominator > 0 else default


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards positive infinity."""
    return math.floor(value + 0.5)


def round1(value: float) -> float:
    """Round to one decimal place, halves up."""
    return round_half_up(value * 10) / 10


def round2(value: float) -> float:
    """Round to two decimal places, halves up."""
    return round_half_up(value * 100) / 100


def clamp(value: float, minimum: float, maximum: float) -> float:
    """Clamp value into [minimum, maximum]."""
    return min(max(value, minimum), maximum)


def percentage(part: float, whole: float) -> float:
    """Share of ``part`` in ``whole`` as a percentage with one decimal."""
    return round1(safe_divide(part, whole) * 100)


def mode(values: Iterable[T]) -> Optional[T]:
    """Most frequent value; ties go to the value seen first."""
    counts: dict = {}
    for value in values:
        counts[value] = counts.get(value, 0) + 1
    best: Optional[T] = None
    best_count = 0
    for value, count in counts.items():
        if count > best_count:
            best, best_count = value, count
    return best


def safe_mean(values: List[float], default: float = 0.0) -> float:
    """
    Safely calculate mean of values, returning default if list is empty.

    Args:
        values: List of numeric values
        default: Value to return if list is empty

    Returns:
        Mean of values or default value
    """
    return sum(values) / len(values) if values else default
