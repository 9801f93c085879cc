"""Lenient coercion of loosely-typed upstream JSON values."""

import math
import re
from typing import Any, Iterable, List, Optional

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def to_int(value: Any) -> int:
    """Coerce a JSON value to an int, 0 when it is not numeric.

    Floats are truncated towards zero; strings are read up to the first
    non-digit character.
    """
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else 0
    return 0


def finite_or_none(value: Any) -> Optional[float]:
    """Coerce a JSON value to a finite float, or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    if isinstance(value, str):
        match = _LEADING_FLOAT.match(value)
        if match:
            number = float(match.group(1))
            return number if math.isfinite(number) else None
    return None


def finite_or_infinity(value: Any) -> float:
    """Like :func:`finite_or_none` but missing values sort last."""
    number = finite_or_none(value)
    return math.inf if number is None else number


def to_str(value: Any) -> str:
    """Stripped string value, or an empty string for anything else."""
    return value.strip() if isinstance(value, str) else ""


def first_str(*values: Any) -> str:
    """First non-blank string among values."""
    for value in values:
        text = to_str(value)
        if text:
            return text
    return ""


def as_list(value: Any) -> List[Any]:
    """The value itself when it is a list, otherwise an empty list."""
    return value if isinstance(value, list) else []


def as_dict(value: Any) -> dict:
    """The value itself when it is a dict, otherwise an empty dict."""
    return value if isinstance(value, dict) else {}


def dict_rows(value: Any) -> List[dict]:
    """Dict rows of a JSON list, skipping anything that is not an object."""
    return [row for row in as_list(value) if isinstance(row, dict)]


def first_positive(values: Iterable[Any]) -> int:
    """First value that coerces to a positive int, else 0."""
    for value in values:
        number = to_int(value)
        if number > 0:
            return number
    return 0
