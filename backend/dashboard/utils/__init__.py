"""Shared utility helpers."""

from .statistics import (
    safe_divide,
    safe_mean,
    round_half_up,
    round1,
    round2,
    clamp,
    percentage,
    mode,
)
from .coercion import (
    to_int,
    finite_or_none,
    finite_or_infinity,
    to_str,
    first_str,
    as_list,
    as_dict,
    dict_rows,
    first_positive,
)
from .timestamps import utc_now, to_iso, unix_seconds_to_iso

__all__ = [
    "safe_divide",
    "safe_mean",
    "round_half_up",
    "round1",
    "round2",
    "clamp",
    "percentage",
    "mode",
    "to_int",
    "finite_or_none",
    "finite_or_infinity",
    "to_str",
    "first_str",
    "as_list",
    "as_dict",
    "dict_rows",
    "first_positive",
    "utc_now",
    "to_iso",
    "unix_seconds_to_iso",
]
