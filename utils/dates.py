"""
Date helpers shared by quality analysis and sorting.

Dates stay raw strings on rows; these helpers interpret them on demand with
pandas' lenient parser. ``format="mixed"`` parses every value on its own,
so no format is inferred and pandas has nothing to warn about.
"""

import functools
import math
from typing import List, Optional, Sequence

import pandas as pd


# Distinct date strings kept parsed; uploads reuse the same values across
# analysis, display and sorting
PARSE_CACHE_SIZE = 8192


@functools.lru_cache(maxsize=PARSE_CACHE_SIZE)
def parse_timestamp(value: str) -> Optional[pd.Timestamp]:
    """
    Parse a free-form date string.

    Args:
        value: Raw date string

    Returns:
        Parsed Timestamp, or None if the string is not a recognisable date
    """
    if not value or not value.strip():
        return None

    try:
        parsed = pd.to_datetime(value, errors="coerce", format="mixed")
    except (ValueError, TypeError, OverflowError):
        return None

    if parsed is None or pd.isna(parsed):
        return None
    return parsed


def is_valid_date(value: str) -> bool:
    """Check if a string parses as a date."""
    return parse_timestamp(value) is not None


def timestamp_value(value: str) -> float:
    """
    Numeric timestamp used for sorting.

    Args:
        value: Raw date string

    Returns:
        Nanoseconds since the epoch, or NaN for unparseable dates
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return math.nan
    return float(parsed.value)


def timestamp_values(values: Sequence[str]) -> List[float]:
    """
    timestamp_value for a whole column in one pandas call.

    Naive values are read as UTC, which gives the same nanosecond value as
    ``Timestamp.value`` on the naive timestamp.

    Args:
        values: Raw date strings

    Returns:
        Nanoseconds since the epoch per value, NaN where unparseable
    """
    if not values:
        return []

    cleaned = [value if value and value.strip() else None for value in values]
    try:
        parsed = pd.to_datetime(
            pd.Series(cleaned, dtype=object), errors="coerce", utc=True, format="mixed"
        )
    except (ValueError, TypeError, OverflowError):
        # pandas rejects some column mixes outright; parse value by value instead
        return [timestamp_value(value) for value in values]

    return [math.nan if pd.isna(ts) else float(ts.value) for ts in parsed]


def format_display_date(value: str) -> str:
    """
    Format a date for the preview table, e.g. "01/15/2024, 09:30 AM".

    Unparseable values are returned unchanged.
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return value
    return parsed.strftime("%m/%d/%Y, %I:%M %p")
