"""Compact number formatting helpers ("1.2M", "500K")."""

import math
import re

_NON_NUMERIC_RE = re.compile(r"[^0-9.]")

_SCALE = {
    "M": 1_000_000,
    "K": 1_000,
}


def parse_compact_number(value: str) -> float:
    """Expand a compact count string into a number.

    Accepts thousands separators, a decimal point and a trailing K/M suffix
    (case-insensitive), e.g. "1.2M", "500K", "12,345".

    Args:
        value: String to parse

    Returns:
        The expanded value as a float, or NaN when no digits are present.
        Callers round when they need an integer.
    """
    if not value:
        return math.nan

    text = value.strip()
    multiplier = _SCALE.get(text[-1:].upper(), 1) if text else 1

    digits = _NON_NUMERIC_RE.sub("", text)
    if not any(ch.isdigit() for ch in digits):
        return math.nan

    try:
        number = float(digits)
    except ValueError:
        # More than one decimal point, e.g. "1.2.3"
        return math.nan

    return number * multiplier


def format_compact_number(count: int) -> str:
    """Format a count for display.

    Args:
        count: Raw count

    Returns:
        Formatted string (e.g., "1.2M", "500.0K", "999")
    """
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M"
    elif count >= 1_000:
        thousands = f"{count / 1_000:.1f}"
        # 999_950 and up round to "1000.0K"
        if thousands == "1000.0":
            return "1.0M"
        return f"{thousands}K"
    else:
        return str(int(count))
