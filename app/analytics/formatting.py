"""Display formatting helpers for dashboard metrics."""

from __future__ import annotations

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

_ANALYTICS_MONTH_ABBREVIATIONS = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)


def analytics_format_fixed(value: float, decimal_places: int) -> str:
    """Format a number with a fixed count of decimal places.

    Ties round away from zero on the exact binary value, so `2.25` renders as
    `2.3` and `-0.25` as `-0.3`. Negative values that round to zero keep their
    sign (`-0.3` renders as `-0`).

    Args:
        value: Number to format.
        decimal_places: Digits after the decimal point.

    Returns:
        str: Fixed-point text.

    Raises:
        ValueError: Raised when decimal_places is negative.
    """

    if decimal_places < 0:
        raise ValueError("decimal_places must be non-negative")

    quantum = Decimal(1).scaleb(-decimal_places)
    rounded_value = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded_value.is_zero() and not value < 0:
        rounded_value = abs(rounded_value)
    return f"{rounded_value:f}"


def analytics_format_signed_percent(value: float, decimal_places: int) -> str:
    """Format a percentage with an explicit plus sign for non-negative values.

    Args:
        value: Percentage value.
        decimal_places: Digits after the decimal point.

    Returns:
        str: Text such as `+12.5%` or `-3.0%`.

    Raises:
        ValueError: Raised when decimal_places is negative.
    """

    sign_prefix = "+" if value >= 0 else ""
    return f"{sign_prefix}{analytics_format_fixed(value, decimal_places)}%"


def analytics_format_day_label(day: date) -> str:
    """Build a locale-independent short day label such as `Jan 5`.

    Args:
        day: Calendar day.

    Returns:
        str: Month abbreviation and day of month.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return f"{_ANALYTICS_MONTH_ABBREVIATIONS[day.month - 1]} {day.day}"


__all__ = [
    "analytics_format_day_label",
    "analytics_format_fixed",
    "analytics_format_signed_percent",
]
