"""Shared rating and timestamp normalization helpers.

Answer ratings are stored as free text and timestamps may arrive either as
driver datetimes or ISO-8601 text. These helpers keep both contracts
deterministic for every consumer.
"""

from __future__ import annotations

from datetime import datetime, timezone


def domain_normalize_optional_text(value: object | None) -> str | None:
    """Normalize one optional text value.

    Args:
        value: Candidate value from a record.

    Returns:
        str | None: Stripped text, or None when missing, blank, or not text.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if value is None or not isinstance(value, str):
        return None

    normalized_value = value.strip()
    if not normalized_value:
        return None
    return normalized_value


def domain_parse_rating(value: object | None) -> int | None:
    """Parse one string-encoded answer rating into an integer.

    The leading integer prefix is used, so `"7.5"` parses to 7 and `"80/100"`
    to 80. Values without leading digits are unparseable.

    Args:
        value: Raw rating value.

    Returns:
        int | None: Parsed rating, or None when missing or unparseable.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value

    normalized_value = domain_normalize_optional_text(value)
    if normalized_value is None:
        return None

    sign = 1
    if normalized_value[0] in "+-":
        sign = -1 if normalized_value[0] == "-" else 1
        normalized_value = normalized_value[1:]

    digit_count = 0
    for character in normalized_value:
        if not ("0" <= character <= "9"):
            break
        digit_count += 1

    if digit_count == 0:
        return None
    return sign * int(normalized_value[:digit_count])


def domain_parse_timestamp(value: object | None) -> datetime | None:
    """Parse one timestamp value into an offset-aware datetime.

    Offset-naive values are interpreted as UTC.

    Args:
        value: Driver datetime or ISO-8601 text.

    Returns:
        datetime | None: Offset-aware timestamp, or None when missing or malformed.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if isinstance(value, datetime):
        return _domain_ensure_utc_offset(value)

    normalized_value = domain_normalize_optional_text(value)
    if normalized_value is None:
        return None

    candidate_values = [normalized_value]
    if normalized_value.endswith("Z"):
        candidate_values.append(f"{normalized_value[:-1]}+00:00")

    for candidate in candidate_values:
        try:
            return _domain_ensure_utc_offset(datetime.fromisoformat(candidate))
        except ValueError:
            continue
    return None


def _domain_ensure_utc_offset(value: datetime) -> datetime:
    """Attach UTC to offset-naive datetimes.

    Args:
        value: Parsed datetime.

    Returns:
        datetime: Offset-aware datetime.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=timezone.utc)
    return value


__all__ = [
    "domain_normalize_optional_text",
    "domain_parse_rating",
    "domain_parse_timestamp",
]
