"""
Input Normalization Utilities
=============================

Single source of truth for input normalization.
All parsing of external inputs (query strings, seed feed values) happens
here, nowhere else.

Usage:
    from utils.normalize import to_int, parse_month, month_of, ValidationError

    page = to_int(request.args.get("page"), default=1, field="page")
    month = parse_month(request.args.get("month"))   # 'March' -> 3, junk -> None
"""

from datetime import date, datetime
from typing import Optional

from constants import MONTH_MAP


class ValidationError(ValueError):
    """Raised when input cannot be normalized to expected type."""

    def __init__(self, message: str, field: str = None, received_value=None):
        super().__init__(message)
        self.field = field
        self.received_value = received_value


def to_int(
    value: Optional[str],
    *,
    default: Optional[int] = None,
    field: str = None
) -> Optional[int]:
    """
    Convert string to int, with explicit None handling.

    Args:
        value: Input string (typically from request.args.get())
        default: Value to return if input is None or empty
        field: Field name for error messages

    Returns:
        Parsed integer or default

    Raises:
        ValidationError: If value cannot be converted to int
    """
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValidationError(
            f"Expected int, got bool: {value!r}",
            field=field,
            received_value=value
        )
    try:
        return int(value)
    except (ValueError, TypeError):
        raise ValidationError(
            f"Expected int, got {type(value).__name__}: {value!r}",
            field=field,
            received_value=value
        )


def to_int_or_default(value, default: int) -> int:
    """Lenient variant of to_int(): anything unparseable becomes `default`."""
    try:
        parsed = to_int(value, default=default)
    except ValidationError:
        return default
    return default if parsed is None else parsed


def parse_month(value) -> Optional[int]:
    """
    Resolve a month token to its number (1-12).

    Accepts full names and three-letter abbreviations (case-insensitive)
    and numeric strings "1".."12" (zero padding allowed). Anything else,
    including None, returns None so callers can build a match-nothing filter
    instead of raising.

    Examples:
        >>> parse_month("March")
        3
        >>> parse_month("sep")
        9
        >>> parse_month("03")
        3
        >>> parse_month("Marchember") is None
        True
    """
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value if 1 <= value <= 12 else None

    token = str(value).strip().lower()
    if not token:
        return None
    if token.isdigit():
        number = int(token)
        return number if 1 <= number <= 12 else None
    return MONTH_MAP.get(token)


def month_of(value: date) -> int:
    """
    Return the calendar month (1-12) of a date or datetime.

    Python counterpart of the EXTRACT(month FROM date_of_sale) used by
    utils.filter_builder.build_month_filter, for checking rows in memory.
    """
    return value.month


def coerce_to_date(value) -> Optional[date]:
    """
    Coerce value to date object.

    Accepts:
        - None (passthrough)
        - date object (passthrough)
        - datetime object (extracts .date(), no timezone conversion)
        - ISO string: '2023-03-05', '2021-11-27T20:29:54+05:30', '...Z'

    The calendar date is taken as written, so the month seen in the source
    text is the month stored.

    Raises:
        ValueError: If value cannot be coerced to date
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise ValueError("Empty date string")
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            pass
        try:
            return datetime.strptime(text[:10], '%Y-%m-%d').date()
        except ValueError:
            raise ValueError(f"Cannot parse date: {value!r}")
    raise ValueError(f"Cannot coerce {type(value).__name__} to date: {value!r}")
