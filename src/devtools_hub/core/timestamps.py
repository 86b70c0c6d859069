"""
Unix timestamp conversion.

Ten-digit values are read as seconds, everything else as milliseconds.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from .exceptions import ParseError

SECONDS_DIGITS = 10
MILLISECONDS_DIGITS = 13
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def timestamp_to_datetime(value: int, digits: Optional[int] = None) -> datetime:
    """Convert an epoch value to an aware UTC datetime."""
    if digits is None:
        digits = len(str(abs(value)))
    millis = value * 1000 if digits == SECONDS_DIGITS else value
    try:
        return EPOCH + timedelta(milliseconds=millis)
    except OverflowError as e:
        raise ParseError(f"Timestamp out of range: {value}") from e


def to_iso(dt: datetime) -> str:
    """Render as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    dt = dt.astimezone(timezone.utc)
    return dt.strftime('%Y-%m-%dT%H:%M:%S.') + f'{dt.microsecond // 1000:03d}Z'


def format_timestamp(value: int) -> str:
    return to_iso(timestamp_to_datetime(value))


def parse_timestamp(text: str) -> int:
    """Parse an ISO-8601 date string to epoch seconds.

    Naive values are taken as UTC.
    """
    cleaned = text.strip()
    if cleaned.endswith('Z'):
        cleaned = cleaned[:-1] + '+00:00'
    try:
        dt = datetime.fromisoformat(cleaned)
    except ValueError as e:
        raise ParseError(f"Invalid date: {text!r}") from e
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return int(dt.timestamp() // 1)
