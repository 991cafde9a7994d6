# gamecatalog/utils/date_utils.py

"""Utility functions for converting release dates and SQLite timestamps.

Release dates are stored as ISO text (YYYY-MM-DD) in a DATE column.
Creation timestamps come back from SQLite's CURRENT_TIMESTAMP as
"YYYY-MM-DD HH:MM:SS" in UTC.

Accepted release date input formats: YYYY-MM-DD, DD.MM.YYYY, YYYY/MM/DD,
datetime.date and datetime.datetime objects.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

__all__ = ["format_release_date", "parse_release_date", "parse_timestamp"]

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

_DATE_FORMATS: list[str] = ["%Y-%m-%d", "%d.%m.%Y", "%Y/%m/%d"]


def parse_release_date(value: date | datetime | str | None) -> date | None:
    """Converts supported release date inputs to a ``date``.

    Args:
        value: A date, datetime, date string, or None / empty string.

    Returns:
        The parsed date, or None for empty input.

    Raises:
        ValueError: If a string matches none of the accepted formats, or the
            value has an unsupported type.
    """
    if value is None:
        return None

    # datetime is a date subclass, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    if not isinstance(value, str):
        raise ValueError(f"Unsupported release date type: {type(value).__name__}")

    value = value.strip()
    if not value:
        return None

    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            continue

    raise ValueError(f"Unrecognised release date: {value!r}")


def format_release_date(value: date | None) -> str | None:
    """Formats a date as ISO text for storage, passing None through."""
    if value is None:
        return None
    return value.isoformat()


def parse_timestamp(value: str | None) -> datetime | None:
    """Parses a SQLite CURRENT_TIMESTAMP value into an aware UTC datetime.

    Values that do not parse are returned as None rather than raising,
    since they are server-assigned and informational only.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(str(value))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
