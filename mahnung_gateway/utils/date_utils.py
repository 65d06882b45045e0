"""Date manipulation utilities"""

from datetime import date, datetime
from typing import Any
from zoneinfo import ZoneInfo

from mahnung_gateway.domain.exceptions import InvalidInputError

DEFAULT_TIMEZONE = "Europe/Berlin"

# AI extraction hands back either ISO or German notation
_DATE_FORMATS = ("%Y-%m-%d", "%d.%m.%Y")


def to_calendar_day(value: Any, field: str = "date", timezone: str = DEFAULT_TIMEZONE) -> date:
    """
    Normalize a date-like value to a calendar day.

    - date: returned unchanged
    - aware datetime: converted to the reference timezone, then truncated
    - naive datetime: truncated (treated as reference-local wall time)
    - str: ISO date/datetime or DD.MM.YYYY

    Raises InvalidInputError for anything that cannot be read as a day.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(ZoneInfo(timezone))
        return value.date()

    if isinstance(value, date):
        return value

    if isinstance(value, str):
        text = value.strip()
        for fmt in _DATE_FORMATS:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue
        try:
            return to_calendar_day(datetime.fromisoformat(text), field, timezone)
        except ValueError:
            pass
        raise InvalidInputError(f"{field} is not a valid date: {value!r}")

    raise InvalidInputError(f"{field} must be a date, got {type(value).__name__}")


def today_in(timezone: str = DEFAULT_TIMEZONE) -> date:
    """Current calendar day in the reference timezone"""
    return datetime.now(ZoneInfo(timezone)).date()


def days_between(start: date, end: date) -> int:
    """Whole days from start to end (negative when end precedes start)"""
    return (end - start).days
