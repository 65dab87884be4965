"""
Calendar helpers for the ledger: day parsing, vacation range expansion and
half-open month/year windows.

All values are plain `datetime.date` objects. Timestamps are rejected, so a
timezone shift can never move an event to the neighbouring day.
"""
import re
from datetime import date, datetime, timedelta
from typing import List, Optional, Tuple, Union

from app.core.exceptions import InvalidInputError, RangeTooLongError

MAX_VACATION_SPAN_DAYS = 62
MIN_YEAR = 2000
MAX_YEAR = 2100

_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")

DayInput = Union[date, str, None]


def parse_day(value: DayInput, field: str = "day") -> date:
    """Parse a strict YYYY-MM-DD value (or pass a date through)."""
    if isinstance(value, datetime):
        raise InvalidInputError(f"{field} must be a calendar date, not a timestamp", details={"field": field})
    if isinstance(value, date):
        return value

    raw = str(value if value is not None else "").strip()
    if not raw:
        raise InvalidInputError(f"{field} required", details={"field": field})
    if not _DAY_RE.match(raw):
        raise InvalidInputError(f"{field} must be YYYY-MM-DD", details={"field": field, "value": raw})
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise InvalidInputError(f"Invalid date: {raw}", details={"field": field, "value": raw})


def span_days(start: date, end: date) -> int:
    """Number of calendar days in the inclusive range [start, end]."""
    return (end - start).days + 1


def expand_range(start: date, end: Optional[date] = None, max_days: int = MAX_VACATION_SPAN_DAYS) -> List[date]:
    """
    Expand an inclusive [start, end] vacation period into one date per day,
    ascending. `end` defaults to `start`.

    Raises:
        InvalidInputError: end before start
        RangeTooLongError: more than `max_days` days
    """
    end = end or start
    if end < start:
        raise InvalidInputError(
            "dayTo must be on or after dayFrom",
            details={"dayFrom": start.isoformat(), "dayTo": end.isoformat()},
        )
    days = span_days(start, end)
    if days > max_days:
        raise RangeTooLongError(days, max_days)
    return [start + timedelta(days=n) for n in range(days)]


def month_window(month: str) -> Tuple[date, date]:
    """`YYYY-MM` -> [first of month, first of next month)."""
    token = str(month or "").strip()
    if not _MONTH_RE.match(token):
        raise InvalidInputError("month must be YYYY-MM", details={"month": token})
    year, mon = (int(part) for part in token.split("-"))
    if not 1 <= mon <= 12:
        raise InvalidInputError("month must be YYYY-MM", details={"month": token})
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise InvalidInputError(
            f"year must be between {MIN_YEAR} and {MAX_YEAR}", details={"month": token}
        )
    start = date(year, mon, 1)
    end = date(year + 1, 1, 1) if mon == 12 else date(year, mon + 1, 1)
    return start, end


def year_window(year: Union[int, str]) -> Tuple[date, date]:
    """Calendar year -> [Jan 1, Jan 1 of next year)."""
    try:
        y = int(str(year).strip())
    except (TypeError, ValueError):
        raise InvalidInputError("year must be an integer", details={"year": year})
    if not MIN_YEAR <= y <= MAX_YEAR:
        raise InvalidInputError(
            f"year must be between {MIN_YEAR} and {MAX_YEAR}", details={"year": y}
        )
    return date(y, 1, 1), date(y + 1, 1, 1)
