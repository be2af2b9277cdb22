from __future__ import annotations

import calendar
from datetime import date, datetime

from ..core.exceptions import InvalidDateError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime((value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise InvalidDateError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def parse_year_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM string into a (year, month) pair."""
    try:
        parsed = datetime.strptime((value or "").strip(), "%Y-%m")
    except ValueError:
        raise InvalidDateError(f"Invalid month: {value!r} (expected YYYY-MM)")
    return parsed.year, parsed.month


def coerce_date(value: date | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(value)


def month_dates(year: int, month: int) -> list[date]:
    if not 1 <= month <= 12:
        raise InvalidDateError(f"Invalid month: {month}")
    _, last_day = calendar.monthrange(year, month)
    return [date(year, month, day) for day in range(1, last_day + 1)]


def format_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
