from __future__ import annotations

from datetime import date

from ..common.datetime_utils import format_date, month_dates, parse_year_month


def month_days(year_month: str) -> list[date]:
    year, month = parse_year_month(year_month)
    return month_dates(year, month)


def days_in_month(year_month: str) -> list[str]:
    """Every calendar day of a YYYY-MM month as YYYY-MM-DD strings, ascending."""
    return [format_date(d) for d in month_days(year_month)]
