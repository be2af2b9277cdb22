from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.service import AttendanceService
from ..common.datetime_utils import coerce_date, format_date, now_local
from ..core.constants import DEFAULT_CSV_DELIMITER
from ..roster.repository import RosterRepository
from ..roster.service import NameLookup
from .exporter import write_log_csv, write_summary_csv


@dataclass(frozen=True)
class ExportFile:
    filename: str
    content: str


class ReportService:
    def __init__(
        self,
        attendance: AttendanceService,
        roster: RosterRepository,
        *,
        delimiter: str = DEFAULT_CSV_DELIMITER,
    ):
        self._attendance = attendance
        self._roster = roster
        self._delimiter = delimiter

    def monthly_summary(self, year_month: str) -> ExportFile:
        report = self._attendance.month_report(year_month)
        content = write_summary_csv(
            ((row.name, row.summary) for row in report.rows),
            delimiter=self._delimiter,
        )
        return ExportFile(filename=f"attendance-summary-{year_month}.csv", content=content)

    def raw_log(self, *, day: date | str | None = None, today: Optional[date] = None) -> ExportFile:
        sessions = self._attendance.history(day=coerce_date(day) if day else None)
        content = write_log_csv(sessions, NameLookup(self._roster.list_all()), delimiter=self._delimiter)
        stamp = format_date(today or now_local().date())
        return ExportFile(filename=f"attendance-report-{stamp}.csv", content=content)
