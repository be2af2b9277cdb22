"""Delimited text exports.

Fields containing the delimiter, a quote or a line break are quoted
(`csv.QUOTE_MINIMAL`); nothing else is.
"""
from __future__ import annotations

import csv
import io
from typing import Iterable

from ..attendance.aggregator import RangeSummary
from ..roster.service import NameLookup
from ..sessions.model import Session

SUMMARY_HEADER = ["Name", "PresentDays", "LateDays", "AbsentDays", "TotalAttended"]
LOG_HEADER = ["Date", "StudentName", "Status", "Confidence", "Timestamp"]


def _writer(out: io.StringIO, delimiter: str):
    return csv.writer(out, delimiter=delimiter, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")


def write_summary_csv(rows: Iterable[tuple[str, RangeSummary]], *, delimiter: str = ",") -> str:
    """One line per (name, summary); rows that failed to resolve keep their name with empty counts."""
    out = io.StringIO()
    writer = _writer(out, delimiter)
    writer.writerow(SUMMARY_HEADER)
    for name, s in rows:
        if s.error:
            writer.writerow([name, "", "", "", ""])
            continue
        writer.writerow([name, s.present, s.late, s.absent, s.total_attended])
    return out.getvalue()


def write_log_csv(sessions: Iterable[Session], names: NameLookup, *, delimiter: str = ",") -> str:
    out = io.StringIO()
    writer = _writer(out, delimiter)
    writer.writerow(LOG_HEADER)
    for s in sessions:
        for o in s.observations:
            writer.writerow(
                [
                    s.day.strftime("%Y-%m-%d"),
                    names.name_for(o.person_id),
                    o.status.value,
                    f"{o.confidence}%",
                    o.created_at.strftime("%Y-%m-%d %H:%M:%S"),
                ]
            )
    return out.getvalue()
