from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from ..common.datetime_utils import coerce_date
from ..core.enums import DailyStatus, UnmarkedPolicy
from ..core.exceptions import DomainError
from .resolver import ObservationLookup, resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RangeSummary:
    """Day counts for one member over a set of dates.

    Late days count as attended but not as present. A row whose data could
    not be resolved carries `error` and zero counts.
    """

    person_id: str
    present: int = 0
    late: int = 0
    absent: int = 0
    unmarked: int = 0
    error: Optional[str] = None

    @property
    def total_attended(self) -> int:
        return self.present + self.late

    @property
    def days(self) -> int:
        return self.present + self.late + self.absent + self.unmarked


@dataclass(frozen=True)
class CohortSummary:
    day: date
    policy: UnmarkedPolicy
    present: int
    late: int
    absent: int
    unmarked: int
    total: int
    present_percent: int
    late_percent: int
    absent_percent: int
    unmarked_percent: int
    statuses: dict[str, DailyStatus] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)

    def members_with(self, status: DailyStatus) -> list[str]:
        return [pid for pid, s in self.statuses.items() if s == status]


def percent(count: int, total: int) -> int:
    """round(count / total * 100) with halves rounded up; 0 for an empty total."""
    if total <= 0:
        return 0
    return (count * 200 + total) // (2 * total)


def _unique_dates(dates: Iterable[date | str]) -> list[date]:
    return list(dict.fromkeys(coerce_date(d) for d in dates))


def aggregate(
    person_ids: Iterable[str],
    dates: Iterable[date | str],
    lookup: ObservationLookup,
) -> dict[str, RangeSummary]:
    days = _unique_dates(dates)
    out: dict[str, RangeSummary] = {}

    for pid in person_ids:
        try:
            counts = Counter(resolve(lookup(pid, d)) for d in days)
        except DomainError as exc:
            logger.warning("Skipping range summary for %s: %s", pid, exc)
            out[pid] = RangeSummary(person_id=pid, error=str(exc))
            continue

        out[pid] = RangeSummary(
            person_id=pid,
            present=counts[DailyStatus.PRESENT],
            late=counts[DailyStatus.LATE],
            absent=counts[DailyStatus.ABSENT],
            unmarked=counts[DailyStatus.UNMARKED],
        )
    return out


def aggregate_cohort(
    person_ids: Iterable[str],
    day: date | str,
    lookup: ObservationLookup,
    unmarked_policy: UnmarkedPolicy = UnmarkedPolicy.COLLAPSE,
) -> CohortSummary:
    day = coerce_date(day)
    policy = UnmarkedPolicy(unmarked_policy)

    statuses: dict[str, DailyStatus] = {}
    failures: dict[str, str] = {}
    for pid in person_ids:
        try:
            status = resolve(lookup(pid, day))
        except DomainError as exc:
            logger.warning("Leaving %s out of the %s rollup: %s", pid, day, exc)
            failures[pid] = str(exc)
            continue
        if status == DailyStatus.UNMARKED and policy == UnmarkedPolicy.COLLAPSE:
            status = DailyStatus.ABSENT
        statuses[pid] = status

    counts = Counter(statuses.values())
    total = len(statuses)
    return CohortSummary(
        day=day,
        policy=policy,
        present=counts[DailyStatus.PRESENT],
        late=counts[DailyStatus.LATE],
        absent=counts[DailyStatus.ABSENT],
        unmarked=counts[DailyStatus.UNMARKED],
        total=total,
        present_percent=percent(counts[DailyStatus.PRESENT], total),
        late_percent=percent(counts[DailyStatus.LATE], total),
        absent_percent=percent(counts[DailyStatus.ABSENT], total),
        unmarked_percent=percent(counts[DailyStatus.UNMARKED], total),
        statuses=statuses,
        failures=failures,
    )
