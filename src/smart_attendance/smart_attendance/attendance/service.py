from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import coerce_date, format_date, now_local
from ..common.validators import require_non_empty
from ..core.enums import AttendanceStatus, DailyStatus, OverrideTarget, UnmarkedPolicy
from ..core.exceptions import DomainError, NotFoundError
from ..recognition.model import Proposal
from ..recognition.service import build_scan_observations
from ..roster.model import Person
from ..roster.repository import RosterRepository
from ..roster.service import NameLookup
from ..sessions.model import Session, new_session
from ..sessions.repository import SessionRepository
from .aggregator import CohortSummary, RangeSummary, aggregate, aggregate_cohort
from .factory import OverrideStrategyFactory
from .month_grid import month_days
from .override import OverrideController
from .resolver import ObservationIndex, resolve

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardView:
    summary: CohortSummary
    people: Sequence[Person]

    def members(self, status: DailyStatus | str) -> list[Person]:
        """Members whose consolidated status for the day equals `status` (the dashboard drill-down)."""
        wanted = DailyStatus(status)
        return [p for p in self.people if self.summary.statuses.get(p.person_id) == wanted]


@dataclass(frozen=True)
class MonthRow:
    person_id: str
    name: str
    statuses: tuple[DailyStatus, ...]
    summary: RangeSummary
    removed: bool = False


@dataclass(frozen=True)
class MonthReport:
    year_month: str
    days: tuple[date, ...]
    rows: tuple[MonthRow, ...]


@dataclass(frozen=True)
class HistoryStats:
    total_scans: int
    present: int
    late: int
    absent: int
    total: int


class AttendanceService:
    def __init__(
        self,
        roster: RosterRepository,
        sessions: SessionRepository,
        *,
        strategy_factory: OverrideStrategyFactory | None = None,
        override_target: OverrideTarget | str = OverrideTarget.FIRST,
        dashboard_policy: UnmarkedPolicy | str = UnmarkedPolicy.COLLAPSE,
    ):
        self._roster = roster
        self._sessions = sessions
        factory = strategy_factory or OverrideStrategyFactory()
        self._overrides = OverrideController(sessions, strategy=factory.for_target(override_target))
        self._dashboard_policy = UnmarkedPolicy(dashboard_policy)

    def record_scan(
        self,
        proposals: Iterable[Proposal],
        *,
        image_ref: Optional[str] = None,
        day: date | str | None = None,
        adjustments: Optional[Mapping[str, AttendanceStatus | str]] = None,
        now: datetime | None = None,
    ) -> Session:
        """Store a reviewed scan as a new session covering every roster member."""
        now = now or now_local()
        day = coerce_date(day) if day else now.date()

        observations = build_scan_observations(
            self._roster.list_all(),
            proposals,
            now=now,
            adjustments=adjustments,
        )
        session = new_session(day=day, observations=observations, created_at=now, image_ref=image_ref)
        self._sessions.insert(session)
        logger.info("Recorded session %s for %s with %d observations", session.session_id, day, len(observations))
        return session

    def dashboard(self, day: date | str, *, policy: UnmarkedPolicy | str | None = None) -> DashboardView:
        day = coerce_date(day)
        people = self._roster.list_all()
        summary = aggregate_cohort(
            [p.person_id for p in people],
            day,
            ObservationIndex(self._sessions.list_by_date(day)),
            UnmarkedPolicy(policy) if policy else self._dashboard_policy,
        )
        return DashboardView(summary=summary, people=people)

    def month_report(self, year_month: str) -> MonthReport:
        days = month_days(year_month)
        sessions = self._sessions.list_between(days[0], days[-1])
        index = ObservationIndex(sessions)

        people = self._roster.list_all()
        names = NameLookup(people)
        roster_ids = [p.person_id for p in people]
        # members deleted since keep their history in the report
        removed_ids = sorted(index.person_ids() - set(roster_ids))

        summaries = aggregate(roster_ids + removed_ids, days, index)
        rows = []
        for pid in roster_ids + removed_ids:
            try:
                statuses = tuple(resolve(index(pid, d)) for d in days)
            except DomainError:
                statuses = ()
            rows.append(
                MonthRow(
                    person_id=pid,
                    name=names.name_for(pid),
                    statuses=statuses,
                    summary=summaries[pid],
                    removed=pid not in names,
                )
            )
        return MonthReport(year_month=year_month, days=tuple(days), rows=tuple(rows))

    def _require_member(self, person_id: str) -> str:
        person_id = require_non_empty(person_id, "Member id")
        if not self._roster.get_by_id(person_id):
            raise NotFoundError(f"Member {person_id!r} does not exist")
        return person_id

    def override(
        self,
        person_id: str,
        day: date | str,
        status: AttendanceStatus | str,
        *,
        now: datetime | None = None,
    ) -> Session:
        return self._overrides.apply(self._require_member(person_id), day, status, now=now)

    def toggle(self, person_id: str, day: date | str, *, now: datetime | None = None) -> AttendanceStatus:
        return self._overrides.toggle(self._require_member(person_id), day, now=now)

    def history(self, *, day: date | str | None = None) -> list[Session]:
        """Sessions newest day first; sessions of the same day keep creation order."""
        sessions = self._sessions.list_by_date(coerce_date(day)) if day else self._sessions.list_all()
        return sorted(sessions, key=lambda s: s.day, reverse=True)

    @staticmethod
    def history_stats(sessions: Sequence[Session]) -> HistoryStats:
        """Raw observation counts (not consolidated per day)."""
        statuses = [o.status for s in sessions for o in s.observations]
        return HistoryStats(
            total_scans=len(sessions),
            present=statuses.count(AttendanceStatus.PRESENT),
            late=statuses.count(AttendanceStatus.LATE),
            absent=statuses.count(AttendanceStatus.ABSENT),
            total=len(statuses),
        )

    def session_rows(self, session: Session) -> list[dict]:
        names = NameLookup(self._roster.list_all())
        return [
            {
                "person_id": o.person_id,
                "name": names.name_for(o.person_id),
                "status": o.status.value,
                "confidence": o.confidence,
                "timestamp": o.created_at.isoformat(timespec="seconds"),
                "note": o.note or "",
            }
            for o in session.observations
        ]

    @staticmethod
    def session_ui(session: Session) -> dict:
        return {
            "session_id": session.session_id,
            "date": format_date(session.day),
            "created_at": session.created_at.isoformat(timespec="seconds"),
            "has_image": bool(session.image_ref),
            "present": sum(1 for o in session.observations if o.status == AttendanceStatus.PRESENT),
            "total": len(session.observations),
        }
