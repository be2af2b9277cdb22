from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import OverrideStrategyFactory
from .attendance.service import AttendanceService
from .database.connection import DatabaseConnection, DBConfig
from .reports.service import ReportService
from .roster.memory_roster_repository import InMemoryRosterRepository
from .roster.mysql_roster_repository import MySQLRosterRepository
from .roster.repository import RosterRepository
from .roster.service import RosterService
from .sessions.memory_session_repository import InMemorySessionRepository
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    roster_repo: RosterRepository
    sessions_repo: SessionRepository

    roster_service: RosterService
    attendance_service: AttendanceService
    report_service: ReportService


def build_container(
    *,
    storage_backend: str = "memory",
    db_config: dict | None = None,
    override_target: str = "first",
    dashboard_policy: str = "collapse",
    csv_delimiter: str = ",",
) -> Container:
    conn: Optional[DatabaseConnection] = None
    if storage_backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config or {}))
        roster_repo: RosterRepository = MySQLRosterRepository(conn)
        sessions_repo: SessionRepository = MySQLSessionRepository(conn)
    elif storage_backend == "memory":
        roster_repo = InMemoryRosterRepository()
        sessions_repo = InMemorySessionRepository()
    else:
        raise ValueError(f"Unsupported STORAGE_BACKEND: {storage_backend!r}")

    roster_service = RosterService(roster_repo)
    attendance_service = AttendanceService(
        roster_repo,
        sessions_repo,
        strategy_factory=OverrideStrategyFactory(),
        override_target=override_target,
        dashboard_policy=dashboard_policy,
    )
    report_service = ReportService(attendance_service, roster_repo, delimiter=csv_delimiter)

    return Container(
        conn=conn,
        roster_repo=roster_repo,
        sessions_repo=sessions_repo,
        roster_service=roster_service,
        attendance_service=attendance_service,
        report_service=report_service,
    )
