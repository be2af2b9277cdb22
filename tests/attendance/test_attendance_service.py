from __future__ import annotations

from datetime import date, datetime

import pytest

from smart_attendance.attendance.service import AttendanceService
from smart_attendance.core.enums import AttendanceStatus, DailyStatus, UnmarkedPolicy
from smart_attendance.core.exceptions import InvalidDateError, NotFoundError
from smart_attendance.recognition.model import Proposal
from smart_attendance.roster.memory_roster_repository import InMemoryRosterRepository
from smart_attendance.roster.model import Person
from smart_attendance.sessions.memory_session_repository import InMemorySessionRepository

DAY = date(2024, 3, 1)


@pytest.fixture
def roster():
    return InMemoryRosterRepository(
        [
            Person(person_id="a", name="Alice", created_at=datetime(2024, 1, 1)),
            Person(person_id="b", name="Bob", created_at=datetime(2024, 1, 1)),
        ]
    )


@pytest.fixture
def sessions():
    return InMemorySessionRepository()


@pytest.fixture
def svc(roster, sessions):
    return AttendanceService(roster, sessions)


def test_two_scans_consolidate_on_dashboard(svc):
    svc.record_scan([Proposal("a", True, 90)], day=DAY, image_ref="one.jpg", now=datetime(2024, 3, 1, 8, 0))
    svc.record_scan(
        [Proposal("b", True, 70)],
        day=DAY,
        image_ref="two.jpg",
        adjustments={"b": "late"},
        now=datetime(2024, 3, 1, 8, 20),
    )

    view = svc.dashboard(DAY)
    s = view.summary
    assert (s.present, s.late, s.absent, s.total) == (1, 1, 0, 2)
    assert (s.present_percent, s.late_percent, s.absent_percent) == (50, 50, 0)
    assert [p.name for p in view.members(DailyStatus.PRESENT)] == ["Alice"]
    assert [p.name for p in view.members("late")] == ["Bob"]


def test_dashboard_policy_can_keep_unmarked(svc):
    collapsed = svc.dashboard("2024-03-02").summary
    kept = svc.dashboard("2024-03-02", policy=UnmarkedPolicy.KEEP).summary

    assert (collapsed.absent, collapsed.unmarked) == (2, 0)
    assert (kept.absent, kept.unmarked) == (0, 2)


def test_record_scan_defaults_to_today_of_now(svc, sessions):
    session = svc.record_scan([], now=datetime(2024, 3, 9, 14, 0))
    assert session.day == date(2024, 3, 9)
    assert [o.status for o in session.observations] == [AttendanceStatus.ABSENT, AttendanceStatus.ABSENT]
    assert sessions.list_by_date(date(2024, 3, 9)) == [session]


def test_month_report_grid_and_summary(svc):
    svc.record_scan([Proposal("a", True, 90)], day=date(2024, 2, 1), now=datetime(2024, 2, 1, 8))
    svc.record_scan([Proposal("a", True, 90), Proposal("b", True, 90)], day=date(2024, 2, 29), now=datetime(2024, 2, 29, 8))
    svc.override("b", date(2024, 2, 1), "late", now=datetime(2024, 2, 2, 9))

    report = svc.month_report("2024-02")

    assert len(report.days) == 29
    alice, bob = report.rows
    assert (alice.name, bob.name) == ("Alice", "Bob")
    assert alice.statuses[0] == DailyStatus.PRESENT
    assert alice.statuses[1] == DailyStatus.UNMARKED
    assert bob.statuses[0] == DailyStatus.LATE
    assert (alice.summary.present, alice.summary.unmarked) == (2, 27)
    assert (bob.summary.present, bob.summary.late, bob.summary.total_attended) == (1, 1, 2)


def test_month_report_keeps_removed_members(svc, roster):
    svc.record_scan([Proposal("a", True, 90), Proposal("b", True, 90)], day=DAY, now=datetime(2024, 3, 1, 8))
    roster.delete_by_id("b")

    report = svc.month_report("2024-03")

    removed = [r for r in report.rows if r.removed]
    assert [(r.person_id, r.name, r.summary.present) for r in removed] == [("b", "Removed member", 1)]


def test_override_requires_known_member(svc):
    with pytest.raises(NotFoundError):
        svc.override("ghost", DAY, "present")


def test_toggle_goes_through_service(svc):
    assert svc.toggle("a", DAY, now=datetime(2024, 3, 1, 12)) == AttendanceStatus.PRESENT
    assert svc.toggle("a", DAY, now=datetime(2024, 3, 1, 12)) == AttendanceStatus.ABSENT
    assert svc.dashboard(DAY).summary.statuses["a"] == DailyStatus.ABSENT


def test_history_and_stats(svc):
    svc.record_scan([Proposal("a", True, 90)], day=date(2024, 3, 1), now=datetime(2024, 3, 1, 8))
    svc.record_scan([Proposal("b", True, 90)], day=date(2024, 3, 3), now=datetime(2024, 3, 3, 8))

    history = svc.history()
    assert [s.day for s in history] == [date(2024, 3, 3), date(2024, 3, 1)]
    stats = svc.history_stats(history)
    assert (stats.total_scans, stats.present, stats.absent, stats.total) == (2, 2, 2, 4)
    assert [s.day for s in svc.history(day="2024-03-01")] == [date(2024, 3, 1)]


def test_invalid_dates_fail_the_call(svc):
    with pytest.raises(InvalidDateError):
        svc.dashboard("yesterday")
    with pytest.raises(InvalidDateError):
        svc.month_report("2024-00")
