from __future__ import annotations

from datetime import date, datetime

import pytest

from smart_attendance.attendance.factory import OverrideStrategyFactory
from smart_attendance.attendance.override import OverrideController, apply_override, next_status
from smart_attendance.attendance.resolver import resolve_for
from smart_attendance.attendance.strategies.first_session_strategy import FirstSessionStrategy
from smart_attendance.attendance.strategies.latest_session_strategy import LatestSessionStrategy
from smart_attendance.core.enums import AttendanceStatus, DailyStatus
from smart_attendance.core.exceptions import InvalidDateError, ValidationError
from smart_attendance.sessions.memory_session_repository import InMemorySessionRepository
from smart_attendance.sessions.model import Observation, Session

DAY = date(2024, 3, 1)
NOW = datetime(2024, 3, 2, 10, 0)


def scan(session_id: str, minute: int, **statuses: AttendanceStatus) -> Session:
    created = datetime(2024, 3, 1, 8, minute)
    return Session(
        session_id=session_id,
        day=DAY,
        created_at=created,
        observations=tuple(
            Observation(observation_id=f"{session_id}-{pid}", person_id=pid, status=s, confidence=60, created_at=created)
            for pid, s in statuses.items()
        ),
        image_ref=f"{session_id}.jpg",
    )


def test_override_creates_manual_session_when_day_is_empty():
    repo = InMemorySessionRepository()
    session = OverrideController(repo).apply("alice", DAY, AttendanceStatus.LATE, now=NOW)

    assert repo.list_by_date(DAY) == [session]
    assert session.image_ref is None
    (only,) = session.observations
    assert (only.person_id, only.status, only.confidence, only.created_at) == ("alice", AttendanceStatus.LATE, 100, NOW)


def test_override_amends_first_session_of_the_day():
    first, second = scan("s1", 0, alice=AttendanceStatus.ABSENT), scan("s2", 30, bob=AttendanceStatus.PRESENT)
    repo = InMemorySessionRepository([first, second])

    OverrideController(repo).apply("alice", DAY, "present", now=NOW)

    amended = repo.get_by_id("s1").observation_for("alice")
    assert (amended.status, amended.confidence, amended.created_at) == (AttendanceStatus.PRESENT, 100, NOW)
    assert amended.observation_id == "s1-alice"
    assert repo.get_by_id("s2") == second


def test_override_appends_to_first_session_when_member_missing():
    repo = InMemorySessionRepository([scan("s1", 0, alice=AttendanceStatus.PRESENT), scan("s2", 30)])

    OverrideController(repo).apply("bob", DAY, AttendanceStatus.ABSENT, now=NOW)

    assert [o.person_id for o in repo.get_by_id("s1").observations] == ["alice", "bob"]
    assert repo.get_by_id("s2").observations == ()


def test_same_override_twice_leaves_one_observation():
    repo = InMemorySessionRepository()
    controller = OverrideController(repo)

    controller.apply("alice", DAY, AttendanceStatus.PRESENT, now=NOW)
    controller.apply("alice", DAY, AttendanceStatus.PRESENT, now=NOW)

    observations = [o for s in repo.list_by_date(DAY) for o in s.observations if o.person_id == "alice"]
    assert len(observations) == 1
    assert observations[0].status == AttendanceStatus.PRESENT


def test_latest_strategy_amends_most_recent_session():
    repo = InMemorySessionRepository([scan("s1", 0), scan("s2", 30)])
    controller = OverrideController(repo, strategy=OverrideStrategyFactory().for_target("latest"))

    controller.apply("alice", DAY, AttendanceStatus.LATE, now=NOW)

    assert repo.get_by_id("s1").observations == ()
    assert repo.get_by_id("s2").observation_for("alice").status == AttendanceStatus.LATE


def test_factory_maps_targets():
    factory = OverrideStrategyFactory()
    assert isinstance(factory.for_target("first"), FirstSessionStrategy)
    assert isinstance(factory.for_target("latest"), LatestSessionStrategy)
    with pytest.raises(ValidationError):
        factory.for_target("random")


def test_pure_override_uses_creation_order_not_list_order():
    early, late = scan("early", 0), scan("late", 45)

    updated = apply_override([late, early], "alice", "2024-03-01", "absent", now=NOW)

    by_id = {s.session_id: s for s in updated}
    assert by_id["early"].observation_for("alice").status == AttendanceStatus.ABSENT
    assert by_id["late"].observations == ()
    assert [s.session_id for s in updated] == ["late", "early"]


def test_pure_override_adds_session_for_new_day():
    existing = [scan("s1", 0, alice=AttendanceStatus.PRESENT)]

    updated = apply_override(existing, "alice", date(2024, 3, 5), AttendanceStatus.LATE, now=NOW)

    assert len(updated) == 2
    assert updated[-1].day == date(2024, 3, 5)
    assert resolve_for(updated, "alice", date(2024, 3, 5)) == DailyStatus.LATE
    assert existing[0] in updated


def test_override_rejects_bad_input():
    controller = OverrideController(InMemorySessionRepository())
    with pytest.raises(InvalidDateError):
        controller.apply("alice", "2024-02-30", AttendanceStatus.PRESENT)
    with pytest.raises(ValidationError):
        controller.apply("alice", DAY, "excused")


@pytest.mark.parametrize(
    "current, expected",
    [
        (DailyStatus.UNMARKED, AttendanceStatus.PRESENT),
        (DailyStatus.PRESENT, AttendanceStatus.ABSENT),
        (DailyStatus.ABSENT, AttendanceStatus.LATE),
        (DailyStatus.LATE, AttendanceStatus.PRESENT),
        (AttendanceStatus.LATE, AttendanceStatus.PRESENT),
        ("absent", AttendanceStatus.LATE),
    ],
)
def test_next_status(current, expected):
    assert next_status(current) == expected


def test_toggle_cycle_closes_after_three_steps():
    first = next_status(DailyStatus.UNMARKED)
    seen = [first]
    current = first
    for _ in range(3):
        current = next_status(current)
        seen.append(current)

    assert seen == [AttendanceStatus.PRESENT, AttendanceStatus.ABSENT, AttendanceStatus.LATE, AttendanceStatus.PRESENT]


def test_controller_toggle_walks_the_cycle():
    repo = InMemorySessionRepository()
    controller = OverrideController(repo)

    steps = [controller.toggle("alice", DAY, now=NOW) for _ in range(4)]

    assert steps == [AttendanceStatus.PRESENT, AttendanceStatus.ABSENT, AttendanceStatus.LATE, AttendanceStatus.PRESENT]
    assert len(repo.list_by_date(DAY)) == 1
    assert controller.current_status("alice", DAY) == DailyStatus.PRESENT


def test_toggle_cannot_outrank_a_later_present_scan():
    repo = InMemorySessionRepository([scan("s1", 0), scan("s2", 30, alice=AttendanceStatus.PRESENT)])
    controller = OverrideController(repo)

    written = controller.toggle("alice", DAY, now=NOW)

    assert written == AttendanceStatus.ABSENT
    assert repo.get_by_id("s1").observation_for("alice").status == AttendanceStatus.ABSENT
    assert controller.current_status("alice", DAY) == DailyStatus.PRESENT
