"""Consolidate every observation of a member on one day into a single status.

Precedence is a total order, `present > late > absent > unmarked`, so the
result does not depend on how many sessions were taken that day or in which
order their observations are scanned.
"""
from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Callable, Iterable, Sequence

from ..core.enums import AttendanceStatus, DailyStatus
from ..core.exceptions import ValidationError
from ..sessions.model import Observation, Session

ObservationLookup = Callable[[str, date], Sequence[Observation]]


def resolve(observations: Iterable[Observation]) -> DailyStatus:
    best = DailyStatus.UNMARKED
    for obs in observations:
        status = obs.status
        if status == AttendanceStatus.PRESENT:
            return DailyStatus.PRESENT
        if status == AttendanceStatus.LATE:
            best = DailyStatus.LATE
        elif status == AttendanceStatus.ABSENT:
            if best == DailyStatus.UNMARKED:
                best = DailyStatus.ABSENT
        else:
            raise ValidationError(f"Unknown status {status!r} on observation {obs.observation_id}")
    return best


class ObservationIndex:
    """Observations grouped by (person id, day) across a collection of sessions.

    Callable as an `ObservationLookup`. Building it twice from the same
    sessions in a different order yields the same resolved statuses.
    """

    def __init__(self, sessions: Iterable[Session]):
        self._by_key: dict[tuple[str, date], list[Observation]] = defaultdict(list)
        for session in sessions:
            for obs in session.observations:
                self._by_key[(obs.person_id, session.day)].append(obs)

    def __call__(self, person_id: str, day: date) -> Sequence[Observation]:
        return self._by_key.get((person_id, day), ())

    def person_ids(self) -> set[str]:
        return {pid for pid, _ in self._by_key}


def resolve_for(sessions: Iterable[Session], person_id: str, day: date) -> DailyStatus:
    return resolve(
        obs
        for s in sessions
        if s.day == day
        for obs in s.observations
        if obs.person_id == person_id
    )
