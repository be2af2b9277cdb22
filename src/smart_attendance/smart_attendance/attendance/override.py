"""Manual corrections of a member's status on a day.

An override either amends one existing session of the day (chosen by an
`OverrideTargetStrategy`, the earliest by default) or creates a manual session
without an image. Overrides always carry full confidence, so applying the same
override twice leaves a single observation for the member.

The store gives no locking: concurrent overrides for the same day must be
serialized by the caller.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import coerce_date, now_local
from ..common.validators import require_status
from ..core.constants import MANUAL_CONFIDENCE
from ..core.enums import AttendanceStatus, DailyStatus
from ..sessions.model import Session, new_observation, new_session
from ..sessions.repository import SessionRepository
from .resolver import resolve
from .strategies.base import OverrideTargetStrategy
from .strategies.first_session_strategy import FirstSessionStrategy

logger = logging.getLogger(__name__)

_TOGGLE_CYCLE = {
    DailyStatus.UNMARKED: AttendanceStatus.PRESENT,
    DailyStatus.PRESENT: AttendanceStatus.ABSENT,
    DailyStatus.ABSENT: AttendanceStatus.LATE,
    DailyStatus.LATE: AttendanceStatus.PRESENT,
}


def next_status(current: DailyStatus | AttendanceStatus | str) -> AttendanceStatus:
    """Grid editing cycle: present -> absent -> late -> present; unmarked -> present."""
    return _TOGGLE_CYCLE[DailyStatus(getattr(current, "value", current))]


def amend_session(session: Session, person_id: str, status: AttendanceStatus, *, now: datetime) -> Session:
    if session.observation_for(person_id) is None:
        obs = new_observation(person_id=person_id, status=status, confidence=MANUAL_CONFIDENCE, created_at=now)
        return replace(session, observations=session.observations + (obs,))

    return replace(
        session,
        observations=tuple(
            replace(o, status=status, confidence=MANUAL_CONFIDENCE, created_at=now) if o.person_id == person_id else o
            for o in session.observations
        ),
    )


def manual_session(day: date, person_id: str, status: AttendanceStatus, *, now: datetime) -> Session:
    obs = new_observation(person_id=person_id, status=status, confidence=MANUAL_CONFIDENCE, created_at=now)
    return new_session(day=day, observations=[obs], created_at=now)


def _in_creation_order(sessions: Iterable[Session]) -> list[Session]:
    return sorted(sessions, key=lambda s: s.created_at)


def apply_override(
    sessions: Sequence[Session],
    person_id: str,
    day: date | str,
    new_status: AttendanceStatus | str,
    *,
    now: datetime | None = None,
    strategy: Optional[OverrideTargetStrategy] = None,
) -> list[Session]:
    """Pure form: return the session collection with the override applied."""
    day = coerce_date(day)
    status = require_status(new_status)
    now = now or now_local()
    strategy = strategy or FirstSessionStrategy()

    target = strategy.choose(_in_creation_order(s for s in sessions if s.day == day))
    if target is None:
        return list(sessions) + [manual_session(day, person_id, status, now=now)]

    return [
        amend_session(s, person_id, status, now=now) if s.session_id == target.session_id else s
        for s in sessions
    ]


class OverrideController:
    """The only write path the engine uses against the session store."""

    def __init__(self, sessions: SessionRepository, *, strategy: Optional[OverrideTargetStrategy] = None):
        self._sessions = sessions
        self._strategy = strategy or FirstSessionStrategy()

    def apply(
        self,
        person_id: str,
        day: date | str,
        new_status: AttendanceStatus | str,
        *,
        now: datetime | None = None,
    ) -> Session:
        day = coerce_date(day)
        status = require_status(new_status)
        now = now or now_local()

        target = self._strategy.choose(_in_creation_order(self._sessions.list_by_date(day)))
        if target is None:
            session = manual_session(day, person_id, status, now=now)
            self._sessions.insert(session)
            logger.info("Override %s on %s -> %s (new manual session %s)", person_id, day, status.value, session.session_id)
            return session

        updated = self._sessions.update(
            target.session_id,
            lambda s: amend_session(s, person_id, status, now=now),
        )
        logger.info("Override %s on %s -> %s (session %s)", person_id, day, status.value, target.session_id)
        return updated

    def current_status(self, person_id: str, day: date | str) -> DailyStatus:
        day = coerce_date(day)
        return resolve(
            obs
            for s in self._sessions.list_by_date(day)
            for obs in s.observations
            if obs.person_id == person_id
        )

    def toggle(self, person_id: str, day: date | str, *, now: datetime | None = None) -> AttendanceStatus:
        """Advance the member's resolved status one step in the grid cycle and store it.

        Returns the status written to the target session. Another session of
        the same day with a stronger status still wins the resolution, so the
        written status can differ from `current_status` afterwards.
        """
        day = coerce_date(day)
        status = next_status(self.current_status(person_id, day))
        self.apply(person_id, day, status, now=now)
        return status
