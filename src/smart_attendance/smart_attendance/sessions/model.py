from __future__ import annotations

import uuid
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Iterable, Optional

from ..common.validators import require_confidence, require_status
from ..core.enums import AttendanceStatus
from ..core.exceptions import DuplicateObservationError


@dataclass(frozen=True)
class Observation:
    """One member's recorded outcome within one session."""

    observation_id: str
    person_id: str
    status: AttendanceStatus
    confidence: int
    created_at: datetime
    note: Optional[str] = None


@dataclass(frozen=True)
class Session:
    """One attendance-taking event for a single calendar day.

    `created_at` defines the natural order of sessions sharing a day.
    """

    session_id: str
    day: date
    created_at: datetime
    observations: tuple[Observation, ...] = field(default_factory=tuple)
    image_ref: Optional[str] = None

    def observation_for(self, person_id: str) -> Optional[Observation]:
        for obs in self.observations:
            if obs.person_id == person_id:
                return obs
        return None


def new_observation(
    *,
    person_id: str,
    status,
    confidence,
    created_at: datetime,
    note: Optional[str] = None,
) -> Observation:
    """Build a validated observation (unknown status or confidence outside 0..100 is rejected)."""

    return Observation(
        observation_id=str(uuid.uuid4()),
        person_id=str(person_id),
        status=require_status(status),
        confidence=require_confidence(confidence),
        created_at=created_at,
        note=(note or "").strip() or None,
    )


def new_session(
    *,
    day: date,
    observations: Iterable[Observation],
    created_at: datetime,
    image_ref: Optional[str] = None,
) -> Session:
    return Session(
        session_id=str(uuid.uuid4()),
        day=day,
        created_at=created_at,
        observations=tuple(observations),
        image_ref=image_ref or None,
    )


def ensure_unique_people(session: Session) -> None:
    counts = Counter(obs.person_id for obs in session.observations)
    dupes = sorted(pid for pid, n in counts.items() if n > 1)
    if dupes:
        raise DuplicateObservationError(
            f"Session {session.session_id} has more than one observation for: {', '.join(dupes)}"
        )
