from __future__ import annotations

from datetime import datetime
from typing import Iterable, Mapping, Optional, Protocol, Sequence

from ..common.validators import require_confidence, require_status
from ..core.enums import AttendanceStatus
from ..roster.model import Person
from ..sessions.model import Observation, new_observation
from .model import Proposal


class Recognizer(Protocol):
    """Recognition collaborator: proposes who appears in a captured image.

    The engine never calls it; callers run it and hand the proposals over.
    """

    def propose_attendance(self, image_ref: str, roster: Sequence[Person]) -> Sequence[Proposal]:
        raise NotImplementedError


def build_scan_observations(
    roster: Iterable[Person],
    proposals: Iterable[Proposal],
    *,
    now: datetime,
    adjustments: Optional[Mapping[str, AttendanceStatus | str]] = None,
) -> list[Observation]:
    """One observation per roster member, in roster order.

    A member proposed present keeps the proposal's confidence; a member
    proposed absent, or missing from the proposals, is absent at confidence 0.
    `adjustments` are the operator's corrections made while reviewing the scan
    and only change the status.
    """
    by_person: dict[str, Proposal] = {}
    for p in proposals:
        require_confidence(p.confidence)
        by_person.setdefault(p.person_id, p)

    adjustments = adjustments or {}
    out: list[Observation] = []
    for person in roster:
        proposal = by_person.get(person.person_id)
        if proposal and proposal.present:
            status, confidence = AttendanceStatus.PRESENT, require_confidence(proposal.confidence)
        else:
            status, confidence = AttendanceStatus.ABSENT, 0

        if person.person_id in adjustments:
            status = require_status(adjustments[person.person_id])

        out.append(
            new_observation(
                person_id=person.person_id,
                status=status,
                confidence=confidence,
                created_at=now,
            )
        )
    return out
