from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import REMOVED_MEMBER_LABEL
from ..core.exceptions import NotFoundError
from .model import Person
from .repository import RosterRepository

logger = logging.getLogger(__name__)


class RosterService:
    def __init__(self, roster: RosterRepository):
        self._roster = roster

    def list_people(self) -> Sequence[Person]:
        return self._roster.list_all()

    def get(self, person_id: str) -> Person:
        person = self._roster.get_by_id(person_id)
        if not person:
            raise NotFoundError(f"Member {person_id!r} does not exist")
        return person

    def register(self, name: str, *, photo_ref: Optional[str] = None, now: datetime | None = None) -> Person:
        person = Person(
            person_id=str(uuid.uuid4()),
            name=require_non_empty(name, "Name"),
            created_at=now or now_local(),
            photo_ref=photo_ref or None,
        )
        self._roster.add(person)
        logger.info("Registered member %s (%s)", person.person_id, person.name)
        return person

    def rename(self, person_id: str, name: str) -> None:
        if not self._roster.rename(person_id, name=require_non_empty(name, "Name")):
            raise NotFoundError(f"Member {person_id!r} does not exist")

    def delete(self, person_id: str) -> None:
        if not self._roster.delete_by_id(person_id):
            raise NotFoundError(f"Member {person_id!r} does not exist")
        logger.info("Removed member %s; recorded observations are kept", person_id)


class NameLookup:
    """Resolve member names for reports, tolerating members that were deleted."""

    def __init__(self, people: Iterable[Person], *, placeholder: str = REMOVED_MEMBER_LABEL):
        self._names = {p.person_id: p.name for p in people}
        self._placeholder = placeholder

    def __contains__(self, person_id: str) -> bool:
        return person_id in self._names

    def name_for(self, person_id: str) -> str:
        return self._names.get(person_id, self._placeholder)
