from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.exceptions import NotFoundError, ValidationError
from .model import Session, ensure_unique_people
from .repository import SessionMutator, SessionRepository


class InMemorySessionRepository(SessionRepository):
    """Keeps sessions in insertion order, which is their creation order."""

    def __init__(self, sessions: Sequence[Session] = ()):
        self._sessions: list[Session] = []
        for s in sessions:
            self.insert(s)

    def list_by_date(self, day: date) -> Sequence[Session]:
        return [s for s in self._sessions if s.day == day]

    def list_all(self) -> Sequence[Session]:
        return list(self._sessions)

    def list_between(self, start: date, end: date) -> Sequence[Session]:
        return [s for s in self._sessions if start <= s.day <= end]

    def get_by_id(self, session_id: str) -> Optional[Session]:
        for s in self._sessions:
            if s.session_id == session_id:
                return s
        return None

    def insert(self, session: Session) -> None:
        if self.get_by_id(session.session_id):
            raise ValidationError(f"Session {session.session_id} already exists")
        ensure_unique_people(session)
        self._sessions.append(session)

    def update(self, session_id: str, mutator: SessionMutator) -> Session:
        for idx, current in enumerate(self._sessions):
            if current.session_id != session_id:
                continue
            updated = mutator(current)
            if updated.session_id != session_id or updated.day != current.day:
                raise ValidationError("A session update must keep its id and day")
            ensure_unique_people(updated)
            self._sessions[idx] = updated
            return updated
        raise NotFoundError(f"Session {session_id} does not exist")
