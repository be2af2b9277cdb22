from __future__ import annotations

from datetime import date
from typing import Callable, Optional, Protocol, Sequence

from .model import Session

SessionMutator = Callable[[Session], Session]


class SessionRepository(Protocol):
    """Session store interface.

    Sessions are returned in creation order. Writes for the same day must be
    serialized by the caller; the store gives no cross-call locking.
    """

    def list_by_date(self, day: date) -> Sequence[Session]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Session]:
        raise NotImplementedError

    def list_between(self, start: date, end: date) -> Sequence[Session]:
        raise NotImplementedError

    def get_by_id(self, session_id: str) -> Optional[Session]:
        raise NotImplementedError

    def insert(self, session: Session) -> None:
        """Store a new session; rejects duplicate observations per person."""

        raise NotImplementedError

    def update(self, session_id: str, mutator: SessionMutator) -> Session:
        raise NotImplementedError
