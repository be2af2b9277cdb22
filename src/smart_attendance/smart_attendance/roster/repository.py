from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Person


class RosterRepository(Protocol):
    """Roster store interface.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def list_all(self) -> Sequence[Person]:
        """All members ordered by name."""

        raise NotImplementedError

    def get_by_id(self, person_id: str) -> Optional[Person]:
        raise NotImplementedError

    def add(self, person: Person) -> None:
        raise NotImplementedError

    def rename(self, person_id: str, *, name: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, person_id: str) -> bool:
        raise NotImplementedError
