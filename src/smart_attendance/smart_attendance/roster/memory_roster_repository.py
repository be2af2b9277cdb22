from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

from .model import Person
from .repository import RosterRepository


class InMemoryRosterRepository(RosterRepository):
    def __init__(self, people: Sequence[Person] = ()):
        self._by_id: dict[str, Person] = {p.person_id: p for p in people}

    def list_all(self) -> Sequence[Person]:
        return sorted(self._by_id.values(), key=lambda p: (p.name.casefold(), p.person_id))

    def get_by_id(self, person_id: str) -> Optional[Person]:
        return self._by_id.get(person_id)

    def add(self, person: Person) -> None:
        self._by_id[person.person_id] = person

    def rename(self, person_id: str, *, name: str) -> bool:
        person = self._by_id.get(person_id)
        if not person:
            return False
        self._by_id[person_id] = replace(person, name=name)
        return True

    def delete_by_id(self, person_id: str) -> bool:
        return self._by_id.pop(person_id, None) is not None
