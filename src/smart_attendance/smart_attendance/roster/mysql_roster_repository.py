from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Person
from .repository import RosterRepository


class MySQLRosterRepository(RosterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_person(row: dict) -> Person:
        return Person(
            person_id=str(row["person_id"]),
            name=row["name"],
            created_at=row["created_at"],
            photo_ref=row.get("photo_ref"),
        )

    def list_all(self) -> Sequence[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT person_id, name, created_at, photo_ref
                FROM people
                ORDER BY name, person_id
                """
            )
            return [self._to_person(r) for r in fetchall(cur)]

    def get_by_id(self, person_id: str) -> Optional[Person]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT person_id, name, created_at, photo_ref
                FROM people
                WHERE person_id=%s
                """,
                (person_id,),
            )
            row = fetchone(cur)
            return self._to_person(row) if row else None

    def add(self, person: Person) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO people(person_id, name, created_at, photo_ref)
                VALUES(%s,%s,%s,%s)
                """,
                (person.person_id, person.name, person.created_at, person.photo_ref),
            )

    def rename(self, person_id: str, *, name: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE people SET name=%s WHERE person_id=%s", (name, person_id))
            return cur.rowcount > 0

    def delete_by_id(self, person_id: str) -> bool:
        # observations reference person ids without a foreign key, history survives
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM people WHERE person_id=%s", (person_id,))
            return cur.rowcount > 0
