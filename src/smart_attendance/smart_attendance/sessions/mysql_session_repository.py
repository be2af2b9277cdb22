from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Observation, Session, ensure_unique_people
from .repository import SessionMutator, SessionRepository

_SESSION_COLUMNS = "session_id, day, created_at, image_ref"


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_observation(row: dict) -> Observation:
        return Observation(
            observation_id=row["observation_id"],
            person_id=str(row["person_id"]),
            status=AttendanceStatus(row["status"]),
            confidence=int(row["confidence"]),
            created_at=row["created_at"],
            note=row.get("note"),
        )

    def _load(self, cur, session_rows: list[dict]) -> list[Session]:
        if not session_rows:
            return []
        ids = [r["session_id"] for r in session_rows]
        placeholders = ",".join(["%s"] * len(ids))
        cur.execute(
            f"""
            SELECT observation_id, session_id, person_id, status, confidence, created_at, note
            FROM observations
            WHERE session_id IN ({placeholders})
            ORDER BY session_id, position
            """,
            tuple(ids),
        )
        by_session: dict[str, list[Observation]] = {sid: [] for sid in ids}
        for r in fetchall(cur):
            by_session[r["session_id"]].append(self._to_observation(r))

        return [
            Session(
                session_id=r["session_id"],
                day=r["day"],
                created_at=r["created_at"],
                observations=tuple(by_session[r["session_id"]]),
                image_ref=r.get("image_ref"),
            )
            for r in session_rows
        ]

    def _select(self, where: str = "", params: tuple = ()) -> list[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_SESSION_COLUMNS} FROM sessions {where} ORDER BY created_at, session_id",
                params,
            )
            return self._load(cur, fetchall(cur))

    def list_by_date(self, day: date) -> Sequence[Session]:
        return self._select("WHERE day=%s", (day,))

    def list_all(self) -> Sequence[Session]:
        return self._select()

    def list_between(self, start: date, end: date) -> Sequence[Session]:
        return self._select("WHERE day BETWEEN %s AND %s", (start, end))

    def get_by_id(self, session_id: str) -> Optional[Session]:
        found = self._select("WHERE session_id=%s", (session_id,))
        return found[0] if found else None

    @staticmethod
    def _write_observations(cur, session: Session) -> None:
        for position, obs in enumerate(session.observations):
            cur.execute(
                """
                INSERT INTO observations(observation_id, session_id, position, person_id, status, confidence, created_at, note)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    obs.observation_id,
                    session.session_id,
                    position,
                    obs.person_id,
                    obs.status.value,
                    obs.confidence,
                    obs.created_at,
                    obs.note,
                ),
            )

    def insert(self, session: Session) -> None:
        ensure_unique_people(session)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO sessions(session_id, day, created_at, image_ref) VALUES(%s,%s,%s,%s)",
                (session.session_id, session.day, session.created_at, session.image_ref),
            )
            self._write_observations(cur, session)

    def update(self, session_id: str, mutator: SessionMutator) -> Session:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_SESSION_COLUMNS} FROM sessions WHERE session_id=%s FOR UPDATE",
                (session_id,),
            )
            row = fetchone(cur)
            if not row:
                raise NotFoundError(f"Session {session_id} does not exist")
            current = self._load(cur, [row])[0]

            updated = mutator(current)
            if updated.session_id != session_id or updated.day != current.day:
                raise ValidationError("A session update must keep its id and day")
            ensure_unique_people(updated)

            cur.execute("UPDATE sessions SET image_ref=%s WHERE session_id=%s", (updated.image_ref, session_id))
            cur.execute("DELETE FROM observations WHERE session_id=%s", (session_id,))
            self._write_observations(cur, updated)
            return updated
