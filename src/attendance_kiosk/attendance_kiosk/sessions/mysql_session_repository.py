from __future__ import annotations

from datetime import date, datetime, time
from typing import Iterable, Optional, Sequence

from ..core.constants import PLACEHOLDER_DATE
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Session
from .repository import SessionRepository
from .time_window import TimeWindow

_SORT_COLUMNS = {
    "day_of_week": "s.day_of_week",
    "name": "s.name",
    "start_time": "s.start_time",
}

_SELECT = """
    SELECT s.session_id, s.class_id, s.name, s.day_of_week, s.start_time, s.end_time,
           s.is_recurring, s.session_date, c.name AS class_name
    FROM sessions s
    LEFT JOIN classes c ON c.class_id = s.class_id
"""


def _row_to_session(r: dict) -> Session:
    window = TimeWindow.from_stored(r["day_of_week"], r["start_time"], r["end_time"])
    return Session(
        session_id=int(r["session_id"]),
        class_id=int(r["class_id"]),
        name=r["name"],
        day_of_week=window.day_of_week,
        start_time=window.start_time,
        end_time=window.end_time,
        is_recurring=bool(r.get("is_recurring", True)),
        session_date=r.get("session_date"),
        class_name=r.get("class_name"),
    )


def _placeholder(t: time) -> datetime:
    return datetime.combine(PLACEHOLDER_DATE, t)


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, session_id: int) -> Optional[Session]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE s.session_id=%s", (int(session_id),))
            r = fetchone(cur)
            return _row_to_session(r) if r else None

    def list_for_classes(self, class_ids: Iterable[int]) -> Sequence[Session]:
        ids = sorted({int(c) for c in class_ids})
        if not ids:
            return []

        placeholders = ",".join(["%s"] * len(ids))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f" WHERE s.class_id IN ({placeholders}) ORDER BY s.session_id ASC",
                tuple(ids),
            )
            return [_row_to_session(r) for r in fetchall(cur)]

    def list_all(
        self,
        *,
        class_id: Optional[int] = None,
        sort_field: str = "day_of_week",
        ascending: bool = True,
    ) -> Sequence[Session]:
        column = _SORT_COLUMNS.get(sort_field, "s.day_of_week")
        direction = "ASC" if ascending else "DESC"

        clauses: list[str] = []
        params: list[object] = []
        if class_id is not None:
            clauses.append("s.class_id=%s")
            params.append(int(class_id))
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT + f"{where} ORDER BY {column} {direction}, s.session_id ASC",
                tuple(params),
            )
            return [_row_to_session(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        class_id: int,
        name: str,
        day_of_week: int,
        start_time: time,
        end_time: time,
        is_recurring: bool,
        session_date: Optional[date] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO sessions(class_id, name, day_of_week, start_time, end_time, is_recurring, session_date)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(class_id),
                    name,
                    int(day_of_week),
                    _placeholder(start_time),
                    _placeholder(end_time),
                    1 if is_recurring else 0,
                    session_date,
                ),
            )
            return int(cur.lastrowid)

    def delete(self, *, session_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sessions WHERE session_id=%s", (int(session_id),))
            return cur.rowcount > 0
