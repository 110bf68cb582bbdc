from __future__ import annotations

from typing import Iterable, Optional, Sequence, Set

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import ClassGroup, RosterEntry
from .repository import ClassRepository, EnrollmentRepository


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, class_id: int) -> Optional[ClassGroup]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT class_id, name FROM classes WHERE class_id=%s", (int(class_id),))
            r = fetchone(cur)
            return ClassGroup(class_id=int(r["class_id"]), name=r["name"]) if r else None

    def get_by_name(self, name: str) -> Optional[ClassGroup]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT class_id, name FROM classes WHERE name=%s", (name,))
            r = fetchone(cur)
            return ClassGroup(class_id=int(r["class_id"]), name=r["name"]) if r else None

    def list_all(self) -> Sequence[ClassGroup]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT class_id, name FROM classes ORDER BY name ASC")
            return [ClassGroup(class_id=int(r["class_id"]), name=r["name"]) for r in fetchall(cur)]

    def create(self, *, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO classes(name) VALUES(%s)", (name,))
            return int(cur.lastrowid)

    def delete(self, *, class_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM classes WHERE class_id=%s", (int(class_id),))
            return cur.rowcount > 0


class MySQLEnrollmentRepository(EnrollmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_enrolled_class_ids(self, student_id: int) -> Set[int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT class_id FROM enrollments WHERE student_id=%s", (int(student_id),))
            return {int(r["class_id"]) for r in fetchall(cur)}

    def get_enrolled_students(self, class_id: int) -> Sequence[RosterEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT st.student_id, st.name, st.image_url
                FROM enrollments e
                JOIN students st ON st.student_id = e.student_id
                WHERE e.class_id=%s
                ORDER BY st.name ASC, st.student_id ASC
                """,
                (int(class_id),),
            )
            return [
                RosterEntry(student_id=int(r["student_id"]), name=r["name"], image_url=r.get("image_url"))
                for r in fetchall(cur)
            ]

    def replace_enrollments(self, *, class_id: int, student_ids: Iterable[int]) -> None:
        wanted = {int(s) for s in student_ids}

        # Single unit of work: either the whole diff lands or nothing does.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT student_id FROM enrollments WHERE class_id=%s FOR UPDATE", (int(class_id),))
            current = {int(r["student_id"]) for r in fetchall(cur)}

            to_remove = sorted(current - wanted)
            to_add = sorted(wanted - current)

            if to_remove:
                placeholders = ",".join(["%s"] * len(to_remove))
                cur.execute(
                    f"DELETE FROM enrollments WHERE class_id=%s AND student_id IN ({placeholders})",
                    (int(class_id), *to_remove),
                )
            if to_add:
                cur.executemany(
                    "INSERT INTO enrollments(student_id, class_id) VALUES(%s,%s)",
                    [(s, int(class_id)) for s in to_add],
                )
