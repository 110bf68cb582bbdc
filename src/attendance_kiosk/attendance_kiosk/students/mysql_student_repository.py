from __future__ import annotations

import json
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository

_SORT_COLUMNS = {
    "created_at": "st.created_at",
    "name": "st.name",
}

_COLUMNS = "st.student_id, st.name, st.rfid_uid, st.face_embedding, st.image_url, st.created_at"


def _load_embedding(value) -> Optional[tuple[float, ...]]:
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value)
    if not value:
        return None
    return tuple(float(v) for v in value)


def _row_to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        name=r["name"],
        rfid_uid=r.get("rfid_uid"),
        face_embedding=_load_embedding(r.get("face_embedding")),
        image_url=r.get("image_url"),
        created_at=r.get("created_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students st WHERE st.student_id=%s", (int(student_id),))
            r = fetchone(cur)
            return _row_to_student(r) if r else None

    def get_by_rfid(self, rfid_uid: str) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students st WHERE st.rfid_uid=%s", (rfid_uid,))
            r = fetchone(cur)
            return _row_to_student(r) if r else None

    def list_filtered(
        self,
        *,
        q: Optional[str] = None,
        class_id: Optional[int] = None,
        sort_field: str = "created_at",
        ascending: bool = False,
    ) -> Sequence[Student]:
        clauses: list[str] = []
        params: list[object] = []
        join = ""

        if q:
            clauses.append("LOWER(st.name) LIKE %s")
            params.append(f"%{q.lower()}%")
        if class_id is not None:
            join = "JOIN enrollments e ON e.student_id = st.student_id"
            clauses.append("e.class_id=%s")
            params.append(int(class_id))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        column = _SORT_COLUMNS.get(sort_field, "st.created_at")
        direction = "ASC" if ascending else "DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM students st
                {join}
                {where}
                ORDER BY {column} {direction}, st.student_id ASC
                """,
                tuple(params),
            )
            return [_row_to_student(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        name: str,
        rfid_uid: Optional[str],
        face_embedding: Optional[Sequence[float]],
        image_url: Optional[str],
    ) -> int:
        embedding_json = json.dumps([float(v) for v in face_embedding]) if face_embedding else None
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(name, rfid_uid, face_embedding, image_url)
                VALUES(%s,%s,%s,%s)
                """,
                (name, rfid_uid, embedding_json, image_url),
            )
            return int(cur.lastrowid)

    def update(self, *, student_id: int, rfid_uid: Optional[str], image_url: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE students SET rfid_uid=%s, image_url=%s WHERE student_id=%s",
                (rfid_uid, image_url, int(student_id)),
            )
            return cur.rowcount > 0

    def delete(self, *, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE student_id=%s", (int(student_id),))
            return cur.rowcount > 0
