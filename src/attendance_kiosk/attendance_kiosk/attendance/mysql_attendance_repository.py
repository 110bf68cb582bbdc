from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import as_utc, to_db_utc
from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import AttendanceEvent, AttendanceLogRow
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_event(
        self,
        *,
        student_id: int,
        session_id: int,
        checkin_time: datetime,
        status: AttendanceStatus,
        verified_by_face: bool,
    ) -> AttendanceEvent:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(student_id, session_id, checkin_time, status, verified_by_face)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(student_id), int(session_id), to_db_utc(checkin_time), status.value, 1 if verified_by_face else 0),
            )
            return AttendanceEvent(
                attendance_id=int(cur.lastrowid),
                student_id=int(student_id),
                session_id=int(session_id),
                checkin_time=as_utc(checkin_time),
                status=status,
                verified_by_face=bool(verified_by_face),
            )

    def list_for_session_between(self, *, session_id: int, start: datetime, end: datetime) -> Sequence[AttendanceEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, student_id, session_id, checkin_time, status, verified_by_face
                FROM attendance
                WHERE session_id=%s AND checkin_time >= %s AND checkin_time < %s
                ORDER BY checkin_time ASC, attendance_id ASC
                """,
                (int(session_id), to_db_utc(start), to_db_utc(end)),
            )
            return [
                AttendanceEvent(
                    attendance_id=int(r["attendance_id"]),
                    student_id=int(r["student_id"]),
                    session_id=int(r["session_id"]),
                    checkin_time=as_utc(r["checkin_time"]),
                    status=AttendanceStatus(r["status"]),
                    verified_by_face=bool(r["verified_by_face"]),
                )
                for r in fetchall(cur)
            ]

    def list_recent(self, *, limit: int, session_id: Optional[int] = None) -> Sequence[AttendanceLogRow]:
        where = "WHERE a.session_id=%s" if session_id is not None else ""
        params: list[object] = [int(session_id)] if session_id is not None else []
        params.append(int(limit))

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    a.attendance_id, a.checkin_time, a.status, a.verified_by_face,
                    a.student_id, st.name AS student_name, st.image_url AS student_image_url,
                    a.session_id, s.name AS session_name
                FROM attendance a
                LEFT JOIN students st ON st.student_id = a.student_id
                LEFT JOIN sessions s ON s.session_id = a.session_id
                {where}
                ORDER BY a.checkin_time DESC, a.attendance_id DESC
                LIMIT %s
                """,
                tuple(params),
            )
            return [
                AttendanceLogRow(
                    attendance_id=int(r["attendance_id"]),
                    checkin_time=as_utc(r["checkin_time"]),
                    status=AttendanceStatus(r["status"]),
                    verified_by_face=bool(r["verified_by_face"]),
                    student_id=int(r["student_id"]),
                    student_name=r.get("student_name"),
                    student_image_url=r.get("student_image_url"),
                    session_id=int(r["session_id"]),
                    session_name=r.get("session_name"),
                )
                for r in fetchall(cur)
            ]
