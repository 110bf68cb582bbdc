from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import mysql.connector

from ..common.datetime_utils import as_utc, now_utc
from ..core.enums import AttendanceStatus
from ..core.exceptions import RecordingFailed
from .model import AttendanceEvent
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceRecorder:
    """Write exactly one attendance event per successful check-in.

    The caller has already resolved the active session; the window is not
    checked again here. Repeated check-ins are stored as separate events and
    reports keep the earliest one.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def record(
        self,
        *,
        student_id: int,
        session_id: int,
        verified_by_face: bool,
        now: Optional[datetime] = None,
    ) -> AttendanceEvent:
        now = as_utc(now or now_utc())
        try:
            event = self._attendance.insert_event(
                student_id=int(student_id),
                session_id=int(session_id),
                checkin_time=now,
                status=AttendanceStatus.PRESENT,
                verified_by_face=bool(verified_by_face),
            )
        except mysql.connector.Error as e:
            logger.error("Recording attendance failed for student %s session %s: %s", student_id, session_id, e)
            raise RecordingFailed(f"Could not record attendance: {e}") from e

        logger.info(
            "Recorded attendance %s: student=%s session=%s face=%s",
            event.attendance_id,
            student_id,
            session_id,
            event.verified_by_face,
        )
        return event
