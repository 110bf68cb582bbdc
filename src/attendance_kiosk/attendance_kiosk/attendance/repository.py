from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceEvent, AttendanceLogRow


class AttendanceRepository(Protocol):
    def insert_event(
        self,
        *,
        student_id: int,
        session_id: int,
        checkin_time: datetime,
        status: AttendanceStatus,
        verified_by_face: bool,
    ) -> AttendanceEvent:
        raise NotImplementedError

    def list_for_session_between(self, *, session_id: int, start: datetime, end: datetime) -> Sequence[AttendanceEvent]:
        """Events of a session with ``start <= checkin_time < end``."""

        raise NotImplementedError

    def list_recent(self, *, limit: int, session_id: Optional[int] = None) -> Sequence[AttendanceLogRow]:
        raise NotImplementedError
