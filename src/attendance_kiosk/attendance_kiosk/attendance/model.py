from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus, ReportStatus


@dataclass(frozen=True)
class AttendanceEvent:
    """Domain entity: one recorded check-in. Never updated after insert."""

    attendance_id: int
    student_id: int
    session_id: int
    checkin_time: datetime
    status: AttendanceStatus = AttendanceStatus.PRESENT
    verified_by_face: bool = False


@dataclass(frozen=True)
class ReportRow:
    """Derived (not persisted) status of one enrolled student for a session-day."""

    student_id: int
    student_name: str
    student_image_url: Optional[str]
    status: ReportStatus
    checkin_time: Optional[datetime]
    verified_by_face: bool

    def to_dict(self) -> dict:
        return {
            "student_id": self.student_id,
            "student_name": self.student_name,
            "student_image_url": self.student_image_url,
            "status": self.status.value,
            "checkin_time": self.checkin_time.isoformat() if self.checkin_time else None,
            "verified_by_face": self.verified_by_face,
        }


@dataclass(frozen=True)
class ReportSummary:
    total: int
    on_time_count: int
    late_count: int
    absent_count: int
    on_time_percent: float
    late_percent: float
    absent_percent: float


@dataclass(frozen=True)
class AttendanceLogRow:
    """Read-model for the admin attendance list (joined with student/session)."""

    attendance_id: int
    checkin_time: datetime
    status: AttendanceStatus
    verified_by_face: bool
    student_id: int
    student_name: Optional[str]
    student_image_url: Optional[str]
    session_id: int
    session_name: Optional[str]
