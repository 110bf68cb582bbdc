from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status persisted with every attendance event (attendance occurred)."""

    PRESENT = "present"


class ReportStatus(str, Enum):
    """Derived per-student classification for one session-day."""

    ON_TIME = "on-time"
    LATE = "late"
    ABSENT = "absent"


class CheckInOutcome(str, Enum):
    """States the kiosk moves to after a check-in request."""

    SUCCESS = "success"
    PROMPTING_FACE_SCAN = "prompting_face_scan"
    ERROR_RFID_NOT_FOUND = "error_rfid_not_found"
    ERROR_NO_ACTIVE_SESSION = "error_no_active_session"
    ERROR_FACE_MISMATCH = "error_face_mismatch"
    ERROR_RECORDING_FAILED = "error_recording_failed"

    @property
    def is_error(self) -> bool:
        return self.value.startswith("error_")
