from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence

from ..biometrics.face_match import FaceMatch, match_face
from ..classes.repository import EnrollmentRepository
from ..common.datetime_utils import now_utc
from ..core.constants import DEFAULT_CHECKIN_RESET_SECONDS, DEFAULT_FACE_MATCH_THRESHOLD, DEFAULT_HISTORY_LIMIT
from ..core.enums import CheckInOutcome
from ..core.exceptions import FaceMismatch, NoActiveSession, RecordingFailed, RfidNotFound, ValidationError
from ..sessions.matcher import SessionMatcher
from ..sessions.model import Session
from ..students.model import Student
from ..students.repository import StudentRepository
from .model import AttendanceEvent, AttendanceLogRow
from .recorder import AttendanceRecorder
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)

_MESSAGES = {
    CheckInOutcome.SUCCESS: "Check-in successful.",
    CheckInOutcome.PROMPTING_FACE_SCAN: "Please look at the camera to verify your identity.",
    CheckInOutcome.ERROR_RFID_NOT_FOUND: "RFID card not recognized.",
    CheckInOutcome.ERROR_NO_ACTIVE_SESSION: "No active session for you right now.",
    CheckInOutcome.ERROR_FACE_MISMATCH: "Face does not match our records.",
    CheckInOutcome.ERROR_RECORDING_FAILED: "Could not record attendance. Please try again.",
}


@dataclass(frozen=True)
class CheckInResult:
    outcome: CheckInOutcome
    message: str
    student: Optional[Student] = None
    session: Optional[Session] = None
    event: Optional[AttendanceEvent] = None
    distance: Optional[float] = None
    reset_after_seconds: int = 0

    @property
    def success(self) -> bool:
        return self.outcome == CheckInOutcome.SUCCESS

    def to_dict(self) -> dict:
        data: dict = {
            "success": self.success,
            "status": self.outcome.value,
            "message": self.message,
            "reset_after_seconds": self.reset_after_seconds,
        }
        if self.student:
            data["student"] = {
                "id": self.student.student_id,
                "name": self.student.name,
                "image_url": self.student.image_url,
            }
        if self.session:
            data["session"] = {"id": self.session.session_id, "name": self.session.name}
        if self.event:
            data["checkin_time"] = self.event.checkin_time.isoformat()
            data["verified_by_face"] = self.event.verified_by_face
        if self.distance is not None:
            data["distance"] = round(self.distance, 4)
        return data


class CheckInService:
    """Kiosk check-in flow: RFID tap, active session lookup, optional face check.

    Each call is stateless; the face step resolves the student and the
    session again from the RFID instead of trusting client-held state.
    """

    def __init__(
        self,
        students: StudentRepository,
        enrollments: EnrollmentRepository,
        matcher: SessionMatcher,
        recorder: AttendanceRecorder,
        *,
        face_threshold: float = DEFAULT_FACE_MATCH_THRESHOLD,
        reset_after_seconds: int = DEFAULT_CHECKIN_RESET_SECONDS,
    ):
        self._students = students
        self._enrollments = enrollments
        self._matcher = matcher
        self._recorder = recorder
        self._face_threshold = float(face_threshold)
        self._reset_after_seconds = int(reset_after_seconds)

    def _result(self, outcome: CheckInOutcome, *, message: Optional[str] = None, **kwargs) -> CheckInResult:
        return CheckInResult(
            outcome=outcome,
            message=message or _MESSAGES[outcome],
            reset_after_seconds=self._reset_after_seconds if outcome.is_error else 0,
            **kwargs,
        )

    def _resolve(self, rfid_uid: str, now: datetime) -> tuple[Student, Session]:
        rfid_uid = (rfid_uid or "").strip()
        if not rfid_uid:
            raise ValidationError("RFID is required")

        student = self._students.get_by_rfid(rfid_uid)
        if not student:
            raise RfidNotFound(rfid_uid)

        class_ids = self._enrollments.get_enrolled_class_ids(student.student_id)
        session = self._matcher.find_active_session(class_ids, now)
        if not session:
            raise NoActiveSession(student.name)
        return student, session

    def _record(self, student: Student, session: Session, *, verified_by_face: bool, now: datetime, distance=None) -> CheckInResult:
        try:
            event = self._recorder.record(
                student_id=student.student_id,
                session_id=session.session_id,
                verified_by_face=verified_by_face,
                now=now,
            )
        except RecordingFailed as e:
            return self._result(CheckInOutcome.ERROR_RECORDING_FAILED, message=str(e), student=student, session=session)

        return self._result(
            CheckInOutcome.SUCCESS,
            message=f"Welcome, {student.name}! Checked in to {session.name}.",
            student=student,
            session=session,
            event=event,
            distance=distance,
        )

    def scan_rfid(self, rfid_uid: str, *, now: Optional[datetime] = None) -> CheckInResult:
        now = now or now_utc()
        try:
            student, session = self._resolve(rfid_uid, now)
        except RfidNotFound:
            logger.info("RFID not found: %s", rfid_uid)
            return self._result(CheckInOutcome.ERROR_RFID_NOT_FOUND)
        except NoActiveSession:
            logger.info("No active session for RFID %s at %s", rfid_uid, now.isoformat())
            return self._result(CheckInOutcome.ERROR_NO_ACTIVE_SESSION)

        if not student.has_face_embedding:
            logger.info("Student %s has no face embedding; checking in with RFID only", student.student_id)
            return self._record(student, session, verified_by_face=False, now=now)

        return self._result(CheckInOutcome.PROMPTING_FACE_SCAN, student=student, session=session)

    def verify_face(self, rfid_uid: str, descriptor: Sequence[float], *, now: Optional[datetime] = None) -> CheckInResult:
        now = now or now_utc()
        try:
            student, session = self._resolve(rfid_uid, now)
        except RfidNotFound:
            return self._result(CheckInOutcome.ERROR_RFID_NOT_FOUND)
        except NoActiveSession:
            return self._result(CheckInOutcome.ERROR_NO_ACTIVE_SESSION)

        if not student.has_face_embedding:
            return self._record(student, session, verified_by_face=False, now=now)

        try:
            decision = self._check_face(student, descriptor)
        except FaceMismatch as e:
            return self._result(CheckInOutcome.ERROR_FACE_MISMATCH, student=student, session=session, distance=e.distance)

        return self._record(student, session, verified_by_face=True, now=now, distance=decision.distance)

    def _check_face(self, student: Student, descriptor: Sequence[float]) -> FaceMatch:
        decision = match_face(descriptor, student.face_embedding, threshold=self._face_threshold)
        logger.info("Face match for student %s: distance=%.4f match=%s", student.student_id, decision.distance, decision.is_match)
        if not decision.is_match:
            raise FaceMismatch(f"Face mismatch for {student.name}", distance=decision.distance)
        return decision


class AttendanceLogService:
    """Use case: browse recorded check-ins (admin)."""

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def list_recent(self, *, limit: int = DEFAULT_HISTORY_LIMIT, session_id: Optional[int] = None) -> Sequence[AttendanceLogRow]:
        limit = max(1, min(int(limit), 500))
        return self._attendance.list_recent(limit=limit, session_id=session_id)
