from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timezone, tzinfo
from typing import Optional

import mysql.connector

from ..classes.repository import EnrollmentRepository
from ..core.exceptions import DataUnavailable, SessionNotFound
from ..sessions.model import Session
from ..sessions.repository import SessionRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceEvent, ReportRow, ReportSummary
from .repository import AttendanceRepository
from .summary import SummaryAggregator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttendanceReport:
    session: Session
    report_date: date
    rows: list[ReportRow]
    summary: ReportSummary


class AttendanceReportBuilder:
    """Classify every enrolled student of a session for one calendar date.

    Status is derived on every call and never stored:
    - no check-in that day -> absent
    - check-in at or before the end of the window -> on-time
    - otherwise -> late

    When a student checked in more than once that day, the earliest event wins.
    Rows come back sorted by student name, then id.
    """

    def __init__(
        self,
        sessions: SessionRepository,
        enrollments: EnrollmentRepository,
        attendance: AttendanceRepository,
        *,
        tz: tzinfo = timezone.utc,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
        aggregator: Optional[SummaryAggregator] = None,
    ):
        self._sessions = sessions
        self._enrollments = enrollments
        self._attendance = attendance
        self._tz = tz
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._aggregator = aggregator or SummaryAggregator()

    def _get_session(self, session_id: int) -> Session:
        try:
            session = self._sessions.get_by_id(int(session_id))
        except mysql.connector.Error as e:
            raise DataUnavailable(f"Could not load session: {e}") from e
        if not session:
            raise SessionNotFound(f"Session {session_id} not found")
        return session

    def build(self, session_id: int, report_date: date) -> list[ReportRow]:
        return self._build(self._get_session(session_id), report_date)

    def _build(self, session: Session, report_date: date) -> list[ReportRow]:
        window = session.window(self._tz)
        day_start, day_end = window.day_bounds(report_date)

        try:
            roster = self._enrollments.get_enrolled_students(session.class_id)
            events = self._attendance.list_for_session_between(
                session_id=session.session_id,
                start=day_start,
                end=day_end,
            )
        except mysql.connector.Error as e:
            logger.error("Report data unavailable for session %s on %s: %s", session.session_id, report_date, e)
            raise DataUnavailable(f"Could not load attendance data: {e}") from e

        first_by_student: dict[int, AttendanceEvent] = {}
        for ev in events:
            current = first_by_student.get(ev.student_id)
            if current is None or (ev.checkin_time, ev.attendance_id) < (current.checkin_time, current.attendance_id):
                first_by_student[ev.student_id] = ev

        session_end = window.end_instant_for(report_date)

        rows: list[ReportRow] = []
        for student in roster:
            event = first_by_student.get(student.student_id)
            strategy = self._factory.for_event(event=event, session_end=session_end)
            decision = strategy.classify(event=event, session_end=session_end)
            rows.append(
                ReportRow(
                    student_id=student.student_id,
                    student_name=student.name,
                    student_image_url=student.image_url,
                    status=decision.status,
                    checkin_time=decision.checkin_time,
                    verified_by_face=decision.verified_by_face,
                )
            )

        rows.sort(key=lambda r: (r.student_name.lower(), r.student_id))
        return rows

    def build_report(self, session_id: int, report_date: date) -> AttendanceReport:
        session = self._get_session(session_id)
        rows = self._build(session, report_date)
        return AttendanceReport(
            session=session,
            report_date=report_date,
            rows=rows,
            summary=self._aggregator.summarize(rows),
        )
