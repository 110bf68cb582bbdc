from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.recorder import AttendanceRecorder
from .attendance.report import AttendanceReportBuilder
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceLogService, CheckInService
from .attendance.summary import SummaryAggregator
from .classes.mysql_class_repository import MySQLClassRepository, MySQLEnrollmentRepository
from .classes.repository import ClassRepository, EnrollmentRepository
from .classes.service import ClassService
from .common.datetime_utils import get_timezone
from .core.constants import (
    DEFAULT_CHECKIN_RESET_SECONDS,
    DEFAULT_FACE_DESCRIPTOR_LENGTH,
    DEFAULT_FACE_MATCH_THRESHOLD,
    DEFAULT_SCHEDULE_TIMEZONE,
)
from .database.connection import DBConfig, DatabaseConnection
from .sessions.matcher import SessionMatcher
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.service import SessionService
from .students.mysql_student_repository import MySQLStudentRepository
from .students.repository import StudentRepository
from .students.service import StudentService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KioskRepositories:
    """Repositories bound to the low-privilege store handle (kiosk endpoints)."""

    students: StudentRepository
    enrollments: EnrollmentRepository
    sessions: SessionRepository
    attendance: AttendanceRepository


@dataclass(frozen=True)
class AdminRepositories:
    """Repositories bound to the elevated store handle (admin endpoints only)."""

    students: StudentRepository
    classes: ClassRepository
    enrollments: EnrollmentRepository
    sessions: SessionRepository
    attendance: AttendanceRepository


@dataclass(frozen=True)
class Container:
    schedule_tz: tzinfo

    check_in_service: CheckInService

    student_service: StudentService
    class_service: ClassService
    session_service: SessionService
    report_builder: AttendanceReportBuilder
    attendance_log_service: AttendanceLogService

    kiosk_conn: Optional[DatabaseConnection] = None
    admin_conn: Optional[DatabaseConnection] = None


def assemble_container(
    *,
    kiosk: KioskRepositories,
    admin: AdminRepositories,
    schedule_timezone: str = DEFAULT_SCHEDULE_TIMEZONE,
    face_threshold: float = DEFAULT_FACE_MATCH_THRESHOLD,
    descriptor_length: int = DEFAULT_FACE_DESCRIPTOR_LENGTH,
    reset_after_seconds: int = DEFAULT_CHECKIN_RESET_SECONDS,
    kiosk_conn: Optional[DatabaseConnection] = None,
    admin_conn: Optional[DatabaseConnection] = None,
) -> Container:
    tz = get_timezone(schedule_timezone)

    check_in_service = CheckInService(
        kiosk.students,
        kiosk.enrollments,
        SessionMatcher(kiosk.sessions, tz=tz),
        AttendanceRecorder(kiosk.attendance),
        face_threshold=face_threshold,
        reset_after_seconds=reset_after_seconds,
    )

    report_builder = AttendanceReportBuilder(
        admin.sessions,
        admin.enrollments,
        admin.attendance,
        tz=tz,
        strategy_factory=AttendanceStrategyFactory(),
        aggregator=SummaryAggregator(),
    )

    return Container(
        schedule_tz=tz,
        check_in_service=check_in_service,
        student_service=StudentService(admin.students, descriptor_length=descriptor_length),
        class_service=ClassService(admin.classes, admin.enrollments),
        session_service=SessionService(admin.sessions, admin.classes),
        report_builder=report_builder,
        attendance_log_service=AttendanceLogService(admin.attendance),
        kiosk_conn=kiosk_conn,
        admin_conn=admin_conn,
    )


def build_container(
    *,
    db_config: dict,
    admin_db_config: Optional[dict] = None,
    schedule_timezone: str = DEFAULT_SCHEDULE_TIMEZONE,
    face_threshold: float = DEFAULT_FACE_MATCH_THRESHOLD,
    descriptor_length: int = DEFAULT_FACE_DESCRIPTOR_LENGTH,
    reset_after_seconds: int = DEFAULT_CHECKIN_RESET_SECONDS,
) -> Container:
    if not admin_db_config:
        logger.warning("ADMIN_DB_CONFIG not set; admin endpoints share the kiosk credentials")
        admin_db_config = db_config

    kiosk_conn = DatabaseConnection(DBConfig.from_dict(db_config), name="kiosk")
    admin_conn = DatabaseConnection(DBConfig.from_dict(admin_db_config), name="admin")

    kiosk = KioskRepositories(
        students=MySQLStudentRepository(kiosk_conn),
        enrollments=MySQLEnrollmentRepository(kiosk_conn),
        sessions=MySQLSessionRepository(kiosk_conn),
        attendance=MySQLAttendanceRepository(kiosk_conn),
    )
    admin = AdminRepositories(
        students=MySQLStudentRepository(admin_conn),
        classes=MySQLClassRepository(admin_conn),
        enrollments=MySQLEnrollmentRepository(admin_conn),
        sessions=MySQLSessionRepository(admin_conn),
        attendance=MySQLAttendanceRepository(admin_conn),
    )

    return assemble_container(
        kiosk=kiosk,
        admin=admin,
        schedule_timezone=schedule_timezone,
        face_threshold=face_threshold,
        descriptor_length=descriptor_length,
        reset_after_seconds=reset_after_seconds,
        kiosk_conn=kiosk_conn,
        admin_conn=admin_conn,
    )
