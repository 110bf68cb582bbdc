from datetime import timedelta, timezone

import mysql.connector
import pytest

from src.attendance_kiosk.attendance_kiosk.attendance.report import AttendanceReportBuilder
from src.attendance_kiosk.attendance_kiosk.core.enums import AttendanceStatus, ReportStatus
from src.attendance_kiosk.attendance_kiosk.core.exceptions import DataUnavailable, SessionNotFound
from tests.fakes import MONDAY, at


def checkin(store, student_id, session_id, when, verified_by_face=False):
    store.attendance.insert_event(
        student_id=student_id,
        session_id=session_id,
        checkin_time=when,
        status=AttendanceStatus.PRESENT,
        verified_by_face=verified_by_face,
    )


@pytest.fixture
def monday_class(store):
    """Physics 101 with a Monday 09:00-09:15 session and students A, B, C."""
    class_id = store.add_class()
    session_id = store.add_session(class_id)
    ids = {}
    for name in ("Carol", "Alice", "Bob"):
        ids[name] = store.add_student(name)
        store.enroll(ids[name], class_id)
    return session_id, ids


def builder_for(store, tz=timezone.utc) -> AttendanceReportBuilder:
    return AttendanceReportBuilder(store.sessions, store.enrollments, store.attendance, tz=tz)


def test_monday_scenario_on_time_late_absent(store, monday_class):
    session_id, ids = monday_class
    checkin(store, ids["Alice"], session_id, at(MONDAY, 9, 5), verified_by_face=True)
    checkin(store, ids["Bob"], session_id, at(MONDAY, 9, 20))

    rows = builder_for(store).build(session_id, MONDAY)

    assert [(r.student_name, r.status) for r in rows] == [
        ("Alice", ReportStatus.ON_TIME),
        ("Bob", ReportStatus.LATE),
        ("Carol", ReportStatus.ABSENT),
    ]
    assert rows[0].checkin_time == at(MONDAY, 9, 5)
    assert rows[0].verified_by_face is True
    assert rows[2].checkin_time is None


def test_report_is_idempotent(store, monday_class):
    session_id, ids = monday_class
    checkin(store, ids["Alice"], session_id, at(MONDAY, 9, 5))
    builder = builder_for(store)

    assert builder.build(session_id, MONDAY) == builder.build(session_id, MONDAY)


def test_double_tap_keeps_earliest_event(store, monday_class):
    session_id, ids = monday_class
    checkin(store, ids["Alice"], session_id, at(MONDAY, 9, 20))
    checkin(store, ids["Alice"], session_id, at(MONDAY, 9, 10))

    rows = builder_for(store).build(session_id, MONDAY)

    alice = next(r for r in rows if r.student_id == ids["Alice"])
    assert alice.status == ReportStatus.ON_TIME
    assert alice.checkin_time == at(MONDAY, 9, 10)


def test_events_from_other_days_are_ignored(store, monday_class):
    session_id, ids = monday_class
    checkin(store, ids["Alice"], session_id, at(MONDAY, 9, 5) - timedelta(days=7))

    rows = builder_for(store).build(session_id, MONDAY)

    assert {r.status for r in rows} == {ReportStatus.ABSENT}


def test_report_day_follows_schedule_timezone(store, monday_class):
    session_id, ids = monday_class
    plus7 = timezone(timedelta(hours=7))
    # 02:05 UTC is 09:05 on Monday in UTC+7.
    checkin(store, ids["Alice"], session_id, at(MONDAY, 2, 5))

    rows = builder_for(store, tz=plus7).build(session_id, MONDAY)

    alice = next(r for r in rows if r.student_id == ids["Alice"])
    assert alice.status == ReportStatus.ON_TIME


def test_unknown_session_raises(store):
    with pytest.raises(SessionNotFound):
        builder_for(store).build(42, MONDAY)


def test_store_failure_raises_data_unavailable(store, monday_class):
    session_id, _ = monday_class
    store.attendance.fail_with = mysql.connector.OperationalError(msg="gone away")

    with pytest.raises(DataUnavailable):
        builder_for(store).build(session_id, MONDAY)


def test_build_report_includes_summary(store, monday_class):
    session_id, ids = monday_class
    checkin(store, ids["Alice"], session_id, at(MONDAY, 9, 5))

    report = builder_for(store).build_report(session_id, MONDAY)

    assert report.session.session_id == session_id
    assert report.summary.total == 3
    assert report.summary.on_time_count == 1
    assert report.summary.absent_count == 2


def test_build_report_loads_session_once(store, monday_class):
    session_id, _ = monday_class
    calls = []
    original_get = store.sessions.get_by_id

    def counting_get(sid):
        calls.append(sid)
        return original_get(sid)

    store.sessions.get_by_id = counting_get

    builder_for(store).build_report(session_id, MONDAY)

    assert calls == [session_id]
