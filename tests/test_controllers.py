import mysql.connector
import pytest

from src.attendance_kiosk.attendance_kiosk.attendance import service as checkin_service
from src.attendance_kiosk.attendance_kiosk.core.enums import AttendanceStatus
from tests.fakes import MONDAY, at


@pytest.fixture
def physics(store):
    class_id = store.add_class()
    session_id = store.add_session(class_id)
    alice = store.add_student("Alice", rfid_uid="0001234567")
    bob = store.add_student("Bob", rfid_uid="0001234568", face_embedding=[0.1, 0.2, 0.3, 0.4])
    store.enroll(alice, class_id)
    store.enroll(bob, class_id)
    return {"class_id": class_id, "session_id": session_id, "alice": alice, "bob": bob}


@pytest.fixture
def monday_morning(monkeypatch, fixed_now):
    monkeypatch.setattr(checkin_service, "now_utc", lambda: fixed_now)


def test_rfid_checkin_success(client, store, physics, monday_morning):
    resp = client.post("/api/checkin/rfid", json={"rfid": "0001234567"})

    body = resp.get_json()
    assert resp.status_code == 200
    assert body["status"] == "success"
    assert body["session"]["id"] == physics["session_id"]
    assert len(store.attendance.events) == 1


def test_face_flow_over_http(client, store, physics, monday_morning):
    prompt = client.post("/api/checkin/rfid", json={"rfid": "0001234568"}).get_json()
    assert prompt["status"] == "prompting_face_scan"

    mismatch = client.post("/api/checkin/face", json={"rfid": "0001234568", "descriptor": [1, 1, 1, 1]}).get_json()
    assert mismatch["status"] == "error_face_mismatch"
    assert mismatch["reset_after_seconds"] > 0

    ok = client.post("/api/checkin/face", json={"rfid": "0001234568", "descriptor": [0.1, 0.2, 0.3, 0.4]}).get_json()
    assert ok["status"] == "success"
    assert ok["verified_by_face"] is True
    assert len(store.attendance.events) == 1


def test_face_checkin_requires_descriptor_list(client):
    resp = client.post("/api/checkin/face", json={"rfid": "0001234568", "descriptor": "abc"})

    assert resp.status_code == 400


def test_unknown_rfid_over_http(client):
    body = client.post("/api/checkin/rfid", json={"rfid": "nope"}).get_json()

    assert body["success"] is False
    assert body["status"] == "error_rfid_not_found"


def test_report_json(client, store, physics):
    store.attendance.insert_event(
        student_id=physics["alice"],
        session_id=physics["session_id"],
        checkin_time=at(MONDAY, 9, 14),
        status=AttendanceStatus.PRESENT,
        verified_by_face=False,
    )

    resp = client.get(f"/admin/attendance/report?session_id={physics['session_id']}&date=2024-01-01")

    body = resp.get_json()
    assert resp.status_code == 200
    assert [(r["student_name"], r["status"]) for r in body["rows"]] == [("Alice", "on-time"), ("Bob", "absent")]
    assert body["summary"]["total"] == 2
    assert body["summary"]["on_time_percent"] == 50.0


def test_report_unknown_session_returns_empty_report(client):
    resp = client.get("/admin/attendance/report?session_id=99&date=2024-01-01")

    body = resp.get_json()
    assert resp.status_code == 404
    assert body["rows"] == []
    assert body["summary"]["total"] == 0
    assert body["error"]


def test_report_store_failure_is_503_without_partial_rows(client, store, physics):
    store.enrollments.fail_with = mysql.connector.OperationalError(msg="gone away")

    resp = client.get(f"/admin/attendance/report?session_id={physics['session_id']}&date=2024-01-01")

    assert resp.status_code == 503
    assert resp.get_json()["rows"] == []


def test_report_rejects_bad_date(client, physics):
    resp = client.get(f"/admin/attendance/report?session_id={physics['session_id']}&date=01/01/2024")

    assert resp.status_code == 400


def test_report_csv_export(client, physics):
    resp = client.get(f"/admin/attendance/report.csv?session_id={physics['session_id']}&date=2024-01-01")

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    text = resp.data.decode("utf-8-sig")
    lines = text.strip().splitlines()
    assert lines[0] == "student_id,student_name,status,checkin_time,verified_by_face"
    assert len(lines) == 3


def test_enroll_student_and_duplicate_rfid(client):
    first = client.post("/api/enroll", json={"name": "Alice", "rfid_uid": "0001234567", "face_embedding": [0, 0, 0, 1]})
    assert first.status_code == 201

    dup = client.post("/api/enroll", json={"name": "Bob", "rfid_uid": "0001234567"})
    assert dup.status_code == 400
    assert dup.get_json()["message"] == "This RFID UID is already registered to another student."

    students = client.get("/admin/students?sort=name-asc").get_json()["students"]
    assert [s["name"] for s in students] == ["Alice"]
    assert students[0]["has_face_embedding"] is True


def test_session_admin_roundtrip(client, store):
    class_id = store.add_class()

    created = client.post(
        "/admin/sessions",
        json={"class_id": class_id, "name": "Lab", "day_of_week": 3, "start_time": "14:00", "end_time": "15:30"},
    )
    assert created.status_code == 201

    listed = client.get(f"/admin/classes/{class_id}/sessions").get_json()["sessions"]
    assert listed[0]["day_name"] == "Wednesday"
    assert (listed[0]["start_time"], listed[0]["end_time"]) == ("14:00", "15:30")

    bad = client.post(
        "/admin/sessions",
        json={"class_id": class_id, "name": "Lab", "day_of_week": 3, "start_time": "15:30", "end_time": "14:00"},
    )
    assert bad.status_code == 400

    deleted = client.post(f"/admin/sessions/delete/{created.get_json()['id']}")
    assert deleted.status_code == 200
    assert store.sessions.by_id == {}


def test_class_enrollment_endpoints(client, store):
    alice = store.add_student("Alice")
    bob = store.add_student("Bob")
    class_id = client.post("/admin/classes", json={"name": "Physics 101"}).get_json()["id"]

    resp = client.post(f"/admin/classes/{class_id}/enrollments", json={"student_ids": [alice, bob]})
    assert resp.status_code == 200

    roster = client.get(f"/admin/classes/{class_id}/enrollments").get_json()["students"]
    assert sorted(s["name"] for s in roster) == ["Alice", "Bob"]

    bad = client.post(f"/admin/classes/{class_id}/enrollments", json={"student_ids": "1,2"})
    assert bad.status_code == 400


def test_attendance_log(client, store, physics):
    store.attendance.insert_event(
        student_id=physics["alice"],
        session_id=physics["session_id"],
        checkin_time=at(MONDAY, 9, 1),
        status=AttendanceStatus.PRESENT,
        verified_by_face=False,
    )

    body = client.get("/admin/attendance?limit=10").get_json()

    assert len(body["attendance"]) == 1
    assert body["attendance"][0]["status"] == "present"


def test_enrollments_with_unknown_student_return_400(client, store):
    class_id = client.post("/admin/classes", json={"name": "Physics 101"}).get_json()["id"]

    resp = client.post(f"/admin/classes/{class_id}/enrollments", json={"student_ids": [999]})

    assert resp.status_code == 400
    assert "foreign key" in resp.get_json()["message"]


def test_report_defaults_to_today_in_schedule_timezone(client, physics, monkeypatch):
    from src.attendance_kiosk.attendance_kiosk.common import datetime_utils

    monkeypatch.setattr(datetime_utils, "now_utc", lambda: at(MONDAY, 23, 59))

    body = client.get(f"/admin/attendance/report?session_id={physics['session_id']}").get_json()

    assert body["date"] == "2024-01-01"
