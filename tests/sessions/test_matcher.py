from datetime import datetime, time

from src.attendance_kiosk.attendance_kiosk.sessions.matcher import SessionMatcher
from tests.fakes import TUESDAY, at


def test_no_session_on_tuesday_for_monday_sessions(store):
    class_id = store.add_class()
    store.add_session(class_id, day_of_week=1)
    matcher = SessionMatcher(store.sessions)

    assert matcher.find_active_session({class_id}, at(TUESDAY, 9, 5)) is None


def test_finds_session_inside_window(store, fixed_now):
    class_id = store.add_class()
    session_id = store.add_session(class_id)
    matcher = SessionMatcher(store.sessions)

    session = matcher.find_active_session({class_id}, fixed_now)

    assert session is not None
    assert session.session_id == session_id


def test_overlapping_windows_pick_lowest_session_id(store, fixed_now):
    class_a = store.add_class("A")
    class_b = store.add_class("B")
    first = store.add_session(class_b, name="Lab", start=time(9, 0), end=time(10, 0))
    store.add_session(class_a, name="Lecture", start=time(8, 30), end=time(9, 30))
    matcher = SessionMatcher(store.sessions)

    session = matcher.find_active_session([class_a, class_b], fixed_now)

    assert session.session_id == first


def test_no_enrolled_classes_means_no_session(store, fixed_now):
    class_id = store.add_class()
    store.add_session(class_id)

    assert SessionMatcher(store.sessions).find_active_session(set(), fixed_now) is None


def test_sessions_of_other_classes_are_ignored(store, fixed_now):
    mine = store.add_class("Mine")
    other = store.add_class("Other")
    store.add_session(other)

    assert SessionMatcher(store.sessions).find_active_session({mine}, fixed_now) is None


def test_naive_now_matches_same_session_as_utc(store, new_york_host):
    class_id = store.add_class()
    session_id = store.add_session(class_id)
    matcher = SessionMatcher(store.sessions)

    session = matcher.find_active_session({class_id}, datetime(2024, 1, 1, 9, 5))

    assert session is not None
    assert session.session_id == session_id
