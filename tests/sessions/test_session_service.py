import pytest

from src.attendance_kiosk.attendance_kiosk.core.exceptions import ValidationError
from src.attendance_kiosk.attendance_kiosk.sessions.service import SessionService
from tests.fakes import MONDAY, TUESDAY


@pytest.fixture
def service(store):
    return SessionService(store.sessions, store.classes)


def test_create_recurring_session(service, store):
    class_id = store.add_class()

    session_id = service.create(class_id=class_id, name="Lecture", day_of_week=1, start_time="09:00", end_time="09:15")

    created = store.sessions.get_by_id(session_id)
    assert created.is_recurring
    assert created.session_date is None
    assert created.start_time.strftime("%H:%M") == "09:00"


def test_recurring_session_drops_session_date(service, store):
    class_id = store.add_class()

    session_id = service.create(
        class_id=class_id,
        name="Lecture",
        day_of_week=1,
        start_time="09:00",
        end_time="09:15",
        session_date=MONDAY,
    )

    assert store.sessions.get_by_id(session_id).session_date is None


def test_one_off_session_requires_date_on_its_day(service, store):
    class_id = store.add_class()
    common = dict(class_id=class_id, name="Exam", day_of_week=1, start_time="09:00", end_time="11:00", is_recurring=False)

    with pytest.raises(ValidationError):
        service.create(**common)
    with pytest.raises(ValidationError):
        service.create(**common, session_date=TUESDAY)

    session_id = service.create(**common, session_date=MONDAY)
    assert store.sessions.get_by_id(session_id).session_date == MONDAY


@pytest.mark.parametrize(
    "start,end",
    [("09:15", "09:00"), ("09:00", "09:00"), ("9am", "10:00"), ("24:00", "23:00")],
)
def test_invalid_times_rejected(service, store, start, end):
    class_id = store.add_class()

    with pytest.raises(ValidationError):
        service.create(class_id=class_id, name="Lecture", day_of_week=1, start_time=start, end_time=end)

    assert store.sessions.by_id == {}


def test_unknown_class_rejected(service):
    with pytest.raises(ValidationError):
        service.create(class_id=99, name="Lecture", day_of_week=1, start_time="09:00", end_time="09:15")


def test_day_of_week_out_of_range_rejected(service, store):
    class_id = store.add_class()

    with pytest.raises(ValidationError):
        service.create(class_id=class_id, name="Lecture", day_of_week=7, start_time="09:00", end_time="09:15")


def test_delete_unknown_session_raises(service):
    with pytest.raises(ValidationError):
        service.delete(session_id=5)


def test_list_for_class_filters_by_class(service, store):
    a = store.add_class("A")
    b = store.add_class("B")
    store.add_session(a, name="Zeta")
    store.add_session(a, name="Alpha")
    store.add_session(b, name="Other")

    names = [s.name for s in service.list_for_class(a)]

    assert names == ["Alpha", "Zeta"]
