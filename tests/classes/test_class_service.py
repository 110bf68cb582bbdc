import pytest

from src.attendance_kiosk.attendance_kiosk.classes.service import ClassService
from src.attendance_kiosk.attendance_kiosk.core.exceptions import ValidationError


@pytest.fixture
def service(store):
    return ClassService(store.classes, store.enrollments)


def test_create_class_requires_unique_name(service):
    service.create(name="Physics 101")

    with pytest.raises(ValidationError):
        service.create(name="Physics 101")


def test_blank_name_rejected(service):
    with pytest.raises(ValidationError):
        service.create(name="  ")


def test_replace_enrollments_replaces_whole_roster(service, store):
    class_id = service.create(name="Physics 101")
    alice = store.add_student("Alice")
    bob = store.add_student("Bob")
    carol = store.add_student("Carol")
    store.enroll(alice, class_id)
    store.enroll(bob, class_id)

    service.replace_enrollments(class_id=class_id, student_ids=[str(bob), carol])

    assert sorted(r.name for r in service.get_roster(class_id)) == ["Bob", "Carol"]


def test_replace_enrollments_leaves_other_classes_alone(service, store):
    physics = service.create(name="Physics 101")
    maths = service.create(name="Maths 101")
    alice = store.add_student("Alice")
    store.enroll(alice, maths)

    service.replace_enrollments(class_id=physics, student_ids=[])

    assert store.enrollments.get_enrolled_class_ids(alice) == {maths}


def test_replace_enrollments_rejects_bad_ids(service, store):
    class_id = service.create(name="Physics 101")

    with pytest.raises(ValidationError):
        service.replace_enrollments(class_id=class_id, student_ids=["abc"])


def test_replace_enrollments_unknown_class(service):
    with pytest.raises(ValidationError):
        service.replace_enrollments(class_id=3, student_ids=[1])


def test_replace_enrollments_with_unknown_student_is_a_validation_error(service, store):
    class_id = service.create(name="Physics 101")
    alice = store.add_student("Alice")
    store.enroll(alice, class_id)

    with pytest.raises(ValidationError, match="foreign key"):
        service.replace_enrollments(class_id=class_id, student_ids=[alice, 999])

    assert store.enrollments.get_enrolled_class_ids(alice) == {class_id}
