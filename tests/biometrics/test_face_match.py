import pytest

from src.attendance_kiosk.attendance_kiosk.biometrics.face_match import match_face, to_descriptor
from src.attendance_kiosk.attendance_kiosk.core.exceptions import ValidationError


def test_identical_descriptors_match_with_zero_distance():
    decision = match_face([0.5, 0.5, 0.5], [0.5, 0.5, 0.5])

    assert decision.is_match
    assert decision.distance == 0


def test_match_uses_euclidean_distance():
    decision = match_face([3.0, 4.0], [0.0, 0.0], threshold=6.0)

    assert decision.distance == pytest.approx(5.0)
    assert decision.is_match


def test_distance_equal_to_threshold_is_not_a_match():
    decision = match_face([0.6, 0.0], [0.0, 0.0], threshold=0.6)

    assert not decision.is_match


@pytest.mark.parametrize("values", [[], [[0.1, 0.2]], ["a", "b"], [float("nan"), 1.0]])
def test_malformed_descriptor_rejected(values):
    with pytest.raises(ValidationError):
        to_descriptor(values)


def test_length_mismatch_rejected():
    with pytest.raises(ValidationError):
        match_face([0.1, 0.2], [0.1, 0.2, 0.3])
