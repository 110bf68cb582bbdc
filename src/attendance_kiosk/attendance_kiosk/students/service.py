from __future__ import annotations

import logging
from typing import Optional, Sequence

import mysql.connector

from ..common.validators import optional_stripped, parse_sort, require_non_empty, require_positive_id
from ..core.constants import DEFAULT_FACE_DESCRIPTOR_LENGTH
from ..core.exceptions import ValidationError
from ..database.mysql_base import is_duplicate_key
from .model import Student
from .repository import StudentRepository

logger = logging.getLogger(__name__)

SORT_FIELDS = {"created_at", "name"}
DEFAULT_SORT = "created_at-desc"
DUPLICATE_RFID_MESSAGE = "This RFID UID is already registered to another student."


class StudentService:
    """Use case: enroll students and manage their records (admin)."""

    def __init__(self, students: StudentRepository, *, descriptor_length: int = DEFAULT_FACE_DESCRIPTOR_LENGTH):
        self._students = students
        self._descriptor_length = int(descriptor_length)

    def _clean_embedding(self, face_embedding) -> Optional[list[float]]:
        if not face_embedding:
            return None
        try:
            values = [float(v) for v in face_embedding]
        except (TypeError, ValueError):
            raise ValidationError("Face embedding must be a list of numbers") from None
        if len(values) != self._descriptor_length:
            raise ValidationError(f"Face embedding must have {self._descriptor_length} values")
        return values

    def _ensure_rfid_free(self, rfid_uid: Optional[str], *, student_id: Optional[int] = None) -> None:
        if not rfid_uid:
            return
        owner = self._students.get_by_rfid(rfid_uid)
        if owner and owner.student_id != student_id:
            raise ValidationError(DUPLICATE_RFID_MESSAGE)

    def enroll(
        self,
        *,
        name: str,
        rfid_uid: Optional[str] = None,
        face_embedding=None,
        image_url: Optional[str] = None,
    ) -> int:
        name = require_non_empty(name, "Name")
        rfid_uid = optional_stripped(rfid_uid)
        embedding = self._clean_embedding(face_embedding)
        self._ensure_rfid_free(rfid_uid)

        try:
            student_id = self._students.create(
                name=name,
                rfid_uid=rfid_uid,
                face_embedding=embedding,
                image_url=optional_stripped(image_url),
            )
        except mysql.connector.Error as e:
            if is_duplicate_key(e):
                raise ValidationError(DUPLICATE_RFID_MESSAGE) from e
            raise

        logger.info("Enrolled student %s (%s), face=%s", student_id, name, embedding is not None)
        return student_id

    def update(self, *, student_id, rfid_uid: Optional[str], image_url: Optional[str]) -> None:
        student_id = require_positive_id(student_id, "Student")
        if not self._students.get_by_id(student_id):
            raise ValidationError("Student not found")

        rfid_uid = optional_stripped(rfid_uid)
        self._ensure_rfid_free(rfid_uid, student_id=student_id)
        try:
            self._students.update(student_id=student_id, rfid_uid=rfid_uid, image_url=optional_stripped(image_url))
        except mysql.connector.Error as e:
            if is_duplicate_key(e):
                raise ValidationError(DUPLICATE_RFID_MESSAGE) from e
            raise

    def delete(self, *, student_id) -> None:
        student_id = require_positive_id(student_id, "Student")
        if not self._students.delete(student_id=student_id):
            raise ValidationError("Student not found")
        logger.info("Deleted student %s", student_id)

    def list(self, *, q: Optional[str] = None, class_id: Optional[int] = None, sort: Optional[str] = None) -> Sequence[Student]:
        field, ascending = parse_sort(sort, allowed=SORT_FIELDS, default=DEFAULT_SORT)
        return self._students.list_filtered(q=optional_stripped(q), class_id=class_id, sort_field=field, ascending=ascending)
