from __future__ import annotations

import logging
from typing import Iterable, Sequence

import mysql.connector

from ..common.validators import require_non_empty, require_positive_id
from ..core.exceptions import ValidationError
from .model import ClassGroup, RosterEntry
from .repository import ClassRepository, EnrollmentRepository

logger = logging.getLogger(__name__)


class ClassService:
    """Use case: manage classes and their rosters (admin)."""

    def __init__(self, classes: ClassRepository, enrollments: EnrollmentRepository):
        self._classes = classes
        self._enrollments = enrollments

    def create(self, *, name: str) -> int:
        name = require_non_empty(name, "Class name")
        if self._classes.get_by_name(name):
            raise ValidationError("A class with this name already exists")

        class_id = self._classes.create(name=name)
        logger.info("Created class %s (%s)", class_id, name)
        return class_id

    def delete(self, *, class_id) -> None:
        class_id = require_positive_id(class_id, "Class")
        if not self._classes.delete(class_id=class_id):
            raise ValidationError("Class not found")
        logger.info("Deleted class %s with its sessions and enrollments", class_id)

    def list_all(self) -> Sequence[ClassGroup]:
        return self._classes.list_all()

    def get_roster(self, class_id) -> Sequence[RosterEntry]:
        return self._enrollments.get_enrolled_students(require_positive_id(class_id, "Class"))

    def replace_enrollments(self, *, class_id, student_ids: Iterable) -> None:
        class_id = require_positive_id(class_id, "Class")
        ids = {require_positive_id(s, "Student") for s in student_ids}
        if not self._classes.get_by_id(class_id):
            raise ValidationError("Class not found")

        try:
            self._enrollments.replace_enrollments(class_id=class_id, student_ids=ids)
        except mysql.connector.IntegrityError as e:
            # Unknown student ids fail the enrollments foreign key.
            raise ValidationError(f"Could not update enrollments: {e.msg}") from e
        logger.info("Class %s roster replaced (%d student(s))", class_id, len(ids))
