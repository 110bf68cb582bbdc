from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence, Set

from .model import ClassGroup, RosterEntry


class ClassRepository(Protocol):
    def get_by_id(self, class_id: int) -> Optional[ClassGroup]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[ClassGroup]:
        raise NotImplementedError

    def list_all(self) -> Sequence[ClassGroup]:
        raise NotImplementedError

    def create(self, *, name: str) -> int:
        raise NotImplementedError

    def delete(self, *, class_id: int) -> bool:
        """Delete a class; its sessions and enrollments cascade."""

        raise NotImplementedError


class EnrollmentRepository(Protocol):
    def get_enrolled_class_ids(self, student_id: int) -> Set[int]:
        raise NotImplementedError

    def get_enrolled_students(self, class_id: int) -> Sequence[RosterEntry]:
        """Full roster of a class, independent of attendance."""

        raise NotImplementedError

    def replace_enrollments(self, *, class_id: int, student_ids: Iterable[int]) -> None:
        """Replace the roster of a class atomically."""

        raise NotImplementedError
