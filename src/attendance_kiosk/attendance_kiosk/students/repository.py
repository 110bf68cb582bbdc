from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def get_by_rfid(self, rfid_uid: str) -> Optional[Student]:
        raise NotImplementedError

    def list_filtered(
        self,
        *,
        q: Optional[str] = None,
        class_id: Optional[int] = None,
        sort_field: str = "created_at",
        ascending: bool = False,
    ) -> Sequence[Student]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        rfid_uid: Optional[str],
        face_embedding: Optional[Sequence[float]],
        image_url: Optional[str],
    ) -> int:
        """Insert a student.

        Raises mysql.connector.IntegrityError on a duplicate RFID.
        """

        raise NotImplementedError

    def update(self, *, student_id: int, rfid_uid: Optional[str], image_url: Optional[str]) -> bool:
        raise NotImplementedError

    def delete(self, *, student_id: int) -> bool:
        """Delete a student; attendance and enrollments cascade."""

        raise NotImplementedError
