from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Sequence


@dataclass(frozen=True)
class Student:
    """Domain entity: an enrolled person who can check in at the kiosk."""

    student_id: int
    name: str
    rfid_uid: Optional[str] = None
    face_embedding: Optional[Sequence[float]] = None
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def has_face_embedding(self) -> bool:
        return bool(self.face_embedding)
