from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ClassGroup:
    """Domain entity: a class that owns sessions and enrollments."""

    class_id: int
    name: str


@dataclass(frozen=True)
class RosterEntry:
    """Read-model: an enrolled student as seen by reports."""

    student_id: int
    name: str
    image_url: Optional[str] = None
