from __future__ import annotations

from datetime import date, time
from typing import Iterable, Optional, Protocol, Sequence

from .model import Session


class SessionRepository(Protocol):
    def get_by_id(self, session_id: int) -> Optional[Session]:
        raise NotImplementedError

    def list_for_classes(self, class_ids: Iterable[int]) -> Sequence[Session]:
        """All sessions of the given classes (check-in lookup)."""

        raise NotImplementedError

    def list_all(
        self,
        *,
        class_id: Optional[int] = None,
        sort_field: str = "day_of_week",
        ascending: bool = True,
    ) -> Sequence[Session]:
        """List sessions for the admin table (joined with class name)."""

        raise NotImplementedError

    def create(
        self,
        *,
        class_id: int,
        name: str,
        day_of_week: int,
        start_time: time,
        end_time: time,
        is_recurring: bool,
        session_date: Optional[date] = None,
    ) -> int:
        raise NotImplementedError

    def delete(self, *, session_id: int) -> bool:
        raise NotImplementedError
