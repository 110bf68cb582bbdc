from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..classes.repository import ClassRepository
from ..common.datetime_utils import day_of_week as weekday_of, parse_hhmm
from ..common.validators import parse_sort, require_non_empty, require_positive_id
from ..core.exceptions import ValidationError
from .model import Session
from .repository import SessionRepository
from .time_window import TimeWindow

logger = logging.getLogger(__name__)

SORT_FIELDS = {"day_of_week", "name", "start_time"}
DEFAULT_SORT = "day_of_week-asc"


class SessionService:
    """Use case: manage class sessions (admin)."""

    def __init__(self, sessions: SessionRepository, classes: ClassRepository):
        self._sessions = sessions
        self._classes = classes

    def create(
        self,
        *,
        class_id,
        name: str,
        day_of_week,
        start_time: str,
        end_time: str,
        is_recurring: bool = True,
        session_date: Optional[date] = None,
    ) -> int:
        class_id = require_positive_id(class_id, "Class")
        name = require_non_empty(name, "Session name")
        try:
            day = int(day_of_week)
        except (TypeError, ValueError):
            raise ValidationError("Day of week is invalid") from None

        start = parse_hhmm(start_time, "Start time")
        end = parse_hhmm(end_time, "End time")
        # Validates the day range and start < end.
        TimeWindow(day_of_week=day, start_time=start, end_time=end)

        if is_recurring:
            session_date = None
        else:
            if session_date is None:
                raise ValidationError("A one-off session needs a date")
            if weekday_of(session_date) != day:
                raise ValidationError("Session date does not fall on the selected day of week")

        if not self._classes.get_by_id(class_id):
            raise ValidationError("Class does not exist")

        session_id = self._sessions.create(
            class_id=class_id,
            name=name,
            day_of_week=day,
            start_time=start,
            end_time=end,
            is_recurring=bool(is_recurring),
            session_date=session_date,
        )
        logger.info("Created session %s (%s) for class %s", session_id, name, class_id)
        return session_id

    def delete(self, *, session_id) -> None:
        session_id = require_positive_id(session_id, "Session")
        if not self._sessions.delete(session_id=session_id):
            raise ValidationError("Session not found")
        logger.info("Deleted session %s", session_id)

    def list(self, *, class_id: Optional[int] = None, sort: Optional[str] = None) -> Sequence[Session]:
        field, ascending = parse_sort(sort, allowed=SORT_FIELDS, default=DEFAULT_SORT)
        return self._sessions.list_all(class_id=class_id, sort_field=field, ascending=ascending)

    def list_for_class(self, class_id) -> Sequence[Session]:
        return self.list(class_id=require_positive_id(class_id, "Class"), sort="name-asc")
