from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time, timezone, tzinfo
from typing import Optional

from .time_window import TimeWindow


@dataclass(frozen=True)
class Session:
    """Domain entity: a check-in window of one class.

    start_time/end_time are times of day already extracted (UTC) from the
    placeholder-date timestamps in the store.
    """

    session_id: int
    class_id: int
    name: str
    day_of_week: int
    start_time: time
    end_time: time
    is_recurring: bool = True
    session_date: Optional[date] = None
    class_name: Optional[str] = None

    def window(self, tz: tzinfo = timezone.utc) -> TimeWindow:
        return TimeWindow(
            day_of_week=self.day_of_week,
            start_time=self.start_time,
            end_time=self.end_time,
            tz=tz,
            on_date=None if self.is_recurring else self.session_date,
        )
