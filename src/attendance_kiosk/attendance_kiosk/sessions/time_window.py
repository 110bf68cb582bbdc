"""Recurring weekly check-in window.

A window is a day of week plus a start/end time of day. It is evaluated in a
single schedule timezone (UTC unless configured otherwise) so that session
authoring, live matching and report classification all agree on what
"09:00 on Monday" means, whatever the host's local timezone is.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Any, Optional

from ..common.datetime_utils import as_utc, day_of_week
from ..core.exceptions import ValidationError
from ..database.mysql_base import normalize_mysql_time


@dataclass(frozen=True)
class TimeWindow:
    day_of_week: int
    start_time: time
    end_time: time
    tz: tzinfo = field(default=timezone.utc, compare=False)
    # Set for one-off sessions: the window only exists on this date.
    on_date: Optional[date] = None

    def __post_init__(self) -> None:
        if not 0 <= int(self.day_of_week) <= 6:
            raise ValidationError("day_of_week must be between 0 (Sunday) and 6 (Saturday)")
        if self.start_time >= self.end_time:
            raise ValidationError("Session start time must be before its end time")

    @classmethod
    def from_stored(
        cls,
        day: int,
        start_value: Any,
        end_value: Any,
        *,
        tz: tzinfo = timezone.utc,
        on_date: Optional[date] = None,
    ) -> "TimeWindow":
        """Build a window from stored placeholder-date timestamps or TIME values."""
        return cls(
            day_of_week=int(day),
            start_time=normalize_mysql_time(start_value),
            end_time=normalize_mysql_time(end_value),
            tz=tz,
            on_date=on_date,
        )

    def _at(self, on: date, t: time) -> datetime:
        return datetime.combine(on, t, tzinfo=self.tz)

    def active_window_for(self, now: datetime) -> Optional[tuple[datetime, datetime]]:
        """Concrete (start, end) of today's window if ``now`` is inside it.

        Both bounds are inclusive. Returns None on any other day.
        """
        # Naive instants are UTC, never host-local.
        local_now = as_utc(now).astimezone(self.tz)
        today = local_now.date()
        if day_of_week(today) != self.day_of_week:
            return None
        if self.on_date is not None and today != self.on_date:
            return None

        session_start = self._at(today, self.start_time)
        session_end = self._at(today, self.end_time)
        if session_start <= local_now <= session_end:
            return session_start, session_end
        return None

    def contains(self, now: datetime) -> bool:
        return self.active_window_for(now) is not None

    def end_instant_for(self, on: date) -> datetime:
        """End-of-window instant on a given calendar date (report boundary)."""
        return self._at(on, self.end_time)

    def day_bounds(self, on: date) -> tuple[datetime, datetime]:
        """Half-open [start of day, start of next day) in the schedule timezone."""
        return self._at(on, time.min), self._at(on + timedelta(days=1), time.min)
