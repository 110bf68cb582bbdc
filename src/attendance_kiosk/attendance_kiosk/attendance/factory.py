from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .model import AttendanceEvent
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import StatusStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_event(self, *, event: Optional[AttendanceEvent], session_end: datetime) -> StatusStrategy:
        if event is None:
            return AbsentStrategy()

        # End of window is inclusive: checking in exactly at the end is on time.
        if event.checkin_time <= session_end:
            return OnTimeStrategy()
        return LateStrategy()
