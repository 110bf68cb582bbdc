from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import ReportStatus
from ..model import AttendanceEvent
from .base import StatusDecision, StatusStrategy


class LateStrategy(StatusStrategy):
    """Late check-in."""

    def classify(self, *, event: Optional[AttendanceEvent], session_end: datetime) -> StatusDecision:
        return StatusDecision(
            status=ReportStatus.LATE,
            checkin_time=event.checkin_time,
            verified_by_face=event.verified_by_face,
        )
