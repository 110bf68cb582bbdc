from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import ReportStatus
from ..model import AttendanceEvent
from .base import StatusDecision, StatusStrategy


class AbsentStrategy(StatusStrategy):
    """No check-in for the session-day."""

    def classify(self, *, event: Optional[AttendanceEvent], session_end: datetime) -> StatusDecision:
        return StatusDecision(status=ReportStatus.ABSENT)
