from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import ReportStatus
from ..model import AttendanceEvent


@dataclass(frozen=True)
class StatusDecision:
    status: ReportStatus
    checkin_time: Optional[datetime] = None
    verified_by_face: bool = False


class StatusStrategy(ABC):
    """Strategy Pattern: encapsulate how a session-day status is decided."""

    @abstractmethod
    def classify(self, *, event: Optional[AttendanceEvent], session_end: datetime) -> StatusDecision:
        raise NotImplementedError
