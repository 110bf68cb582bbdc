from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from typing import Iterable, Optional

from ..common.datetime_utils import as_utc, day_of_week
from .model import Session
from .repository import SessionRepository

logger = logging.getLogger(__name__)


class SessionMatcher:
    """Find the session a student may check into at a given instant.

    Tie-break contract: candidates are evaluated in ascending ``session_id``
    order, so when overlapping windows both contain ``now`` the lowest id wins.
    """

    def __init__(self, sessions: SessionRepository, *, tz: tzinfo = timezone.utc):
        self._sessions = sessions
        self._tz = tz

    def find_active_session(self, enrolled_class_ids: Iterable[int], now: datetime) -> Optional[Session]:
        class_ids = set(enrolled_class_ids)
        if not class_ids:
            return None

        today = day_of_week(as_utc(now).astimezone(self._tz))
        candidates = [s for s in self._sessions.list_for_classes(class_ids) if s.day_of_week == today]
        candidates.sort(key=lambda s: s.session_id)

        for session in candidates:
            if session.window(self._tz).active_window_for(now) is not None:
                return session

        logger.debug("No active session among %d candidate(s) for classes %s", len(candidates), sorted(class_ids))
        return None
