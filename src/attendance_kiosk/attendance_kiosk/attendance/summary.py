from __future__ import annotations

from typing import Iterable

from ..core.enums import ReportStatus
from .model import ReportRow, ReportSummary


def _percent(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(count * 100.0 / total, 1)


class SummaryAggregator:
    """Reduce report rows into per-status counts and percentages."""

    def summarize(self, rows: Iterable[ReportRow]) -> ReportSummary:
        counts = {status: 0 for status in ReportStatus}
        for row in rows:
            counts[row.status] += 1

        total = sum(counts.values())
        return ReportSummary(
            total=total,
            on_time_count=counts[ReportStatus.ON_TIME],
            late_count=counts[ReportStatus.LATE],
            absent_count=counts[ReportStatus.ABSENT],
            on_time_percent=_percent(counts[ReportStatus.ON_TIME], total),
            late_percent=_percent(counts[ReportStatus.LATE], total),
            absent_percent=_percent(counts[ReportStatus.ABSENT], total),
        )
