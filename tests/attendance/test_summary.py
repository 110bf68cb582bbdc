from src.attendance_kiosk.attendance_kiosk.attendance.model import ReportRow
from src.attendance_kiosk.attendance_kiosk.attendance.summary import SummaryAggregator
from src.attendance_kiosk.attendance_kiosk.core.enums import ReportStatus


def row(student_id: int, status: ReportStatus) -> ReportRow:
    return ReportRow(
        student_id=student_id,
        student_name=f"S{student_id}",
        student_image_url=None,
        status=status,
        checkin_time=None,
        verified_by_face=False,
    )


def test_empty_summary_has_zero_percentages():
    summary = SummaryAggregator().summarize([])

    assert summary.total == 0
    assert summary.on_time_percent == 0
    assert summary.late_percent == 0
    assert summary.absent_percent == 0


def test_counts_add_up_to_total():
    rows = [
        row(1, ReportStatus.ON_TIME),
        row(2, ReportStatus.LATE),
        row(3, ReportStatus.ABSENT),
        row(4, ReportStatus.ABSENT),
    ]

    summary = SummaryAggregator().summarize(rows)

    assert summary.total == 4
    assert summary.on_time_count + summary.late_count + summary.absent_count == summary.total
    assert (summary.on_time_percent, summary.late_percent, summary.absent_percent) == (25.0, 25.0, 50.0)


def test_percentages_rounded_to_one_decimal():
    rows = [row(1, ReportStatus.ON_TIME), row(2, ReportStatus.LATE), row(3, ReportStatus.LATE)]

    summary = SummaryAggregator().summarize(rows)

    assert summary.on_time_percent == 33.3
    assert summary.late_percent == 66.7
