"""Example: build a session report through the service layer (no Flask).

Controllers are thin; the report logic lives in AttendanceReportBuilder.
"""

import importlib
import sys
from datetime import date

from dotenv import load_dotenv

from config import get_settings_module

from src.attendance_kiosk.attendance_kiosk.common.datetime_utils import today_in
from src.attendance_kiosk.attendance_kiosk.container import build_container


def main():
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        admin_db_config=getattr(settings, "ADMIN_DB_CONFIG", None),
        schedule_timezone=settings.SCHEDULE_TIMEZONE,
    )

    session_id = int(sys.argv[1]) if len(sys.argv) > 1 else 1
    report_date = date.fromisoformat(sys.argv[2]) if len(sys.argv) > 2 else today_in(container.schedule_tz)

    report = container.report_builder.build_report(session_id, report_date)
    print(f"{report.session.name} on {report.report_date:%Y-%m-%d}")
    for row in report.rows:
        when = row.checkin_time.isoformat() if row.checkin_time else "-"
        print(f"  {row.student_name:<24} {row.status.value:<8} {when}")
    s = report.summary
    print(f"  total={s.total} on-time={s.on_time_count} late={s.late_count} absent={s.absent_count}")


if __name__ == "__main__":
    main()
