from __future__ import annotations

import csv
import io
from dataclasses import asdict

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, today_in
from ..common.web import message, optional_int, request_data, system_error
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT
from ..core.exceptions import DataUnavailable, SessionNotFound, ValidationError
from .summary import SummaryAggregator

CSV_FIELDS = [
    "student_id",
    "student_name",
    "status",
    "checkin_time",
    "verified_by_face",
]


def register(app: Flask, container: Container) -> None:
    # --- Kiosk (served with the low-privilege store handle) ---

    @app.route("/api/checkin/rfid", methods=["POST"], endpoint="api_checkin_rfid")
    def api_checkin_rfid():
        data = request_data()
        try:
            result = container.check_in_service.scan_rfid(str(data.get("rfid") or ""))
        except ValidationError as e:
            return message(str(e), "warning", 400)
        except Exception:
            return system_error("checking in")
        return jsonify(result.to_dict()), 200

    @app.route("/api/checkin/face", methods=["POST"], endpoint="api_checkin_face")
    def api_checkin_face():
        data = request_data()
        descriptor = data.get("descriptor")
        if not isinstance(descriptor, list):
            return message("A face descriptor is required", "warning", 400)
        try:
            result = container.check_in_service.verify_face(str(data.get("rfid") or ""), descriptor)
        except ValidationError as e:
            return message(str(e), "warning", 400)
        except Exception:
            return system_error("verifying face")
        return jsonify(result.to_dict()), 200

    # --- Admin ---

    @app.route("/admin/attendance", methods=["GET"], endpoint="admin_attendance")
    def admin_attendance():
        limit = optional_int(request.args.get("limit")) or DEFAULT_HISTORY_LIMIT
        session_id = optional_int(request.args.get("session_id"))
        try:
            rows = container.attendance_log_service.list_recent(limit=limit, session_id=session_id)
        except Exception:
            return system_error("loading attendance")

        return jsonify(
            {
                "attendance": [
                    {
                        "id": r.attendance_id,
                        "checkin_time": r.checkin_time.isoformat(),
                        "status": r.status.value,
                        "verified_by_face": r.verified_by_face,
                        "student": {"id": r.student_id, "name": r.student_name, "image_url": r.student_image_url},
                        "session": {"id": r.session_id, "name": r.session_name},
                    }
                    for r in rows
                ]
            }
        )

    def _load_report():
        """Returns (report, error_message, http_status)."""
        session_id = optional_int(request.args.get("session_id"))
        today = today_in(container.schedule_tz)
        date_s = request.args.get("date") or today.strftime("%Y-%m-%d")
        if session_id is None:
            return None, "session_id is required", 400
        try:
            report_date = parse_iso_date(date_s)
        except ValueError:
            return None, "date must be YYYY-MM-DD", 400

        try:
            return container.report_builder.build_report(session_id, report_date), None, 200
        except SessionNotFound as e:
            return None, str(e), 404
        except DataUnavailable as e:
            return None, str(e), 503

    @app.route("/admin/attendance/report", methods=["GET"], endpoint="admin_attendance_report")
    def admin_attendance_report():
        try:
            report, error, status = _load_report()
        except Exception:
            return system_error("generating report")

        if report is None:
            # Never partial data: an empty report plus the error.
            empty = SummaryAggregator().summarize([])
            return jsonify({"rows": [], "summary": asdict(empty), "error": error}), status

        return jsonify(
            {
                "session": {"id": report.session.session_id, "name": report.session.name},
                "date": report.report_date.strftime("%Y-%m-%d"),
                "rows": [r.to_dict() for r in report.rows],
                "summary": asdict(report.summary),
            }
        )

    @app.route("/admin/attendance/report.csv", methods=["GET"], endpoint="admin_attendance_report_csv")
    def admin_attendance_report_csv():
        try:
            report, error, status = _load_report()
        except Exception:
            return system_error("exporting report")
        if report is None:
            return message(error, "danger", status)

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for row in report.rows:
            writer.writerow(row.to_dict())

        filename = f"attendance_{report.session.session_id}_{report.report_date.strftime('%Y%m%d')}.csv"
        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
