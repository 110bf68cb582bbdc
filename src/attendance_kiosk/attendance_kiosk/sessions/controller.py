from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.web import as_bool, message, optional_int, request_data, system_error
from ..container import Container
from ..core.constants import DAYS_OF_WEEK
from ..core.exceptions import ValidationError
from .model import Session


def session_to_dict(s: Session) -> dict:
    return {
        "id": s.session_id,
        "class_id": s.class_id,
        "class_name": s.class_name,
        "name": s.name,
        "day_of_week": s.day_of_week,
        "day_name": DAYS_OF_WEEK[s.day_of_week],
        "start_time": s.start_time.strftime("%H:%M"),
        "end_time": s.end_time.strftime("%H:%M"),
        "is_recurring": s.is_recurring,
        "session_date": s.session_date.strftime("%Y-%m-%d") if s.session_date else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/sessions", methods=["GET", "POST"], endpoint="admin_sessions")
    def admin_sessions():
        if request.method == "POST":
            data = request_data()
            session_date_s = data.get("session_date")
            try:
                session_date = parse_iso_date(session_date_s) if session_date_s else None
            except ValueError:
                return message("session_date must be YYYY-MM-DD", "danger", 400)

            try:
                session_id = container.session_service.create(
                    class_id=data.get("class_id"),
                    name=str(data.get("name") or ""),
                    day_of_week=data.get("day_of_week"),
                    start_time=str(data.get("start_time") or ""),
                    end_time=str(data.get("end_time") or ""),
                    is_recurring=as_bool(data.get("is_recurring"), default=True),
                    session_date=session_date,
                )
                return message("Session created successfully.", status=201, id=session_id)
            except ValidationError as e:
                return message(str(e), "danger", 400)
            except Exception:
                return system_error("creating session")

        try:
            sessions = container.session_service.list(
                class_id=optional_int(request.args.get("class")),
                sort=request.args.get("sort"),
            )
        except Exception:
            return system_error("loading sessions")
        return jsonify({"sessions": [session_to_dict(s) for s in sessions]})

    @app.route("/admin/sessions/delete/<int:session_id>", methods=["POST"], endpoint="admin_sessions_delete")
    def admin_sessions_delete(session_id: int):
        try:
            container.session_service.delete(session_id=session_id)
            return message("Session deleted successfully.")
        except ValidationError as e:
            return message(str(e), "danger", 404)
        except Exception:
            return system_error("deleting session")

    @app.route("/admin/classes/<int:class_id>/sessions", methods=["GET"], endpoint="admin_class_sessions")
    def admin_class_sessions(class_id: int):
        try:
            sessions = container.session_service.list_for_class(class_id)
        except Exception:
            return system_error("loading sessions")
        return jsonify({"sessions": [session_to_dict(s) for s in sessions]})
