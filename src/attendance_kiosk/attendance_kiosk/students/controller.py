from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import message, optional_int, request_data, system_error
from ..container import Container
from ..core.exceptions import ValidationError
from .model import Student


def student_to_dict(s: Student) -> dict:
    return {
        "id": s.student_id,
        "name": s.name,
        "rfid_uid": s.rfid_uid,
        "image_url": s.image_url,
        "has_face_embedding": s.has_face_embedding,
        "created_at": s.created_at.isoformat() if s.created_at else None,
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/enroll", methods=["POST"], endpoint="api_enroll")
    def api_enroll():
        data = request_data()
        try:
            student_id = container.student_service.enroll(
                name=str(data.get("name") or ""),
                rfid_uid=data.get("rfid_uid"),
                face_embedding=data.get("face_embedding"),
                image_url=data.get("image_url"),
            )
            return message("Student enrolled successfully.", status=201, id=student_id)
        except ValidationError as e:
            return message(str(e), "danger", 400)
        except Exception:
            return system_error("enrolling student")

    @app.route("/admin/students", methods=["GET"], endpoint="admin_students")
    def admin_students():
        try:
            students = container.student_service.list(
                q=request.args.get("q"),
                class_id=optional_int(request.args.get("class")),
                sort=request.args.get("sort"),
            )
        except Exception:
            return system_error("loading students")
        return jsonify({"students": [student_to_dict(s) for s in students]})

    @app.route("/admin/students/<int:student_id>", methods=["POST"], endpoint="admin_students_update")
    def admin_students_update(student_id: int):
        data = request_data()
        try:
            container.student_service.update(
                student_id=student_id,
                rfid_uid=data.get("rfid_uid"),
                image_url=data.get("image_url"),
            )
            return message("Student updated successfully.")
        except ValidationError as e:
            return message(str(e), "danger", 400)
        except Exception:
            return system_error("updating student")

    @app.route("/admin/students/delete/<int:student_id>", methods=["POST"], endpoint="admin_students_delete")
    def admin_students_delete(student_id: int):
        try:
            container.student_service.delete(student_id=student_id)
            return message("Student deleted successfully.")
        except ValidationError as e:
            return message(str(e), "danger", 404)
        except Exception:
            return system_error("deleting student")
