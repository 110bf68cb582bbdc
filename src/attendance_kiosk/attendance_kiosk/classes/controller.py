from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import message, request_data, system_error
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/admin/classes", methods=["GET", "POST"], endpoint="admin_classes")
    def admin_classes():
        if request.method == "POST":
            data = request_data()
            try:
                class_id = container.class_service.create(name=str(data.get("name") or ""))
                return message("Class created successfully.", status=201, id=class_id)
            except ValidationError as e:
                return message(str(e), "danger", 400)
            except Exception:
                return system_error("creating class")

        try:
            classes = container.class_service.list_all()
        except Exception:
            return system_error("loading classes")
        return jsonify({"classes": [{"id": c.class_id, "name": c.name} for c in classes]})

    @app.route("/admin/classes/delete/<int:class_id>", methods=["POST"], endpoint="admin_classes_delete")
    def admin_classes_delete(class_id: int):
        try:
            container.class_service.delete(class_id=class_id)
            return message("Class deleted successfully.")
        except ValidationError as e:
            return message(str(e), "danger", 404)
        except Exception:
            return system_error("deleting class")

    @app.route("/admin/classes/<int:class_id>/enrollments", methods=["GET", "POST"], endpoint="admin_class_enrollments")
    def admin_class_enrollments(class_id: int):
        if request.method == "POST":
            data = request.get_json(silent=True)
            if isinstance(data, dict):
                student_ids = data.get("student_ids")
            else:
                # Form posts repeat the field once per checkbox.
                student_ids = request.form.getlist("student_ids")
            if not isinstance(student_ids, list):
                return message("student_ids must be a list", "danger", 400)

            try:
                container.class_service.replace_enrollments(class_id=class_id, student_ids=student_ids)
                return message("Enrollments updated successfully.")
            except ValidationError as e:
                return message(str(e), "danger", 400)
            except Exception:
                return system_error("updating enrollments")

        try:
            roster = container.class_service.get_roster(class_id)
        except Exception:
            return system_error("loading enrollments")
        return jsonify(
            {
                "class_id": class_id,
                "students": [{"id": r.student_id, "name": r.name, "image_url": r.image_url} for r in roster],
            }
        )
