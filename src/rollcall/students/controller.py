from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.logging import get_logger
from ..common.validators import optional_text
from ..container import Container
from ..core.exceptions import NotFoundError

logger = get_logger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/students", methods=["GET"], endpoint="api_students")
    def api_students():
        try:
            students = container.students_repo.list_all(
                field=optional_text(request.args.get("field")),
                level=optional_text(request.args.get("level")),
            )
        except Exception as e:
            logger.exception("Student query failed")
            return jsonify({"error": f"Failed to fetch students: {e}"}), 500

        return jsonify([s.to_dict() for s in students])

    @app.route(
        "/api/students/<matricule>/absentee-hours",
        methods=["GET"],
        endpoint="api_student_absentee_hours_detail",
    )
    def api_student_absentee_hours_detail(matricule: str):
        try:
            hours = container.absentee_hours_service.for_student(matricule)
        except NotFoundError as e:
            return jsonify({"error": str(e)}), 404
        except Exception as e:
            logger.exception("Absentee hours lookup failed for %s", matricule)
            return jsonify({"error": f"Failed to fetch student absentee hours: {e}"}), 500

        return jsonify(hours.to_dict())
