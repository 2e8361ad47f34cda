from __future__ import annotations

from flask import Flask, jsonify

from ..common.logging import get_logger
from ..container import Container

logger = get_logger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/student-absentee-hours", methods=["GET"], endpoint="api_student_absentee_hours")
    def api_student_absentee_hours():
        """Every absentee join row; aggregation is left to the caller."""
        try:
            records = container.attendance_repo.list_absentees()
        except Exception as e:
            logger.exception("Absentee query failed")
            return jsonify({"error": f"Failed to fetch student absentee hours: {e}"}), 500

        return jsonify([r.to_api_dict() for r in records])
