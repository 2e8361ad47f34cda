from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.logging import get_logger
from ..common.validators import optional_text
from ..container import Container
from ..core.exceptions import ReportUnavailableError, ValidationError
from .export import (
    absentee_csv_filename,
    absentee_hours_xlsx_filename,
    write_absentee_csv,
    write_absentee_hours_xlsx,
)
from .model import ReportFilters

logger = get_logger(__name__)

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def register(app: Flask, container: Container) -> None:
    def _download(body: bytes, *, mimetype: str, filename: str):
        return app.response_class(
            body,
            mimetype=mimetype,
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    def _absentee_report():
        filters = ReportFilters.from_query(request.args, today=now_local().date())
        return container.absentee_report_service.build_report(filters)

    @app.route("/api/reports/absentee-hours", methods=["GET"], endpoint="api_report_absentee_hours")
    def api_report_absentee_hours():
        try:
            report = container.absentee_hours_service.build_report(field=optional_text(request.args.get("field")))
        except ReportUnavailableError as e:
            return jsonify({"error": str(e)}), 503
        except Exception as e:
            logger.exception("Absentee hours report failed")
            return jsonify({"error": f"Failed to build absentee hours report: {e}"}), 500
        return jsonify(report.to_dict())

    @app.route("/api/reports/absentee-hours.xlsx", methods=["GET"], endpoint="api_report_absentee_hours_xlsx")
    def api_report_absentee_hours_xlsx():
        try:
            report = container.absentee_hours_service.build_report(field=optional_text(request.args.get("field")))
        except ReportUnavailableError as e:
            return jsonify({"error": str(e)}), 503
        except Exception as e:
            logger.exception("Absentee hours report failed")
            return jsonify({"error": f"Failed to build absentee hours report: {e}"}), 500
        return _download(
            write_absentee_hours_xlsx(report.students),
            mimetype=XLSX_MIMETYPE,
            filename=absentee_hours_xlsx_filename(now_local().date()),
        )

    @app.route("/api/reports/absentees", methods=["GET"], endpoint="api_report_absentees")
    def api_report_absentees():
        try:
            report = _absentee_report()
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except ReportUnavailableError as e:
            return jsonify({"error": str(e)}), 503
        except Exception as e:
            logger.exception("Absentee report failed")
            return jsonify({"error": f"Failed to build absentee report: {e}"}), 500
        return jsonify(report.to_dict())

    @app.route("/api/reports/absentees.csv", methods=["GET"], endpoint="api_report_absentees_csv")
    def api_report_absentees_csv():
        try:
            report = _absentee_report()
        except ValidationError as e:
            return jsonify({"error": str(e)}), 400
        except ReportUnavailableError as e:
            return jsonify({"error": str(e)}), 503
        except Exception as e:
            logger.exception("Absentee report failed")
            return jsonify({"error": f"Failed to build absentee report: {e}"}), 500

        logger.info("Exporting %s absentee rows (%s)", len(report.records), report.filters.report_type.value)
        return _download(
            write_absentee_csv(report.records),
            mimetype="text/csv",
            filename=absentee_csv_filename(report.filters.report_type, now_local().date()),
        )
