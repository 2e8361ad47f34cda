"""Write an absentee report CSV without going through Flask.

    python scripts/export_report.py --report-type weekly --field "Computer Science"
"""
from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from rollcall.common.datetime_utils import now_local
from rollcall.common.logging import configure_logging
from rollcall.container import build_container
from rollcall.core.exceptions import DomainError
from rollcall.reports.export import absentee_csv_filename, write_absentee_csv
from rollcall.reports.model import ReportFilters


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--date-from")
    parser.add_argument("--date-to")
    parser.add_argument("--report-type", default="daily")
    parser.add_argument("--field")
    parser.add_argument("--level")
    parser.add_argument("--out-dir", default=".")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))
    container = build_container(db_config=settings.DB_CONFIG, cache_dir=settings.CACHE_DIR)

    today = now_local().date()
    try:
        filters = ReportFilters.from_query(
            {
                "date_from": args.date_from,
                "date_to": args.date_to,
                "report_type": args.report_type,
                "field": args.field,
                "level": args.level,
            },
            today=today,
        )
        report = container.absentee_report_service.build_report(filters)
    except DomainError as e:
        raise SystemExit(f"Error: {e}")

    out_file = Path(args.out_dir) / absentee_csv_filename(filters.report_type, today)
    out_file.write_bytes(write_absentee_csv(report.records))
    print(f"OK: {len(report.records)} rows -> {out_file}" + (" (from cache)" if report.stale else ""))


if __name__ == "__main__":
    main()
