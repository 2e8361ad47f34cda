"""Example: use the reporting services directly (no Flask).

Controllers are thin; the aggregation lives in the services.
"""

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from config import get_settings_module

from rollcall.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, cache_dir=settings.CACHE_DIR)

    report = container.absentee_hours_service.build_report()
    print(f"{report.total_students} students, {report.high_risk_count} high risk, avg {report.average_hours}h")
    for h in report.students[:5]:
        print(f"  {h.matricule} {h.student_name}: {h.total_absent_hours:g}h ({h.risk_level.value})")


if __name__ == "__main__":
    main()
