"""Entry point for ``flask --app app run`` (or ``python app.py``)."""
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent
for path in (REPO_ROOT, REPO_ROOT / "src"):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

from rollcall import create_app

app = create_app()

if __name__ == "__main__":
    app.run(debug=app.config["DEBUG"])
