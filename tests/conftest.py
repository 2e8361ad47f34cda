from __future__ import annotations

import os
from datetime import datetime

import pytest

os.environ.setdefault("APP_ENV", "testing")


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday
    return datetime(2026, 1, 7, 9, 0, 0)
