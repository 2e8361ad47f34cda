"""JSON file cache.

One file per key under ``CACHE_DIR``. Values must be JSON serialisable; each
file also records when it was written::

    {"key": "rollcall_cached_reports", "cached_at": "2026-01-05T08:00:00", "value": [...]}

Failures are logged and reported as ``False`` / ``None`` so a broken cache
never breaks the request that tried to use it.
"""
from __future__ import annotations

import json
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Optional

from ..common.datetime_utils import now_local
from ..common.logging import get_logger
from .repository import LocalCache

logger = get_logger(__name__)

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


class JsonFileCache(LocalCache):
    def __init__(self, directory: str | Path):
        self._dir = Path(directory)

    def _path_for(self, key: str) -> Path:
        if not key:
            raise ValueError("cache key must not be empty")
        return self._dir / f"{_UNSAFE_KEY_CHARS.sub('_', key)}.json"

    def cache_data(self, key: str, value: Any) -> bool:
        payload = {"key": key, "cached_at": now_local().isoformat(timespec="seconds"), "value": value}
        try:
            path = self._path_for(key)
            self._dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._dir, prefix=".tmp-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(payload, f, ensure_ascii=False)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Failed to cache %s: %s", key, e)
            return False
        logger.debug("Cached %s", key)
        return True

    def get_cached_data(self, key: str) -> Optional[Any]:
        try:
            path = self._path_for(key)
            if not path.exists():
                return None
            with path.open(encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning("Failed to read cached %s: %s", key, e)
            return None
        if not isinstance(payload, dict):
            return None
        return payload.get("value")
