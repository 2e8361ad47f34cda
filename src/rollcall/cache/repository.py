from __future__ import annotations

from typing import Any, Optional, Protocol


class LocalCache(Protocol):
    """Key-value fallback store for the last good report payloads."""

    def cache_data(self, key: str, value: Any) -> bool:
        raise NotImplementedError

    def get_cached_data(self, key: str) -> Optional[Any]:
        raise NotImplementedError
