"""
In-process cache of rendered dashboard views, keyed by request path.

A path can hold one entry per scope (the signed-in user whose row-level
security produced the view). Mutating actions call revalidate_path() after a
successful write, which drops every scope under that path. The next read
misses and is recomputed from the database.
"""

import logging
import threading
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class ViewCache:
    """Path -> scope -> cached payload. Safe to share across request threads."""

    def __init__(self) -> None:
        self._entries: Dict[str, Dict[Optional[str], Any]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _normalize(path: str) -> str:
        return "/" + path.strip("/")

    def get(self, path: str, scope: Optional[str] = None) -> Optional[Any]:
        with self._lock:
            return self._entries.get(self._normalize(path), {}).get(scope)

    def set(self, path: str, value: Any, scope: Optional[str] = None) -> None:
        with self._lock:
            self._entries.setdefault(self._normalize(path), {})[scope] = value

    def revalidate_path(self, path: str) -> None:
        """Mark the view at path as stale for every scope. Unknown paths are a no-op."""
        key = self._normalize(path)
        with self._lock:
            dropped = len(self._entries.pop(key, {}))
        logger.debug(f"Revalidated {key} ({dropped} cached entries dropped)")

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


view_cache = ViewCache()


def revalidate_path(path: str) -> None:
    """Signal that the view served at path is stale."""
    view_cache.revalidate_path(path)
