"""
Search response cache for Where-to-Buy
Responses are keyed by the full request URL and expire after a fixed TTL.
"""

import time
import threading
from collections import OrderedDict
from typing import Any, Dict, NamedTuple, Optional


class _Entry(NamedTuple):
    value: Any
    expires_at: float


class TTLCache:
    """Thread-safe in-memory cache; the oldest entry is evicted when full."""

    def __init__(self, max_size: int = 100, ttl_seconds: int = 3600):
        """
        Args:
            max_size: Maximum number of cached responses
            ttl_seconds: Default lifetime of an entry
        """
        self._entries: "OrderedDict[str, _Entry]" = OrderedDict()
        self._max_size = max_size
        self._ttl_seconds = ttl_seconds
        self._hits = 0
        self._misses = 0
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None when missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.expires_at < time.time():
                del self._entries[key]
                entry = None

            if entry is None:
                self._misses += 1
                return None

            self._hits += 1
            return entry.value

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Store a value; ttl overrides the default lifetime in seconds."""
        lifetime = self._ttl_seconds if ttl is None else ttl

        with self._lock:
            # Re-setting a key makes it the newest entry
            self._entries.pop(key, None)
            if len(self._entries) >= self._max_size:
                self.cleanup_expired()
            while self._entries and len(self._entries) >= self._max_size:
                self._entries.popitem(last=False)
            self._entries[key] = _Entry(value, time.time() + lifetime)

    def clear(self) -> int:
        """Drop every entry. Returns the number of entries removed."""
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
            return removed

    def cleanup_expired(self) -> int:
        """Drop expired entries. Returns the number removed."""
        now = time.time()
        with self._lock:
            expired = [key for key, entry in self._entries.items() if entry.expires_at < now]
            for key in expired:
                del self._entries[key]
            return len(expired)

    def stats(self) -> Dict[str, Any]:
        with self._lock:
            return {
                "size": len(self._entries),
                "max_size": self._max_size,
                "ttl_seconds": self._ttl_seconds,
                "hits": self._hits,
                "misses": self._misses,
            }


_cache_instance: Optional[TTLCache] = None


def get_cache() -> TTLCache:
    """Get the process-wide response cache, sized from the app config."""
    global _cache_instance
    if _cache_instance is None:
        from flask import current_app, has_app_context

        settings = current_app.config if has_app_context() else {}
        _cache_instance = TTLCache(
            max_size=settings.get("CACHE_MAX_SIZE", 100),
            ttl_seconds=settings.get("CACHE_TTL_SECONDS", 3600),
        )
    return _cache_instance
