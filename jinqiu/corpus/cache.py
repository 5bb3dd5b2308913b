"""In-memory cache of fetched corpus files."""

from collections import OrderedDict
from threading import Lock
from typing import Any, Dict, Optional

from ..utils import setup_logger

logger = setup_logger(__name__)


class FileCache:
    """
    Cache parsed JSON payloads by file path for the lifetime of a session.

    Unbounded by default. When ``max_entries`` is set the least recently
    used entry is evicted once the bound is exceeded.
    """

    def __init__(self, max_entries: Optional[int] = None):
        """
        Initialize file cache.

        Args:
            max_entries: Optional LRU bound (None keeps everything)
        """
        self.max_entries = max_entries
        self._lock = Lock()
        self._entries: "OrderedDict[str, Any]" = OrderedDict()
        self._hits = 0
        self._misses = 0

    def __contains__(self, path: str) -> bool:
        with self._lock:
            return path in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, path: str) -> Optional[Any]:
        """
        Get a cached payload.

        Args:
            path: File path or URL used as the key

        Returns:
            Cached payload, or None on a miss
        """
        with self._lock:
            if path not in self._entries:
                self._misses += 1
                return None
            self._hits += 1
            self._entries.move_to_end(path)
            logger.debug("Cache hit: %s", path)
            return self._entries[path]

    def put(self, path: str, payload: Any) -> None:
        """Store a payload, evicting the oldest entry past the bound."""
        with self._lock:
            self._entries[path] = payload
            self._entries.move_to_end(path)
            if self.max_entries is not None:
                while len(self._entries) > self.max_entries:
                    evicted, _ = self._entries.popitem(last=False)
                    logger.debug("Cache evict: %s", evicted)

    def clear(self) -> None:
        """Clear all cache."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        with self._lock:
            return {
                'entries': len(self._entries),
                'max_entries': self.max_entries,
                'hits': self._hits,
                'misses': self._misses,
            }
