"""
Time-bounded in-memory caches.

Entries expire lazily: an expired entry is never returned and is simply
overwritten by the next put. When a cache grows past its soft limit, expired
entries are purged in one sweep.
"""
import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Hashable, Optional, TypeVar

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """A cached value with its creation time and time-to-live in seconds."""
    value: T
    created_at: float
    ttl: float
    
    def is_valid(self, now: float) -> bool:
        return now - self.created_at < self.ttl


class TTLCache(Generic[K, T]):
    """
    Thread-safe key/value cache with per-entry expiry.
    
    Concurrent puts for the same key are last-write-wins.
    """
    
    def __init__(
        self,
        ttl: float,
        max_entries: int = 1000,
        clock: Callable[[], float] = time.monotonic,
        name: str = "cache",
    ):
        """
        :param ttl: Lifetime of each entry in seconds
        :param max_entries: Size above which expired entries are purged on write
        :param clock: Monotonic time source (injectable for tests)
        :param name: Label used in log messages
        """
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        self.ttl = ttl
        self.max_entries = max_entries
        self.name = name
        self._clock = clock
        self._entries: Dict[K, CacheEntry[T]] = {}
        self._lock = threading.Lock()
    
    def get(self, key: K) -> Optional[T]:
        """Return the cached value, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if not entry.is_valid(self._clock()):
                return None
            return entry.value
    
    def put(self, key: K, value: T) -> None:
        """Store a value, replacing any previous entry for the key."""
        with self._lock:
            self._entries[key] = CacheEntry(value=value, created_at=self._clock(), ttl=self.ttl)
            if len(self._entries) > self.max_entries:
                self._purge_expired_locked()
    
    def purge_expired(self) -> int:
        """
        Drop every expired entry.
        
        :return: Number of entries removed
        """
        with self._lock:
            return self._purge_expired_locked()
    
    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
    
    def __contains__(self, key: K) -> bool:
        return self.get(key) is not None
    
    def _purge_expired_locked(self) -> int:
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if not entry.is_valid(now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"{self.name}: purged {len(expired)} expired entries")
        return len(expired)
