"""In-process key/value cache with per-entry expiry

This is the process-wide cache consulted before the persistent URL store. One
instance is shared by every request handler in the process. Entries live in a
cachetools.TLRUCache whose time-to-use function reads each entry's own TTL,
so single-URL entries, listing pages and defaults expire independently.
cachetools caches are not thread-safe: every access goes through a lock.

Expiry is passive: an entry whose TTL elapsed is reported as absent by get()
and has() immediately, whether or not a sweep removed it yet. A daemon thread
calls sweep() every `check_period` seconds to bound memory.

Classes:
    MemoryCacheDAO:
        Thread-safe TTL cache implementing CacheBaseDAO.

Example:
    >>> cache = MemoryCacheDAO(default_ttl=600, check_period=120)
    >>> cache.set('user:42:urls:1:5', {'urls': [], 'pagination': {...}}, ttl=300)
    True
    >>> cache.keys()
    ['user:42:urls:1:5']
    >>> cache.delete_prefix('user:42:urls:')
    1
    >>> cache.close()
"""

import math
import time
import logging
import threading
from dataclasses import dataclass
from collections.abc import Iterable

from cachetools import Cache, TLRUCache

from linkshortener.constants import TTL
from linkshortener.dao.base import CacheBaseDAO
from linkshortener.types import CacheValue


logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True, slots=True)
class _CacheEntry:
    value: CacheValue
    ttl: int


def _time_to_use(_key: str, entry: _CacheEntry, now: float) -> float:
    return now + entry.ttl


class MemoryCacheDAO(CacheBaseDAO):
    """Thread-safe in-memory cache with TTL expiry and background sweeping

    Attributes:
        default_ttl (int):
            TTL (seconds) used when set() is called with ttl=0 or None.
        check_period (int):
            Seconds between background sweeps. 0 disables the sweeper thread.
        max_keys (int | None):
            Maximum number of held entries. When reached, set() refuses new
            keys (returns False) but still overwrites existing ones.
    """

    def __init__(
        self,
        default_ttl: int = TTL.DEFAULT,
        check_period: int = TTL.CHECK_PERIOD,
        max_keys: int | None = None,
    ):
        if default_ttl <= 0:
            raise ValueError(f'Default TTL must be a positive number of seconds (given value: {default_ttl}).')
        if check_period < 0:
            raise ValueError(f'Check period must be a non-negative number of seconds (given value: {check_period}).')
        if max_keys is not None and max_keys <= 0:
            raise ValueError(f'Max keys must be a positive integer (given value: {max_keys}).')

        self.default_ttl = default_ttl
        self.check_period = check_period
        self.max_keys = max_keys

        self._cache = TLRUCache(
            maxsize=max_keys if max_keys is not None else math.inf,
            ttu=_time_to_use,
            timer=self._now,
        )
        self._lock = threading.Lock()
        self._stopped = threading.Event()
        self._sweeper: threading.Thread | None = None

        if check_period > 0:
            self._sweeper = threading.Thread(target=self._run_sweeper, name='memory-cache-sweeper', daemon=True)
            self._sweeper.start()

    @staticmethod
    def _now() -> float:
        return time.monotonic()

    def get(self, key: str, default: CacheValue = None) -> CacheValue:
        with self._lock:
            self._cache.expire()
            entry = self._cache.get(key)
        return default if entry is None else entry.value

    def set(self, key: str, value: CacheValue, ttl: int | None = None) -> bool:
        """Store value under key until now + ttl

        Args:
            key (str): cache key
            value (CacheValue): any Python object
            ttl (int | None): seconds to live; 0 or None means default_ttl

        Returns:
            bool: True if stored, False if the cache is full.

        Raises:
            ValueError: If ttl is negative.
        """
        if ttl is not None and ttl < 0:
            raise ValueError(f'TTL must be a non-negative number of seconds (given value: {ttl}).')
        ttl = ttl or self.default_ttl

        with self._lock:
            # currsize expires stale entries before counting
            if self.max_keys is not None and key not in self._cache and self._cache.currsize >= self.max_keys:
                return False
            self._cache[key] = _CacheEntry(value=value, ttl=ttl)
        return True

    def delete(self, keys: str | Iterable[str]) -> int:
        if isinstance(keys, str):
            keys = [keys]

        removed = 0
        with self._lock:
            self._cache.expire()
            for key in keys:
                if self._cache.pop(key, _MISSING) is not _MISSING:
                    removed += 1
        return removed

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._cache

    def keys(self) -> list[str]:
        # TLRUCache iteration hides expired entries; list every held key instead
        with self._lock:
            return list(Cache.__iter__(self._cache))

    def flush(self) -> None:
        with self._lock:
            self._cache.clear()

    def sweep(self) -> int:
        """Remove expired entries

        Returns:
            int: Number of entries reclaimed.
        """
        with self._lock:
            return len(self._cache.expire())

    def close(self) -> None:
        """Stop the background sweeper thread"""
        self._stopped.set()
        if self._sweeper is not None and self._sweeper is not threading.current_thread():
            self._sweeper.join(timeout=1)

    def _run_sweeper(self) -> None:
        while not self._stopped.wait(self.check_period):
            removed = self.sweep()
            if removed:
                logger.debug('Swept expired cache entries.', extra={'removed': removed})
