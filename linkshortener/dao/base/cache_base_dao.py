"""Abstract base class for cache data access objects (DAOs).

This interface defines the contract of the cache layer sitting in front of the
persistent URL store, regardless of where entries live (process memory, Redis).

Contract:
    - get() never returns an expired entry, even if it was not swept yet.
    - set() overwrites; ttl=0/None means "use the cache's default TTL".
    - delete() removes entries immediately and reports how many existed.
    - keys() reports every held key (expired or not). There is no native
      pattern delete: callers enumerate keys() and delete by prefix.

Example:
    Typical usage with a backend-specific implementation:

        >>> from linkshortener.dao.cache import MemoryCacheDAO
        >>> cache = MemoryCacheDAO(default_ttl=600)
        >>> cache.set('url:123', 'https://example.com', ttl=86400)
        True
        >>> cache.get('url:123')
        'https://example.com'
        >>> cache.delete_prefix('user:42:urls:')
        0
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable

from linkshortener.types import CacheValue


class CacheBaseDAO(ABC):
    """Interface for key/value caches with per-entry expiry.

    Methods:
        get(key: str, default=None) -> CacheValue:
            Return the live value stored under key, otherwise default.

        set(key: str, value: CacheValue, ttl: int | None = None) -> bool:
            Store value under key until now + ttl. Returns False if the cache
            refused the entry (callers proceed without caching).

        delete(keys: str | Iterable[str]) -> int:
            Remove entries and return how many were actually removed.

        has(key: str) -> bool:
            True if a live entry exists under key.

        keys() -> list[str]:
            All held keys, not filtered by expiry.

        flush() -> None:
            Remove every entry.

        delete_prefix(prefix: str) -> int:
            Remove every entry whose key starts with prefix.
    """

    @abstractmethod
    def get(self, key: str, default: CacheValue = None) -> CacheValue:
        pass

    @abstractmethod
    def set(self, key: str, value: CacheValue, ttl: int | None = None) -> bool:
        pass

    @abstractmethod
    def delete(self, keys: str | Iterable[str]) -> int:
        pass

    @abstractmethod
    def has(self, key: str) -> bool:
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        pass

    @abstractmethod
    def flush(self) -> None:
        pass

    def delete_prefix(self, prefix: str) -> int:
        """Remove every entry whose key starts with prefix

        Enumerates keys() and deletes the matching ones in one call.

        Args:
            prefix (str):
                Key prefix, e.g. 'user:42:urls:'.

        Returns:
            int: Number of entries removed.
        """
        matching = [key for key in self.keys() if key.startswith(prefix)]
        if not matching:
            return 0
        return self.delete(matching)
