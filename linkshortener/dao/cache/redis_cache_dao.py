"""Redis-backed implementation of the cache layer

Use this backend when several processes must share one cache (e.g. many
Lambda containers), where a per-process MemoryCacheDAO would let each process
serve its own stale listings.

Values are stored JSON-encoded with SET ... EX, so Redis expires entries on
its own. keys() enumerates the cache namespace with SCAN. flush() only deletes
keys in that namespace and never issues FLUSHDB, because the cache may share
its database with the URL store. Without a prefix the scan is limited to the
'url:*' and 'user:*' families.

Reads and writes degrade instead of failing: get()/has() report a miss and
set() returns False when Redis errors. delete(), keys() and flush() raise
DataStoreError, since a lost invalidation would leave stale entries behind.

Classes:
    RedisCacheDAO:
        CacheBaseDAO implementation on top of RedisClientMixin.

Example:
    >>> cache = RedisCacheDAO(redis_host='localhost', prefix='linkshortener:dev')
    >>> cache.set('cache:linkshortener:dev:url:123', 'https://example.com', ttl=86400)
    True
    >>> cache.get('cache:linkshortener:dev:url:123')
    'https://example.com'
"""

import json
import logging
from typing import Optional
from collections.abc import Iterable

import redis

from linkshortener.constants import TTL
from linkshortener.dao.base import CacheBaseDAO
from linkshortener.dao.cache.cache_key_schema import CacheKeySchema
from linkshortener.dao.exceptions import CachePutError
from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.dao.redis.helpers import handle_redis_connection_error
from linkshortener.types import CacheValue


logger = logging.getLogger(__name__)

SCAN_COUNT = 1000


class RedisCacheDAO(RedisClientMixin, CacheBaseDAO):
    """Redis-backed cache with native TTL expiry

    Attributes (via mixins):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        key_schema (CacheKeySchema):
            Key schema whose namespace keys() enumerates.

    Args:
        default_ttl (int):
            TTL (seconds) used when set() is called with ttl=0 or None.
        prefix (Optional[str]):
            Namespace prefix, e.g. 'linkshortener:prod'.
        **redis_kwargs:
            Connection parameters forwarded to RedisClientMixin.
    """

    def __init__(self, default_ttl: int = TTL.DEFAULT, prefix: Optional[str] = None, **redis_kwargs):
        if default_ttl <= 0:
            raise ValueError(f'Default TTL must be a positive number of seconds (given value: {default_ttl}).')

        super().__init__(prefix=prefix, **redis_kwargs)
        self.key_schema = CacheKeySchema(prefix=prefix)
        self.default_ttl = default_ttl

    def get(self, key: str, default: CacheValue = None) -> CacheValue:
        """Return the decoded value under key, or default on a miss

        An unreachable or failing cache reads as a miss so the caller falls
        back to the URL store.
        """
        try:
            blob = self.redis.get(key)
        except redis.exceptions.RedisError:
            logger.warning('Failed to read cache entry; treating as a miss.', extra={'cacheKey': key}, exc_info=True)
            return default
        if blob is None:
            return default
        return json.loads(blob)

    def set(self, key: str, value: CacheValue, ttl: int | None = None) -> bool:
        """Store the JSON encoding of value under key until now + ttl

        Redis failures are logged and reported as False: correctness never
        depends on the cache, so callers simply proceed without caching.

        Raises:
            ValueError: If ttl is negative.
            CachePutError: If value is not JSON serializable.
        """
        if ttl is not None and ttl < 0:
            raise ValueError(f'TTL must be a non-negative number of seconds (given value: {ttl}).')

        try:
            blob = json.dumps(value)
        except TypeError as e:
            raise CachePutError(f"Value for cache key '{key}' is not JSON serializable.") from e

        try:
            return bool(self.redis.set(key, blob, ex=ttl or self.default_ttl))
        except redis.exceptions.RedisError:
            logger.warning('Failed to write cache entry.', extra={'cacheKey': key}, exc_info=True)
            return False

    @handle_redis_connection_error
    def delete(self, keys: str | Iterable[str]) -> int:
        keys = [keys] if isinstance(keys, str) else list(keys)
        if not keys:
            return 0
        return int(self.redis.delete(*keys))

    def has(self, key: str) -> bool:
        try:
            return bool(self.redis.exists(key))
        except redis.exceptions.RedisError:
            logger.warning('Failed to read cache entry; treating as a miss.', extra={'cacheKey': key}, exc_info=True)
            return False

    @handle_redis_connection_error
    def keys(self) -> list[str]:
        keys = []
        for pattern in self.key_schema.patterns():
            keys.extend(self.redis.scan_iter(match=pattern, count=SCAN_COUNT))
        return keys

    @handle_redis_connection_error
    def flush(self) -> None:
        keys = self.keys()
        if keys:
            self.redis.delete(*keys)
