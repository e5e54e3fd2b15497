"""Data Access Object (DAO) implementation for persisting URL records in Redis

This module provides a Redis-based implementation of URLBaseDAO. It is the
persistent store the cache layer reads through to.

Redis layout (all keys optionally namespaced with the app prefix):
    - urls:counter          -> INCR counter assigning monotonic identifiers
    - urls:<id>             -> HASH {original_url, user_id, clicks, created_at}
    - users:<user_id>:urls  -> ZSET of the user's URL ids, scored by id

Because identifiers are monotonic, ordering a user's ZSET by score in reverse
yields their URLs newest first.

Classes:
    URLRedisDAO:
        DAO for storing and retrieving URLModel records in a Redis datastore.

Example:
    >>> from linkshortener.dao.redis import URLRedisDAO

    >>> dao = URLRedisDAO(prefix="app:dev")
    >>> url = dao.create('https://example.com/page', user_id='42')
    >>> url.id
    1
    >>> dao.hit(1)
    1
    >>> [u.id for u in dao.find_by_user('42', offset=0, limit=5)]
    [1]
"""

from datetime import datetime, UTC

from beartype import beartype

from linkshortener.models import URLModel
from linkshortener.dao.base import URLBaseDAO
from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.dao.redis.helpers import handle_redis_connection_error
from linkshortener.dao.exceptions import URLNotFoundError


class URLRedisDAO(RedisClientMixin, URLBaseDAO):
    """Redis-based Data Access Object (DAO) for URL records

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        key_schema (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        create(original_url, user_id) -> URLModel
        get(url_id) -> URLModel
        hit(url_id) -> int
        find_by_user(user_id, offset, limit) -> list[URLModel]
        count(user_id) -> int
        delete(url_id) -> URLModel
        delete_all(user_id) -> list[int]

    All methods raise DataStoreError on connectivity issues with Redis.
    """

    @handle_redis_connection_error
    @beartype
    def create(self, original_url: str, user_id: str, **kwargs) -> URLModel:
        """Persist a new URL record

        The identifier is taken from the global counter first. The record hash
        and the user index entry are then written in one transaction, so a
        record never exists without being listed for its owner.

        Args:
            original_url (str):
                The long URL to shorten.
            user_id (str):
                Owner of the new record.

        Returns:
            URLModel: The stored record.
        """
        url_id = int(self.redis.incr(self.key_schema.counter_key()))
        created_at = datetime.now(UTC)

        with self.redis.pipeline(transaction=True) as pipe:
            # fmt: off
            pipe.hset(self.key_schema.url_key(url_id), mapping={
                'original_url': original_url,
                'user_id': user_id,
                'clicks': 0,
                'created_at': created_at.isoformat(),
            })
            # fmt: on
            pipe.zadd(self.key_schema.user_urls_key(user_id), {str(url_id): url_id})
            pipe.execute()

        return URLModel(id=url_id, original_url=original_url, user_id=user_id, clicks=0, created_at=created_at)

    @handle_redis_connection_error
    @beartype
    def get(self, url_id: int, **kwargs) -> URLModel:
        """Retrieve a URL record by identifier

        Raises:
            URLNotFoundError:
                If the record does not exist in Redis.
        """
        fields = self.redis.hgetall(self.key_schema.url_key(url_id))
        if not fields:
            raise URLNotFoundError(f"URL with id '{url_id}' not found.")
        return self._to_model(url_id, fields)

    @handle_redis_connection_error
    @beartype
    def hit(self, url_id: int, **kwargs) -> int:
        """Increment the click counter of a URL record

        Returns:
            int: The updated click count.

        Raises:
            URLNotFoundError:
                If the record does not exist in Redis.
        """
        url_key = self.key_schema.url_key(url_id)
        if not self.redis.exists(url_key):
            raise URLNotFoundError(f"URL with id '{url_id}' not found.")
        return int(self.redis.hincrby(url_key, 'clicks', 1))

    @handle_redis_connection_error
    @beartype
    def find_by_user(self, user_id: str, offset: int = 0, limit: int = 5, **kwargs) -> list[URLModel]:
        """Retrieve a page of a user's URL records, newest first

        Records deleted between reading the user index and reading the hashes
        are skipped.
        """
        if limit <= 0:
            return []

        url_ids = self.redis.zrevrange(self.key_schema.user_urls_key(user_id), offset, offset + limit - 1)
        if not url_ids:
            return []

        with self.redis.pipeline(transaction=False) as pipe:
            for url_id in url_ids:
                pipe.hgetall(self.key_schema.url_key(int(url_id)))
            records = pipe.execute()

        return [self._to_model(int(url_id), fields) for url_id, fields in zip(url_ids, records) if fields]

    @handle_redis_connection_error
    @beartype
    def count(self, user_id: str, **kwargs) -> int:
        return int(self.redis.zcard(self.key_schema.user_urls_key(user_id)))

    @handle_redis_connection_error
    @beartype
    def delete(self, url_id: int, **kwargs) -> URLModel:
        """Delete a URL record and remove it from its owner's index

        Raises:
            URLNotFoundError:
                If the record does not exist in Redis.
        """
        url = self.get(url_id)

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.delete(self.key_schema.url_key(url_id))
            pipe.zrem(self.key_schema.user_urls_key(url.user_id), str(url_id))
            pipe.execute()

        return url

    @handle_redis_connection_error
    @beartype
    def delete_all(self, user_id: str, **kwargs) -> list[int]:
        """Delete every URL record owned by a user

        Returns:
            list[int]: Identifiers of the deleted records.
        """
        user_urls_key = self.key_schema.user_urls_key(user_id)
        url_ids = [int(url_id) for url_id in self.redis.zrange(user_urls_key, 0, -1)]

        with self.redis.pipeline(transaction=True) as pipe:
            for url_id in url_ids:
                pipe.delete(self.key_schema.url_key(url_id))
            pipe.delete(user_urls_key)
            pipe.execute()

        return url_ids

    @staticmethod
    def _to_model(url_id: int, fields: dict) -> URLModel:
        created_at = fields.get('created_at')
        return URLModel(
            id=url_id,
            original_url=fields['original_url'],
            user_id=fields['user_id'],
            clicks=int(fields.get('clicks', 0)),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )
