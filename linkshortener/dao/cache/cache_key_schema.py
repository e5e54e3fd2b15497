import functools
from collections.abc import Callable


__all__ = [
    'CacheKeySchema',
    'url_cache_key',
    'user_urls_cache_key',
    'user_urls_cache_prefix',
]  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class CacheKeySchema:
    """Provide standardized keys for the read-through URL cache.

    Two key families exist:
        - url:<id>                            -> destination URL of one short URL
        - user:<user_id>:urls:<page>:<limit>  -> one page of a user's URL listing

    Listing keys are parameterized by page AND limit, so every page size a user
    requested occupies its own slot. Invalidation therefore works on the
    'user:<user_id>:urls:' prefix rather than on individual keys.

    An optional prefix can be provided to namespace all generated keys, which
    is needed when the cache shares a Redis database with other data, e.g.
    "linkshortener:prod" -> "cache:linkshortener:prod:url:42".

    NOTE: Yes, this class mirrors RedisKeySchema, but we don't want to spaghettify
    the caching layer with our Redis datastore backend.
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = f'cache:{prefix}' if prefix is not None else None

    @prefix_key
    def url_key(self, url_id: int | str) -> str:
        return f'url:{url_id}'

    @prefix_key
    def user_urls_key(self, user_id: str, page: int, limit: int) -> str:
        return f'user:{user_id}:urls:{int(page)}:{int(limit)}'

    @prefix_key
    def user_urls_prefix(self, user_id: str) -> str:
        return f'user:{user_id}:urls:'

    def patterns(self) -> list[str]:
        """Return glob patterns matching every key generated by this schema

        Without a prefix only the two cache families are matched, never '*',
        so a scan cannot reach URL store keys ('urls:...', 'users:...') kept
        in the same database.
        """
        if self.prefix is not None:
            return [f'{self.prefix}:*']
        return ['url:*', 'user:*']


_DEFAULT_SCHEMA = CacheKeySchema()


def url_cache_key(url_id: int | str) -> str:
    """Return the single-URL cache key, e.g. 'url:123'"""
    return _DEFAULT_SCHEMA.url_key(url_id)


def user_urls_cache_key(user_id: str, page: int, limit: int) -> str:
    """Return the listing cache key, e.g. 'user:42:urls:1:5'"""
    return _DEFAULT_SCHEMA.user_urls_key(user_id, page, limit)


def user_urls_cache_prefix(user_id: str) -> str:
    """Return the prefix shared by every listing key of a user, e.g. 'user:42:urls:'"""
    return _DEFAULT_SCHEMA.user_urls_prefix(user_id)
