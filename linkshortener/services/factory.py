"""Process-wide construction of the cache, the URL store and URLService

Lambda containers keep module state between invocations, so everything built
here is memoized: one cache per process, shared by every handler, and one
URLService per lambda name.

Functions:
    build_cache() -> CacheBaseDAO
        Build the process cache selected by CACHE_BACKEND (redis unless local).
    build_url_service(lambda_name: str) -> URLService
        Build the read-through service for a given Lambda.

Example:
    >>> service = build_url_service('redirect_url')
    >>> service.resolve('B9')
    'https://example.com'
"""

import logging
import functools

from linkshortener.dao.base import CacheBaseDAO
from linkshortener.dao.cache import CacheKeySchema, MemoryCacheDAO, RedisCacheDAO
from linkshortener.dao.redis import URLRedisDAO
from linkshortener.services.url_service import URLService
from linkshortener.utils.config import app_prefix, cache_settings, load_config


logger = logging.getLogger(__name__)

# Section of the configuration document holding the shared cache's Redis settings
CACHE_CONFIG_SECTION = 'cache'


def _redis_kwargs(section: str) -> dict:
    app_config = load_config(section)
    logger.debug('Assuming Redis as the backend database for URL records.')
    return {f'redis_{k}': v for k, v in app_config['redis'].items()}


@functools.cache
def build_cache() -> CacheBaseDAO:
    """Build the process-wide cache

    The memory backend keeps unprefixed keys ('url:<id>', 'user:<id>:urls:...').
    The redis backend namespaces them under 'cache:<app prefix>:' and reads
    the Redis connection settings of the 'cache' configuration section.

    Raises:
        BadConfigurationError:
            If the cache settings are malformed, or the memory backend is
            selected outside a local run.
    """
    settings = cache_settings()
    logger.info(
        'Building process cache.',
        extra={k: v for k, v in settings.items() if v is not None},
    )

    if settings['backend'] == 'redis':
        return RedisCacheDAO(default_ttl=settings['default_ttl'], prefix=app_prefix(), **_redis_kwargs(CACHE_CONFIG_SECTION))

    return MemoryCacheDAO(
        default_ttl=settings['default_ttl'],
        check_period=settings['check_period'],
        max_keys=settings['max_keys'],
    )


@functools.cache
def build_url_service(lambda_name: str) -> URLService:
    """Build the URLService used by a Lambda handler

    Raises:
        FileNotFoundError:
            If the configuration document does not exist.
        DataStoreError:
            If Redis is unreachable.
    """
    store = URLRedisDAO(**_redis_kwargs(lambda_name), prefix=app_prefix())
    cache = build_cache()
    key_schema = cache.key_schema if isinstance(cache, RedisCacheDAO) else CacheKeySchema()
    return URLService(store=store, cache=cache, key_schema=key_schema)
