from linkshortener.dao.cache.cache_key_schema import CacheKeySchema, url_cache_key, user_urls_cache_key, user_urls_cache_prefix
from linkshortener.dao.cache.memory_cache_dao import MemoryCacheDAO
from linkshortener.dao.cache.redis_cache_dao import RedisCacheDAO

__all__ = [
    'CacheKeySchema',
    'url_cache_key',
    'user_urls_cache_key',
    'user_urls_cache_prefix',
    'MemoryCacheDAO',
    'RedisCacheDAO',
]
