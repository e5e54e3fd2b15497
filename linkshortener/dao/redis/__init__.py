from linkshortener.dao.redis.redis_key_schema import RedisKeySchema
from linkshortener.dao.redis.mixins import RedisClientMixin
from linkshortener.dao.redis.url_redis_dao import URLRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'URLRedisDAO',
]
