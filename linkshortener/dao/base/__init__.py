from linkshortener.dao.base.url_base_dao import URLBaseDAO
from linkshortener.dao.base.cache_base_dao import CacheBaseDAO


__all__ = [
    'URLBaseDAO',
    'CacheBaseDAO',
]
