from linkshortener.services.url_service import URLService
from linkshortener.services.factory import build_cache, build_url_service


__all__ = [
    'URLService',
    'build_cache',
    'build_url_service',
]
