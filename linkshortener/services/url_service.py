"""Read-through orchestration between the URL store and the cache layer

URLService is the single place that decides when the cache is consulted,
populated and invalidated. Request handlers only talk to this class.

Consistency contract:
    - Reads go through the cache: on a miss the store is queried, the result
      shaped (short URLs rendered with the codec) and cached with a bounded TTL.
    - Writes go to the store first and are followed by invalidation, never by
      cache updates. The one exception is the single-URL entry of a freshly
      created URL, populated right away so the first redirect is a cache hit.
    - Creating or deleting URLs for a user clears every cached listing page of
      that user ('user:<id>:urls:' prefix), whatever page/limit it was cached
      under. Deleting a URL also drops its 'url:<id>' entry.
    - Redirects increment clicks in the store but never touch the cached
      destination URL. Click counts are read from the store, not from the
      single-URL entries.
    - There is no transaction spanning store and cache: between a store write
      and its invalidation a concurrent reader may still see a stale listing.

Example:
    >>> service = URLService(store=URLRedisDAO(...), cache=MemoryCacheDAO())
    >>> view = service.create_url('https://example.com', user_id='42')
    >>> service.resolve(encode_id(view['id']))
    'https://example.com'
    >>> service.list_urls('42', page=1, limit=5)['pagination']
    {'total': 1, 'page': 1, 'limit': 5, 'hasMore': False}
"""

import copy
import math
import logging

from linkshortener.constants import TTL, DefaultQuota, Pagination as PaginationDefaults, GUEST_USER_ID
from linkshortener.dao.base import CacheBaseDAO, URLBaseDAO
from linkshortener.dao.cache import CacheKeySchema
from linkshortener.dao.exceptions import URLNotFoundError
from linkshortener.exceptions import URLOwnershipError, URLQuotaExceededError
from linkshortener.models import Pagination, URLModel
from linkshortener.types import URLListing, URLView, UserStats
from linkshortener.utils.config import short_url_domain
from linkshortener.utils.shortener import build_short_url, decode_shortcode


logger = logging.getLogger(__name__)

CREATED_AT_FORMAT = '%Y-%m-%d %H:%M:%S'


class URLService:
    """Read-through cache in front of a URL store

    Attributes:
        store (URLBaseDAO):
            Persistent URL store (source of truth).
        cache (CacheBaseDAO):
            Process-wide cache shared by all request handlers.
        key_schema (CacheKeySchema):
            Builder for cache keys.
        domain (str):
            Domain used to render short URLs.
    """

    def __init__(
        self,
        store: URLBaseDAO,
        cache: CacheBaseDAO,
        key_schema: CacheKeySchema | None = None,
        domain: str | None = None,
    ):
        self.store = store
        self.cache = cache
        self.key_schema = key_schema or CacheKeySchema()
        self.domain = domain or short_url_domain()

    # -------------------------------
    # Writes
    # -------------------------------

    def create_url(self, original_url: str, user_id: str | None = None) -> URLView:
        """Shorten a URL

        Args:
            original_url (str):
                The long URL to shorten.
            user_id (str | None):
                Owner. Anonymous URLs are recorded under GUEST_USER_ID and are
                not subject to the per-user quota.

        Returns:
            URLView: the new URL, including its rendered short URL.

        Raises:
            URLQuotaExceededError:
                If the user already owns DefaultQuota.LINK_GENERATION URLs.
            DataStoreError:
                If the store is unavailable.
        """
        if user_id is not None and self.store.count(user_id) >= DefaultQuota.LINK_GENERATION:
            raise URLQuotaExceededError(
                f'You have reached the maximum limit of {DefaultQuota.LINK_GENERATION} URLs. '
                'Please delete some URLs to create new ones.'
            )

        owner = user_id if user_id is not None else GUEST_USER_ID
        url = self.store.create(original_url, owner)
        logger.info('Created URL record.', extra={'urlId': url.id, 'userId': owner})

        self._cache_set(self.key_schema.url_key(url.id), url.original_url, TTL.URL)
        self.invalidate_user_urls(owner)

        return self._view(url)

    def delete_url(self, url_id: int, user_id: str | None = None) -> URLModel:
        """Delete a URL and invalidate every cache entry it may appear in

        Args:
            url_id (int):
                Identifier of the URL to delete.
            user_id (str | None):
                If given, the caller must own the URL.

        Returns:
            URLModel: the deleted record.

        Raises:
            URLNotFoundError:
                If the URL does not exist.
            URLOwnershipError:
                If user_id is given and does not own the URL.
        """
        url = self.store.get(url_id)
        if user_id is not None and url.user_id != user_id:
            raise URLOwnershipError('You are not authorized to delete this URL')

        self.store.delete(url_id)
        self.cache.delete(self.key_schema.url_key(url_id))
        self.invalidate_user_urls(url.user_id)
        logger.info('Deleted URL record.', extra={'urlId': url_id, 'userId': url.user_id})

        return url

    def delete_all_urls(self, user_id: str) -> int:
        """Delete every URL owned by a user

        Returns:
            int: Number of deleted URLs.
        """
        url_ids = self.store.delete_all(user_id)
        if url_ids:
            self.cache.delete([self.key_schema.url_key(url_id) for url_id in url_ids])
        self.invalidate_user_urls(user_id)
        logger.info('Deleted all URL records of user.', extra={'userId': user_id, 'deleted': len(url_ids)})

        return len(url_ids)

    def invalidate_user_urls(self, user_id: str) -> int:
        """Drop every cached listing page of a user, for every page size

        Returns:
            int: Number of cache entries removed.
        """
        prefix = self.key_schema.user_urls_prefix(user_id)
        removed = self.cache.delete_prefix(prefix)
        logger.debug('Invalidated cached user URL listings.', extra={'cachePrefix': prefix, 'removed': removed})
        return removed

    # -------------------------------
    # Reads
    # -------------------------------

    def resolve(self, shortcode: str) -> str:
        """Resolve a short code to its destination URL and count the click

        Args:
            shortcode (str):
                Short code taken from the redirect path.

        Returns:
            str: destination URL.

        Raises:
            InvalidShortCodeError:
                If the short code contains characters outside the alphabet.
            URLNotFoundError:
                If no URL exists for the decoded identifier.
            DataStoreError:
                If the store is unavailable (never masked by the cache).
        """
        url_id = decode_shortcode(shortcode)
        cache_key = self.key_schema.url_key(url_id)

        target_url = self.cache.get(cache_key)
        if target_url is not None:
            logger.debug('Cache hit for redirect target.', extra={'cacheKey': cache_key})
            try:
                self.store.hit(url_id)
            except URLNotFoundError:
                # Record vanished behind the cache's back; never redirect to it again.
                self.cache.delete(cache_key)
                raise
            return target_url

        logger.debug('Cache miss for redirect target.', extra={'cacheKey': cache_key})
        url = self.store.get(url_id)
        self.store.hit(url_id)
        self._cache_set(cache_key, url.original_url, TTL.URL)
        return url.original_url

    def list_urls(self, user_id: str, page: int = PaginationDefaults.PAGE, limit: int = PaginationDefaults.LIMIT) -> URLListing:
        """Return one page of a user's URLs, newest first

        Pages past the last one are clamped to the last page instead of coming
        back empty. The payload is cached under the requested (normalized)
        page and limit for TTL.USER_URLS seconds. Callers always receive their
        own copy, so mutating the result never alters the cached page.

        Returns:
            URLListing: {'urls': [URLView, ...], 'pagination': {...}}
        """
        page = max(1, page)
        limit = max(1, limit)

        cache_key = self.key_schema.user_urls_key(user_id, page, limit)
        cached = self.cache.get(cache_key)
        if isinstance(cached, dict) and isinstance(cached.get('urls'), list) and 'pagination' in cached:
            logger.debug('Cache hit for user URLs page.', extra={'cacheKey': cache_key})
            return copy.deepcopy(cached)

        logger.debug('Cache miss for user URLs page.', extra={'cacheKey': cache_key})
        total = self.store.count(user_id)
        total_pages = math.ceil(total / limit)
        adjusted_page = min(page, total_pages) if total_pages > 0 else 1
        skip = (adjusted_page - 1) * limit

        urls = self.store.find_by_user(user_id, offset=skip, limit=limit)
        pagination = Pagination(total=total, page=adjusted_page, limit=limit, has_more=skip + len(urls) < total)
        listing = {
            'urls': [self._view(url) for url in urls],
            'pagination': pagination.to_dict(),
        }

        self._cache_set(cache_key, copy.deepcopy(listing), TTL.USER_URLS)
        return listing

    def user_stats(self, user_id: str) -> UserStats:
        """Return click statistics of a user's URLs

        Stats are computed from the store on every call; click counts are
        never served from the cache.

        Returns:
            UserStats: {'totalClicks': int, 'totalUrls': int, 'topUrls': [URLView, ...]}
        """
        total = self.store.count(user_id)
        urls = self.store.find_by_user(user_id, offset=0, limit=total) if total else []
        top_urls = sorted(urls, key=lambda url: url.clicks, reverse=True)[: PaginationDefaults.TOP_URLS]

        return {
            'totalClicks': sum(url.clicks for url in urls),
            'totalUrls': len(urls),
            'topUrls': [self._view(url) for url in top_urls],
        }

    # -------------------------------
    # Helpers
    # -------------------------------

    def _cache_set(self, key: str, value, ttl: int) -> bool:
        stored = self.cache.set(key, value, ttl)
        if stored:
            logger.debug('Populated cache entry.', extra={'cacheKey': key, 'ttl': ttl})
        else:
            logger.warning('Cache refused entry; proceeding without caching.', extra={'cacheKey': key})
        return stored

    def _view(self, url: URLModel) -> URLView:
        return {
            'id': url.id,
            'originalUrl': url.original_url,
            'userId': url.user_id,
            'clicks': url.clicks,
            'createdAt': url.created_at.strftime(CREATED_AT_FORMAT) if url.created_at else None,
            'shortUrl': build_short_url(url.id, self.domain),
        }
