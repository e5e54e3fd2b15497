from datetime import datetime, UTC
from dataclasses import replace

import pytest

from linkshortener.models import URLModel
from linkshortener.dao.base import URLBaseDAO
from linkshortener.dao.cache import MemoryCacheDAO
from linkshortener.dao.exceptions import URLNotFoundError
from linkshortener.services import URLService


class InMemoryURLStore(URLBaseDAO):
    """Dict-backed URL store recording every call, for service-level tests"""

    def __init__(self):
        self.records: dict[int, URLModel] = {}
        self.counter = 0
        self.calls: list[str] = []

    def create(self, original_url, user_id, **kwargs):
        self.calls.append('create')
        self.counter += 1
        url = URLModel(
            id=self.counter,
            original_url=original_url,
            user_id=user_id,
            clicks=0,
            created_at=datetime(2025, 10, 15, 12, 30, 45, tzinfo=UTC),
        )
        self.records[url.id] = url
        return url

    def get(self, url_id, **kwargs):
        self.calls.append('get')
        try:
            return self.records[url_id]
        except KeyError:
            raise URLNotFoundError(f"URL with id '{url_id}' not found.") from None

    def hit(self, url_id, **kwargs):
        self.calls.append('hit')
        if url_id not in self.records:
            raise URLNotFoundError(f"URL with id '{url_id}' not found.")
        url = replace(self.records[url_id], clicks=self.records[url_id].clicks + 1)
        self.records[url_id] = url
        return url.clicks

    def find_by_user(self, user_id, offset=0, limit=5, **kwargs):
        self.calls.append('find_by_user')
        owned = sorted((url for url in self.records.values() if url.user_id == user_id), key=lambda url: url.id, reverse=True)
        return owned[offset : offset + limit]

    def count(self, user_id, **kwargs):
        self.calls.append('count')
        return sum(1 for url in self.records.values() if url.user_id == user_id)

    def delete(self, url_id, **kwargs):
        self.calls.append('delete')
        url = self.get(url_id)
        del self.records[url_id]
        return url

    def delete_all(self, user_id, **kwargs):
        self.calls.append('delete_all')
        url_ids = [url.id for url in self.records.values() if url.user_id == user_id]
        for url_id in url_ids:
            del self.records[url_id]
        return url_ids


@pytest.fixture
def store():
    return InMemoryURLStore()


@pytest.fixture
def cache():
    _cache = MemoryCacheDAO(check_period=0)
    yield _cache
    _cache.close()


@pytest.fixture
def service(store, cache):
    return URLService(store=store, cache=cache, domain='https://sho.rt')
