from typing import cast
from unittest.mock import MagicMock

import pytest

from linkshortener.services import URLService
from linkshortener.types import LambdaContext, URLListing, URLView


@pytest.fixture
def context() -> LambdaContext:
    class _Context:
        function_name = 'linkshortener-test'

    return _Context()


@pytest.fixture
def url_view() -> URLView:
    return {
        'id': 123,
        'originalUrl': 'https://example.com/blog/chuck-norris-is-awesome',
        'userId': '42',
        'clicks': 0,
        'createdAt': '2025-10-15 12:30:45',
        'shortUrl': 'https://sho.rt/r/B9',
    }


@pytest.fixture
def listing(url_view: URLView) -> URLListing:
    return {
        'urls': [url_view],
        'pagination': {'total': 1, 'page': 1, 'limit': 5, 'hasMore': False},
    }


@pytest.fixture
def url_service(url_view: URLView, listing: URLListing) -> URLService:
    service = MagicMock(spec=URLService)
    service.create_url.return_value = url_view
    service.resolve.return_value = url_view['originalUrl']
    service.list_urls.return_value = listing
    service.delete_all_urls.return_value = 3
    service.user_stats.return_value = {'totalClicks': 0, 'totalUrls': 1, 'topUrls': [url_view]}
    return cast(URLService, service)


@pytest.fixture(autouse=True)
def _not_running_locally(monkeypatch) -> None:
    monkeypatch.setenv('APP_ENV', 'test')
    monkeypatch.delenv('AWS_SAM_LOCAL', raising=False)
