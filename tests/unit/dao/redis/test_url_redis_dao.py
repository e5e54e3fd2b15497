"""Unit tests for the URLRedisDAO

Test coverage includes:

1. Creation
   - Ensures the counter is incremented and the record hash and user index
     are written in one transaction.
   - Ensures invalid types raise BeartypeCallHintParamViolation.
   - Confirms Redis connection errors raise DataStoreError.

2. Retrieval
   - Ensures existing records are returned as URLModel.
   - Confirms missing records raise URLNotFoundError.

3. Click counting
   - Ensures hit() increments the clicks field.
   - Confirms missing records raise URLNotFoundError.

4. Listing and counting
   - Ensures find_by_user() reads the user index newest first and skips
     records deleted in between.
   - Ensures count() reports the size of the user index.

5. Deletion
   - Ensures delete() removes the hash and the user index entry.
   - Ensures delete_all() removes every record of the user.
"""

from datetime import datetime, UTC
from unittest.mock import MagicMock, call

import pytest
import redis
from beartype.roar import BeartypeCallHintParamViolation
from freezegun import freeze_time

from linkshortener.models import URLModel
from linkshortener.dao.exceptions import DataStoreError, URLNotFoundError
from linkshortener.dao.redis import URLRedisDAO


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def app_prefix():
    """Provide a consistent Redis key prefix for testing."""
    return 'testapp:test'


@pytest.fixture
def redis_client():
    """Mock a Redis pipeline-compatible client."""
    _redis_client = MagicMock(spec=redis.client.Pipeline)
    _redis_client.pipeline.return_value = _redis_client
    _redis_client.__enter__.return_value = _redis_client
    _redis_client.__exit__.return_value = None
    _redis_client.connection_pool = MagicMock(connection_kwargs={'host': 'redis', 'port': 6379, 'db': 0})
    return _redis_client


@pytest.fixture
def dao(redis_client, app_prefix):
    """Create a URLRedisDAO instance with a mocked client."""
    return URLRedisDAO(redis_client=redis_client, prefix=app_prefix)


@pytest.fixture
def stored_fields():
    return {
        'original_url': 'https://example.com/page',
        'user_id': '42',
        'clicks': '3',
        'created_at': '2025-10-15T12:00:00+00:00',
    }


# -------------------------------
# 1. Creation
# -------------------------------


@freeze_time('2025-10-15 12:00:00')
def test_create(dao, redis_client):
    """Ensure creation writes the record hash and the user index atomically."""
    redis_client.incr.return_value = 123

    url = dao.create('https://example.com/page', '42')

    assert url == URLModel(
        id=123,
        original_url='https://example.com/page',
        user_id='42',
        clicks=0,
        created_at=datetime(2025, 10, 15, 12, 0, tzinfo=UTC),
    )
    redis_client.incr.assert_called_once_with('testapp:test:urls:counter')
    redis_client.pipeline.assert_called_once_with(transaction=True)
    redis_client.hset.assert_called_once_with(
        'testapp:test:urls:123',
        mapping={
            'original_url': 'https://example.com/page',
            'user_id': '42',
            'clicks': 0,
            'created_at': '2025-10-15T12:00:00+00:00',
        },
    )
    redis_client.zadd.assert_called_once_with('testapp:test:users:42:urls', {'123': 123})
    redis_client.execute.assert_called_once()


def test_create_with_invalid_type(dao):
    """Ensure invalid argument types are rejected by beartype."""
    with pytest.raises(BeartypeCallHintParamViolation):
        dao.create(12345, '42')


def test_create_with_redis_connection_error(dao, redis_client):
    """Ensure connectivity issues surface as DataStoreError."""
    redis_client.incr.side_effect = redis.exceptions.ConnectionError('Connection error')

    with pytest.raises(DataStoreError, match="Can't connect to Redis at redis:6379/0."):
        dao.create('https://example.com/page', '42')


# -------------------------------
# 2. Retrieval
# -------------------------------


def test_get(dao, redis_client, stored_fields):
    redis_client.hgetall.return_value = stored_fields

    url = dao.get(7)

    assert url.id == 7
    assert url.original_url == 'https://example.com/page'
    assert url.user_id == '42'
    assert url.clicks == 3
    assert url.created_at == datetime(2025, 10, 15, 12, 0, tzinfo=UTC)
    redis_client.hgetall.assert_called_once_with('testapp:test:urls:7')


def test_get_missing_record(dao, redis_client):
    redis_client.hgetall.return_value = {}

    with pytest.raises(URLNotFoundError, match="URL with id '7' not found."):
        dao.get(7)


def test_get_with_invalid_type(dao):
    with pytest.raises(BeartypeCallHintParamViolation):
        dao.get('7')


# -------------------------------
# 3. Click counting
# -------------------------------


def test_hit(dao, redis_client):
    redis_client.exists.return_value = 1
    redis_client.hincrby.return_value = 4

    assert dao.hit(7) == 4
    redis_client.hincrby.assert_called_once_with('testapp:test:urls:7', 'clicks', 1)


def test_hit_missing_record(dao, redis_client):
    redis_client.exists.return_value = 0

    with pytest.raises(URLNotFoundError):
        dao.hit(7)
    redis_client.hincrby.assert_not_called()


# -------------------------------
# 4. Listing and counting
# -------------------------------


def test_find_by_user(dao, redis_client, stored_fields):
    """Ensure records are read newest first and vanished ones are skipped."""
    redis_client.zrevrange.return_value = ['9', '8', '7']
    redis_client.execute.return_value = [
        {**stored_fields, 'original_url': 'https://example.com/9'},
        {},  # deleted between reading the index and the hashes
        {**stored_fields, 'original_url': 'https://example.com/7'},
    ]

    urls = dao.find_by_user('42', offset=5, limit=3)

    assert [url.id for url in urls] == [9, 7]
    assert [url.original_url for url in urls] == ['https://example.com/9', 'https://example.com/7']
    redis_client.zrevrange.assert_called_once_with('testapp:test:users:42:urls', 5, 7)
    redis_client.pipeline.assert_called_once_with(transaction=False)
    redis_client.hgetall.assert_has_calls(
        [
            call('testapp:test:urls:9'),
            call('testapp:test:urls:8'),
            call('testapp:test:urls:7'),
        ]
    )


def test_find_by_user_empty_index(dao, redis_client):
    redis_client.zrevrange.return_value = []

    assert dao.find_by_user('42') == []
    redis_client.pipeline.assert_not_called()


def test_find_by_user_with_zero_limit(dao, redis_client):
    assert dao.find_by_user('42', offset=0, limit=0) == []
    redis_client.zrevrange.assert_not_called()


def test_count(dao, redis_client):
    redis_client.zcard.return_value = 12

    assert dao.count('42') == 12
    redis_client.zcard.assert_called_once_with('testapp:test:users:42:urls')


# -------------------------------
# 5. Deletion
# -------------------------------


def test_delete(dao, redis_client, stored_fields):
    redis_client.hgetall.return_value = stored_fields

    url = dao.delete(7)

    assert url.id == 7
    redis_client.delete.assert_called_once_with('testapp:test:urls:7')
    redis_client.zrem.assert_called_once_with('testapp:test:users:42:urls', '7')
    redis_client.execute.assert_called_once()


def test_delete_missing_record(dao, redis_client):
    redis_client.hgetall.return_value = {}

    with pytest.raises(URLNotFoundError):
        dao.delete(7)
    redis_client.delete.assert_not_called()


def test_delete_all(dao, redis_client):
    redis_client.zrange.return_value = ['3', '5']

    assert dao.delete_all('42') == [3, 5]
    redis_client.zrange.assert_called_once_with('testapp:test:users:42:urls', 0, -1)
    redis_client.delete.assert_has_calls(
        [
            call('testapp:test:urls:3'),
            call('testapp:test:urls:5'),
            call('testapp:test:users:42:urls'),
        ]
    )


def test_delete_all_without_urls(dao, redis_client):
    redis_client.zrange.return_value = []

    assert dao.delete_all('42') == []
    redis_client.delete.assert_called_once_with('testapp:test:users:42:urls')
