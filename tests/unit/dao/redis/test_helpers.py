"""Unit tests for handle_redis_connection_error decorator.

Test coverage includes:
    1. Normal function execution
    2. Connection error and timeout handling
    3. Other Redis errors are not swallowed
    4. Function metadata preservation
"""

import pytest
import redis
from unittest.mock import MagicMock

from urlshortener.dao.redis.helpers import handle_redis_connection_error
from urlshortener.dao.exceptions import DataStoreError


class DummyDAO:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.redis = MagicMock()
        self.redis.connection_pool.connection_kwargs = {
            'host': 'localhost',
            'port': 6379,
            'db': 0,
        }

    @handle_redis_connection_error
    def ping(self):
        if self.error is not None:
            raise self.error
        return 'OK'


def test_decorator_allows_normal_execution():
    assert DummyDAO().ping() == 'OK'


def test_decorator_transforms_redis_connection_error():
    dao = DummyDAO(redis.exceptions.ConnectionError('Cannot connect'))

    with pytest.raises(DataStoreError, match="Can't connect to Redis at localhost:6379/0.") as exc_info:
        dao.ping()
    assert isinstance(exc_info.value.__cause__, redis.exceptions.ConnectionError)


def test_decorator_transforms_redis_timeout_error():
    dao = DummyDAO(redis.exceptions.TimeoutError('Timeout reading from socket'))

    with pytest.raises(DataStoreError, match='Timed out talking to Redis at localhost:6379/0.'):
        dao.ping()


def test_decorator_propagates_other_redis_errors():
    dao = DummyDAO(redis.exceptions.ResponseError('WRONGTYPE'))

    with pytest.raises(redis.exceptions.ResponseError):
        dao.ping()


def test_decorator_preserves_function_metadata():
    @handle_redis_connection_error
    def sample_function():
        """This is a sample docstring."""
        return 'OK'

    assert sample_function.__name__ == 'sample_function'
    assert 'sample docstring' in sample_function.__doc__
