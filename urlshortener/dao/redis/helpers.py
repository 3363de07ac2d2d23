import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from urlshortener.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def handle_redis_connection_error(method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle connectivity errors

    Connection failures and socket timeouts both mean the data store is
    unavailable for this request, so both surface as DataStoreError.

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise
            redis.exceptions.ConnectionError or redis.exceptions.TimeoutError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on connectivity issues with Redis.

    Example:
        >>> @handle_redis_connection_error
        ... def exists(self, shortcode):
        ...     return self.redis.exists(shortcode)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            info = self.redis.connection_pool.connection_kwargs
            redis_host = info.get('host')
            redis_port = info.get('port')
            redis_db = info.get('db')
            if isinstance(e, redis.exceptions.TimeoutError):
                raise DataStoreError(f'Timed out talking to Redis at {redis_host}:{redis_port}/{redis_db}.') from e
            raise DataStoreError(f"Can't connect to Redis at {redis_host}:{redis_port}/{redis_db}.") from e

    return wrapper
