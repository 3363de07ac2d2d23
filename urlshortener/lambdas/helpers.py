"""Wiring shared by the lambda handlers.

Functions:
    short_url_service(app_config, context) -> ShortURLService
        Build the ShortURLService (and its Redis DAO) for one invocation.
"""

from datetime import timedelta

from urlshortener.types import LambdaConfiguration, LambdaContext
from urlshortener.dao.redis import ShortURLRedisDAO
from urlshortener.services import ShortURLService
from urlshortener.utils.config import app_prefix
from urlshortener.utils.runtime import remaining_time_seconds
from urlshortener.utils.constants import DEFAULT_REDIS_SOCKET_TIMEOUT, MAX_SHORTCODE_RETRIES, DEFAULT_TTL_DAYS


def short_url_service(app_config: LambdaConfiguration, context: LambdaContext) -> ShortURLService:
    """Build a ShortURLService backed by Redis from a lambda's configuration

    Redis socket timeouts are capped to the invocation's remaining time, so
    no data store call outlives the request.

    Raises:
        KeyError: If the configuration has no 'redis' section.
        DataStoreError: If Redis is unreachable.
    """
    redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}
    configured_timeout = float(redis_config.get('redis_socket_timeout', DEFAULT_REDIS_SOCKET_TIMEOUT))
    redis_config['redis_socket_timeout'] = remaining_time_seconds(context, default=configured_timeout)

    shortener_config = app_config.get('shortener', {})
    return ShortURLService(
        ShortURLRedisDAO(**redis_config, prefix=app_prefix()),
        max_retries=int(shortener_config.get('max_retries', MAX_SHORTCODE_RETRIES)),
        default_ttl=timedelta(days=int(shortener_config.get('default_ttl_days', DEFAULT_TTL_DAYS))),
    )
