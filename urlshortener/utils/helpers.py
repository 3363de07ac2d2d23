"""Helper utilities for AWS lambda functions.

Functions:
    base_url() -> str
        Extract correct public base URL from API Gateway event
    get_short_url() -> str
        Get string representation of short URL for a given shortcode
    resolve_expiry() -> datetime
        Pick the expiry of a new short URL (default: 30 days from now)
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unexpected handler exceptions into 500 responses

Example:
    Typical usage inside a Lambda handler:

        >>> from urlshortener.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import json
import logging
import functools
from datetime import datetime, timedelta, UTC
from collections.abc import Callable

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.exceptions import MissingEnvironmentVariableError
from urlshortener.utils.runtime import running_locally
from urlshortener.utils.constants import DEFAULT_TTL_DAYS, UNKNOWN_INTERNAL_SERVER_ERROR


logger = logging.getLogger(__name__)

LOCAL_HOSTS = ('localhost', '127.0.0.1')


def base_url(event: LambdaEvent) -> str:
    """Extract public base URL from API Gateway event

    Custom domains are returned without the stage name, default AWS
    execute-api domains include it, and local hosts keep plain http.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://sho.rt"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
             - "http://localhost:3000"
    """
    request_context = event.get('requestContext') or {}
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if not domain:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return 'http://localhost:3000'
    elif domain.split(':')[0] in LOCAL_HOSTS:
        return f'http://{domain}'
    elif 'execute-api' in domain:
        return f'https://{domain}/{stage}'
    else:
        return f'https://{domain}'


def get_short_url(shortcode: str, event: LambdaEvent) -> str:
    """Get string representation of shortened URL

    Example:
        >>> get_short_url('2IR5Y9CK', {'requestContext': {'domainName': 'sho.rt'}})
        'https://sho.rt/2IR5Y9CK'
    """
    return f'{base_url(event).rstrip("/")}/{shortcode}'


def resolve_expiry(
    requested: datetime | None,
    now: datetime | None = None,
    default_ttl: timedelta = timedelta(days=DEFAULT_TTL_DAYS),
) -> datetime:
    """Pick the expiry moment of a new short URL

    A requested expiry is honored only if it's strictly in the future.
    Otherwise (missing or already passed) the default TTL applies.

    Args:
        requested (datetime | None):
            Client-requested expiry. Naive values are taken as UTC.
        now (datetime | None):
            Reference time. Defaults to the current UTC time.
        default_ttl (timedelta):
            Lifetime used when `requested` can't be honored. Defaults to 30 days.

    Returns:
        datetime: timezone-aware expiry.

    Example:
        >>> resolve_expiry(None, now=datetime(2025, 1, 1, tzinfo=UTC))
        datetime.datetime(2025, 1, 31, 0, 0, tzinfo=datetime.timezone.utc)
    """
    now = now or datetime.now(UTC)
    if requested is not None and requested.tzinfo is None:
        requested = requested.replace(tzinfo=UTC)
    if requested is not None and requested > now:
        return requested
    return now + default_ttl


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable[[LambdaEvent, LambdaContext], LambdaResponse]) -> Callable:
    """Decorator: respond with a generic 500 when a lambda handler raises

    Deployed lambdas never leak a stack trace to the client. When running
    locally the original exception is re-raised for easier debugging.
    """

    @functools.wraps(handler)
    def wrapper(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
        try:
            return handler(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in lambda handler. Responding with 500.')
            return {
                'statusCode': 500,
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'error_code': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper
