"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if lambda is running in local SAM, False otherwise.
    remaining_time_seconds(context, default) -> float:
        Seconds left before the current lambda invocation times out.

Example:
    >>> from urlshortener.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
    >>> os.environ['APP_ENV'] = 'dev'
    >>> running_locally()
    False
"""

import os

from urlshortener.types import LambdaContext
from urlshortener.utils.constants import APP_ENV_ENV, AWS_SAM_LOCAL_ENV


def running_locally() -> bool:
    """Check if the lambda is running locally via sam local invoke

    Returns:
        bool: True if running locally, False otherwise.
    """
    env = os.getenv(APP_ENV_ENV, '').lower()
    return env == 'local' or os.getenv(AWS_SAM_LOCAL_ENV) == 'true'


def remaining_time_seconds(context: LambdaContext, default: float) -> float:
    """Return the time budget left for data store calls in this invocation

    Uses the Lambda context's `get_remaining_time_in_millis()` when available
    and never exceeds `default`. Contexts without the method (tests, local
    scripts) get `default`.

    Args:
        context (LambdaContext):
            AWS Lambda context object, or None.
        default (float):
            Upper bound (and fallback) in seconds.

    Returns:
        float: seconds, at least 0.1.

    Example:
        >>> remaining_time_seconds(None, default=5.0)
        5.0
    """
    get_remaining = getattr(context, 'get_remaining_time_in_millis', None)
    if get_remaining is None:
        return default
    return max(0.1, min(default, get_remaining() / 1000))
