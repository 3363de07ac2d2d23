import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for storing short URLs.

    Each short URL is a single string key, `short:<shortcode>`, holding the
    original URL and carrying the mapping's TTL.

    An optional prefix can be provided to namespace all generated keys,
    e.g. "urlshortener:prod" or "urlshortener:dev".
    """

    LINK_NAMESPACE = 'short'

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_url_key(self, shortcode: str) -> str:
        return f'{self.LINK_NAMESPACE}:{shortcode}'

    @prefix_key
    def link_url_pattern(self) -> str:
        return f'{self.LINK_NAMESPACE}:*'

    def shortcode_from_key(self, key: str) -> str:
        """Invert link_url_key(): 'app:env:short:abc123' -> 'abc123'"""
        key_prefix = self.link_url_key('')
        if not key.startswith(key_prefix):
            raise ValueError(f'Key {key!r} is not a short URL key (expected prefix: {key_prefix!r}).')
        return key[len(key_prefix) :]
