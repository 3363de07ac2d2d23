"""In-process DAO implementation for short URLs

Keeps mappings in a per-instance dictionary guarded by a lock. There is no
native TTL support, so expired mappings are filtered out on every read and
pruned on writes. Useful for local development and tests; state is lost
together with the instance.

Example:
    >>> dao = ShortURLMemoryDAO()
    >>> dao.insert(ShortURLModel(target='https://example.com', shortcode='2IR5Y9CK', expires_at=tomorrow))
    <ShortURLMemoryDAO>
    >>> dao.exists('2IR5Y9CK')
    True
"""

import threading
from datetime import datetime, UTC

from beartype import beartype

from urlshortener.models import ShortURLModel
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, ExpiryInPastError


def _live(short_url: ShortURLModel, now: datetime) -> bool:
    return short_url.expires_at is None or now < short_url.expires_at


class ShortURLMemoryDAO(ShortURLBaseDAO):
    """Thread-safe, dictionary-backed ShortURLBaseDAO"""

    def __init__(self):
        self._short_urls: dict[str, ShortURLModel] = {}
        self._lock = threading.Lock()

    @beartype
    def exists(self, shortcode: str, **kwargs) -> bool:
        with self._lock:
            short_url = self._short_urls.get(shortcode)
            return short_url is not None and _live(short_url, datetime.now(UTC))

    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLMemoryDAO':
        """Insert a short URL if its shortcode is free (check and write under one lock)

        Raises:
            ExpiryInPastError: If the short URL has no expiry or already expired.
            ShortURLAlreadyExistsError: If a live short URL holds the shortcode.
        """
        now = datetime.now(UTC)
        if short_url.expires_at is None:
            raise ExpiryInPastError(f"Short URL with code '{short_url.shortcode}' has no expiry.")
        if short_url.expires_at <= now:
            raise ExpiryInPastError(f"Short URL with code '{short_url.shortcode}' expired at {short_url.expires_at.isoformat()}.")

        with self._lock:
            self._prune(now)
            if short_url.shortcode in self._short_urls:
                raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.")
            self._short_urls[short_url.shortcode] = short_url
        return self

    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        with self._lock:
            short_url = self._short_urls.get(shortcode)
        if short_url is None or not _live(short_url, datetime.now(UTC)):
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")
        return short_url

    def all(self, **kwargs) -> list[ShortURLModel]:
        now = datetime.now(UTC)
        with self._lock:
            return [short_url for short_url in self._short_urls.values() if _live(short_url, now)]

    def _prune(self, now: datetime) -> None:
        # Caller must hold self._lock
        expired = [shortcode for shortcode, short_url in self._short_urls.items() if not _live(short_url, now)]
        for shortcode in expired:
            del self._short_urls[shortcode]
