"""Short URL orchestration: shortcode assignment, resolution and listing

ShortURLService ties the shortcode generator to a ShortURLBaseDAO. It holds
no mutable state of its own, so one instance may serve concurrent requests;
all uniqueness guarantees come from the DAO's conditional insert.

Shortcode assignment for generated codes:

    sequence = 1
    Candidate:  shortcode = generate_shortcode(target, sequence)
                exists(shortcode)?  yes -> Collision: sequence += 1, back to Candidate
                                    no  -> insert(); lost a race -> Collision
                                                     otherwise   -> Stored

The loop gives up after `max_retries` candidates with
ShortcodeGenerationExhaustedError, so a degraded data store can't keep a
request spinning forever.

Example:
    >>> service = ShortURLService(ShortURLRedisDAO(prefix=app_prefix()))
    >>> short_url = service.shorten('https://example.com')
    >>> short_url.shortcode
    '2IR5Y9CK'
    >>> service.resolve('2IR5Y9CK')
    'https://example.com'
"""

import logging
from datetime import datetime, timedelta

from urlshortener.models import ShortURLModel
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError
from urlshortener.exceptions import ShortcodeGenerationExhaustedError
from urlshortener.utils.shortener import generate_shortcode
from urlshortener.utils.helpers import resolve_expiry
from urlshortener.utils.validators import validate_target_url, validate_custom_shortcode
from urlshortener.utils.constants import MAX_SHORTCODE_RETRIES, DEFAULT_TTL_DAYS


logger = logging.getLogger(__name__)


class ShortURLService:
    """Create, resolve and list short URLs on top of a ShortURLBaseDAO

    Args:
        dao (ShortURLBaseDAO):
            Data store holding the short URL mappings.
        max_retries (int):
            Maximum number of candidate shortcodes tried per URL. Defaults to 256.
        default_ttl (timedelta):
            Lifetime of short URLs created without a (future) expiry. Defaults to 30 days.
    """

    def __init__(
        self,
        dao: ShortURLBaseDAO,
        max_retries: int = MAX_SHORTCODE_RETRIES,
        default_ttl: timedelta = timedelta(days=DEFAULT_TTL_DAYS),
    ):
        if max_retries < 1:
            raise ValueError(f'max_retries must be a positive integer (given value: {max_retries}).')

        self.dao = dao
        self.max_retries = max_retries
        self.default_ttl = default_ttl

    def shorten(self, target: str, expires_at: datetime | None = None, shortcode: str | None = None) -> ShortURLModel:
        """Store a new short URL for `target`

        Args:
            target (str):
                Original URL. Must start with http:// or https:// (surrounding
                whitespace is trimmed).
            expires_at (datetime | None):
                Requested expiry. Missing or non-future values fall back to
                now + default TTL.
            shortcode (str | None):
                Caller-supplied shortcode. If None, one is generated.

        Returns:
            ShortURLModel: the stored mapping.

        Raises:
            InvalidURLError: If `target` is missing or not an http(s) URL.
            InvalidShortcodeError: If the custom `shortcode` is malformed.
            ShortURLAlreadyExistsError: If the custom `shortcode` is already taken.
            ShortcodeGenerationExhaustedError: If every generated candidate collided.
            DataStoreError: If the data store is unavailable.
        """
        target = validate_target_url(target)
        expires_at = resolve_expiry(expires_at, default_ttl=self.default_ttl)

        if shortcode is not None:
            return self._store_custom(target, expires_at, validate_custom_shortcode(shortcode))
        return self._store_generated(target, expires_at)

    def resolve(self, shortcode: str) -> str:
        """Return the original URL of a live short URL

        Raises:
            ShortURLNotFoundError: If the shortcode is absent or expired.
            DataStoreError: If the data store is unavailable.
        """
        return self.dao.get(shortcode).target

    def list_all(self) -> list[ShortURLModel]:
        """Return every live short URL (in no particular order)"""
        return self.dao.all()

    def _store_custom(self, target: str, expires_at: datetime, shortcode: str) -> ShortURLModel:
        if self.dao.exists(shortcode):
            raise ShortURLAlreadyExistsError(f"Short URL with code '{shortcode}' already exists.")

        short_url = ShortURLModel(target=target, shortcode=shortcode, expires_at=expires_at)
        self.dao.insert(short_url)
        return short_url

    def _store_generated(self, target: str, expires_at: datetime) -> ShortURLModel:
        for sequence in range(1, self.max_retries + 1):
            shortcode = generate_shortcode(target, sequence)
            if self.dao.exists(shortcode):
                logger.debug('Shortcode collision.', extra={'shortcode': shortcode, 'sequence': sequence})
                continue

            short_url = ShortURLModel(target=target, shortcode=shortcode, expires_at=expires_at)
            try:
                self.dao.insert(short_url)
            except ShortURLAlreadyExistsError:
                logger.debug('Lost shortcode race to a concurrent writer.', extra={'shortcode': shortcode, 'sequence': sequence})
                continue
            return short_url

        logger.warning('Exhausted shortcode candidates.', extra={'target': target, 'max_retries': self.max_retries})
        raise ShortcodeGenerationExhaustedError(f'Could not find a free shortcode for {target} after {self.max_retries} attempts.')
