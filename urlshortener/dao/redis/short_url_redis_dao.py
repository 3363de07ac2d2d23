"""Data Access Object (DAO) implementation for managing shortened URLs in Redis

This module provides a Redis-based implementation of ShortURLBaseDAO.

Responsibilities:
    - Check shortcode availability;
    - Insert short URLs with a conditional write (SET ... NX PX <ttl>);
    - Retrieve one or all live short URLs along with their expiry;
    - Translate Redis connectivity failures into DataStoreError.

Classes:
    ShortURLRedisDAO:
        DAO for storing and retrieving ShortURLModel in a Redis datastore.

Example:
    >>> from urlshortener.models import ShortURLModel
    >>> from urlshortener.dao.redis import ShortURLRedisDAO

    >>> dao = ShortURLRedisDAO(prefix="urlshortener:dev")

    >>> short_url = ShortURLModel(
    ...     target="https://example.com/page",
    ...     shortcode="2IR5Y9CK",
    ...     expires_at=datetime.now(UTC) + timedelta(days=30),
    ... )
    >>> dao.insert(short_url)
    <ShortURLRedisDAO>

    >>> dao.get("2IR5Y9CK").target
    'https://example.com/page'
"""

from datetime import datetime, timedelta, UTC

from beartype import beartype

from urlshortener.models import ShortURLModel
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.redis.mixins import RedisClientMixin
from urlshortener.dao.redis.helpers import handle_redis_connection_error
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, ExpiryInPastError
from urlshortener.utils.constants import DEFAULT_REDIS_SCAN_COUNT


def _expires_at(now: datetime, pttl: int) -> datetime | None:
    # PTTL returns -1 for keys without expiry and -2 for missing keys
    return now + timedelta(milliseconds=pttl) if pttl >= 0 else None


class ShortURLRedisDAO(RedisClientMixin, ShortURLBaseDAO):
    """Redis-based Data Access Object (DAO) for managing short URL mappings

    Each mapping is a single string key `[<prefix>:]short:<shortcode>` whose
    value is the original URL. Redis expires the key once the mapping's TTL
    elapses, so every read only ever sees live mappings.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.

    Methods:
        exists(shortcode: str, **kwargs) -> bool:
            Check whether a live short URL holds the shortcode.

        insert(short_url: ShortURLModel, **kwargs) -> ShortURLRedisDAO:
            Insert a short URL mapping if its shortcode is free.
            Raises ShortURLAlreadyExistsError when a URL with the same shortcode exists.
            Raises ExpiryInPastError when the mapping is already expired.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a short URL mapping and its expiry by shortcode.
            Raises ShortURLNotFoundError when the shortcode doesn't exist.

        all(**kwargs) -> list[ShortURLModel]:
            Retrieve every live short URL mapping (SCAN based snapshot).

        Every method raises DataStoreError on connectivity issues with Redis.
    """

    @handle_redis_connection_error
    @beartype
    def exists(self, shortcode: str, **kwargs) -> bool:
        """Check whether a live short URL holds the shortcode

        Example:
            >>> dao.exists('2IR5Y9CK')
            True
        """
        return bool(self.redis.exists(self.keys.link_url_key(shortcode)))

    @handle_redis_connection_error
    @beartype
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLRedisDAO':
        """Insert a short URL mapping into Redis

        The TTL of the key is the time left until `short_url.expires_at`.

        Args:
            short_url (ShortURLModel):
                ShortURLModel instance representing the shortened URL mapping.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortURLRedisDAO: self (for method chaining)

        Raises:
            ExpiryInPastError:
                If the short URL has no expiry or its expiry is not in the future.
            ShortURLAlreadyExistsError:
                If a short URL with the same shortcode already exists.
            DataStoreError:
                If a Redis connection issue occurs.
        """
        if short_url.expires_at is None:
            raise ExpiryInPastError(f"Short URL with code '{short_url.shortcode}' has no expiry.")

        ttl = short_url.expires_at - datetime.now(UTC)
        if ttl <= timedelta(0):
            raise ExpiryInPastError(f"Short URL with code '{short_url.shortcode}' expired at {short_url.expires_at.isoformat()}.")

        # NOTE: EXISTS + SET would leave a window where two concurrent requests
        #       both see a free shortcode and the second SET silently overwrites
        #       the first mapping:
        #
        #       (lambda 1): -> EXISTS <app>:short:<shortcode>  => 0
        #       (lambda 2): -> EXISTS <app>:short:<shortcode>  => 0
        #       (lambda 1): -> SET <app>:short:<shortcode> <url 1> PX <ttl>
        #       (lambda 2): -> SET <app>:short:<shortcode> <url 2> PX <ttl>  => url 1 is lost
        #
        #       SET NX makes the write conditional. The loser gets nil back and
        #       the caller retries with another shortcode.
        ttl_ms = max(1, int(ttl.total_seconds() * 1000))
        stored = self.redis.set(self.keys.link_url_key(short_url.shortcode), short_url.target, nx=True, px=ttl_ms)
        if not stored:
            raise ShortURLAlreadyExistsError(f"Short URL with code '{short_url.shortcode}' already exists.")
        return self

    @handle_redis_connection_error
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a stored short URL mapping by shortcode

        Fetches the original URL and its remaining TTL in a single Redis
        transaction, then calculates the expiry datetime from the TTL.

        Raises:
            ShortURLNotFoundError:
                If the short URL does not exist (or already expired) in Redis.
            DataStoreError:
                If Redis connectivity issues occur.

        Example:
            >>> dao.get('2IR5Y9CK')
            ShortURLModel(target='https://example.com', shortcode='2IR5Y9CK', expires_at=...)
        """
        link_url_key = self.keys.link_url_key(shortcode)

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.get(link_url_key)
            pipe.pttl(link_url_key)
            target, pttl = pipe.execute()

        if target is None:
            raise ShortURLNotFoundError(f"Short URL with code '{shortcode}' not found.")

        return ShortURLModel(
            target=target,
            shortcode=shortcode,
            expires_at=_expires_at(datetime.now(UTC), pttl),
        )

    @handle_redis_connection_error
    def all(self, **kwargs) -> list[ShortURLModel]:
        """Retrieve every live short URL mapping

        Keys are enumerated with SCAN (non-blocking for the Redis server) and
        read back in one pipeline. Keys which expire between SCAN and GET are
        skipped, so the result is a best-effort snapshot in no particular order.

        Example:
            >>> dao.all()
            [ShortURLModel(target='https://example.com', shortcode='2IR5Y9CK', expires_at=...), ...]
        """
        # SCAN may return a key more than once
        keys = list(dict.fromkeys(self.redis.scan_iter(match=self.keys.link_url_pattern(), count=DEFAULT_REDIS_SCAN_COUNT)))
        if not keys:
            return []

        with self.redis.pipeline(transaction=False) as pipe:
            for key in keys:
                pipe.get(key)
                pipe.pttl(key)
            results = pipe.execute()

        now = datetime.now(UTC)
        short_urls = []
        for key, target, pttl in zip(keys, results[0::2], results[1::2]):
            # PTTL -2: the key expired between GET and PTTL
            if target is None or pttl == -2:
                continue
            short_urls.append(
                ShortURLModel(
                    target=target,
                    shortcode=self.keys.shortcode_from_key(key),
                    expires_at=_expires_at(now, pttl),
                )
            )
        return short_urls
