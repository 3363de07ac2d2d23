from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class ShortURLModel:
    """Represent a shortened URL mapping.

    Mappings are immutable: once stored they are never updated, they only
    expire once `expires_at` has passed.

    Attributes:
        target (str):
            The original long URL that the short code redirects to.
        shortcode (str):
            The unique short identifier representing the shortened URL.
        expires_at (Optional[datetime]):
            Timezone-aware moment after which the short URL is no longer
            live. The data store computes the entry's TTL from it.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> url = ShortURLModel(
        ...     target="https://example.com/article/123",
        ...     shortcode="2IR5Y9CK",
        ...     expires_at=datetime.now(UTC) + timedelta(days=30)
        ... )
        >>> url.target
        'https://example.com/article/123'
        >>> url.shortcode
        '2IR5Y9CK'
    """

    target: str
    shortcode: str
    expires_at: Optional[datetime] = None

    def to_dict(self) -> dict[str, str | None]:
        """Return the JSON-serializable representation used in API responses."""
        return {
            'short_code': self.shortcode,
            'original_url': self.target,
            'expiry': None if self.expires_at is None else self.expires_at.isoformat(),
        }
