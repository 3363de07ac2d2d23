"""Input validation for client-supplied shortening requests.

Functions:
    validate_target_url(url) -> str
        Trim and check that a URL uses the http or https scheme.
    validate_custom_shortcode(shortcode) -> str
        Check a caller-supplied shortcode against the Base62 alphabet.
    parse_expiry(value) -> datetime | None
        Parse an optional ISO-8601 expiry timestamp.
"""

import re
from datetime import datetime, UTC

from urlshortener.exceptions import InvalidURLError, InvalidExpiryError, InvalidShortcodeError
from urlshortener.utils.constants import CUSTOM_SHORTCODE_MAX_LENGTH


URL_SCHEME_PATTERN = re.compile(r'^(http|https)://')
SHORTCODE_PATTERN = re.compile(rf'^[0-9A-Za-z]{{1,{CUSTOM_SHORTCODE_MAX_LENGTH}}}$')


def validate_target_url(url: object) -> str:
    """Return the trimmed URL if it starts with http:// or https://

    Raises:
        InvalidURLError: If the URL is missing, not a string or uses another scheme.

    Example:
        >>> validate_target_url('  https://example.com ')
        'https://example.com'
        >>> validate_target_url('ftp://example.com')
        InvalidURLError: Original URL must start with http:// or https:// (given value: 'ftp://example.com').
    """
    if not isinstance(url, str) or not url.strip():
        raise InvalidURLError('Original URL is required.')

    url = url.strip()
    if not URL_SCHEME_PATTERN.match(url):
        raise InvalidURLError(f'Original URL must start with http:// or https:// (given value: {url!r}).')
    return url


def validate_custom_shortcode(shortcode: object) -> str:
    """Return the shortcode if it's 1 to 32 Base62 characters long

    Raises:
        InvalidShortcodeError: If the shortcode is not a string or uses illegal characters.
    """
    if not isinstance(shortcode, str) or not SHORTCODE_PATTERN.match(shortcode):
        raise InvalidShortcodeError(
            f'Custom short code must be 1-{CUSTOM_SHORTCODE_MAX_LENGTH} characters of [0-9A-Za-z] (given value: {shortcode!r}).'
        )
    return shortcode


def parse_expiry(value: object) -> datetime | None:
    """Parse an optional ISO-8601 timestamp into a timezone-aware datetime

    Naive timestamps are interpreted as UTC. A trailing 'Z' is accepted.

    Raises:
        InvalidExpiryError: If the value is neither None nor a valid ISO-8601 string.

    Example:
        >>> parse_expiry('2030-01-01T00:00:00Z')
        datetime.datetime(2030, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
        >>> parse_expiry(None) is None
        True
    """
    if value is None or value == '':
        return None
    if not isinstance(value, str):
        raise InvalidExpiryError(f'Expiry must be an ISO-8601 string (given type: {type(value)}).')

    try:
        expiry = datetime.fromisoformat(value.strip().replace('Z', '+00:00'))
    except ValueError as e:
        raise InvalidExpiryError(f'Expiry must be an ISO-8601 timestamp (given value: {value!r}).') from e

    return expiry.replace(tzinfo=UTC) if expiry.tzinfo is None else expiry
