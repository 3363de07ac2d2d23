"""Shortcode generation utility

This module derives short, deterministic identifiers for URLs. A shortcode is
a pure function of a seed (the URL) and a sequence number, so the same pair
always yields the same code. Colliding codes are resolved by the caller by
retrying with the next sequence number (see ShortURLService).

Functions:
    encode_base62(number, length=None):
        Encode a non-negative integer into Base62 (most significant digit first).
    generate_shortcode(seed, sequence, length=8):
        Generate a fixed-length Base62 shortcode from a seed and a sequence number.

Example:
    >>> from urlshortener.utils import generate_shortcode
    >>> generate_shortcode('https://example.com', 1)
    '2IR5Y9CK'
    >>> generate_shortcode('https://example.com', 2)
    '1xEwzNij'
"""

import hashlib

from urlshortener.utils.constants import BASE62_ALPHABET, SHORTCODE_LENGTH, DIGEST_PREFIX_BYTES


ALPHABET = BASE62_ALPHABET
BASE = len(ALPHABET)


def encode_base62(number: int, length: int | None = None) -> str:
    """Encode a non-negative integer into a Base62 string.

    Digits are emitted most significant first. Zero encodes to the empty
    string, which the padding step turns into a run of ALPHABET[0].

    When `length` is given, the encoding is left-padded with '0' up to
    `length` characters and then cut down to its first `length` characters.

    Args:
        number (int):
            Non-negative integer to encode.
        length (int | None):
            Exact length of the output. None returns the natural encoding.

    Returns:
        str: Base62 representation of `number`.

    Example:
        >>> encode_base62(61)
        'z'
        >>> encode_base62(61, length=8)
        '0000000z'
        >>> encode_base62(62**8, length=8)
        '10000000'
    """
    if number < 0:
        raise ValueError(f'Number must be a non-negative integer (given value: {number}).')

    digits = []
    while number:
        number, remainder = divmod(number, BASE)
        digits.append(ALPHABET[remainder])
    encoded = ''.join(reversed(digits))

    if length is None:
        return encoded
    return encoded.rjust(length, ALPHABET[0])[:length]


def generate_shortcode(seed: str, sequence: int, length: int = SHORTCODE_LENGTH) -> str:
    """Generate a deterministic Base62 shortcode for a seed and sequence number.

    Algorithm:
    1- SHA-256 the UTF-8 bytes of `seed` followed by the decimal `sequence`
    2- Interpret the first 10 digest bytes as a big-endian unsigned integer
    3- Base62 encode it and fit the result to exactly `length` characters

    Args:
        seed (str):
            Text the shortcode is derived from (usually the original URL).
        sequence (int):
            Disambiguation counter. Incremented by the caller on collisions.
        length (int, optional):
            Length of the resulting shortcode. Defaults to 8.

    Returns:
        str: `length` characters drawn from [0-9A-Za-z].

    Raises:
        TypeError: If `seed` is not a string or `sequence` is not an integer.
        ValueError: If `sequence` is negative.

    NOTE:
        - A 10-byte prefix naturally encodes to up to 14 Base62 digits, so
          the low-order digits are discarded. Distinct prefixes can therefore
          map to the same shortcode; the collision retry loop absorbs this.
        - Never change this transform: previously issued shortcodes must keep
          resolving to the same (seed, sequence) pairs.
    """
    if not isinstance(seed, str):
        raise TypeError(f'Seed must be of type string (given type: {type(seed)}).')
    if not isinstance(sequence, int) or isinstance(sequence, bool):
        raise TypeError(f'Sequence must be of type integer (given type: {type(sequence)}).')
    if sequence < 0:
        raise ValueError(f'Sequence must be a non-negative integer (given value: {sequence}).')

    digest = hashlib.sha256(f'{seed}{sequence}'.encode('utf-8')).digest()
    number = int.from_bytes(digest[:DIGEST_PREFIX_BYTES], byteorder='big')
    return encode_base62(number, length=length)
