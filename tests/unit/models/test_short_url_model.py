import dataclasses
from datetime import datetime, UTC

import pytest

from urlshortener.models import ShortURLModel


def test_to_dict():
    short_url = ShortURLModel(
        target='https://example.com',
        shortcode='2IR5Y9CK',
        expires_at=datetime(2025, 11, 14, 12, 0, 0, tzinfo=UTC),
    )

    assert short_url.to_dict() == {
        'short_code': '2IR5Y9CK',
        'original_url': 'https://example.com',
        'expiry': '2025-11-14T12:00:00+00:00',
    }


def test_to_dict_without_expiry():
    assert ShortURLModel(target='https://example.com', shortcode='2IR5Y9CK').to_dict()['expiry'] is None


def test_short_url_is_immutable():
    short_url = ShortURLModel(target='https://example.com', shortcode='2IR5Y9CK')

    with pytest.raises(dataclasses.FrozenInstanceError):
        short_url.target = 'https://evil.example.com'


def test_short_urls_compare_by_value():
    assert ShortURLModel('https://a.com', '21zC8Zmk') == ShortURLModel('https://a.com', '21zC8Zmk')
    assert ShortURLModel('https://a.com', '21zC8Zmk') != ShortURLModel('https://a.com', 'mycode')
