"""Unit tests for the in-process ShortURLMemoryDAO

Test coverage includes:

1. Round trip: insert, exists, get, all
2. Expiry: expired mappings are invisible to reads and free their shortcode
3. Conditional insert: taken shortcodes raise ShortURLAlreadyExistsError,
   including under concurrent writers
4. Expiry validation on insert
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, UTC

import pytest
from freezegun import freeze_time

from urlshortener.models import ShortURLModel
from urlshortener.dao.memory import ShortURLMemoryDAO
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, ExpiryInPastError


NOW = datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def dao():
    return ShortURLMemoryDAO()


def _short_url(shortcode: str = 'abc123', target: str = 'https://example.com', ttl: timedelta = timedelta(days=1)) -> ShortURLModel:
    return ShortURLModel(target=target, shortcode=shortcode, expires_at=NOW + ttl)


# -------------------------------
# 1. Round trip
# -------------------------------


@freeze_time(NOW)
def test_insert_and_get(dao):
    short_url = _short_url()

    assert dao.insert(short_url) is dao
    assert dao.exists('abc123')
    assert dao.get('abc123') == short_url
    assert dao.all() == [short_url]


@freeze_time(NOW)
def test_get_missing_short_url(dao):
    assert not dao.exists('doesnotexist')
    with pytest.raises(ShortURLNotFoundError, match="Short URL with code 'doesnotexist' not found"):
        dao.get('doesnotexist')


def test_instances_do_not_share_state():
    with freeze_time(NOW):
        ShortURLMemoryDAO().insert(_short_url())
        assert not ShortURLMemoryDAO().exists('abc123')


# -------------------------------
# 2. Expiry
# -------------------------------


def test_expired_short_url_is_invisible(dao):
    with freeze_time(NOW) as frozen:
        dao.insert(_short_url(ttl=timedelta(minutes=5)))
        assert dao.get('abc123').target == 'https://example.com'

        frozen.tick(timedelta(minutes=5))
        assert not dao.exists('abc123')
        assert dao.all() == []
        with pytest.raises(ShortURLNotFoundError):
            dao.get('abc123')


def test_expired_short_url_frees_its_shortcode(dao):
    with freeze_time(NOW) as frozen:
        dao.insert(_short_url(ttl=timedelta(minutes=5)))
        frozen.tick(timedelta(minutes=10))

        replacement = ShortURLModel(target='https://example.org', shortcode='abc123', expires_at=NOW + timedelta(days=1))
        dao.insert(replacement)
        assert dao.get('abc123') == replacement


# -------------------------------
# 3. Conditional insert
# -------------------------------


@freeze_time(NOW)
def test_insert_taken_shortcode(dao):
    dao.insert(_short_url())

    for _ in range(3):
        with pytest.raises(ShortURLAlreadyExistsError):
            dao.insert(_short_url(target='https://example.org'))
    assert dao.get('abc123').target == 'https://example.com'


def test_concurrent_inserts_of_the_same_shortcode(dao):
    """Exactly one of many concurrent writers wins a shortcode."""
    short_url = ShortURLModel(target='https://example.com', shortcode='abc123', expires_at=datetime.now(UTC) + timedelta(days=1))

    def attempt(_):
        try:
            dao.insert(short_url)
        except ShortURLAlreadyExistsError:
            return False
        return True

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(attempt, range(64)))

    assert results.count(True) == 1


# -------------------------------
# 4. Expiry validation
# -------------------------------


@freeze_time(NOW)
@pytest.mark.parametrize('expires_at', [None, NOW, NOW - timedelta(seconds=1)])
def test_insert_expired_short_url(dao, expires_at):
    with pytest.raises(ExpiryInPastError):
        dao.insert(ShortURLModel(target='https://example.com', shortcode='abc123', expires_at=expires_at))
    assert not dao.exists('abc123')
