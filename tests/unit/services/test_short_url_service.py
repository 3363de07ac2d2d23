"""Unit tests for ShortURLService (shortcode assignment orchestration)

Test coverage includes:

1. Generated shortcodes
   - First free candidate (sequence 1) is stored with the resolved expiry.
   - Collisions move on to the next sequence number.
   - Losing the conditional insert to a concurrent writer counts as a collision.
   - The retry loop is bounded (ShortcodeGenerationExhaustedError).

2. Custom shortcodes
   - Free custom shortcodes are stored verbatim.
   - Taken custom shortcodes always raise ShortURLAlreadyExistsError.
   - Malformed custom shortcodes raise InvalidShortcodeError.

3. Input validation and expiry policy

4. Resolution and listing
   - Round trip until expiry, NotFound afterwards.

5. Concurrency
   - Concurrent requests racing for the same candidate all end up with
     distinct shortcodes and exactly one owns the first candidate.

6. Data store failures propagate (no internal retry).
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, UTC
from unittest.mock import MagicMock

import pytest
from freezegun import freeze_time

from urlshortener.models import ShortURLModel
from urlshortener.services import ShortURLService
from urlshortener.dao.base import ShortURLBaseDAO
from urlshortener.dao.memory import ShortURLMemoryDAO
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError, ShortURLNotFoundError, DataStoreError
from urlshortener.exceptions import InvalidURLError, InvalidShortcodeError, ShortcodeGenerationExhaustedError
from urlshortener.utils import generate_shortcode


NOW = datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)
THIRTY_DAYS_LATER = NOW + timedelta(days=30)


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def dao():
    _dao = MagicMock(spec=ShortURLBaseDAO)
    _dao.exists.return_value = False
    return _dao


@pytest.fixture
def service(dao):
    return ShortURLService(dao)


@pytest.fixture
def memory_service():
    return ShortURLService(ShortURLMemoryDAO())


# -------------------------------
# 1. Generated shortcodes
# -------------------------------


@freeze_time(NOW)
def test_shorten_stores_first_candidate(service, dao):
    short_url = service.shorten('https://example.com')

    assert short_url == ShortURLModel(target='https://example.com', shortcode='2IR5Y9CK', expires_at=THIRTY_DAYS_LATER)
    dao.exists.assert_called_once_with('2IR5Y9CK')
    dao.insert.assert_called_once_with(short_url)


@freeze_time(NOW)
def test_shorten_retries_on_collision(service, dao):
    dao.exists.side_effect = lambda shortcode: shortcode == '2IR5Y9CK'

    short_url = service.shorten('https://example.com')

    assert short_url.shortcode == '1xEwzNij'  # sequence 2
    assert dao.exists.call_count == 2
    dao.insert.assert_called_once_with(short_url)


@freeze_time(NOW)
def test_shorten_retries_after_losing_insert_race(service, dao):
    dao.insert.side_effect = [ShortURLAlreadyExistsError('taken'), dao]

    short_url = service.shorten('https://example.com')

    assert short_url.shortcode == generate_shortcode('https://example.com', 2)
    assert dao.insert.call_count == 2


def test_shorten_gives_up_after_max_retries(dao):
    dao.exists.return_value = True
    service = ShortURLService(dao, max_retries=5)

    with pytest.raises(ShortcodeGenerationExhaustedError):
        service.shorten('https://example.com')

    assert dao.exists.call_count == 5
    dao.insert.assert_not_called()


def test_shorten_gives_up_when_every_insert_loses(dao):
    dao.insert.side_effect = ShortURLAlreadyExistsError('taken')
    service = ShortURLService(dao, max_retries=3)

    with pytest.raises(ShortcodeGenerationExhaustedError):
        service.shorten('https://example.com')

    assert dao.insert.call_count == 3


@pytest.mark.parametrize('max_retries', [0, -1])
def test_invalid_max_retries(dao, max_retries):
    with pytest.raises(ValueError):
        ShortURLService(dao, max_retries=max_retries)


# -------------------------------
# 2. Custom shortcodes
# -------------------------------


@freeze_time(NOW)
def test_shorten_with_custom_shortcode(service, dao):
    short_url = service.shorten('https://a.com', shortcode='mycode')

    assert short_url == ShortURLModel(target='https://a.com', shortcode='mycode', expires_at=THIRTY_DAYS_LATER)
    dao.exists.assert_called_once_with('mycode')
    dao.insert.assert_called_once_with(short_url)


def test_shorten_with_taken_custom_shortcode(service, dao):
    dao.exists.return_value = True

    with pytest.raises(ShortURLAlreadyExistsError, match="Short URL with code 'mycode' already exists."):
        service.shorten('https://a.com', shortcode='mycode')
    dao.insert.assert_not_called()


def test_custom_shortcode_is_rejected_every_time(memory_service):
    """Submitting a live custom shortcode always yields DuplicateCode."""
    memory_service.shorten('https://a.com', shortcode='mycode')

    for _ in range(5):
        with pytest.raises(ShortURLAlreadyExistsError):
            memory_service.shorten('https://a.com', shortcode='mycode')
    assert memory_service.resolve('mycode') == 'https://a.com'


def test_custom_shortcode_race_is_reported_as_duplicate(service, dao):
    dao.insert.side_effect = ShortURLAlreadyExistsError('taken')

    with pytest.raises(ShortURLAlreadyExistsError):
        service.shorten('https://a.com', shortcode='mycode')


@pytest.mark.parametrize('shortcode', ['', 'my code', 'x' * 33])
def test_shorten_with_invalid_custom_shortcode(service, dao, shortcode):
    with pytest.raises(InvalidShortcodeError):
        service.shorten('https://a.com', shortcode=shortcode)
    dao.exists.assert_not_called()


# -------------------------------
# 3. Input validation and expiry policy
# -------------------------------


@pytest.mark.parametrize('target', [None, '', 'ftp://example.com', 'example.com'])
def test_shorten_with_invalid_url(service, dao, target):
    with pytest.raises(InvalidURLError):
        service.shorten(target)
    dao.exists.assert_not_called()


@freeze_time(NOW)
def test_shorten_trims_url(service):
    assert service.shorten('  https://example.com \n').target == 'https://example.com'


@freeze_time(NOW)
def test_shorten_keeps_future_expiry(service):
    expires_at = NOW + timedelta(hours=1)
    assert service.shorten('https://example.com', expires_at=expires_at).expires_at == expires_at


@freeze_time(NOW)
def test_shorten_with_naive_future_expiry(service, dao):
    short_url = service.shorten('https://example.com', expires_at=datetime(2030, 1, 1))

    assert short_url.expires_at == datetime(2030, 1, 1, tzinfo=UTC)
    dao.insert.assert_called_once_with(short_url)


@freeze_time(NOW)
def test_shorten_replaces_past_expiry(service):
    assert service.shorten('https://example.com', expires_at=NOW - timedelta(hours=1)).expires_at == THIRTY_DAYS_LATER


@freeze_time(NOW)
def test_shorten_with_custom_default_ttl(dao):
    service = ShortURLService(dao, default_ttl=timedelta(days=7))
    assert service.shorten('https://example.com').expires_at == NOW + timedelta(days=7)


# -------------------------------
# 4. Resolution and listing
# -------------------------------


def test_round_trip_until_expiry(memory_service):
    with freeze_time(NOW) as frozen:
        short_url = memory_service.shorten('https://example.com')
        assert len(short_url.shortcode) == 8
        assert memory_service.resolve(short_url.shortcode) == 'https://example.com'

        frozen.tick(timedelta(days=30) - timedelta(seconds=1))
        assert memory_service.resolve(short_url.shortcode) == 'https://example.com'

        frozen.tick(timedelta(seconds=1))
        with pytest.raises(ShortURLNotFoundError):
            memory_service.resolve(short_url.shortcode)


def test_resolve_unknown_shortcode(memory_service):
    with pytest.raises(ShortURLNotFoundError):
        memory_service.resolve('doesnotexist')


@freeze_time(NOW)
def test_list_all(memory_service):
    first = memory_service.shorten('https://example.com')
    second = memory_service.shorten('https://a.com', shortcode='mycode')

    assert sorted(memory_service.list_all(), key=lambda short_url: short_url.shortcode) == sorted(
        [first, second], key=lambda short_url: short_url.shortcode
    )


@freeze_time(NOW)
def test_same_url_twice_gets_two_shortcodes(memory_service):
    first = memory_service.shorten('https://example.com')
    second = memory_service.shorten('https://example.com')

    assert (first.shortcode, second.shortcode) == ('2IR5Y9CK', '1xEwzNij')


# -------------------------------
# 5. Concurrency
# -------------------------------


class RacingMemoryDAO(ShortURLMemoryDAO):
    """Hold every writer after its first EXISTS until all writers got there."""

    def __init__(self, contested: str, parties: int):
        super().__init__()
        self.contested = contested
        self.barrier = threading.Barrier(parties)

    def exists(self, shortcode: str, **kwargs) -> bool:
        result = super().exists(shortcode)
        if shortcode == self.contested:
            self.barrier.wait(timeout=10)
        return result


def test_concurrent_shorten_calls_get_distinct_shortcodes():
    workers = 8
    contested = generate_shortcode('https://example.com', 1)
    service = ShortURLService(RacingMemoryDAO(contested, parties=workers))

    with ThreadPoolExecutor(max_workers=workers) as pool:
        short_urls = list(pool.map(lambda _: service.shorten('https://example.com'), range(workers)))

    shortcodes = [short_url.shortcode for short_url in short_urls]
    assert len(set(shortcodes)) == workers
    assert shortcodes.count(contested) == 1
    assert all(service.resolve(shortcode) == 'https://example.com' for shortcode in shortcodes)


# -------------------------------
# 6. Data store failures
# -------------------------------


def test_data_store_errors_propagate(service, dao):
    dao.exists.side_effect = DataStoreError("Can't connect to Redis at localhost:6379/0.")

    with pytest.raises(DataStoreError):
        service.shorten('https://example.com')
    assert dao.exists.call_count == 1
