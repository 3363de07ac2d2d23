"""Abstract base class for ShortURL data access objects (DAOs).

This class establishes a consistent contract for all ShortURL DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, in-process memory).

Responsibilities:
    - Check whether a shortcode is held by a live mapping.
    - Atomically insert a mapping only if its shortcode is free.
    - Retrieve one or all live mappings.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from urlshortener.models import ShortURLModel
        >>> from urlshortener.dao.redis import ShortURLRedisDAO

        >>> dao = ShortURLRedisDAO(...)

        >>> short_url = ShortURLModel(
        ...     target="https://example.com/blog/article-123",
        ...     shortcode="2IR5Y9CK",
        ...     expires_at=datetime.now(UTC) + timedelta(days=30),
        ... )
        >>> dao.insert(short_url)

        >>> dao.exists("2IR5Y9CK")
        True
        >>> dao.get("2IR5Y9CK").target
        'https://example.com/blog/article-123'
"""

from abc import ABC, abstractmethod

from urlshortener.models import ShortURLModel


class ShortURLBaseDAO(ABC):
    """Interface for ShortURL data access objects (DAOs).

    Methods:
        exists(shortcode: str, **kwargs) -> bool:
            Check whether a live mapping holds the shortcode.
            Raises DataStoreError on connection or read failure.

        insert(short_url: ShortURLModel, **kwargs) -> ShortURLBaseDAO:
            Insert a new ShortURLModel into the data store, only if its shortcode is free.
            Raises ShortURLAlreadyExistsError if the short code already exists.
            Raises ExpiryInPastError if the mapping is already expired.
            Raises DataStoreError on connection or write failure.

        get(shortcode: str, **kwargs) -> ShortURLModel:
            Retrieve a live ShortURLModel from the data store by short code.
            Raises ShortURLNotFoundError if the entry does not exist or expired.
            Raises DataStoreError on connection or read failure.

        all(**kwargs) -> list[ShortURLModel]:
            Retrieve a snapshot of every live ShortURLModel (in no particular order).
            Raises DataStoreError on connection or read failure.

    NOTE:
        - Mappings expire automatically. The DAO does not provide an interface
          to update or delete entries.
        - insert() must be a single conditional write (set-if-absent). Callers
          rely on it to detect a concurrent writer which grabbed the same
          shortcode between exists() and insert().
    """

    @abstractmethod
    def exists(self, shortcode: str, **kwargs) -> bool:
        """Check whether a live ShortURLModel holds the given short code.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def insert(self, short_url: ShortURLModel, **kwargs) -> 'ShortURLBaseDAO':
        """Insert a new ShortURLModel into the data store.

        Args:
            short_url (ShortURLModel):
                The ShortURLModel instance to be inserted. Its `expires_at`
                determines the stored entry's TTL.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortURLBaseDAO: self (for method chaining)

        Raises:
            ShortURLAlreadyExistsError:
                If a live ShortURLModel with the same short code already exists.

            ExpiryInPastError:
                If `expires_at` is missing or not strictly in the future.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortURLModel:
        """Retrieve a live ShortURLModel from the data store by its short code.

        Raises:
            ShortURLNotFoundError:
                If no live ShortURLModel with the given short code exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def all(self, **kwargs) -> list[ShortURLModel]:
        """Retrieve every live ShortURLModel.

        The result is a point-in-time snapshot. Entries which expire while
        the data store is being enumerated are left out.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
