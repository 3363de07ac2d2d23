"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortURLNotFoundError:
        Raised when a live ShortURLModel is not found in the data store.

    ShortURLAlreadyExistsError:
        Raised when attempting to insert a ShortURLModel whose shortcode is taken.

    ExpiryInPastError:
        Raised when attempting to insert a ShortURLModel which is already expired.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, timeouts, OOM, etc.).

Example:
    >>> from urlshortener.dao.exceptions import ShortURLNotFoundError
    >>> raise ShortURLNotFoundError("Short URL with code 'abc123' not found.")
    Traceback (most recent call last):
        ...
    urlshortener.dao.exceptions.ShortURLNotFoundError: Short URL with code 'abc123' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class ShortURLNotFoundError(DAOError):
    """Exception raised when a ShortURLModel is absent or expired in the data store."""

    error_code = 'dao:short_url_not_found_error'


class ShortURLAlreadyExistsError(DAOError):
    """Exception raised when a live ShortURLModel with the same shortcode already exists."""

    error_code = 'dao:short_url_already_exists_error'


class ExpiryInPastError(DAOError):
    """Exception raised when a ShortURLModel's expiry is not strictly in the future."""

    error_code = 'dao:expiry_in_past_error'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, OOM, etc.
    """

    error_code = 'dao:data_store_error'
