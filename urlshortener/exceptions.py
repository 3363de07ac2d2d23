"""Application-level exceptions.

Every exception carries an `error_code` which lambda handlers return to the
client alongside the HTTP status code.

Data store exceptions live in `urlshortener.dao.exceptions`.
"""


class URLShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:url_shortener_error'


class InvalidInputError(URLShortenerError):
    """Raised when a client supplies malformed or missing input."""

    error_code = 'app:invalid_input_error'


class InvalidURLError(InvalidInputError):
    """Raised when the original URL is missing or not an http(s) URL."""

    error_code = 'app:invalid_url_error'


class InvalidExpiryError(InvalidInputError):
    """Raised when the requested expiry can't be parsed as a timestamp."""

    error_code = 'app:invalid_expiry_error'


class InvalidShortcodeError(InvalidInputError):
    """Raised when a caller-supplied shortcode is empty, too long or uses illegal characters."""

    error_code = 'app:invalid_shortcode_error'


class ShortcodeGenerationExhaustedError(URLShortenerError):
    """Raised when every candidate shortcode within the retry ceiling collided."""

    error_code = 'app:shortcode_generation_exhausted_error'


class ConfigurationError(URLShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError, KeyError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'
