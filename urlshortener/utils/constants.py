import string


# Short code alphabet: digits first, then uppercase, then lowercase
BASE62_ALPHABET = string.digits + string.ascii_uppercase + string.ascii_lowercase
SHORTCODE_LENGTH = 8
DIGEST_PREFIX_BYTES = 10  # leading SHA-256 bytes fed into the base62 encoder

# Caller-supplied (custom) shortcodes
CUSTOM_SHORTCODE_MAX_LENGTH = 32

# Ceiling on collision retries before giving up on a URL
MAX_SHORTCODE_RETRIES = 256

# Default short URL TTL duration
DEFAULT_TTL_DAYS = 30

# Redis: socket timeouts (seconds) bounding every data store call
DEFAULT_REDIS_SOCKET_TIMEOUT = 5.0
DEFAULT_REDIS_SCAN_COUNT = 500

# Application environment variables
APP_ENV_ENV = 'APP_ENV'
APP_NAME_ENV = 'APP_NAME'
PROJECT_ROOT_ENV = 'PROJECT_ROOT'
AWS_SAM_LOCAL_ENV = 'AWS_SAM_LOCAL'
LOG_LEVEL_ENV = 'LOG_LEVEL'

# AppConfig: identifiers of the deployed configuration document
APPCONFIG_APP_ID_ENV = 'APPCONFIG_APP_ID'
APPCONFIG_ENV_ID_ENV = 'APPCONFIG_ENV_ID'
APPCONFIG_PROFILE_ID_ENV = 'APPCONFIG_PROFILE_ID'

# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
