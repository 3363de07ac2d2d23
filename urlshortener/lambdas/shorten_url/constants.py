# Logged (and returned) event codes of the shorten_url lambda
INVALID_JSON_BODY = 'INVALID_JSON_BODY'
INVALID_REQUEST = 'INVALID_REQUEST'
SHORTCODE_ALREADY_EXISTS = 'SHORTCODE_ALREADY_EXISTS'
SHORTCODE_GENERATION_EXHAUSTED = 'SHORTCODE_GENERATION_EXHAUSTED'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
