# Logged (and returned) event codes of the redirect_url lambda
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
