# Logged (and returned) event codes of the list_urls lambda
DATA_STORE_UNAVAILABLE = 'DATA_STORE_UNAVAILABLE'
LIST_SUCCESS = 'LIST_SUCCESS'
