"""Application-wide logging initialization

Every lambda package calls `initialize_logging()` in its `__init__.py` so the
handlers log structured JSON to stdout (picked up by CloudWatch).

Logging format:
{
    "timestamp": "2025-12-26T12:00:00.000Z",
    "level": "INFO",
    "logger": "urlshortener.lambdas.shorten_url.app",
    "message": "Shortened URL. Responding with 200.",
    "shortcode": "2IR5Y9CK"
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from urlshortener.utils.constants import LOG_LEVEL_ENV


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    STANDARD_ATTRS = frozenset(vars(logging.LogRecord('', 0, '', 0, '', None, None)).keys()) | {'message', 'asctime', 'taskName'}

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created, tz=UTC).isoformat(timespec='milliseconds').replace('+00:00', 'Z')

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }
        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        # Attach `extra` fields
        for key, value in record.__dict__.items():
            if key not in self.STANDARD_ATTRS:
                log[key] = value

        return json.dumps(log, default=str)


def initialize_logging() -> None:
    log_level = os.getenv(LOG_LEVEL_ENV, 'INFO').upper()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'json': {
                    '()': JsonFormatter,
                }
            },
            'handlers': {
                'stdout': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'json',
                    'stream': 'ext://sys.stdout',
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['stdout'],
            },
        }
    )
