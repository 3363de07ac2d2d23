import logging

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.lambdas.helpers import short_url_service
from urlshortener.dao.exceptions import ShortURLNotFoundError, DataStoreError
from urlshortener.utils import load_config, get_short_url, guarantee_500_response
from urlshortener.utils.responses import response_307, response_400, response_404, response_500, response_503
from urlshortener.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    DATA_STORE_UNAVAILABLE,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Resolve the shortcode to its original URL
    - Step 3: Redirect client to the original URL

    HTTP responses:
        307: Successful redirect
            headers:
                Location: original URL
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: shortcode doesn't exist or expired
        500: Internal server error
        503: Data store unavailable

    Example:
        >>> event = {'pathParameters': {'shortcode': '2IR5Y9CK'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        307
        >>> response['headers']['Location']
        'https://example.com'
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_url')
    except (FileNotFoundError, KeyError):
        logger.exception('Failed to load config for redirect URL function. Responding with 500.')
        return response_500()

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    # 2- Resolve the shortcode
    try:
        target_url = short_url_service(app_config, context).resolve(shortcode)
    except ShortURLNotFoundError:
        logger.info(
            'Short URL record not found in database. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=f"short url {get_short_url(shortcode, event)} doesn't exist", error_code=SHORT_URL_NOT_FOUND)
    except DataStoreError:
        logger.exception('Data store unavailable. Responding with 503.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_503(error_code=DATA_STORE_UNAVAILABLE)

    # 3- Redirect client to the original URL
    logger.info(
        'Redirecting client to original URL. Responding with 307.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_307(location=target_url)
