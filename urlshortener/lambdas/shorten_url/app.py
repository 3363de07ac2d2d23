import json
import logging

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.lambdas.helpers import short_url_service
from urlshortener.exceptions import InvalidInputError, ShortcodeGenerationExhaustedError
from urlshortener.dao.exceptions import ShortURLAlreadyExistsError, DataStoreError
from urlshortener.utils import load_config, get_short_url, parse_expiry, guarantee_500_response
from urlshortener.utils.responses import response_200, response_400, response_409, response_500, response_503
from urlshortener.lambdas.shorten_url.constants import (
    INVALID_JSON_BODY,
    INVALID_REQUEST,
    SHORTCODE_ALREADY_EXISTS,
    SHORTCODE_GENERATION_EXHAUSTED,
    DATA_STORE_UNAVAILABLE,
    SHORTEN_SUCCESS,
)


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Parse the JSON request body
    - Step 2: Extract original URL, optional expiry and optional custom shortcode
    - Step 3: Assign a shortcode and store the mapping (via ShortURLService)
    - Step 4: Respond to user with 200 success

    Request body:
        original_url (str): URL to shorten, must start with http:// or https://
        expiry (str, optional): ISO-8601 timestamp. Missing or past values mean 30 days from now.
        custom_short_code (str, optional): caller-chosen shortcode, 1-32 characters of [0-9A-Za-z]

    HTTP responses:
        200: Successful URL shortening
            message, original_url, short_code, shortened_url, expiry
        400: Bad client request
            message: invalid JSON, missing/invalid original_url, bad expiry or custom shortcode
        409: Conflict
            message: custom shortcode is already in use
        500: Internal server error
        503: Data store unavailable

    Example:
        >>> event = {'body': '{"original_url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['short_code']
        '2IR5Y9CK'
    """
    # 0- Get application's config
    try:
        app_config = load_config('shorten_url')
    except (FileNotFoundError, KeyError):
        logger.exception('Failed to load config for shorten URL function. Responding with 500.')
        return response_500()

    # 1- Parse the JSON request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)
    if not isinstance(request_body, dict):
        logger.info('JSON body is not an object. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='JSON body must be an object', error_code=INVALID_JSON_BODY)

    # 2- Assign a shortcode and store the mapping
    try:
        expires_at = parse_expiry(request_body.get('expiry'))
        service = short_url_service(app_config, context)
        short_url = service.shorten(
            request_body.get('original_url'),
            expires_at=expires_at,
            shortcode=request_body.get('custom_short_code'),
        )
    except InvalidInputError as e:
        logger.info('Invalid shorten request. Responding with 400.', extra={'event': INVALID_REQUEST, 'reason': str(e)})
        return response_400(message=str(e), error_code=e.error_code)
    except ShortURLAlreadyExistsError as e:
        logger.info('Custom shortcode already in use. Responding with 409.', extra={'event': SHORTCODE_ALREADY_EXISTS})
        return response_409(message=str(e), error_code=SHORTCODE_ALREADY_EXISTS)
    except ShortcodeGenerationExhaustedError:
        logger.error('Ran out of shortcode candidates. Responding with 500.', extra={'event': SHORTCODE_GENERATION_EXHAUSTED})
        return response_500(error_code=SHORTCODE_GENERATION_EXHAUSTED)
    except DataStoreError:
        logger.exception('Data store unavailable. Responding with 503.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_503(error_code=DATA_STORE_UNAVAILABLE)

    # 3- Return successful response to user
    shortened_url = get_short_url(short_url.shortcode, event)
    logger.info('Shortened URL. Responding with 200.', extra={'shortcode': short_url.shortcode, 'event': SHORTEN_SUCCESS})
    return response_200(
        {
            'message': f'Successfully shortened {short_url.target} to {shortened_url}',
            **short_url.to_dict(),
            'shortened_url': shortened_url,
        }
    )
