import logging

from urlshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from urlshortener.lambdas.helpers import short_url_service
from urlshortener.dao.exceptions import DataStoreError
from urlshortener.utils import load_config, guarantee_500_response
from urlshortener.utils.responses import response_200, response_500, response_503
from urlshortener.lambdas.list_urls.constants import DATA_STORE_UNAVAILABLE, LIST_SUCCESS


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to list all live short URLs

    HTTP responses:
        200: {"urls": [{"short_code": ..., "original_url": ..., "expiry": ...}, ...]}
        500: Internal server error
        503: Data store unavailable
    """
    try:
        app_config = load_config('list_urls')
    except (FileNotFoundError, KeyError):
        logger.exception('Failed to load config for list URLs function. Responding with 500.')
        return response_500()

    try:
        short_urls = short_url_service(app_config, context).list_all()
    except DataStoreError:
        logger.exception('Data store unavailable. Responding with 503.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_503(error_code=DATA_STORE_UNAVAILABLE)

    logger.info('Listed short URLs. Responding with 200.', extra={'count': len(short_urls), 'event': LIST_SUCCESS})
    return response_200({'urls': [short_url.to_dict() for short_url in short_urls]})
