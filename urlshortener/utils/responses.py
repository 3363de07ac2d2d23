"""API Gateway (Lambda proxy) response builders shared by all lambda handlers.

Error bodies always look like {"message": "...", "error_code": "..."}.
"""

import json

from urlshortener.types import LambdaResponse


# TODO: remove once the frontend is served from the same domain as the API
CORS_HEADERS = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET',
}


def _error(status_code: int, base: str, message: str | None, error_code: str | None, headers: dict | None = None) -> LambdaResponse:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['error_code'] = error_code
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **(headers or {})},
        'body': json.dumps(body),
    }


def response_200(body: dict) -> LambdaResponse:
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS},
        'body': json.dumps(body),
    }


def response_307(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 307,
        'headers': {'Location': location, **CORS_HEADERS},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(400, 'Bad Request', message, error_code)


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(404, 'Not Found', message, error_code)


def response_409(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(409, 'Conflict', message, error_code)


def response_500(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(500, 'Internal Server Error', message, error_code)


def response_503(message: str | None = None, error_code: str | None = None, retry_after: int = 1) -> LambdaResponse:
    return _error(503, 'Service Unavailable', message, error_code, headers={'Retry-After': str(retry_after)})
