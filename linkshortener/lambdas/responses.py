"""API Gateway (Lambda proxy) response builders shared by all handlers

Every response carries a JSON body. Error bodies follow the same shape:

    {"message": "Bad Request (missing 'target_url' in JSON body)", "errorCode": "MISSING_TARGET_URL"}

Functions:
    response_200(body) / response_201(body)
    response_302(location)
    response_400(message, error_code) / response_403(...) / response_404(...)
    response_429(message, error_code)
    response_500(message)
"""

import json
from typing import Any

from linkshortener.types import HttpHeaders, LambdaResponse


# TODO: restrict allowed origin once the frontend is served from its own domain
CORS_HEADERS: HttpHeaders = {
    'Access-Control-Allow-Origin': '*',
    'Access-Control-Allow-Headers': 'Content-Type,Authorization',
    'Access-Control-Allow-Methods': 'OPTIONS,POST,GET,DELETE',
}


def _response(status_code: int, body: dict[str, Any], headers: HttpHeaders | None = None) -> LambdaResponse:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **CORS_HEADERS, **(headers or {})},
        'body': json.dumps(body),
    }


def _error(status_code: int, base: str, message: str | None, error_code: str | None) -> LambdaResponse:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return _response(status_code, body)


def response_200(body: dict[str, Any]) -> LambdaResponse:
    return _response(200, body)


def response_201(body: dict[str, Any]) -> LambdaResponse:
    return _response(201, body)


def response_302(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 302,
        'headers': {'Location': location, **CORS_HEADERS},
        'body': json.dumps({}),  # no body needed for redirects
    }


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(400, 'Bad Request', message, error_code)


def response_403(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(403, 'Forbidden', message, error_code)


def response_404(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    return _error(404, 'Not Found', message, error_code)


def response_429(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    body = {'message': message or 'Too Many Requests'}
    if error_code:
        body['errorCode'] = error_code
    return _response(429, body)


def response_500(message: str | None = None) -> LambdaResponse:
    return _error(500, 'Internal Server Error', message, None)
