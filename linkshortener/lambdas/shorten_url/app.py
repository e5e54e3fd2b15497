import json
import logging

from linkshortener.constants import INVALID_JSON_BODY, MISSING_TARGET_URL, LINK_QUOTA_EXCEEDED
from linkshortener.exceptions import URLQuotaExceededError
from linkshortener.lambdas.responses import response_201, response_400, response_429, response_500
from linkshortener.services import build_url_service
from linkshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.utils.runtime import get_user_id


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Build (or reuse) the process-wide URL service
    - Step 2: Extract the caller's user id (anonymous callers are allowed)
    - Step 3: Extract original URL from request body
    - Step 4: Store the URL (quota checked, cache populated and invalidated)
    - Step 5: Respond with the new URL and, for signed-in users, their first page of URLs

    HTTP responses:
        201: Successful URL shortening
            message: success message
            url: the new URL (id, originalUrl, userId, clicks, createdAt, shortUrl)
            urls, pagination: first page of the user's URLs (signed-in users only)
        400: Bad client request
            message: indicate cause of bad request (invalid JSON or missing target_url)
        429: Too many URLs
            message: user already owns the maximum number of URLs
        500: Internal server error
            message: indicate the server experienced an internal error

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            JSON-serializable response following API Gateway Lambda Proxy
            output format. Includes status code, headers, and response body.

    Example:
        >>> event = {'body': '{"target_url": "https://example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        201
        >>> json.loads(response['body'])['url']['shortUrl']
        'https://sho.rt/r/B9'
    """
    # 1- Get the URL service
    try:
        service = build_url_service('shorten_url')
    except FileNotFoundError:
        logger.exception('Failed to load configuration for shorten URL function. Responding with 500.')
        return response_500()

    # 2- Extract user id (None for anonymous callers)
    user_id = get_user_id(event)

    # 3- Extract original URL from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    target_url = request_body.get('target_url') if isinstance(request_body, dict) else None
    if not target_url or not isinstance(target_url, str):
        logger.info('Missing "target_url" in body. Responding with 400.', extra={'event': MISSING_TARGET_URL})
        return response_400(message="missing 'target_url' in JSON body", error_code=MISSING_TARGET_URL)

    # 4- Store the URL
    try:
        url = service.create_url(target_url, user_id=user_id)
    except URLQuotaExceededError as e:
        logger.info(
            'User reached URL quota. Responding with 429.',
            extra={'userId': user_id, 'event': LINK_QUOTA_EXCEEDED},
        )
        return response_429(message=str(e), error_code=LINK_QUOTA_EXCEEDED)

    # 5- Respond with the new URL
    body = {
        'message': f'Successfully shortened {target_url} to {url["shortUrl"]}',
        'url': url,
    }
    if user_id is not None:
        body.update(service.list_urls(user_id))

    logger.info('Shortened URL. Responding with 201.', extra={'urlId': url['id'], 'userId': url['userId']})
    return response_201(body)
