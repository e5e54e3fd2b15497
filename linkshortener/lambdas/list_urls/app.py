import logging

from linkshortener.constants import MISSING_USER_ID, INVALID_PAGINATION
from linkshortener.lambdas.responses import response_200, response_400, response_500
from linkshortener.services import build_url_service
from linkshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.utils.runtime import get_pagination, get_user_id


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Return one page of the caller's URLs, newest first

    Query string parameters:
        userId: owner (ignored when a Cognito 'sub' claim is present)
        page:   1-based page number (default 1, clamped to the last page)
        limit:  page size (default 5)

    HTTP responses:
        200: {'urls': [...], 'pagination': {'total', 'page', 'limit', 'hasMore'}}
        400: missing user id or non-integer pagination parameters
        500: internal server error
    """
    try:
        service = build_url_service('list_urls')
    except FileNotFoundError:
        logger.exception('Failed to load configuration for list URLs function. Responding with 500.')
        return response_500()

    user_id = get_user_id(event)
    if user_id is None:
        logger.info('Missing user id. Responding with 400.', extra={'event': MISSING_USER_ID})
        return response_400(message='missing user id', error_code=MISSING_USER_ID)

    try:
        page, limit = get_pagination(event)
    except ValueError:
        logger.info('Invalid pagination parameters. Responding with 400.', extra={'event': INVALID_PAGINATION})
        return response_400(message="'page' and 'limit' must be integers", error_code=INVALID_PAGINATION)

    return response_200(service.list_urls(user_id, page=page, limit=limit))
