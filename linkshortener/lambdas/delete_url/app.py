import logging

from linkshortener.constants import INVALID_URL_ID, INVALID_PAGINATION, SHORT_URL_NOT_FOUND, URL_OWNERSHIP_MISMATCH
from linkshortener.dao.exceptions import URLNotFoundError
from linkshortener.exceptions import URLOwnershipError
from linkshortener.lambdas.responses import response_200, response_400, response_403, response_404, response_500
from linkshortener.services import build_url_service
from linkshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.utils.runtime import get_pagination, get_user_id


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Delete one URL by id

    The URL's single-URL cache entry and every cached listing page of its
    owner are invalidated. When the caller is known, the refreshed listing
    page (query parameters 'page' and 'limit') is returned alongside.

    HTTP responses:
        200: {'message': ..., 'id': int} (+ 'urls', 'pagination' for known callers)
        400: missing or non-integer URL id, or non-integer pagination parameters
        403: the caller does not own the URL
        404: no URL with this id
        500: internal server error
    """
    try:
        service = build_url_service('delete_url')
    except FileNotFoundError:
        logger.exception('Failed to load configuration for delete URL function. Responding with 500.')
        return response_500()

    raw_id = (event.get('pathParameters') or {}).get('id')
    try:
        url_id = int(raw_id)
    except (TypeError, ValueError):
        logger.info('Missing or invalid URL id in path. Responding with 400.', extra={'urlId': raw_id, 'event': INVALID_URL_ID})
        return response_400(message="missing or invalid 'id' in path", error_code=INVALID_URL_ID)

    try:
        page, limit = get_pagination(event)
    except ValueError:
        logger.info('Invalid pagination parameters. Responding with 400.', extra={'event': INVALID_PAGINATION})
        return response_400(message="'page' and 'limit' must be integers", error_code=INVALID_PAGINATION)

    user_id = get_user_id(event)
    try:
        service.delete_url(url_id, user_id=user_id)
    except URLNotFoundError:
        logger.info('URL record not found. Responding with 404.', extra={'urlId': url_id, 'event': SHORT_URL_NOT_FOUND})
        return response_404(message='URL not found', error_code=SHORT_URL_NOT_FOUND)
    except URLOwnershipError as e:
        logger.info(
            'Caller does not own URL. Responding with 403.',
            extra={'urlId': url_id, 'userId': user_id, 'event': URL_OWNERSHIP_MISMATCH},
        )
        return response_403(message=str(e), error_code=URL_OWNERSHIP_MISMATCH)

    body = {'message': 'URL deleted successfully', 'id': url_id}
    if user_id is not None:
        body.update(service.list_urls(user_id, page=page, limit=limit))

    return response_200(body)
