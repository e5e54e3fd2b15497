import logging

from linkshortener.constants import MISSING_USER_ID
from linkshortener.lambdas.responses import response_200, response_400, response_500
from linkshortener.services import build_url_service
from linkshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from linkshortener.utils.helpers import guarantee_500_response
from linkshortener.utils.runtime import get_user_id


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Return click statistics of the caller's URLs

    HTTP responses:
        200: {'totalClicks': int, 'totalUrls': int, 'topUrls': [...]}
        400: missing user id
        500: internal server error
    """
    try:
        service = build_url_service('url_stats')
    except FileNotFoundError:
        logger.exception('Failed to load configuration for URL stats function. Responding with 500.')
        return response_500()

    user_id = get_user_id(event)
    if user_id is None:
        logger.info('Missing user id. Responding with 400.', extra={'event': MISSING_USER_ID})
        return response_400(message='missing user id', error_code=MISSING_USER_ID)

    return response_200(service.user_stats(user_id))
