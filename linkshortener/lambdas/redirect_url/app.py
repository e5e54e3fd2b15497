import logging

from linkshortener.constants import MISSING_SHORTCODE, INVALID_SHORTCODE, SHORT_URL_NOT_FOUND, REDIRECT_SUCCESS
from linkshortener.dao.exceptions import URLNotFoundError
from linkshortener.exceptions import InvalidShortCodeError
from linkshortener.lambdas.responses import response_302, response_400, response_404, response_500
from linkshortener.services import build_url_service
from linkshortener.types import LambdaContext, LambdaEvent, LambdaResponse
from linkshortener.utils.helpers import guarantee_500_response


logger = logging.getLogger(__name__)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Build (or reuse) the process-wide URL service
    - Step 2: Extract shortcode from request path
    - Step 3: Resolve the shortcode (cache first, click counted in the store)
    - Step 4: Redirect client to target URL

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: invalid shortcode or no URL for it
        500: Internal server error
            message: server experienced an internal error

    Example:
        >>> event = {'pathParameters': {'shortcode': 'B9'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 1- Get the URL service
    try:
        service = build_url_service('redirect_url')
    except FileNotFoundError:
        logger.exception('Failed to load configuration for redirect URL function. Responding with 500.')
        return response_500()

    # 2- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)

    # 3- Resolve the shortcode
    try:
        target_url = service.resolve(shortcode)
    except InvalidShortCodeError as e:
        logger.info(
            'Invalid shortcode. Responding with 404.',
            extra={'shortcode': shortcode, 'character': e.character, 'event': INVALID_SHORTCODE},
        )
        return response_404(message=str(e), error_code=INVALID_SHORTCODE)
    except URLNotFoundError:
        logger.info(
            'URL record not found in database. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=f"short code '{shortcode}' doesn't exist", error_code=SHORT_URL_NOT_FOUND)

    # 4- Redirect client to target URL
    logger.info(
        'Redirecting client to target URL. Responding with 302.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=target_url)
