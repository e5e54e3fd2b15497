"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if lambda is running in local SAM, False otherwise.

    get_user_id(event) -> str | None:
        Extract the caller's user id from an API Gateway event.

    get_pagination(event) -> tuple[int, int]:
        Extract 'page' and 'limit' query parameters from an API Gateway event.

Example:
    >>> from linkshortener.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
"""

import os

from linkshortener.constants import ENV, Pagination
from linkshortener.types import LambdaEvent


def running_locally() -> bool:
    """Return True if running in SAM local invoke/api, False otherwise."""
    env = os.getenv(ENV.App.APP_ENV, '').lower()
    return env == 'local' or os.getenv(ENV.App.AWS_SAM_LOCAL) == 'true'


def get_user_id(event: LambdaEvent) -> str | None:
    """Extract the caller's user id from an API Gateway event

    Prefers the Cognito 'sub' claim set by the authorizer and falls back to
    the 'userId' query string parameter.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str | None: user id, or None for anonymous callers.
    """
    claims = (event.get('requestContext') or {}).get('authorizer', {}).get('claims', {})
    user_id = claims.get('sub')
    if user_id is None:
        user_id = (event.get('queryStringParameters') or {}).get('userId')
    return user_id or None


def get_pagination(event: LambdaEvent) -> tuple[int, int]:
    """Extract 'page' and 'limit' query string parameters from an API Gateway event

    Missing parameters fall back to Pagination.PAGE / Pagination.LIMIT.

    Returns:
        tuple[int, int]: (page, limit)

    Raises:
        ValueError:
            If either parameter is not an integer.
    """
    params = event.get('queryStringParameters') or {}
    page = int(params.get('page') or Pagination.PAGE)
    limit = int(params.get('limit') or Pagination.LIMIT)
    return page, limit
