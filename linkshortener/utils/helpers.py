"""Helper utilities for AWS lambda functions.

Functions:
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unexpected handler exceptions into a JSON 500 response

Example:
    Typical usage on a Lambda handler:

        >>> @guarantee_500_response
        ... def lambda_handler(event, context):
        ...     raise RuntimeError('boom')
        >>> lambda_handler({}, None)['statusCode']
        500
"""

import json
import logging
import functools
from typing import Any
from collections.abc import Callable

from linkshortener.constants import UNKNOWN_INTERNAL_SERVER_ERROR
from linkshortener.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def guarantee_500_response(handler: Callable) -> Callable:
    """Decorator: respond with a JSON 500 when a lambda handler raises unexpectedly

    When running locally the original exception is re-raised instead, so that
    stack traces stay visible in SAM / tests.

    Args:
        handler (Callable[[dict, Any], dict]):
            Lambda handler to wrap.

    Returns:
        Callable[[dict, Any], dict]: Wrapped handler.
    """

    @functools.wraps(handler)
    def wrapper(event: dict, context: Any) -> dict:
        try:
            return handler(event, context)
        except Exception:
            if running_locally():
                raise
            logger.exception('Unhandled exception in lambda handler. Responding with 500.')
            return {
                'statusCode': 500,
                'body': json.dumps(
                    {
                        'message': 'Internal Server Error',
                        'error_code': UNKNOWN_INTERNAL_SERVER_ERROR,
                    }
                ),
            }

    return wrapper
