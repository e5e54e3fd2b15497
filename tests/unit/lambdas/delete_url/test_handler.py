"""Unit tests for the delete_url AWS Lambda handler.

Test coverage includes:

1. Successful deletion
   - Known callers receive 200 with the refreshed listing page.
   - Anonymous callers receive 200 without a listing.

2. Invalid requests
   - Missing or non-integer ids and invalid pagination return HTTP 400.

3. Missing URLs and ownership
   - Unknown ids return HTTP 404; another user's URL returns HTTP 403.
"""

import json

import pytest
from pytest import MonkeyPatch

from linkshortener.lambdas.delete_url import app
from linkshortener.dao.exceptions import URLNotFoundError
from linkshortener.exceptions import URLOwnershipError
from linkshortener.services import URLService
from linkshortener.types import LambdaContext, LambdaEvent


class TestDeleteURL:
    @pytest.fixture
    def event(self) -> LambdaEvent:
        return {
            'resource': '/urls/{id}',
            'httpMethod': 'DELETE',
            'pathParameters': {'id': '123'},
            'queryStringParameters': {'userId': '42'},
            'requestContext': {'domainName': 'sho.rt', 'stage': 'test'},
        }

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, context: LambdaContext, url_service: URLService) -> None:
        monkeypatch.setattr(app, 'build_url_service', lambda *a, **kw: url_service)

        self.context = context
        self.url_service = url_service

    def test_lambda_handler(self, event: LambdaEvent, listing) -> None:
        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 200
        assert body['message'] == 'URL deleted successfully'
        assert body['id'] == 123
        assert body['urls'] == listing['urls']
        assert body['pagination'] == listing['pagination']
        self.url_service.delete_url.assert_called_once_with(123, user_id='42')
        self.url_service.list_urls.assert_called_once_with('42', page=1, limit=5)

    def test_lambda_handler_for_anonymous_caller(self, event: LambdaEvent) -> None:
        event['queryStringParameters'] = None

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 200
        assert 'urls' not in body
        self.url_service.delete_url.assert_called_once_with(123, user_id=None)
        self.url_service.list_urls.assert_not_called()

    @pytest.mark.parametrize('path_parameters', [None, {}, {'id': 'abc'}])
    def test_lambda_handler_with_invalid_id(self, event: LambdaEvent, path_parameters) -> None:
        event['pathParameters'] = path_parameters

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['errorCode'] == 'INVALID_URL_ID'
        self.url_service.delete_url.assert_not_called()

    def test_lambda_handler_with_invalid_pagination(self, event: LambdaEvent) -> None:
        event['queryStringParameters']['limit'] = 'many'

        response = app.lambda_handler(event, self.context)

        assert response['statusCode'] == 400
        assert json.loads(response['body'])['errorCode'] == 'INVALID_PAGINATION'
        self.url_service.delete_url.assert_not_called()

    def test_lambda_handler_with_missing_url(self, event: LambdaEvent) -> None:
        self.url_service.delete_url.side_effect = URLNotFoundError("URL with id '123' not found.")

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 404
        assert body['message'] == 'Not Found (URL not found)'
        assert body['errorCode'] == 'SHORT_URL_NOT_FOUND'

    def test_lambda_handler_with_foreign_url(self, event: LambdaEvent) -> None:
        self.url_service.delete_url.side_effect = URLOwnershipError('You are not authorized to delete this URL')

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 403
        assert body['message'] == 'Forbidden (You are not authorized to delete this URL)'
        assert body['errorCode'] == 'URL_OWNERSHIP_MISMATCH'
        self.url_service.list_urls.assert_not_called()
