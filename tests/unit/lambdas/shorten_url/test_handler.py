"""Unit tests for the shorten_url AWS Lambda handler.

Test coverage includes:

1. Successful shortening
   - Signed-in users receive 201 with the new URL and their first page of URLs.
   - Anonymous users receive 201 with the new URL only.

2. Invalid request bodies
   - Invalid JSON and missing/blank target_url return HTTP 400.

3. Quota
   - Users over the URL quota receive HTTP 429.

4. Configuration errors
   - Missing config files result in HTTP 500 responses.
"""

import json
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from linkshortener.lambdas.shorten_url import app
from linkshortener.exceptions import URLQuotaExceededError
from linkshortener.services import URLService
from linkshortener.types import LambdaContext, LambdaEvent


class TestShortenURL:
    @pytest.fixture
    def event(self) -> LambdaEvent:
        return {
            'resource': '/shorten',
            'httpMethod': 'POST',
            'body': json.dumps({'target_url': 'https://example.com/blog/chuck-norris-is-awesome'}),
            'requestContext': {
                'domainName': 'sho.rt',
                'stage': 'test',
                'authorizer': {'claims': {'sub': '42'}},
            },
        }

    @pytest.fixture
    def anonymous_event(self, event: LambdaEvent) -> LambdaEvent:
        event['requestContext'].pop('authorizer')
        return event

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, context: LambdaContext, url_service: URLService) -> None:
        monkeypatch.setattr(app, 'build_url_service', lambda *a, **kw: url_service)

        self.context = context
        self.url_service = url_service

    def test_lambda_handler(self, event: LambdaEvent, url_view, listing) -> None:
        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 201
        assert response['headers']['Content-Type'] == 'application/json'
        assert body['url'] == url_view
        assert body['urls'] == listing['urls']
        assert body['pagination'] == listing['pagination']
        assert body['message'] == 'Successfully shortened https://example.com/blog/chuck-norris-is-awesome to https://sho.rt/r/B9'
        self.url_service.create_url.assert_called_once_with('https://example.com/blog/chuck-norris-is-awesome', user_id='42')
        self.url_service.list_urls.assert_called_once_with('42')

    def test_lambda_handler_for_anonymous_user(self, anonymous_event: LambdaEvent, url_view) -> None:
        response = app.lambda_handler(anonymous_event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 201
        assert body['url'] == url_view
        assert 'urls' not in body
        self.url_service.create_url.assert_called_once_with('https://example.com/blog/chuck-norris-is-awesome', user_id=None)
        self.url_service.list_urls.assert_not_called()

    def test_lambda_handler_with_invalid_json(self, event: LambdaEvent) -> None:
        event['body'] = '{"target_url": '

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['message'] == 'Bad Request (invalid JSON body)'
        assert body['errorCode'] == 'INVALID_JSON_BODY'
        self.url_service.create_url.assert_not_called()

    @pytest.mark.parametrize('request_body', [None, '{}', '{"target_url": ""}', '{"target_url": 42}', '["https://example.com"]'])
    def test_lambda_handler_with_missing_target_url(self, event: LambdaEvent, request_body) -> None:
        event['body'] = request_body

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['message'] == "Bad Request (missing 'target_url' in JSON body)"
        assert body['errorCode'] == 'MISSING_TARGET_URL'
        self.url_service.create_url.assert_not_called()

    def test_lambda_handler_with_exceeded_quota(self, event: LambdaEvent) -> None:
        self.url_service.create_url.side_effect = URLQuotaExceededError('You have reached the maximum limit of 20 URLs.')

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 429
        assert body['errorCode'] == 'LINK_QUOTA_EXCEEDED'
        assert 'maximum limit of 20 URLs' in body['message']

    def test_lambda_handler_with_invalid_configuration_file(self, monkeypatch: MonkeyPatch, event: LambdaEvent) -> None:
        monkeypatch.setattr(app, 'build_url_service', MagicMock(side_effect=FileNotFoundError('Something goes wrong')))

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 500
        assert body['message'] == 'Internal Server Error'
