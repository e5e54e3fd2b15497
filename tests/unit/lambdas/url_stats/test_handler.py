"""Unit tests for the url_stats AWS Lambda handler.

Test coverage includes:

1. Successful stats
   - Returns 200 with the service's stats payload.

2. Invalid requests
   - Missing user id returns HTTP 400.

3. Configuration errors
   - Missing config files result in HTTP 500 responses.
"""

import json
from unittest.mock import MagicMock

import pytest
from pytest import MonkeyPatch

from linkshortener.lambdas.url_stats import app
from linkshortener.services import URLService
from linkshortener.types import LambdaContext, LambdaEvent


class TestURLStats:
    @pytest.fixture
    def event(self) -> LambdaEvent:
        return {
            'resource': '/urls/stats',
            'httpMethod': 'GET',
            'queryStringParameters': {'userId': '42'},
            'requestContext': {'domainName': 'sho.rt', 'stage': 'test'},
        }

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, context: LambdaContext, url_service: URLService) -> None:
        monkeypatch.setattr(app, 'build_url_service', lambda *a, **kw: url_service)

        self.context = context
        self.url_service = url_service

    def test_lambda_handler(self, event: LambdaEvent, url_view) -> None:
        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 200
        assert body == {'totalClicks': 0, 'totalUrls': 1, 'topUrls': [url_view]}
        self.url_service.user_stats.assert_called_once_with('42')

    def test_lambda_handler_without_user(self, event: LambdaEvent) -> None:
        event['queryStringParameters'] = {}

        response = app.lambda_handler(event, self.context)

        assert response['statusCode'] == 400
        assert json.loads(response['body'])['errorCode'] == 'MISSING_USER_ID'
        self.url_service.user_stats.assert_not_called()

    def test_lambda_handler_with_invalid_configuration_file(self, monkeypatch: MonkeyPatch, event: LambdaEvent) -> None:
        monkeypatch.setattr(app, 'build_url_service', MagicMock(side_effect=FileNotFoundError('Something goes wrong')))

        response = app.lambda_handler(event, self.context)

        assert response['statusCode'] == 500
