# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared pytest fixtures and configuration for apiqueryable tests.

This module provides common test fixtures, fake HTTP objects, and
configuration that can be used across all test modules. No test touches the
network: requests go through :class:`FakeHTTP`, which replays canned
``(status, headers, body)`` tuples and records every call.
"""

import json

import pytest

from apiqueryable.context import ApiContext
from apiqueryable.core.config import ApiContextConfig


class FakeResponse:
    """Minimal stand-in for :class:`requests.Response`."""

    def __init__(self, status_code=200, body=None, headers=None):
        self.status_code = status_code
        self.headers = headers or {}
        if body is None:
            self.text = ""
        elif isinstance(body, str):
            self.text = body
        else:
            self.text = json.dumps(body)

    def json(self):
        return json.loads(self.text)


class FakeHTTP:
    """
    Replays canned responses in order.

    Exceptions in the queue are raised. A callable is invoked with
    ``(method, url, kwargs)`` and must return a ``(status, headers, body)`` tuple.
    """

    def __init__(self, responses):
        self._responses = list(responses)
        self.calls = []
        self.default_timeout = None

    def _request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if not self._responses:
            raise AssertionError("No more responses")
        item = self._responses.pop(0)
        if isinstance(item, BaseException):
            raise item
        if callable(item):
            item = item(method, url, kwargs)
        status, headers, body = item
        return FakeResponse(status, body, headers)

    def close(self):
        pass


@pytest.fixture
def test_config():
    """Test configuration with safe defaults."""
    return ApiContextConfig(
        base_url="https://api.example.com/api",
        bearer_token="test_token_12345",
        timeout=5,
    )


@pytest.fixture
def api_context(test_config):
    """Open context over the test configuration; closed after the test."""
    ctx = ApiContext(test_config)
    yield ctx
    ctx.close()


@pytest.fixture
def fake_http(api_context):
    """Install a :class:`FakeHTTP` with the given responses on ``api_context``."""

    def install(*responses):
        http = FakeHTTP(responses)
        api_context._get_client()._http = http
        return http

    return install


@pytest.fixture
def sample_campaign_data():
    """Sample campaign payload as returned by the backend."""
    return {
        "id": "c-1",
        "name": "Spring Launch",
        "partnerName": "Contoso",
        "partnerLogo": None,
        "budget": 75000.5,
        "description": "Seasonal campaign",
        "status": "active",
        "progress": 40,
        "startDate": "2024-03-01T09:00:00Z",
        "endDate": "2024-04-30T18:00:00Z",
        "createdDate": "2024-02-15T12:30:45.1234567Z",
        "tasks": [],
    }
