# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for ApiContext lifecycle, registration and context manager support."""

import unittest
from dataclasses import dataclass
from unittest.mock import MagicMock, patch

import requests
from azure.core.credentials import TokenCredential

from apiqueryable.context import ApiContext
from apiqueryable.core._error_codes import CONFIG_BASE_URL_MISSING, CONFIG_CONTEXT_CLOSED
from apiqueryable.core.config import ApiContextConfig
from apiqueryable.core.errors import ConfigurationError
from apiqueryable.models.entity import Entity
from apiqueryable.operations.sets import ApiSet


@dataclass
class Campaign(Entity):
    name: str = ""


@dataclass
class Message(Entity):
    content: str = ""


class LightningLanesContext(ApiContext):
    def on_endpoint_registering(self):
        self.campaigns = (
            self.register_endpoint(Campaign)
            .with_endpoint("/campaigns")
            .with_header("X-Service", "Lightning-Lanes")
            .build()
        )
        self.messages = self.register_endpoint(Message).with_endpoint("/messages").with_version("v1").with_timeout(30).build()


class TestContextManager(unittest.TestCase):
    """Test context manager support on ApiContext."""

    def setUp(self):
        self.config = ApiContextConfig(base_url="https://api.example.com/api", bearer_token="tok")

    def test_enter_creates_session(self):
        ctx = ApiContext(self.config)
        self.assertIsNone(ctx._session)

        result = ctx.__enter__()

        self.assertIsInstance(ctx._session, requests.Session)
        self.assertTrue(ctx._owns_session)
        self.assertIs(result, ctx)
        ctx.close()

    def test_exit_closes_session(self):
        ctx = ApiContext(self.config)
        ctx.__enter__()

        mock_session = MagicMock(spec=requests.Session)
        ctx._session = mock_session
        ctx._owns_session = True

        ctx.__exit__(None, None, None)

        mock_session.close.assert_called_once()
        self.assertIsNone(ctx._session)
        self.assertFalse(ctx._owns_session)
        self.assertTrue(ctx.closed)

    def test_close_idempotent(self):
        ctx = ApiContext(self.config)
        ctx.__enter__()

        ctx.close()
        ctx.close()
        ctx.close()

        self.assertTrue(ctx.closed)

    def test_close_without_enter(self):
        ctx = ApiContext(self.config)
        ctx.close()
        self.assertIsNone(ctx._session)

    def test_exit_with_exception(self):
        ctx = ApiContext(self.config)

        try:
            with ctx:
                self.assertIsNotNone(ctx._session)
                raise ValueError("Test exception")
        except ValueError:
            pass

        self.assertIsNone(ctx._session)
        self.assertTrue(ctx.closed)

    def test_session_passed_to_client(self):
        with ApiContext(self.config) as ctx:
            client = ctx._get_client()
            self.assertIs(client._http._session, ctx._session)

    def test_client_created_before_enter_is_rebound(self):
        ctx = ApiContext(self.config)
        before = ctx._get_client()
        with ctx:
            after = ctx._get_client()
            self.assertIsNot(before, after)
            self.assertIs(after._http._session, ctx._session)

    def test_external_session_not_closed(self):
        session = MagicMock(spec=requests.Session)
        with ApiContext(self.config, session=session) as ctx:
            self.assertIs(ctx._get_client()._http._session, session)
            self.assertFalse(ctx._owns_session)
        session.close.assert_not_called()

    def test_closed_context_rejects_use(self):
        ctx = ApiContext(self.config)
        ctx.close()
        with self.assertRaises(ConfigurationError) as cm:
            ctx._get_client()
        self.assertEqual(cm.exception.subcode, CONFIG_CONTEXT_CLOSED)
        with self.assertRaises(ConfigurationError):
            ctx.__enter__()

    def test_nested_enter_reuses_session(self):
        ctx = ApiContext(self.config)

        with ctx:
            session1 = ctx._session
            ctx.__enter__()
            self.assertIs(ctx._session, session1)


class TestContextConstruction(unittest.TestCase):

    def test_missing_base_url(self):
        with self.assertRaises(ConfigurationError) as cm:
            ApiContext(ApiContextConfig())
        self.assertEqual(cm.exception.subcode, CONFIG_BASE_URL_MISSING)

    def test_config_from_env_when_omitted(self):
        with patch.dict("os.environ", {"APIQUERYABLE_BASE_URL": "https://env.example"}, clear=True):
            ctx = ApiContext()
        self.assertEqual(ctx.base_url, "https://env.example")

    def test_credential_token_resolved_at_construction(self):
        credential = MagicMock(spec=TokenCredential)
        credential.get_token.return_value.token = "cred-token"

        ctx = ApiContext(ApiContextConfig(base_url="https://h/"), credential)

        credential.get_token.assert_called_once_with("https://h/.default")
        self.assertEqual(ctx.auth.headers(), {"Authorization": "Bearer cred-token"})
        credential.get_token.assert_called_once()

    def test_on_endpoint_registering_hook(self):
        ctx = LightningLanesContext(ApiContextConfig(base_url="https://h"))
        self.assertIsInstance(ctx.campaigns, ApiSet)
        self.assertEqual(ctx.campaigns.endpoint_url, "https://h/campaigns")
        self.assertEqual(dict(ctx.campaigns.spec.headers), {"X-Service": "Lightning-Lanes"})
        self.assertEqual(ctx.messages.endpoint_url, "https://h/api/v1/messages")
        self.assertEqual(ctx.messages.spec.timeout, 30)

    def test_set_shortcut_uses_convention(self):
        ctx = ApiContext(ApiContextConfig(base_url="https://h/api"))
        self.assertEqual(ctx.set(Campaign).endpoint_url, "https://h/api/campaigns")
        self.assertEqual(ctx.set(Campaign, "/promos", "v2").endpoint_url, "https://h/api/v2/promos")

    def test_ignore_ssl_errors_disables_verification(self):
        ctx = ApiContext(ApiContextConfig(base_url="https://h", ignore_ssl_errors=True, timeout=4))
        http = ctx._get_client()._http
        self.assertFalse(http.verify)
        self.assertEqual(http.default_timeout, 4)
