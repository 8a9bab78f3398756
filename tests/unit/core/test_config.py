# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import unittest

from apiqueryable.core._error_codes import CONFIG_BASE_URL_MISSING, CONFIG_INVALID_VALUE
from apiqueryable.core.config import ApiContextConfig
from apiqueryable.core.errors import ConfigurationError
from apiqueryable.models.query_nodes import TranslationStyle


class TestApiContextConfig(unittest.TestCase):

    def test_defaults(self):
        config = ApiContextConfig()
        self.assertEqual(config.timeout, 30.0)
        self.assertFalse(config.ignore_ssl_errors)
        self.assertIs(config.default_style, TranslationStyle.REST)
        self.assertIsNone(config.http_retries)
        self.assertIsNone(config.bearer_token)

    def test_normalized_base_url(self):
        self.assertEqual(ApiContextConfig(base_url=" https://h/api/ ").normalized_base_url(), "https://h/api")

    def test_empty_base_url_raises(self):
        with self.assertRaises(ConfigurationError) as ctx:
            ApiContextConfig().normalized_base_url()
        self.assertEqual(ctx.exception.subcode, CONFIG_BASE_URL_MISSING)

    def test_from_env(self):
        config = ApiContextConfig.from_env(
            {
                "APIQUERYABLE_BASE_URL": "https://h/api",
                "APIQUERYABLE_BEARER_TOKEN": "tok",
                "APIQUERYABLE_TIMEOUT": "12.5",
                "APIQUERYABLE_IGNORE_SSL_ERRORS": "true",
                "APIQUERYABLE_QUERY_STYLE": "OData",
            }
        )
        self.assertEqual(config.base_url, "https://h/api")
        self.assertEqual(config.bearer_token, "tok")
        self.assertEqual(config.timeout, 12.5)
        self.assertTrue(config.ignore_ssl_errors)
        self.assertIs(config.default_style, TranslationStyle.ODATA)

    def test_from_env_empty(self):
        config = ApiContextConfig.from_env({})
        self.assertEqual(config, ApiContextConfig())

    def test_from_env_invalid_values(self):
        for env in ({"APIQUERYABLE_TIMEOUT": "soon"}, {"APIQUERYABLE_QUERY_STYLE": "graphql"}):
            with self.assertRaises(ConfigurationError) as ctx:
                ApiContextConfig.from_env(env)
            self.assertEqual(ctx.exception.subcode, CONFIG_INVALID_VALUE)

    def test_frozen(self):
        with self.assertRaises(AttributeError):
            ApiContextConfig().timeout = 1
