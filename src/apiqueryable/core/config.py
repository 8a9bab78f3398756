# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from ..common.constants import DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from ..models.query_nodes import TranslationStyle
from . import _error_codes as ec
from .errors import ConfigurationError

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ApiContextConfig:
    """
    Configuration settings for an :class:`~apiqueryable.context.ApiContext`.

    :param base_url: Service root, for example ``"https://api.example.com"``. Trailing slash is ignored.
    :type base_url: str
    :param bearer_token: Static bearer token sent as ``Authorization: Bearer <token>``.
    :type bearer_token: str or None
    :param timeout: Default request timeout in seconds (default: 30).
    :type timeout: float
    :param ignore_ssl_errors: Disable TLS certificate validation. Only meant for local/test backends.
    :type ignore_ssl_errors: bool
    :param default_style: Translation style of every new query root (default: REST).
    :type default_style: ~apiqueryable.models.query_nodes.TranslationStyle
    :param http_retries: Extra attempts on network errors inside the transport (default: 0).
    :type http_retries: int or None
    :param http_backoff: Base delay in seconds for exponential backoff between attempts (default: 0.5).
    :type http_backoff: float or None
    :param user_agent: ``User-Agent`` header value.
    :type user_agent: str
    """

    base_url: str = ""
    bearer_token: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    ignore_ssl_errors: bool = False
    default_style: TranslationStyle = TranslationStyle.REST

    # Transport resilience
    http_retries: Optional[int] = None
    http_backoff: Optional[float] = None

    user_agent: str = DEFAULT_USER_AGENT

    def normalized_base_url(self) -> str:
        """
        Return ``base_url`` without trailing slashes.

        :raises ~apiqueryable.core.errors.ConfigurationError: If the base URL is empty.
        """
        base = (self.base_url or "").strip().rstrip("/")
        if not base:
            raise ConfigurationError("base_url is required.", subcode=ec.CONFIG_BASE_URL_MISSING)
        return base

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ApiContextConfig":
        """
        Create a configuration from ``APIQUERYABLE_*`` environment variables.

        Recognized variables: ``APIQUERYABLE_BASE_URL``, ``APIQUERYABLE_BEARER_TOKEN``,
        ``APIQUERYABLE_TIMEOUT``, ``APIQUERYABLE_IGNORE_SSL_ERRORS`` and
        ``APIQUERYABLE_QUERY_STYLE``. Missing variables keep their defaults.

        :param environ: Mapping to read instead of ``os.environ``.
        :return: Configuration instance.
        :rtype: ~apiqueryable.core.config.ApiContextConfig
        :raises ~apiqueryable.core.errors.ConfigurationError: If a value cannot be parsed.
        """
        env = os.environ if environ is None else environ
        timeout = DEFAULT_TIMEOUT_SECONDS
        raw_timeout = env.get("APIQUERYABLE_TIMEOUT")
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as exc:
                raise ConfigurationError(
                    f"APIQUERYABLE_TIMEOUT must be a number, got {raw_timeout!r}",
                    subcode=ec.CONFIG_INVALID_VALUE,
                ) from exc
        style = TranslationStyle.REST
        raw_style = env.get("APIQUERYABLE_QUERY_STYLE")
        if raw_style:
            try:
                style = TranslationStyle.parse(raw_style)
            except ValueError as exc:
                raise ConfigurationError(str(exc), subcode=ec.CONFIG_INVALID_VALUE) from exc
        return cls(
            base_url=env.get("APIQUERYABLE_BASE_URL", ""),
            bearer_token=env.get("APIQUERYABLE_BEARER_TOKEN") or None,
            timeout=timeout,
            ignore_ssl_errors=env.get("APIQUERYABLE_IGNORE_SSL_ERRORS", "").strip().lower() in _TRUE_VALUES,
            default_style=style,
        )
