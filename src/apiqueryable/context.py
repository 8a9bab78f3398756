# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

import requests
from azure.core.credentials import TokenCredential

from .core import _error_codes as ec
from .core._auth import _AuthManager
from .core.config import ApiContextConfig
from .core.endpoints import EndpointBuilder, EndpointSpec, convention_path
from .core.errors import ConfigurationError
from .data._client import _ApiClient
from .operations.sets import ApiSet

T = TypeVar("T")


class ApiContext:
    """
    Entry point owning the transport, the bearer token and the registered collections.

    Subclass it and override :meth:`on_endpoint_registering` to declare
    collections once, at construction time, the way an application context
    exposes its entity sets.

    **Context Manager Support (Recommended)**:
        Using the context as a context manager creates a pooled HTTP session
        and guarantees it is closed::

            with LightningLanesContext(config) as ctx:
                for campaign in ctx.campaigns.take(5):
                    print(campaign.name)

    **Without Context Manager**:
        Requests go through one-off connections. Call ``close()`` when done;
        afterwards every collection of the context raises
        :class:`~apiqueryable.core.errors.ConfigurationError`.

    :param config: Base URL, token, timeout and TLS settings. If not provided,
        defaults are loaded from :meth:`~apiqueryable.core.config.ApiContextConfig.from_env`.
    :type config: ~apiqueryable.core.config.ApiContextConfig or None
    :param credential: Optional Azure Identity credential used to obtain the
        bearer token when ``config.bearer_token`` is not set.
    :type credential: ~azure.core.credentials.TokenCredential or None
    :param session: Optional externally managed :class:`requests.Session`. It is never closed by the context.
    :type session: :class:`requests.Session` or None
    :param scope: OAuth scope requested from ``credential`` (default: ``"<base_url>/.default"``).
    :type scope: :class:`str` or None
    :raises ~apiqueryable.core.errors.ConfigurationError: If the base URL is empty.

    Example::

        class LightningLanesContext(ApiContext):
            def on_endpoint_registering(self):
                self.campaigns = (
                    self.register_endpoint(Campaign)
                    .with_endpoint("/campaigns")
                    .with_header("X-Service", "Lightning-Lanes")
                    .build()
                )
                self.messages = self.register_endpoint(Message).with_endpoint("/messages").with_timeout(30).build()
    """

    def __init__(
        self,
        config: Optional[ApiContextConfig] = None,
        credential: Optional[TokenCredential] = None,
        *,
        session: Optional[requests.Session] = None,
        scope: Optional[str] = None,
    ) -> None:
        self._config = config or ApiContextConfig.from_env()
        self._base_url = self._config.normalized_base_url()
        self.auth = _AuthManager(
            token=self._config.bearer_token,
            credential=credential,
            scope=scope or f"{self._base_url}/.default",
        )
        # The token is static for the lifetime of the context.
        self.auth.headers()
        self._client: Optional[_ApiClient] = None
        self._session: Optional[requests.Session] = session
        self._owns_session: bool = False
        self._closed: bool = False
        self.on_endpoint_registering()

    @property
    def config(self) -> ApiContextConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def closed(self) -> bool:
        return self._closed

    def on_endpoint_registering(self) -> None:
        """Hook for subclasses to register their collections. Called once from ``__init__``."""

    def register_endpoint(self, entity_type: Type[T]) -> EndpointBuilder[T]:
        """Start the fluent registration of a collection of ``entity_type``."""
        return EndpointBuilder(self, entity_type)

    def set(self, entity_type: Type[T], path: Optional[str] = None, version: Optional[str] = None) -> ApiSet[T]:
        """
        Shortcut for a collection with default settings.

        :param entity_type: Element type.
        :param path: Collection path; defaults to the naming convention (``Campaign`` -> ``/campaigns``).
        :param version: Optional API version segment.
        """
        return ApiSet(self, entity_type, EndpointSpec(path=path or convention_path(entity_type), version=version))

    def __enter__(self) -> "ApiContext":
        """
        Enter the context manager.

        Creates an HTTP session for connection pooling. Every collection of the
        context reuses this session.
        """
        self._ensure_open()
        if self._session is None:
            self._session = requests.Session()
            self._owns_session = True
            # rebind an already created client to the pooled session
            self._client = None
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        """
        Release the HTTP session (when owned) and mark the context closed.

        Safe to call multiple times.
        """
        if self._client is not None:
            if self._owns_session:
                self._client.close()
            self._client = None
        if self._session is not None and self._owns_session:
            self._session.close()
        self._session = None
        self._owns_session = False
        self._closed = True

    def _ensure_open(self) -> None:
        if self._closed:
            raise ConfigurationError("ApiContext is closed.", subcode=ec.CONFIG_CONTEXT_CLOSED)

    def _get_client(self) -> _ApiClient:
        """
        Get or create the internal request client.

        :raises ~apiqueryable.core.errors.ConfigurationError: If the context was closed.
        """
        self._ensure_open()
        if self._client is None:
            self._client = _ApiClient(self.auth, self._config, session=self._session)
        return self._client

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"{self.__class__.__name__}({self._base_url!r}, {state})"


__all__ = ["ApiContext"]
