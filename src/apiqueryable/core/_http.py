# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
HTTP client with timeout handling, optional network-error retries and session support.

This module provides :class:`~apiqueryable.core._http._HttpClient`, a wrapper
around the requests library that applies a default timeout, the TLS
verification policy, optional exponential-backoff retries for network errors
and connection pooling via session reuse.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Optional

import requests

_logger = logging.getLogger(__name__)


class _HttpClient:
    """
    HTTP client with configurable retry logic, timeout handling, and optional session support.

    Status codes are never retried here; only :class:`requests.exceptions.RequestException`
    raised by the transport itself is, and only when ``retries`` is positive.

    :param retries: Extra attempts after a network error. Default is 0.
    :type retries: :class:`int` | None
    :param backoff: Base delay in seconds between retry attempts. Default is 0.5.
    :type backoff: :class:`float` | None
    :param timeout: Default request timeout in seconds, used when a call does not pass one.
    :type timeout: :class:`float` | None
    :param verify: TLS certificate verification flag passed to requests.
    :type verify: :class:`bool`
    :param session: Optional requests.Session for connection pooling.
    :type session: :class:`requests.Session` | None
    """

    def __init__(
        self,
        retries: Optional[int] = None,
        backoff: Optional[float] = None,
        timeout: Optional[float] = None,
        verify: bool = True,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.max_attempts = 1 + max(retries or 0, 0)
        self.base_delay = backoff if backoff is not None else 0.5
        self.default_timeout: Optional[float] = timeout
        self.verify = verify
        self._session = session

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """
        Execute an HTTP request with timeout management and optional retries.

        :param method: HTTP method (GET, POST, PUT, DELETE, etc.).
        :type method: :class:`str`
        :param url: Target URL for the request.
        :type url: :class:`str`
        :param kwargs: Additional arguments passed to ``requests.request()`` or
            ``session.request()``, including headers, data, etc.
        :return: HTTP response object.
        :rtype: :class:`requests.Response`
        :raises requests.exceptions.RequestException: If all attempts fail.
        """
        if kwargs.get("timeout") is None and self.default_timeout is not None:
            kwargs["timeout"] = self.default_timeout
        kwargs.setdefault("verify", self.verify)

        for attempt in range(self.max_attempts):
            started = time.perf_counter()
            _logger.debug("%s %s (attempt %d)", method.upper(), url, attempt + 1)
            try:
                if self._session is not None:
                    response = self._session.request(method, url, **kwargs)
                else:
                    response = requests.request(method, url, **kwargs)
            except requests.exceptions.RequestException as exc:
                _logger.debug("%s %s failed: %s", method.upper(), url, exc)
                if attempt == self.max_attempts - 1:
                    raise
                delay = self.base_delay * (2**attempt)
                time.sleep(delay)
                continue
            duration_ms = (time.perf_counter() - started) * 1000
            level = logging.WARNING if response.status_code >= 400 else logging.DEBUG
            _logger.log(level, "%s %s %d %.1fms", method.upper(), url, response.status_code, duration_ms)
            return response
        raise RuntimeError("Unexpected end of retry loop")

    def close(self) -> None:
        """
        Close the HTTP client and release resources.

        If a session was provided, this method closes it. Safe to call multiple times.
        After closing, the client should not be used for further requests.
        """
        if self._session is not None:
            self._session.close()
            self._session = None
