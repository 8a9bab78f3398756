# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Low-level request client shared by queries and collection verbs.

Builds the standard headers, delegates to the transport and converts
transport failures and non-2xx responses into structured errors.
"""

from __future__ import annotations

import uuid
from typing import Any, Dict, Mapping, Optional

import requests

from ..common.constants import (
    CONTENT_TYPE_JSON,
    HEADER_ACCEPT,
    HEADER_CLIENT_REQUEST_ID,
    HEADER_CONTENT_TYPE,
    HEADER_REQUEST_ID,
    HEADER_RETRY_AFTER,
    HEADER_USER_AGENT,
    TRANSIENT_STATUS_CODES,
)
from ..core import _error_codes as ec
from ..core._auth import _AuthManager
from ..core._http import _HttpClient
from ..core.config import ApiContextConfig
from ..core.errors import HttpError, TransportError
from ..core.serialization import JsonSerializer

_BODY_EXCERPT_LENGTH = 200


class _ApiClient:
    """
    Request client bound to one context.

    :param auth: Resolves the ``Authorization`` header.
    :param config: Context configuration (timeout, TLS, retries, user agent).
    :param session: Optional shared :class:`requests.Session`.
    """

    def __init__(
        self,
        auth: _AuthManager,
        config: ApiContextConfig,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.auth = auth
        self.config = config
        self.serializer = JsonSerializer()
        self._http = _HttpClient(
            retries=config.http_retries,
            backoff=config.http_backoff,
            timeout=config.timeout,
            verify=not config.ignore_ssl_errors,
            session=session,
        )

    def _headers(self, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        headers = {
            HEADER_ACCEPT: CONTENT_TYPE_JSON,
            HEADER_CONTENT_TYPE: CONTENT_TYPE_JSON,
            HEADER_USER_AGENT: self.config.user_agent,
            HEADER_CLIENT_REQUEST_ID: str(uuid.uuid4()),
        }
        headers.update(self.auth.headers())
        if extra:
            headers.update(extra)
        return headers

    def _request(
        self,
        method: str,
        url: str,
        *,
        headers: Optional[Mapping[str, str]] = None,
        timeout: Optional[float] = None,
        body: Any = None,
    ) -> Any:
        """
        Send one request and return the response when its status is 2xx.

        :raises ~apiqueryable.core.errors.TransportError: On timeout or connection failure.
        :raises ~apiqueryable.core.errors.HttpError: On a non-2xx status.
        """
        kwargs: Dict[str, Any] = {"headers": self._headers(headers)}
        if timeout is not None:
            kwargs["timeout"] = timeout
        if body is not None:
            kwargs["data"] = self.serializer.encode(body)
        try:
            response = self._http._request(method, url, **kwargs)
        except requests.exceptions.Timeout as exc:
            raise TransportError(
                f"{method.upper()} {url} timed out",
                subcode=ec.TRANSPORT_TIMEOUT,
                details={"url": url, "timeout": kwargs.get("timeout", self._http.default_timeout)},
                is_transient=True,
            ) from exc
        except requests.exceptions.ConnectionError as exc:
            raise TransportError(
                f"{method.upper()} {url} failed to connect: {exc}",
                subcode=ec.TRANSPORT_CONNECTION,
                details={"url": url},
                is_transient=True,
            ) from exc
        except requests.exceptions.RequestException as exc:
            raise TransportError(
                f"{method.upper()} {url} failed: {exc}",
                subcode=ec.TRANSPORT_FAILURE,
                details={"url": url},
            ) from exc
        if not 200 <= response.status_code < 300:
            raise self._http_error(method, url, response)
        return response

    def _http_error(self, method: str, url: str, response: Any) -> HttpError:
        status = response.status_code
        text = getattr(response, "text", "") or ""
        service_code = None
        message = None
        try:
            payload = response.json()
        except ValueError:
            payload = None
        if isinstance(payload, dict):
            err = payload.get("error")
            if isinstance(err, dict):
                service_code = err.get("code")
                message = err.get("message")
            elif isinstance(payload.get("message"), str):
                message = payload["message"]
        headers = getattr(response, "headers", None) or {}
        retry_after = None
        raw_retry = headers.get(HEADER_RETRY_AFTER)
        if raw_retry is not None:
            try:
                retry_after = int(raw_retry)
            except (TypeError, ValueError):
                retry_after = None
        return HttpError(
            f"{method.upper()} {url} returned {status}" + (f": {message}" if message else ""),
            status_code=status,
            is_transient=status in TRANSIENT_STATUS_CODES,
            subcode=ec.http_subcode(status),
            service_error_code=service_code,
            request_id=headers.get(HEADER_REQUEST_ID),
            body_excerpt=text[:_BODY_EXCERPT_LENGTH] if text else None,
            retry_after=retry_after,
            details={"url": url, "method": method.upper()},
        )

    def _decode(self, response: Any) -> Any:
        """Return the decoded JSON body, or ``None`` for an empty body."""
        text = getattr(response, "text", "") or ""
        if not text.strip():
            return None
        return self.serializer.decode(text, status_code=response.status_code)

    def close(self) -> None:
        self._http.close()
