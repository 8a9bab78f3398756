# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Structured exception hierarchy for apiqueryable.

Every failure surfaced by the library derives from :class:`ApiQueryError` and
carries a machine-readable ``code``/``subcode`` pair plus free-form
``details``, so callers can tell a broken query apart from a broken network
or a malformed payload.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, Optional


class ApiQueryError(Exception):
    """Base structured error for apiqueryable."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        source: Optional[str] = None,
        is_transient: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.subcode = subcode
        self.status_code = status_code
        self.details = details or {}
        self.source = source or "client"
        self.is_transient = is_transient
        self.timestamp = _dt.datetime.now(_dt.timezone.utc).isoformat().replace("+00:00", "Z")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "code": self.code,
            "subcode": self.subcode,
            "status_code": self.status_code,
            "details": self.details,
            "source": self.source,
            "is_transient": self.is_transient,
            "timestamp": self.timestamp,
        }

    def __repr__(self) -> str:  # pragma: no cover
        return f"{self.__class__.__name__}(code={self.code!r}, subcode={self.subcode!r}, message={self.message!r})"


class ConfigurationError(ApiQueryError):
    """Endpoint or context misconfiguration. Never retried."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="configuration_error", subcode=subcode, details=details, source="client")


class ValidationError(ApiQueryError):
    """Local precondition failure, raised before any network attempt."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="validation_error", subcode=subcode, details=details, source="client")


class TranslationError(ApiQueryError):
    """A query node the active translator cannot lower to wire parameters."""

    def __init__(self, message: str, *, subcode: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="translation_error", subcode=subcode, details=details, source="client")


class DecodeError(ApiQueryError):
    """The request succeeded but the response body has the wrong shape."""

    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message,
            code="decode_error",
            subcode=subcode,
            status_code=status_code,
            details=details,
            source="server",
        )


class TransportError(ApiQueryError):
    """Connection failure or timeout talking to the backend."""

    def __init__(
        self,
        message: str,
        *,
        subcode: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
        is_transient: bool = False,
        code: str = "transport_error",
        source: str = "network",
    ):
        super().__init__(
            message,
            code=code,
            subcode=subcode,
            status_code=status_code,
            details=details,
            source=source,
            is_transient=is_transient,
        )


class HttpError(TransportError):
    """Non-2xx response from the backend."""

    def __init__(
        self,
        message: str,
        status_code: int,
        is_transient: bool = False,
        subcode: Optional[str] = None,
        service_error_code: Optional[str] = None,
        request_id: Optional[str] = None,
        body_excerpt: Optional[str] = None,
        retry_after: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        d = details or {}
        if service_error_code is not None:
            d["service_error_code"] = service_error_code
        if request_id is not None:
            d["request_id"] = request_id
        if body_excerpt is not None:
            d["body_excerpt"] = body_excerpt
        if retry_after is not None:
            d["retry_after"] = retry_after
        super().__init__(
            message,
            code="http_error",
            subcode=subcode,
            status_code=status_code,
            details=d,
            source="server",
            is_transient=is_transient,
        )


class NotFoundError(ApiQueryError):
    """The requested entity does not exist. Raised only by ``ApiSet.get``."""

    def __init__(self, message: str, *, entity_id: Optional[str] = None, url: Optional[str] = None):
        details: Dict[str, Any] = {}
        if entity_id is not None:
            details["entity_id"] = entity_id
        if url is not None:
            details["url"] = url
        super().__init__(
            message,
            code="not_found",
            subcode="http_404",
            status_code=404,
            details=details,
            source="server",
        )


__all__ = [
    "ApiQueryError",
    "ConfigurationError",
    "ValidationError",
    "TranslationError",
    "DecodeError",
    "TransportError",
    "HttpError",
    "NotFoundError",
]
