# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Endpoint resolution and fluent endpoint registration.

:func:`resolve_endpoint` turns a base URL, a collection path and an optional
API version into the absolute collection URL. :class:`EndpointBuilder`
collects per-collection settings and produces an
:class:`~apiqueryable.operations.sets.ApiSet`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, Mapping, Optional, Type, TypeVar

from . import _error_codes as ec
from .errors import ConfigurationError

if TYPE_CHECKING:
    from ..context import ApiContext
    from ..operations.sets import ApiSet

T = TypeVar("T")

_API_PREFIX = "/api"


def resolve_endpoint(base_url: str, path: str, version: Optional[str] = None) -> str:
    """
    Compute the absolute URL of a collection.

    Rules, applied in order:

    1. ``path`` starting with ``/api/`` is appended to the base verbatim.
    2. Without a version, ``path`` is appended to the base.
    3. With a version, a base ending in ``/api`` gets ``/{version}`` before
       the path; any other base gets ``/api/{version}``.

    Trailing slashes on ``base_url`` are ignored.

    :param base_url: Service root.
    :type base_url: :class:`str`
    :param path: Collection path, for example ``"/campaigns"``.
    :type path: :class:`str`
    :param version: Optional API version segment, for example ``"v1"``.
    :type version: :class:`str` | None
    :return: Absolute collection URL.
    :rtype: :class:`str`

    Example::

        resolve_endpoint("https://h/api", "/campaigns")        # 'https://h/api/campaigns'
        resolve_endpoint("https://h", "/messages", "v1")       # 'https://h/api/v1/messages'
        resolve_endpoint("https://h/api", "/orders", "v1")     # 'https://h/api/v1/orders'
    """
    base = (base_url or "").rstrip("/")
    if not path.startswith("/"):
        path = "/" + path
    if path.startswith(_API_PREFIX + "/"):
        return base + path
    if not version:
        return base + path
    version = version.strip("/")
    if base.lower().endswith(_API_PREFIX):
        return f"{base}/{version}{path}"
    return f"{base}{_API_PREFIX}/{version}{path}"


def convention_path(entity_type: Type[Any]) -> str:
    """Return ``"/" + lower-cased type name + "s"`` (``Campaign`` -> ``/campaigns``)."""
    return "/" + entity_type.__name__.lower() + "s"


@dataclass(frozen=True)
class EndpointSpec:
    """
    Immutable per-collection endpoint settings.

    :param path: Collection path relative to the base URL.
    :param version: Optional API version segment.
    :param headers: Extra headers sent with every request of the collection.
    :param timeout: Per-collection timeout in seconds; ``None`` uses the context default.
    :param expect_envelope: ``True`` requires a ``{"data": ...}`` envelope,
        ``False`` never unwraps, ``None`` unwraps when the body looks like one.
    """

    path: str
    version: Optional[str] = None
    headers: Mapping[str, str] = field(default_factory=dict)
    timeout: Optional[float] = None
    expect_envelope: Optional[bool] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def url(self, base_url: str) -> str:
        return resolve_endpoint(base_url, self.path, self.version)


class EndpointBuilder(Generic[T]):
    """
    Fluent registration of one collection on an :class:`~apiqueryable.context.ApiContext`.

    Obtain one from :meth:`ApiContext.register_endpoint` rather than constructing it directly.

    Example::

        campaigns = (
            ctx.register_endpoint(Campaign)
            .with_endpoint("/campaigns")
            .with_version("v1")
            .with_header("X-Service", "Lightning-Lanes")
            .with_timeout(10)
            .build()
        )
    """

    def __init__(self, context: "ApiContext", entity_type: Type[T]) -> None:
        self._context = context
        self._entity_type = entity_type
        self._path: Optional[str] = None
        self._version: Optional[str] = None
        self._headers: Dict[str, str] = {}
        self._timeout: Optional[float] = None
        self._expect_envelope: Optional[bool] = None
        self._factory: Optional[Callable[["ApiContext", EndpointSpec], "ApiSet[T]"]] = None

    def with_endpoint(self, path: str) -> "EndpointBuilder[T]":
        if not path:
            raise ConfigurationError("Endpoint path must be a non-empty string.", subcode=ec.CONFIG_INVALID_VALUE)
        self._path = path
        return self

    def with_version(self, version: str) -> "EndpointBuilder[T]":
        if not version:
            raise ConfigurationError("API version must be a non-empty string.", subcode=ec.CONFIG_INVALID_VALUE)
        self._version = version
        return self

    def with_header(self, name: str, value: str) -> "EndpointBuilder[T]":
        self._headers[name] = value
        return self

    def with_timeout(self, seconds: float) -> "EndpointBuilder[T]":
        if seconds is None or seconds <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {seconds!r}", subcode=ec.CONFIG_INVALID_VALUE)
        self._timeout = float(seconds)
        return self

    def with_convention_naming(self) -> "EndpointBuilder[T]":
        """Derive the path from the entity type name; any version is applied at resolution."""
        self._path = convention_path(self._entity_type)
        return self

    def expect_envelope(self, flag: Optional[bool] = True) -> "EndpointBuilder[T]":
        self._expect_envelope = flag
        return self

    def with_custom_factory(
        self, factory: Callable[["ApiContext", EndpointSpec], "ApiSet[T]"]
    ) -> "EndpointBuilder[T]":
        """
        Build the collection with ``factory(context, spec)`` instead of the default :class:`ApiSet`.
        """
        self._factory = factory
        return self

    def spec(self) -> EndpointSpec:
        """
        Freeze the current settings.

        :raises ~apiqueryable.core.errors.ConfigurationError: If no endpoint path was given.
        """
        if not self._path:
            raise ConfigurationError(
                f"Endpoint not specified for {self._entity_type.__name__}",
                subcode=ec.CONFIG_ENDPOINT_MISSING,
                details={"entity_type": self._entity_type.__name__},
            )
        return EndpointSpec(
            path=self._path,
            version=self._version,
            headers=self._headers,
            timeout=self._timeout,
            expect_envelope=self._expect_envelope,
        )

    def build(self) -> "ApiSet[T]":
        """
        Create the configured collection.

        :raises ~apiqueryable.core.errors.ConfigurationError: If no endpoint path was given.
        """
        spec = self.spec()
        if self._factory is not None:
            return self._factory(self._context, spec)
        from ..operations.sets import ApiSet

        return ApiSet(self._context, self._entity_type, spec)


__all__ = ["resolve_endpoint", "convention_path", "EndpointSpec", "EndpointBuilder"]
