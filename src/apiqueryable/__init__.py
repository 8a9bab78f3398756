# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Deferred, composable queries over REST and OData collections.

Example::

    from apiqueryable import ApiContext, ApiContextConfig, Property

    with ApiContext(ApiContextConfig(base_url="https://api.example.com/api")) as ctx:
        campaigns = ctx.set(Campaign)
        for c in campaigns.filter(Property("status") == "active").take(10):
            print(c.name)
"""

from .context import ApiContext
from .core.config import ApiContextConfig
from .core.endpoints import EndpointBuilder, EndpointSpec, convention_path, resolve_endpoint
from .core.errors import (
    ApiQueryError,
    ConfigurationError,
    DecodeError,
    HttpError,
    NotFoundError,
    TransportError,
    TranslationError,
    ValidationError,
)
from .models.entity import Entity
from .models.expressions import Property
from .models.query_builder import ApiQuery, QueryState
from .models.query_nodes import SortDirection, TranslationStyle
from .operations.provider import ApiQueryProvider
from .operations.sets import ApiSet

__version__ = "0.1.0"

__all__ = [
    "ApiContext",
    "ApiContextConfig",
    "ApiQuery",
    "ApiQueryProvider",
    "ApiSet",
    "EndpointBuilder",
    "EndpointSpec",
    "Entity",
    "Property",
    "QueryState",
    "SortDirection",
    "TranslationStyle",
    "convention_path",
    "resolve_endpoint",
    "ApiQueryError",
    "ConfigurationError",
    "DecodeError",
    "HttpError",
    "NotFoundError",
    "TransportError",
    "TranslationError",
    "ValidationError",
]
