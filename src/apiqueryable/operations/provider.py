# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Query execution for one collection endpoint.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, List, Optional, Type, TypeVar

from ..core.endpoints import EndpointSpec
from ..core.serialization import materialize_many, unwrap_envelope
from ..data import TranslatedQuery, get_translator
from ..models.query_builder import ApiQuery
from ..models.query_nodes import QueryNode, Source, TranslationStyle, root_of

if TYPE_CHECKING:
    from ..context import ApiContext

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class ApiQueryProvider(Generic[T]):
    """
    Turns query chains into GET requests against a single endpoint.

    :param context: Owning context; supplies the base URL and the request client.
    :type context: ~apiqueryable.context.ApiContext
    :param entity_type: Element type results are materialized as (an
        :class:`~apiqueryable.models.entity.Entity` subclass or ``dict``).
    :param spec: Endpoint settings of the collection.
    :type spec: ~apiqueryable.core.endpoints.EndpointSpec
    """

    def __init__(self, context: "ApiContext", entity_type: Type[T], spec: EndpointSpec) -> None:
        self._context = context
        self.entity_type = entity_type
        self.spec = spec

    def create_query(self, style: Optional[TranslationStyle] = None) -> ApiQuery[T]:
        """Return a fresh query rooted at this collection."""
        root = Source(self.entity_type, style or self._context.config.default_style)
        return ApiQuery(self, root)

    @property
    def endpoint_url(self) -> str:
        return self.spec.url(self._context.base_url)

    def translate(self, node: QueryNode) -> TranslatedQuery:
        return get_translator(root_of(node).style).translate(node)

    def request_url(self, node: QueryNode) -> str:
        url = self.endpoint_url
        query = self.translate(node).to_query_string()
        if not query:
            return url
        return url + ("&" if "?" in url else "?") + query

    def execute(self, node: QueryNode, timeout: Optional[float] = None) -> List[T]:
        """
        Run the chain: translate, GET, decode, unwrap and materialize.

        :param node: Leaf of the query chain.
        :param timeout: Per-query timeout; falls back to the endpoint's, then the context's.
        :return: Materialized entities, in response order.
        :raises ~apiqueryable.core.errors.TranslationError: If the chain cannot be translated.
        :raises ~apiqueryable.core.errors.TransportError: On timeout, connection failure or non-2xx status.
        :raises ~apiqueryable.core.errors.DecodeError: If the body is not the expected JSON array.
        """
        client = self._context._get_client()
        url = self.request_url(node)
        _logger.debug("Executing %s query: GET %s", root_of(node).style.value, url)
        response = client._request(
            "GET",
            url,
            headers=self.spec.headers,
            timeout=timeout if timeout is not None else self.spec.timeout,
        )
        payload: Any = client._decode(response)
        payload = unwrap_envelope(payload, self.spec.expect_envelope)
        return materialize_many(self.entity_type, payload)


__all__ = ["ApiQueryProvider"]
