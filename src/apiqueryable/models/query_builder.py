# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Deferred, composable queries over a remote collection.

An :class:`ApiQuery` records filter, sort and paging operations as an
immutable chain of nodes. Nothing touches the network until the query is
consumed; the first consumption issues exactly one GET and every later
consumption of the same query object reuses that outcome.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import TYPE_CHECKING, Any, Generic, Iterator, List, Optional, TypeVar, Union

from ..core import _error_codes as ec
from ..core.errors import ConfigurationError
from .query_nodes import (
    Filter,
    OrderBy,
    QueryNode,
    Skip,
    SortDirection,
    Take,
    ThenBy,
    TranslationStyle,
    root_of,
    with_style,
)

if TYPE_CHECKING:
    from ..operations.provider import ApiQueryProvider
    from .expressions import Predicate, Property

T = TypeVar("T")

_KEEP = object()


class QueryState(str, Enum):
    """Lifecycle of a single :class:`ApiQuery` object."""

    BUILDING = "building"
    MATERIALIZING = "materializing"
    MATERIALIZED = "materialized"
    FAILED = "failed"


class ApiQuery(Generic[T]):
    """
    Lazy query against one collection.

    Builder methods return a new :class:`ApiQuery` and never perform I/O.
    Consuming the query (iteration, :meth:`to_list`, :meth:`first`,
    :meth:`first_or_none`, :meth:`count` or ``len()``) materializes it once:

    * success caches the decoded entities, so iterating again does not
      issue another request;
    * failure leaves the query in :attr:`QueryState.FAILED` and the same
      error is raised on every later consumption.

    Use a fresh query (any builder call, or the collection itself) to issue
    a new request.

    :param provider: Executes the chain against the collection endpoint.
    :type provider: ~apiqueryable.operations.provider.ApiQueryProvider
    :param node: Leaf of the query chain.
    :type node: ~apiqueryable.models.query_nodes.QueryNode
    :param timeout: Per-request timeout in seconds; ``None`` falls back to the collection's.
    :type timeout: :class:`float` | None

    Example::

        active = (
            ctx.campaigns
            .filter(Property("status") == "active")
            .order_by("name")
            .then_by_descending("budget")
            .skip(20)
            .take(10)
        )
        active.to_query_string()    # 'status=active&sort=name_asc,budget_desc&pageIndex=2&pageSize=10'
        for campaign in active:     # one GET
            print(campaign.name)
    """

    def __init__(
        self,
        provider: "ApiQueryProvider",
        node: QueryNode,
        *,
        timeout: Optional[float] = None,
    ) -> None:
        self._provider = provider
        self._node = node
        self._timeout = timeout
        self._lock = threading.Lock()
        self._state = QueryState.BUILDING
        self._results: Optional[List[T]] = None
        self._error: Optional[BaseException] = None

    # ------------------------------------------------------------ inspection

    @property
    def node(self) -> QueryNode:
        return self._node

    @property
    def state(self) -> QueryState:
        return self._state

    @property
    def style(self) -> TranslationStyle:
        return root_of(self._node).style

    @property
    def entity_type(self) -> Any:
        return root_of(self._node).entity_type

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    @property
    def request_url(self) -> str:
        """
        Absolute URL the query would GET, without sending it.

        :raises ~apiqueryable.core.errors.TranslationError: If the chain cannot be translated.
        """
        return self._provider.request_url(self._node)

    def to_query_string(self) -> str:
        """
        Translated query string, without sending a request.

        :raises ~apiqueryable.core.errors.TranslationError: If the chain cannot be translated.
        """
        return self._provider.translate(self._node).to_query_string()

    def __repr__(self) -> str:
        return f"ApiQuery({getattr(self.entity_type, '__name__', self.entity_type)}, style={self.style.value}, state={self._state.value})"

    # --------------------------------------------------------------- builder

    def _derive(self, node: QueryNode, timeout: Any = _KEEP) -> "ApiQuery[T]":
        return ApiQuery(self._provider, node, timeout=self._timeout if timeout is _KEEP else timeout)

    def filter(self, predicate: "Predicate") -> "ApiQuery[T]":
        """
        Restrict results with a predicate built from :class:`~apiqueryable.models.expressions.Property`.

        Several calls are combined with AND. The predicate is not inspected
        here; unsupported shapes are reported when the query is consumed.
        """
        return self._derive(Filter(predicate, self._node))

    where = filter

    def order_by(self, path: Union[str, "Property"], descending: bool = False) -> "ApiQuery[T]":
        direction = SortDirection.DESC if descending else SortDirection.ASC
        return self._derive(OrderBy(path, direction, self._node))

    def order_by_descending(self, path: Union[str, "Property"]) -> "ApiQuery[T]":
        return self.order_by(path, descending=True)

    def then_by(self, path: Union[str, "Property"], descending: bool = False) -> "ApiQuery[T]":
        direction = SortDirection.DESC if descending else SortDirection.ASC
        return self._derive(ThenBy(path, direction, self._node))

    def then_by_descending(self, path: Union[str, "Property"]) -> "ApiQuery[T]":
        return self.then_by(path, descending=True)

    def skip(self, count: int) -> "ApiQuery[T]":
        """Skip ``count`` elements. The last :meth:`skip` in a chain wins."""
        return self._derive(Skip(count, self._node))

    def take(self, count: int) -> "ApiQuery[T]":
        """Return at most ``count`` elements. The last :meth:`take` in a chain wins."""
        return self._derive(Take(count, self._node))

    def use_style(self, style: Union[str, TranslationStyle]) -> "ApiQuery[T]":
        """Return the same chain translated with ``style`` (``"rest"`` or ``"odata"``)."""
        return self._derive(with_style(self._node, TranslationStyle.parse(style)))

    def with_timeout(self, seconds: Optional[float]) -> "ApiQuery[T]":
        """Return the same chain with a per-request timeout; ``None`` restores the collection default."""
        if seconds is not None and seconds <= 0:
            raise ConfigurationError(f"timeout must be positive, got {seconds!r}", subcode=ec.CONFIG_INVALID_VALUE)
        return self._derive(self._node, timeout=seconds)

    # ------------------------------------------------------------ consumers

    def _materialize(self) -> List[T]:
        with self._lock:
            if self._state is QueryState.MATERIALIZED:
                return self._results  # type: ignore[return-value]
            if self._state is QueryState.FAILED:
                raise self._error  # type: ignore[misc]
            self._state = QueryState.MATERIALIZING
            try:
                results = self._provider.execute(self._node, timeout=self._timeout)
            except Exception as exc:
                self._error = exc
                self._state = QueryState.FAILED
                raise
            self._results = list(results)
            self._state = QueryState.MATERIALIZED
            return self._results

    def __iter__(self) -> Iterator[T]:
        return iter(self._materialize())

    def __len__(self) -> int:
        return len(self._materialize())

    def to_list(self) -> List[T]:
        """Materialize and return a new list of the results."""
        return list(self._materialize())

    def first(self) -> T:
        """
        Return the first result.

        :raises ValueError: If the query returned no results.
        """
        results = self._materialize()
        if not results:
            raise ValueError(f"Query for {getattr(self.entity_type, '__name__', self.entity_type)} returned no results")
        return results[0]

    def first_or_none(self) -> Optional[T]:
        results = self._materialize()
        return results[0] if results else None

    def count(self) -> int:
        """Number of results returned by the backend for this query (not a server-side count)."""
        return len(self._materialize())


__all__ = ["ApiQuery", "QueryState"]
