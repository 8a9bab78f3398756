# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""OData-convention translator: ``$filter``, ``$orderby``, ``$skip``, ``$top``."""

from __future__ import annotations

from typing import Any, List, Tuple

from ..common.constants import (
    ODATA_PARAM_FILTER,
    ODATA_PARAM_ORDERBY,
    ODATA_PARAM_SKIP,
    ODATA_PARAM_TOP,
)
from ..core import _error_codes as ec
from ..core.errors import TranslationError
from ..models.expressions import And, Compare, Or, StringOp
from ..models.query_nodes import SortDirection, TranslationStyle
from ._translator import _QueryTranslator, _TranslationState


class _ODataState(_TranslationState):
    def __init__(self) -> None:
        super().__init__()
        self.filters: List[str] = []
        self.orderby: List[str] = []


class ODataTranslator(_QueryTranslator):
    """
    Lower a query chain into OData system query options.

    Example::

        chain = (campaigns.use_style(TranslationStyle.ODATA)
                 .filter((Property("Status") == "active") & (Property("Budget") > 1000))
                 .order_by_descending("CreatedDate"))
        ODataTranslator().translate(chain.node).as_dict()
        # {'$filter': "status eq 'active' and budget gt 1000",
        #  '$orderby': 'createddate desc'}
    """

    style = TranslationStyle.ODATA

    def _new_state(self) -> _ODataState:
        return _ODataState()

    def _apply_filter(self, state: _ODataState, predicate: Any) -> None:
        state.filters.append(self._render(predicate))

    def _apply_ordering(self, state: _ODataState, path: Any, direction: SortDirection) -> None:
        name = self._property_name(path, "/")
        state.orderby.append(f"{name} desc" if direction is SortDirection.DESC else name)

    def _emit(self, state: _ODataState) -> List[Tuple[str, str]]:
        params: List[Tuple[str, str]] = []
        if state.filters:
            params.append((ODATA_PARAM_FILTER, " and ".join(state.filters)))
        if state.orderby:
            params.append((ODATA_PARAM_ORDERBY, ",".join(state.orderby)))
        if state.skip:
            params.append((ODATA_PARAM_SKIP, str(state.skip)))
        if state.take is not None:
            params.append((ODATA_PARAM_TOP, str(state.take)))
        return params

    def _render(self, predicate: Any) -> str:
        if isinstance(predicate, And):
            return f"{self._render(predicate.left)} and {self._render(predicate.right)}"
        if isinstance(predicate, Or):
            # Only ``or`` groups are parenthesized
            return f"({self._render(predicate.left)} or {self._render(predicate.right)})"
        if isinstance(predicate, Compare):
            name = self._property_name(predicate.path, "/")
            operator = self._operator(predicate.operator)
            return f"{name} {operator.value} {self._format_literal(predicate.literal, quote_strings=True)}"
        if isinstance(predicate, StringOp):
            name = self._property_name(predicate.path, "/")
            kind = self._string_operation(predicate.kind)
            return f"{kind.value}({name},{self._format_literal(predicate.literal, quote_strings=True)})"
        raise TranslationError(
            f"Unsupported predicate of type {type(predicate).__name__}",
            subcode=ec.TRANSLATION_UNSUPPORTED_PREDICATE,
            details={"predicate": repr(predicate)},
        )


__all__ = ["ODataTranslator"]
