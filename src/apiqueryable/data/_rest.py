# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
REST-convention translator: ``search``, ``<field>``, ``sort``, ``pageIndex``, ``pageSize``.

REST backends expose ad-hoc parameters rather than a boolean algebra, so only
simple predicates are honored:

- the first ``contains`` term becomes ``search=<literal>``;
- the first equality per field becomes ``<field>=<literal>``;
- for compound ``And``/``Or`` predicates only the first (leftmost) clause of
  each ``filter`` call is honored and the remaining clauses are ignored.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from ..common.constants import (
    REST_PARAM_PAGE_INDEX,
    REST_PARAM_PAGE_SIZE,
    REST_PARAM_SEARCH,
    REST_PARAM_SORT,
)
from ..core import _error_codes as ec
from ..core.errors import TranslationError
from ..models.expressions import And, Compare, ComparisonOperator, Or, StringOp, StringOperation
from ..models.query_nodes import SortDirection, TranslationStyle
from ._translator import _QueryTranslator, _TranslationState


class _RestState(_TranslationState):
    def __init__(self) -> None:
        super().__init__()
        self.search: Optional[str] = None
        self.equalities: Dict[str, str] = {}
        self.sort: List[str] = []


class RestTranslator(_QueryTranslator):
    """
    Lower a query chain into REST-style query parameters.

    Example::

        chain = (campaigns
                 .filter(Property("Name").contains("test"))
                 .skip(20)
                 .take(10))
        RestTranslator().translate(chain.node).to_query_string()
        # 'search=test&pageIndex=2&pageSize=10'
    """

    style = TranslationStyle.REST

    def _new_state(self) -> _RestState:
        return _RestState()

    def _apply_filter(self, state: _RestState, predicate: Any) -> None:
        clause = self._first_clause(predicate)
        if isinstance(clause, StringOp):
            if self._string_operation(clause.kind) is not StringOperation.CONTAINS:
                raise TranslationError(
                    f"REST style has no parameter for {clause.kind!r} predicates",
                    subcode=ec.TRANSLATION_UNSUPPORTED_OPERATOR,
                )
            self._property_name(clause.path)
            if state.search is None:
                state.search = self._format_literal(clause.literal, quote_strings=False)
            return
        if isinstance(clause, Compare):
            if self._operator(clause.operator) is not ComparisonOperator.EQ:
                raise TranslationError(
                    f"REST style only supports equality comparisons, got {clause.operator!r}",
                    subcode=ec.TRANSLATION_UNSUPPORTED_OPERATOR,
                )
            name = self._property_name(clause.path)
            literal = self._format_literal(clause.literal, quote_strings=False)
            state.equalities.setdefault(name, literal)
            return
        raise TranslationError(
            f"Unsupported predicate of type {type(clause).__name__}",
            subcode=ec.TRANSLATION_UNSUPPORTED_PREDICATE,
            details={"predicate": repr(clause)},
        )

    def _apply_ordering(self, state: _RestState, path: Any, direction: SortDirection) -> None:
        state.sort.append(f"{self._property_name(path)}_{direction.value}")

    def _emit(self, state: _RestState) -> List[Tuple[str, str]]:
        params: List[Tuple[str, str]] = []
        if state.search is not None:
            params.append((REST_PARAM_SEARCH, state.search))
        params.extend(state.equalities.items())
        if state.sort:
            params.append((REST_PARAM_SORT, ",".join(state.sort)))
        if state.skip is not None or state.take is not None:
            skip = state.skip or 0
            page_index = skip // state.take if state.take else 0
            params.append((REST_PARAM_PAGE_INDEX, str(page_index)))
            if state.take is not None:
                params.append((REST_PARAM_PAGE_SIZE, str(state.take)))
        return params

    @staticmethod
    def _first_clause(predicate: Any) -> Any:
        while isinstance(predicate, (And, Or)):
            predicate = predicate.left
        return predicate


__all__ = ["RestTranslator"]
