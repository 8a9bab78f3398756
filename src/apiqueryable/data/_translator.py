# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Shared translator machinery.

A translator is a pure function of a whole query chain: every call to
:meth:`_QueryTranslator.translate` starts from a fresh accumulator, walks the
chain root-to-leaf and returns an immutable :class:`TranslatedQuery`.
"""

from __future__ import annotations

import datetime as _dt
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote, urlencode
from uuid import UUID

from ..common.constants import DATE_LITERAL_FORMAT, QUERY_SAFE_CHARS
from ..core import _error_codes as ec
from ..core.errors import TranslationError
from ..models.expressions import ComparisonOperator, StringOperation, property_path
from ..models.query_nodes import (
    Filter,
    OrderBy,
    QueryNode,
    Skip,
    SortDirection,
    Source,
    Take,
    ThenBy,
    TranslationStyle,
    iter_chain,
)


@dataclass(frozen=True)
class TranslatedQuery:
    """
    Result of translating a query chain.

    :param style: Style that produced the parameters.
    :type style: ~apiqueryable.models.query_nodes.TranslationStyle
    :param params: Ordered ``(name, value)`` pairs, values not yet URL-encoded.
    :type params: tuple[tuple[str, str], ...]
    """

    style: TranslationStyle
    params: Tuple[Tuple[str, str], ...] = ()

    def as_dict(self) -> Dict[str, str]:
        return dict(self.params)

    def to_query_string(self) -> str:
        """Percent-encode the parameters into a wire query string (no leading ``?``)."""
        return urlencode(self.params, quote_via=quote, safe=QUERY_SAFE_CHARS)

    def __bool__(self) -> bool:
        return bool(self.params)

    def __str__(self) -> str:
        return self.to_query_string()


class _TranslationState:
    """Per-call accumulator; never shared between translations."""

    def __init__(self) -> None:
        self.skip: Optional[int] = None
        self.take: Optional[int] = None


class _QueryTranslator:
    """
    Base class for style-specific translators.

    Subclasses set :attr:`style` and implement the ``_new_state``,
    ``_apply_filter``, ``_apply_ordering`` and ``_emit`` hooks.
    """

    style: TranslationStyle

    def translate(self, node: QueryNode) -> TranslatedQuery:
        """
        Lower ``node``'s chain into wire parameters.

        :param node: Leaf of the query chain.
        :return: Translated parameters.
        :rtype: TranslatedQuery
        :raises ~apiqueryable.core.errors.TranslationError: If a node cannot be lowered.
        """
        state = self._new_state()
        for current in iter_chain(node):
            if isinstance(current, Source):
                continue
            if isinstance(current, Filter):
                self._apply_filter(state, current.predicate)
            elif isinstance(current, (OrderBy, ThenBy)):
                self._apply_ordering(state, current.path, self._direction(current.direction))
            elif isinstance(current, Skip):
                state.skip = self._count(current.count, "skip")
            elif isinstance(current, Take):
                state.take = self._count(current.count, "take")
            else:
                raise TranslationError(
                    f"Unsupported query node {type(current).__name__}",
                    subcode=ec.TRANSLATION_UNSUPPORTED_NODE,
                )
        return TranslatedQuery(self.style, tuple(self._emit(state)))

    # ----------------------------------------------------------------- hooks

    def _new_state(self) -> _TranslationState:
        return _TranslationState()

    def _apply_filter(self, state: Any, predicate: Any) -> None:
        raise NotImplementedError

    def _apply_ordering(self, state: Any, path: Any, direction: SortDirection) -> None:
        raise NotImplementedError

    def _emit(self, state: Any):
        raise NotImplementedError

    # --------------------------------------------------------------- helpers

    @staticmethod
    def _property_name(path: Any, separator: str = ".") -> str:
        """Lower-case a property path, joining nested segments with ``separator``."""
        path = property_path(path)
        if not isinstance(path, str) or not path.strip():
            raise TranslationError(
                f"Cannot translate property reference {path!r}",
                subcode=ec.TRANSLATION_INVALID_PROPERTY,
            )
        segments = [segment.strip().lower() for segment in path.split(".")]
        if not all(segments):
            raise TranslationError(
                f"Cannot translate property reference {path!r}",
                subcode=ec.TRANSLATION_INVALID_PROPERTY,
            )
        return separator.join(segments)

    @staticmethod
    def _direction(direction: Any) -> SortDirection:
        try:
            return SortDirection(direction)
        except ValueError as exc:
            raise TranslationError(
                f"Unsupported sort direction {direction!r}",
                subcode=ec.TRANSLATION_UNSUPPORTED_OPERATOR,
            ) from exc

    @staticmethod
    def _operator(operator: Any) -> ComparisonOperator:
        try:
            return ComparisonOperator(operator)
        except ValueError as exc:
            raise TranslationError(
                f"Unsupported comparison operator {operator!r}",
                subcode=ec.TRANSLATION_UNSUPPORTED_OPERATOR,
            ) from exc

    @staticmethod
    def _string_operation(kind: Any) -> StringOperation:
        try:
            return StringOperation(kind)
        except ValueError as exc:
            raise TranslationError(
                f"Unsupported string operation {kind!r}",
                subcode=ec.TRANSLATION_UNSUPPORTED_OPERATOR,
            ) from exc

    @staticmethod
    def _count(value: Any, name: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise TranslationError(
                f"{name} count must be a non-negative integer, got {value!r}",
                subcode=ec.TRANSLATION_UNSUPPORTED_LITERAL,
            )
        return value

    @staticmethod
    def _format_literal(value: Any, *, quote_strings: bool) -> str:
        """
        Format a literal value for the wire.

        Strings and dates are wrapped in single quotes (embedded quotes doubled)
        when ``quote_strings`` is set; dates always use ``yyyy-MM-ddTHH:mm:ss``.
        """
        if isinstance(value, Enum):
            value = value.value
        if value is None:
            return "null"
        if isinstance(value, bool):
            return str(value).lower()
        if isinstance(value, (_dt.datetime, _dt.date)):
            text = value.strftime(DATE_LITERAL_FORMAT)
            return f"'{text}'" if quote_strings else text
        if isinstance(value, str):
            if quote_strings:
                escaped = value.replace("'", "''")
                return f"'{escaped}'"
            return value
        if isinstance(value, (int, float, Decimal)):
            return str(value)
        if isinstance(value, UUID):
            return str(value)
        raise TranslationError(
            f"Unsupported literal of type {type(value).__name__}: {value!r}",
            subcode=ec.TRANSLATION_UNSUPPORTED_LITERAL,
        )


def get_translator(style: TranslationStyle) -> _QueryTranslator:
    """
    Return the translator for ``style``.

    :param style: Translation style.
    :type style: ~apiqueryable.models.query_nodes.TranslationStyle
    :rtype: RestTranslator or ODataTranslator
    """
    from ._odata import ODataTranslator
    from ._rest import RestTranslator

    if TranslationStyle.parse(style) is TranslationStyle.ODATA:
        return ODataTranslator()
    return RestTranslator()


__all__ = ["TranslatedQuery", "get_translator"]
