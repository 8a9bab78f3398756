# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Immutable query chain nodes.

A query is a strictly linear chain of nodes ending in a :class:`Source`.
Builder calls never mutate a node; they wrap the previous node in a new one,
so two branches built from the same node never interfere.

Example::

    root = Source(Campaign, TranslationStyle.ODATA)
    node = Take(10, OrderBy("name", SortDirection.ASC, Filter(predicate, root)))
    [type(n).__name__ for n in iter_chain(node)]
    # ['Source', 'Filter', 'OrderBy', 'Take']
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, Union


class TranslationStyle(str, Enum):
    """Wire convention used to lower a query chain."""

    REST = "rest"
    ODATA = "odata"

    @classmethod
    def parse(cls, value: Union[str, "TranslationStyle"]) -> "TranslationStyle":
        """Accept an enum member or its case-insensitive name/value."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value, member.name.lower()):
                return member
        raise ValueError(f"Unknown translation style: {value!r}")


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class Source:
    """Root of every query chain: the element type and the active style."""

    entity_type: Any
    style: TranslationStyle = TranslationStyle.REST


@dataclass(frozen=True)
class Filter:
    predicate: Any
    previous: "QueryNode"


@dataclass(frozen=True)
class OrderBy:
    path: Any
    direction: SortDirection
    previous: "QueryNode"


@dataclass(frozen=True)
class ThenBy:
    path: Any
    direction: SortDirection
    previous: "QueryNode"


@dataclass(frozen=True)
class Skip:
    count: int
    previous: "QueryNode"


@dataclass(frozen=True)
class Take:
    count: int
    previous: "QueryNode"


QueryNode = Union[Source, Filter, OrderBy, ThenBy, Skip, Take]


def iter_chain(node: QueryNode) -> Iterator[QueryNode]:
    """Yield the chain root-to-leaf, i.e. in declaration order."""
    nodes: List[QueryNode] = []
    current: Any = node
    while not isinstance(current, Source):
        nodes.append(current)
        current = current.previous
    nodes.append(current)
    return reversed(nodes)


def root_of(node: QueryNode) -> Source:
    """Return the :class:`Source` at the root of ``node``'s chain."""
    current: Any = node
    while not isinstance(current, Source):
        current = current.previous
    return current


def with_style(node: QueryNode, style: TranslationStyle) -> QueryNode:
    """
    Return a copy of the chain rooted at a new :class:`Source` with ``style``.

    Every operation above the root is re-wrapped in declaration order; the
    original chain is left untouched.
    """
    chain = list(iter_chain(node))
    rebuilt: QueryNode = dataclasses.replace(chain[0], style=style)
    for op in chain[1:]:
        rebuilt = dataclasses.replace(op, previous=rebuilt)
    return rebuilt


__all__ = [
    "TranslationStyle",
    "SortDirection",
    "Source",
    "Filter",
    "OrderBy",
    "ThenBy",
    "Skip",
    "Take",
    "QueryNode",
    "iter_chain",
    "root_of",
    "with_style",
]
