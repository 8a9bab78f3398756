# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Predicate expression nodes used by ``ApiQuery.filter``.

Predicates are small immutable trees. They are usually produced through a
:class:`Property`, whose Python operators build the nodes::

    status = Property("status")
    budget = Property("budget")

    (status == "active") & (budget > 1000)
    # And(Compare('status', EQ, 'active'), Compare('budget', GT, 1000))

    Property("name").contains("test") | Property("name").startswith("Q")
    # Or(StringOp('name', CONTAINS, 'test'), StringOp('name', STARTS_WITH, 'Q'))

Nodes are never validated on construction; a translator decides at
materialization time whether it can lower a given shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ComparisonOperator(str, Enum):
    EQ = "eq"
    NE = "ne"
    GT = "gt"
    GE = "ge"
    LT = "lt"
    LE = "le"


class StringOperation(str, Enum):
    CONTAINS = "contains"
    STARTS_WITH = "startswith"
    ENDS_WITH = "endswith"


class Predicate:
    """Base for boolean predicate nodes; supports ``&`` and ``|`` composition."""

    __slots__ = ()

    def __and__(self, other: Any) -> "And":
        return And(self, other)

    def __or__(self, other: Any) -> "Or":
        return Or(self, other)


@dataclass(frozen=True)
class Compare(Predicate):
    """``path <operator> literal``."""

    path: Any
    operator: ComparisonOperator
    literal: Any


@dataclass(frozen=True)
class And(Predicate):
    left: Any
    right: Any


@dataclass(frozen=True)
class Or(Predicate):
    left: Any
    right: Any


@dataclass(frozen=True)
class StringOp(Predicate):
    """String function predicate: ``contains``, ``startswith`` or ``endswith``."""

    path: Any
    kind: StringOperation
    literal: Any


@dataclass(frozen=True, eq=False)
class Property:
    """
    Reference to an entity property, used to build predicates.

    Dotted paths (``"user.name"``) address nested properties.

    :param path: Property name or dotted path.
    :type path: str
    """

    path: str

    def __eq__(self, other: Any) -> Compare:  # type: ignore[override]
        return Compare(self.path, ComparisonOperator.EQ, other)

    def __ne__(self, other: Any) -> Compare:  # type: ignore[override]
        return Compare(self.path, ComparisonOperator.NE, other)

    def __gt__(self, other: Any) -> Compare:
        return Compare(self.path, ComparisonOperator.GT, other)

    def __ge__(self, other: Any) -> Compare:
        return Compare(self.path, ComparisonOperator.GE, other)

    def __lt__(self, other: Any) -> Compare:
        return Compare(self.path, ComparisonOperator.LT, other)

    def __le__(self, other: Any) -> Compare:
        return Compare(self.path, ComparisonOperator.LE, other)

    __hash__ = None  # type: ignore[assignment]

    def contains(self, value: Any) -> StringOp:
        return StringOp(self.path, StringOperation.CONTAINS, value)

    def startswith(self, value: Any) -> StringOp:
        return StringOp(self.path, StringOperation.STARTS_WITH, value)

    def endswith(self, value: Any) -> StringOp:
        return StringOp(self.path, StringOperation.ENDS_WITH, value)


def property_path(value: Any) -> Any:
    """Return the path of a :class:`Property`, or ``value`` unchanged."""
    if isinstance(value, Property):
        return value.path
    return value


__all__ = [
    "ComparisonOperator",
    "StringOperation",
    "Predicate",
    "Compare",
    "And",
    "Or",
    "StringOp",
    "Property",
    "property_path",
]
