# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for predicate expression nodes."""

import unittest

from apiqueryable.models.expressions import (
    And,
    Compare,
    ComparisonOperator,
    Or,
    Property,
    StringOp,
    StringOperation,
    property_path,
)


class TestProperty(unittest.TestCase):
    """Python operators on Property build predicate nodes."""

    def test_comparison_operators(self):
        budget = Property("budget")
        cases = [
            (budget == 1, ComparisonOperator.EQ),
            (budget != 1, ComparisonOperator.NE),
            (budget > 1, ComparisonOperator.GT),
            (budget >= 1, ComparisonOperator.GE),
            (budget < 1, ComparisonOperator.LT),
            (budget <= 1, ComparisonOperator.LE),
        ]
        for node, op in cases:
            self.assertEqual(node, Compare("budget", op, 1))

    def test_string_operations(self):
        name = Property("name")
        self.assertEqual(name.contains("x"), StringOp("name", StringOperation.CONTAINS, "x"))
        self.assertEqual(name.startswith("x"), StringOp("name", StringOperation.STARTS_WITH, "x"))
        self.assertEqual(name.endswith("x"), StringOp("name", StringOperation.ENDS_WITH, "x"))

    def test_and_or_composition(self):
        a = Property("a") == "x"
        b = Property("b") > 2
        self.assertEqual(a & b, And(a, b))
        self.assertEqual(a | b, Or(a, b))
        self.assertEqual((a & b) | a, Or(And(a, b), a))

    def test_property_is_unhashable(self):
        with self.assertRaises(TypeError):
            hash(Property("a"))

    def test_construction_does_not_validate(self):
        # Odd shapes are accepted; translators reject them later.
        node = Compare(42, "between", object())
        self.assertEqual(node.path, 42)

    def test_property_path(self):
        self.assertEqual(property_path(Property("user.name")), "user.name")
        self.assertEqual(property_path("status"), "status")

    def test_nodes_are_immutable(self):
        node = Property("a") == 1
        with self.assertRaises(AttributeError):
            node.literal = 2
