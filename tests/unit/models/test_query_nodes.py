# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for query chain nodes."""

import pytest

from apiqueryable.models.query_nodes import (
    Filter,
    OrderBy,
    Skip,
    SortDirection,
    Source,
    Take,
    ThenBy,
    TranslationStyle,
    iter_chain,
    root_of,
    with_style,
)


class Widget:
    pass


def _chain():
    root = Source(Widget, TranslationStyle.REST)
    node = Filter("p", root)
    node = OrderBy("name", SortDirection.ASC, node)
    node = ThenBy("budget", SortDirection.DESC, node)
    node = Skip(20, node)
    return Take(10, node)


def test_iter_chain_is_declaration_order():
    kinds = [type(n).__name__ for n in iter_chain(_chain())]
    assert kinds == ["Source", "Filter", "OrderBy", "ThenBy", "Skip", "Take"]


def test_iter_chain_on_root_only():
    root = Source(Widget)
    assert list(iter_chain(root)) == [root]


def test_root_of():
    assert root_of(_chain()) == Source(Widget, TranslationStyle.REST)


def test_with_style_rebuilds_chain():
    original = _chain()
    restyled = with_style(original, TranslationStyle.ODATA)

    assert root_of(restyled).style is TranslationStyle.ODATA
    assert root_of(original).style is TranslationStyle.REST
    old_ops = [n for n in iter_chain(original) if not isinstance(n, Source)]
    new_ops = [n for n in iter_chain(restyled) if not isinstance(n, Source)]
    assert [type(n) for n in old_ops] == [type(n) for n in new_ops]
    assert [getattr(n, "count", None) for n in old_ops] == [getattr(n, "count", None) for n in new_ops]


def test_branches_do_not_interfere():
    root = Source(Widget)
    a = Take(1, root)
    b = Take(2, root)
    assert a.previous is b.previous
    assert (a.count, b.count) == (1, 2)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("rest", TranslationStyle.REST),
        ("OData", TranslationStyle.ODATA),
        (" ODATA ", TranslationStyle.ODATA),
        (TranslationStyle.REST, TranslationStyle.REST),
    ],
)
def test_translation_style_parse(value, expected):
    assert TranslationStyle.parse(value) is expected


def test_translation_style_parse_rejects_unknown():
    with pytest.raises(ValueError):
        TranslationStyle.parse("graphql")
