# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

import datetime as dt
import json
from dataclasses import dataclass
from decimal import Decimal

import pytest

from apiqueryable.core._error_codes import (
    DECODE_ENTITY_INVALID,
    DECODE_ENVELOPE_MISSING,
    DECODE_INVALID_JSON,
    DECODE_UNEXPECTED_SHAPE,
    VALIDATION_ENTITY_TYPE,
)
from apiqueryable.core.errors import DecodeError, ValidationError
from apiqueryable.core.serialization import (
    JsonSerializer,
    entity_id,
    materialize,
    materialize_many,
    to_payload,
    unwrap_envelope,
)
from apiqueryable.models.entity import Entity


@dataclass
class Widget(Entity):
    name: str = ""
    size: int = 0


def test_encode_handles_rich_types():
    body = JsonSerializer().encode(
        {"when": dt.datetime(2024, 1, 2, 3, 4, 5), "price": Decimal("1.5"), "widget": Widget(id="w", name="n")}
    )
    assert json.loads(body) == {
        "when": "2024-01-02T03:04:05",
        "price": "1.5",
        "widget": {"id": "w", "name": "n", "size": 0},
    }


def test_encode_rejects_unknown_types():
    with pytest.raises(TypeError):
        JsonSerializer().encode({"x": object()})


def test_decode_invalid_json():
    with pytest.raises(DecodeError) as ei:
        JsonSerializer().decode("<html>oops</html>", status_code=200)
    assert ei.value.subcode == DECODE_INVALID_JSON
    assert ei.value.status_code == 200
    assert ei.value.details["body_excerpt"].startswith("<html>")


def test_decode_bytes():
    assert JsonSerializer().decode(b'[1, 2]') == [1, 2]


@pytest.mark.parametrize(
    "payload,flag,expected",
    [
        ({"data": [1]}, None, [1]),
        ([1], None, [1]),
        ({"data": [1]}, True, [1]),
        ({"data": [1]}, False, {"data": [1]}),
        ({"id": "1", "data": "blob"}, None, {"id": "1", "data": "blob"}),
        ({"data": {"id": "1"}}, None, {"id": "1"}),
    ],
)
def test_unwrap_envelope(payload, flag, expected):
    assert unwrap_envelope(payload, flag) == expected


def test_unwrap_envelope_required_but_missing():
    with pytest.raises(DecodeError) as ei:
        unwrap_envelope([1, 2], True)
    assert ei.value.subcode == DECODE_ENVELOPE_MISSING


def test_materialize_entity_and_dict():
    w = materialize(Widget, {"id": "w1", "name": "bolt", "size": 3})
    assert w == Widget(id="w1", name="bolt", size=3)
    raw = {"id": "w1"}
    copy = materialize(dict, raw)
    assert copy == raw and copy is not raw


def test_materialize_wrong_shape():
    with pytest.raises(DecodeError) as ei:
        materialize(Widget, "not an object")
    assert ei.value.subcode == DECODE_UNEXPECTED_SHAPE


def test_materialize_invalid_entity():
    @dataclass
    class Strict(Entity):
        when: dt.datetime = None

    with pytest.raises(DecodeError) as ei:
        materialize(Strict, {"when": "yesterday"})
    assert ei.value.subcode == DECODE_ENTITY_INVALID


def test_materialize_many_requires_array():
    assert materialize_many(Widget, []) == []
    with pytest.raises(DecodeError) as ei:
        materialize_many(Widget, {"id": "w"})
    assert ei.value.subcode == DECODE_UNEXPECTED_SHAPE


def test_to_payload():
    assert to_payload({"a": 1}) == {"a": 1}
    assert to_payload(Widget(id="w", name="n", size=2)) == {"id": "w", "name": "n", "size": 2}
    with pytest.raises(ValidationError) as ei:
        to_payload(42)
    assert ei.value.subcode == VALIDATION_ENTITY_TYPE


def test_entity_id():
    assert entity_id(Widget(id="w1")) == "w1"
    assert entity_id({"id": 7}) == "7"
    assert entity_id({}) is None


def test_encode_keeps_decimal_digits():
    body = JsonSerializer().encode({"budget": Decimal("12345678901234567.89")})
    assert Decimal(json.loads(body)["budget"]) == Decimal("12345678901234567.89")


@pytest.mark.parametrize("value", ["n/a", "", "1,000"])
def test_materialize_invalid_decimal(value):
    @dataclass
    class Priced(Entity):
        budget: Decimal = Decimal("0")

    with pytest.raises(DecodeError) as ei:
        materialize(Priced, {"id": "1", "budget": value})
    assert ei.value.subcode == DECODE_ENTITY_INVALID
