# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
Entity base class for typed collections.

Provides a dataclass base that maps between Python attributes and the JSON
objects exchanged with the backend.
"""

from __future__ import annotations

import dataclasses
import datetime as _dt
import re
import types
import typing
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, Dict, Mapping, Type, TypeVar

# Type aliases for semantic clarity
EntityId = str

E = TypeVar("E", bound="Entity")

_FRACTION_RE = re.compile(r"(\.)(\d+)")
_UnionType = getattr(types, "UnionType", None)


def _camel_case(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in tail)


def wire_name(f: dataclasses.Field) -> str:
    """Return the JSON key for a dataclass field (``metadata["wire"]`` or camelCase)."""
    return f.metadata.get("wire") or _camel_case(f.name)


def _parse_datetime(value: str) -> _dt.datetime:
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    # fromisoformat wants exactly microsecond precision on older interpreters
    text = _FRACTION_RE.sub(lambda m: m.group(1) + m.group(2)[:6].ljust(6, "0"), text)
    return _dt.datetime.fromisoformat(text)


def _convert(value: Any, annotation: Any) -> Any:
    """Coerce a decoded JSON value to ``annotation`` where the mapping is unambiguous."""
    if value is None:
        return None
    origin = typing.get_origin(annotation)
    if origin is typing.Union or (_UnionType is not None and origin is _UnionType):
        candidates = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
        if len(candidates) == 1:
            return _convert(value, candidates[0])
        return value
    if origin in (list, typing.List) and isinstance(value, list):
        args = typing.get_args(annotation)
        return [_convert(item, args[0]) for item in value] if args else list(value)
    if not isinstance(annotation, type):
        return value
    if issubclass(annotation, Entity) and isinstance(value, Mapping):
        return annotation.from_dict(value)
    if annotation is _dt.datetime and isinstance(value, str):
        return _parse_datetime(value)
    if annotation is _dt.date and isinstance(value, str):
        return _parse_datetime(value).date() if "T" in value else _dt.date.fromisoformat(value)
    if annotation is Decimal and isinstance(value, (int, float, str)) and not isinstance(value, bool):
        try:
            return Decimal(str(value))
        except InvalidOperation as exc:
            raise ValueError(f"invalid decimal value {value!r}") from exc
    if issubclass(annotation, Enum) and not isinstance(value, annotation):
        return annotation(value)
    if annotation is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    return value


def _to_wire(value: Any) -> Any:
    if isinstance(value, Entity):
        return value.to_dict()
    if isinstance(value, list):
        return [_to_wire(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_wire(item) for key, item in value.items()}
    return value


@dataclass
class Entity:
    """
    Base dataclass for entities exposed through an :class:`~apiqueryable.operations.sets.ApiSet`.

    Subclasses declare their fields as dataclass fields with defaults. Each
    field maps to a camelCase JSON key unless ``field(metadata={"wire": ...})``
    names one explicitly.

    :param id: Stable identifier assigned by the backend.
    :type id: str

    Example::

        @dataclass
        class Campaign(Entity):
            name: str = ""
            partner_name: str = ""               # "partnerName" on the wire
            budget: Decimal = Decimal("0")
            start_date: Optional[datetime] = None

        campaign = Campaign.from_dict({"id": "c-1", "name": "Launch", "partnerName": "Contoso"})
        campaign.partner_name                    # 'Contoso'
        campaign.to_dict()["partnerName"]        # 'Contoso'
    """

    id: EntityId = ""

    @classmethod
    def from_dict(cls: Type[E], data: Mapping[str, Any]) -> E:
        """
        Build an entity from a decoded JSON object.

        Unknown keys are ignored; missing keys keep the field default.

        :param data: Decoded JSON object.
        :type data: Mapping[str, Any]
        :raises TypeError: If ``data`` is not a mapping.
        :raises ValueError: If a value cannot be converted to its field type.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"{cls.__name__}.from_dict expects a JSON object, got {type(data).__name__}")
        hints = typing.get_type_hints(cls)
        kwargs: Dict[str, Any] = {}
        for f in dataclasses.fields(cls):
            if not f.init:
                continue
            key = wire_name(f)
            if key in data:
                kwargs[f.name] = _convert(data[key], hints.get(f.name, Any))
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Return the JSON-ready mapping (wire keys, nested entities expanded)."""
        return {wire_name(f): _to_wire(getattr(self, f.name)) for f in dataclasses.fields(self)}


__all__ = ["Entity", "EntityId", "wire_name"]
