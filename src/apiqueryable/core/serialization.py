# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
JSON serialization, envelope handling and entity materialization.

The result shape of every request is declared up front: the caller supplies
the entity type and an ``expect_envelope`` flag, and nothing here inspects
runtime types to guess what the caller wanted.
"""

from __future__ import annotations

import datetime as _dt
import json
from decimal import Decimal
from enum import Enum
from typing import Any, List, Mapping, Optional, Union
from uuid import UUID

from ..common.constants import ENVELOPE_DATA_KEY
from . import _error_codes as ec
from .errors import DecodeError, ValidationError


def _json_default(value: Any) -> Any:
    if isinstance(value, (_dt.datetime, _dt.date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, UUID):
        return str(value)
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JsonSerializer:
    """Encode request bodies and decode response bodies as UTF-8 JSON."""

    def encode(self, value: Any) -> bytes:
        return json.dumps(value, default=_json_default).encode("utf-8")

    def decode(self, body: Union[bytes, str], *, status_code: Optional[int] = None) -> Any:
        """
        Parse a response body.

        :raises ~apiqueryable.core.errors.DecodeError: If the body is not valid JSON.
        """
        try:
            text = body.decode("utf-8") if isinstance(body, (bytes, bytearray)) else body
            return json.loads(text)
        except (UnicodeDecodeError, ValueError) as exc:
            excerpt = body[:200] if isinstance(body, str) else bytes(body[:200]).decode("utf-8", "replace")
            raise DecodeError(
                f"Response body is not valid JSON: {exc}",
                subcode=ec.DECODE_INVALID_JSON,
                status_code=status_code,
                details={"body_excerpt": excerpt},
            ) from exc


def unwrap_envelope(payload: Any, expect_envelope: Optional[bool] = None) -> Any:
    """
    Return the payload carried by a ``{"data": ...}`` envelope.

    :param payload: Decoded response body.
    :param expect_envelope: ``True`` requires an envelope, ``False`` never
        unwraps, ``None`` unwraps an object that has a ``data`` key and no ``id``.
    :raises ~apiqueryable.core.errors.DecodeError: If an envelope is required but absent.
    """
    is_envelope = isinstance(payload, Mapping) and ENVELOPE_DATA_KEY in payload
    if expect_envelope is True:
        if not is_envelope:
            raise DecodeError(
                f"Expected a '{ENVELOPE_DATA_KEY}' envelope, got {type(payload).__name__}",
                subcode=ec.DECODE_ENVELOPE_MISSING,
            )
        return payload[ENVELOPE_DATA_KEY]
    if expect_envelope is None and is_envelope and "id" not in payload:
        return payload[ENVELOPE_DATA_KEY]
    return payload


def materialize(entity_type: Any, item: Any) -> Any:
    """
    Convert one decoded JSON object into ``entity_type``.

    ``dict`` returns the object as-is; any other type must offer a
    ``from_dict`` classmethod (see :class:`~apiqueryable.models.entity.Entity`).

    :raises ~apiqueryable.core.errors.DecodeError: If the object does not fit the type.
    """
    if not isinstance(item, Mapping):
        raise DecodeError(
            f"Expected a JSON object for {getattr(entity_type, '__name__', entity_type)}, got {type(item).__name__}",
            subcode=ec.DECODE_UNEXPECTED_SHAPE,
        )
    if entity_type is dict:
        return dict(item)
    try:
        return entity_type.from_dict(item)
    except (TypeError, ValueError, KeyError, ArithmeticError) as exc:
        raise DecodeError(
            f"Cannot build {entity_type.__name__} from response: {exc}",
            subcode=ec.DECODE_ENTITY_INVALID,
        ) from exc


def materialize_many(entity_type: Any, payload: Any) -> List[Any]:
    """
    Convert a decoded JSON array into a list of ``entity_type``.

    :raises ~apiqueryable.core.errors.DecodeError: If ``payload`` is not an array.
    """
    if not isinstance(payload, list):
        raise DecodeError(
            f"Expected a JSON array, got {type(payload).__name__}",
            subcode=ec.DECODE_UNEXPECTED_SHAPE,
        )
    return [materialize(entity_type, item) for item in payload]


def to_payload(entity: Any) -> Mapping[str, Any]:
    """
    Return the JSON-ready mapping for ``entity``.

    :raises ~apiqueryable.core.errors.ValidationError: If ``entity`` is neither a mapping nor has ``to_dict``.
    """
    if isinstance(entity, Mapping):
        return entity
    to_dict = getattr(entity, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    raise ValidationError(
        f"Cannot serialize entity of type {type(entity).__name__}",
        subcode=ec.VALIDATION_ENTITY_TYPE,
    )


def entity_id(entity: Any) -> Optional[str]:
    """Return the identifier of an entity object or mapping (``None`` if absent)."""
    value = entity.get("id") if isinstance(entity, Mapping) else getattr(entity, "id", None)
    if value is None:
        return None
    return str(value)


__all__ = [
    "JsonSerializer",
    "unwrap_envelope",
    "materialize",
    "materialize_many",
    "to_payload",
    "entity_id",
]
