# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Unit tests for the Entity base dataclass."""

import datetime as dt
import unittest
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, List, Optional

from apiqueryable.models.entity import Entity


class Status(str, Enum):
    ACTIVE = "active"
    DONE = "done"


@dataclass
class User(Entity):
    name: str = ""
    avatar_url: Optional[str] = None


@dataclass
class Campaign(Entity):
    name: str = ""
    partner_name: str = ""
    budget: Decimal = Decimal("0")
    status: Optional[Status] = None
    progress: int = 0
    start_date: Optional[dt.datetime] = None
    created_date: Optional[dt.datetime] = None
    tasks: List[Any] = field(default_factory=list)


@dataclass
class Message(Entity):
    content: str = ""
    user: Optional[User] = None
    legacy_code: str = field(default="", metadata={"wire": "code"})


class TestEntityFromDict(unittest.TestCase):

    def test_camel_case_keys(self):
        c = Campaign.from_dict({"id": "c-1", "name": "Launch", "partnerName": "Contoso"})
        self.assertEqual(c.id, "c-1")
        self.assertEqual(c.partner_name, "Contoso")

    def test_conversions(self):
        c = Campaign.from_dict(
            {
                "budget": 75000.5,
                "status": "active",
                "startDate": "2024-03-01T09:00:00Z",
                "createdDate": "2024-02-15T12:30:45.1234567Z",
            }
        )
        self.assertEqual(c.budget, Decimal("75000.5"))
        self.assertIs(c.status, Status.ACTIVE)
        self.assertEqual(c.start_date, dt.datetime(2024, 3, 1, 9, 0, 0, tzinfo=dt.timezone.utc))
        self.assertEqual(c.created_date.microsecond, 123456)

    def test_missing_and_unknown_keys(self):
        c = Campaign.from_dict({"id": "c-2", "unexpected": True})
        self.assertEqual(c.name, "")
        self.assertEqual(c.tasks, [])

    def test_nested_entity_and_wire_override(self):
        m = Message.from_dict({"id": "m-1", "user": {"id": "u-1", "name": "Ann", "avatarUrl": "a.png"}, "code": "X"})
        self.assertIsInstance(m.user, User)
        self.assertEqual(m.user.avatar_url, "a.png")
        self.assertEqual(m.legacy_code, "X")

    def test_null_optional(self):
        m = Message.from_dict({"id": "m-1", "user": None})
        self.assertIsNone(m.user)

    def test_rejects_non_mapping(self):
        with self.assertRaises(TypeError):
            Campaign.from_dict(["not", "an", "object"])

    def test_bad_value_raises_value_error(self):
        with self.assertRaises(ValueError):
            Campaign.from_dict({"status": "unknown"})


class TestEntityToDict(unittest.TestCase):

    def test_wire_keys_and_nested(self):
        m = Message(id="m-1", content="hi", user=User(id="u-1", name="Ann"), legacy_code="X")
        self.assertEqual(
            m.to_dict(),
            {
                "id": "m-1",
                "content": "hi",
                "user": {"id": "u-1", "name": "Ann", "avatarUrl": None},
                "code": "X",
            },
        )

    def test_invalid_decimal_raises_value_error(self):
        with self.assertRaises(ValueError):
            Campaign.from_dict({"budget": "n/a"})

    def test_round_trip_preserves_fields(self):
        c = Campaign(id="c-1", name="Launch", partner_name="Contoso", budget=Decimal("10.25"), progress=3)
        again = Campaign.from_dict(c.to_dict())
        self.assertEqual(again, c)
