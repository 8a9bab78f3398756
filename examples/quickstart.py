#!/usr/bin/env python3
# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""
apiqueryable - Quickstart

Registers two collections on an application context, prints the query
strings a few queries translate to (no network needed), then optionally runs
a create/read/update/delete round trip against a live backend.

Prerequisites:
- apiqueryable installed (``pip install -e .``)
- For the live part: a backend exposing ``/campaigns`` and ``/messages``

Usage:
    python examples/quickstart.py                          # offline translation only
    APIQUERYABLE_BASE_URL=https://localhost:5001/api \\
    APIQUERYABLE_BEARER_TOKEN=... python examples/quickstart.py --live
"""

import logging
import sys
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, List, Optional

from apiqueryable import (
    ApiContext,
    ApiContextConfig,
    ApiQueryError,
    Entity,
    NotFoundError,
    Property,
    TranslationStyle,
)


@dataclass
class Campaign(Entity):
    name: str = ""
    partner_name: str = ""
    partner_logo: Optional[str] = None
    budget: Decimal = Decimal("0")
    description: str = ""
    status: str = ""
    progress: int = 0
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    created_date: Optional[datetime] = None
    tasks: List[Any] = field(default_factory=list)


@dataclass
class User(Entity):
    name: str = ""
    avatar_url: Optional[str] = None


@dataclass
class Message(Entity):
    campaign_id: str = ""
    content: str = ""
    created_by_id: str = ""
    created_at: Optional[datetime] = None
    last_update: Optional[datetime] = None
    updated_by_id: Optional[str] = None
    user: Optional[User] = None


class LightningLanesContext(ApiContext):
    """Application context exposing the campaign and message collections."""

    def on_endpoint_registering(self) -> None:
        self.campaigns = (
            self.register_endpoint(Campaign)
            .with_endpoint("/campaigns")
            .with_header("X-Service", "Lightning-Lanes")
            .build()
        )
        self.messages = self.register_endpoint(Message).with_endpoint("/messages").with_timeout(30).build()


def show_translations(ctx: LightningLanesContext) -> None:
    print("\n🔎 Query translation (no network)")
    print("=" * 50)

    rest = ctx.campaigns.filter(Property("status") == "active").order_by("name")
    print(f"REST : {rest.to_query_string()}")

    paged = ctx.campaigns.filter(Property("name").contains("test")).skip(20).take(10)
    print(f"REST : {paged.to_query_string()}")

    odata = (
        ctx.campaigns.use_style(TranslationStyle.ODATA)
        .filter(Property("name").contains("project"))
        .skip(40)
        .take(20)
    )
    print(f"OData: {odata.to_query_string()}")

    budget = (
        ctx.campaigns.use_style("odata")
        .filter((Property("status") == "Active") & (Property("budget") > 50000))
        .order_by("startDate")
        .then_by_descending("budget")
    )
    print(f"URL  : {budget.request_url}")


def run_live(ctx: LightningLanesContext) -> None:
    print("\n🌐 Live CRUD round trip")
    print("=" * 50)

    draft = Campaign(
        name="Quickstart Campaign",
        partner_name="apiqueryable",
        budget=Decimal("75000"),
        description="Created by examples/quickstart.py",
        status="Active",
        start_date=datetime.now() + timedelta(days=10),
        end_date=datetime.now() + timedelta(days=60),
    )
    created = ctx.campaigns.add(draft)
    print(f"✅ Created: {created.name} (ID: {created.id})")

    for campaign in ctx.campaigns.filter(Property("status") == "Active").take(3):
        print(f"   • {campaign.name} [{campaign.status}] budget={campaign.budget}")

    created.budget = Decimal("90000")
    updated = ctx.campaigns.update(created)
    print(f"✅ Updated budget: {updated.budget}")

    ctx.campaigns.delete(created.id)
    print(f"✅ Deleted: {created.id}")

    print(f"   find after delete -> {ctx.campaigns.find(created.id)}")
    try:
        ctx.campaigns.get(created.id)
    except NotFoundError as e:
        print(f"   get after delete -> {e.code} ({e.details.get('url')})")

    recent = ctx.messages.order_by_descending("createdAt").take(5)
    for message in recent:
        author = message.user.name if message.user else message.created_by_id
        print(f"   💬 {author}: {message.content}")


def main() -> None:
    live = "--live" in sys.argv[1:]
    if "--verbose" in sys.argv[1:]:
        logging.basicConfig(level=logging.DEBUG)

    config = ApiContextConfig.from_env()
    if not config.base_url:
        config = ApiContextConfig(base_url="https://localhost:5001/api")

    with LightningLanesContext(config) as ctx:
        show_translations(ctx)
        if not live:
            print("\n💡 Pass --live to run the CRUD round trip against the configured backend.")
            return
        try:
            run_live(ctx)
        except ApiQueryError as e:
            print(f"❌ {e.code}/{e.subcode}: {e.message}")
            sys.exit(1)


if __name__ == "__main__":
    main()
