# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Typed collection: query root plus create/read/update/delete verbs."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterator, List, Optional, Type, TypeVar, Union
from urllib.parse import quote

from ..core import _error_codes as ec
from ..core.endpoints import EndpointSpec
from ..core.errors import HttpError, NotFoundError, ValidationError
from ..core.serialization import entity_id, materialize, to_payload, unwrap_envelope
from ..models.query_builder import ApiQuery
from ..models.query_nodes import TranslationStyle
from .provider import ApiQueryProvider

if TYPE_CHECKING:
    from ..context import ApiContext
    from ..models.expressions import Predicate, Property

T = TypeVar("T")


class ApiSet(ApiQueryProvider[T]):
    """
    Remote collection of ``entity_type`` values behind one endpoint.

    Accessed through an :class:`~apiqueryable.context.ApiContext`, usually by
    registering it with :meth:`~apiqueryable.context.ApiContext.register_endpoint`.
    Builder methods start a fresh :class:`~apiqueryable.models.query_builder.ApiQuery`;
    iterating the set itself issues an unfiltered GET each time.

    Example:
        Query and verbs::

            campaigns = ctx.set(Campaign, "/campaigns")

            for c in campaigns.filter(Property("status") == "active").take(10):
                print(c.name)

            created = campaigns.add(Campaign(name="Launch"))
            created.budget = Decimal("2500")
            campaigns.update(created)
            campaigns.find(created.id)      # Campaign or None
            campaigns.delete(created.id)
    """

    def __init__(self, context: "ApiContext", entity_type: Type[T], spec: EndpointSpec) -> None:
        super().__init__(context, entity_type, spec)

    def __repr__(self) -> str:
        return f"ApiSet({getattr(self.entity_type, '__name__', self.entity_type)}, path={self.spec.path!r})"

    # ----------------------------------------------------------- query root

    def query(self, style: Optional[Union[str, TranslationStyle]] = None) -> ApiQuery[T]:
        """Return a fresh query, optionally with an explicit translation style."""
        return self.create_query(TranslationStyle.parse(style) if style is not None else None)

    def filter(self, predicate: "Predicate") -> ApiQuery[T]:
        return self.query().filter(predicate)

    where = filter

    def order_by(self, path: Union[str, "Property"], descending: bool = False) -> ApiQuery[T]:
        return self.query().order_by(path, descending)

    def order_by_descending(self, path: Union[str, "Property"]) -> ApiQuery[T]:
        return self.query().order_by_descending(path)

    def skip(self, count: int) -> ApiQuery[T]:
        return self.query().skip(count)

    def take(self, count: int) -> ApiQuery[T]:
        return self.query().take(count)

    def use_style(self, style: Union[str, TranslationStyle]) -> ApiQuery[T]:
        return self.query(style)

    def with_timeout(self, seconds: Optional[float]) -> ApiQuery[T]:
        return self.query().with_timeout(seconds)

    def __iter__(self) -> Iterator[T]:
        return iter(self.query())

    def to_list(self) -> List[T]:
        return self.query().to_list()

    def first(self) -> T:
        return self.query().first()

    def first_or_none(self) -> Optional[T]:
        return self.query().first_or_none()

    def count(self) -> int:
        return self.query().count()

    # ---------------------------------------------------------------- verbs

    def _item_url(self, id: Any) -> str:
        key = "" if id is None else str(id).strip()
        if not key:
            raise ValidationError(
                f"{getattr(self.entity_type, '__name__', 'entity')} id must be a non-empty value",
                subcode=ec.VALIDATION_ID_MISSING,
            )
        return f"{self.endpoint_url}/{quote(key, safe='')}"

    def _send(self, method: str, url: str, body: Any = None) -> Any:
        client = self._context._get_client()
        response = client._request(
            method,
            url,
            headers=self.spec.headers,
            timeout=self.spec.timeout,
            body=body,
        )
        return client._decode(response)

    def _materialize_one(self, payload: Any) -> T:
        return materialize(self.entity_type, unwrap_envelope(payload, self.spec.expect_envelope))

    def add(self, entity: T) -> T:
        """
        Create an entity with ``POST {endpoint}``.

        :param entity: Entity (or mapping) to create.
        :return: The entity echoed by the backend, or ``entity`` itself when
            the response body is empty.
        :raises ~apiqueryable.core.errors.ValidationError: If ``entity`` cannot be serialized.
        :raises ~apiqueryable.core.errors.HttpError: On a non-2xx status.
        """
        payload = self._send("POST", self.endpoint_url, body=to_payload(entity))
        if payload is None:
            return entity
        return self._materialize_one(payload)

    def update(self, entity: T) -> T:
        """
        Replace an entity with ``PUT {endpoint}/{id}``.

        :raises ~apiqueryable.core.errors.ValidationError: If the entity has no id. No request is sent.
        :raises ~apiqueryable.core.errors.HttpError: On a non-2xx status.
        """
        url = self._item_url(entity_id(entity))
        payload = self._send("PUT", url, body=to_payload(entity))
        if payload is None:
            return entity
        return self._materialize_one(payload)

    def delete(self, id: Any) -> None:
        """
        Delete an entity with ``DELETE {endpoint}/{id}``. The response body is ignored.

        :raises ~apiqueryable.core.errors.ValidationError: If ``id`` is empty. No request is sent.
        :raises ~apiqueryable.core.errors.HttpError: On a non-2xx status, including 404.
        """
        url = self._item_url(id)
        client = self._context._get_client()
        client._request("DELETE", url, headers=self.spec.headers, timeout=self.spec.timeout)

    def find(self, id: Any) -> Optional[T]:
        """
        Fetch one entity with ``GET {endpoint}/{id}``.

        :return: The entity, or ``None`` when the backend answers 404.
        """
        try:
            return self.get(id)
        except NotFoundError:
            return None

    def get(self, id: Any) -> T:
        """
        Fetch one entity with ``GET {endpoint}/{id}``.

        :raises ~apiqueryable.core.errors.NotFoundError: When the backend answers 404.
        :raises ~apiqueryable.core.errors.HttpError: On any other non-2xx status.
        """
        url = self._item_url(id)
        try:
            payload = self._send("GET", url)
        except HttpError as exc:
            if exc.status_code == 404:
                raise NotFoundError(
                    f"{getattr(self.entity_type, '__name__', 'Entity')} {id!r} not found",
                    entity_id=str(id),
                    url=url,
                ) from exc
            raise
        return self._materialize_one(payload)


__all__ = ["ApiSet"]
