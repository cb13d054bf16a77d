"""Response envelopes shared by every v1 endpoint.

Single item ``{"data": {...}}``, bounded collection ``{"data": [...]}`` and
paginated list ``{"data": [...], "meta": {"total", "page", "limit", "pages"}}``.
"""


import math
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from vendorcomply.core.pagination import PageMeta

T = TypeVar("T")


class _Envelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class DataResponse(_Envelope, Generic[T]):
    data: T


class CollectionResponse(_Envelope, Generic[T]):
    """For small, bounded lists (requirements, plans, rules) that are never paged."""

    data: list[T]


class ListResponse(_Envelope, Generic[T]):
    data: list[T]
    meta: PageMeta


def page_meta(total: int, page: int, limit: int) -> PageMeta:
    return PageMeta(total=total, page=page, limit=limit, pages=math.ceil(total / limit) if limit else 1)


def paginated(items: list, total: int, page: int, limit: int) -> dict:
    """Build the body for a ``ListResponse`` endpoint."""
    return {"data": items, "meta": page_meta(total, page, limit)}
