"""FastAPI helpers: request params, URL building and page responses."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from fastapi import Request
from pydantic import BaseModel
from starlette.datastructures import URL

from pagekit.core.config import get_settings
from pagekit.core.enums import SortEnum
from pagekit.modules.pagination.paginator import Paginator
from pagekit.modules.providers.base import DataProvider
from pagekit.shared.utils import coerce_int, coerce_sort

T = TypeVar("T")


class PaginationParams(BaseModel):
    """Pagination query params."""

    page: int
    limit: int
    sort: SortEnum


def get_pagination_params(request: Request) -> PaginationParams:
    """FastAPI dependency for pagination params.

    Malformed values fall back to defaults instead of failing the request.
    """
    settings = get_settings()
    query = request.query_params

    page = max(coerce_int(query.get(settings.page_arg)), 0)
    limit = coerce_int(query.get("limit"), settings.default_limit)
    if limit <= 0 and not settings.allow_unlimited_limit:
        limit = settings.default_limit
    limit = min(limit, settings.max_limit)
    sort = coerce_sort(query.get("sort"), settings.default_sort)
    return PaginationParams(page=page, limit=limit, sort=sort)


class QueryUrlBuilder:
    """Builds page links by merging args into the query string of a base URL."""

    def __init__(self, url: URL | str) -> None:
        self.url = url if isinstance(url, URL) else URL(url)

    @classmethod
    def from_request(cls, request: Request) -> QueryUrlBuilder:
        return cls(request.url)

    def build_url(self, params: Mapping[str, Any], *, absolute: bool = False) -> str:
        url = self.url.include_query_params(**{str(name): value for name, value in params.items()})
        if absolute:
            return str(url)
        return f"{url.path}?{url.query}" if url.query else url.path


def build_paginator(
    params: PaginationParams,
    request: Request | None = None,
    *,
    page_window: int | None = None,
) -> Paginator:
    """Build paginator from request params, with links pointing back at the request URL."""
    url_builder = QueryUrlBuilder.from_request(request) if request is not None else None
    return Paginator(
        page=params.page,
        limit=params.limit,
        sort=params.sort,
        page_window=page_window,
        url_builder=url_builder,
        settings=get_settings(),
    )


class Page(BaseModel, Generic[T]):
    """Generic paginated response."""

    items: list[T]
    keys: list[Any]
    total: int
    page: int
    page_count: int
    limit: int
    offset: int
    page_display: list[int]
    count_more: int
    links: dict[str, str]


def build_page(
    provider: DataProvider,
    serializer: Callable[[Any], T] | None = None,
    *,
    absolute_links: bool = False,
) -> Page[T]:
    """Build page object from a data provider."""
    models = provider.get_models()
    items = [serializer(model) for model in models] if serializer is not None else list(models)
    keys = provider.get_keys()
    total = provider.get_total_count()
    pagination = provider.get_pagination()

    if pagination is False:
        return Page(
            items=items,
            keys=keys,
            total=total,
            page=0,
            page_count=1 if total else 0,
            limit=total,
            offset=0,
            page_display=[0] if total else [],
            count_more=0,
            links={},
        )

    state = pagination.ensure_calculated()
    return Page(
        items=items,
        keys=keys,
        total=total,
        page=state.page_current,
        page_count=state.page_count,
        limit=state.limit,
        offset=state.offset,
        page_display=list(state.page_display),
        count_more=state.count_more,
        links=pagination.get_links(absolute_links) if pagination.url_builder is not None else {},
    )
