"""Pagination schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pagekit.core.enums import SortEnum


class PaginationDescriptor(BaseModel):
    """Navigation state computed for one (total, page, limit, sort, window) tuple."""

    model_config = ConfigDict(frozen=True)

    total_count: int
    sort: SortEnum
    limit: int
    offset: int
    page_count: int
    page_current: int
    page_start: int | None
    page_end: int | None
    page_first: int
    page_last: int
    page_prev: int | None
    page_next: int | None
    page_display: list[int]
    count_more: int
