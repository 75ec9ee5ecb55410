"""Pagination arithmetic.

``calculate`` is a pure function: it turns the raw pagination inputs into a
complete :class:`PaginationDescriptor`. Inputs coming from untrusted callers
(query strings, form fields) are coerced and clamped instead of rejected, so a
malformed page request always degrades to a valid page.

Sort direction decides which end of the total range page 0 maps to. With
``SortEnum.DESC`` page 0 is the *last* block of the range, which gives
"newest first" paging over a source stored oldest first::

    total_count=10, limit=3, DESC
    page 0 -> offset 9 (1 item), page 1 -> offset 6, page 3 -> offset 0
"""

from __future__ import annotations

from pagekit.core.enums import SortEnum
from pagekit.modules.pagination.schemas import PaginationDescriptor
from pagekit.shared.utils import coerce_int, coerce_sort

UNLIMITED = -1


def _ceil_div(numerator: int, denominator: int) -> int:
    return -(-numerator // denominator)


def build_page_display(page: int, page_count: int, page_window: int) -> list[int]:
    """Return a window of page indices centred on ``page``.

    The window is shifted instead of truncated when centring would run past
    either edge, so it always holds ``min(page_window, page_count)`` pages.
    """
    if page_count <= 0:
        return []
    if page_window <= 0 or page_window >= page_count:
        return list(range(page_count))

    start = page - page_window // 2
    start = max(0, min(start, page_count - page_window))
    return list(range(start, start + page_window))


def calculate(
    total_count: int,
    page: int,
    limit: int,
    sort: SortEnum | str = SortEnum.ASC,
    page_window: int = 0,
) -> PaginationDescriptor:
    """Compute offsets, boundaries and navigation pages."""
    total_count = max(coerce_int(total_count), 0)
    page = max(coerce_int(page), 0)
    limit = coerce_int(limit, UNLIMITED)
    sort = coerce_sort(sort)
    page_window = max(coerce_int(page_window), 0)

    if limit <= 0:
        page_count = 1 if total_count > 0 else 0
        effective_limit = total_count
        page = 0
        offset = 0
    else:
        page_count = _ceil_div(total_count, limit)
        effective_limit = limit
        page = min(page, max(page_count - 1, 0))
        if sort == SortEnum.DESC:
            offset = (page_count - 1 - page) * limit
        else:
            offset = page * limit
        offset = max(offset, 0)

    page_last = max(page_count - 1, 0)
    items_on_page = max(min(offset + effective_limit, total_count) - offset, 0)

    if limit <= 0:
        count_more = 0
    elif sort == SortEnum.DESC:
        # later DESC pages walk toward offset 0
        count_more = offset
    else:
        count_more = max(total_count - (offset + limit), 0)

    return PaginationDescriptor(
        total_count=total_count,
        sort=sort,
        limit=effective_limit,
        offset=offset,
        page_count=page_count,
        page_current=page,
        page_start=offset if items_on_page else None,
        page_end=offset + items_on_page - 1 if items_on_page else None,
        page_first=0,
        page_last=page_last,
        page_prev=page - 1 if page > 0 else None,
        page_next=page + 1 if page < page_last else None,
        page_display=build_page_display(page, page_count, page_window),
        count_more=count_more,
    )
