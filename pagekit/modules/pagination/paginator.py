"""Stateful paginator with memoised navigation state."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Protocol

from pagekit.core.config import Settings, get_settings
from pagekit.core.enums import SortEnum
from pagekit.modules.pagination.calculator import calculate
from pagekit.modules.pagination.schemas import PaginationDescriptor
from pagekit.shared.exceptions import ReadOnlyViolationError
from pagekit.shared.utils import coerce_int, coerce_sort

logger = logging.getLogger(__name__)

LINK_SELF = "self"
LINK_FIRST = "first"
LINK_PREV = "prev"
LINK_NEXT = "next"
LINK_LAST = "last"


class UrlBuilder(Protocol):
    """Builds navigation URLs for a set of query arguments."""

    def build_url(self, params: Mapping[str, Any], *, absolute: bool = False) -> str:
        """Return relative (or absolute) URL with params merged into the query."""


class Paginator:
    """Owns pagination inputs and lazily computes a :class:`PaginationDescriptor`.

    Setters only mark the cached descriptor stale; the next read recomputes it.
    """

    COMPUTED_FIELDS = frozenset(PaginationDescriptor.model_fields)
    INPUT_FIELDS = frozenset(
        {"total_count", "page", "limit", "sort", "page_window", "page_arg", "url_builder"},
    )

    def __init__(
        self,
        *,
        total_count: int = 0,
        page: int | None = None,
        limit: int | None = None,
        sort: SortEnum | str | None = None,
        page_window: int | None = None,
        page_arg: str | None = None,
        url_builder: UrlBuilder | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._default_limit = settings.default_limit
        self._default_sort = settings.default_sort
        self._default_page_window = settings.default_page_window

        self.page_arg = page_arg or settings.page_arg
        self.url_builder = url_builder

        self._descriptor: PaginationDescriptor | None = None
        self._is_stale = True

        self.set_total_count(total_count)
        self.set_page(page)
        self.set_limit(limit)
        self.set_sort(sort)
        self.set_page_window(page_window)

    # inputs

    def set_total_count(self, value: object) -> None:
        self._total_count = max(coerce_int(value), 0)
        self._is_stale = True

    def set_page(self, value: object) -> None:
        self._page = max(coerce_int(value), 0)
        self._is_stale = True

    def set_limit(self, value: object) -> None:
        self._limit = coerce_int(value, self._default_limit)
        self._is_stale = True

    def set_sort(self, value: object) -> None:
        self._sort = coerce_sort(value, self._default_sort)
        self._is_stale = True

    def set_page_window(self, value: object) -> None:
        self._page_window = max(coerce_int(value, self._default_page_window), 0)
        self._is_stale = True

    @property
    def total_count(self) -> int:
        return self._total_count

    @total_count.setter
    def total_count(self, value: object) -> None:
        self.set_total_count(value)

    @property
    def page(self) -> int:
        """Requested page, before clamping. See :attr:`page_current`."""
        return self._page

    @page.setter
    def page(self, value: object) -> None:
        self.set_page(value)

    @property
    def requested_limit(self) -> int:
        return self._limit

    @property
    def sort(self) -> SortEnum:
        return self._sort

    @sort.setter
    def sort(self, value: object) -> None:
        self.set_sort(value)

    @property
    def page_window(self) -> int:
        return self._page_window

    @page_window.setter
    def page_window(self, value: object) -> None:
        self.set_page_window(value)

    # computed

    def ensure_calculated(self, force: bool = False) -> PaginationDescriptor:
        """Recompute the descriptor iff stale or forced, and return it."""
        if force or self._is_stale or self._descriptor is None:
            self._descriptor = calculate(
                self._total_count,
                self._page,
                self._limit,
                self._sort,
                self._page_window,
            )
            self._is_stale = False
            logger.debug(
                "Pagination recalculated: total=%s page=%s limit=%s sort=%s",
                self._total_count,
                self._descriptor.page_current,
                self._limit,
                self._sort,
            )
        return self._descriptor

    @property
    def is_calculated(self) -> bool:
        return self._descriptor is not None and not self._is_stale

    @property
    def limit(self) -> int:
        """Effective limit: the total count when the requested limit is unlimited."""
        return self.ensure_calculated().limit

    @limit.setter
    def limit(self, value: object) -> None:
        self.set_limit(value)

    @property
    def offset(self) -> int:
        return self.ensure_calculated().offset

    @property
    def page_current(self) -> int:
        return self.ensure_calculated().page_current

    @property
    def page_count(self) -> int:
        return self.ensure_calculated().page_count

    @property
    def page_start(self) -> int | None:
        return self.ensure_calculated().page_start

    @property
    def page_end(self) -> int | None:
        return self.ensure_calculated().page_end

    @property
    def page_first(self) -> int:
        return self.ensure_calculated().page_first

    @property
    def page_last(self) -> int:
        return self.ensure_calculated().page_last

    @property
    def page_prev(self) -> int | None:
        return self.ensure_calculated().page_prev

    @property
    def page_next(self) -> int | None:
        return self.ensure_calculated().page_next

    @property
    def page_display(self) -> list[int]:
        return list(self.ensure_calculated().page_display)

    @property
    def count_more(self) -> int:
        """Items on the pages after the current one."""
        return self.ensure_calculated().count_more

    def to_dict(self, recalculate: bool = False) -> dict[str, Any]:
        """Return a snapshot of every computed field."""
        return self.ensure_calculated(force=recalculate).model_dump()

    # links

    def create_link(self, page: object, absolute: bool = False) -> str:
        """Build URL pointing at ``page``; empty string without a URL builder."""
        if self.url_builder is None:
            return ""
        page = coerce_int(page, self.page_current)
        return self.url_builder.build_url({self.page_arg: page}, absolute=absolute)

    def get_links(self, absolute: bool = False) -> dict[str, str]:
        """Return self/first/prev/next/last URLs.

        Missing prev/next pages point back at the current page.
        """
        state = self.ensure_calculated()
        current = state.page_current
        return {
            LINK_SELF: self.create_link(current, absolute),
            LINK_FIRST: self.create_link(state.page_first, absolute),
            LINK_PREV: self.create_link(current if state.page_prev is None else state.page_prev, absolute),
            LINK_NEXT: self.create_link(current if state.page_next is None else state.page_next, absolute),
            LINK_LAST: self.create_link(state.page_last, absolute),
        }

    # indexed access

    def __getitem__(self, name: str) -> Any:
        if name in self.COMPUTED_FIELDS:
            return getattr(self.ensure_calculated(), name)
        if name in self.INPUT_FIELDS:
            return getattr(self, name)
        raise KeyError(name)

    def __setitem__(self, name: str, value: Any) -> None:
        if name in self.INPUT_FIELDS:
            setattr(self, name, value)
            return
        if name in self.COMPUTED_FIELDS:
            raise ReadOnlyViolationError(type(self).__name__, name)
        raise KeyError(name)

    def __delitem__(self, name: str) -> None:
        raise ReadOnlyViolationError(type(self).__name__, name)

    def __contains__(self, name: object) -> bool:
        if name in self.COMPUTED_FIELDS:
            return getattr(self.ensure_calculated(), name) is not None
        return name in self.INPUT_FIELDS

    def __repr__(self) -> str:
        return (
            f"Paginator(total_count={self._total_count}, page={self._page}, limit={self._limit}, "
            f"sort={self._sort.value!r}, page_window={self._page_window})"
        )
