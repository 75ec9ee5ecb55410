"""Data source over an in-memory sequence."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from pagekit.core.enums import SortEnum
from pagekit.modules.pagination.paginator import Paginator
from pagekit.modules.pagination.sort import Sort
from pagekit.shared.utils import extract_field

KeyOption = str | Callable[[Any], Any] | None


def extract_keys(models: Sequence[Any], key: str | Callable[[Any], Any]) -> list[Any]:
    """Apply a field name or callable key extractor to every model."""
    if isinstance(key, str):
        return [extract_field(model, key) for model in models]
    return [key(model) for model in models]


class ArrayProvider:
    """Slices already loaded models.

    Without ``key`` the keys are positions in ``all_models``, not in the page,
    so a model can be traced back to the unpaginated source.
    """

    def __init__(self, all_models: Sequence[Any] | None = None, key: KeyOption = None) -> None:
        self.all_models = all_models
        self.key = key
        self._positions: list[int] | None = None
        self._page_models: list[Any] | None = None

    def fetch_page(self, pagination: Paginator | None, sort: Sort | None) -> list[Any]:
        if self.all_models is None:
            self._positions = []
            self._page_models = []
            return []

        indexed = list(enumerate(self.all_models))
        if sort is not None and not sort.is_empty:
            indexed = self._order(indexed, sort)

        if pagination is not None and pagination.page_window > 0:
            offset = pagination.offset
            indexed = indexed[offset : offset + pagination.limit]

        self._positions = [position for position, _ in indexed]
        self._page_models = [model for _, model in indexed]
        return list(self._page_models)

    def fetch_keys(self, models: Sequence[Any]) -> list[Any]:
        if self.key is not None:
            return extract_keys(models, self.key)
        if self._is_last_page(models):
            return list(self._positions)
        return list(range(len(models)))

    def fetch_total_count(self) -> int:
        return len(self.all_models) if self.all_models is not None else 0

    def _is_last_page(self, models: Sequence[Any]) -> bool:
        # positions only describe the models returned by the latest fetch_page
        if self._positions is None or self._page_models is None:
            return False
        if len(models) != len(self._page_models):
            return False
        return all(model is fetched for model, fetched in zip(models, self._page_models))

    @staticmethod
    def _order(indexed: list[tuple[int, Any]], sort: Sort) -> list[tuple[int, Any]]:
        # stable sorts applied from the least significant field
        for name, direction in reversed(list(sort.orders.items())):
            indexed = sorted(
                indexed,
                key=lambda item: extract_field(item[1], name),
                reverse=direction == SortEnum.DESC,
            )
        return indexed
