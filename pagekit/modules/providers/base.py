"""Data provider lifecycle shared by every data source.

A :class:`DataProvider` owns the cached models, keys and total count of one
listing and decides *when* to fetch them. *How* they are fetched is delegated
to a :class:`DataSource`, which only has to implement three calls::

    provider = DataProvider(ArrayProvider(rows, key="id"), pagination={"limit": 20})
    provider.get_models()       # fetches once
    provider.get_models()       # cached
    provider.refresh()          # next read fetches again
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Literal, Protocol

from pagekit.core.config import Settings
from pagekit.core.enums import FetchOperationEnum
from pagekit.core.metrics import observe_fetch
from pagekit.modules.pagination.paginator import Paginator
from pagekit.modules.pagination.sort import Sort
from pagekit.shared.exceptions import InvalidConfigurationError, PaginationError

logger = logging.getLogger(__name__)

PaginationOption = Paginator | Mapping[str, Any] | bool | None
SortOption = Sort | Mapping[str, Any] | bool | None


class DataSource(Protocol):
    """Capability interface implemented by concrete providers."""

    def fetch_page(self, pagination: Paginator | None, sort: Sort | None) -> Sequence[Any]:
        """Return models of the current page, or every model without pagination."""

    def fetch_keys(self, models: Sequence[Any]) -> Sequence[Any]:
        """Return one key per model, in the same order."""

    def fetch_total_count(self) -> int:
        """Return the number of models ignoring pagination."""


class DataProvider:
    """Lazily prepares and caches models, keys and total count."""

    def __init__(
        self,
        source: DataSource,
        *,
        pagination: PaginationOption = None,
        sort: SortOption = None,
        settings: Settings | None = None,
    ) -> None:
        self.source = source
        self._settings = settings
        self._pagination: Paginator | Literal[False] | None = None
        self._sort: Sort | Literal[False] | None = None
        self._models: list[Any] | None = None
        self._keys: list[Any] | None = None
        self._total_count: int | None = None

        self.set_pagination(pagination)
        self.set_sort(sort)

    @property
    def source_name(self) -> str:
        return type(self.source).__name__

    # lifecycle

    def prepare(self, force_prepare: bool = False) -> None:
        """Fetch models and keys unless they are already cached."""
        if force_prepare or self._models is None:
            models = self._fetch_page()
            self._models = models
            self._keys = self._fetch_keys(models)
        elif self._keys is None:
            self._keys = self._fetch_keys(self._models)

    def refresh(self) -> None:
        """Drop cached models, keys and total count. Pagination settings are kept."""
        self._models = None
        self._keys = None
        self._total_count = None
        logger.debug("Data provider over %s refreshed", self.source_name)

    def _fetch_page(self) -> list[Any]:
        pagination = self.get_pagination()
        if pagination is not False:
            pagination.set_total_count(self.get_total_count())
        sort = self.get_sort()

        models = observe_fetch(
            self.source_name,
            FetchOperationEnum.PAGE,
            lambda: self.source.fetch_page(
                pagination if pagination is not False else None,
                sort if sort is not False else None,
            ),
        )
        models = list(models)
        logger.debug("Fetched %s models from %s", len(models), self.source_name)
        return models

    def _fetch_keys(self, models: list[Any]) -> list[Any]:
        keys = list(self.source.fetch_keys(models))
        if len(keys) != len(models):
            raise PaginationError(
                f"{self.source_name} returned {len(keys)} keys for {len(models)} models",
            )
        return keys

    # models

    def get_models(self) -> list[Any]:
        self.prepare()
        return self._models

    def set_models(self, models: Sequence[Any]) -> None:
        """Replace cached models; keys are derived again on next read."""
        self._models = list(models)
        self._keys = None

    def get_keys(self) -> list[Any]:
        self.prepare()
        return self._keys

    def set_keys(self, keys: Sequence[Any]) -> None:
        self._keys = list(keys)

    def get_count(self) -> int:
        """Number of models in the current page."""
        return len(self.get_models())

    def get_total_count(self) -> int:
        """Number of models across all pages.

        Equal to :meth:`get_count` when pagination is disabled.
        """
        if self.get_pagination() is False:
            return self.get_count()
        if self._total_count is None:
            total = observe_fetch(
                self.source_name,
                FetchOperationEnum.TOTAL_COUNT,
                self.source.fetch_total_count,
            )
            self._total_count = int(total)
        return self._total_count

    def set_total_count(self, value: int | None) -> None:
        self._total_count = value

    # pagination & sort

    def get_pagination(self) -> Paginator | Literal[False]:
        """Return the paginator, building the default one on first access."""
        if self._pagination is None:
            self._pagination = Paginator(settings=self._settings)
        return self._pagination

    def set_pagination(self, value: PaginationOption) -> None:
        """Accept a config mapping, a :class:`Paginator`, ``False`` (disabled) or ``None``/``True`` (default)."""
        if value is None or value is True:
            self._pagination = None
        elif value is False or isinstance(value, Paginator):
            self._pagination = value
        elif isinstance(value, Mapping):
            self._pagination = self._build_option(Paginator, value, "pagination", settings=self._settings)
        else:
            logger.warning("Rejected pagination option of type %s", type(value).__name__)
            raise InvalidConfigurationError(
                "Only Paginator instance, configuration mapping or False is allowed for pagination",
            )

    def get_sort(self) -> Sort | Literal[False]:
        if self._sort is None:
            self._sort = Sort()
        return self._sort

    def set_sort(self, value: SortOption) -> None:
        """Accept a config mapping, a :class:`Sort`, ``False`` (disabled) or ``None``/``True`` (default)."""
        if value is None or value is True:
            self._sort = None
        elif value is False or isinstance(value, Sort):
            self._sort = value
        elif isinstance(value, Mapping):
            self._sort = self._build_option(Sort, value, "sort")
        else:
            logger.warning("Rejected sort option of type %s", type(value).__name__)
            raise InvalidConfigurationError(
                "Only Sort instance, configuration mapping or False is allowed for sort",
            )

    @staticmethod
    def _build_option(factory, config: Mapping[str, Any], option: str, **extra: Any):
        try:
            return factory(**{str(name): item for name, item in config.items()}, **extra)
        except InvalidConfigurationError as exc:
            logger.warning("Rejected %s configuration: %s", option, exc)
            raise
        except TypeError as exc:
            logger.warning("Rejected %s configuration: %s", option, exc)
            raise InvalidConfigurationError(f"Invalid {option} configuration: {exc}") from exc
