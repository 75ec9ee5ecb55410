"""Data source over a SQLAlchemy select statement."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from sqlalchemy import Select
from sqlalchemy import inspect as sa_inspect

from pagekit.core.database import selects_single_entity
from pagekit.core.enums import SortEnum
from pagekit.modules.pagination.paginator import Paginator
from pagekit.modules.pagination.sort import Sort
from pagekit.modules.providers.array import KeyOption, extract_keys
from pagekit.shared.exceptions import InvalidConfigurationError, InvalidQueryError
from pagekit.shared.utils import extract_field


class QueryExecutor(Protocol):
    """Runs statements prepared by :class:`QueryProvider`."""

    def fetch_all(self, stmt: Select) -> Sequence[Any]:
        """Return rows for a statement with limit/offset/order applied."""

    def count(self, stmt: Select) -> int:
        """Return row count for a statement without limit/offset/order."""


class QueryProvider:
    """Fetches pages with LIMIT/OFFSET and counts with a separate query.

    Keys come from ``key`` when given, else from the primary key of the
    selected ORM entity (a dict per model for composite keys), else positions.
    """

    def __init__(self, query: Select, executor: QueryExecutor, key: KeyOption = None) -> None:
        self.query = query
        self.executor = executor
        self.key = key
        self._require_query()

    def _require_query(self) -> Select:
        if not isinstance(self.query, Select):
            raise InvalidQueryError(
                f"The query must be a SQLAlchemy Select statement, got {type(self.query).__name__}",
            )
        return self.query

    def fetch_page(self, pagination: Paginator | None, sort: Sort | None) -> list[Any]:
        stmt = self._require_query()
        if sort is not None and not sort.is_empty:
            stmt = stmt.order_by(None).order_by(*self._order_clauses(stmt, sort))
        if pagination is not None:
            stmt = stmt.limit(pagination.limit).offset(pagination.offset)
        return list(self.executor.fetch_all(stmt))

    def fetch_keys(self, models: Sequence[Any]) -> list[Any]:
        if self.key is not None:
            return extract_keys(models, self.key)

        pk_names = self.primary_key_names()
        if len(pk_names) == 1:
            return [extract_field(model, pk_names[0]) for model in models]
        if pk_names:
            return [{name: extract_field(model, name) for name in pk_names} for model in models]
        return list(range(len(models)))

    def fetch_total_count(self) -> int:
        stmt = self._require_query().limit(None).offset(None).order_by(None)
        return int(self.executor.count(stmt))

    def primary_key_names(self) -> list[str]:
        """Primary key attribute names of the selected entity, if any."""
        stmt = self._require_query()
        if not selects_single_entity(stmt):
            return []
        inspected = sa_inspect(stmt.column_descriptions[0]["entity"])
        mapper = getattr(inspected, "mapper", inspected)
        return [mapper.get_property_by_column(column).key for column in mapper.primary_key]

    @staticmethod
    def _order_clauses(stmt: Select, sort: Sort) -> list[Any]:
        clauses = []
        for name, direction in sort.orders.items():
            try:
                column = stmt.selected_columns[name]
            except KeyError as exc:
                raise InvalidConfigurationError(f"Unknown sort field {name!r}") from exc
            clauses.append(column.desc() if direction == SortEnum.DESC else column.asc())
        return clauses
