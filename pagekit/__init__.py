"""Pagination and data-listing layer."""

from pagekit.core.enums import SortEnum
from pagekit.core.lifespan import lifespan
from pagekit.core.log import configure_logging
from pagekit.modules.pagination.calculator import UNLIMITED, calculate
from pagekit.modules.pagination.paginator import Paginator, UrlBuilder
from pagekit.modules.pagination.schemas import PaginationDescriptor
from pagekit.modules.pagination.sort import Sort
from pagekit.modules.providers.array import ArrayProvider
from pagekit.modules.providers.base import DataProvider, DataSource
from pagekit.modules.providers.query import QueryExecutor, QueryProvider
from pagekit.shared.exceptions import (
    InvalidConfigurationError,
    InvalidQueryError,
    PaginationError,
    ReadOnlyViolationError,
)

__all__ = [
    "UNLIMITED",
    "ArrayProvider",
    "DataProvider",
    "DataSource",
    "InvalidConfigurationError",
    "InvalidQueryError",
    "PaginationDescriptor",
    "PaginationError",
    "Paginator",
    "QueryExecutor",
    "QueryProvider",
    "ReadOnlyViolationError",
    "Sort",
    "SortEnum",
    "UrlBuilder",
    "calculate",
    "configure_logging",
    "lifespan",
]
