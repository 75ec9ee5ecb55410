"""Core enums used across modules."""

from enum import StrEnum


class SortEnum(StrEnum):
    """Direction in which page 0 walks the result range."""

    ASC = "asc"
    DESC = "desc"


class FetchOperationEnum(StrEnum):
    """Data source call kinds tracked by metrics."""

    PAGE = "page"
    TOTAL_COUNT = "total_count"
