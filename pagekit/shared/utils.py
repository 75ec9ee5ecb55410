"""Shared utility functions."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pagekit.core.enums import SortEnum


def coerce_int(value: object, default: int = 0) -> int:
    """Convert untrusted numeric input to int, falling back to default."""
    if value is None:
        return default
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        pass
    if isinstance(value, str):
        try:
            return int(float(value.strip()))
        except (ValueError, OverflowError):
            return default
    return default


def coerce_sort(value: object, default: SortEnum = SortEnum.ASC) -> SortEnum:
    """Normalize sort direction tokens (asc/desc in any case)."""
    if isinstance(value, SortEnum):
        return value
    if isinstance(value, str):
        token = value.strip().lower()
        if token in {"asc", "desc"}:
            return SortEnum(token)
    return default


def extract_field(model: Any, name: str) -> Any:
    """Read a named field from a mapping row or an attribute-bearing object."""
    if isinstance(model, Mapping):
        return model[name]
    return getattr(model, name)
