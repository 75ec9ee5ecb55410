"""Sorting criteria consulted by data sources."""

from __future__ import annotations

from collections.abc import Mapping

from pagekit.core.enums import SortEnum
from pagekit.shared.exceptions import InvalidConfigurationError
from pagekit.shared.utils import coerce_sort


class Sort:
    """Ordered mapping of field name to direction.

    Field order is significant: the first field is the primary ordering key.
    """

    def __init__(self, orders: Mapping[str, SortEnum | str] | None = None) -> None:
        if orders is None:
            orders = {}
        if not isinstance(orders, Mapping):
            raise InvalidConfigurationError(
                f"Sort orders must map field names to directions, got {type(orders).__name__}",
            )
        self.orders: dict[str, SortEnum] = {
            str(name): coerce_sort(direction) for name, direction in orders.items()
        }

    @property
    def is_empty(self) -> bool:
        return not self.orders

    def __repr__(self) -> str:
        return f"Sort({self.orders!r})"
