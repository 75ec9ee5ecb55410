from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from pagekit.core.enums import SortEnum
from pagekit.modules.pagination.calculator import UNLIMITED, build_page_display, calculate


def _page_size(state) -> int:
    if state.page_start is None:
        return 0
    return state.page_end - state.page_start + 1


def test_last_ascending_page_of_twenty_five_items() -> None:
    state = calculate(total_count=25, page=2, limit=10, sort=SortEnum.ASC, page_window=5)

    assert state.offset == 20
    assert state.limit == 10
    assert state.page_count == 3
    assert state.page_current == 2
    assert state.page_last == 2
    assert state.page_prev == 1
    assert state.page_next is None
    assert state.page_start == 20
    assert state.page_end == 24
    assert state.count_more == 0


def test_first_ascending_page_counts_remaining_items() -> None:
    state = calculate(total_count=25, page=0, limit=10)

    assert state.offset == 0
    assert state.page_prev is None
    assert state.page_next == 1
    assert state.count_more == 15


@pytest.mark.parametrize("sort", [SortEnum.ASC, SortEnum.DESC])
@pytest.mark.parametrize("total_count", [0, 1, 9, 10, 11, 25, 99, 100])
@pytest.mark.parametrize("limit", [1, 3, 10])
def test_pages_cover_total_exactly_once(sort: SortEnum, total_count: int, limit: int) -> None:
    first = calculate(total_count, 0, limit, sort)
    assert first.page_count == math.ceil(total_count / limit)

    offsets = set()
    covered = 0
    for page in range(first.page_count):
        state = calculate(total_count, page, limit, sort)
        offsets.add(state.offset)
        covered += _page_size(state)
    assert covered == total_count
    assert len(offsets) == first.page_count


def test_full_pages_hold_limit_items_except_the_last_ascending_page() -> None:
    for page in range(3):
        state = calculate(25, page, 10)
        expected = 10 if page < 2 else 25 - state.page_start
        assert _page_size(state) == expected


def test_descending_page_zero_is_last_block_of_range() -> None:
    state = calculate(total_count=10, page=0, limit=3, sort=SortEnum.DESC)

    assert state.page_count == 4
    assert state.offset == 9
    assert state.page_start == 9
    assert state.page_end == 9
    assert _page_size(state) == 1
    assert state.count_more == 9


def test_descending_last_page_starts_at_zero() -> None:
    state = calculate(total_count=10, page=3, limit=3, sort="desc")

    assert state.offset == 0
    assert state.page_end == 2
    assert state.page_next is None
    assert state.page_prev == 2
    assert state.count_more == 0


def test_empty_result_has_no_navigation() -> None:
    state = calculate(total_count=0, page=4, limit=10, page_window=5)

    assert state.page_count == 0
    assert state.page_current == 0
    assert state.page_first == 0
    assert state.page_last == 0
    assert state.page_display == []
    assert state.page_prev is None
    assert state.page_next is None
    assert state.page_start is None
    assert state.page_end is None
    assert state.count_more == 0


def test_unlimited_limit_returns_everything_on_one_page() -> None:
    state = calculate(total_count=42, page=3, limit=UNLIMITED)

    assert state.page_count == 1
    assert state.offset == 0
    assert state.limit == 42
    assert state.page_current == 0
    assert state.page_end == 41
    assert state.page_next is None
    assert state.count_more == 0


def test_zero_limit_is_unlimited_too() -> None:
    state = calculate(total_count=0, page=0, limit=0)

    assert state.page_count == 0
    assert state.limit == 0


def test_negative_page_is_treated_as_first_page() -> None:
    state = calculate(total_count=25, page=-7, limit=10)

    assert state.page_current == 0
    assert state.offset == 0


def test_page_past_the_end_is_clamped_to_last_page() -> None:
    state = calculate(total_count=25, page=40, limit=10)

    assert state.page_current == 2
    assert state.offset == 20


def test_malformed_inputs_are_coerced() -> None:
    state = calculate(total_count="25", page="abc", limit="10", sort="sideways", page_window=None)

    assert state.total_count == 25
    assert state.page_current == 0
    assert state.limit == 10
    assert state.sort == SortEnum.ASC
    assert state.page_display == [0, 1, 2]


@pytest.mark.parametrize(
    ("page", "expected"),
    [
        (0, [0, 1, 2, 3, 4]),
        (1, [0, 1, 2, 3, 4]),
        (5, [3, 4, 5, 6, 7]),
        (8, [5, 6, 7, 8, 9]),
        (9, [5, 6, 7, 8, 9]),
    ],
)
def test_page_display_window_is_centred_and_shifted(page: int, expected: list[int]) -> None:
    assert build_page_display(page, page_count=10, page_window=5) == expected


def test_page_display_without_window_lists_every_page() -> None:
    assert calculate(total_count=45, page=1, limit=10, page_window=0).page_display == [0, 1, 2, 3, 4]


def test_page_display_never_exceeds_page_count() -> None:
    assert calculate(total_count=15, page=1, limit=10, page_window=5).page_display == [0, 1]


def test_descriptor_is_immutable() -> None:
    state = calculate(total_count=5, page=0, limit=2)

    with pytest.raises(ValidationError):
        state.offset = 3
