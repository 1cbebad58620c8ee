"""Tests for listing pagination."""

from __future__ import annotations

import pytest

from pdxdoc.config import PaginationMode
from pdxdoc.pagination import PaginationInfo, paginate


def _collect(total: int, chunk: list[str]) -> tuple[int, list[str]]:
    return total, chunk


@pytest.mark.parametrize(
    ("mode", "threshold", "items", "expected"),
    [
        (PaginationMode.absolute(2), 0, ["a", "b", "c"], [["a", "b"], ["c"]]),
        (PaginationMode.absolute(2), 0, ["a", "b"], [["a", "b"]]),
        (PaginationMode.absolute(4), 4, ["a", "b", "c", "d"], [["a", "b", "c", "d"]]),
        (PaginationMode.absolute(4), 4, list("abcde"), [["a", "b", "c", "d"], ["e"]]),
        (PaginationMode.none(), 0, list("abcdefg"), [list("abcdefg")]),
        (PaginationMode.absolute(3), 0, [], [[]]),
    ],
)
def test_paginate_chunks(
    mode: PaginationMode, threshold: int, items: list[str], expected: list[list[str]]
) -> None:
    pages = paginate(mode, threshold, items, _collect)

    assert [chunk for _, chunk in pages] == expected
    assert all(total == len(expected) for total, _ in pages)


def test_alphabetic_groups_by_leading_letter() -> None:
    items = ["apple", "avocado", "banana", "blueberry", "bilberry", "cherry"]

    pages = paginate(PaginationMode.alphabetic(2), 0, items, _collect, key=str)

    assert [chunk for _, chunk in pages] == [
        ["apple", "avocado"],
        ["banana", "blueberry"],
        ["bilberry"],
        ["cherry"],
    ]


def test_alphabetic_merges_mixed_case_letters() -> None:
    items = sorted(["apple", "Avocado", "Banana"])

    pages = paginate(PaginationMode.alphabetic(10), 0, items, _collect, key=str)

    assert [chunk for _, chunk in pages] == [["Avocado", "apple"], ["Banana"]]
    assert {total for total, _ in pages} == {2}


def test_alphabetic_requires_key() -> None:
    with pytest.raises(ValueError, match="key function"):
        paginate(PaginationMode.alphabetic(2), 0, ["a", "b"], _collect)


def test_concatenated_chunks_preserve_order() -> None:
    items = [f"item{index:02d}" for index in range(23)]

    pages = paginate(PaginationMode.absolute(5), 0, items, _collect)

    assert [item for _, chunk in pages for item in chunk] == items
    assert len(pages) == 5


def test_pagination_info_bounds() -> None:
    info = PaginationInfo(2, 3)

    assert info.is_paginated
    assert info.as_dict() == {"current_page": 2, "total_pages": 3}
    assert not PaginationInfo(1, 1).is_paginated
    with pytest.raises(ValueError, match="outside"):
        PaginationInfo(4, 3)
