"""Split listings into pages according to the configured pagination mode.

Example
-------
>>> from pdxdoc.config import PaginationMode
>>> from pdxdoc.pagination import paginate
>>> paginate(PaginationMode.absolute(2), 0, [1, 2, 3], lambda total, chunk: (total, chunk))
[(2, [1, 2]), (2, [3])]
"""

from __future__ import annotations

import dataclasses as dc
import itertools
import typing as typ

from .config.models import PaginationKind, PaginationMode

T = typ.TypeVar("T")
P = typ.TypeVar("P")


@dc.dataclass(frozen=True, slots=True)
class PaginationInfo:
    """Position of a page within its pagination group (1-based)."""

    current_page: int
    total_pages: int

    def __post_init__(self) -> None:
        if not 1 <= self.current_page <= self.total_pages:
            msg = f"Page {self.current_page} is outside 1..{self.total_pages}."
            raise ValueError(msg)

    @property
    def is_paginated(self) -> bool:
        return self.total_pages > 1

    def as_dict(self) -> dict[str, int]:
        return {"current_page": self.current_page, "total_pages": self.total_pages}


def _split(items: list[T], limit: int) -> list[list[T]]:
    if limit < 1:
        return [items]
    return [items[index : index + limit] for index in range(0, len(items), limit)]


def _chunk(
    mode: PaginationMode,
    minimum_threshold: int,
    items: list[T],
    key: typ.Callable[[T], str] | None,
) -> list[list[T]]:
    if not items:
        return [[]]
    if len(items) <= minimum_threshold:
        return [items]

    match mode.kind:
        case PaginationKind.NONE:
            return [items]
        case PaginationKind.ABSOLUTE:
            return _split(items, mode.limit)
        case PaginationKind.ALPHABETIC:
            if key is None:
                msg = "Alphabetic pagination needs a key function."
                raise ValueError(msg)
            item_key = key

            def letter(item: T) -> str:
                return item_key(item)[:1].upper()

            # stable, so each letter keeps the display order of its items
            chunks: list[list[T]] = []
            for _, group in itertools.groupby(sorted(items, key=letter), key=letter):
                chunks.extend(_split(list(group), mode.limit))
            return chunks
        case _:
            msg = f"Unsupported pagination kind: {mode.kind!r}"
            raise ValueError(msg)


def paginate(
    mode: PaginationMode,
    minimum_threshold: int,
    items: typ.Sequence[T],
    make_page: typ.Callable[[int, list[T]], P],
    *,
    key: typ.Callable[[T], str] | None = None,
) -> list[P]:
    """Split ``items`` into chunks and build one page per chunk.

    Parameters
    ----------
    mode : PaginationMode
        Configured strategy. ``absolute`` chunks by ``limit``; ``alphabetic``
        chunks by the case-insensitive leading letter of ``key(item)`` and splits
        each letter by ``limit``; letters are ordered, items within a letter
        keep their input order.
    minimum_threshold : int
        Listings with at most this many items always produce a single page.
    items : Sequence
        Items to distribute, in display order.
    make_page : Callable[[int, list], P]
        Called once per chunk, in order, with the total page count and the
        chunk.
    key : Callable, optional
        Sort key used by alphabetic pagination.

    Returns
    -------
    list
        The pages built by ``make_page``; never empty, since an empty listing
        still yields one empty page.
    """
    chunks = _chunk(mode, minimum_threshold, list(items), key)
    total = len(chunks)
    return [make_page(total, chunk) for chunk in chunks]


__all__ = ["PaginationInfo", "paginate"]
