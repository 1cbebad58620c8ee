"""Helpers exposed to Jinja templates while a page renders.

Templates never resolve entry links themselves (page data already carries
resolved URLs); these helpers cover pagination neighbours, breadcrumbs,
asset links and column layout, all relative to the page being rendered.
"""

from __future__ import annotations

import dataclasses as dc
import math
import typing as typ

from ._constants import INDEX_FILENAME
from .page import PagedCrumb, SingleCrumb

if typ.TYPE_CHECKING:
    from .mapper import SiteMapper
    from .page import Breadcrumbs
    from .pagination import PaginationInfo

T = typ.TypeVar("T")


@dc.dataclass(frozen=True, slots=True)
class PaginationLinks:
    """Page numbers to show around the current page of a listing."""

    current_page: int
    total_pages: int
    pages_before: list[int]
    pages_after: list[int]
    first_page: int | None = None
    last_page: int | None = None


@dc.dataclass(frozen=True, slots=True)
class ResolvedCrumb:
    """A breadcrumb with its URL resolved for the current page."""

    title: str
    url: str
    is_first: bool
    is_last: bool
    is_paged: bool = False
    current_page: int | None = None
    total_pages: int | None = None


class TemplateHelpers:
    """Template callables bound to one rendered file."""

    def __init__(
        self,
        mapper: SiteMapper,
        from_path: str,
        *,
        page_id: int | None = None,
        profile_id: int | None = None,
        asset_version: str | None = None,
    ) -> None:
        self.mapper = mapper
        self.from_path = from_path
        self.page_id = page_id
        self.profile_id = profile_id
        self.asset_version = asset_version

    def link(self, path: str) -> str:
        """Return the URL of a site-root ``path`` from the current file."""
        return self.mapper.link(self.from_path, path)

    def asset(self, name: str) -> str:
        """Return the URL of asset ``name``, with a cache-busting version."""
        url = self.mapper.asset_url(self.from_path, name)
        return f"{url}?{self.asset_version}" if self.asset_version else url

    def home(self, prefix: str = "") -> str:
        return self.link(f"{prefix}{INDEX_FILENAME}")

    def page_url(self, page_number: int) -> str:
        """Return the URL of sibling ``page_number`` of the current page."""
        if self.page_id is None:
            msg = "page_url() is only available while rendering a page."
            raise ValueError(msg)
        return self.mapper.url_for_page_number(
            self.page_id, page_number, profile_id=self.profile_id
        )

    @staticmethod
    def pagination(
        info: PaginationInfo | typ.Mapping[str, int] | None, num: int = 2
    ) -> PaginationLinks | None:
        """Return neighbour page numbers, or ``None`` for single-page listings.

        ``pages_before`` holds up to ``num`` pages between the first page and
        the current one; ``pages_after`` up to ``num`` pages between the
        current page and the last. ``first_page``/``last_page`` are only set
        when they differ from the current page.
        """
        if info is None:
            return None
        if isinstance(info, dict):
            current, total = info["current_page"], info["total_pages"]
        else:
            current, total = info.current_page, info.total_pages
        if total <= 1:
            return None

        before = list(range(2, current))[-num:] if num > 0 else []
        after = list(range(current + 1, total))[:num]
        return PaginationLinks(
            current_page=current,
            total_pages=total,
            pages_before=before,
            pages_after=after,
            first_page=1 if current != 1 else None,
            last_page=total if current != total else None,
        )

    def breadcrumbs(self, crumbs: Breadcrumbs) -> list[ResolvedCrumb]:
        """Resolve crumb URLs relative to the current file."""
        resolved: list[ResolvedCrumb] = []
        last = len(crumbs) - 1
        for index, crumb in enumerate(crumbs):
            match crumb:
                case SingleCrumb(title=title, absolute_url=url):
                    resolved.append(
                        ResolvedCrumb(title, self.link(url), index == 0, index == last)
                    )
                case PagedCrumb(title=title, root_url=url, page=page):
                    resolved.append(
                        ResolvedCrumb(
                            title,
                            self.link(url),
                            index == 0,
                            index == last,
                            is_paged=True,
                            current_page=page.current_page,
                            total_pages=page.total_pages,
                        )
                    )
        return resolved

    @staticmethod
    def columns(items: typ.Sequence[T], count: int) -> list[list[T]]:
        """Split ``items`` into at most ``count`` columns, filled top to bottom."""
        if not items or count < 1:
            return []
        rows = math.ceil(len(items) / count)
        return [list(items[index : index + rows]) for index in range(0, len(items), rows)]

    def as_globals(self) -> dict[str, typ.Any]:
        """Return the callables passed to ``template.render``."""
        return {
            "link": self.link,
            "asset": self.asset,
            "home": self.home,
            "page_url": self.page_url,
            "pagination": self.pagination,
            "breadcrumbs": self.breadcrumbs,
            "columns": self.columns,
        }


__all__ = ["PaginationLinks", "ResolvedCrumb", "TemplateHelpers"]
