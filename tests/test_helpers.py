"""Tests for the callables exposed to Jinja templates."""

from __future__ import annotations

import typing as typ

import pytest

from pdxdoc.helpers import PaginationLinks, TemplateHelpers
from pdxdoc.page import Breadcrumbs
from pdxdoc.pagination import PaginationInfo

if typ.TYPE_CHECKING:
    from pdxdoc.mapper import SiteMapper, SiteProfile


@pytest.mark.parametrize(
    ("info", "expected"),
    [
        (None, None),
        ({"current_page": 1, "total_pages": 1}, None),
        (
            PaginationInfo(5, 10),
            PaginationLinks(5, 10, [3, 4], [6, 7], first_page=1, last_page=10),
        ),
        (
            {"current_page": 1, "total_pages": 3},
            PaginationLinks(1, 3, [], [2], first_page=None, last_page=3),
        ),
        (
            PaginationInfo(3, 3),
            PaginationLinks(3, 3, [2], [], first_page=1, last_page=None),
        ),
    ],
)
def test_pagination_links(
    info: PaginationInfo | dict[str, int] | None, expected: PaginationLinks | None
) -> None:
    assert TemplateHelpers.pagination(info) == expected


def test_columns_fill_top_to_bottom() -> None:
    assert TemplateHelpers.columns(list(range(7)), 3) == [[0, 1, 2], [3, 4, 5], [6]]
    assert TemplateHelpers.columns([], 3) == []


def test_breadcrumbs_resolve_relative_to_page(
    sealed_mapper: tuple[SiteMapper, SiteProfile],
) -> None:
    mapper, site_profile = sealed_mapper
    page = next(
        page for page in site_profile.pages if page.info().path == "modifiers/tax_mask_p2"
    )
    crumbs = Breadcrumbs.from_page(page, site_profile.pages_by_id(), "Victoria 3")
    helpers = TemplateHelpers(mapper, "modifiers/tax_mask_p2.html", page_id=page.id)

    resolved = helpers.breadcrumbs(crumbs)

    assert [(crumb.title, crumb.url) for crumb in resolved] == [
        ("Victoria 3", "../index.html"),
        ("Modifiers", "index.html"),
        ("tax_mask", "tax_mask.html"),
    ]
    assert resolved[0].is_first
    assert resolved[-1].is_last
    assert resolved[-1].is_paged
    assert (resolved[-1].current_page, resolved[-1].total_pages) == (2, 2)
    assert helpers.page_url(1) == "tax_mask.html"


def test_asset_and_home_links(sealed_mapper: tuple[SiteMapper, SiteProfile]) -> None:
    mapper, _ = sealed_mapper
    helpers = TemplateHelpers(mapper, "scopes/country.html", asset_version="abc123")

    assert helpers.asset("style.css") == "../assets/style.css?abc123"
    assert helpers.home() == "../index.html"
    assert helpers.link("effects.html") == "../effects.html"


def test_page_url_needs_a_page(sealed_mapper: tuple[SiteMapper, SiteProfile]) -> None:
    mapper, _ = sealed_mapper

    with pytest.raises(ValueError, match="only available while rendering"):
        TemplateHelpers(mapper, "index.html").page_url(2)


def test_globals_expose_callables(sealed_mapper: tuple[SiteMapper, SiteProfile]) -> None:
    mapper, _ = sealed_mapper

    names = TemplateHelpers(mapper, "index.html").as_globals()

    assert set(names) == {
        "link",
        "asset",
        "home",
        "page_url",
        "pagination",
        "breadcrumbs",
        "columns",
    }
