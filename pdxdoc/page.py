"""Renderable pages, the builders that create them, and breadcrumb chains.

Pages keep a reference to their :class:`~pdxdoc.dossier.Dossier` plus the ids
they display; nothing is rendered until :meth:`Page.data` is called with a
:class:`PageContext`, which by then wraps a sealed site mapper.

Page paths are extension-less and relative to the profile root, for example
``effects``, ``effects_p2`` or ``scopes/country``.
"""

from __future__ import annotations

import dataclasses as dc
import itertools
import typing as typ

from ._constants import (
    MASK_GROUP_TEMPLATE,
    MASK_PAGINATION_FLOOR,
    MODIFIERS_INDEX_KEY,
    PAGE_EXTENSION,
    SCOPES_INDEX_KEY,
)
from .docstring import DocString
from .entry import EmptyDocEntry, Modifiers, ScopeDocEntry, ScriptDocEntry
from .entry import mask_entry_id, scope_entry_id
from .ids import stable_hash
from .pagination import PaginationInfo, paginate
from .theme import Template

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .dossier import Dossier
    from .entry import DocCategory, DocEntry
    from .mapper import SiteMapper


@dc.dataclass(slots=True)
class PageInfo:
    """Presentation metadata of a page."""

    title: str
    short_title: str
    template: Template
    path: str
    pagination: PaginationInfo | None = None


class Page(typ.Protocol):
    """Interface implemented by every renderable page."""

    @property
    def id(self) -> int: ...

    @property
    def group_id(self) -> int:
        """Id shared by every page of one paginated listing."""
        ...

    @property
    def parent_id(self) -> int | None: ...

    def info(self) -> PageInfo: ...

    def entries(self) -> list[int]:
        """Ids of the entries this page owns (links to them land here)."""
        ...

    def anchors(self) -> list[tuple[int, str]]:
        """``(entry id, anchor)`` pairs reachable with a URL fragment."""
        ...

    def page_url(self, page: int) -> str: ...

    def data(self, context: PageContext) -> dict[str, typ.Any]: ...


class PageBuilder(typ.Protocol):
    """Object that contributes synthesized entries and their pages."""

    def build_entries(self, dossier: Dossier, config: SiteConfig) -> list[DocEntry]: ...

    def build_pages(self, dossier: Dossier, config: SiteConfig) -> list[Page]: ...


class PageContext:
    """Link resolution available to pages while they render."""

    def __init__(self, mapper: SiteMapper, profile_id: int | None = None) -> None:
        self.mapper = mapper
        self.profile_id = profile_id

    def url_for_entry(self, from_id: int, to_id: int) -> str:
        """Return the URL from the page owning ``from_id`` to ``to_id``."""
        return self.mapper.url_for_entry(from_id, to_id, profile_id=self.profile_id)

    def page_to_entry_url(self, page_id: int, entry_id: int) -> str:
        return self.mapper.page_to_entry_url(page_id, entry_id, profile_id=self.profile_id)


def _paged_path(name: str, page: int) -> str:
    return name if page == 1 else f"{name}_p{page}"


def _html(doc: DocString | None) -> str | None:
    return None if doc is None else doc.to_html()


# -- category listings -----------------------------------------------------


class CategoryListPage:
    """One page of a category listing with every entry's details."""

    def __init__(
        self,
        dossier: Dossier,
        category: DocCategory,
        entry_ids: list[int],
        pagination: PaginationInfo,
    ) -> None:
        self.dossier = dossier
        self.category = category
        self.entry_ids = entry_ids
        self.pagination = pagination

    @classmethod
    def paginated(cls, dossier: Dossier, category: DocCategory) -> list[CategoryListPage]:
        """Split the category's (already sorted) entries into pages."""
        counter = itertools.count(1)
        return paginate(
            dossier.config.pagination,
            0,
            category.entries,
            lambda total, chunk: cls(
                dossier, category, chunk, PaginationInfo(next(counter), total)
            ),
            key=lambda entry_id: dossier.entries[entry_id].name,
        )

    @property
    def id(self) -> int:
        return self.category.id ^ stable_hash("page", self.pagination.current_page)

    @property
    def group_id(self) -> int:
        return stable_hash("category_group", self.category.name)

    @property
    def parent_id(self) -> int | None:
        return None

    def info(self) -> PageInfo:
        return PageInfo(
            title=self.category.display_name,
            short_title=self.category.display_name,
            template=Template.CATEGORY_LIST,
            path=self.page_url(self.pagination.current_page),
            pagination=self.pagination,
        )

    def entries(self) -> list[int]:
        return list(self.entry_ids)

    def anchors(self) -> list[tuple[int, str]]:
        # every page of the listing advertises the whole category
        return [
            (entry_id, self.dossier.entries[entry_id].name)
            for entry_id in self.category.entries
        ]

    def page_url(self, page: int) -> str:
        return _paged_path(self.category.name, page)

    def data(self, context: PageContext) -> dict[str, typ.Any]:
        entries = []
        for entry_id in self.entry_ids:
            entry = self.dossier.entries[entry_id]
            entries.append(
                {
                    "anchor": entry.name,
                    "name": entry.name,
                    "body": _html(entry.body()),
                    "properties": [
                        {"name": name, "value": value.to_html()}
                        for name, value in entry.properties(context, self.dossier)
                    ],
                    "cross_refs": self.dossier.collate_references(
                        context, self.id, entry_id
                    ),
                }
            )
        return {"entries": entries, "pagination": self.pagination.as_dict()}


# -- synthesized listings --------------------------------------------------


class IndexPage:
    """Unpaginated list of links to every item of a synthesized kind."""

    def __init__(
        self,
        dossier: Dossier,
        key: str,
        title: str,
        path: str,
        entry_ids: list[int],
    ) -> None:
        self.dossier = dossier
        self.key = key
        self.title = title
        self.path = path
        self.entry_ids = entry_ids

    @property
    def id(self) -> int:
        return stable_hash(self.key)

    @property
    def group_id(self) -> int:
        return self.id

    @property
    def parent_id(self) -> int | None:
        return None

    def info(self) -> PageInfo:
        return PageInfo(self.title, self.title, Template.LIST_INDEX, self.path)

    def entries(self) -> list[int]:
        return []

    def anchors(self) -> list[tuple[int, str]]:
        return []

    def page_url(self, page: int) -> str:  # noqa: ARG002
        return self.path

    def data(self, context: PageContext) -> dict[str, typ.Any]:
        items = []
        for entry_id in self.entry_ids:
            entry = self.dossier.entries[entry_id]
            url = context.page_to_entry_url(self.id, entry_id)
            items.append({"name": entry.name, "url": url})
        return {"items": items}


class ScopePage:
    """Detail page of one scope listing everything that references it."""

    def __init__(self, dossier: Dossier, page_id: int, entry_id: int, name: str) -> None:
        self.dossier = dossier
        self._id = page_id
        self.entry_id = entry_id
        self.name = name

    @property
    def id(self) -> int:
        return self._id

    @property
    def group_id(self) -> int:
        return self._id

    @property
    def parent_id(self) -> int | None:
        return stable_hash(SCOPES_INDEX_KEY)

    def info(self) -> PageInfo:
        return PageInfo(
            title=f"Scope: {self.name}",
            short_title=self.name,
            template=Template.SCOPE,
            path=self.page_url(1),
        )

    def entries(self) -> list[int]:
        return [self.entry_id]

    def anchors(self) -> list[tuple[int, str]]:
        return []

    def page_url(self, page: int) -> str:  # noqa: ARG002
        return f"scopes/{self.name}"

    def data(self, context: PageContext) -> dict[str, typ.Any]:
        entry = self.dossier.entries[self.entry_id]
        return {
            "display_name": getattr(entry, "display_name", entry.name),
            "cross_refs": self.dossier.collate_references(context, self.id, self.entry_id),
        }


class MaskPage:
    """One page of the modifiers that use a mask."""

    def __init__(
        self,
        dossier: Dossier,
        base_id: int,
        entry_id: int,
        name: str,
        modifiers: list[int],
        pagination: PaginationInfo,
    ) -> None:
        self.dossier = dossier
        self.base_id = base_id
        self.entry_id = entry_id
        self.name = name
        self.modifiers = modifiers
        self.pagination = pagination

    @property
    def id(self) -> int:
        return self.base_id ^ stable_hash("page", self.pagination.current_page)

    @property
    def group_id(self) -> int:
        return stable_hash(MASK_GROUP_TEMPLATE.format(name=self.name))

    @property
    def parent_id(self) -> int | None:
        return stable_hash(MODIFIERS_INDEX_KEY)

    def info(self) -> PageInfo:
        return PageInfo(
            title=f"Modifiers for Mask: {self.name}",
            short_title=self.name,
            template=Template.MASK,
            path=self.page_url(self.pagination.current_page),
            pagination=self.pagination,
        )

    def entries(self) -> list[int]:
        owned = list(self.modifiers)
        if self.pagination.current_page == 1:
            owned.append(self.entry_id)
        return owned

    def anchors(self) -> list[tuple[int, str]]:
        return [
            (modifier_id, self.dossier.entries[modifier_id].name)
            for modifier_id in self.modifiers
        ]

    def page_url(self, page: int) -> str:
        return _paged_path(f"modifiers/{self.name}", page)

    def data(self, context: PageContext) -> dict[str, typ.Any]:  # noqa: ARG002
        modifiers = []
        for modifier_id in self.modifiers:
            entry = self.dossier.entries[modifier_id]
            display_name = description = None
            if isinstance(entry, ScriptDocEntry) and isinstance(entry.content, Modifiers):
                display_name = _html(entry.content.display_name)
                description = _html(entry.content.description)
            modifiers.append(
                {
                    "name": entry.name,
                    "anchor": entry.name,
                    "display_name": display_name,
                    "description": description,
                }
            )
        return {"modifiers": modifiers, "pagination": self.pagination.as_dict()}


class ScopeList:
    """Synthesized scope entries with one page each."""

    registry = "SCOPES"
    group_name = "Scopes"

    @staticmethod
    def entry_id_for_name(name: str) -> int:
        return scope_entry_id(name)

    @staticmethod
    def make_entry(name: str) -> DocEntry:
        return ScopeDocEntry(name)

    @staticmethod
    def new(dossier: Dossier, page_id: int, entry_id: int, name: str) -> list[Page]:
        return [ScopePage(dossier, page_id, entry_id, name)]

    @staticmethod
    def index_page(dossier: Dossier, entry_ids: list[int]) -> Page:
        return IndexPage(dossier, SCOPES_INDEX_KEY, "Scopes", "scopes/index", entry_ids)


class MaskList:
    """Mask markers whose pages list the modifiers using them."""

    registry = "MASKS"
    group_name = "Masks"

    @staticmethod
    def entry_id_for_name(name: str) -> int:
        return mask_entry_id(name)

    @classmethod
    def make_entry(cls, name: str) -> DocEntry:
        return EmptyDocEntry(mask_entry_id(name), name, cls.group_name)

    @staticmethod
    def new(dossier: Dossier, page_id: int, entry_id: int, name: str) -> list[Page]:
        modifiers = dossier.entries_by_name(dossier.find_references_to(entry_id))
        counter = itertools.count(1)
        return paginate(
            dossier.config.pagination,
            MASK_PAGINATION_FLOOR,
            modifiers,
            lambda total, chunk: MaskPage(
                dossier, page_id, entry_id, name, chunk, PaginationInfo(next(counter), total)
            ),
            key=lambda modifier_id: dossier.entries[modifier_id].name,
        )

    @staticmethod
    def index_page(dossier: Dossier, entry_ids: list[int]) -> Page:
        return IndexPage(
            dossier, MODIFIERS_INDEX_KEY, "Modifiers", "modifiers/index", entry_ids
        )


class ListKind(typ.Protocol):
    """Strategy describing one kind of synthesized list."""

    registry: str
    group_name: str

    def entry_id_for_name(self, name: str) -> int: ...

    def make_entry(self, name: str) -> DocEntry: ...

    def new(self, dossier: Dossier, page_id: int, entry_id: int, name: str) -> list[Page]: ...

    def index_page(self, dossier: Dossier, entry_ids: list[int]) -> Page: ...


class GenericListPageBuilder:
    """Builds one entry and detail page per string-table item, plus an index."""

    def __init__(self, kind: type[ScopeList] | type[MaskList] | ListKind, items: list[int]) -> None:
        self.kind = kind
        self.items = items

    def _names(self, dossier: Dossier) -> list[str]:
        return sorted(dict.fromkeys(dossier.resolve_str(item) for item in self.items))

    def build_entries(self, dossier: Dossier, config: SiteConfig) -> list[DocEntry]:  # noqa: ARG002
        return [self.kind.make_entry(name) for name in self._names(dossier)]

    def build_pages(self, dossier: Dossier, config: SiteConfig) -> list[Page]:  # noqa: ARG002
        named = [(self.kind.entry_id_for_name(name), name) for name in self._names(dossier)]
        pages: list[Page] = []
        for entry_id, name in named:
            page_id = stable_hash(f"{self.kind.registry}_{entry_id}")
            pages.extend(self.kind.new(dossier, page_id, entry_id, name))
        pages.append(self.kind.index_page(dossier, [entry_id for entry_id, _ in named]))
        return pages


# -- breadcrumbs -----------------------------------------------------------


@dc.dataclass(frozen=True, slots=True)
class SingleCrumb:
    title: str
    absolute_url: str


@dc.dataclass(frozen=True, slots=True)
class PagedCrumb:
    title: str
    root_url: str
    page: PaginationInfo


Breadcrumb: typ.TypeAlias = "SingleCrumb | PagedCrumb"


def _with_extension(path: str) -> str:
    return f"{path}.{PAGE_EXTENSION}"


@dc.dataclass(slots=True)
class Breadcrumbs:
    """Trail from the profile root to a page; URLs are site-root paths."""

    crumbs: list[Breadcrumb] = dc.field(default_factory=list)

    def __len__(self) -> int:
        return len(self.crumbs)

    def __iter__(self) -> typ.Iterator[Breadcrumb]:
        return iter(self.crumbs)

    @classmethod
    def from_page(
        cls,
        page: Page,
        pages_by_id: typ.Mapping[int, Page],
        profile_title: str,
        prefix: str = "",
    ) -> Breadcrumbs:
        """Build the trail for ``page`` by walking its parent ids.

        Parameters
        ----------
        page : Page
            Page the trail ends at.
        pages_by_id : Mapping[int, Page]
            Every page of the profile, used to resolve parent ids.
        profile_title : str
            Title of the root crumb, which links to the profile index.
        prefix : str, optional
            Profile subfolder (``"vic3/"``) prepended to every URL.

        Raises
        ------
        KeyError
            If a parent id does not belong to any page of the profile.
        """
        chain: list[Page] = []
        seen: set[int] = set()
        current: Page | None = page
        while current is not None and current.id not in seen:
            seen.add(current.id)
            chain.append(current)
            parent_id = current.parent_id
            current = pages_by_id[parent_id] if parent_id is not None else None

        crumbs: list[Breadcrumb] = [SingleCrumb(profile_title, f"{prefix}index.html")]
        for ancestor in reversed(chain):
            info = ancestor.info()
            if info.pagination is not None and info.pagination.is_paginated:
                crumbs.append(
                    PagedCrumb(
                        info.short_title,
                        prefix + _with_extension(ancestor.page_url(1)),
                        info.pagination,
                    )
                )
            else:
                crumbs.append(
                    SingleCrumb(info.short_title, prefix + _with_extension(info.path))
                )
        return cls(crumbs)


__all__ = [
    "Breadcrumb",
    "Breadcrumbs",
    "CategoryListPage",
    "GenericListPageBuilder",
    "IndexPage",
    "ListKind",
    "MaskList",
    "MaskPage",
    "Page",
    "PageBuilder",
    "PageContext",
    "PageInfo",
    "PagedCrumb",
    "ScopeList",
    "ScopePage",
    "SingleCrumb",
]
