"""Assign output paths to pages and resolve links between them.

The :class:`SiteMapper` is filled one profile at a time by
:meth:`SiteMapper.record_profile`, then sealed before any page renders. After
sealing it is only read: every lookup is a pure function of the recorded
tables, so link resolution does not depend on render order.

URL paths use forward slashes and carry the ``.html`` extension; the
profile subfolder is included when the site hosts several profiles.

Example
-------
>>> from pdxdoc.mapper import SiteMapper
>>> SiteMapper.url_from("effects.html", "scopes/country.html")
'scopes/country.html'
>>> SiteMapper.url_from("scopes/country.html", "effects_p2.html")
'../effects_p2.html'
"""

from __future__ import annotations

import dataclasses as dc
import posixpath
import typing as typ
from pathlib import Path

from loguru import logger

from ._constants import ASSETS_DIR, PAGE_EXTENSION
from .errors import PageOwnershipError, SiteMapperLookupError, SiteMapperSealedError
from .ids import stable_hash

if typ.TYPE_CHECKING:
    from .config import ProfileConfig, SiteConfig
    from .dossier import Dossier
    from .page import Page
    from .pagination import PaginationInfo


@dc.dataclass(slots=True)
class SiteProfile:
    """A configured profile with its dossier and the pages built from it."""

    profile: ProfileConfig
    dossier: Dossier
    pages: list[Page]

    @property
    def id(self) -> int:
        return stable_hash("profile", self.profile.name)

    def pages_by_id(self) -> dict[int, Page]:
        return {page.id: page for page in self.pages}


@dc.dataclass(frozen=True, slots=True)
class SiteMapperPath:
    """Where a page is written and the URL path it is served from."""

    disk: Path
    path: str


def _with_extension(path: str) -> str:
    return f"{path}.{PAGE_EXTENSION}"


def _canonical_path(page: Page) -> str:
    """Return the page path, or page 1's path for paginated groups."""
    info = page.info()
    if info.pagination is not None and info.pagination.is_paginated:
        return page.page_url(1)
    return info.path


@dc.dataclass(slots=True)
class _ProfileIndex:
    """Lookup tables of one recorded profile."""

    profile: ProfileConfig
    prefix: str
    page_paths: dict[int, SiteMapperPath] = dc.field(default_factory=dict)
    page_groups: dict[int, int] = dc.field(default_factory=dict)
    groups: dict[int, list[tuple[int, int]]] = dc.field(default_factory=dict)
    url_paths: dict[int, str] = dc.field(default_factory=dict)
    entry_pages: dict[int, int] = dc.field(default_factory=dict)
    entry_anchors: dict[int, str] = dc.field(default_factory=dict)


class SiteMapper:
    """Index of page paths, pagination groups and entry ownership.

    Tables are kept per profile, since two profiles documenting the same game
    produce the same entry and page ids. Lookups take an optional
    ``profile_id``; it may be omitted while a single profile is recorded.
    """

    def __init__(self, config: SiteConfig) -> None:
        self.config = config
        self._indexes: dict[int, _ProfileIndex] = {}
        self._sealed = False

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def profiles(self) -> dict[int, ProfileConfig]:
        return {profile_id: index.profile for profile_id, index in self._indexes.items()}

    def profile_prefix(self, profile_name: str) -> str:
        """Return the URL prefix (``"name/"`` or ``""``) of a profile's pages."""
        return f"{profile_name}/" if self.config.uses_profile_subfolders else ""

    def record_profile(self, site_profile: SiteProfile) -> None:
        """Index every page of ``site_profile``.

        Raises
        ------
        PageOwnershipError
            If two pages of the profile claim the same entry.
        SiteMapperSealedError
            If the mapper has already been sealed for rendering.
        """
        if self._sealed:
            msg = f"Cannot record profile '{site_profile.profile.name}' after sealing."
            raise SiteMapperSealedError(msg)

        prefix = self.profile_prefix(site_profile.profile.name)
        index = _ProfileIndex(site_profile.profile, prefix)
        for page in site_profile.pages:
            info = page.info()
            page_id = page.id
            url = _with_extension(prefix + info.path)
            index.page_paths[page_id] = SiteMapperPath(self.config.output_dir / url, url)
            index.url_paths[page_id] = url

            if info.pagination is not None:
                group_id = page.group_id
                index.page_groups[page_id] = group_id
                index.groups.setdefault(group_id, []).append(
                    (info.pagination.current_page, page_id)
                )

            for entry_id in page.entries():
                previous = index.entry_pages.get(entry_id)
                if previous is not None and previous != page_id:
                    msg = (
                        f"Entry {entry_id} claimed by pages {previous} and {page_id} "
                        f"in profile '{site_profile.profile.name}'."
                    )
                    raise PageOwnershipError(msg)
                index.entry_pages[entry_id] = page_id
            for entry_id, anchor in page.anchors():
                index.entry_anchors[entry_id] = anchor

        for members in index.groups.values():
            members.sort()
        self._indexes[site_profile.id] = index
        logger.debug(
            "Recorded profile {} with {} pages", site_profile.profile.name, len(index.page_paths)
        )

    def seal(self) -> None:
        """Freeze the tables; later ``record_profile`` calls fail."""
        self._sealed = True

    # -- lookups -------------------------------------------------------

    def _index(self, profile_id: int | None) -> _ProfileIndex:
        if profile_id is None:
            if len(self._indexes) == 1:
                return next(iter(self._indexes.values()))
            msg = f"A profile id is required when {len(self._indexes)} profiles are recorded."
            raise SiteMapperLookupError(msg)
        try:
            return self._indexes[profile_id]
        except KeyError as exc:
            msg = f"Profile {profile_id} has not been recorded."
            raise SiteMapperLookupError(msg) from exc

    def path_for_page(self, page_id: int, *, profile_id: int | None = None) -> SiteMapperPath:
        try:
            return self._index(profile_id).page_paths[page_id]
        except KeyError as exc:
            msg = f"No path recorded for page {page_id}."
            raise SiteMapperLookupError(msg) from exc

    def page_for_entry(self, entry_id: int, *, profile_id: int | None = None) -> int:
        try:
            return self._index(profile_id).entry_pages[entry_id]
        except KeyError as exc:
            msg = f"Entry {entry_id} is not owned by any page."
            raise SiteMapperLookupError(msg) from exc

    def page_path_mapping(self, *, profile_id: int | None = None) -> typ.Mapping[int, str]:
        """Return page id to URL path for every page of a profile."""
        return self._index(profile_id).url_paths

    # -- urls ----------------------------------------------------------

    def link(self, from_path: str, to_path: str) -> str:
        """Return the URL of site-root ``to_path`` as written from ``from_path``."""
        if self.config.url_scheme.is_relative:
            return self.url_from(from_path, to_path)
        return f"{self.config.url_scheme.base_url}{to_path}"

    def _entry_url(self, from_path: str, to_id: int, profile_id: int | None) -> str:
        index = self._index(profile_id)
        to_path = self.path_for_page(
            self.page_for_entry(to_id, profile_id=profile_id), profile_id=profile_id
        ).path
        url = self.link(from_path, to_path)
        anchor = index.entry_anchors.get(to_id)
        return f"{url}#{anchor}" if anchor is not None else url

    def url_for_entry(self, from_id: int, to_id: int, *, profile_id: int | None = None) -> str:
        """Return the URL from the page owning ``from_id`` to entry ``to_id``.

        Under the relative scheme this is the directory diff between the two
        pages plus the destination file name; under the absolute scheme it is
        the base URL plus the destination path. A registered anchor is
        appended as ``#anchor``.

        Raises
        ------
        SiteMapperLookupError
            If either entry is not owned by a recorded page.
        """
        from_page = self.page_for_entry(from_id, profile_id=profile_id)
        from_path = self.path_for_page(from_page, profile_id=profile_id).path
        return self._entry_url(from_path, to_id, profile_id)

    def page_to_entry_url(
        self, from_page: int, to_entry: int, *, profile_id: int | None = None
    ) -> str:
        """Return the URL from page ``from_page`` to entry ``to_entry``."""
        from_path = self.path_for_page(from_page, profile_id=profile_id).path
        return self._entry_url(from_path, to_entry, profile_id)

    def url_for_page_number(
        self, page_id: int, page_number: int, *, profile_id: int | None = None
    ) -> str:
        """Return the URL of sibling ``page_number`` in ``page_id``'s pagination group.

        Raises
        ------
        SiteMapperLookupError
            If the page is not paginated or the group has no such page.
        """
        index = self._index(profile_id)
        group_id = index.page_groups.get(page_id)
        if group_id is None:
            msg = f"Page {page_id} is not part of a pagination group."
            raise SiteMapperLookupError(msg)
        mapping = self.page_path_mapping(profile_id=profile_id)
        for number, sibling_id in index.groups.get(group_id, []):
            if number == page_number:
                return self._link_from_page(mapping, page_id, mapping[sibling_id])
        msg = f"Page {page_number} not found in group {group_id}."
        raise SiteMapperLookupError(msg)

    def _link_from_page(self, mapping: typ.Mapping[int, str], from_id: int, to_path: str) -> str:
        relative = self.url_with_mapping(mapping, from_id, to_path)
        if self.config.url_scheme.is_relative:
            return relative
        return f"{self.config.url_scheme.base_url}{to_path}"

    @staticmethod
    def url_with_mapping(mapping: typ.Mapping[int, str], from_id: int, path: str) -> str:
        """Return the relative URL from ``mapping[from_id]`` to ``path``."""
        try:
            from_path = mapping[from_id]
        except KeyError as exc:
            msg = f"No path recorded for page {from_id}."
            raise SiteMapperLookupError(msg) from exc
        return SiteMapper.url_from(from_path, path)

    def asset_url(self, from_path: str, name: str) -> str:
        """Return the URL of asset ``name`` from the file at ``from_path``."""
        return self.link(from_path, f"{ASSETS_DIR}/{name}")

    def asset_path(self, name: str) -> Path:
        return self.config.output_dir / ASSETS_DIR / name

    @staticmethod
    def url_from(source: str, dest: str) -> str:
        """Return ``dest`` relative to the directory holding ``source``.

        Both arguments are site-root URL paths using forward slashes.
        """
        source_dir = posixpath.dirname(source) or "."
        dest_dir = posixpath.dirname(dest) or "."
        filename = posixpath.basename(dest)
        diff = posixpath.relpath(dest_dir, source_dir)
        if diff == ".":
            return filename
        return posixpath.join(diff, filename) if filename else diff


@dc.dataclass(slots=True)
class SiteMap:
    """Tree of pages keyed by path segment, rooted at the profile index."""

    title: str
    key: str = ""
    page_ids: list[int] = dc.field(default_factory=list)
    absolute_url: str = ""
    children: dict[str, SiteMap] = dc.field(default_factory=dict)
    page: PaginationInfo | None = None

    @classmethod
    def from_pages(
        cls, pages: typ.Iterable[Page], title: str, prefix: str = ""
    ) -> SiteMap:
        """Build the tree from every page's path.

        Parameters
        ----------
        pages : Iterable[Page]
            Pages of one profile.
        title : str
            Title of the root node (the profile title).
        prefix : str, optional
            Profile subfolder prepended to every canonical URL.
        """
        root = cls(title=title, absolute_url=f"{prefix}index.html")
        for page in pages:
            root._insert(_with_extension(_canonical_path(page)).split("/"), page, prefix)
        return root

    def _insert(self, segments: list[str], page: Page, prefix: str) -> None:
        node = self
        for segment in segments:
            node._own(page)
            if segment.startswith("index."):
                # index pages describe the directory node that contains them
                continue
            child = node.children.get(segment)
            if child is None:
                child = SiteMap(title="", key=segment)
                node.children[segment] = child
            node = child
        node._apply(page, prefix)

    def _own(self, page: Page) -> None:
        if page.id not in self.page_ids:
            self.page_ids.append(page.id)

    def _apply(self, page: Page, prefix: str) -> None:
        info = page.info()
        self._own(page)
        # later siblings of a paginated group only add their ids
        if self.absolute_url and info.pagination is not None and info.pagination.current_page > 1:
            return
        self.title = info.short_title
        self.page = info.pagination
        self.absolute_url = _with_extension(prefix + _canonical_path(page))

    def sorted_children(self) -> list[SiteMap]:
        """Return children ordered by title, then key."""
        return sorted(self.children.values(), key=lambda child: (child.title or child.key, child.key))

    def find(self, url: str) -> SiteMap | None:
        """Return the node whose canonical URL is ``url``."""
        stack = [self]
        while stack:
            node = stack.pop()
            if node.absolute_url == url:
                return node
            stack.extend(node.children.values())
        return None


__all__ = ["SiteMap", "SiteMapper", "SiteMapperPath", "SiteProfile"]
