"""Registry of documentation entries and the cross references between them.

The :class:`Dossier` is filled during the build phase: categories are passed
in up front, parsed entries are added by the provider, and page builders add
synthesized entries (scopes, masks). While entries are added they record
outgoing references, which later collate into "Referenced by" sections on the
target pages.

Example
-------
>>> from pdxdoc.config import SiteConfig
>>> from pdxdoc.dossier import Dossier
>>> from pdxdoc.script_docs import StringTable
>>> config = SiteConfig(profiles=[])
>>> dossier = Dossier(config, [], StringTable([]))
>>> dossier.find_references_to(1)
[]
"""

from __future__ import annotations

import collections
import dataclasses as dc
import typing as typ

from loguru import logger

from .docstring import DocString, Link, Text
from .entry import DocCategory, mask_entry_id, scope_entry_id
from .errors import MissingCategoryError
from .ids import humanize_camel_case

if typ.TYPE_CHECKING:
    from .config import SiteConfig
    from .entry import DocEntry
    from .page import Page, PageBuilder, PageContext
    from .providers import DocInfo
    from .script_docs import StringTable


@dc.dataclass(frozen=True, slots=True)
class CrossReference:
    """Directed edge from a property of one entry to another entry."""

    from_id: int
    from_property: str
    to_id: int


@dc.dataclass(slots=True)
class CrossReferenceSection:
    """Links from every source that references the target via one property."""

    name: str
    body: str


@dc.dataclass(slots=True)
class CrossReferenceGroup:
    """All referencing properties from one category of sources."""

    name: str
    properties: list[CrossReferenceSection]


@dc.dataclass(slots=True)
class CollatedCrossReferences:
    """Back-references of a single entry, sorted for display."""

    groups: list[CrossReferenceGroup] = dc.field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.groups)


class Dossier:
    """Everything known about one profile's documentation."""

    def __init__(
        self,
        config: SiteConfig,
        categories: typ.Iterable[DocCategory],
        string_table: StringTable,
        info: DocInfo | None = None,
    ) -> None:
        self.config = config
        self.categories: dict[int, DocCategory] = {
            category.id: category for category in categories
        }
        self.entries: dict[int, DocEntry] = {}
        self.string_table = string_table
        self.info = info
        self.cross_references: list[CrossReference] = []
        self.builders: list[PageBuilder] = []

    def add_entries(self, entries: typ.Iterable[DocEntry]) -> None:
        """Register ``entries`` and record their outgoing references.

        Raises
        ------
        MissingCategoryError
            If an entry declares a category that was never registered.
        """
        for entry in entries:
            if entry.id in self.entries:
                logger.warning("Skipping duplicate entry {} (id {})", entry.name, entry.id)
                continue

            category = None
            category_id = entry.category_id
            if category_id is not None:
                category = self.categories.get(category_id)
                if category is None:
                    msg = (
                        f"Entry '{entry.name}' belongs to category {category_id}, "
                        "which was never registered."
                    )
                    raise MissingCategoryError(msg)

            entry.record_cross_references(self)
            self.entries[entry.id] = entry
            if category is not None:
                category.entries.append(entry.id)

    def add_builder(self, builder: PageBuilder) -> None:
        """Add the builder's synthesized entries and keep it for page creation."""
        self.add_entries(builder.build_entries(self, self.config))
        self.builders.append(builder)

    def create_pages(self) -> list[Page]:
        """Build category pages followed by every builder's pages."""
        from .page import CategoryListPage  # noqa: PLC0415 - page imports this module

        pages: list[Page] = []
        for category in self.categories.values():
            if not category.entries:
                # e.g. modifiers, which are listed under their masks
                logger.debug("Category {} has no entries; no listing", category.name)
                continue
            category.entries.sort(key=lambda entry_id: self.entries[entry_id].name)
            pages.extend(CategoryListPage.paginated(self, category))

        for builder in self.builders:
            pages.extend(builder.build_pages(self, self.config))
        return pages

    def entry(self, entry_id: int) -> DocEntry:
        return self.entries[entry_id]

    def resolve_str(self, string_id: int) -> str:
        return self.string_table.get(string_id)

    def group_name_for(self, entry: DocEntry) -> str:
        """Return the display name of the group ``entry`` is listed under."""
        category = self.categories.get(entry.category_id) if entry.category_id else None
        if category is not None:
            return category.display_name
        return entry.fallback_group

    # -- references --------------------------------------------------------

    def add_scope_reference(self, prop: str, this_id: int, scope: int) -> None:
        self.add_reference(prop, this_id, scope_entry_id(self.resolve_str(scope)))

    def add_mask_reference(self, prop: str, this_id: int, mask: int) -> None:
        self.add_reference(prop, this_id, mask_entry_id(self.resolve_str(mask)))

    def add_reference(self, prop: str, this_id: int, that_id: int) -> None:
        self.cross_references.append(CrossReference(this_id, prop, that_id))

    def find_references_to(self, entry_id: int) -> list[int]:
        """Return the ids of every entry referencing ``entry_id``, in insertion order."""
        return [ref.from_id for ref in self.cross_references if ref.to_id == entry_id]

    def collate_references(
        self, context: PageContext, page_id: int, target_id: int
    ) -> CollatedCrossReferences:
        """Group references to ``target_id`` for display on page ``page_id``.

        Groups are keyed by the source's category display name and
        sub-grouped by the humanized property name. Group names, property
        names and link texts are each sorted, so the output does not depend
        on the order entries were added in.
        """
        grouped: dict[str, dict[str, list[Link | Text]]] = collections.defaultdict(
            lambda: collections.defaultdict(list)
        )
        for ref in self.cross_references:
            if ref.to_id != target_id:
                continue
            source = self.entries.get(ref.from_id)
            if source is None:
                logger.warning("Reference from unknown entry id {}", ref.from_id)
                continue
            group = grouped[self.group_name_for(source)]
            group[humanize_camel_case(ref.from_property)].append(
                Link(source.name, context.page_to_entry_url(page_id, source.id))
            )

        collated = CollatedCrossReferences()
        for group_name in sorted(grouped):
            properties = grouped[group_name]
            sections = []
            for prop in sorted(properties):
                links = sorted(properties[prop], key=_segment_sort_key)
                body = DocString.from_iter(links, ", ").to_html()
                sections.append(CrossReferenceSection(prop, body))
            collated.groups.append(CrossReferenceGroup(group_name, sections))
        return collated

    # -- links -------------------------------------------------------------

    def link_for_scope(self, context: PageContext, source: DocEntry, scope: int) -> Link | Text:
        name = self.resolve_str(scope)
        return self.link_for_entry(context, source, name, scope_entry_id(name))

    def link_for_mask(self, context: PageContext, source: DocEntry, mask: int) -> Link | Text:
        name = self.resolve_str(mask)
        return self.link_for_entry(context, source, name, mask_entry_id(name))

    def link_for_entry(
        self, context: PageContext, source: DocEntry, name: str, target_id: int
    ) -> Link | Text:
        """Link ``source`` to ``target_id``, or plain text if the target is unknown."""
        if target_id in self.entries:
            return Link(name, context.url_for_entry(source.id, target_id))
        logger.warning("id without entry: {}, id {}", name, target_id)
        return Text(name)

    def entries_by_name(self, ids: typ.Iterable[int]) -> list[int]:
        """Return ``ids`` ordered by entry name, dropping duplicates."""
        unique = dict.fromkeys(ids)
        return sorted(unique, key=lambda entry_id: self.entries[entry_id].name)

    def stats(self) -> dict[str, int]:
        """Return entry counts per group, used for build logging."""
        counts = collections.Counter(
            self.group_name_for(entry) for entry in self.entries.values()
        )
        return dict(sorted(counts.items()))


def _segment_sort_key(segment: Link | Text) -> tuple[str, str]:
    return (segment.contents, getattr(segment, "url", ""))


__all__ = [
    "CollatedCrossReferences",
    "CrossReference",
    "CrossReferenceGroup",
    "CrossReferenceSection",
    "Dossier",
]
