"""Documentation entries, their categories and parsed content variants.

Entries come in three flavours:

* :class:`ScriptDocEntry` records produced by the script-doc parser, one per
  documented effect, trigger, modifier and so on;
* :class:`ScopeDocEntry` records synthesized for every scope type so scopes
  get their own pages and collect back-references;
* :class:`EmptyDocEntry` markers that only exist to be link targets (masks).

Every id is derived from a stable identity through :func:`pdxdoc.ids.stable_hash`
so links stay valid between runs.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

from ._constants import MASK_ID_TEMPLATE, SCOPE_ID_TEMPLATE
from .docstring import DocString
from .ids import humanize_camel_case, stable_hash

if typ.TYPE_CHECKING:
    from .dossier import Dossier
    from .page import PageContext


class ScriptDocCategory(enum.Enum):
    """Categories emitted by the game's script documentation dump."""

    CUSTOM_LOCALIZATION = "custom_localization"
    EFFECTS = "effects"
    EVENT_TARGETS = "event_targets"
    MODIFIERS = "modifiers"
    ON_ACTIONS = "on_actions"
    TRIGGERS = "triggers"

    @property
    def display_name(self) -> str:
        return humanize_camel_case(self.value)

    @property
    def category_id(self) -> int:
        return category_id_for(self)


def category_id_for(tag: ScriptDocCategory) -> int:
    """Return the id of the category registered for ``tag``."""
    return stable_hash("category", tag.value)


def scope_entry_id(name: str) -> int:
    return stable_hash(SCOPE_ID_TEMPLATE.format(name=name))


def mask_entry_id(name: str) -> int:
    return stable_hash(MASK_ID_TEMPLATE.format(name=name))


@dc.dataclass(slots=True)
class DocCategory:
    """A named group of entries listed together on category pages."""

    id: int
    name: str
    display_name: str
    entries: list[int] = dc.field(default_factory=list)

    @classmethod
    def for_tag(
        cls, tag: ScriptDocCategory, name: str | None = None, display_name: str | None = None
    ) -> DocCategory:
        """Create the category that collects entries tagged ``tag``."""
        return cls(
            id=category_id_for(tag),
            name=name or tag.value,
            display_name=display_name or tag.display_name,
        )


# -- parsed content variants ---------------------------------------------
#
# String-table ids are plain ints resolved through ``Dossier.resolve_str``.


@dc.dataclass(slots=True)
class CustomLocalization:
    scope: int
    random_valid: bool
    entries: list[str] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class Effects:
    description: DocString
    supported_scopes: list[int] = dc.field(default_factory=list)
    supported_targets: list[int] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class EventTargets:
    description: DocString
    requires_data: bool = False
    wild_card: bool = False
    global_link: bool = False
    input_scopes: list[int] = dc.field(default_factory=list)
    output_scopes: list[int] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class Modifiers:
    mask: int
    display_name: DocString | None = None
    description: DocString | None = None


@dc.dataclass(slots=True)
class OnActions:
    expected_scope: int
    from_code: bool = False


@dc.dataclass(slots=True)
class Triggers:
    description: DocString
    supported_scopes: list[int] = dc.field(default_factory=list)
    supported_targets: list[int] = dc.field(default_factory=list)


Content: typ.TypeAlias = (
    "CustomLocalization | Effects | EventTargets | Modifiers | OnActions | Triggers"
)
Properties: typ.TypeAlias = "list[tuple[str, DocString]]"


class DocEntry(typ.Protocol):
    """Interface shared by every entry kind stored in a dossier."""

    @property
    def id(self) -> int: ...

    @property
    def category_id(self) -> int | None: ...

    @property
    def name(self) -> str: ...

    @property
    def fallback_group(self) -> str: ...

    def record_cross_references(self, dossier: Dossier) -> None: ...

    def body(self) -> DocString | None: ...

    def properties(self, context: PageContext, dossier: Dossier) -> Properties: ...


@dc.dataclass(slots=True)
class ScriptDocEntry:
    """An entry parsed from the script documentation dump."""

    category: ScriptDocCategory
    name: str
    content: Content | None = None
    id: int = dc.field(init=False)

    def __post_init__(self) -> None:
        self.id = self.id_for_name(self.category, self.name)

    @staticmethod
    def id_for_name(category: ScriptDocCategory, name: str) -> int:
        return stable_hash("entry", category.value, name)

    @property
    def category_id(self) -> int | None:
        # modifiers are listed on their mask pages instead
        if self.category is ScriptDocCategory.MODIFIERS:
            return None
        return self.category.category_id

    @property
    def fallback_group(self) -> str:
        return self.category.display_name

    def body(self) -> DocString | None:
        match self.content:
            case Effects(description=description) | Triggers(description=description):
                return description
            case EventTargets(description=description):
                return description
            case Modifiers(description=description):
                return description
            case _:
                return None

    def record_cross_references(self, dossier: Dossier) -> None:
        """Register an edge for every scope or mask this entry mentions."""
        match self.content:
            case CustomLocalization(scope=scope):
                dossier.add_scope_reference("Scope", self.id, scope)
            case Effects(supported_scopes=scopes, supported_targets=targets) | Triggers(
                supported_scopes=scopes, supported_targets=targets
            ):
                for scope in scopes:
                    dossier.add_scope_reference("Supported Scopes", self.id, scope)
                for target in targets:
                    dossier.add_scope_reference("Supported Targets", self.id, target)
            case EventTargets(input_scopes=inputs, output_scopes=outputs):
                for scope in inputs:
                    dossier.add_scope_reference("Input Scopes", self.id, scope)
                for scope in outputs:
                    dossier.add_scope_reference("Output Scopes", self.id, scope)
            case Modifiers(mask=mask):
                dossier.add_mask_reference("Mask", self.id, mask)
            case OnActions(expected_scope=scope):
                dossier.add_scope_reference("Expected Scope", self.id, scope)
            case None:
                return

    def properties(self, context: PageContext, dossier: Dossier) -> Properties:
        """Return labelled property values, with references rendered as links."""

        def scope_list(ids: list[int]) -> DocString:
            return DocString.from_iter(
                (dossier.link_for_scope(context, self, scope) for scope in ids), ", "
            )

        match self.content:
            case CustomLocalization(scope=scope, random_valid=random_valid, entries=entries):
                return [
                    ("Scope", DocString([dossier.link_for_scope(context, self, scope)])),
                    ("Random Valid?", DocString.from_bool(random_valid)),
                    ("Entries", DocString.from_text("\n".join(entries))),
                ]
            case Effects(supported_scopes=scopes, supported_targets=targets) | Triggers(
                supported_scopes=scopes, supported_targets=targets
            ):
                return [
                    ("Supported Scopes", scope_list(scopes)),
                    ("Supported Targets", scope_list(targets)),
                ]
            case EventTargets() as targets:
                return [
                    ("Requires Data", DocString.from_bool(targets.requires_data)),
                    ("Wild Card", DocString.from_bool(targets.wild_card)),
                    ("Global Link", DocString.from_bool(targets.global_link)),
                    ("Input Scopes", scope_list(targets.input_scopes)),
                    ("Output Scopes", scope_list(targets.output_scopes)),
                ]
            case Modifiers(display_name=display_name, mask=mask):
                properties: Properties = []
                if display_name is not None:
                    properties.append(("Display Name", display_name))
                properties.append(
                    ("Mask", DocString([dossier.link_for_mask(context, self, mask)]))
                )
                return properties
            case OnActions(expected_scope=scope, from_code=from_code):
                return [
                    (
                        "Expected Scope",
                        DocString([dossier.link_for_scope(context, self, scope)]),
                    ),
                    ("From Code", DocString.from_bool(from_code)),
                ]
            case _:
                return []


@dc.dataclass(slots=True)
class ScopeDocEntry:
    """Synthesized entry representing one scope type."""

    name: str
    id: int = dc.field(init=False)
    display_name: str = dc.field(init=False)

    def __post_init__(self) -> None:
        self.id = scope_entry_id(self.name)
        self.display_name = humanize_camel_case(self.name)

    @property
    def category_id(self) -> int | None:
        return None

    @property
    def fallback_group(self) -> str:
        return "Scopes"

    def record_cross_references(self, dossier: Dossier) -> None:
        pass

    def body(self) -> DocString | None:
        return None

    def properties(self, context: PageContext, dossier: Dossier) -> Properties:  # noqa: ARG002
        return []


@dc.dataclass(slots=True)
class EmptyDocEntry:
    """Marker entry that exists only so pages can own and link to it."""

    id: int
    name: str
    registry: str = "Other"

    @property
    def category_id(self) -> int | None:
        return None

    @property
    def fallback_group(self) -> str:
        return self.registry

    def record_cross_references(self, dossier: Dossier) -> None:
        pass

    def body(self) -> DocString | None:
        return None

    def properties(self, context: PageContext, dossier: Dossier) -> Properties:  # noqa: ARG002
        return []


__all__ = [
    "Content",
    "CustomLocalization",
    "DocCategory",
    "DocEntry",
    "Effects",
    "EmptyDocEntry",
    "EventTargets",
    "Modifiers",
    "OnActions",
    "Properties",
    "ScopeDocEntry",
    "ScriptDocCategory",
    "ScriptDocEntry",
    "Triggers",
    "category_id_for",
    "mask_entry_id",
    "scope_entry_id",
]
