"""Load the script documentation dump written by the external parser.

The dump is a JSON document::

    {
      "string_table": ["country", "state", ...],
      "scopes": [0, 1],
      "masks": [5],
      "entries": [
        {"category": "effects", "name": "add_loyalists", "content": {...}},
        ...
      ]
    }

``content`` is shaped by the entry's category and may be ``null``. Scope,
target and mask references are indices into ``string_table``.

Doc strings are lists of segments tagged with ``type`` (``text``, ``code``,
``raw_code``, ``symbol``, ``concept``, ``link``); a bare string is accepted
as a single text segment. ``code`` segments carry a value tree where each
node is a single-key mapping (``object``, ``array``, ``string``,
``identifier``, ``date``, ``placeholder``, ``comment``, ``verbatim``), bare
booleans and numbers stand for themselves and bare strings are identifiers.
Object items are ``{"key": ..., "operator": "=", "value": ...}`` or
``{"comment": ...}``.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import msgspec
import msgspec.json as msgspec_json

from .docstring import Code, Concept, DocString, Link, RawCode, Segment, Symbol, Text
from .entry import (
    CustomLocalization,
    Effects,
    EventTargets,
    Modifiers,
    OnActions,
    ScriptDocCategory,
    ScriptDocEntry,
    Triggers,
)
from .errors import ScriptDocsError
from .values import (
    ArrayValue,
    Comment,
    Date,
    Identifier,
    ObjectValue,
    Operator,
    Placeholder,
    Property,
    Verbatim,
)

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .entry import Content
    from .values import Value


class StringTable:
    """Interned strings referenced by index from the dump."""

    def __init__(self, strings: typ.Iterable[str]) -> None:
        self.strings = list(strings)

    def __len__(self) -> int:
        return len(self.strings)

    def get(self, index: int) -> str:
        """Return the string at ``index``.

        Raises
        ------
        ScriptDocsError
            If ``index`` is outside the table.
        """
        if not 0 <= index < len(self.strings):
            msg = f"String table has no entry {index} (size {len(self.strings)})."
            raise ScriptDocsError(msg)
        return self.strings[index]


class _RawEntry(msgspec.Struct):
    category: str
    name: str
    content: dict[str, typ.Any] | None = None


class _RawScriptDocs(msgspec.Struct):
    string_table: list[str]
    scopes: list[int] = msgspec.field(default_factory=list)
    masks: list[int] = msgspec.field(default_factory=list)
    entries: list[_RawEntry] = msgspec.field(default_factory=list)


@dc.dataclass(slots=True)
class ScriptDocs:
    """Decoded dump: parsed entries plus the scope and mask ids to synthesize."""

    string_table: StringTable
    entries: list[ScriptDocEntry]
    scope_ids: list[int]
    mask_ids: list[int]


def load_script_docs(path: Path) -> ScriptDocs:
    """Read and decode the dump at ``path``.

    Raises
    ------
    FileNotFoundError
        If ``path`` does not exist.
    ScriptDocsError
        If the document is not valid JSON or does not match the dump layout.
    """
    if not path.exists():
        msg = f"Script docs file '{path}' not found."
        raise FileNotFoundError(msg)
    return parse_script_docs(path.read_bytes(), source=str(path))


def parse_script_docs(payload: bytes | str, *, source: str = "<memory>") -> ScriptDocs:
    """Decode a dump held in memory."""
    try:
        raw = msgspec_json.decode(payload, type=_RawScriptDocs)
    except msgspec.ValidationError as exc:
        msg = f"{source}: unexpected script docs layout: {exc}"
        raise ScriptDocsError(msg) from exc
    except msgspec.DecodeError as exc:
        msg = f"{source}: invalid JSON: {exc}"
        raise ScriptDocsError(msg) from exc

    table = StringTable(raw.string_table)
    entries = [_build_entry(item, source) for item in raw.entries]
    for index in [*raw.scopes, *raw.masks]:
        table.get(index)
    return ScriptDocs(table, entries, list(raw.scopes), list(raw.masks))


def _build_entry(raw: _RawEntry, source: str) -> ScriptDocEntry:
    try:
        category = ScriptDocCategory(raw.category)
    except ValueError as exc:
        msg = f"{source}: entry '{raw.name}' has unknown category '{raw.category}'."
        raise ScriptDocsError(msg) from exc

    content = None
    if raw.content is not None:
        try:
            content = _build_content(category, raw.content)
        except (KeyError, TypeError, ValueError) as exc:
            msg = f"{source}: malformed content for '{raw.name}': {exc!r}"
            raise ScriptDocsError(msg) from exc
    return ScriptDocEntry(category, raw.name, content)


def _ids(payload: typ.Mapping[str, typ.Any], key: str) -> list[int]:
    return [int(item) for item in payload.get(key) or []]


def _build_content(category: ScriptDocCategory, payload: dict[str, typ.Any]) -> Content:
    match category:
        case ScriptDocCategory.CUSTOM_LOCALIZATION:
            return CustomLocalization(
                scope=int(payload["scope"]),
                random_valid=bool(payload.get("random_valid", False)),
                entries=[str(item) for item in payload.get("entries") or []],
            )
        case ScriptDocCategory.EFFECTS:
            return Effects(
                description=parse_doc_string(payload.get("description")),
                supported_scopes=_ids(payload, "supported_scopes"),
                supported_targets=_ids(payload, "supported_targets"),
            )
        case ScriptDocCategory.TRIGGERS:
            return Triggers(
                description=parse_doc_string(payload.get("description")),
                supported_scopes=_ids(payload, "supported_scopes"),
                supported_targets=_ids(payload, "supported_targets"),
            )
        case ScriptDocCategory.EVENT_TARGETS:
            return EventTargets(
                description=parse_doc_string(payload.get("description")),
                requires_data=bool(payload.get("requires_data", False)),
                wild_card=bool(payload.get("wild_card", False)),
                global_link=bool(payload.get("global_link", False)),
                input_scopes=_ids(payload, "input_scopes"),
                output_scopes=_ids(payload, "output_scopes"),
            )
        case ScriptDocCategory.MODIFIERS:
            display_name = payload.get("display_name")
            description = payload.get("description")
            return Modifiers(
                mask=int(payload["mask"]),
                display_name=None if display_name is None else parse_doc_string(display_name),
                description=None if description is None else parse_doc_string(description),
            )
        case ScriptDocCategory.ON_ACTIONS:
            return OnActions(
                expected_scope=int(payload["expected_scope"]),
                from_code=bool(payload.get("from_code", False)),
            )


def parse_doc_string(payload: object) -> DocString:
    """Build a DocString from a segment list (or a bare string)."""
    match payload:
        case None:
            return DocString()
        case str():
            return DocString.from_text(payload)
        case list():
            return DocString([_build_segment(item) for item in payload])
        case _:
            msg = f"Doc string must be a list of segments, got {payload!r}"
            raise TypeError(msg)


def _build_segment(payload: object) -> Segment:
    match payload:
        case str():
            return Text(payload)
        case {"type": "text", "contents": str() as contents}:
            return Text(contents)
        case {"type": "code", "value": value}:
            return Code(parse_value(value))
        case {"type": "raw_code", "contents": str() as contents}:
            return RawCode(contents)
        case {"type": "symbol", "identifier": str() as identifier}:
            return Symbol(identifier, payload.get("namespace"))
        case {"type": "concept", "identifier": str() as identifier}:
            return Concept(identifier)
        case {"type": "link", "contents": str() as contents, "url": str() as url}:
            return Link(contents, url)
        case _:
            msg = f"Unknown doc string segment {payload!r}"
            raise ValueError(msg)


def parse_value(payload: object) -> Value:
    """Build a value tree node from its JSON form."""
    match payload:
        case bool() | int() | float():
            return payload
        case str():
            return Identifier(payload)
        case {"object": list() as items}:
            return ObjectValue([_build_object_item(item) for item in items])
        case {"array": list() as items}:
            return ArrayValue([parse_value(item) for item in items])
        case {"string": str() as text}:
            return text
        case {"identifier": str() as name}:
            return Identifier(name)
        case {"date": str() as text}:
            return Date.parse(text)
        case {"placeholder": str() as name}:
            return Placeholder(name)
        case {"comment": str() as text}:
            return Comment(text)
        case {"verbatim": str() as text}:
            return Verbatim(text)
        case _:
            msg = f"Unknown value node {payload!r}"
            raise ValueError(msg)


def _build_object_item(payload: object) -> Property | Comment:
    match payload:
        case {"comment": str() as text}:
            return Comment(text)
        case {"key": str() as key, "value": value}:
            operator = Operator(payload.get("operator", Operator.EQUALS.value))
            return Property.of(key, parse_value(value), operator)
        case _:
            msg = f"Unknown object item {payload!r}"
            raise ValueError(msg)


__all__ = [
    "ScriptDocs",
    "StringTable",
    "load_script_docs",
    "parse_doc_string",
    "parse_script_docs",
    "parse_value",
]
