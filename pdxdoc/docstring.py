"""Rich text carried by documentation entries.

A :class:`DocString` is an ordered list of segments: plain text, highlighted
code, raw code, inline symbols, concept references and links. Pages serialize
doc strings to HTML fragments before handing them to the templates, so every
fragment produced here is already escaped where needed.
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ
from html import escape

from loguru import logger

from .syntax_highlight import SyntaxHighlighter

if typ.TYPE_CHECKING:
    from .values import Value


@dc.dataclass(frozen=True, slots=True)
class Text:
    """Plain text; newlines become line breaks."""

    contents: str


@dc.dataclass(frozen=True, slots=True)
class Code:
    """Structured script value rendered through the syntax highlighter."""

    value: Value


@dc.dataclass(frozen=True, slots=True)
class RawCode:
    """Code that could not be parsed and is shown as-is."""

    contents: str


@dc.dataclass(frozen=True, slots=True)
class Symbol:
    """Inline game icon reference."""

    identifier: str
    namespace: str | None = None


@dc.dataclass(frozen=True, slots=True)
class Concept:
    """Reference to a game concept."""

    identifier: str


@dc.dataclass(frozen=True, slots=True)
class Link:
    """Hyperlink to another page or entry."""

    contents: str
    url: str


Segment: typ.TypeAlias = "Text | Code | RawCode | Symbol | Concept | Link"


@dc.dataclass(slots=True)
class DocString:
    """Ordered rich-text segments."""

    segments: list[Segment] = dc.field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> DocString:
        return cls([Text(text)])

    @classmethod
    def from_bool(cls, value: bool) -> DocString:  # noqa: FBT001
        """Render a flag the way game scripts spell it."""
        return cls([Text("yes" if value else "no")])

    @classmethod
    def from_iter(
        cls, segments: typ.Iterable[Segment], separator: str | None = None
    ) -> DocString:
        """Join ``segments`` with an optional plain-text ``separator``."""
        joined: list[Segment] = []
        for index, segment in enumerate(segments):
            if separator is not None and index:
                joined.append(Text(separator))
            joined.append(segment)
        return cls(joined)

    def is_empty(self) -> bool:
        return not self.segments

    def to_html(self) -> str:
        """Serialize every segment into one HTML fragment."""
        return "".join(_segment_to_html(segment) for segment in self.segments)


def _segment_to_html(segment: Segment) -> str:
    match segment:
        case Text(contents=contents):
            return escape(contents).replace("\n", "<br/>")
        case Code(value=value):
            return SyntaxHighlighter.to_html(value)
        case RawCode(contents=contents):
            return f'<div class="clcode">{escape(contents)}</div>'
        case Symbol(identifier=identifier):
            # icon extraction is not supported; keep a readable marker
            logger.debug("No icon available for symbol {}", identifier)
            escaped = escape(identifier)
            return f'<span class="symbol-inline" title="{escaped}">[icon: {escaped}]</span>'
        case Concept(identifier=identifier):
            logger.warning("Concepts are not linked yet, ignoring [{}]", identifier)
            return escape(identifier)
        case Link(contents=contents, url=url):
            return f'<a href="{escape(url)}">{escape(contents)}</a>'
        case _:
            msg = f"Unsupported doc string segment: {segment!r}"
            raise TypeError(msg)


__all__ = [
    "Code",
    "Concept",
    "DocString",
    "Link",
    "RawCode",
    "Segment",
    "Symbol",
    "Text",
]
