"""Render structured script values as token-classified HTML.

:class:`HighlightedWriter` is a streaming consumer of the events produced by
:func:`pdxdoc.values.write_value`. It keeps a stack of open collections, a
signed indentation depth (``-1`` outside any collection, so top-level scalars
are never indented) and a text buffer that coalesces plain text into a single
span. Every classified token flushes the buffer first.

Colours come from a Pygments style so the highlighted blocks share a palette
with the rest of the theme.

Example
-------
>>> from pdxdoc.syntax_highlight import SyntaxHighlighter
>>> from pdxdoc.values import ObjectValue, Property
>>> html = SyntaxHighlighter.to_html(ObjectValue([Property.of("add", 1)]))
>>> html.startswith('<div class="pd-highlight">')
True
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ
from html import escape

from pygments.styles import get_style_by_name
from pygments.token import Comment, Keyword, Literal, Name, Number, Operator, String, Text

from ._constants import INLINE_ARRAY_THRESHOLD
from .errors import HighlightError
from .values import CollectionType, ObjectKey, write_value

if typ.TYPE_CHECKING:
    from pygments.token import _TokenType

    from .values import Date, Value
    from .values import Operator as ValueOperator


class HighlightToken(enum.Enum):
    """Token classes emitted by the highlighter."""

    TEXT = "Text"
    IDENTIFIER = "Identifier"
    STRING = "String"
    DATE = "Date"
    BOOL = "Bool"
    NUMBER = "Number"
    PLACEHOLDER = "Placeholder"
    OPERATOR = "Operator"
    COMMENT = "Comment"

    @property
    def css_class(self) -> str:
        """Return the CSS class applied to spans of this token."""
        return f"pd-token-{self.value}"


PYGMENTS_TOKENS: dict[HighlightToken, _TokenType] = {
    HighlightToken.TEXT: Text,
    HighlightToken.IDENTIFIER: Name.Variable,
    HighlightToken.STRING: String,
    HighlightToken.DATE: Literal.Date,
    HighlightToken.BOOL: Keyword.Constant,
    HighlightToken.NUMBER: Number,
    HighlightToken.PLACEHOLDER: Name.Tag,
    HighlightToken.OPERATOR: Operator,
    HighlightToken.COMMENT: Comment,
}


@dc.dataclass(slots=True)
class HighlightFrame:
    """An open collection and how it is laid out."""

    collection: CollectionType
    same_line: bool
    items: int = 0


class HighlightedWriter:
    """Writer that turns value events into highlighted HTML fragments."""

    def __init__(self, output: list[str]) -> None:
        self.output = output
        self._frames: list[HighlightFrame] = []
        self._depth = -1
        self._position = 0
        self._text: list[str] = []
        self._started = False
        self._has_written_token = False

    @property
    def depth(self) -> int:
        """Current indentation depth; negative outside any collection."""
        return self._depth

    def finish(self) -> None:
        """Flush any pending plain text."""
        self._flush_text()

    # -- collections -----------------------------------------------------

    def begin_object(self, length: int | None) -> None:  # noqa: ARG002
        self._before_value()
        self._start_collection(CollectionType.OBJECT, same_line=False)

    def end_object(self) -> None:
        self._end_collection(CollectionType.OBJECT)

    def begin_array(self, length: int | None) -> None:
        self._before_value()
        same_line = length is not None and length < INLINE_ARRAY_THRESHOLD
        self._start_collection(CollectionType.ARRAY, same_line=same_line)

    def end_array(self) -> None:
        self._end_collection(CollectionType.ARRAY)

    def write_property(self, key: ObjectKey) -> None:
        if not self._started and self._has_written_token:
            # tokens before the first property, e.g. a leading comment
            self._new_line()

        if not self._frames:
            self._fail("Tried to write property with no collection!")
        frame = self._frames[-1]
        if frame.collection is not CollectionType.OBJECT:
            self._fail("Tried to write property from an array!")

        if not frame.same_line and self._started:
            self._new_line()
            self._indent()

        self._started = True
        frame.items += 1
        self._write_object_key(key)

    # -- scalars ---------------------------------------------------------

    def write_direct(self, text: str) -> None:
        self._write_text(text)

    def write_string(self, text: str) -> None:
        self._before_value()
        self._write_nontext(HighlightToken.STRING, f'"{text}"')

    def write_identifier(self, text: str) -> None:
        self._before_value()
        self._write_nontext(HighlightToken.IDENTIFIER, text)

    def write_date(self, date: Date) -> None:
        self._before_value()
        self._write_nontext(HighlightToken.DATE, str(date))

    def write_boolean(self, value: bool) -> None:  # noqa: FBT001
        self._before_value()
        self._write_nontext(HighlightToken.BOOL, "yes" if value else "no")

    def write_placeholder(self, name: str) -> None:
        self._before_value()
        self._write_nontext(HighlightToken.PLACEHOLDER, f"<{name}>")

    def write_integer(self, number: int) -> None:
        self._before_value()
        self._write_nontext(HighlightToken.NUMBER, str(number))

    def write_decimal(self, number: float) -> None:
        self._before_value()
        text = str(int(number)) if number.is_integer() else repr(number)
        self._write_nontext(HighlightToken.NUMBER, text)

    def write_operator(self, operator: ValueOperator) -> None:
        self._write_nontext(HighlightToken.OPERATOR, operator.value)

    def write_comment(self, text: str) -> None:
        # comments always start their own line once anything has been written
        if self._has_written_token:
            self._new_line()
            if self._depth >= 0:
                self._indent()
        self._write_nontext(HighlightToken.COMMENT, f"# {text}")

    # -- internals -------------------------------------------------------

    def _write(self, out: str) -> None:
        self._position += 1
        self.output.append(out)

    def _fail(self, message: str) -> typ.NoReturn:
        msg = f"{message} (at token {self._position})"
        raise HighlightError(msg)

    def _new_line(self) -> None:
        self._flush_text()
        self._write("<br/>")

    def _indent(self) -> None:
        if self._depth < 0:
            self._fail("Tried to indent with negative depth!")
        self._write_text(" " * (self._depth * 4))

    def _write_span(self, token: HighlightToken, out: str) -> None:
        self._write(f'<span class="{token.css_class}">{escape(out)}</span>')

    def _write_text(self, out: str) -> None:
        self._text.append(out)

    def _write_nontext(self, token: HighlightToken, out: str) -> None:
        self._flush_text()
        self._has_written_token = True
        self._write_span(token, out)

    def _flush_text(self) -> None:
        if self._text:
            pending = "".join(self._text)
            self._text.clear()
            if pending:
                self._write_span(HighlightToken.TEXT, pending)

    def _write_object_key(self, key: ObjectKey) -> None:
        self._write_nontext(HighlightToken.IDENTIFIER, key.key)
        if key.operator.is_comparison:
            self._write_text(" ")
            self.write_operator(key.operator)
            self._write_text(" ")
        else:
            self._write_text(" = ")

    def _before_value(self) -> None:
        """Separate consecutive array items."""
        if not self._frames:
            return
        frame = self._frames[-1]
        if frame.collection is not CollectionType.ARRAY:
            return
        if frame.same_line:
            if frame.items:
                self._write_text(" ")
        elif frame.items or self._depth > 0:
            self._new_line()
            self._indent()
        frame.items += 1

    def _start_collection(self, collection: CollectionType, *, same_line: bool) -> None:
        if self._depth >= 0:
            self._write_text("{ ")
        if not same_line:
            self._depth += 1
        self._frames.append(HighlightFrame(collection, same_line))

    def _end_collection(self, collection: CollectionType) -> None:
        if not self._frames:
            self._fail("Tried to end collection that wasn't started!")
        frame = self._frames.pop()
        if frame.collection is not collection:
            self._fail(
                f"Tried to end {collection.value} while {frame.collection.value} is open!"
            )

        if not frame.same_line:
            self._depth -= 1
            self._new_line()
            if self._depth >= 0:
                self._indent()
        else:
            self._write_text(" ")

        if self._depth >= 0:
            self._write_text("}")

        self._flush_text()


class SyntaxHighlighter:
    """Entry point used by rich-text rendering for embedded code blocks."""

    @staticmethod
    def to_html(value: Value) -> str:
        """Return ``value`` rendered inside a ``pd-highlight`` block.

        Raises
        ------
        HighlightError
            If the value tree is malformed (for example a property written
            into an array).
        """
        parts = ['<div class="pd-highlight">']
        writer = HighlightedWriter(parts)
        write_value(value, writer)
        writer.finish()
        parts.append("</div>")
        return "".join(parts)


def highlight_stylesheet(style_name: str = "monokai") -> str:
    """Return CSS colouring ``pd-token-*`` spans from a Pygments style."""
    style = get_style_by_name(style_name)
    lines = [
        f".pd-highlight {{ background-color: {style.background_color}; "
        "font-family: monospace; white-space: pre-wrap; padding: 0.75em; }"
    ]
    for token, pygments_token in PYGMENTS_TOKENS.items():
        rules = style.style_for_token(pygments_token)
        declarations: list[str] = []
        if rules.get("color"):
            declarations.append(f"color: #{rules['color']};")
        if rules.get("bold"):
            declarations.append("font-weight: bold;")
        if rules.get("italic"):
            declarations.append("font-style: italic;")
        if declarations:
            lines.append(f".{token.css_class} {{ {' '.join(declarations)} }}")
    return "\n".join(lines) + "\n"


__all__ = [
    "HighlightFrame",
    "HighlightToken",
    "HighlightedWriter",
    "SyntaxHighlighter",
    "highlight_stylesheet",
]
