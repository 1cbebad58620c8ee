"""Structured script values embedded in documentation code blocks.

The external script parser hands over nested key/value/array documents. This
module models that tree with small slotted dataclasses and replays it as a
stream of writer events through :func:`write_value`, which is how the syntax
highlighter consumes it.

Example
-------
>>> from pdxdoc.values import ArrayValue, ObjectValue, Property
>>> tree = ObjectValue([Property.of("add", ArrayValue([1, 2]))])
>>> len(tree.items)
1
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ


class CollectionType(enum.Enum):
    """Kinds of collection a writer frame can hold."""

    OBJECT = "object"
    ARRAY = "array"


class Operator(enum.Enum):
    """Assignment and comparison operators that join a key to its value."""

    EQUALS = "="
    GREATER_THAN = ">"
    GREATER_THAN_EQ = ">="
    LESS_THAN = "<"
    LESS_THAN_EQ = "<="

    @property
    def is_comparison(self) -> bool:
        """Return ``True`` for operators other than plain assignment."""
        return self is not Operator.EQUALS


@dc.dataclass(frozen=True, slots=True)
class Identifier:
    """Bare word such as ``yes`` targets or scope names."""

    name: str


@dc.dataclass(frozen=True, slots=True)
class Date:
    """Game calendar date written as ``year.month.day``."""

    year: int
    month: int = 1
    day: int = 1

    def __str__(self) -> str:
        return f"{self.year}.{self.month}.{self.day}"

    @classmethod
    def parse(cls, text: str) -> Date:
        """Parse a dotted ``year.month.day`` string."""
        parts = [int(part) for part in text.strip().split(".") if part]
        if not 1 <= len(parts) <= 3:  # noqa: PLR2004 - year, month, day
            msg = f"Invalid date literal {text!r}"
            raise ValueError(msg)
        return cls(*parts)


@dc.dataclass(frozen=True, slots=True)
class Placeholder:
    """Documentation placeholder such as ``<scope>``."""

    name: str


@dc.dataclass(frozen=True, slots=True)
class Comment:
    """Line comment preserved from the source script."""

    text: str


@dc.dataclass(frozen=True, slots=True)
class Verbatim:
    """Text emitted exactly as written."""

    text: str


@dc.dataclass(frozen=True, slots=True)
class ObjectKey:
    """Key of an object property and the operator that follows it."""

    key: str
    operator: Operator = Operator.EQUALS


@dc.dataclass(frozen=True, slots=True)
class Property:
    """A single ``key <op> value`` pair inside an object."""

    key: ObjectKey
    value: Value

    @classmethod
    def of(cls, key: str, value: Value, operator: Operator = Operator.EQUALS) -> Property:
        """Build a property from a plain key string."""
        return cls(ObjectKey(key, operator), value)


@dc.dataclass(slots=True)
class ObjectValue:
    """Ordered properties (and interleaved comments) of an object."""

    items: list[Property | Comment] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class ArrayValue:
    """Ordered array items."""

    items: list[Value] = dc.field(default_factory=list)


Scalar: typ.TypeAlias = (
    "str | bool | int | float | Identifier | Date | Placeholder | Comment | Verbatim"
)
Value: typ.TypeAlias = "ObjectValue | ArrayValue | Scalar"


class ValueWriter(typ.Protocol):
    """Event sink for :func:`write_value`."""

    def begin_object(self, length: int | None) -> None: ...
    def end_object(self) -> None: ...
    def begin_array(self, length: int | None) -> None: ...
    def end_array(self) -> None: ...
    def write_property(self, key: ObjectKey) -> None: ...
    def write_string(self, text: str) -> None: ...
    def write_identifier(self, text: str) -> None: ...
    def write_date(self, date: Date) -> None: ...
    def write_boolean(self, value: bool) -> None: ...  # noqa: FBT001
    def write_integer(self, number: int) -> None: ...
    def write_decimal(self, number: float) -> None: ...
    def write_placeholder(self, name: str) -> None: ...
    def write_comment(self, text: str) -> None: ...
    def write_direct(self, text: str) -> None: ...


def write_value(value: Value, writer: ValueWriter) -> None:
    """Replay ``value`` as writer events, depth first.

    Raises
    ------
    TypeError
        If the tree contains a node that is not part of the value model.
    """
    match value:
        case ObjectValue(items=items):
            writer.begin_object(len(items))
            for item in items:
                match item:
                    case Comment(text=text):
                        writer.write_comment(text)
                    case Property(key=key, value=inner):
                        writer.write_property(key)
                        write_value(inner, writer)
            writer.end_object()
        case ArrayValue(items=items):
            writer.begin_array(len(items))
            for item in items:
                write_value(item, writer)
            writer.end_array()
        case bool():
            writer.write_boolean(value)
        case int():
            writer.write_integer(value)
        case float():
            writer.write_decimal(value)
        case str():
            writer.write_string(value)
        case Identifier(name=name):
            writer.write_identifier(name)
        case Date():
            writer.write_date(value)
        case Placeholder(name=name):
            writer.write_placeholder(name)
        case Comment(text=text):
            writer.write_comment(text)
        case Verbatim(text=text):
            writer.write_direct(text)
        case _:
            msg = f"Unsupported value node: {value!r}"
            raise TypeError(msg)


__all__ = [
    "ArrayValue",
    "CollectionType",
    "Comment",
    "Date",
    "Identifier",
    "ObjectKey",
    "ObjectValue",
    "Operator",
    "Placeholder",
    "Property",
    "Scalar",
    "Value",
    "ValueWriter",
    "Verbatim",
    "write_value",
]
