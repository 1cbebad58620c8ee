"""Tests for rich-text doc strings."""

from __future__ import annotations

from pdxdoc.docstring import Code, Concept, DocString, Link, RawCode, Symbol, Text
from pdxdoc.ids import humanize_camel_case
from pdxdoc.values import ArrayValue


def test_text_is_escaped_with_line_breaks() -> None:
    doc = DocString.from_text("a < b\nc & d")

    assert doc.to_html() == "a &lt; b<br/>c &amp; d"


def test_from_iter_joins_with_separator() -> None:
    doc = DocString.from_iter([Text("a"), Link("b", "b.html"), Text("c")], ", ")

    assert doc.to_html() == 'a, <a href="b.html">b</a>, c'


def test_from_bool_uses_script_spelling() -> None:
    assert DocString.from_bool(True).to_html() == "yes"
    assert DocString.from_bool(False).to_html() == "no"


def test_code_and_raw_code() -> None:
    doc = DocString([Code(ArrayValue([1])), RawCode("x = <y>")])

    html = doc.to_html()

    assert html.startswith('<div class="pd-highlight">')
    assert html.endswith('<div class="clcode">x = &lt;y&gt;</div>')


def test_symbol_renders_marker(log_messages: list[str]) -> None:
    html = DocString([Symbol("gold")]).to_html()

    assert html == '<span class="symbol-inline" title="gold">[icon: gold]</span>'
    assert "DEBUG No icon available for symbol gold" in log_messages


def test_concept_renders_identifier_and_warns(log_messages: list[str]) -> None:
    assert DocString([Concept("legitimacy")]).to_html() == "legitimacy"
    assert any(message.startswith("WARNING Concepts are not linked") for message in log_messages)


def test_empty_doc_string() -> None:
    assert DocString().is_empty()
    assert DocString().to_html() == ""


def test_humanize_camel_case() -> None:
    assert humanize_camel_case("supported_scopes") == "Supported Scopes"
    assert humanize_camel_case("Random Valid?") == "Random Valid?"
