"""Templates, stylesheet and markdown rendering shared by every generated page."""

from __future__ import annotations

import enum
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, Template as JinjaTemplate
from markdown import Markdown
from pygments.formatters.html import HtmlFormatter

from ._constants import STYLESHEET_NAME
from .syntax_highlight import highlight_stylesheet

DEFAULT_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class Template(enum.Enum):
    """Template kinds a page can be rendered with."""

    LAYOUT = "layout"
    CATEGORY_LIST = "category_list"
    SCOPE = "scope"
    MASK = "mask"
    LIST_INDEX = "list_index"
    INDEX = "index"
    PROFILES = "profiles"

    @property
    def filename(self) -> str:
        return f"{self.value}.jinja"


class Theme:
    """Jinja environment plus the static assets written next to the pages."""

    def __init__(
        self, templates_dir: Path | None = None, *, pygments_style: str = "monokai"
    ) -> None:
        """Initialize the theme.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing Jinja templates and an ``assets/`` folder;
            defaults to the package templates.
        pygments_style : str, optional
            Pygments style used for highlighted script values and for code
            blocks in markdown descriptions.
        """
        self.templates_dir = templates_dir or DEFAULT_TEMPLATES_DIR
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")
        # doc strings are serialized to HTML before rendering and marked |safe
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def template_for(self, template: Template) -> JinjaTemplate:
        """Return the compiled Jinja template for ``template``."""
        return self.env.get_template(template.filename)

    @property
    def stylesheet(self) -> str:
        """Return the theme CSS followed by the highlighting rules."""
        base = self.templates_dir / "assets" / STYLESHEET_NAME
        css = base.read_text(encoding="utf-8") if base.exists() else ""
        return "\n".join(
            [
                css,
                highlight_stylesheet(self.pygments_style),
                self._formatter.get_style_defs(".codehilite"),
            ]
        )

    def assets(self) -> list[tuple[str, bytes]]:
        """Return ``(file name, contents)`` pairs written to the assets folder."""
        return [(STYLESHEET_NAME, self.stylesheet.encode("utf-8"))]

    def markdown(self, text: str) -> str:
        """Render markdown (profile descriptions) into HTML."""
        if not text.strip():
            return ""
        md = Markdown(
            extensions=["fenced_code", "codehilite", "tables", "sane_lists"],
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return md.convert(text)


__all__ = ["DEFAULT_TEMPLATES_DIR", "Template", "Theme"]
