"""Exception types raised while building a documentation site."""

from __future__ import annotations


class PdxdocError(RuntimeError):
    """Base class for fatal documentation build errors."""


class MissingCategoryError(PdxdocError):
    """Raised when an entry names a category that was never registered."""


class ScriptDocsError(PdxdocError):
    """Raised when a script docs dump cannot be decoded into entries."""


class ProviderError(PdxdocError):
    """Raised when a game provider finds malformed version metadata."""


class SiteMapperLookupError(PdxdocError, LookupError):
    """Raised when a page, entry or pagination group has no recorded path."""


class SiteMapperSealedError(PdxdocError):
    """Raised when a profile is recorded after the mapper has been sealed."""


class PageOwnershipError(PdxdocError):
    """Raised when two pages of one profile claim the same entry."""


class HighlightError(PdxdocError, ValueError):
    """Raised when the syntax highlighter receives a malformed value tree."""


__all__ = [
    "HighlightError",
    "MissingCategoryError",
    "PageOwnershipError",
    "PdxdocError",
    "ProviderError",
    "ScriptDocsError",
    "SiteMapperLookupError",
    "SiteMapperSealedError",
]
