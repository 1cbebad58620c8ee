"""Typed dataclasses describing pdxdoc site configuration structures."""

from __future__ import annotations

import dataclasses as dc
import enum
from pathlib import Path

from pdxdoc._constants import DEFAULT_PAGE_LIMIT


class SiteConfigError(ValueError):
    """Raised when the site configuration is invalid or incomplete."""


class ProfileGame(enum.Enum):
    """Games with a documentation provider."""

    VICTORIA3 = "victoria3"


class PaginationKind(enum.Enum):
    """Strategies for splitting long listings across pages."""

    NONE = "none"
    ABSOLUTE = "absolute"
    ALPHABETIC = "alphabetic"


@dc.dataclass(frozen=True, slots=True)
class PaginationMode:
    """Pagination strategy plus its per-page limit."""

    kind: PaginationKind = PaginationKind.ABSOLUTE
    limit: int = DEFAULT_PAGE_LIMIT

    @classmethod
    def none(cls) -> PaginationMode:
        return cls(PaginationKind.NONE, 0)

    @classmethod
    def absolute(cls, limit: int = DEFAULT_PAGE_LIMIT) -> PaginationMode:
        return cls(PaginationKind.ABSOLUTE, limit)

    @classmethod
    def alphabetic(cls, sub_limit: int = DEFAULT_PAGE_LIMIT) -> PaginationMode:
        """Group by leading letter, splitting groups larger than ``sub_limit``."""
        return cls(PaginationKind.ALPHABETIC, sub_limit)


@dc.dataclass(frozen=True, slots=True)
class UrlScheme:
    """How generated links are written.

    ``base_url`` of ``None`` means links are relative between pages; otherwise
    every link is ``base_url`` followed by the page path.
    """

    base_url: str | None = None

    @property
    def is_relative(self) -> bool:
        return self.base_url is None

    @classmethod
    def relative(cls) -> UrlScheme:
        return cls()

    @classmethod
    def absolute(cls, base_url: str) -> UrlScheme:
        normalized = base_url if base_url.endswith("/") else f"{base_url}/"
        return cls(normalized)


@dc.dataclass(slots=True)
class ProfileConfig:
    """One documented game installation."""

    name: str
    title: str
    game: ProfileGame
    script_docs: Path
    game_data_dir: Path | None = None
    description: str | None = None


@dc.dataclass(slots=True)
class SiteConfig:
    """Aggregate configuration for a documentation build."""

    profiles: list[ProfileConfig]
    url_scheme: UrlScheme = dc.field(default_factory=UrlScheme.relative)
    output_dir: Path = Path("public")
    use_subfolder_for_single_profile: bool = False
    pagination: PaginationMode = dc.field(default_factory=PaginationMode)
    pygments_style: str = "monokai"

    @property
    def uses_profile_subfolders(self) -> bool:
        """Return whether page paths are nested under the profile name."""
        return len(self.profiles) > 1 or self.use_subfolder_for_single_profile

    def get_profile(self, name: str) -> ProfileConfig:
        """Return the profile called ``name``.

        Raises
        ------
        KeyError
            If no profile with that name is configured.
        """
        for profile in self.profiles:
            if profile.name == name:
                return profile
        msg = f"Unknown profile '{name}'."
        raise KeyError(msg)
