"""Utility helpers shared by the pdxdoc configuration loader."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from .models import (
    PaginationKind,
    PaginationMode,
    ProfileConfig,
    ProfileGame,
    SiteConfigError,
    UrlScheme,
)


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _optional_path(value: object | None, base_dir: Path) -> Path | None:
    """Resolve an optional path relative to the configuration file."""
    text = _optional_str(value)
    if text is None:
        return None
    return _resolve_path(text, base_dir)


def _resolve_path(value: str, base_dir: Path) -> Path:
    path = Path(value).expanduser()
    return path if path.is_absolute() else base_dir / path


def _build_url_scheme(payload: object | None) -> UrlScheme:
    """Build a UrlScheme from ``relative`` or a mapping with ``base_url``."""
    match payload:
        case None | "relative":
            return UrlScheme.relative()
        case {"base_url": str() as base_url} if base_url.strip():
            return UrlScheme.absolute(base_url.strip())
        case _:
            msg = (
                "url_scheme must be 'relative' or a mapping with a non-empty "
                f"'base_url', got {payload!r}."
            )
            raise SiteConfigError(msg)


def _build_pagination(payload: typ.Mapping[str, typ.Any] | None) -> PaginationMode:
    """Build a PaginationMode from ``{type: ..., limit: ...}``."""
    if not payload:
        return PaginationMode()

    raw_kind = str(payload.get("type", PaginationKind.ABSOLUTE.value)).lower()
    try:
        kind = PaginationKind(raw_kind)
    except ValueError as exc:
        msg = f"Unknown pagination type '{raw_kind}'."
        raise SiteConfigError(msg) from exc

    if kind is PaginationKind.NONE:
        return PaginationMode.none()

    limit = payload.get("limit", PaginationMode().limit)
    if kind is PaginationKind.ALPHABETIC:
        limit = payload.get("sub_limit", limit)
    if not isinstance(limit, int) or isinstance(limit, bool) or limit < 1:
        msg = f"Pagination limit must be a positive integer, got {limit!r}."
        raise SiteConfigError(msg)
    return PaginationMode(kind, limit)


def _build_profile(
    payload: typ.Mapping[str, typ.Any], *, base_dir: Path
) -> ProfileConfig:
    """Build a ProfileConfig, resolving paths against ``base_dir``."""
    name = _optional_str(payload.get("name"))
    if name is None:
        msg = "Every profile needs a 'name'."
        raise SiteConfigError(msg)

    raw_game = _optional_str(payload.get("game")) or ProfileGame.VICTORIA3.value
    try:
        game = ProfileGame(raw_game.lower())
    except ValueError as exc:
        msg = f"Profile '{name}' uses unknown game '{raw_game}'."
        raise SiteConfigError(msg) from exc

    script_docs = _optional_str(payload.get("script_docs"))
    if script_docs is None:
        msg = f"Profile '{name}' is missing 'script_docs'."
        raise SiteConfigError(msg)

    return ProfileConfig(
        name=name,
        title=_optional_str(payload.get("title")) or name,
        game=game,
        script_docs=_resolve_path(script_docs, base_dir),
        game_data_dir=_optional_path(payload.get("game_data_dir"), base_dir),
        description=_optional_str(payload.get("description")),
    )
