"""Load site configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import _build_pagination, _build_profile, _build_url_scheme, _optional_str
from .models import ProfileConfig, SiteConfig, SiteConfigError


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML configuration describing profiles and site layout.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML configuration file (for example,
        ``pdxdoc.yaml``). Relative profile paths resolve against its
        directory.

    Returns
    -------
    SiteConfig
        Parsed site configuration with at least one profile.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If required sections or fields are missing or invalid (for example,
        no profiles are defined or a profile names an unknown game).
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from pdxdoc.config import load_site_config
    >>> config = load_site_config(Path("pdxdoc.yaml"))  # doctest: +SKIP
    >>> [profile.name for profile in config.profiles]  # doctest: +SKIP
    ['vic3']
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    base_dir = path.resolve().parent

    profiles_raw = raw.get("profiles") or []
    if not profiles_raw:
        msg = "No profiles defined in configuration."
        raise SiteConfigError(msg)
    if not isinstance(profiles_raw, list):
        msg = "'profiles' must be a list of mappings."
        raise SiteConfigError(msg)

    profiles: list[ProfileConfig] = []
    for payload in profiles_raw:
        match payload:
            case dict():
                profiles.append(_build_profile(payload, base_dir=base_dir))
            case _:
                msg = f"Profile entries must be mappings, got {payload!r}."
                raise SiteConfigError(msg)

    names = [profile.name for profile in profiles]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        msg = f"Duplicate profile names: {', '.join(duplicates)}."
        raise SiteConfigError(msg)

    output_dir = Path(_optional_str(raw.get("output_dir")) or "public")
    if not output_dir.is_absolute():
        output_dir = base_dir / output_dir

    return SiteConfig(
        profiles=profiles,
        url_scheme=_build_url_scheme(raw.get("url_scheme")),
        output_dir=output_dir,
        use_subfolder_for_single_profile=bool(
            raw.get("use_subfolder_for_single_profile", False)
        ),
        pagination=_build_pagination(raw.get("pagination")),
        pygments_style=_optional_str(raw.get("pygments_style")) or "monokai",
    )
