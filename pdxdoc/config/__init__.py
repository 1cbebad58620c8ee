"""Load and validate site configuration YAML for pdxdoc builds.

This subpackage parses the project's ``pdxdoc.yaml`` file and produces
strongly typed dataclasses (:class:`SiteConfig`, :class:`ProfileConfig`,
:class:`UrlScheme`, :class:`PaginationMode`) that the page builders, the site
mapper and the rendering driver consume. The primary entry point is
:func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from pdxdoc.config import load_site_config
>>> site = load_site_config(Path("pdxdoc.yaml"))  # doctest: +SKIP
>>> site.get_profile("vic3").title  # doctest: +SKIP
'Victoria 3'
"""

from .loader import load_site_config
from .models import (
    PaginationKind,
    PaginationMode,
    ProfileConfig,
    ProfileGame,
    SiteConfig,
    SiteConfigError,
    UrlScheme,
)

__all__ = [
    "PaginationKind",
    "PaginationMode",
    "ProfileConfig",
    "ProfileGame",
    "SiteConfig",
    "SiteConfigError",
    "UrlScheme",
    "load_site_config",
]
