"""Cyclopts CLI entrypoint for generating script documentation sites.

The ``pdxdoc`` console script reads a site configuration (one or more game
profiles, each pointing at a script docs dump), builds every page, and writes
the static HTML into the configured output directory.

Examples
--------
Generate the site described by ``pdxdoc.yaml``:

>>> from pdxdoc.cli import main
>>> main()  # doctest: +SKIP

Write into a different folder with debug logging:

>>> from pdxdoc.cli import app
>>> app(
...     ["generate", "--output-dir", "dist", "--verbose"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import dataclasses as dc
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter
from loguru import logger

from .config import SiteConfigError, load_site_config
from .errors import PdxdocError
from .generator import build_site

DEFAULT_CONFIG = Path("pdxdoc.yaml")

app = App(name="pdxdoc", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool) -> None:
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "INFO")


@app.command(help="Generate the static documentation site for every profile.")
def generate(
    *,
    config: typ.Annotated[
        Path, Parameter(help="Path to site config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(help="Override the output folder", env_var="INPUT_OUTPUT_DIR"),
    ] = None,
    verbose: typ.Annotated[
        bool, Parameter(help="Log debug messages", env_var="INPUT_VERBOSE")
    ] = False,
) -> None:
    """Generate documentation pages for every configured profile.

    Parameters
    ----------
    config : Path, optional
        Path to the ``pdxdoc.yaml`` configuration file (overridable via
        ``INPUT_CONFIG``).
    output_dir : Path or None, optional
        Override the output directory declared in the configuration.
    verbose : bool, optional
        Emit debug logging on stderr.

    Returns
    -------
    None
        Writes the site and prints every generated path.
    """
    _configure_logging(verbose=verbose)
    try:
        site_config = load_site_config(config)
        if output_dir is not None:
            site_config = dc.replace(site_config, output_dir=output_dir)
        written = build_site(site_config)
    except (PdxdocError, SiteConfigError) as exc:
        logger.error("Generation failed: {}", exc)
        raise

    for path in written:
        print(f"wrote {_format_path(path)}")


def main() -> None:
    """Invoke the Cyclopts application that powers the ``pdxdoc`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
