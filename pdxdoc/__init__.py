"""Static documentation sites for game script APIs.

This package turns a game's script documentation dump (effects, triggers,
modifiers, scopes and friends) into cross-linked HTML pages.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from pdxdoc import main
>>> main()  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
