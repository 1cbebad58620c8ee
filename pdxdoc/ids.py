r"""Deterministic identity hashing and label helpers.

Every entry, category and page id is derived from a stable identity string so
repeated runs over the same input produce the same ids and the same URLs.

Example
-------
>>> from pdxdoc.ids import humanize_camel_case, stable_hash
>>> stable_hash("scope_country") == stable_hash("scope_country")
True
>>> humanize_camel_case("supported_scopes")
'Supported Scopes'
"""

from __future__ import annotations

import hashlib

_SEPARATOR = "\x1f"


def stable_hash(*parts: object) -> int:
    """Return a 64-bit hash of ``parts`` that is stable across processes.

    Parameters
    ----------
    *parts : object
        Identity components; each is converted with ``str`` and joined with a
        unit separator so ``("ab", "c")`` and ``("a", "bc")`` never collide.

    Returns
    -------
    int
        Unsigned 64-bit integer derived from a BLAKE2b digest.
    """
    joined = _SEPARATOR.join(str(part) for part in parts)
    digest = hashlib.blake2b(joined.encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")


def humanize_camel_case(text: str) -> str:
    """Turn ``snake_case`` identifiers into title-cased labels."""
    chars: list[str] = []
    make_upper = True
    for char in text:
        if make_upper:
            chars.append(char.upper())
            make_upper = False
        elif char == "_":
            chars.append(" ")
            make_upper = True
        else:
            chars.append(char)
    return "".join(chars)


__all__ = ["humanize_camel_case", "stable_hash"]
