"""JSON Pointer (RFC 6901) helpers used to address nodes and look up rules.

Paths produced by the diff engine are built with ``child()``.  Array
elements paired by position get a numeric segment (``/items/0``); elements
paired by identity get a braced segment (``/items/{A-17}``).

``normalize_path()`` strips both kinds of segment so that a rule declared once
for an array shape (``/teams/members``) applies to every instance of that
array, whatever the indices or identities of its ancestors.
"""

from __future__ import annotations

import re

from json_pointer_diff.tree.nodes import TreeNode

__all__ = [
    "ROOT",
    "child",
    "escape",
    "is_identity_segment",
    "matches_prefix",
    "normalize_path",
    "normalize_prefix",
    "resolve_pointer",
    "split",
    "unescape",
]

ROOT = "/"

_INDEX_SEGMENT = re.compile(r"[0-9]+")


def escape(raw: str) -> str:
    """Escape a member name for use as a pointer segment (``~`` -> ``~0``, ``/`` -> ``~1``)."""
    return raw.replace("~", "~0").replace("/", "~1")


def unescape(segment: str) -> str:
    """Reverse ``escape()``.  ``~1`` is decoded before ``~0`` as RFC 6901 requires."""
    return segment.replace("~1", "/").replace("~0", "~")


def child(base: str, key: str | int) -> str:
    """Append one escaped segment to ``base``.

    >>> child("/", "name")
    '/name'
    >>> child("/items", 3)
    '/items/3'
    >>> child("/a", "x/y")
    '/a/x~1y'
    """
    segment = escape(str(key))
    if base.endswith("/"):
        return base + segment
    return f"{base}/{segment}"


def split(path: str) -> list[str]:
    """Split a pointer into its raw (still escaped) non-empty segments."""
    return [segment for segment in path.split("/") if segment]


def normalize_prefix(prefix: str) -> str:
    """Ensure a prefix ends with a slash so ``/meta`` never matches ``/metadata``."""
    return prefix if prefix.endswith("/") else prefix + "/"


def matches_prefix(path: str, prefix: str) -> bool:
    """True if ``path`` is ``prefix`` itself or lies underneath it."""
    normalized = normalize_prefix(prefix)
    return path.startswith(normalized) or path == normalized[:-1]


def is_identity_segment(segment: str) -> bool:
    return segment.startswith("{") and segment.endswith("}")


def _is_structural(segment: str) -> bool:
    return not _INDEX_SEGMENT.fullmatch(segment) and not is_identity_segment(segment)


def normalize_path(path: str | None) -> str:
    """Strip array indices and identity segments from a pointer.

    Converts an instance path into the structural path used for list-rule
    and type-label lookups:

    - ``/items/0/name``          -> ``/items/name``
    - ``/items/{id-1}/name``     -> ``/items/name``
    - ``/users/123/address/city`` -> ``/users/address/city``

    An empty or None path, and any path that strips down to nothing, become
    ``/``.
    """
    if not path or path == ROOT:
        return ROOT
    kept = [segment for segment in split(path) if _is_structural(segment)]
    if not kept:
        return ROOT
    return "/" + "/".join(kept)


def resolve_pointer(node: TreeNode, pointer: str) -> TreeNode | None:
    """Follow ``pointer`` from ``node`` and return the target, or None if missing.

    A pointer without a leading slash is treated as a single member name
    (escaped before traversal).  Object segments select members; array
    segments must be decimal indices.
    """
    if not pointer.startswith("/"):
        pointer = "/" + escape(pointer)
    current: TreeNode | None = node
    for raw in pointer[1:].split("/"):
        if current is None:
            return None
        segment = unescape(raw)
        if current.is_object:
            current = current.get(segment)
        elif current.is_array and _INDEX_SEGMENT.fullmatch(segment):
            current = current.element(int(segment))
        else:
            return None
    return current
