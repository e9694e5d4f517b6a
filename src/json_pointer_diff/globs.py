"""Glob-to-regex translation for JSON Pointer paths.

Supported wildcards:

- ``*``  matches any run of characters within one segment (``[^/]*``)
- ``**`` matches across segments (``.*``)
- ``?``  matches exactly one character within a segment (``[^/]``)

Every other character is matched literally.  The resulting pattern is meant
to be applied with ``fullmatch``.
"""

from __future__ import annotations

import re
import threading

from cachetools import LRUCache, cached

__all__ = ["glob_to_regex"]

_SINGLE_STAR = "[^/]*"
_DOUBLE_STAR = ".*"
_QUESTION = "[^/]"


def _translate(glob: str) -> str:
    parts: list[str] = []
    i = 0
    while i < len(glob):
        ch = glob[i]
        if ch == "*":
            if i + 1 < len(glob) and glob[i + 1] == "*":
                parts.append(_DOUBLE_STAR)
                i += 1
            else:
                parts.append(_SINGLE_STAR)
        elif ch == "?":
            parts.append(_QUESTION)
        else:
            parts.append(re.escape(ch))
        i += 1
    return "".join(parts)


# Compiled patterns are immutable, so one process-wide memo is safe.
@cached(cache=LRUCache(maxsize=256), lock=threading.Lock())
def glob_to_regex(glob: str) -> re.Pattern[str]:
    """Compile a path glob into a regular expression.

    >>> glob_to_regex("/items/*/price").fullmatch("/items/0/price") is not None
    True
    >>> glob_to_regex("/items/*/price").fullmatch("/items/0/sub/price") is None
    True
    >>> glob_to_regex("/meta/**").fullmatch("/meta/a/b") is not None
    True
    """
    return re.compile(_translate(glob))
