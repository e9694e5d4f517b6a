"""PathIgnoreFilter: decides which paths are excluded from the diff."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from json_pointer_diff.paths import matches_prefix

__all__ = ["PathIgnoreFilter"]


@dataclass(frozen=True, slots=True)
class PathIgnoreFilter:
    """Exact, prefix and pattern ignore rules, OR-combined.

    A path is ignored when it is in ``exact``, equals or lies under any of
    ``prefixes``, or fully matches any of ``patterns``.
    """

    exact: frozenset[str] = frozenset()
    prefixes: tuple[str, ...] = ()
    patterns: tuple[re.Pattern[str], ...] = ()

    @classmethod
    def of(
        cls,
        exact: Iterable[str] = (),
        prefixes: Iterable[str] = (),
        patterns: Iterable[re.Pattern[str]] = (),
    ) -> PathIgnoreFilter:
        return cls(frozenset(exact), tuple(prefixes), tuple(patterns))

    def should_ignore(self, path: str) -> bool:
        return (
            path in self.exact
            or any(matches_prefix(path, prefix) for prefix in self.prefixes)
            or any(pattern.fullmatch(path) for pattern in self.patterns)
        )
