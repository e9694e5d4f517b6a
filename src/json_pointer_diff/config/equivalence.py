"""EquivalenceRegistry: precedence-ordered lookup of custom equality predicates.

Resolution order for a path, first hit wins:

1. exact path
2. first pattern (declaration order) that fully matches the path
3. longest registered prefix the path equals or lies under
4. type label of the normalized path, looked up in the type-keyed predicates
5. fallback predicate

Later tiers are never consulted once an earlier tier produced a predicate.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from json_pointer_diff.paths import matches_prefix

if TYPE_CHECKING:
    from json_pointer_diff.protocols import Equivalence

__all__ = ["EquivalenceRegistry", "PatternEquivalence"]


@dataclass(frozen=True, slots=True)
class PatternEquivalence:
    """A (compiled path pattern, predicate) pair."""

    pattern: re.Pattern[str]
    equivalence: Equivalence


def _empty() -> Mapping[str, Equivalence]:
    return MappingProxyType({})


def _prefix_order(item: tuple[str, Equivalence]) -> tuple[int, str]:
    # Longest prefix first; equal lengths fall back to lexicographic order.
    prefix = item[0]
    return -len(prefix), prefix


@dataclass(frozen=True, slots=True)
class EquivalenceRegistry:
    """Immutable store of equivalence predicates, one map or list per tier.

    Use ``EquivalenceRegistry.of(...)`` to build one from mutable collections;
    it copies everything and pre-sorts the prefix tier.
    """

    exact: Mapping[str, Equivalence] = field(default_factory=_empty)
    patterns: tuple[PatternEquivalence, ...] = ()
    prefixes: tuple[tuple[str, Equivalence], ...] = ()
    by_type: Mapping[str, Equivalence] = field(default_factory=_empty)
    fallback: Equivalence | None = None

    @classmethod
    def of(
        cls,
        exact: Mapping[str, Equivalence] | None = None,
        patterns: Iterable[PatternEquivalence] = (),
        prefixes: Mapping[str, Equivalence] | None = None,
        by_type: Mapping[str, Equivalence] | None = None,
        fallback: Equivalence | None = None,
    ) -> EquivalenceRegistry:
        return cls(
            exact=MappingProxyType(dict(exact or {})),
            patterns=tuple(patterns),
            prefixes=tuple(sorted((prefixes or {}).items(), key=_prefix_order)),
            by_type=MappingProxyType(dict(by_type or {})),
            fallback=fallback,
        )

    def resolve(self, path: str, type_label: str | None = None) -> Equivalence | None:
        """Return the predicate governing ``path``, or None for literal equality.

        Args:
            path:       The instance path being compared (not normalized).
            type_label: Label registered for the normalized path, if any.
        """
        found = self._resolve_exact(path)
        if found is None:
            found = self._resolve_pattern(path)
        if found is None:
            found = self._resolve_prefix(path)
        if found is None:
            found = self._resolve_by_type(type_label)
        if found is None:
            found = self.fallback
        return found

    def _resolve_exact(self, path: str) -> Equivalence | None:
        return self.exact.get(path)

    def _resolve_pattern(self, path: str) -> Equivalence | None:
        for entry in self.patterns:
            if entry.pattern.fullmatch(path):
                return entry.equivalence
        return None

    def _resolve_prefix(self, path: str) -> Equivalence | None:
        for prefix, equivalence in self.prefixes:
            if matches_prefix(path, prefix):
                return equivalence
        return None

    def _resolve_by_type(self, type_label: str | None) -> Equivalence | None:
        if type_label is None:
            return None
        return self.by_type.get(type_label)
