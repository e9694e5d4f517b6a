"""DiffConfig and DiffConfigBuilder: the immutable rule set of a comparison.

``DiffConfig`` aggregates the three rule registries (list rules, ignores,
equivalences), the normalized-path -> type-label map and the root path.
It is built through ``DiffConfig.builder()``, which validates every
registration when it is made and copies all collections into read-only
containers on ``build()``.  A built config carries no mutable state and can
be shared by any number of concurrent comparisons.

Example::

    from json_pointer_diff import DiffConfig, ListRule
    from json_pointer_diff.equivalences import case_insensitive

    config = (
        DiffConfig.builder()
        .list_rule("/items", ListRule.identity("id"))
        .ignore_prefix("/meta")
        .equivalent_at("/name", case_insensitive())
        .build()
    )
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from json_pointer_diff import log
from json_pointer_diff.config.equivalence import EquivalenceRegistry, PatternEquivalence
from json_pointer_diff.config.ignore import PathIgnoreFilter
from json_pointer_diff.config.list_rule import ListRule
from json_pointer_diff.config.list_rules import ListRuleRegistry
from json_pointer_diff.errors import DiffConfigError
from json_pointer_diff.globs import glob_to_regex
from json_pointer_diff.paths import ROOT, normalize_path

if TYPE_CHECKING:
    from json_pointer_diff.protocols import Equivalence

__all__ = ["DiffConfig", "DiffConfigBuilder"]


def _no_hints() -> Mapping[str, str]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class DiffConfig:
    """Immutable configuration for one or many comparisons.

    ``DiffConfig()`` is the empty configuration: nothing ignored, literal
    equality everywhere, positional array pairing, walk from ``/``.

    Attributes:
        list_rules:   Array pairing rules keyed by normalized path.
        ignores:      Exact, prefix and pattern ignore rules.
        equivalences: Custom equality predicates with tiered precedence.
        type_hints:   Normalized path -> type label, used by the type tier of
                      equivalence resolution.
        root_path:    Path assigned to the two roots being compared.
    """

    list_rules: ListRuleRegistry = field(default_factory=ListRuleRegistry)
    ignores: PathIgnoreFilter = field(default_factory=PathIgnoreFilter)
    equivalences: EquivalenceRegistry = field(default_factory=EquivalenceRegistry)
    type_hints: Mapping[str, str] = field(default_factory=_no_hints)
    root_path: str = ROOT

    def __post_init__(self) -> None:
        # frozen: bypass __setattr__ to store a read-only copy
        object.__setattr__(self, "type_hints", MappingProxyType(dict(self.type_hints)))

    @staticmethod
    def builder() -> DiffConfigBuilder:
        return DiffConfigBuilder()

    def list_rule_for(self, path: str) -> ListRule | None:
        """Return the list rule for the array at ``path`` (looked up normalized)."""
        return self.list_rules.rule_for(normalize_path(path))

    def is_ignored(self, path: str) -> bool:
        return self.ignores.should_ignore(path)

    def equivalence_at(self, path: str) -> Equivalence | None:
        """Return the equivalence predicate governing ``path``, if any."""
        type_label = self.type_hints.get(normalize_path(path))
        return self.equivalences.resolve(path, type_label)

    def type_hint_for(self, path: str) -> str | None:
        return self.type_hints.get(normalize_path(path))


class DiffConfigBuilder:
    """Staged, validating builder for ``DiffConfig``.

    Every registration method validates its arguments immediately and raises
    ``DiffConfigError`` on a None or empty path, a missing rule, a
    non-callable predicate or a blank type label.  All methods return the
    builder so calls can be chained.  Registering the same path twice keeps
    the last rule.
    """

    def __init__(self) -> None:
        self._list_rules: dict[str, ListRule] = {}
        self._ignore_exact: set[str] = set()
        self._ignore_prefixes: list[str] = []
        self._ignore_patterns: list[re.Pattern[str]] = []
        self._equivalence_exact: dict[str, Equivalence] = {}
        self._equivalence_patterns: list[PatternEquivalence] = []
        self._equivalence_prefixes: dict[str, Equivalence] = {}
        self._equivalence_by_type: dict[str, Equivalence] = {}
        self._equivalence_fallback: Equivalence | None = None
        self._type_hints: dict[str, str] = {}
        self._root_path: str = ROOT

    # ------------------------------------------------------------------
    # List rules
    # ------------------------------------------------------------------

    def list_rule(self, path: str, rule: ListRule) -> DiffConfigBuilder:
        """Pair the elements of the array at normalized ``path`` according to ``rule``."""
        _validate_path(path, "path")
        if rule is None:
            msg = "rule cannot be None"
            raise DiffConfigError(msg)
        if not isinstance(rule, ListRule):
            msg = f"rule must be a ListRule, got {type(rule)!r}"
            raise DiffConfigError(msg)
        self._list_rules[path] = rule
        return self

    # ------------------------------------------------------------------
    # Ignores
    # ------------------------------------------------------------------

    def ignore(self, path: str) -> DiffConfigBuilder:
        _validate_path(path, "path")
        self._ignore_exact.add(path)
        return self

    def ignore_prefix(self, prefix: str) -> DiffConfigBuilder:
        """Ignore ``prefix`` itself and everything underneath it."""
        _validate_path(prefix, "prefix")
        self._ignore_prefixes.append(prefix)
        return self

    def ignore_pattern(self, pattern: re.Pattern[str] | str) -> DiffConfigBuilder:
        """Ignore every path that fully matches ``pattern``."""
        self._ignore_patterns.append(_compile(pattern))
        return self

    def ignore_glob(self, glob: str) -> DiffConfigBuilder:
        """Ignore every path matching ``glob`` (``*``, ``**`` and ``?`` wildcards)."""
        if glob is None:
            msg = "glob cannot be None"
            raise DiffConfigError(msg)
        if not isinstance(glob, str):
            msg = f"glob must be a str, got {type(glob)!r}"
            raise DiffConfigError(msg)
        self._ignore_patterns.append(glob_to_regex(glob))
        return self

    # ------------------------------------------------------------------
    # Equivalences
    # ------------------------------------------------------------------

    def equivalent_at(self, path: str, equivalence: Equivalence) -> DiffConfigBuilder:
        _validate_path(path, "path")
        _validate_equivalence(equivalence)
        self._equivalence_exact[path] = equivalence
        return self

    def equivalent_under(self, prefix: str, equivalence: Equivalence) -> DiffConfigBuilder:
        """Apply ``equivalence`` at ``prefix`` and below; the longest prefix wins."""
        _validate_path(prefix, "prefix")
        _validate_equivalence(equivalence)
        self._equivalence_prefixes[prefix] = equivalence
        return self

    def equivalent_pattern(
        self, pattern: re.Pattern[str] | str, equivalence: Equivalence
    ) -> DiffConfigBuilder:
        """Apply ``equivalence`` to paths fully matching ``pattern``; first declared wins."""
        compiled = _compile(pattern)
        _validate_equivalence(equivalence)
        self._equivalence_patterns.append(PatternEquivalence(compiled, equivalence))
        return self

    def equivalent_for_type(self, label: str, equivalence: Equivalence) -> DiffConfigBuilder:
        """Apply ``equivalence`` to every path whose type hint is ``label``."""
        _validate_label(label, "label")
        _validate_equivalence(equivalence)
        self._equivalence_by_type[label] = equivalence
        return self

    def equivalent_fallback(self, equivalence: Equivalence) -> DiffConfigBuilder:
        _validate_equivalence(equivalence)
        self._equivalence_fallback = equivalence
        return self

    # ------------------------------------------------------------------
    # Type hints
    # ------------------------------------------------------------------

    def type_hint(self, path: str, label: str) -> DiffConfigBuilder:
        """Label the normalized ``path`` with a type, for ``equivalent_for_type``."""
        _validate_path(path, "path")
        _validate_label(label, "label")
        self._type_hints[path] = label
        return self

    def type_hints(self, hints: Mapping[str, str]) -> DiffConfigBuilder:
        """Register many hints at once, e.g. the output of ``infer_type_hints``."""
        if hints is None:
            msg = "hints cannot be None"
            raise DiffConfigError(msg)
        for path, label in hints.items():
            self.type_hint(path, label)
        return self

    # ------------------------------------------------------------------
    # Other
    # ------------------------------------------------------------------

    def root_path(self, path: str | None) -> DiffConfigBuilder:
        """Set the path of the compared roots; None or blank means ``/``."""
        self._root_path = ROOT if path is None or not path.strip() else path
        return self

    def build(self) -> DiffConfig:
        config = DiffConfig(
            list_rules=ListRuleRegistry.of(self._list_rules),
            ignores=PathIgnoreFilter.of(
                self._ignore_exact, self._ignore_prefixes, self._ignore_patterns
            ),
            equivalences=EquivalenceRegistry.of(
                exact=self._equivalence_exact,
                patterns=self._equivalence_patterns,
                prefixes=self._equivalence_prefixes,
                by_type=self._equivalence_by_type,
                fallback=self._equivalence_fallback,
            ),
            type_hints=MappingProxyType(dict(self._type_hints)),
            root_path=self._root_path,
        )
        log.debug(
            "built diff config: %d list rules, %d ignores, %d equivalences, %d type hints",
            len(self._list_rules),
            len(self._ignore_exact) + len(self._ignore_prefixes) + len(self._ignore_patterns),
            len(self._equivalence_exact)
            + len(self._equivalence_patterns)
            + len(self._equivalence_prefixes)
            + len(self._equivalence_by_type)
            + (self._equivalence_fallback is not None),
            len(self._type_hints),
        )
        return config


def _validate_path(path: Any, name: str) -> None:
    if path is None:
        msg = f"{name} cannot be None"
        raise DiffConfigError(msg)
    if not isinstance(path, str):
        msg = f"{name} must be a str, got {type(path)!r}"
        raise DiffConfigError(msg)
    if not path:
        msg = f"{name} cannot be empty"
        raise DiffConfigError(msg)


def _validate_label(label: Any, name: str) -> None:
    if label is None:
        msg = f"{name} cannot be None"
        raise DiffConfigError(msg)
    if not isinstance(label, str) or not label.strip():
        msg = f"{name} cannot be blank"
        raise DiffConfigError(msg)


def _validate_equivalence(equivalence: Any) -> None:
    if equivalence is None:
        msg = "equivalence predicate cannot be None"
        raise DiffConfigError(msg)
    if not callable(equivalence):
        msg = f"equivalence predicate must be callable, got {type(equivalence)!r}"
        raise DiffConfigError(msg)


def _compile(pattern: Any) -> re.Pattern[str]:
    if pattern is None:
        msg = "pattern cannot be None"
        raise DiffConfigError(msg)
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except (re.error, TypeError) as exc:
        msg = f"invalid path pattern {pattern!r}: {exc}"
        raise DiffConfigError(msg) from exc
