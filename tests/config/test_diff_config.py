"""Tests for DiffConfig, DiffConfigBuilder and the rule registries it builds.

Covers:
- eager validation of every registration
- ignore rules (exact / prefix / pattern / glob)
- equivalence precedence: exact > pattern > prefix > type > fallback
- normalized-path lookups for list rules and type hints
- immutability of the built configuration
"""

from __future__ import annotations

import dataclasses
import re

import pytest

from json_pointer_diff.config import (
    DiffConfig,
    EquivalenceRegistry,
    ListRule,
    PathIgnoreFilter,
)
from json_pointer_diff.errors import DiffConfigError


def _always(left: object, right: object) -> bool:
    return True


def _named(name: str):  # type: ignore[no-untyped-def]
    def predicate(left: object, right: object) -> bool:
        return True

    predicate.__name__ = name
    return predicate


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestBuilderValidation:
    @pytest.mark.parametrize("path", [None, ""])
    def test_list_rule_path(self, path: str | None) -> None:
        with pytest.raises(DiffConfigError):
            DiffConfig.builder().list_rule(path, ListRule.none())  # type: ignore[arg-type]

    def test_list_rule_requires_rule(self) -> None:
        with pytest.raises(DiffConfigError, match="rule cannot be None"):
            DiffConfig.builder().list_rule("/items", None)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "call",
        [
            lambda b: b.ignore(None),
            lambda b: b.ignore(""),
            lambda b: b.ignore_prefix(None),
            lambda b: b.ignore_pattern(None),
            lambda b: b.ignore_glob(None),
            lambda b: b.ignore_glob(123),
            lambda b: b.equivalent_at("", _always),
            lambda b: b.equivalent_at("/a", None),
            lambda b: b.equivalent_at("/a", "not callable"),
            lambda b: b.equivalent_under(None, _always),
            lambda b: b.equivalent_pattern(None, _always),
            lambda b: b.equivalent_for_type("  ", _always),
            lambda b: b.equivalent_for_type(None, _always),
            lambda b: b.equivalent_fallback(None),
            lambda b: b.type_hint("/a", ""),
            lambda b: b.type_hint(None, "x"),
            lambda b: b.type_hints(None),
        ],
    )
    def test_rejects_invalid_registration(self, call) -> None:  # type: ignore[no-untyped-def]
        with pytest.raises(DiffConfigError):
            call(DiffConfig.builder())

    def test_invalid_regex_is_config_error(self) -> None:
        with pytest.raises(DiffConfigError, match="invalid path pattern"):
            DiffConfig.builder().ignore_pattern("([")

    def test_builder_methods_chain(self) -> None:
        builder = DiffConfig.builder()
        assert builder.ignore("/a") is builder
        assert builder.equivalent_fallback(_always) is builder


# ---------------------------------------------------------------------------
# Root path
# ---------------------------------------------------------------------------


class TestRootPath:
    def test_default_root(self) -> None:
        assert DiffConfig().root_path == "/"
        assert DiffConfig.builder().build().root_path == "/"

    @pytest.mark.parametrize("path", [None, "", "   "])
    def test_blank_root_becomes_slash(self, path: str | None) -> None:
        assert DiffConfig.builder().root_path(path).build().root_path == "/"

    def test_custom_root(self) -> None:
        assert DiffConfig.builder().root_path("/payload").build().root_path == "/payload"


# ---------------------------------------------------------------------------
# Ignores
# ---------------------------------------------------------------------------


class TestIgnores:
    def test_exact(self) -> None:
        config = DiffConfig.builder().ignore("/a").build()
        assert config.is_ignored("/a")
        assert not config.is_ignored("/a/b")

    def test_prefix_covers_itself_and_descendants(self) -> None:
        config = DiffConfig.builder().ignore_prefix("/meta").build()
        assert config.is_ignored("/meta")
        assert config.is_ignored("/meta/x/y")
        assert not config.is_ignored("/metadata")

    def test_pattern_full_match(self) -> None:
        config = DiffConfig.builder().ignore_pattern(re.compile(r"/items/\d+/ts")).build()
        assert config.is_ignored("/items/3/ts")
        assert not config.is_ignored("/items/3/ts2")

    def test_pattern_from_string(self) -> None:
        config = DiffConfig.builder().ignore_pattern(r".*/updatedAt").build()
        assert config.is_ignored("/a/b/updatedAt")

    def test_glob(self) -> None:
        config = DiffConfig.builder().ignore_glob("/items/*/ts").build()
        assert config.is_ignored("/items/{A}/ts")
        assert not config.is_ignored("/items/a/b/ts")

    def test_filter_directly(self) -> None:
        ignore = PathIgnoreFilter.of(exact=["/x"], prefixes=["/p"])
        assert ignore.should_ignore("/x")
        assert ignore.should_ignore("/p/q")
        assert not ignore.should_ignore("/y")


# ---------------------------------------------------------------------------
# Equivalence precedence
# ---------------------------------------------------------------------------


class TestEquivalencePrecedence:
    @pytest.fixture
    def config(self) -> DiffConfig:
        return (
            DiffConfig.builder()
            .equivalent_fallback(_named("fallback"))
            .equivalent_for_type("T", _named("type"))
            .equivalent_under("/a", _named("prefix_a"))
            .equivalent_under("/a/b", _named("prefix_ab"))
            .equivalent_pattern(r"/a/b/p.*", _named("pattern1"))
            .equivalent_pattern(r"/a/b/pq", _named("pattern2"))
            .equivalent_at("/a/b/pq", _named("exact"))
            .type_hint("/t", "T")
            .type_hint("/a/b/c", "T")
            .build()
        )

    @staticmethod
    def _name(config: DiffConfig, path: str) -> str | None:
        found = config.equivalence_at(path)
        return None if found is None else found.__name__

    def test_exact_beats_everything(self, config: DiffConfig) -> None:
        assert self._name(config, "/a/b/pq") == "exact"

    def test_first_declared_pattern_wins(self, config: DiffConfig) -> None:
        assert self._name(config, "/a/b/px") == "pattern1"

    def test_longest_prefix_wins(self, config: DiffConfig) -> None:
        assert self._name(config, "/a/b/c") == "prefix_ab"
        assert self._name(config, "/a/z") == "prefix_a"

    def test_prefix_matches_itself(self, config: DiffConfig) -> None:
        assert self._name(config, "/a") == "prefix_a"

    def test_prefix_beats_type(self, config: DiffConfig) -> None:
        """/a/b/c has a type hint, but the prefix tier is consulted first."""
        assert self._name(config, "/a/b/c") == "prefix_ab"

    def test_type_tier_uses_normalized_path(self, config: DiffConfig) -> None:
        assert self._name(config, "/t") == "type"
        assert self._name(config, "/t/3") == "type"

    def test_fallback_last(self, config: DiffConfig) -> None:
        assert self._name(config, "/elsewhere") == "fallback"

    def test_no_predicate_without_rules(self) -> None:
        assert DiffConfig().equivalence_at("/x") is None

    def test_registry_prefix_tie_break_is_lexicographic(self) -> None:
        registry = EquivalenceRegistry.of(prefixes={"/b": _named("b"), "/a": _named("a")})
        assert [prefix for prefix, _ in registry.prefixes] == ["/a", "/b"]

    def test_registry_prefixes_sorted_longest_first(self) -> None:
        registry = EquivalenceRegistry.of(
            prefixes={"/a": _always, "/a/b/c": _always, "/a/b": _always}
        )
        assert [prefix for prefix, _ in registry.prefixes] == ["/a/b/c", "/a/b", "/a"]


# ---------------------------------------------------------------------------
# Lookups and immutability
# ---------------------------------------------------------------------------


class TestLookups:
    def test_list_rule_uses_normalized_path(self) -> None:
        config = DiffConfig.builder().list_rule("/teams/members", ListRule.identity("id")).build()
        assert config.list_rule_for("/teams/3/members") == ListRule.identity("id")
        assert config.list_rule_for("/teams/{X}/members") == ListRule.identity("id")
        assert config.list_rule_for("/teams") is None

    def test_type_hint_uses_normalized_path(self) -> None:
        config = DiffConfig.builder().type_hints({"/items/price": "decimal.Decimal"}).build()
        assert config.type_hint_for("/items/7/price") == "decimal.Decimal"
        assert config.type_hint_for("/items") is None

    def test_last_registration_wins(self) -> None:
        config = (
            DiffConfig.builder()
            .list_rule("/a", ListRule.identity("id"))
            .list_rule("/a", ListRule.none())
            .build()
        )
        assert config.list_rule_for("/a") == ListRule.none()


class TestImmutability:
    def test_config_is_frozen(self) -> None:
        config = DiffConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.root_path = "/x"  # type: ignore[misc]

    def test_builder_changes_after_build_do_not_leak(self) -> None:
        builder = DiffConfig.builder().ignore("/a")
        config = builder.build()
        builder.ignore("/b").type_hint("/c", "T").list_rule("/d", ListRule.none())
        assert not config.is_ignored("/b")
        assert config.type_hint_for("/c") is None
        assert config.list_rule_for("/d") is None

    def test_type_hints_are_read_only(self) -> None:
        config = DiffConfig.builder().type_hint("/a", "T").build()
        with pytest.raises(TypeError):
            config.type_hints["/b"] = "U"  # type: ignore[index]

    def test_direct_construction_copies_type_hints(self) -> None:
        hints = {"/a": "T"}
        config = DiffConfig(type_hints=hints)
        hints["/b"] = "U"
        assert config.type_hint_for("/b") is None
        with pytest.raises(TypeError):
            config.type_hints["/c"] = "V"  # type: ignore[index]
