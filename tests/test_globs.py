"""Tests for glob_to_regex."""

from __future__ import annotations

import pytest

from json_pointer_diff.globs import glob_to_regex


def _matches(glob: str, path: str) -> bool:
    return glob_to_regex(glob).fullmatch(path) is not None


class TestWildcards:
    def test_single_star_stays_within_segment(self) -> None:
        assert _matches("/items/*/price", "/items/0/price")
        assert _matches("/items/*/price", "/items/{A}/price")
        assert not _matches("/items/*/price", "/items/0/sub/price")

    def test_single_star_matches_empty_run(self) -> None:
        assert _matches("/a*", "/a")

    def test_double_star_crosses_segments(self) -> None:
        assert _matches("/meta/**", "/meta/a/b/c")
        assert _matches("**/updatedAt", "/x/y/updatedAt")

    def test_question_mark_is_one_char(self) -> None:
        assert _matches("/v?", "/v1")
        assert not _matches("/v?", "/v12")
        assert not _matches("/a?b", "/a/b")


class TestLiterals:
    @pytest.mark.parametrize("glob", ["/a.b", "/a+b", "/(x)", "/a[0]", "/$^|{}"])
    def test_regex_metacharacters_are_literal(self, glob: str) -> None:
        assert _matches(glob, glob)

    def test_dot_does_not_match_any_char(self) -> None:
        assert not _matches("/a.b", "/aXb")

    def test_full_match_required(self) -> None:
        assert not _matches("/a", "/a/b")


def test_compiled_patterns_are_memoized() -> None:
    assert glob_to_regex("/memo/*") is glob_to_regex("/memo/*")
