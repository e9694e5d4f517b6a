"""Public API functions for json-pointer-diff.

This module provides the user-facing functions compare, compare_trees and
is_equivalent.  Each call creates a fresh ``DiffEngine`` so no state is
shared between calls; the ``DiffConfig`` passed in is immutable and may be
reused freely.
"""

from __future__ import annotations

from typing import Any

from json_pointer_diff.config.diff_config import DiffConfig
from json_pointer_diff.engine.walker import DiffEngine
from json_pointer_diff.protocols import TreeFactory
from json_pointer_diff.result import DiffEntry
from json_pointer_diff.tree.builder import TreeBuilder
from json_pointer_diff.tree.nodes import TreeNode

__all__ = ["compare", "compare_trees", "is_equivalent"]


def compare_trees(
    left: TreeNode | None,
    right: TreeNode | None,
    config: DiffConfig | None = None,
) -> list[DiffEntry]:
    """Compare two already-built trees.

    Args:
        left:   Left root, or None when missing.
        right:  Right root, or None when missing.
        config: Comparison rules. Defaults to ``DiffConfig()`` when None.

    Returns:
        The ordered list of differences; empty when the trees are equivalent.
    """
    return DiffEngine(config).compare(left, right)


def compare(
    left: Any,
    right: Any,
    config: DiffConfig | None = None,
    *,
    factory: TreeFactory | None = None,
) -> list[DiffEntry]:
    """Compare two JSON values and return their differences.

    Plain values (dicts, lists, scalars, dataclass instances ...) are turned
    into trees with ``factory``; ``TreeNode`` arguments are used as they are.

    Args:
        left:    First value.
        right:   Second value.
        config:  Comparison rules. Defaults to ``DiffConfig()`` when None.
        factory: Tree factory for plain values. Defaults to ``TreeBuilder()``.

    Returns:
        The ordered list of ``DiffEntry`` records.

    Raises:
        TypeError: If a value cannot be represented as JSON.
    """
    builder = factory if factory is not None else TreeBuilder()
    return compare_trees(_as_tree(left, builder), _as_tree(right, builder), config)


def is_equivalent(
    left: Any,
    right: Any,
    config: DiffConfig | None = None,
    *,
    factory: TreeFactory | None = None,
) -> bool:
    """Return True if ``compare(left, right, config)`` finds no differences."""
    return not compare(left, right, config, factory=factory)


def _as_tree(value: Any, factory: TreeFactory) -> TreeNode:
    if isinstance(value, TreeNode):
        return value
    return factory.build(value)
