"""DiffEngine: lock-step recursive walk over two JSON trees.

Architecture:
- Every visited path first passes the skip test: ignored paths, identical
  nodes, literally equal leaves and paths whose equivalence predicate
  accepts the pair produce nothing, including for their subtrees.
- Leaves (or a missing side) that survive the skip test produce exactly one
  CHANGED entry.
- OBJECT pairs recurse over the sorted union of member names.
- ARRAY pairs recurse by position, or by identity when a ListRule applies
  to the normalized array path.  Elements present on one side only become
  ADDED / REMOVED entries.
- Any other pairing (object vs array) is one CHANGED entry.

Output order is fully determined by the inputs: member names and identity
keys are visited in sorted order, positions in ascending order.
"""

from __future__ import annotations

import time

from json_pointer_diff import log
from json_pointer_diff.config.diff_config import DiffConfig
from json_pointer_diff.engine.indexer import build_index
from json_pointer_diff.paths import child
from json_pointer_diff.result import DiffEntry
from json_pointer_diff.tree.nodes import TreeNode

__all__ = ["DiffEngine"]


class DiffEngine:
    """Compares two ``TreeNode`` trees under a ``DiffConfig``.

    The engine holds only the (immutable) configuration; every ``compare()``
    call owns its own accumulator, so one engine can serve concurrent callers.

    Example::

        from json_pointer_diff.engine import DiffEngine
        from json_pointer_diff.tree import TreeBuilder

        builder = TreeBuilder()
        engine = DiffEngine()
        entries = engine.compare(builder.build({"a": 1}), builder.build({"a": 2}))
        # [DiffEntry(path='/a', kind=<DiffKind.CHANGED: 'changed'>, ...)]
    """

    def __init__(self, config: DiffConfig | None = None) -> None:
        self._config: DiffConfig = config if config is not None else DiffConfig()

    @property
    def config(self) -> DiffConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def compare(self, left: TreeNode | None, right: TreeNode | None) -> list[DiffEntry]:
        """Return the ordered differences between ``left`` and ``right``.

        Args:
            left:  Left root, or None when missing.
            right: Right root, or None when missing.

        Returns:
            A new list of ``DiffEntry``; empty when the trees are equivalent.
        """
        t0 = time.perf_counter()
        diffs: list[DiffEntry] = []
        self._walk(self._config.root_path, left, right, diffs)
        log.debug(
            "compared trees from %s: %d differences in %.3f ms",
            self._config.root_path,
            len(diffs),
            (time.perf_counter() - t0) * 1000.0,
        )
        return diffs

    # ------------------------------------------------------------------
    # Walk
    # ------------------------------------------------------------------

    def _walk(
        self,
        path: str,
        left: TreeNode | None,
        right: TreeNode | None,
        diffs: list[DiffEntry],
    ) -> None:
        if self._should_skip(path, left, right):
            return

        if left is None or right is None or left.is_leaf or right.is_leaf:
            diffs.append(DiffEntry.changed(path, left, right))
            return

        if left.is_object and right.is_object:
            self._diff_object(path, left, right, diffs)
        elif left.is_array and right.is_array:
            self._diff_array(path, left, right, diffs)
        else:
            # object vs array
            diffs.append(DiffEntry.changed(path, left, right))

    def _should_skip(self, path: str, left: TreeNode | None, right: TreeNode | None) -> bool:
        if self._config.is_ignored(path):
            return True
        if left is right:
            return True
        if _literally_equal(left, right):
            return True
        equivalence = self._config.equivalence_at(path)
        return equivalence is not None and bool(equivalence(left, right))

    # ------------------------------------------------------------------
    # Objects
    # ------------------------------------------------------------------

    def _diff_object(
        self, path: str, left: TreeNode, right: TreeNode, diffs: list[DiffEntry]
    ) -> None:
        names = sorted(left.members.keys() | right.members.keys())
        for name in names:
            self._walk(child(path, name), left.get(name), right.get(name), diffs)

    # ------------------------------------------------------------------
    # Arrays
    # ------------------------------------------------------------------

    def _diff_array(
        self, path: str, left: TreeNode, right: TreeNode, diffs: list[DiffEntry]
    ) -> None:
        rule = self._config.list_rule_for(path)
        if rule is None or rule.is_none:
            self._pair_by_index(path, left, right, diffs)
            return

        left_index = build_index(left, rule)
        right_index = build_index(right, rule)
        for key in sorted(left_index.keys() | right_index.keys()):
            # Braces mark identity segments so normalize_path can strip them.
            self._pair(
                child(path, "{" + key + "}"),
                left_index.get(key),
                right_index.get(key),
                diffs,
            )

    def _pair_by_index(
        self, path: str, left: TreeNode, right: TreeNode, diffs: list[DiffEntry]
    ) -> None:
        for i in range(max(left.size, right.size)):
            self._pair(child(path, i), left.element(i), right.element(i), diffs)

    def _pair(
        self,
        path: str,
        left: TreeNode | None,
        right: TreeNode | None,
        diffs: list[DiffEntry],
    ) -> None:
        if left is not None and right is not None:
            self._walk(path, left, right, diffs)
            return
        if self._config.is_ignored(path):
            return
        if left is None and right is not None:
            diffs.append(DiffEntry.added(path, right))
        elif left is not None:
            diffs.append(DiffEntry.removed(path, left))


def _literally_equal(left: TreeNode | None, right: TreeNode | None) -> bool:
    if left is None or right is None:
        return False
    return left.is_leaf and right.is_leaf and left == right
