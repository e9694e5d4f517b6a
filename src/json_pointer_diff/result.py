"""DiffKind and DiffEntry: the records produced by a comparison.

This module provides the result type returned by compare() calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any

from json_pointer_diff.tree.nodes import TreeNode

__all__ = ["DiffEntry", "DiffKind"]


class DiffKind(StrEnum):
    """What happened at a path.

    - ADDED:   an array element exists only on the right
    - REMOVED: an array element exists only on the left
    - CHANGED: the values differ (object members present on one side only
               are reported as CHANGED with the other side None)
    """

    ADDED = auto()
    REMOVED = auto()
    CHANGED = auto()


@dataclass(frozen=True, slots=True)
class DiffEntry:
    """One difference between the left and right trees.

    Attributes:
        path:      JSON Pointer of the differing location.
        kind:      ADDED, REMOVED or CHANGED.
        old_value: Left-hand node; None for ADDED and for members missing on
                   the left.
        new_value: Right-hand node; None for REMOVED and for members missing
                   on the right.
    """

    path: str
    kind: DiffKind
    old_value: TreeNode | None = None
    new_value: TreeNode | None = None

    @classmethod
    def added(cls, path: str, value: TreeNode) -> DiffEntry:
        return cls(path, DiffKind.ADDED, None, value)

    @classmethod
    def removed(cls, path: str, value: TreeNode) -> DiffEntry:
        return cls(path, DiffKind.REMOVED, value, None)

    @classmethod
    def changed(cls, path: str, old: TreeNode | None, new: TreeNode | None) -> DiffEntry:
        return cls(path, DiffKind.CHANGED, old, new)

    def to_dict(self) -> dict[str, Any]:
        """Render as plain Python values, e.g. for JSON reports."""
        return {
            "path": self.path,
            "kind": str(self.kind),
            "old_value": None if self.old_value is None else self.old_value.to_python(),
            "new_value": None if self.new_value is None else self.new_value.to_python(),
        }
