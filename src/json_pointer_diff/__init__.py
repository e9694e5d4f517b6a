"""JSON pointer diff - configurable structural diffs of JSON-shaped trees."""

from __future__ import annotations

from json_pointer_diff.api import compare, compare_trees, is_equivalent
from json_pointer_diff.config import DiffConfig, DiffConfigBuilder, ListRule
from json_pointer_diff.engine import DiffEngine
from json_pointer_diff.errors import DiffConfigError
from json_pointer_diff.hints import TypeHintInferenceConfig, infer_type_hints
from json_pointer_diff.result import DiffEntry, DiffKind
from json_pointer_diff.tree import NodeType, TreeBuilder, TreeNode

__version__: str = "0.1.0"
__all__: list[str] = [
    "DiffConfig",
    "DiffConfigBuilder",
    "DiffConfigError",
    "DiffEngine",
    "DiffEntry",
    "DiffKind",
    "ListRule",
    "NodeType",
    "TreeBuilder",
    "TreeNode",
    "TypeHintInferenceConfig",
    "compare",
    "compare_trees",
    "infer_type_hints",
    "is_equivalent",
]
