"""Tree subpackage for the read-only JSON tree representation.

Re-exports the public API for the tree module:
- TreeNode: frozen tagged union over the six JSON shapes
- NodeType: StrEnum of those shapes (NULL, BOOLEAN, NUMBER, STRING, ARRAY, OBJECT)
- TreeBuilder: converts plain Python values into a TreeNode tree
"""

from json_pointer_diff.tree.builder import JsonValue, TreeBuilder
from json_pointer_diff.tree.nodes import NodeType, TreeNode

__all__ = ["JsonValue", "NodeType", "TreeBuilder", "TreeNode"]
