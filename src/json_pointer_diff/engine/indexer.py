"""Identity index of array elements for keyed pairing.

Extracts an identity value from every object element of an array according
to a ``ListRule`` and maps the identity text to the element.  Non-object
elements carry no identity and are left out of the index.
"""

from __future__ import annotations

from json_pointer_diff.config.list_rule import ListRule
from json_pointer_diff.paths import resolve_pointer
from json_pointer_diff.tree.nodes import TreeNode

__all__ = ["NULL_KEY", "build_index", "extract_identity"]

# Key used for elements whose identity is missing or null.
NULL_KEY = "<null>"


def extract_identity(element: TreeNode, rule: ListRule) -> str:
    """Return the identity text of an object element (``NULL_KEY`` if absent or null)."""
    if rule.pointer:
        found = resolve_pointer(element, rule.identifier_path)
    else:
        found = element.get(rule.identifier_path)
    if found is None or found.is_null:
        return NULL_KEY
    return found.as_text()


def build_index(array: TreeNode, rule: ListRule) -> dict[str, TreeNode]:
    """Map identity text -> element for every object element of ``array``.

    Keys are in first-seen order and are NOT pointer-escaped.  When two
    elements share an identity the last one wins.
    """
    index: dict[str, TreeNode] = {}
    for element in array.children:
        if element.is_object:
            index[extract_identity(element, rule)] = element
    return index
