"""Extension points for json-pointer-diff.

Defines the structural interfaces callers plug into the library:

- ``Equivalence``: a two-argument predicate deciding whether two values at a
  path count as equal.  Either argument may be ``None`` when the value is
  missing on that side.
- ``TreeFactory``: anything that turns a host value into a ``TreeNode``.
  ``TreeBuilder`` satisfies it; users can plug in their own without
  inheriting from any base class.

Example::

    from json_pointer_diff.protocols import TreeFactory
    from json_pointer_diff.tree import TreeNode

    class UpperFactory:
        def build(self, value: object) -> TreeNode:
            return TreeNode.string(str(value).upper())

    assert isinstance(UpperFactory(), TreeFactory)  # True — structural conformance
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol, TypeAlias, runtime_checkable

from json_pointer_diff.tree.nodes import TreeNode

__all__ = ["Equivalence", "TreeFactory"]

Equivalence: TypeAlias = Callable[[TreeNode | None, TreeNode | None], bool]


@runtime_checkable
class TreeFactory(Protocol):
    """Structural protocol for tree factories.

    The ``build`` method must return a ``TreeNode`` for every value it
    accepts and raise ``TypeError`` for values it cannot represent.
    """

    def build(self, value: Any) -> TreeNode: ...
