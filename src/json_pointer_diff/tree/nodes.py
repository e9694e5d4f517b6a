"""TreeNode dataclass and NodeType StrEnum for the read-only JSON tree.

A ``TreeNode`` is a closed tagged union over the six JSON shapes.  The diff
engine dispatches on the capability queries (``is_leaf``, ``is_object``,
``is_array``) rather than on Python types, so any host value must first be
converted by a tree factory (see ``TreeBuilder``).

A *missing* value (absent object member, index past the end of an array) is
represented by plain ``None`` wherever a ``TreeNode | None`` is accepted.  It
is distinct from ``TreeNode.null()``, which is a JSON ``null`` that is present.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import StrEnum, auto
from types import MappingProxyType
from typing import Any

__all__ = ["NodeType", "TreeNode"]


class NodeType(StrEnum):
    """Enumeration of the six JSON value shapes.

    - NULL    -> "null"
    - BOOLEAN -> "boolean"
    - NUMBER  -> "number"
    - STRING  -> "string"
    - ARRAY   -> "array"   : ordered sequence of nodes
    - OBJECT  -> "object"  : mapping of member name to node
    """

    NULL = auto()
    BOOLEAN = auto()
    NUMBER = auto()
    STRING = auto()
    ARRAY = auto()
    OBJECT = auto()


_CONTAINERS = frozenset({NodeType.ARRAY, NodeType.OBJECT})

_NO_MEMBERS: Mapping[str, TreeNode] = MappingProxyType({})


def _no_members() -> Mapping[str, TreeNode]:
    return _NO_MEMBERS


@dataclass(frozen=True, slots=True)
class TreeNode:
    """A node in the read-only JSON tree.

    Attributes:
        node_type: Which JSON shape this node has (see NodeType).
        value:     Python payload for scalar nodes (``bool``, ``int``,
                   ``float``, ``Decimal`` or ``str``); ``None`` for null and
                   container nodes.
        children:  Elements of an ARRAY node, in order.  Empty for all others.
        members:   Members of an OBJECT node as a read-only mapping.  Member
                   order never affects equality.

    Equality is structural: two leaves are equal when they have the same
    ``node_type`` and equal payloads, so ``1`` and ``1.0`` are equal numbers
    while ``true`` and ``1`` are not.
    """

    node_type: NodeType
    value: Any = None
    children: tuple[TreeNode, ...] = ()
    members: Mapping[str, TreeNode] = field(default_factory=_no_members)

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def null(cls) -> TreeNode:
        return cls(NodeType.NULL)

    @classmethod
    def boolean(cls, value: bool) -> TreeNode:
        return cls(NodeType.BOOLEAN, value=bool(value))

    @classmethod
    def number(cls, value: int | float | Decimal) -> TreeNode:
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            msg = f"number node needs an int, float or Decimal, got {type(value)!r}"
            raise TypeError(msg)
        return cls(NodeType.NUMBER, value=value)

    @classmethod
    def string(cls, value: str) -> TreeNode:
        if not isinstance(value, str):
            msg = f"string node needs a str, got {type(value)!r}"
            raise TypeError(msg)
        return cls(NodeType.STRING, value=value)

    @classmethod
    def array(cls, children: Iterable[TreeNode]) -> TreeNode:
        return cls(NodeType.ARRAY, children=tuple(children))

    @classmethod
    def object(cls, members: Mapping[str, TreeNode]) -> TreeNode:
        return cls(NodeType.OBJECT, members=MappingProxyType(dict(members)))

    # ------------------------------------------------------------------
    # Capability queries
    # ------------------------------------------------------------------

    @property
    def is_leaf(self) -> bool:
        """True for null and scalar nodes."""
        return self.node_type not in _CONTAINERS

    @property
    def is_object(self) -> bool:
        return self.node_type == NodeType.OBJECT

    @property
    def is_array(self) -> bool:
        return self.node_type == NodeType.ARRAY

    @property
    def is_null(self) -> bool:
        return self.node_type == NodeType.NULL

    @property
    def is_number(self) -> bool:
        return self.node_type == NodeType.NUMBER

    @property
    def is_string(self) -> bool:
        return self.node_type == NodeType.STRING

    @property
    def is_boolean(self) -> bool:
        return self.node_type == NodeType.BOOLEAN

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get(self, name: str) -> TreeNode | None:
        """Return the member called ``name``, or None when absent or not an object."""
        return self.members.get(name)

    def element(self, index: int) -> TreeNode | None:
        """Return the array element at ``index``, or None past the end."""
        if 0 <= index < len(self.children):
            return self.children[index]
        return None

    @property
    def size(self) -> int:
        """Number of members (objects) or elements (arrays); 0 for leaves."""
        if self.is_object:
            return len(self.members)
        return len(self.children)

    def member_names(self) -> Iterator[str]:
        return iter(self.members)

    def as_text(self) -> str:
        """Return the textual form of this node.

        Strings are returned verbatim, booleans as ``true``/``false``, null as
        ``null`` and numbers via ``str()``.  Containers have no textual form
        and return the empty string.
        """
        if self.node_type == NodeType.STRING:
            return str(self.value)
        if self.node_type == NodeType.BOOLEAN:
            return "true" if self.value else "false"
        if self.node_type == NodeType.NULL:
            return "null"
        if self.node_type == NodeType.NUMBER:
            return str(self.value)
        return ""

    def to_python(self) -> Any:
        """Convert this node back into plain Python values (dict/list/scalars)."""
        if self.node_type == NodeType.OBJECT:
            return {name: child.to_python() for name, child in self.members.items()}
        if self.node_type == NodeType.ARRAY:
            return [child.to_python() for child in self.children]
        return self.value
