"""TreeBuilder: converts plain Python values into a read-only TreeNode tree.

Uses recursive dispatch to convert dicts, lists and scalar values into
``TreeNode`` objects.  Beyond the JSON types it also accepts the host values
that typically end up in JSON snapshots: dataclass instances (converted
member-by-member), enum members (their ``value``), ``Decimal`` numbers and
``date``/``time``/``datetime`` values (ISO-8601 strings).
"""

from __future__ import annotations

import dataclasses
import datetime as dt
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any

from json_pointer_diff.tree.nodes import TreeNode

__all__ = ["JsonValue", "TreeBuilder"]

# Type alias for valid JSON values
JsonValue = dict[str, Any] | list[Any] | str | int | float | bool | None


@dataclass
class TreeBuilder:
    """Converts any valid JSON value into a TreeNode tree.

    The dispatch order is critical: bool MUST be checked before int because
    bool is a subclass of int in Python (isinstance(True, int) is True).

    Example::

        builder = TreeBuilder()
        tree = builder.build({"name": "Alice", "tags": ["a", "b"]})
        # tree: OBJECT(name -> STRING("Alice"), tags -> ARRAY(STRING, STRING))

    Attributes:
        include_none_fields: When False, dataclass fields whose value is None
            are left out of the object instead of becoming JSON nulls.
    """

    include_none_fields: bool = True

    def build(self, value: Any) -> TreeNode:
        """Convert a Python value to a TreeNode tree.

        Args:
            value: A JSON value, dataclass instance, enum member, Decimal or
                date/time value.  An existing ``TreeNode`` is returned as is.

        Returns:
            The root TreeNode.

        Raises:
            TypeError: If value (or anything nested in it) has no JSON shape.
        """
        if isinstance(value, TreeNode):
            return value

        # CRITICAL: bool MUST be checked before int — bool subclasses int in Python
        if isinstance(value, bool):
            return TreeNode.boolean(value)

        if value is None:
            return TreeNode.null()

        if isinstance(value, Enum):
            return self.build(value.value)

        if isinstance(value, str):
            return TreeNode.string(value)

        if isinstance(value, (int, float, Decimal)):
            return TreeNode.number(value)

        if isinstance(value, Mapping):
            return self._build_object(value)

        if isinstance(value, (list, tuple)):
            return TreeNode.array(self.build(item) for item in value)

        if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return self._build_dataclass(value)

        # datetime is a subclass of date, both render the same way
        if isinstance(value, (dt.date, dt.time)):
            return TreeNode.string(value.isoformat())

        raise TypeError(f"Unsupported JSON value type: {type(value)!r}")

    def _build_object(self, obj: Mapping[Any, Any]) -> TreeNode:
        members: dict[str, TreeNode] = {}
        for key, val in obj.items():
            if not isinstance(key, str):
                raise TypeError(f"Object keys must be str, got {type(key)!r}")
            members[key] = self.build(val)
        return TreeNode.object(members)

    def _build_dataclass(self, instance: Any) -> TreeNode:
        members: dict[str, TreeNode] = {}
        for f in dataclasses.fields(instance):
            val = getattr(instance, f.name)
            if val is None and not self.include_none_fields:
                continue
            members[f.name] = self.build(val)
        return TreeNode.object(members)
