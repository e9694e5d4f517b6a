"""Type-hint inference from dataclass types.

``infer_type_hints()`` walks the fields of a dataclass type and maps each leaf
field to a type label, keyed by the normalized JSON Pointer at which the field
appears in the converted tree.  The result plugs straight into
``DiffConfigBuilder.type_hints()`` so ``equivalent_for_type()`` rules apply to
every field of a given type:

    hints = infer_type_hints(Order)
    # {"/id": "builtins.int", "/placed_at": "datetime.datetime",
    #  "/lines/sku": "builtins.str", ...}

    config = (
        DiffConfig.builder()
        .type_hints(hints)
        .equivalent_for_type("datetime.datetime", instant_within(timedelta(seconds=1)))
        .build()
    )

Collections are transparent: the element type of ``list[Line]`` is recorded
under the collection's own path (``/lines/sku``, not ``/lines/0/sku``), and
``Optional[X]`` / ``X | None`` is unwrapped to ``X``.  Anything that is not a
dataclass is a leaf.

Self-referential types (``children: list[Node]`` inside ``Node``) are bounded
by ``TypeHintInferenceConfig``: each type may be re-entered at most
``max_depth`` times along one branch.
"""

from __future__ import annotations

import collections.abc
import dataclasses
import re
import sys
import types
import typing
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from json_pointer_diff import log
from json_pointer_diff.paths import ROOT, child

__all__ = ["TypeHintInferenceConfig", "infer_type_hints"]

_DEFAULT_MAX_DEPTH = 1

_COLLECTION_ORIGINS = frozenset(
    {
        list,
        set,
        frozenset,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Set,
        collections.abc.MutableSet,
        collections.abc.Collection,
        collections.abc.Iterable,
    }
)


def _no_prefix_depths() -> Mapping[str, int]:
    return MappingProxyType({})


def _validate_depth(depth: int) -> None:
    if depth < 0:
        msg = f"depth cannot be negative: {depth}"
        raise ValueError(msg)


def _validate_prefix(prefix: str) -> None:
    if prefix is None:
        msg = "prefix cannot be None"
        raise ValueError(msg)
    if prefix and not prefix.startswith("/"):
        msg = f"prefix must start with '/' or be empty: {prefix!r}"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class TypeHintInferenceConfig:
    """Recursion limits for ``infer_type_hints``.

    A depth of 0 stops at the first self-reference, 1 allows one nested
    level of the same type, and so on.

    Attributes:
        default_max_depth: Depth used when no prefix or pattern matches.
        prefix_depths:     Path prefix -> depth; the longest matching prefix
                           wins.  Plain ``startswith`` matching.
        pattern_depths:    (regex, depth) pairs checked in order after the
                           prefixes; the first full match wins.
    """

    default_max_depth: int = _DEFAULT_MAX_DEPTH
    prefix_depths: Mapping[str, int] = field(default_factory=_no_prefix_depths)
    pattern_depths: tuple[tuple[re.Pattern[str], int], ...] = ()

    def __post_init__(self) -> None:
        _validate_depth(self.default_max_depth)
        for prefix, depth in self.prefix_depths.items():
            _validate_prefix(prefix)
            _validate_depth(depth)
        compiled: list[tuple[re.Pattern[str], int]] = []
        for pattern, depth in self.pattern_depths:
            if pattern is None:
                msg = "pattern cannot be None"
                raise ValueError(msg)
            _validate_depth(depth)
            compiled.append((re.compile(pattern), depth))
        # frozen: bypass __setattr__ to store read-only copies
        object.__setattr__(self, "prefix_depths", MappingProxyType(dict(self.prefix_depths)))
        object.__setattr__(self, "pattern_depths", tuple(compiled))

    @classmethod
    def default(cls) -> TypeHintInferenceConfig:
        return cls()

    @classmethod
    def stop_at_first_reference(cls) -> TypeHintInferenceConfig:
        return cls(default_max_depth=0)

    @classmethod
    def unlimited(cls) -> TypeHintInferenceConfig:
        """No recursion limit.  Only safe for types that never refer to themselves."""
        return cls(default_max_depth=sys.maxsize)

    def with_prefix_depth(self, prefix: str, depth: int) -> TypeHintInferenceConfig:
        """Return a copy with ``depth`` applied to paths starting with ``prefix``."""
        return dataclasses.replace(self, prefix_depths={**self.prefix_depths, prefix: depth})

    def with_pattern_depth(
        self, pattern: re.Pattern[str] | str, depth: int
    ) -> TypeHintInferenceConfig:
        """Return a copy with ``depth`` applied to paths fully matching ``pattern``."""
        return dataclasses.replace(self, pattern_depths=(*self.pattern_depths, (pattern, depth)))

    def max_depth_for_path(self, path: str) -> int:
        longest: str | None = None
        for prefix in self.prefix_depths:
            if path.startswith(prefix) and (longest is None or len(prefix) > len(longest)):
                longest = prefix
        if longest is not None:
            return self.prefix_depths[longest]
        for pattern, depth in self.pattern_depths:
            if pattern.fullmatch(path):
                return depth
        return self.default_max_depth


def infer_type_hints(
    root_type: type[Any], config: TypeHintInferenceConfig | None = None
) -> dict[str, str]:
    """Infer normalized-path -> type-label hints for ``root_type``.

    Args:
        root_type: A dataclass type (any other type yields a single hint at
                   ``/``).
        config:    Recursion limits; ``TypeHintInferenceConfig.default()``
                   when omitted.

    Returns:
        A new dict in field-declaration order.  Labels are
        ``"<module>.<qualname>"`` of the leaf type, e.g. ``"builtins.str"``.

    Raises:
        NameError: If a string annotation cannot be resolved.
    """
    walker = _HintWalker(config if config is not None else TypeHintInferenceConfig.default())
    walker.walk("", root_type)
    log.debug("inferred %d type hints for %s", len(walker.hints), _label(root_type))
    return walker.hints


class _HintWalker:
    def __init__(self, config: TypeHintInferenceConfig) -> None:
        self._config = config
        self.hints: dict[str, str] = {}
        self._depths: dict[Any, int] = {}

    def walk(self, path: str, tp: Any) -> None:
        if tp is None:
            return

        unwrapped = _unwrap_optional(tp)
        if unwrapped is not tp:
            self.walk(path, unwrapped)
            return

        if _is_collection(tp):
            self.walk(path, _element_type(tp))
            return

        depth = self._depths.get(tp, 0)
        if depth > self._config.max_depth_for_path(path or ROOT):
            return

        self._depths[tp] = depth + 1
        try:
            if _is_dataclass_type(tp):
                self._walk_fields(path, tp)
            else:
                self.hints[path or ROOT] = _label(tp)
        finally:
            self._depths[tp] = depth

    def _walk_fields(self, path: str, tp: type[Any]) -> None:
        resolved = typing.get_type_hints(tp)
        for f in dataclasses.fields(tp):
            self.walk(child(path, f.name), resolved.get(f.name, f.type))


# ---------------------------------------------------------------------------
# Type inspection helpers
# ---------------------------------------------------------------------------


def _unwrap_optional(tp: Any) -> Any:
    """``X | None`` -> ``X``; anything else is returned unchanged."""
    origin = typing.get_origin(tp)
    if origin is typing.Union or origin is types.UnionType:
        args = [arg for arg in typing.get_args(tp) if arg is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def _is_collection(tp: Any) -> bool:
    origin = typing.get_origin(tp)
    if origin in _COLLECTION_ORIGINS:
        return True
    if origin is tuple:
        args = typing.get_args(tp)
        # Only homogeneous tuple[X, ...] behaves like a list.
        return len(args) == 2 and args[1] is Ellipsis
    return False


def _element_type(tp: Any) -> Any:
    args = typing.get_args(tp)
    return args[0] if args else None


def _is_dataclass_type(tp: Any) -> bool:
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def _label(tp: Any) -> str:
    target = typing.get_origin(tp) or tp
    qualname = getattr(target, "__qualname__", None)
    if qualname is None:
        return repr(tp)
    return f"{target.__module__}.{qualname}"
