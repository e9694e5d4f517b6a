"""ListRule: how the elements of one array shape are paired across two trees."""

from __future__ import annotations

from dataclasses import dataclass

from json_pointer_diff.errors import DiffConfigError

__all__ = ["ListRule"]


@dataclass(frozen=True, slots=True)
class ListRule:
    """Pairing strategy for array elements.

    ``ListRule.none()`` pairs elements by position.  ``ListRule.identity(path)``
    pairs object elements by an identity value extracted from each element:
    a bare member name (``"id"``) or, when the path starts with ``/``, a
    nested JSON Pointer (``"/meta/key"``).

    Attributes:
        identifier_path: Member name or pointer of the identity value; empty
            for positional pairing.
        pointer: True when ``identifier_path`` is a JSON Pointer.
    """

    identifier_path: str = ""
    pointer: bool = False

    @classmethod
    def none(cls) -> ListRule:
        return cls()

    @classmethod
    def identity(cls, path: str) -> ListRule:
        """Pair elements by the value at ``path`` (member name or ``/``-pointer).

        Raises:
            DiffConfigError: If path is None, not a str, or empty.
        """
        if path is not None and not isinstance(path, str):
            msg = f"identifier path must be a str, got {type(path)!r}"
            raise DiffConfigError(msg)
        if not path:
            msg = "identifier path must not be None or empty"
            raise DiffConfigError(msg)
        return cls(identifier_path=path, pointer=path.startswith("/"))

    @property
    def is_none(self) -> bool:
        return not self.identifier_path
