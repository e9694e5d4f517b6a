"""ListRuleRegistry: normalized array path -> ListRule."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from json_pointer_diff.config.list_rule import ListRule

__all__ = ["ListRuleRegistry"]


def _empty() -> Mapping[str, ListRule]:
    return MappingProxyType({})


@dataclass(frozen=True, slots=True)
class ListRuleRegistry:
    """Exact-match lookup of list rules by normalized path.

    There are no prefix or pattern tiers: a rule applies only to arrays whose
    normalized path is exactly the registered one.
    """

    by_path: Mapping[str, ListRule] = field(default_factory=_empty)

    @classmethod
    def of(cls, by_path: Mapping[str, ListRule]) -> ListRuleRegistry:
        return cls(MappingProxyType(dict(by_path)))

    def rule_for(self, normalized_path: str) -> ListRule | None:
        return self.by_path.get(normalized_path)
