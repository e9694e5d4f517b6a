"""config subpackage — the immutable rule set consumed by the diff engine.

Import from this module (not from sub-modules directly) to stay on the
stable public interface.

Example::

    from json_pointer_diff.config import DiffConfig, ListRule

    config = DiffConfig.builder().list_rule("/items", ListRule.identity("id")).build()
    config.list_rule_for("/items")         # ListRule(identifier_path='id', pointer=False)
    config.list_rule_for("/orders/3/items")  # None — registered path is /items only
"""

from __future__ import annotations

from json_pointer_diff.config.diff_config import DiffConfig, DiffConfigBuilder
from json_pointer_diff.config.equivalence import EquivalenceRegistry, PatternEquivalence
from json_pointer_diff.config.ignore import PathIgnoreFilter
from json_pointer_diff.config.list_rule import ListRule
from json_pointer_diff.config.list_rules import ListRuleRegistry

__all__ = [
    "DiffConfig",
    "DiffConfigBuilder",
    "EquivalenceRegistry",
    "ListRule",
    "ListRuleRegistry",
    "PathIgnoreFilter",
    "PatternEquivalence",
]
