"""Integrations subpackage for json-pointer-diff.

Contains adapters for external frameworks:
- pytest plugin (auto-discovered via pytest11 entry point), providing the
  ``assert_no_diff`` fixture
"""

from __future__ import annotations

__all__: list[str] = []
