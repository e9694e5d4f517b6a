"""pytest plugin for json-pointer-diff.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

import json
from typing import Any

import pytest

from json_pointer_diff import DiffConfig, compare


@pytest.fixture(scope="session")
def assert_no_diff() -> Any:
    """Fixture that returns a callable asserting two JSON values have no differences.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to compare() which creates a fresh DiffEngine per call).

    Usage in tests::

        def test_snapshot(assert_no_diff):
            assert_no_diff(render_order(), {"id": 7, "lines": []})

        def test_ignoring_audit(assert_no_diff):
            config = DiffConfig.builder().ignore_prefix("/audit").build()
            assert_no_diff(actual, expected, config=config)

    Returns:
        A callable ``_assert(actual, expected, config=None) -> None`` that
        raises ``AssertionError`` listing every difference when any exist.
    """

    def _assert(actual: Any, expected: Any, config: DiffConfig | None = None) -> None:
        """Assert that ``actual`` matches ``expected`` under ``config``.

        ``expected`` is the left-hand side, so a member only present in
        ``actual`` shows up with ``old_value: null``.

        Raises:
            AssertionError: When differences exist; the message carries the
                count and one JSON line per ``DiffEntry``.
        """
        diffs = compare(expected, actual, config=config)
        if diffs:
            lines = "\n".join(
                f"  {json.dumps(entry.to_dict(), sort_keys=True, default=str)}"
                for entry in diffs
            )
            raise AssertionError(f"JSON documents differ: {len(diffs)} difference(s)\n{lines}")

    return _assert
