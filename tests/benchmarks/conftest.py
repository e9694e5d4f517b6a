"""Deterministic document generators for performance benchmarks.

All generators produce fixed, reproducible documents. No random values.
Three tiers: 10-key flat, ~100-key nested, ~1000-element keyed arrays.
Each tier provides an "equal" pair (same content, different member order)
and a "changed" pair (every leaf differs).
"""

from __future__ import annotations

from typing import Any

import pytest

from json_pointer_diff import DiffConfig, ListRule


def _flat(num_keys: int, suffix: str = "") -> dict[str, Any]:
    return {f"key_{i}": f"value_{i}{suffix}" for i in range(num_keys)}


def _nested_100(suffix: str = "") -> dict[str, Any]:
    """10 sections x 9 leaves, plus a small array per section."""
    return {
        f"section_{i}": {
            **{f"field_{i}_{j}": f"value_{i}_{j}{suffix}" for j in range(9)},
            "tags": [f"t{i}{suffix}", f"u{i}{suffix}"],
        }
        for i in range(10)
    }


def _orders(count: int, price_bump: float = 0.0, reverse: bool = False) -> dict[str, Any]:
    """``count`` order lines keyed by ``sku``, each with a nested object."""
    lines = [
        {
            "sku": f"SKU-{i:05d}",
            "price": round(i * 1.25 + price_bump, 2),
            "meta": {"warehouse": f"W{i % 7}", "updatedAt": f"2024-01-01T00:00:{i % 60:02d}Z"},
        }
        for i in range(count)
    ]
    if reverse:
        lines.reverse()
    return {"id": "order-1", "lines": lines}


def _reordered(doc: dict[str, Any]) -> dict[str, Any]:
    return dict(reversed(list(doc.items())))


# --- Fixtures for each size tier ---


@pytest.fixture
def pair_10key_equal() -> tuple[dict[str, Any], dict[str, Any]]:
    doc = _flat(10)
    return doc, _reordered(doc)


@pytest.fixture
def pair_10key_changed() -> tuple[dict[str, Any], dict[str, Any]]:
    return _flat(10), _flat(10, suffix="!")


@pytest.fixture
def pair_100key_equal() -> tuple[dict[str, Any], dict[str, Any]]:
    doc = _nested_100()
    return doc, _reordered(doc)


@pytest.fixture
def pair_100key_changed() -> tuple[dict[str, Any], dict[str, Any]]:
    return _nested_100(), _nested_100(suffix="!")


@pytest.fixture
def pair_1000_lines_reordered() -> tuple[dict[str, Any], dict[str, Any]]:
    return _orders(1000), _orders(1000, reverse=True)


@pytest.fixture
def pair_1000_lines_repriced() -> tuple[dict[str, Any], dict[str, Any]]:
    return _orders(1000), _orders(1000, price_bump=0.5)


@pytest.fixture
def orders_config() -> DiffConfig:
    return (
        DiffConfig.builder()
        .list_rule("/lines", ListRule.identity("sku"))
        .ignore_glob("/lines/*/meta/updatedAt")
        .build()
    )
