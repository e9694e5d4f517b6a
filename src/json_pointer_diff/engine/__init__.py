"""engine subpackage — the recursive diff walk and its array indexer."""

from __future__ import annotations

from json_pointer_diff.engine.indexer import NULL_KEY, build_index, extract_identity
from json_pointer_diff.engine.walker import DiffEngine

__all__ = ["NULL_KEY", "DiffEngine", "build_index", "extract_identity"]
