"""Built-in equivalence predicates.

Each factory returns an ``Equivalence``: a callable taking the left and right
``TreeNode`` (either may be None when missing) and returning True when the two
should be treated as equal.  Predicates never raise on odd input: a missing
side, an unexpected node type or unparseable text simply means "not
equivalent", so one malformed value is reported as a difference instead of
aborting the comparison.

Example::

    from datetime import timedelta
    from json_pointer_diff import DiffConfig
    from json_pointer_diff.equivalences import instant_within, numeric_within

    config = (
        DiffConfig.builder()
        .equivalent_at("/price", numeric_within(0.01))
        .equivalent_under("/audit", instant_within(timedelta(seconds=1)))
        .build()
    )
"""

from __future__ import annotations

import datetime as dt
import re
from enum import StrEnum, auto
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import numpy as np

from json_pointer_diff import log
from json_pointer_diff.protocols import Equivalence
from json_pointer_diff.tree.nodes import TreeNode

__all__ = [
    "TimeUnit",
    "case_insensitive",
    "instant_within",
    "numeric_within",
    "offset_datetime_within",
    "punctuation_question_equals",
    "zoned_datetime_truncated_to",
]

_MILLISECOND = dt.timedelta(milliseconds=1)

# "2024-03-01T10:15:30+01:00[Europe/Paris]" -> stamp, zone
_ZONED = re.compile(r"(?P<stamp>[^\[\]]+)(?:\[(?P<zone>[^\[\]]+)\])?")


class TimeUnit(StrEnum):
    """Truncation units for ``zoned_datetime_truncated_to``."""

    MILLIS = auto()
    SECONDS = auto()
    MINUTES = auto()
    HOURS = auto()
    DAYS = auto()


# ---------------------------------------------------------------------------
# Numbers and text
# ---------------------------------------------------------------------------


def numeric_within(epsilon: float) -> Equivalence:
    """Equal if both sides are numbers and ``|left - right| <= epsilon``.

    The bound is inclusive: ``numeric_within(0.01)`` accepts 10.00 vs 10.01.

    Raises:
        ValueError: If epsilon is negative.
    """
    if epsilon < 0:
        msg = f"epsilon must be >= 0, got {epsilon}"
        raise ValueError(msg)

    def _numeric_within(left: TreeNode | None, right: TreeNode | None) -> bool:
        if left is None or right is None or not left.is_number or not right.is_number:
            return False
        try:
            a = float(left.value)
            b = float(right.value)
        except OverflowError as exc:
            log.debug("numbers not comparable: %s", exc)
            return False
        return bool(np.isclose(a, b, rtol=0.0, atol=epsilon))

    return _numeric_within


def case_insensitive() -> Equivalence:
    """Equal if the textual forms of two leaves match ignoring case."""

    def _case_insensitive(left: TreeNode | None, right: TreeNode | None) -> bool:
        if left is None or right is None or not left.is_leaf or not right.is_leaf:
            return False
        return left.as_text().casefold() == right.as_text().casefold()

    return _case_insensitive


def _normalize_punctuation(text: str) -> str:
    words: list[str] = []
    current: list[str] = []
    for ch in text:
        if ch.isalnum():
            current.append(ch)
        elif current:
            words.append("".join(current))
            current = []
    if current:
        words.append("".join(current))
    return " ".join(words)


def punctuation_question_equals() -> Equivalence:
    """Equal if two strings match once punctuation is treated as whitespace.

    Only letters and digits are kept, with single spaces between words, so
    ``"Is it done?"`` equals ``"Is it -- done"``.  Case still matters.
    """

    def _punctuation_question_equals(left: TreeNode | None, right: TreeNode | None) -> bool:
        if left is None or right is None or not left.is_string or not right.is_string:
            return False
        return _normalize_punctuation(left.value) == _normalize_punctuation(right.value)

    return _punctuation_question_equals


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------


def _parse_aware(text: str) -> dt.datetime:
    parsed = dt.datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        msg = f"timestamp has no offset: {text!r}"
        raise ValueError(msg)
    return parsed


def _truncate(value: dt.datetime, unit: TimeUnit) -> dt.datetime:
    if unit == TimeUnit.MILLIS:
        return value.replace(microsecond=value.microsecond // 1000 * 1000)
    if unit == TimeUnit.SECONDS:
        return value.replace(microsecond=0)
    if unit == TimeUnit.MINUTES:
        return value.replace(second=0, microsecond=0)
    if unit == TimeUnit.HOURS:
        return value.replace(minute=0, second=0, microsecond=0)
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def _zoned_key(text: str, unit: TimeUnit) -> tuple[dt.datetime, dt.timedelta | None, str]:
    match = _ZONED.fullmatch(text.strip())
    if match is None:
        msg = f"not a zoned timestamp: {text!r}"
        raise ValueError(msg)
    parsed = _parse_aware(match["stamp"])
    zone = match["zone"]
    if zone is not None:
        ZoneInfo(zone)
    offset = parsed.utcoffset()
    zone_id = zone if zone is not None else str(offset)
    return _truncate(parsed.replace(tzinfo=None), unit), offset, zone_id


def zoned_datetime_truncated_to(unit: TimeUnit | str) -> Equivalence:
    """Equal if two zoned ISO-8601 timestamps match after truncation to ``unit``.

    Timestamps need an offset (``Z`` or ``+01:00``) and may carry a region
    suffix (``[Europe/Paris]``).  Local time is truncated and compared
    together with the offset and zone, so the same instant written in two
    different zones is not equivalent.
    """
    truncation = TimeUnit(unit)

    def _zoned_truncated(left: TreeNode | None, right: TreeNode | None) -> bool:
        if left is None or right is None or not left.is_string or not right.is_string:
            return False
        try:
            return _zoned_key(left.value, truncation) == _zoned_key(right.value, truncation)
        except (ValueError, ZoneInfoNotFoundError) as exc:
            log.debug("zoned timestamps not comparable: %s", exc)
            return False

    return _zoned_truncated


def _within(tolerance: dt.timedelta) -> Equivalence:
    if tolerance < dt.timedelta(0):
        msg = f"tolerance must not be negative, got {tolerance}"
        raise ValueError(msg)
    # Millisecond granularity.
    limit = tolerance // _MILLISECOND

    def _timestamps_within(left: TreeNode | None, right: TreeNode | None) -> bool:
        if left is None or right is None or not left.is_string or not right.is_string:
            return False
        try:
            a = _parse_aware(left.value)
            b = _parse_aware(right.value)
        except ValueError as exc:
            log.debug("timestamps not comparable: %s", exc)
            return False
        return abs(a - b) // _MILLISECOND <= limit

    return _timestamps_within


def instant_within(tolerance: dt.timedelta) -> Equivalence:
    """Equal if two ISO-8601 instants (``...Z`` or with offset) are within ``tolerance``."""
    return _within(tolerance)


def offset_datetime_within(tolerance: dt.timedelta) -> Equivalence:
    """Equal if two offset date-times denote instants within ``tolerance`` of each other."""
    return _within(tolerance)
