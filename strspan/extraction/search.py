"""Literal substring predicates used by the locator and the façade."""
from __future__ import annotations

import re
from functools import lru_cache
from typing import Iterable, Optional, Pattern, Sequence

from strspan.extraction.spans import ComparisonMode
from strspan.extraction.validity import is_invalid, is_valid


@lru_cache(maxsize=256)
def _folded(needle: str, suffix: str = "") -> Pattern[str]:
    return re.compile(re.escape(needle) + suffix, flags=re.IGNORECASE)


def find_literal(
    text: str,
    needle: str,
    start: int = 0,
    mode: ComparisonMode = ComparisonMode.ORDINAL,
) -> int:
    """Offset of the first *needle* at or after *start*, or -1.

    Case-insensitive search goes through ``re`` so offsets stay aligned with
    *text* even where lowercasing would change its length.
    """

    if start > len(text):
        return -1
    if mode == ComparisonMode.ORDINAL or not needle:
        return text.find(needle, start)
    match = _folded(needle).search(text, start)
    return match.start() if match else -1


def contains(text: Optional[str], needle: str, mode: ComparisonMode = ComparisonMode.ORDINAL) -> bool:
    if is_invalid(text):
        return False
    return find_literal(text, needle, 0, mode) > -1


def contains_all(
    text: Optional[str],
    needles: Sequence[str],
    mode: ComparisonMode = ComparisonMode.ORDINAL,
) -> bool:
    """True when every needle occurs in *text*; an empty needle always occurs."""

    if not needles:
        return False
    return all(contains(text, needle, mode) for needle in needles)


def contains_any(
    text: Optional[str],
    needles: Optional[Iterable[Optional[str]]],
    mode: ComparisonMode = ComparisonMode.IGNORE_CASE,
) -> bool:
    """True when any needle equals *text* or occurs in it (both must be valid)."""

    if needles is None:
        return False
    for needle in needles:
        if needle == text:
            return True
        if is_valid(text) and is_valid(needle) and find_literal(text, needle, 0, mode) > -1:
            return True
    return False


def starts_with_any(text: Optional[str], *needles: str, mode: ComparisonMode = ComparisonMode.ORDINAL) -> bool:
    if is_invalid(text):
        return False
    for needle in needles:
        if len(needle) > len(text):
            continue
        if mode == ComparisonMode.ORDINAL:
            if text.startswith(needle):
                return True
        elif _folded(needle).match(text):
            return True
    return False


def ends_with_any(text: Optional[str], *needles: str, mode: ComparisonMode = ComparisonMode.ORDINAL) -> bool:
    if is_invalid(text):
        return False
    for needle in needles:
        if len(needle) > len(text):
            continue
        if mode == ComparisonMode.ORDINAL:
            if text.endswith(needle):
                return True
        elif _folded(needle, r"\Z").search(text, len(text) - len(needle)):
            return True
    return False


def remove_prefix(text: Optional[str], *needles: str, mode: ComparisonMode = ComparisonMode.ORDINAL) -> Optional[str]:
    """Strip the first needle *text* starts with; absent text comes back unchanged."""

    if is_invalid(text):
        return text
    for needle in needles:
        if starts_with_any(text, needle, mode=mode):
            return text[len(needle) :]
    return text


def remove_suffix(text: Optional[str], *needles: str, mode: ComparisonMode = ComparisonMode.ORDINAL) -> Optional[str]:
    """Strip the first needle *text* ends with; absent text comes back unchanged."""

    if is_invalid(text):
        return text
    for needle in needles:
        if ends_with_any(text, needle, mode=mode):
            return text[: len(text) - len(needle)]
    return text


def find_item(
    text: Optional[str],
    items: Optional[Iterable[str]],
    mode: ComparisonMode = ComparisonMode.IGNORE_CASE,
) -> Optional[str]:
    """Return the first of *items* found in *text*, or None."""

    if text is None or items is None:
        return None
    for item in items:
        if find_literal(text, item, 0, mode) > -1:
            return item
    return None


__all__ = [
    "find_literal",
    "contains",
    "contains_all",
    "contains_any",
    "starts_with_any",
    "ends_with_any",
    "remove_prefix",
    "remove_suffix",
    "find_item",
]
