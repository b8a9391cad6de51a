"""Span locators: turn delimiters into ``[start, end)`` offsets.

Every locator returns ``None`` when no span exists. Regex locators raise
`InvalidPatternShape` when a boundary cannot be compiled, so a broken pattern
is never reported as "not found".
"""
from __future__ import annotations

import logging
import re
from typing import List, Optional, Pattern

from strspan.config import DEFAULT_LOOKAROUND_FLAGS
from strspan.extraction.errors import InvalidPatternShape
from strspan.extraction.search import find_literal
from strspan.extraction.spans import Boundary, ComparisonMode, DelimiterKind, Span
from strspan.extraction.validity import is_invalid, is_valid

LOGGER = logging.getLogger(__name__)
TRAILING_BACKSLASHES = re.compile(r"\\+\Z")


def has_dangling_backslash(value: str) -> bool:
    """True when *value* ends in an unpaired escape character."""

    match = TRAILING_BACKSLASHES.search(value)
    return bool(match) and len(match.group(0)) % 2 == 1


def _check_shape(value: str, role: str) -> None:
    if value and has_dangling_backslash(value):
        raise InvalidPatternShape(value, f"{role} boundary ends in a single backslash")


def compile_pattern(pattern: str, flags: int = 0) -> Pattern[str]:
    """Compile *pattern*, reporting failures as `InvalidPatternShape`."""

    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise InvalidPatternShape(pattern, str(exc)) from exc


def _literal_value(boundary: Optional[Boundary], role: str) -> str:
    if boundary is None:
        return ""
    if boundary.delimiter.kind != DelimiterKind.LITERAL:
        raise TypeError(f"locate_span expects a literal {role} boundary, got {boundary.delimiter.kind.value}")
    return boundary.value


def locate_span(
    text: Optional[str],
    start: Optional[Boundary],
    end: Optional[Boundary],
    mode: ComparisonMode = ComparisonMode.ORDINAL,
) -> Optional[Span]:
    """Locate the text between two literal boundaries.

    A missing or empty start boundary anchors the span at offset 0; a missing
    or empty end boundary (or one that never occurs) extends it to the end of
    *text*. The end delimiter is searched strictly after the resolved start
    offset.
    """

    if is_invalid(text):
        return None
    start_value = _literal_value(start, "start")
    end_value = _literal_value(end, "end")
    if len(start_value) > len(text) or len(end_value) > len(text):
        return None

    offset = 0
    if start_value:
        offset = find_literal(text, start_value, 0, mode)
        if offset < 0:
            LOGGER.debug("Start delimiter %r not found", start_value)
            return None
        if not start.include:
            offset += len(start_value)

    if end_value and offset < len(text):
        end_at = find_literal(text, end_value, offset + 1, mode)
        if end_at > -1:
            stop = end_at + len(end_value) if end.include else end_at
            return Span(offset, stop)
        LOGGER.debug("End delimiter %r not found after offset %s", end_value, offset)
    return Span(offset, len(text))


def locate_pattern_span(
    text: Optional[str],
    start_literal: str,
    content_pattern: str,
    end_pattern: str = "",
    include_start: bool = False,
    flags: int = 0,
) -> Optional[Span]:
    """First match of ``escape(start_literal) + content_pattern + end_pattern``.

    Without *include_start* the delimiters are cut off by length:
    ``len(start_literal)`` from the front and ``len(end_pattern)`` from the
    back. The caller guarantees *end_pattern* consumes exactly its own length.
    """

    _check_shape(start_literal, "start")
    _check_shape(end_pattern, "end")
    regex = compile_pattern(re.escape(start_literal) + content_pattern + end_pattern, flags)
    if text is None:
        return None
    match = regex.search(text)
    if match is None:
        return None
    return _trim_match(match, len(start_literal), len(end_pattern), include_start)


def _trim_match(match: re.Match[str], head: int, tail: int, include_delimiters: bool) -> Span:
    if include_delimiters:
        return Span(match.start(), match.end())
    start = min(match.start() + head, match.end())
    end = max(match.end() - tail, start)
    return Span(start, end)


def locate_lookaround_span(
    text: Optional[str],
    start: Optional[str],
    end: Optional[str],
    escape_start: bool = True,
    escape_end: bool = True,
    flags: int = DEFAULT_LOOKAROUND_FLAGS,
) -> Optional[Span]:
    """Locate the shortest text enclosed by *start* (lookbehind) and *end* (lookahead).

    With only one boundary the span runs to the matching edge of *text*; with
    neither, the whole text is returned. Unescaped lookbehinds must be fixed
    width, otherwise compilation fails with `InvalidPatternShape`.
    """

    start = start or ""
    end = end or ""
    _check_shape(start, "start")
    _check_shape(end, "end")
    if text is None:
        return None
    start_expr = re.escape(start) if escape_start else start
    end_expr = re.escape(end) if escape_end else end

    if is_valid(start) and is_valid(end):
        pattern = f"(?<={start_expr})[\\s\\S]*?(?={end_expr})"
    elif is_valid(start):
        pattern = f"(?<={start_expr})[\\s\\S]*"
    elif is_valid(end):
        pattern = f"[\\s\\S]*?(?={end_expr})"
    else:
        return Span(0, len(text))

    match = compile_pattern(pattern, flags).search(text)
    if match is None:
        LOGGER.debug("Lookaround pattern %r found nothing", pattern)
        return None
    return Span(match.start(), match.end())


def iter_pattern_spans(
    text: Optional[str],
    start_literal: str,
    content_pattern: str,
    end_literal: str = "",
    include_start: bool = False,
    flags: int = 0,
) -> List[Span]:
    """All non-overlapping spans of the combined pattern, in order."""

    _check_shape(start_literal, "start")
    _check_shape(end_literal, "end")
    regex = compile_pattern(re.escape(start_literal) + content_pattern + end_literal, flags)
    if text is None:
        return []
    return [
        _trim_match(match, len(start_literal), len(end_literal), include_start)
        for match in regex.finditer(text)
    ]


__all__ = [
    "has_dangling_backslash",
    "compile_pattern",
    "locate_span",
    "locate_pattern_span",
    "locate_lookaround_span",
    "iter_pattern_spans",
]
