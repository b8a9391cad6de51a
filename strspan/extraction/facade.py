"""Public extraction helpers composed from the span locators.

"Not found" is a normal outcome here: string helpers return ``""`` and list
helpers return an empty list. Malformed regex boundaries still raise
`InvalidPatternShape`.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Sequence, Union

from strspan.config import SPECIAL_CHARACTERS
from strspan.extraction.locator import (
    compile_pattern,
    iter_pattern_spans,
    locate_lookaround_span,
    locate_pattern_span,
    locate_span,
)
from strspan.extraction.search import contains_all, ends_with_any, remove_prefix, remove_suffix, starts_with_any
from strspan.extraction.spans import Boundary, ComparisonMode, DelimiterKind, DelimiterSpec, Span
from strspan.extraction.validity import is_invalid, is_valid

LOGGER = logging.getLogger(__name__)

CandidatePair = Sequence[int]
NO_KEY = -1


@dataclass(slots=True)
class MatchList:
    """Result of `extract_all_matches`.

    ``found`` tells "no matches" apart from "matches that extracted to empty
    text", which a bare list cannot.
    """

    values: List[str] = field(default_factory=list)
    spans: List[Span] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.values)

    @property
    def found(self) -> bool:
        return bool(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)


def _slice(text: Optional[str], span: Optional[Span]) -> str:
    if text is None or span is None:
        return ""
    return span.slice(text)


def extract_between(
    text: Optional[str],
    start: str,
    end: str,
    *,
    include_start: bool = False,
    include_end: bool = False,
    mode: ComparisonMode = ComparisonMode.ORDINAL,
) -> str:
    """Return the text between the literal *start* and *end* delimiters.

    An empty *start* extracts from the beginning of the text, an empty or
    missing *end* extracts to its end. Returns ``""`` when *start* is absent.
    """

    span = locate_span(
        text,
        Boundary.literal(start, include_start),
        Boundary.literal(end, include_end),
        mode,
    )
    return _slice(text, span)


def extract_after(
    text: Optional[str],
    start: str,
    *,
    include_start: bool = False,
    mode: ComparisonMode = ComparisonMode.ORDINAL,
) -> str:
    """Return everything from the first *start* delimiter to the end of the text."""

    return _slice(text, locate_span(text, Boundary.literal(start, include_start), None, mode))


def extract_from_candidates(
    text: Optional[str],
    keys: Sequence[str],
    candidate_pairs: Sequence[CandidatePair],
    *,
    include_start: bool = False,
    include_end: bool = False,
    mode: ComparisonMode = ComparisonMode.ORDINAL,
) -> str:
    """Try ``(start_index, end_index)`` pairs into *keys* in order; first hit wins.

    Index ``-1`` means no boundary on that side. A pair is only attempted when
    both of its delimiters occur in *text*, and it wins only if its extraction
    is valid text.
    """

    for pair in candidate_pairs:
        start_index, end_index = pair[0], pair[1]
        start = keys[start_index] if start_index > NO_KEY else ""
        end = keys[end_index] if end_index > NO_KEY else ""
        if not contains_all(text, [start, end], mode):
            LOGGER.debug("Skipping candidate (%r, %r): delimiters not present", start, end)
            continue
        result = extract_between(
            text,
            start,
            end,
            include_start=include_start,
            include_end=include_end,
            mode=mode,
        )
        if is_valid(result):
            return result
    return ""


def extract_by_pattern(
    text: Optional[str],
    start_literal: str,
    content_pattern: str,
    end_pattern: str = "",
    *,
    include_start: bool = False,
    flags: int = 0,
) -> str:
    """First match of ``escape(start_literal) + content_pattern + end_pattern``.

    With *include_start* the whole match, delimiters included, is returned.
    Otherwise both delimiters are cut off by length.
    """

    span = locate_pattern_span(text, start_literal, content_pattern, end_pattern, include_start, flags)
    return _slice(text, span)


def extract_all_matches(
    text: Optional[str],
    start_literal: str,
    content_pattern: str,
    end_literal: str = "",
    *,
    include_start: bool = False,
    flags: int = 0,
) -> MatchList:
    """Every non-overlapping match of the combined pattern, in order."""

    spans = iter_pattern_spans(text, start_literal, content_pattern, end_literal, include_start, flags)
    if not spans:
        return MatchList()
    return MatchList(values=[span.slice(text) for span in spans], spans=spans)


def extract_lookaround(
    text: Optional[str],
    start: Optional[str],
    end: Optional[str],
    *,
    escape_start: bool = True,
    escape_end: bool = True,
) -> str:
    """Shortest text enclosed by *start* and *end*, delimiters excluded."""

    return _slice(text, locate_lookaround_span(text, start, end, escape_start, escape_end))


def extract_pattern_tail(
    text: Optional[str],
    start_pattern: str,
    content_pattern: str,
    *,
    include_start: bool = False,
) -> str:
    """First match of ``start_pattern + content_pattern``.

    Without *include_start* only the trailing part matched by
    *content_pattern* is kept.
    """

    if text is None:
        return ""
    match = compile_pattern(start_pattern + content_pattern).search(text)
    found = match.group(0) if match else ""
    if include_start or not found:
        return found
    tail = compile_pattern(content_pattern + "$").search(found)
    return tail.group(0) if tail else ""


def trim_to_boundary_delimiters(
    text: Optional[str],
    *,
    trim_start: bool = True,
    trim_end: bool = True,
    special_characters: str = SPECIAL_CHARACTERS,
    mode: ComparisonMode = ComparisonMode.ORDINAL,
) -> Optional[str]:
    """Strip a run of special characters sitting on the border of *text*.

    Only the first run found anywhere in the text is considered for the start
    and only the last one for the end; each is removed when it sits exactly on
    that border. *special_characters* is a single-character regex class.
    """

    if is_invalid(text):
        return text
    runs = compile_pattern(f"(?:{special_characters})+").findall(text)
    if not runs:
        return text
    if trim_start and starts_with_any(text, runs[0], mode=mode):
        text = remove_prefix(text, runs[0], mode=mode)
    if trim_end and ends_with_any(text, runs[-1], mode=mode):
        text = remove_suffix(text, runs[-1], mode=mode)
    return text


def split_filtered(
    text: Optional[str],
    delimiter: Union[str, DelimiterSpec],
    *,
    keep_empty: bool = False,
    literal: bool = False,
) -> List[str]:
    """Split *text* on a regex (or literal) delimiter.

    Pieces that are absent text are dropped unless *keep_empty* is set. A
    `DelimiterSpec` of kind ``literal`` is always escaped.
    """

    if is_invalid(text):
        return []
    if isinstance(delimiter, DelimiterSpec):
        literal = literal or delimiter.kind == DelimiterKind.LITERAL
        delimiter = delimiter.value
    pattern = compile_pattern(re.escape(delimiter) if literal else delimiter)
    pieces: List[str] = []
    for piece in pattern.split(text):
        if keep_empty:
            pieces.append(piece or "")
        elif is_valid(piece):
            pieces.append(piece)
    return pieces


def split_literal(text: Optional[str], delimiter: str, *, keep_empty: bool = False) -> List[str]:
    return split_filtered(text, delimiter, keep_empty=keep_empty, literal=True)


def split_lines(text: Optional[str], *, keep_empty: bool = False) -> List[str]:
    """Split on ``\\r\\n`` when the text uses it, otherwise on ``\\n``."""

    if is_invalid(text):
        return []
    separator = "\r\n" if "\r\n" in text else "\n"
    return split_literal(text, separator, keep_empty=keep_empty)


__all__ = [
    "MatchList",
    "extract_between",
    "extract_after",
    "extract_from_candidates",
    "extract_by_pattern",
    "extract_all_matches",
    "extract_lookaround",
    "extract_pattern_tail",
    "trim_to_boundary_delimiters",
    "split_filtered",
    "split_literal",
    "split_lines",
]
