"""Delimiter-based text span extraction."""

from strspan.extraction import (
    Boundary,
    ComparisonMode,
    DelimiterKind,
    DelimiterSpec,
    InvalidArgument,
    InvalidPatternShape,
    MatchList,
    Span,
    StrspanError,
    ValidationFailure,
    assert_valid,
    extract_after,
    extract_all_matches,
    extract_between,
    extract_by_pattern,
    extract_from_candidates,
    extract_lookaround,
    extract_pattern_tail,
    is_invalid,
    is_valid,
    locate_span,
    split_filtered,
    split_lines,
    split_literal,
    trim_to_boundary_delimiters,
)

__version__ = "0.1.0"

__all__ = [
    "Boundary",
    "ComparisonMode",
    "DelimiterKind",
    "DelimiterSpec",
    "InvalidArgument",
    "InvalidPatternShape",
    "MatchList",
    "Span",
    "StrspanError",
    "ValidationFailure",
    "assert_valid",
    "extract_after",
    "extract_all_matches",
    "extract_between",
    "extract_by_pattern",
    "extract_from_candidates",
    "extract_lookaround",
    "extract_pattern_tail",
    "is_invalid",
    "is_valid",
    "locate_span",
    "split_filtered",
    "split_lines",
    "split_literal",
    "trim_to_boundary_delimiters",
]
