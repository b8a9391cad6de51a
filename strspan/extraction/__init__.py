"""Validity checks, span locators and the extraction façade."""

from .errors import InvalidArgument, InvalidPatternShape, StrspanError, ValidationFailure
from .facade import (
    MatchList,
    extract_after,
    extract_all_matches,
    extract_between,
    extract_by_pattern,
    extract_from_candidates,
    extract_lookaround,
    extract_pattern_tail,
    split_filtered,
    split_lines,
    split_literal,
    trim_to_boundary_delimiters,
)
from .locator import locate_lookaround_span, locate_pattern_span, locate_span
from .spans import Boundary, ComparisonMode, DelimiterKind, DelimiterSpec, Span, SpanModel
from .validity import assert_valid, is_invalid, is_valid

__all__ = [
    "Boundary",
    "ComparisonMode",
    "DelimiterKind",
    "DelimiterSpec",
    "InvalidArgument",
    "InvalidPatternShape",
    "MatchList",
    "Span",
    "SpanModel",
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
    "locate_lookaround_span",
    "locate_pattern_span",
    "locate_span",
    "split_filtered",
    "split_lines",
    "split_literal",
    "trim_to_boundary_delimiters",
]
