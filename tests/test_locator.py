import pytest

from strspan.extraction.errors import InvalidPatternShape
from strspan.extraction.locator import (
    has_dangling_backslash,
    iter_pattern_spans,
    locate_lookaround_span,
    locate_pattern_span,
    locate_span,
)
from strspan.extraction.spans import Boundary, ComparisonMode, DelimiterSpec, Span


def lit(value: str, include: bool = False) -> Boundary:
    return Boundary.literal(value, include)


def test_locate_span_excludes_delimiters_by_default() -> None:
    assert locate_span("<a>hello</a>", lit("<a>"), lit("</a>")) == Span(3, 8)


def test_locate_span_includes_both_delimiters() -> None:
    assert locate_span("<a>hello</a>", lit("<a>", True), lit("</a>", True)) == Span(0, 12)


def test_locate_span_start_only_runs_to_end() -> None:
    assert locate_span("key=value", lit("="), None) == Span(4, 9)
    assert locate_span("<a>hello", lit("<a>"), lit("</a>")) == Span(3, 8)


def test_locate_span_end_only_starts_at_zero() -> None:
    assert locate_span("abc;def", None, lit(";")) == Span(0, 3)


def test_locate_span_end_never_collapses_onto_start() -> None:
    assert locate_span(";abc;", None, lit(";")) == Span(0, 4)


def test_locate_span_not_found_cases() -> None:
    assert locate_span("hello", lit("<a>"), lit("</a>")) is None
    assert locate_span("ab", lit("abc"), None) is None
    assert locate_span("ab", None, lit("abc")) is None
    assert locate_span(None, lit("a"), None) is None
    assert locate_span(" null ", lit("n"), None) is None


def test_locate_span_ignore_case() -> None:
    span = locate_span("<A>x</A>", lit("<a>"), lit("</a>"), ComparisonMode.IGNORE_CASE)
    assert span == Span(3, 4)


def test_locate_span_rejects_pattern_boundaries() -> None:
    with pytest.raises(TypeError):
        locate_span("abc", Boundary(DelimiterSpec.pattern("a+")), None)


def test_locate_pattern_span_trims_by_length() -> None:
    assert locate_pattern_span("id: 42;", "id: ", r"\d+", ";") == Span(4, 6)
    assert locate_pattern_span("id: 42;", "id: ", r"\d+", ";", include_start=True) == Span(0, 7)
    assert locate_pattern_span("id: none", "id: ", r"\d+") is None


def test_locate_pattern_span_escapes_start_literal() -> None:
    assert locate_pattern_span("cost (usd) 5", "(usd) ", r"\d") == Span(11, 12)


def test_dangling_backslash_is_an_invalid_shape() -> None:
    with pytest.raises(InvalidPatternShape):
        locate_pattern_span("a\\b", "a", ".", "\\")
    with pytest.raises(InvalidPatternShape):
        locate_pattern_span("C:\\x", "C:\\", ".")


def test_compile_errors_become_invalid_shape() -> None:
    with pytest.raises(InvalidPatternShape) as excinfo:
        locate_pattern_span("x", "", "(")
    assert isinstance(excinfo.value, ValueError)


def test_has_dangling_backslash() -> None:
    assert has_dangling_backslash("a\\")
    assert has_dangling_backslash("a\\\\\\")
    assert not has_dangling_backslash("a\\\\")
    assert not has_dangling_backslash("")


def test_lookaround_takes_nearest_enclosing_delimiters() -> None:
    assert locate_lookaround_span("<b>one</b><b>two</b>", "<b>", "</b>") == Span(3, 6)


def test_lookaround_single_boundary() -> None:
    assert locate_lookaround_span("key: value", "key: ", None) == Span(5, 10)
    assert locate_lookaround_span("abc;def;", None, ";") == Span(0, 3)


def test_lookaround_without_boundaries_returns_whole_text() -> None:
    assert locate_lookaround_span("whole", None, "") == Span(0, 5)


def test_lookaround_crosses_lines() -> None:
    assert locate_lookaround_span("<p>\nline\n</p>", "<p>", "</p>") == Span(3, 9)


def test_lookaround_not_found() -> None:
    assert locate_lookaround_span("<b>open", "<b>", "</b>") is None
    assert locate_lookaround_span(None, "<b>", "</b>") is None


def test_lookaround_start_ending_in_backslash_is_invalid_shape() -> None:
    with pytest.raises(InvalidPatternShape):
        locate_lookaround_span("a\\b", "a\\", "b")


def test_lookaround_variable_width_lookbehind_is_invalid_shape() -> None:
    with pytest.raises(InvalidPatternShape):
        locate_lookaround_span("aab", "a+", None, escape_start=False)


def test_iter_pattern_spans_returns_all_matches_in_order() -> None:
    spans = iter_pattern_spans("k=1;k=22;", "k=", r"\d+", ";")
    assert spans == [Span(2, 3), Span(6, 8)]
    assert iter_pattern_spans("nothing", "k=", r"\d+", ";") == []
