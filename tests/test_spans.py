import pytest

from strspan.extraction.spans import Boundary, DelimiterKind, DelimiterSpec, Span, span_model, validate_spans


def test_span_rejects_negative_length() -> None:
    with pytest.raises(ValueError):
        Span(5, 2)
    with pytest.raises(ValueError):
        Span(-1, 2)


def test_span_slice_and_length() -> None:
    span = Span(3, 8)
    assert span.slice("<a>hello</a>") == "hello"
    assert span.length == 5


def test_delimiter_equality_is_by_content() -> None:
    assert DelimiterSpec.literal("<a>") == DelimiterSpec("<a>", DelimiterKind.LITERAL)
    assert DelimiterSpec.literal("a+") != DelimiterSpec.pattern("a+")
    assert DelimiterSpec.literal("").is_empty
    assert Boundary.literal("x", include=True).value == "x"


def test_span_model_round_trip() -> None:
    model = span_model("tag", "<a>hello</a>", Span(3, 8), kind="between")
    assert model.text == "hello"
    assert model.length == 5
    assert model.attributes["kind"] == "between"


def test_validate_spans_invalid() -> None:
    payload = {"rule": "tag", "text": "x", "start": 5, "end": 2}
    with pytest.raises(ValueError):
        validate_spans([payload])
