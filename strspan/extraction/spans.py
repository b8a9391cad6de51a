"""Span schema + delimiter records shared by locators and the batch CLI."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List

from pydantic import BaseModel, Field, ValidationError, model_validator


class DelimiterKind(str, Enum):
    """How a delimiter string is matched."""

    LITERAL = "literal"
    PATTERN = "pattern"


class ComparisonMode(str, Enum):
    """Comparison rule for literal matching; regex case is set through flags."""

    ORDINAL = "ordinal"
    IGNORE_CASE = "ignore_case"


@dataclass(slots=True, frozen=True)
class DelimiterSpec:
    """A literal or regex delimiter. An empty value means "no boundary"."""

    value: str
    kind: DelimiterKind = DelimiterKind.LITERAL

    @classmethod
    def literal(cls, value: str) -> "DelimiterSpec":
        return cls(value=value, kind=DelimiterKind.LITERAL)

    @classmethod
    def pattern(cls, value: str) -> "DelimiterSpec":
        return cls(value=value, kind=DelimiterKind.PATTERN)

    @property
    def is_empty(self) -> bool:
        return not self.value


@dataclass(slots=True, frozen=True)
class Boundary:
    """One end of a span: a delimiter plus whether its text belongs to the span."""

    delimiter: DelimiterSpec
    include: bool = False

    @classmethod
    def literal(cls, value: str, include: bool = False) -> "Boundary":
        return cls(delimiter=DelimiterSpec.literal(value), include=include)

    @property
    def value(self) -> str:
        return self.delimiter.value


@dataclass(slots=True, frozen=True)
class Span:
    """Half-open ``[start, end)`` offset range into a text."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid span offsets: [{self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start

    def slice(self, text: str) -> str:
        return text[self.start : self.end]

    def to_dict(self) -> dict:
        return {"start": self.start, "end": self.end}


class SpanModel(BaseModel):
    """Pydantic representation of an extracted span for serialized output."""

    rule: str = Field(min_length=1)
    text: str
    start: int = Field(ge=0)
    end: int = Field(ge=0)
    attributes: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def _check_order(self) -> "SpanModel":
        if self.end < self.start:
            raise ValueError("end must not precede start")
        return self

    @property
    def length(self) -> int:
        return self.end - self.start


def span_model(rule: str, text: str, span: Span, **attributes: Any) -> SpanModel:
    """Build a `SpanModel` for *span* located in *text*."""

    return SpanModel(rule=rule, text=span.slice(text), start=span.start, end=span.end, attributes=attributes)


def validate_span(span: SpanModel | Dict[str, Any]) -> SpanModel:
    """Validate a span dict and return a `SpanModel`."""

    if isinstance(span, SpanModel):
        return span
    return SpanModel.model_validate(span)


def validate_spans(spans: Iterable[SpanModel | Dict[str, Any]]) -> List[SpanModel]:
    """Validate a collection of span-like objects."""

    validated: List[SpanModel] = []
    for span in spans:
        try:
            validated.append(validate_span(span))
        except ValidationError as exc:
            raise ValueError(f"Invalid span payload: {span}") from exc
    return validated
