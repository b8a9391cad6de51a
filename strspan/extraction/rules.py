"""Declarative extraction rules loaded from JSON and applied to documents."""
from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, model_validator

from strspan.extraction.errors import InvalidPatternShape
from strspan.extraction.facade import extract_from_candidates, split_filtered
from strspan.extraction.locator import (
    iter_pattern_spans,
    locate_lookaround_span,
    locate_pattern_span,
    locate_span,
)
from strspan.extraction.spans import Boundary, ComparisonMode, Span, SpanModel, span_model

LOGGER = logging.getLogger(__name__)


class RuleKind(str, Enum):
    """Extraction operation a rule runs."""

    BETWEEN = "between"
    CANDIDATES = "candidates"
    PATTERN = "pattern"
    ALL_MATCHES = "all_matches"
    LOOKAROUND = "lookaround"
    SPLIT = "split"


class ExtractionRule(BaseModel):
    """One named extraction over a document's text."""

    name: str = Field(min_length=1)
    kind: RuleKind
    start: str = ""
    end: str = ""
    content_pattern: Optional[str] = None
    keys: List[str] = Field(default_factory=list)
    candidates: List[Tuple[int, int]] = Field(default_factory=list)
    include_start: bool = False
    include_end: bool = False
    ignore_case: bool = False
    keep_empty: bool = False
    literal: bool = False

    model_config = {"extra": "forbid"}

    @model_validator(mode="after")
    def _check_required_fields(self) -> "ExtractionRule":
        if self.kind in (RuleKind.PATTERN, RuleKind.ALL_MATCHES) and self.content_pattern is None:
            raise ValueError(f"{self.kind.value} rules need a content_pattern")
        if self.kind == RuleKind.CANDIDATES:
            if not self.keys or not self.candidates:
                raise ValueError("candidates rules need keys and candidates")
            for pair in self.candidates:
                if any(index >= len(self.keys) or index < -1 for index in pair):
                    raise ValueError(f"candidate {pair} points outside keys")
        if self.kind == RuleKind.SPLIT and not self.start:
            raise ValueError("split rules use start as the delimiter")
        return self

    @property
    def mode(self) -> ComparisonMode:
        return ComparisonMode.IGNORE_CASE if self.ignore_case else ComparisonMode.ORDINAL

    @property
    def flags(self) -> int:
        return re.IGNORECASE if self.ignore_case else 0


@dataclass(slots=True)
class RuleResult:
    """Values (and spans where offsets are known) produced by one rule."""

    rule: str
    values: List[str] = field(default_factory=list)
    spans: List[SpanModel] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def found(self) -> bool:
        return bool(self.values)

    def to_dict(self) -> dict:
        return {
            "rule": self.rule,
            "values": list(self.values),
            "spans": [span.model_dump() for span in self.spans],
            "error": self.error,
        }


def _from_spans(rule: ExtractionRule, text: str, spans: Iterable[Optional[Span]]) -> RuleResult:
    result = RuleResult(rule=rule.name)
    for span in spans:
        if span is None:
            continue
        model = span_model(rule.name, text, span, kind=rule.kind.value)
        result.values.append(model.text)
        result.spans.append(model)
    return result


def apply_rule(text: str, rule: ExtractionRule) -> RuleResult:
    """Run *rule* over *text*; malformed patterns are reported on the result."""

    try:
        if rule.kind == RuleKind.BETWEEN:
            span = locate_span(
                text,
                Boundary.literal(rule.start, rule.include_start),
                Boundary.literal(rule.end, rule.include_end),
                rule.mode,
            )
            if span is not None and span.length == 0:
                span = None
            return _from_spans(rule, text, [span])
        if rule.kind == RuleKind.CANDIDATES:
            value = extract_from_candidates(
                text,
                rule.keys,
                rule.candidates,
                include_start=rule.include_start,
                include_end=rule.include_end,
                mode=rule.mode,
            )
            return RuleResult(rule=rule.name, values=[value] if value else [])
        if rule.kind == RuleKind.PATTERN:
            span = locate_pattern_span(
                text, rule.start, rule.content_pattern or "", rule.end, rule.include_start, rule.flags
            )
            return _from_spans(rule, text, [span])
        if rule.kind == RuleKind.ALL_MATCHES:
            spans = iter_pattern_spans(
                text, rule.start, rule.content_pattern or "", rule.end, rule.include_start, rule.flags
            )
            return _from_spans(rule, text, spans)
        if rule.kind == RuleKind.LOOKAROUND:
            span = locate_lookaround_span(text, rule.start, rule.end)
            return _from_spans(rule, text, [span])
        pieces = split_filtered(text, rule.start, keep_empty=rule.keep_empty, literal=rule.literal)
        return RuleResult(rule=rule.name, values=pieces)
    except InvalidPatternShape as exc:
        LOGGER.warning("Rule %s has an invalid pattern: %s", rule.name, exc)
        return RuleResult(rule=rule.name, error=str(exc))


def apply_rules(text: str, rules: Iterable[ExtractionRule]) -> List[RuleResult]:
    return [apply_rule(text, rule) for rule in rules]


def validate_rules(payload: Iterable[dict]) -> List[ExtractionRule]:
    rules: List[ExtractionRule] = []
    for raw in payload:
        try:
            rules.append(ExtractionRule.model_validate(raw))
        except ValidationError as exc:
            raise ValueError(f"Invalid rule payload: {raw}") from exc
    names = [rule.name for rule in rules]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ValueError(f"Duplicate rule names: {', '.join(duplicates)}")
    return rules


def load_rules(path: Path) -> List[ExtractionRule]:
    """Load a JSON list of rules (or ``{"rules": [...]}``) from *path*."""

    payload = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("rules", [])
    if not isinstance(payload, list):
        raise ValueError(f"Rules file {path} must hold a list of rules")
    return validate_rules(payload)


__all__ = [
    "RuleKind",
    "ExtractionRule",
    "RuleResult",
    "apply_rule",
    "apply_rules",
    "validate_rules",
    "load_rules",
]
