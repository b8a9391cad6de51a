"""Typed errors raised by the extraction toolkit.

"Not found" is never an error: locators return ``None`` and the façade returns
empty text or an empty ``MatchList``. Only malformed inputs surface here.
"""
from __future__ import annotations

from typing import Optional


class StrspanError(Exception):
    """Base class for every error raised by strspan."""


class ValidationFailure(StrspanError, ValueError):
    """An asserted value is absent (None, blank, or the literal "null")."""

    def __init__(self, label: str, value: Optional[str] = None) -> None:
        self.label = label
        self.value = value
        super().__init__(
            f"{label} has no valid value; it must not be empty, None, blank or \"null\" (got {value!r})"
        )


class InvalidPatternShape(StrspanError, ValueError):
    """A regex boundary cannot be compiled into a usable pattern."""

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid pattern {pattern!r}: {reason}")


class InvalidArgument(StrspanError, ValueError):
    """Input rejected by one of the peripheral text helpers."""


__all__ = ["StrspanError", "ValidationFailure", "InvalidPatternShape", "InvalidArgument"]
