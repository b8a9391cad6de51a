"""Present/absent classification shared by every extraction helper.

Text is *absent* when it is ``None``, blank after stripping, or exactly the
token ``"null"`` once stripped. Everything else is *valid*.
"""
from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping, Optional, Union

from strspan.config import NULL_TOKEN
from strspan.extraction.errors import ValidationFailure

LOGGER = logging.getLogger(__name__)

Accessor = Callable[[Any], Any]


def is_invalid(text: Optional[str]) -> bool:
    if text is None:
        return True
    stripped = text.strip()
    return not stripped or stripped == NULL_TOKEN


def is_valid(text: Optional[str]) -> bool:
    return not is_invalid(text)


def assert_valid(text: Optional[str], label: str = "value", *others: Optional[str]) -> None:
    """Raise `ValidationFailure` for the first absent value, checking left to right."""

    if is_invalid(text):
        raise ValidationFailure(label, text)
    for index, other in enumerate(others):
        if is_invalid(other):
            raise ValidationFailure(f"{label}[{index}]", other)


def exists_for_str(obj: Any) -> bool:
    """True when *obj* is not None and its string form is valid."""

    return obj is not None and is_valid(str(obj))


def all_absent(*texts: Optional[str]) -> bool:
    return all(is_invalid(text) for text in texts)


def all_fields_absent(
    obj: Any,
    accessors: Union[Mapping[str, Accessor], Iterable[Accessor]],
) -> bool:
    """True when every string field reached through *accessors* is absent.

    Accessors are supplied explicitly by the caller; results that are not
    ``str`` (or ``None``) are skipped.
    """

    if obj is None:
        return True
    if isinstance(accessors, Mapping):
        named = list(accessors.items())
    else:
        named = [(getattr(fn, "__name__", repr(fn)), fn) for fn in accessors]
    for name, accessor in named:
        value = accessor(obj)
        if value is not None and not isinstance(value, str):
            continue
        if is_valid(value):
            LOGGER.debug("Field %s holds a valid value", name)
            return False
    return True


__all__ = [
    "is_valid",
    "is_invalid",
    "assert_valid",
    "exists_for_str",
    "all_absent",
    "all_fields_absent",
]
