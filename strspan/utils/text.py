"""Small text helpers that sit around the extraction core."""
from __future__ import annotations

import base64
import codecs
import re
from typing import Any, List, Optional, Sequence

from bs4 import BeautifulSoup

from strspan.extraction.errors import InvalidArgument
from strspan.extraction.validity import is_valid

NON_DIGIT_RE = re.compile(r"\D")
TEXT_RUN_RE = re.compile(r"(?![\d])([^0-9]+)")
TEXT_RUN_DECIMAL_RE = re.compile(r"(?![\d.])([^0-9]+)")
HIDDEN_TAGS = ("script", "style", "noscript")
# GB2312 rows 16-87 hold the Han characters.
HAN_AREA_FIRST = 16
HAN_AREA_LAST = 87


def strip_html_tags(html: str, remove_single_spaces: bool = False) -> str:
    """Return the visible text of *html* plus its ``alt``/``title`` attribute text."""

    soup = BeautifulSoup(html, "lxml")
    alts = [str(node["alt"]) for node in soup.find_all(alt=True)]
    titles = [str(node["title"]) for node in soup.find_all(title=True)]
    for node in soup(HIDDEN_TAGS):
        node.decompose()
    text = soup.get_text("") + "".join(alts) + "".join(titles)
    text = text.replace('"', "''")
    text = text.replace("\r\n", "\n").replace("\n", "").replace("\t", "")
    if remove_single_spaces:
        return text.replace(" ", "")
    return text.replace("  ", "")


def strip_line_breaks(text: str) -> str:
    """Drop CR, LF, tabs and double spaces."""

    return replace_many(text, "", "\n", "\r", "\t", "  ")


def replace_many(text: str, new: str, *olds: str) -> str:
    for old in olds:
        text = text.replace(old, new)
    return text


def to_encoded_word(text: str, encoding: str = "utf-8") -> str:
    """RFC 2047 base64 encoded-word, e.g. ``=?utf-8?B?...?=``."""

    charset = codecs.lookup(encoding).name
    payload = base64.b64encode(text.encode(charset)).decode("ascii")
    return f"=?{charset}?B?{payload}?="


def bytes_equal(left: bytes, right: bytes) -> bool:
    return bytes(left) == bytes(right)


def han_equal(left: str, right: str, remove_spaces: bool = True) -> bool:
    """Compare two names by their UTF-8 bytes, ignoring spaces by default."""

    if remove_spaces:
        left = left.replace(" ", "")
        right = right.replace(" ", "")
    return bytes_equal(left.encode("utf-8"), right.encode("utf-8"))


def region_code(text: str) -> str:
    """GB2312 区位码 of each Han character, four digits per character."""

    try:
        data = text.encode("gb2312")
    except UnicodeEncodeError as exc:
        raise InvalidArgument(f"Region codes need Han characters only, got {text!r}") from exc
    if len(data) != 2 * len(text):
        raise InvalidArgument(f"Region codes need Han characters only, got {text!r}")
    codes: List[str] = []
    for index in range(0, len(data), 2):
        area, position = data[index] - 160, data[index + 1] - 160
        if not HAN_AREA_FIRST <= area <= HAN_AREA_LAST:
            raise InvalidArgument(f"{text[index // 2]!r} is not a Han character")
        codes.append(f"{area:02d}{position:02d}")
    return "".join(codes)


def digits_only(text: str) -> str:
    return NON_DIGIT_RE.sub("", text)


def split_text_numbers(text: str, split_decimal: bool = False) -> List[str]:
    """Split *text* into alternating number and non-number pieces, in order.

    With *split_decimal* a non-number piece never starts with ``.``, so
    decimals such as ``1.5`` stay whole.
    """

    pattern = TEXT_RUN_DECIMAL_RE if split_decimal else TEXT_RUN_RE
    pieces: List[str] = []
    cursor = 0
    for match in pattern.finditer(text):
        pieces.append(text[cursor : match.start()])
        pieces.append(match.group(0))
        cursor = match.end()
    pieces.append(text[cursor:])
    return pieces


def join_contents(
    separator: str,
    contents: Sequence[Any],
    prefix: str = "",
    suffix: str = "",
    trailing: bool = False,
    strip: bool = True,
) -> str:
    """Join the string forms of *contents*, each wrapped in *prefix*/*suffix*."""

    parts: List[str] = []
    for content in contents:
        value = str(content)
        parts.append(f"{prefix}{value.strip() if strip else value}{suffix}")
    joined = separator.join(parts)
    if trailing and parts:
        joined += separator
    return joined


def add_newlines(
    *contents: Any,
    trailing: bool = False,
    skip_empty: bool = True,
    extra_every: int = 0,
) -> str:
    """One line per content; an extra blank line after every *extra_every* lines."""

    lines: List[str] = []
    written = 0
    for content in contents:
        value = "" if content is None else str(content)
        if skip_empty and not is_valid(value):
            continue
        lines.append(value)
        written += 1
        if extra_every and written % extra_every == 0:
            lines.append("")
    while lines and lines[-1] == "" and extra_every:
        lines.pop()
    text = "\n".join(lines)
    if trailing and lines:
        text += "\n"
    return text


def reverse(text: str) -> str:
    return text[::-1]


def pad_left(obj: Any, width: int, fill: str = " ") -> str:
    return str(obj).rjust(width, fill)


def to_ascii_bytes(text: str) -> bytes:
    return text.encode("ascii", errors="replace")


def hex_to_bytes(hex_str: Optional[str]) -> Optional[bytes]:
    """Decode pairs of hex digits; a trailing odd digit is ignored."""

    if not hex_str:
        return None
    even = hex_str[: len(hex_str) // 2 * 2]
    try:
        return bytes(int(even[i : i + 2], 16) for i in range(0, len(even), 2))
    except ValueError as exc:
        raise InvalidArgument(f"Not a hex string: {hex_str!r}") from exc


__all__ = [
    "strip_html_tags",
    "strip_line_breaks",
    "replace_many",
    "to_encoded_word",
    "bytes_equal",
    "han_equal",
    "region_code",
    "digits_only",
    "split_text_numbers",
    "join_contents",
    "add_newlines",
    "reverse",
    "pad_left",
    "to_ascii_bytes",
    "hex_to_bytes",
]
