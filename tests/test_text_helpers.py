import pytest

from strspan.extraction.errors import InvalidArgument
from strspan.utils.text import (
    add_newlines,
    digits_only,
    han_equal,
    hex_to_bytes,
    join_contents,
    pad_left,
    region_code,
    reverse,
    split_text_numbers,
    strip_html_tags,
    strip_line_breaks,
    to_ascii_bytes,
    to_encoded_word,
)


def test_strip_html_tags_keeps_alt_text() -> None:
    html = '<p>Hello <b>world</b></p><script>x()</script><img alt="pic">'
    assert strip_html_tags(html) == "Hello worldpic"
    assert strip_html_tags(html, remove_single_spaces=True) == "Helloworldpic"


def test_region_code() -> None:
    assert region_code("啊") == "1601"
    assert region_code("中") == "5448"


def test_region_code_rejects_non_han() -> None:
    for value in ("a", "，", "中a"):
        with pytest.raises(InvalidArgument):
            region_code(value)


def test_encoded_word_and_byte_helpers() -> None:
    assert to_encoded_word("hi") == "=?utf-8?B?aGk=?="
    assert han_equal("张 三", "张三")
    assert not han_equal("张 三", "张三", remove_spaces=False)
    assert to_ascii_bytes("aé") == b"a?"


def test_hex_to_bytes() -> None:
    assert hex_to_bytes("0aff") == b"\x0a\xff"
    assert hex_to_bytes("0af") == b"\x0a"
    assert hex_to_bytes("") is None
    with pytest.raises(InvalidArgument):
        hex_to_bytes("zz")


def test_number_helpers() -> None:
    assert digits_only("a1b2c3") == "123"
    assert split_text_numbers("abc123def") == ["", "abc", "123", "def", ""]
    assert split_text_numbers("1.5kg", split_decimal=True) == ["1.5", "kg", ""]
    assert split_text_numbers("1.5kg") == ["1", ".", "5", "kg", ""]


def test_join_contents() -> None:
    assert join_contents(",", [" a ", 1, "b"]) == "a,1,b"
    assert join_contents(",", ["a", "b"], trailing=True) == "a,b,"
    assert join_contents(",", ["a", "b"], prefix="[", suffix="]") == "[a],[b]"


def test_add_newlines() -> None:
    assert add_newlines("a", "", "b") == "a\nb"
    assert add_newlines("a", "b", trailing=True) == "a\nb\n"
    assert add_newlines("a", "b", extra_every=1) == "a\n\nb"


def test_small_string_helpers() -> None:
    assert reverse("abc") == "cba"
    assert pad_left(7, 3, "0") == "007"
    assert strip_line_breaks("a\r\nb\tc") == "abc"
