"""Tests for Go string literal decoding."""

import pytest

from goident.errors import MalformedImportPathError, ResolverError
from goident.literals import unquote


def test_unquote_interpreted_string() -> None:
    """Test decoding a plain interpreted string."""
    assert unquote('"fmt"') == "fmt"
    assert unquote('"github.com/dave/dst"') == "github.com/dave/dst"


def test_unquote_raw_string() -> None:
    """Test decoding a raw string literal."""
    assert unquote("`net/http`") == "net/http"


def test_unquote_raw_string_drops_carriage_returns() -> None:
    """Test that carriage returns are discarded from raw strings, as in Go."""
    assert unquote("`a\r/b`") == "a/b"


def test_unquote_raw_string_keeps_backslashes() -> None:
    """Test that raw strings do not process escapes."""
    assert unquote("`a\\n`") == "a\\n"


@pytest.mark.parametrize(
    ("literal", "expected"),
    [
        ('"a\\tb"', "a\tb"),
        ('"a\\\\b"', "a\\b"),
        ('"a\\"b"', 'a"b'),
        ('"\\x66mt"', "fmt"),
        ('"\\146mt"', "fmt"),
        ('"caf\\u00e9"', "café"),
        ('"\\U0001F600"', "\U0001f600"),
        ('"caf\\xc3\\xa9"', "café"),
        ('"caf\\303\\251"', "café"),
    ],
)
def test_unquote_escapes(literal: str, expected: str) -> None:
    """Test the escape sequences Go allows in interpreted strings."""
    assert unquote(literal) == expected


def test_unquote_empty_string() -> None:
    """Test that an empty literal decodes to an empty string."""
    assert unquote('""') == ""


@pytest.mark.parametrize(
    "literal",
    [
        "fmt",  # unquoted
        '"fmt',  # unterminated
        "'f'",  # rune literal
        '"',  # too short
        '"a\\qb"',  # unknown escape
        "\"a\\'b\"",  # \' is only valid in rune literals
        '"a\\"',  # trailing backslash
        '"\\x6"',  # short hex escape
        '"\\18"',  # short octal escape
        '"\\400"',  # octal out of range
        '"\\xff"',  # byte escape that is not UTF-8
        '"\\uD800"',  # surrogate half
        '"a\nb"',  # newline inside interpreted string
        '"a"b"',  # unescaped quote
        "`a`b`",  # backquote inside raw string
    ],
)
def test_unquote_malformed(literal: str) -> None:
    """Test that malformed literals raise MalformedImportPathError."""
    with pytest.raises(MalformedImportPathError):
        unquote(literal)


def test_malformed_literal_is_not_a_resolver_error() -> None:
    """Test that malformed literals are invariant violations, not resolution failures."""
    with pytest.raises(MalformedImportPathError) as exc_info:
        unquote('"a\\qb"')

    assert isinstance(exc_info.value, AssertionError)
    assert not isinstance(exc_info.value, ResolverError)
    assert exc_info.value.literal == '"a\\qb"'
