"""Decoding of Go string literals as they appear in import specs.

Import paths are written either as interpreted string literals ("fmt") or raw
string literals (`fmt`). This mirrors the subset of Go's strconv.Unquote that
applies to string literals; single-quoted rune literals are never valid paths.
"""

from goident.errors import MalformedImportPathError

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}

# Number of hex digits following each hex escape letter
_HEX_ESCAPE_WIDTHS = {"x": 2, "u": 4, "U": 8}

_OCTAL_DIGITS = frozenset("01234567")
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def unquote(literal: str) -> str:
    """Decode a Go string literal into the string it denotes.

    Args:
        literal: The literal exactly as written in source, quotes included

    Returns:
        The decoded string

    Raises:
        MalformedImportPathError: If the literal is not a valid Go string literal

    Examples:
        >>> unquote('"fmt"')
        'fmt'
        >>> unquote("`github.com/dave/dst`")
        'github.com/dave/dst'
        >>> unquote('"caf\\u00e9"')
        'café'
    """
    if len(literal) < 2:
        raise MalformedImportPathError(literal, "too short to be quoted")

    quote = literal[0]
    if literal[-1] != quote:
        raise MalformedImportPathError(literal, "mismatched quotes")

    body = literal[1:-1]
    if quote == "`":
        if "`" in body:
            raise MalformedImportPathError(literal, "backquote inside raw string")
        # Carriage returns are discarded from raw strings
        return body.replace("\r", "")

    if quote != '"':
        raise MalformedImportPathError(literal, "not a string literal")

    return _decode_interpreted(literal, body)


def _decode_interpreted(literal: str, body: str) -> str:
    """Decode the body of an interpreted string literal, expanding escapes.

    Octal and ``\\x`` escapes denote single bytes, while ``\\u`` and ``\\U``
    escapes denote code points, so the result is assembled as UTF-8 bytes.
    """
    out = bytearray()
    i = 0
    while i < len(body):
        char = body[i]
        if char == '"' or char == "\n":
            raise MalformedImportPathError(literal, f"unexpected {char!r} in interpreted string")
        if char != "\\":
            out += char.encode()
            i += 1
            continue

        if i + 1 >= len(body):
            raise MalformedImportPathError(literal, "trailing backslash")
        escape = body[i + 1]

        if escape in _SIMPLE_ESCAPES:
            out += _SIMPLE_ESCAPES[escape].encode()
            i += 2
        elif escape in _OCTAL_DIGITS:
            digits = body[i + 1 : i + 4]
            if len(digits) != 3 or not set(digits) <= _OCTAL_DIGITS:
                raise MalformedImportPathError(literal, "octal escape needs three digits")
            value = int(digits, 8)
            if value > 0xFF:
                raise MalformedImportPathError(literal, "octal escape out of range")
            out.append(value)
            i += 4
        elif escape in _HEX_ESCAPE_WIDTHS:
            width = _HEX_ESCAPE_WIDTHS[escape]
            digits = body[i + 2 : i + 2 + width]
            if len(digits) != width or not set(digits) <= _HEX_DIGITS:
                raise MalformedImportPathError(literal, f"\\{escape} escape needs {width} hex digits")
            value = int(digits, 16)
            if escape == "x":
                out.append(value)
            elif value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
                raise MalformedImportPathError(literal, "escape is not a valid code point")
            else:
                out += chr(value).encode()
            i += 2 + width
        else:
            raise MalformedImportPathError(literal, f"unknown escape sequence \\{escape}")

    try:
        return out.decode()
    except UnicodeDecodeError:
        raise MalformedImportPathError(literal, "byte escapes do not form valid UTF-8") from None
