"""Byte-to-literal escaping for C++ string literals.

WHY: Resource files contain arbitrary bytes: NULs, control characters,
high-bit bytes, quotes, backslashes. Every one of the 256 values must be
written inside a double-quoted literal such that the compiler decodes
exactly that byte back, and the literal's byte count stays exact.

HOW: A fixed 256-entry table maps each byte to its token. Three classes:
  printable — the raw character (1 char)
  short     — backslash + letter or the character itself (2 chars)
  other     — backslash + exactly three octal digits (4 chars)
Chunks are escaped by table lookup and joined, so the driver can stream
a file through escape_bytes() without materializing the whole literal.

RULES:
- Octal, never hex, for the general case: a hex escape swallows any
  following hex digit, a three-digit octal escape ends after three digits
- NUL is "\\000", not "\\0": a short NUL followed by a digit byte would be
  read as a longer octal escape
- "?" is escaped to avoid trigraph sequences
- decode_literal() is the inverse and accepts any standard C escape, so
  it can check literals produced elsewhere as well
"""

from __future__ import annotations

from filewrap.errors import LiteralDecodeError

# Bytes written as backslash + designated character.
_SHORT_ESCAPES = {
    ord("\n"): "n",
    ord("\r"): "r",
    ord("\t"): "t",
    ord('"'): '"',
    ord("'"): "'",
    ord("\\"): "\\",
    ord("?"): "?",
}

# Decoder side: every simple escape sequence C++ accepts.
_SIMPLE_DECODES = {
    "n": 0x0A,
    "r": 0x0D,
    "t": 0x09,
    "a": 0x07,
    "b": 0x08,
    "f": 0x0C,
    "v": 0x0B,
    '"': 0x22,
    "'": 0x27,
    "\\": 0x5C,
    "?": 0x3F,
}

_OCTAL_DIGITS = "01234567"
_HEX_DIGITS = "0123456789abcdefABCDEF"


def _build_token(value: int) -> str:
    if value in _SHORT_ESCAPES:
        return "\\" + _SHORT_ESCAPES[value]
    if 0x20 <= value <= 0x7E:
        return chr(value)
    return "\\{}{}{}".format(value // 64, (value % 64) // 8, value % 8)


ESCAPE_TABLE: tuple[bytes, ...] = tuple(
    _build_token(value).encode("ascii") for value in range(256)
)
"""Escape token for every byte value, as ASCII bytes ready to write."""


def escape_byte(value: int) -> str:
    """Return the literal token for one byte value.

    Raises:
        ValueError: if value is outside 0..255.
    """
    if not 0 <= value <= 255:
        raise ValueError("Byte value out of range: {}".format(value))
    return ESCAPE_TABLE[value].decode("ascii")


def escaped_length(value: int) -> int:
    """Length of the token for value: 1, 2 or 4."""
    return len(escape_byte(value))


def escape_bytes(data: bytes) -> bytes:
    """Escape a chunk of bytes into literal text (ASCII bytes)."""
    return b"".join([ESCAPE_TABLE[value] for value in data])


def decode_literal(text: str) -> bytes:
    """Decode the body of a C string literal (without surrounding quotes).

    WHY: The round-trip law (escape then decode yields the input) is the
    core correctness property. A decoder that follows the compiler's
    rules lets tests check it for real file content, not just per byte.

    HOW: Single left-to-right scan. Octal escapes take up to three digits,
    hex escapes take every following hex digit, as a C++ compiler does.

    RULES:
    - An unescaped double quote or newline terminates nothing here; it is
      a malformed literal and raises LiteralDecodeError
    - Only ASCII text is accepted
    - Escaped values above 0xFF raise LiteralDecodeError

    Raises:
        LiteralDecodeError: on any malformed or out-of-range sequence.
    """
    out = bytearray()
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch != "\\":
            if ch in ('"', "\n") or ord(ch) > 0x7F:
                raise LiteralDecodeError(
                    "Invalid raw character {!r} at offset {}".format(ch, i)
                )
            out.append(ord(ch))
            i += 1
            continue

        i += 1
        if i >= n:
            raise LiteralDecodeError("Dangling backslash at end of literal")
        ch = text[i]
        if ch in _SIMPLE_DECODES:
            out.append(_SIMPLE_DECODES[ch])
            i += 1
        elif ch in _OCTAL_DIGITS:
            end = i
            while end < n and end - i < 3 and text[end] in _OCTAL_DIGITS:
                end += 1
            value = int(text[i:end], 8)
            if value > 0xFF:
                raise LiteralDecodeError("Octal escape out of range: \\{}".format(text[i:end]))
            out.append(value)
            i = end
        elif ch == "x":
            end = i + 1
            while end < n and text[end] in _HEX_DIGITS:
                end += 1
            if end == i + 1:
                raise LiteralDecodeError("Hex escape without digits at offset {}".format(i))
            value = int(text[i + 1:end], 16)
            if value > 0xFF:
                raise LiteralDecodeError("Hex escape out of range: \\{}".format(text[i:end]))
            out.append(value)
            i = end
        else:
            raise LiteralDecodeError("Unknown escape \\{} at offset {}".format(ch, i - 1))
    return bytes(out)
