"""Escaping of strings for JSON output, with a strict UTF-8 validator."""

from __future__ import annotations

from enum import Enum

UTF8_ACCEPT = 0
UTF8_REJECT = 1

_REPLACEMENT_UTF8 = b"\xef\xbf\xbd"
_REPLACEMENT_ASCII = b"\\ufffd"

_SIMPLE_ESCAPES = {
    0x08: b"\\b",
    0x09: b"\\t",
    0x0A: b"\\n",
    0x0C: b"\\f",
    0x0D: b"\\r",
    0x22: b'\\"',
    0x5C: b"\\\\",
}

# Byte classes for 0x00..0xFF followed by the state transition rows.
_UTF8D: tuple[int, ...] = (
    (0,) * 128
    + (1,) * 16
    + (9,) * 16
    + (7,) * 32
    + (8, 8)
    + (2,) * 30
    + (0xA,)
    + (3,) * 12
    + (4, 3, 3)
    + (0xB, 6, 6, 6, 5)
    + (8,) * 11
    + (
        0, 1, 2, 3, 5, 8, 7, 1, 1, 1, 4, 6, 1, 1, 1, 1,
        1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,
        1, 0, 1, 1, 1, 1, 1, 0, 1, 0, 1, 1, 1, 1, 1, 1,
        1, 2, 1, 1, 1, 1, 1, 2, 1, 2, 1, 1, 1, 1, 1, 1,
        1, 1, 1, 1, 1, 1, 1, 2, 1, 1, 1, 1, 1, 1, 1, 1,
        1, 2, 1, 1, 1, 1, 1, 1, 1, 2, 1, 1, 1, 1, 1, 1,
        1, 1, 1, 1, 1, 1, 1, 3, 1, 3, 1, 1, 1, 1, 1, 1,
        1, 3, 1, 1, 1, 1, 1, 3, 1, 3, 1, 1, 1, 1, 1, 1,
        1, 3, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1, 1,
    )
)


class ErrorHandler(Enum):
    """How invalid UTF-8 in a string is treated."""

    STRICT = "strict"
    REPLACE = "replace"
    IGNORE = "ignore"


class JsonTypeError(TypeError):
    """A value cannot be serialized; ``id`` is the numeric error code."""

    def __init__(self, id: int, message: str) -> None:
        super().__init__(message)
        self.id = id
        self.message = message


def decode(state: int, codepoint: int, byte: int) -> tuple[int, int]:
    """Feed one byte to the UTF-8 automaton; return the new ``(state, codepoint)``.

    State 0 means a complete code point was read, state 1 means the byte was
    rejected, any other state means more bytes are expected.
    """
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"byte out of range: {byte}")
    if not 0 <= state <= 8:
        raise ValueError(f"invalid decoder state: {state}")
    byte_type = _UTF8D[byte]
    if state != UTF8_ACCEPT:
        codepoint = (byte & 0x3F) | ((codepoint << 6) & 0xFFFFFFFF)
    else:
        codepoint = (0xFF >> byte_type) & byte
    return _UTF8D[256 + state * 16 + byte_type], codepoint


def hex_byte(byte: int) -> str:
    """Return the two-digit upper-case hexadecimal form of a byte."""
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"byte out of range: {byte}")
    return f"{byte:02X}"


def _escape_codepoint(codepoint: int) -> bytes:
    if codepoint <= 0xFFFF:
        return f"\\u{codepoint:04x}".encode("ascii")
    high = 0xD7C0 + (codepoint >> 10)
    low = 0xDC00 + (codepoint & 0x3FF)
    return f"\\u{high:04x}\\u{low:04x}".encode("ascii")


def escape_string(
    data: str | bytes,
    ensure_ascii: bool = False,
    error_handler: ErrorHandler | str = ErrorHandler.STRICT,
) -> str:
    """Return the JSON-escaped body of a string, without surrounding quotes.

    Control characters, quotes and backslashes are escaped; with
    ``ensure_ascii`` every code point from U+007F on is written as ``\\uXXXX``.
    Invalid UTF-8 raises :class:`JsonTypeError` (code 316) under the strict
    handler, is dropped under ``ignore`` and becomes U+FFFD under ``replace``.
    """
    handler = ErrorHandler(error_handler)
    if isinstance(data, str):
        raw = data.encode("utf-8", "surrogatepass")
    else:
        raw = bytes(data)

    replacement = _REPLACEMENT_ASCII if ensure_ascii else _REPLACEMENT_UTF8
    out = bytearray()
    last_accept = 0
    undumped = 0
    state = UTF8_ACCEPT
    codepoint = 0

    i = 0
    while i < len(raw):
        byte = raw[i]
        state, codepoint = decode(state, codepoint, byte)

        if state == UTF8_ACCEPT:
            simple = _SIMPLE_ESCAPES.get(codepoint)
            if simple is not None:
                out += simple
            elif codepoint <= 0x1F or (ensure_ascii and codepoint >= 0x7F):
                out += _escape_codepoint(codepoint)
            else:
                out.append(byte)
            last_accept = len(out)
            undumped = 0
        elif state == UTF8_REJECT:
            if handler is ErrorHandler.STRICT:
                raise JsonTypeError(
                    316, f"invalid UTF-8 byte at index {i}: 0x{hex_byte(byte)}"
                )
            if undumped > 0:
                # The byte may be valid on its own; read it again.
                i -= 1
            del out[last_accept:]
            if handler is ErrorHandler.REPLACE:
                out += replacement
                last_accept = len(out)
            undumped = 0
            state = UTF8_ACCEPT
        else:
            if not ensure_ascii:
                out.append(byte)
            undumped += 1
        i += 1

    if state != UTF8_ACCEPT:
        if handler is ErrorHandler.STRICT:
            raise JsonTypeError(
                316, f"incomplete UTF-8 string; last byte: 0x{hex_byte(raw[-1])}"
            )
        del out[last_accept:]
        if handler is ErrorHandler.REPLACE:
            out += replacement

    return out.decode("utf-8")