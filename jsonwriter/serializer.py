"""Serialization of Python values to JSON text."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from jsonwriter.binary import ByteContainer
from jsonwriter.dtoa import to_chars
from jsonwriter.escape import ErrorHandler, escape_string
from jsonwriter.output import OutputAdapter, output_adapter

_INT_MIN = -(1 << 63)
_UINT_MAX = (1 << 64) - 1
_INITIAL_INDENT = 512


class _Discarded:
    """Marker for a value that was dropped while parsing."""

    _instance: _Discarded | None = None

    def __new__(cls) -> _Discarded:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DISCARDED"


DISCARDED = _Discarded()


class Serializer:
    """Writes JSON text for Python values to an output adapter.

    Objects are mappings with string keys, arrays are lists or tuples,
    binary values are :class:`ByteContainer`, ``bytes`` or ``bytearray``.
    """

    def __init__(
        self,
        target: Any = None,
        indent_char: str = " ",
        error_handler: ErrorHandler | str = ErrorHandler.STRICT,
    ) -> None:
        if len(indent_char) != 1:
            raise ValueError(f"indent character must be a single character, got {indent_char!r}")
        self.output: OutputAdapter = output_adapter(target)
        self.indent_char = indent_char
        self.error_handler = ErrorHandler(error_handler)
        self._indent_string = indent_char * _INITIAL_INDENT

    def _indent(self, width: int) -> str:
        # Growth beyond the initial size is padded with spaces.
        while len(self._indent_string) < width:
            self._indent_string += " " * len(self._indent_string)
        return self._indent_string[:width]

    def _write_string(self, s: str | bytes, ensure_ascii: bool) -> None:
        self.output.write_character('"')
        self.output.write_characters(escape_string(s, ensure_ascii, self.error_handler))
        self.output.write_character('"')

    def dump(
        self,
        value: Any,
        pretty_print: bool = False,
        ensure_ascii: bool = False,
        indent_step: int = 0,
        current_indent: int = 0,
    ) -> None:
        """Write ``value``; with ``pretty_print`` nested levels are indented by ``indent_step``."""
        out = self.output
        if value is None:
            out.write_characters("null")
        elif value is DISCARDED:
            out.write_characters("<discarded>")
        elif isinstance(value, bool):
            out.write_characters("true" if value else "false")
        elif isinstance(value, int):
            self.dump_integer(value)
        elif isinstance(value, float):
            self.dump_float(value)
        elif isinstance(value, str):
            self._write_string(value, ensure_ascii)
        elif isinstance(value, (ByteContainer, bytes, bytearray)):
            self._dump_binary(value, pretty_print, indent_step, current_indent)
        elif isinstance(value, Mapping):
            self._dump_object(value, pretty_print, ensure_ascii, indent_step, current_indent)
        elif isinstance(value, (list, tuple)):
            self._dump_array(value, pretty_print, ensure_ascii, indent_step, current_indent)
        else:
            raise TypeError(f"cannot serialize value of type {type(value).__name__}")

    def _dump_object(
        self,
        obj: Mapping[Any, Any],
        pretty_print: bool,
        ensure_ascii: bool,
        indent_step: int,
        current_indent: int,
    ) -> None:
        out = self.output
        if not obj:
            out.write_characters("{}")
            return
        for key in obj:
            if not isinstance(key, str):
                raise TypeError(f"object keys must be strings, got {type(key).__name__}")

        if pretty_print:
            new_indent = current_indent + indent_step
            out.write_characters("{\n")
            for index, (key, item) in enumerate(obj.items()):
                if index:
                    out.write_characters(",\n")
                out.write_characters(self._indent(new_indent))
                self._write_string(key, ensure_ascii)
                out.write_characters(": ")
                self.dump(item, True, ensure_ascii, indent_step, new_indent)
            out.write_character("\n")
            out.write_characters(self._indent(current_indent))
            out.write_character("}")
        else:
            out.write_character("{")
            for index, (key, item) in enumerate(obj.items()):
                if index:
                    out.write_character(",")
                self._write_string(key, ensure_ascii)
                out.write_character(":")
                self.dump(item, False, ensure_ascii, indent_step, current_indent)
            out.write_character("}")

    def _dump_array(
        self,
        items: list[Any] | tuple[Any, ...],
        pretty_print: bool,
        ensure_ascii: bool,
        indent_step: int,
        current_indent: int,
    ) -> None:
        out = self.output
        if not items:
            out.write_characters("[]")
            return

        if pretty_print:
            new_indent = current_indent + indent_step
            out.write_characters("[\n")
            for index, item in enumerate(items):
                if index:
                    out.write_characters(",\n")
                out.write_characters(self._indent(new_indent))
                self.dump(item, True, ensure_ascii, indent_step, new_indent)
            out.write_character("\n")
            out.write_characters(self._indent(current_indent))
            out.write_character("]")
        else:
            out.write_character("[")
            for index, item in enumerate(items):
                if index:
                    out.write_character(",")
                self.dump(item, False, ensure_ascii, indent_step, current_indent)
            out.write_character("]")

    def _dump_binary(
        self,
        data: ByteContainer | bytes | bytearray,
        pretty_print: bool,
        indent_step: int,
        current_indent: int,
    ) -> None:
        out = self.output
        if isinstance(data, ByteContainer) and data.has_subtype():
            subtype = str(data.subtype())
        else:
            subtype = "null"

        if pretty_print:
            new_indent = current_indent + indent_step
            indent = self._indent(new_indent)
            out.write_characters("{\n")
            out.write_characters(indent)
            out.write_characters('"bytes": [')
            out.write_characters(", ".join(str(b) for b in data))
            out.write_characters("],\n")
            out.write_characters(indent)
            out.write_characters('"subtype": ')
            out.write_characters(subtype)
            out.write_character("\n")
            out.write_characters(self._indent(current_indent))
            out.write_character("}")
        else:
            out.write_characters('{"bytes":[')
            out.write_characters(",".join(str(b) for b in data))
            out.write_characters('],"subtype":')
            out.write_characters(subtype)
            out.write_character("}")

    def dump_integer(self, x: int) -> None:
        """Write an integer in the signed or unsigned 64-bit range."""
        x = int(x)
        if not _INT_MIN <= x <= _UINT_MAX:
            raise ValueError(f"integer out of 64-bit range: {x}")
        self.output.write_characters(str(x))

    def dump_float(self, x: float) -> None:
        """Write a float in shortest round-trip form; NaN and infinities become ``null``."""
        if not math.isfinite(x):
            self.output.write_characters("null")
            return
        self.output.write_characters(to_chars(float(x)))


def dumps(
    value: Any,
    indent: int = -1,
    indent_char: str = " ",
    ensure_ascii: bool = False,
    error_handler: ErrorHandler | str = ErrorHandler.STRICT,
) -> str:
    """Return the JSON text for ``value``.

    A negative ``indent`` gives compact output; zero or more pretty-prints
    with that many ``indent_char`` per level.
    """
    serializer = Serializer(None, indent_char, error_handler)
    if indent >= 0:
        serializer.dump(value, True, ensure_ascii, indent)
    else:
        serializer.dump(value, False, ensure_ascii, 0)
    adapter = serializer.output
    return adapter.getvalue()  # type: ignore[attr-defined]