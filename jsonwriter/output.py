"""Sinks that serialized text is written to."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Protocol


class _Writable(Protocol):
    def write(self, s: str) -> Any: ...


def _check_character(c: str) -> None:
    if len(c) != 1:
        raise ValueError(f"expected a single character, got {c!r}")


class OutputAdapter(ABC):
    """Interface for character sinks."""

    @abstractmethod
    def write_character(self, c: str) -> None:
        """Write one character."""

    @abstractmethod
    def write_characters(self, s: str) -> None:
        """Write a string of characters."""


class ListOutputAdapter(OutputAdapter):
    """Appends characters to a list, one element per character."""

    def __init__(self, target: list[str]) -> None:
        self.target = target

    def write_character(self, c: str) -> None:
        _check_character(c)
        self.target.append(c)

    def write_characters(self, s: str) -> None:
        self.target.extend(s)


class StreamOutputAdapter(OutputAdapter):
    """Writes characters to a text stream."""

    def __init__(self, stream: _Writable) -> None:
        self.stream = stream

    def write_character(self, c: str) -> None:
        _check_character(c)
        self.stream.write(c)

    def write_characters(self, s: str) -> None:
        self.stream.write(s)


class StringOutputAdapter(OutputAdapter):
    """Collects characters into a string, starting from an optional prefix."""

    def __init__(self, initial: str = "") -> None:
        self._parts: list[str] = [initial] if initial else []

    def write_character(self, c: str) -> None:
        _check_character(c)
        self._parts.append(c)

    def write_characters(self, s: str) -> None:
        self._parts.append(s)

    def getvalue(self) -> str:
        """Return everything written so far."""
        value = "".join(self._parts)
        self._parts = [value] if value else []
        return value


def output_adapter(target: Any = None) -> OutputAdapter:
    """Return an adapter suited to ``target``.

    ``None`` or a string gives a :class:`StringOutputAdapter`, a list gives a
    :class:`ListOutputAdapter`, an object with ``write`` gives a
    :class:`StreamOutputAdapter`; an adapter is returned as it is.
    """
    if isinstance(target, OutputAdapter):
        return target
    if target is None:
        return StringOutputAdapter()
    if isinstance(target, str):
        return StringOutputAdapter(target)
    if isinstance(target, list):
        return ListOutputAdapter(target)
    if callable(getattr(target, "write", None)):
        return StreamOutputAdapter(target)
    raise TypeError(f"cannot write output to {type(target).__name__}")