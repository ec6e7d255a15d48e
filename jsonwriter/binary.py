"""Byte strings that carry an optional numeric subtype."""

from __future__ import annotations

from collections.abc import Iterable

_SUBTYPE_MAX = (1 << 64) - 1


def _check_subtype(subtype: int) -> int:
    if not 0 <= subtype <= _SUBTYPE_MAX:
        raise ValueError(f"subtype out of unsigned 64-bit range: {subtype}")
    return subtype


class ByteContainer(bytearray):
    """A mutable byte sequence with an optional unsigned 64-bit subtype.

    Two containers are equal when their bytes and subtypes both match.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, data: Iterable[int] | bytes = b"", subtype: int | None = None) -> None:
        super().__init__(data)
        if subtype is None:
            self._subtype = 0
            self._has_subtype = False
        else:
            self._subtype = _check_subtype(subtype)
            self._has_subtype = True

    def set_subtype(self, subtype: int) -> None:
        """Set the subtype."""
        self._subtype = _check_subtype(subtype)
        self._has_subtype = True

    def clear_subtype(self) -> None:
        """Remove the subtype."""
        self._subtype = 0
        self._has_subtype = False

    def subtype(self) -> int:
        """Return the subtype, or ``2**64 - 1`` when there is none."""
        return self._subtype if self._has_subtype else _SUBTYPE_MAX

    def has_subtype(self) -> bool:
        """Return whether a subtype is set."""
        return self._has_subtype

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ByteContainer):
            return (bytes(self), self._subtype, self._has_subtype) == (
                bytes(other),
                other._subtype,
                other._has_subtype,
            )
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return NotImplemented
        return not result

    def __repr__(self) -> str:
        subtype = self._subtype if self._has_subtype else None
        return f"ByteContainer({bytes(self)!r}, subtype={subtype!r})"