"""Word-wise CRC-32 with polynomial 0x04C11DB7, most significant bit first."""

from __future__ import annotations

import struct
from collections.abc import Iterable

_POLYNOMIAL = 0x04C11DB7
_INITIAL = 0xFFFFFFFF
_MASK32 = 0xFFFFFFFF
_TOP_BIT = 0x80000000


def crc32_core(words: Iterable[int]) -> int:
    """Return the CRC of a sequence of unsigned 32-bit words.

    Each word is fed most significant bit first into a register that starts
    at ``0xFFFFFFFF``; no final inversion is applied.
    """
    crc = _INITIAL
    for word in words:
        if not 0 <= word <= _MASK32:
            raise ValueError(f"word out of unsigned 32-bit range: {word}")
        for bit in range(31, -1, -1):
            feedback = bool(crc & _TOP_BIT) ^ bool((word >> bit) & 1)
            crc = (crc << 1) & _MASK32
            if feedback:
                crc ^= _POLYNOMIAL
    return crc


def crc32_bytes(data: bytes) -> int:
    """Return the CRC of ``data`` read as little-endian 32-bit words.

    The length of ``data`` must be a multiple of four.
    """
    if len(data) % 4:
        raise ValueError(f"data length {len(data)} is not a multiple of 4")
    return crc32_core(word for (word,) in struct.iter_unpack("<I", data))