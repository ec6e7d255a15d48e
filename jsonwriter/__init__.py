"""JSON serialization with shortest round-trip float output, UTF-8 checking and a word-wise CRC-32."""

__version__ = "0.1.0"
__all__ = ["binary", "crc", "diyfp", "dtoa", "escape", "output", "serializer"]