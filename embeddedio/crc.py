"""CRC-32 checksum (IEEE 802.3, reflected polynomial 0xEDB88320)."""

from __future__ import annotations

_POLYNOMIAL = 0xEDB88320


def _build_table() -> tuple[int, ...]:
    table = []
    for value in range(256):
        for _ in range(8):
            value = _POLYNOMIAL ^ (value >> 1) if value & 1 else value >> 1
        table.append(value)
    return tuple(table)


_TABLE = _build_table()


def crc32(data: bytes | bytearray | memoryview) -> int:
    """Return the CRC-32 of a bytes-like object as an unsigned 32-bit integer."""
    crc = 0xFFFFFFFF
    for byte in memoryview(data).cast("B"):
        crc = _TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ 0xFFFFFFFF