"""CRC checksums for frame integrity.

CRC-16 uses the CCITT polynomial (0x1021, initial value 0xFFFF, no
reflection). CRC-32 is the IEEE 802.3 checksum from zlib. Both are written
big-endian when appended to a frame.
"""

from __future__ import annotations

import struct
import zlib
from typing import List, Union


def _build_crc16_table(poly: int) -> List[int]:
    table = []
    for byte in range(256):
        crc = byte << 8
        for _ in range(8):
            crc = ((crc << 1) ^ poly) if crc & 0x8000 else (crc << 1)
        table.append(crc & 0xFFFF)
    return table


_CRC16_POLY = 0x1021
_CRC16_TABLE = _build_crc16_table(_CRC16_POLY)


def crc16(data: bytes, init: int = 0xFFFF) -> int:
    """Calculate the CRC-16/CCITT checksum of ``data``.

    Example:
        >>> hex(crc16(b"123456789"))
        '0x29b1'
    """
    crc = init
    for byte in data:
        crc = ((crc << 8) & 0xFFFF) ^ _CRC16_TABLE[((crc >> 8) ^ byte) & 0xFF]
    return crc


def crc16_bytes(data: bytes, init: int = 0xFFFF) -> bytes:
    """CRC-16 as 2 big-endian bytes."""
    return struct.pack(">H", crc16(data, init))


def crc32(data: bytes) -> int:
    """Calculate the CRC-32 (IEEE 802.3) checksum of ``data``.

    Example:
        >>> hex(crc32(b"123456789"))
        '0xcbf43926'
    """
    return zlib.crc32(data) & 0xFFFFFFFF


def crc32_bytes(data: bytes) -> bytes:
    """CRC-32 as 4 big-endian bytes."""
    return struct.pack(">I", crc32(data))


def verify_crc16(data: bytes, expected_crc: Union[int, bytes], init: int = 0xFFFF) -> bool:
    """Check ``data`` against a CRC-16 given as an int or 2 bytes.

    Raises:
        ValueError: If expected_crc is bytes of the wrong length
    """
    if isinstance(expected_crc, bytes):
        if len(expected_crc) != 2:
            raise ValueError(f"CRC-16 must be 2 bytes, got {len(expected_crc)}")
        expected_crc = struct.unpack(">H", expected_crc)[0]
    return crc16(data, init) == expected_crc


def verify_crc32(data: bytes, expected_crc: Union[int, bytes]) -> bool:
    """Check ``data`` against a CRC-32 given as an int or 4 bytes.

    Raises:
        ValueError: If expected_crc is bytes of the wrong length
    """
    if isinstance(expected_crc, bytes):
        if len(expected_crc) != 4:
            raise ValueError(f"CRC-32 must be 4 bytes, got {len(expected_crc)}")
        expected_crc = struct.unpack(">I", expected_crc)[0]
    return crc32(data) == expected_crc
