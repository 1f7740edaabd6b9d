"""Wire-level primitives for the tagged-field format.

Every field unit on the wire is laid out as::

    varint tag | 1-byte wire kind | payload

Varints are unsigned LEB128 (7 data bits per byte, low group first, high bit
set on every byte but the last). Fixed-width values are little-endian.
Length-delimited payloads carry a varint byte count followed by the bytes.
"""

from __future__ import annotations

import enum
import struct

from ..exceptions import MalformedInput, TruncatedInput

# A 64-bit value needs at most ten 7-bit groups.
MAX_VARINT_BYTES = 10


class WireKind(enum.IntEnum):
    """Encoding discriminator written after every tag."""

    VARINT = 0
    FIXED32 = 1
    FIXED64 = 2
    LENGTH_DELIMITED = 3


_FIXED_SIZES = {WireKind.FIXED32: 4, WireKind.FIXED64: 8}


class WireWriter:
    """Appends wire primitives to a growing byte buffer.

    Example:
        >>> writer = WireWriter()
        >>> writer.write_header(1, WireKind.FIXED64)
        >>> writer.write_fixed(0.5, "<d")
        >>> data = writer.to_bytes()
    """

    def __init__(self) -> None:
        self._buffer = bytearray()

    def write_varint(self, value: int) -> None:
        """Write an unsigned LEB128 varint.

        Raises:
            ValueError: If value is negative or wider than 64 bits
        """
        if value < 0:
            raise ValueError(f"varint requires non-negative value, got {value}")
        if value >> 64:
            raise ValueError(f"varint value {value} exceeds 64 bits")

        while True:
            group = value & 0x7F
            value >>= 7
            if value:
                self._buffer.append(group | 0x80)
            else:
                self._buffer.append(group)
                return

    def write_header(self, tag: int, kind: WireKind) -> None:
        """Write the tag and wire kind that open a field unit."""
        if tag < 1:
            raise ValueError(f"tag must be >= 1, got {tag}")
        self.write_varint(tag)
        self._buffer.append(int(kind))

    def write_fixed(self, value: int | float, fmt: str) -> None:
        """Write a fixed-width value packed with the given struct format.

        Raises:
            struct.error: If value does not fit the format
        """
        self._buffer.extend(struct.pack(fmt, value))

    def write_length_delimited(self, payload: bytes) -> None:
        """Write a varint length followed by the payload bytes."""
        self.write_varint(len(payload))
        self._buffer.extend(payload)

    def write_raw(self, data: bytes) -> None:
        """Append bytes that are already wire-encoded."""
        self._buffer.extend(data)

    def __len__(self) -> int:
        return len(self._buffer)

    def to_bytes(self) -> bytes:
        return bytes(self._buffer)


class WireReader:
    """Reads wire primitives from a byte buffer.

    All reads that run past the end of the buffer raise TruncatedInput;
    the reader never returns partial values.

    Example:
        >>> reader = WireReader(data)
        >>> while not reader.at_end():
        ...     tag, kind = reader.read_header()
        ...     reader.skip(kind)
    """

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._position = 0

    def at_end(self) -> bool:
        return self._position >= len(self._data)

    def position(self) -> int:
        return self._position

    def remaining(self) -> int:
        return len(self._data) - self._position

    def slice(self, start: int, end: int) -> bytes:
        """Return raw bytes between two positions already read."""
        return self._data[start:end]

    def read_varint(self) -> int:
        """Read an unsigned LEB128 varint.

        Raises:
            TruncatedInput: If the buffer ends before the final byte
            MalformedInput: If the varint is longer than 10 bytes
        """
        result = 0
        shift = 0
        for _ in range(MAX_VARINT_BYTES):
            if self._position >= len(self._data):
                raise TruncatedInput(
                    f"Input ended inside a varint at byte {self._position}"
                )
            byte = self._data[self._position]
            self._position += 1
            result |= (byte & 0x7F) << shift
            if not byte & 0x80:
                return result
            shift += 7
        raise MalformedInput(f"Varint longer than {MAX_VARINT_BYTES} bytes")

    def read_wire_kind(self) -> WireKind:
        """Read the one-byte wire kind marker.

        Raises:
            TruncatedInput: If no byte is left
            MalformedInput: If the byte is not a known wire kind
        """
        if self._position >= len(self._data):
            raise TruncatedInput(f"Input ended before wire kind at byte {self._position}")
        raw = self._data[self._position]
        self._position += 1
        try:
            return WireKind(raw)
        except ValueError as err:
            raise MalformedInput(f"Invalid wire kind {raw} at byte {self._position - 1}") from err

    def read_header(self) -> tuple[int, WireKind]:
        """Read the tag and wire kind that open a field unit.

        Raises:
            MalformedInput: If the tag is 0
        """
        start = self._position
        tag = self.read_varint()
        if tag == 0:
            raise MalformedInput(f"Invalid tag 0 at byte {start}")
        return tag, self.read_wire_kind()

    def read_bytes(self, count: int) -> bytes:
        """Read exactly ``count`` raw bytes.

        Raises:
            TruncatedInput: If fewer than ``count`` bytes remain
        """
        if count > self.remaining():
            raise TruncatedInput(
                f"Need {count} bytes at byte {self._position}, only {self.remaining()} left"
            )
        start = self._position
        self._position += count
        return self._data[start : self._position]

    def read_fixed(self, fmt: str) -> int | float:
        """Read a fixed-width value with the given struct format."""
        raw = self.read_bytes(struct.calcsize(fmt))
        return struct.unpack(fmt, raw)[0]

    def read_length_delimited(self) -> bytes:
        """Read a varint length and that many payload bytes."""
        length = self.read_varint()
        return self.read_bytes(length)

    def skip(self, kind: WireKind) -> None:
        """Skip one payload of the given wire kind."""
        if kind is WireKind.VARINT:
            self.read_varint()
        elif kind is WireKind.LENGTH_DELIMITED:
            self.read_length_delimited()
        else:
            self.read_bytes(_FIXED_SIZES[kind])
