"""Basic message framing utilities.

Encoded messages carry no outer length, so a stream of them needs framing to
find message boundaries. A frame is::

    [Length (4 bytes, big-endian, optional)] [Payload] [CRC (2 or 4 bytes, optional)]

With a length prefix, any frame cut short raises TruncatedInput, including a
cut that happens to fall between two field units of the payload.
"""

from __future__ import annotations

import struct
from typing import Literal, Optional, Union

from ..codec.decoder import decode
from ..codec.encoder import encode
from ..codec.registry import SchemaRegistry
from ..config import CodecConfig
from ..exceptions import FramingError, TruncatedInput
from ..models.base import BaseMessage
from ..utils.crc import crc16_bytes, crc32_bytes, verify_crc16, verify_crc32

CRCType = Literal["crc16", "crc32"]

_LENGTH_SIZE = 4
_CRC_SIZES = {"crc16": 2, "crc32": 4}


def _crc_size(crc: Optional[str]) -> int:
    if crc is None:
        return 0
    try:
        return _CRC_SIZES[crc]
    except KeyError:
        raise ValueError(f"Invalid CRC type: {crc}. Must be 'crc16', 'crc32', or None") from None


def frame_message(
    payload: bytes,
    *,
    length_prefix: bool = True,
    crc: Optional[CRCType] = None,
) -> bytes:
    """Frame a payload with optional length prefix and CRC.

    Args:
        payload: Encoded message
        length_prefix: If True, prepend the 4-byte big-endian payload length
        crc: CRC type to append ('crc16' or 'crc32'), or None for no CRC

    Returns:
        Framed message

    Example:
        >>> framed = frame_message(b"Hello", crc="crc16")
        >>> len(framed)
        11
    """
    _crc_size(crc)
    result = bytearray()

    if length_prefix:
        result.extend(struct.pack(">I", len(payload)))

    result.extend(payload)

    # CRC covers the length prefix too
    if crc == "crc16":
        result.extend(crc16_bytes(bytes(result)))
    elif crc == "crc32":
        result.extend(crc32_bytes(bytes(result)))

    return bytes(result)


def unframe_message(
    framed: bytes,
    *,
    length_prefix: bool = True,
    crc: Optional[CRCType] = None,
) -> bytes:
    """Unframe a message and validate its length and CRC.

    Without a length prefix or CRC an empty payload frames to no bytes at all,
    which cannot be told apart from missing data and is rejected. Keep the
    length prefix or a CRC when empty messages must get through.

    Args:
        framed: Framed message
        length_prefix: If True, expect the 4-byte big-endian length prefix
        crc: CRC type to verify ('crc16' or 'crc32'), or None for no CRC

    Returns:
        Payload without length prefix or CRC

    Raises:
        TruncatedInput: If the frame is empty or shorter than its header, or the payload
            is shorter than the length prefix says
        FramingError: If the CRC does not match or the payload is longer than
            the length prefix says

    Example:
        >>> unframe_message(frame_message(b"Hello", crc="crc16"), crc="crc16")
        b'Hello'
    """
    crc_size = _crc_size(crc)
    header_size = _LENGTH_SIZE if length_prefix else 0

    if not framed:
        raise TruncatedInput("Cannot unframe empty data")

    if len(framed) < header_size + crc_size:
        raise TruncatedInput(
            f"Frame too short: need at least {header_size + crc_size} bytes, "
            f"got {len(framed)}"
        )

    payload_end = len(framed) - crc_size
    payload = framed[header_size:payload_end]

    if length_prefix:
        expected = struct.unpack(">I", framed[:_LENGTH_SIZE])[0]
        if len(payload) < expected:
            raise TruncatedInput(
                f"Frame truncated: prefix says {expected} bytes, got {len(payload)}"
            )
        if len(payload) > expected:
            raise FramingError(
                f"Length mismatch: prefix says {expected} bytes, got {len(payload)}"
            )

    if crc == "crc16" and not verify_crc16(framed[:payload_end], framed[payload_end:]):
        raise FramingError("CRC-16 verification failed")
    if crc == "crc32" and not verify_crc32(framed[:payload_end], framed[payload_end:]):
        raise FramingError("CRC-32 verification failed")

    return bytes(payload)


def encode_framed(
    message: BaseMessage,
    type_name: Optional[str] = None,
    *,
    crc: Optional[CRCType] = "crc32",
    registry: Optional[SchemaRegistry] = None,
    config: Optional[CodecConfig] = None,
) -> bytes:
    """Encode a message and frame it with a length prefix and CRC.

    Example:
        ```python
        framed = encode_framed(traffic)
        traffic = decode_framed(Traffic, framed)
        ```
    """
    payload = encode(message, type_name, registry=registry, config=config)
    return frame_message(payload, length_prefix=True, crc=crc)


def decode_framed(
    message_type: Union[str, type[BaseMessage]],
    framed: bytes,
    *,
    crc: Optional[CRCType] = "crc32",
    registry: Optional[SchemaRegistry] = None,
    config: Optional[CodecConfig] = None,
) -> BaseMessage:
    """Unframe and decode a message produced by encode_framed().

    Raises:
        TruncatedInput: If the frame was cut short anywhere
        FramingError: If the CRC or length prefix is inconsistent
        DecodeError: If the payload does not decode
    """
    payload = unframe_message(framed, length_prefix=True, crc=crc)
    return decode(message_type, payload, registry=registry, config=config)
