"""osiwire: tagged-field binary codec for the osi3 vehicle schema

A Python library that encodes and decodes osi3 vehicle messages (traffic
participants, their powertrain, steering, wheels, automated driving functions)
to a self-describing tagged-field wire format.

Key Features:
- Pydantic-based message modeling with explicit wire tags
- Forward compatible decoding: unknown fields are skipped (and kept for
  re-encoding), unknown enum values fall back to UNKNOWN
- Absent fields stay absent: None is never confused with 0
- Optional length-prefix and CRC framing for byte streams

Quick Start:
    >>> from osiwire import encode, decode
    >>> from osiwire.messages import Pedalry
    >>>
    >>> msg = Pedalry(pedal_position_acceleration=0.5, pedal_position_clutch=0.0)
    >>> data = encode(msg)
    >>> decoded = decode(Pedalry, data)
    >>> decoded.pedal_position_brake is None
    True
"""

from __future__ import annotations

__version__ = "0.1.0"

from .codec import (
    EnumDescriptor,
    FieldDescriptor,
    FieldKind,
    MessageSchema,
    SchemaRegistry,
    WireKind,
    decode,
    default_registry,
    encode,
)
from .config import CodecConfig
from .exceptions import (
    DecodeError,
    EncodeError,
    FramingError,
    IncompatibleVersion,
    MalformedInput,
    OsiwireError,
    SchemaConflict,
    SchemaError,
    TruncatedInput,
    TypeMismatch,
    UnencodableField,
    UnknownType,
)
from .framing import decode_framed, encode_framed, frame_message, unframe_message
from .models import BaseMessage, EnumField, Nested, Repeated, Scalar
from .protobuf import to_proto_schema
from .utils import (
    crc16,
    crc16_bytes,
    crc32,
    crc32_bytes,
    encoded_size,
    field_sizes,
    verify_crc16,
    verify_crc32,
)

__all__ = [
    # Core API
    "BaseMessage",
    "encode",
    "decode",
    "CodecConfig",
    # Field helpers
    "Scalar",
    "EnumField",
    "Nested",
    "Repeated",
    # Schema
    "SchemaRegistry",
    "default_registry",
    "MessageSchema",
    "FieldDescriptor",
    "FieldKind",
    "EnumDescriptor",
    "WireKind",
    # Exceptions
    "OsiwireError",
    "SchemaError",
    "UnknownType",
    "SchemaConflict",
    "EncodeError",
    "UnencodableField",
    "DecodeError",
    "TruncatedInput",
    "TypeMismatch",
    "IncompatibleVersion",
    "MalformedInput",
    "FramingError",
    # Framing
    "frame_message",
    "unframe_message",
    "encode_framed",
    "decode_framed",
    # CRC
    "crc16",
    "crc16_bytes",
    "crc32",
    "crc32_bytes",
    "verify_crc16",
    "verify_crc32",
    # Sizing
    "encoded_size",
    "field_sizes",
    # Protobuf
    "to_proto_schema",
    # Version
    "__version__",
]
