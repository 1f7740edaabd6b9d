"""Message size calculation utilities.

Field units are variable length (varint tags, length-delimited payloads), so
sizes depend on the values a message holds, not only on its schema.
"""

from __future__ import annotations

from typing import Dict, Optional

from ..codec.encoder import _encode_field, encode
from ..codec.registry import SchemaRegistry, resolve
from ..codec.wire import WireWriter
from ..models.base import BaseMessage


def encoded_size(message: BaseMessage, registry: Optional[SchemaRegistry] = None) -> int:
    """Calculate the encoded size of a message in bytes.

    Args:
        message: Message instance to size
        registry: Registry used for nested dispatch (see encode())

    Returns:
        Size in bytes, without any framing

    Raises:
        UnencodableField: If a field value does not match its descriptor

    Example:
        >>> encoded_size(Pedalry(pedal_position_acceleration=0.5))
        10
    """
    return len(encode(message, registry=registry))


def field_sizes(message: BaseMessage, registry: Optional[SchemaRegistry] = None) -> Dict[str, int]:
    """Get the number of bytes each field of a message occupies on the wire.

    Absent fields and empty repeated fields take 0 bytes. Retained unknown
    fields are not included.

    Example:
        >>> field_sizes(Pedalry(pedal_position_acceleration=0.5))
        {'pedal_position_acceleration': 10, 'pedal_position_brake': 0, 'pedal_position_clutch': 0}
    """
    registry, schema = resolve(type(message), registry)

    sizes: Dict[str, int] = {}
    for field in schema.fields:
        writer = WireWriter()
        _encode_field(writer, schema, field, getattr(message, field.name, None), registry)
        sizes[field.name] = len(writer)
    return sizes
