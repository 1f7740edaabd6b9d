"""Tagged-field encoder for Pydantic messages.

This module provides the encode() function that converts a message instance to
the tagged-field wire format. Fields are emitted in ascending tag order, absent
fields are skipped, and every element of a repeated field becomes its own
field unit.
"""

from __future__ import annotations

import enum
import struct
from typing import Any, Optional

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import EncodeError, UnencodableField
from ..models.base import BaseMessage
from .registry import SchemaRegistry, resolve
from .schema import INTEGER_RANGES, SCALAR_TYPES, FieldDescriptor, FieldKind, MessageSchema
from .wire import WireWriter


def encode(
    message: BaseMessage,
    type_name: Optional[str] = None,
    *,
    registry: Optional[SchemaRegistry] = None,
    config: Optional[CodecConfig] = None,
) -> bytes:
    """Encode a message to the tagged-field wire format.

    Args:
        message: Message instance to encode
        type_name: Registered type name to encode as; defaults to the
            message's own type name
        registry: Registry used for type lookup and nested dispatch; defaults to
            the built-in osi3 registry (for names) or one built from the
            message's class
        config: Codec options (max_message_bytes)

    Returns:
        Encoded bytes; the top-level message has no outer length prefix

    Raises:
        UnknownType: If type_name is not registered
        UnencodableField: If a field value does not match its descriptor
        EncodeError: If the result exceeds config.max_message_bytes

    Examples:
        ```python
        from osiwire import encode
        from osiwire.messages import Pedalry

        pedalry = Pedalry(pedal_position_acceleration=0.5, pedal_position_clutch=0.0)
        data = encode(pedalry)            # two field units, tags 1 and 3
        data = encode(pedalry, "osi3.Pedalry")
        ```
    """
    config = config or DEFAULT_CONFIG

    if not isinstance(message, BaseMessage):
        raise UnencodableField(
            str(type_name), "<record>", f"expected a BaseMessage, got {type(message).__name__}"
        )

    if type_name is None:
        registry, schema = resolve(type(message), registry)
    else:
        registry, schema = resolve(type_name, registry)
        if message.type_name() != schema.type_name:
            raise UnencodableField(
                schema.type_name,
                "<record>",
                f"record is a {message.type_name()}, not a {schema.type_name}",
            )

    writer = WireWriter()
    _encode_message(writer, message, schema, registry)
    encoded = writer.to_bytes()

    if config.max_message_bytes is not None and len(encoded) > config.max_message_bytes:
        raise EncodeError(
            f"Encoded message size ({len(encoded)} bytes) exceeds "
            f"max_message_bytes={config.max_message_bytes}"
        )

    return encoded


def _encode_message(
    writer: WireWriter, message: BaseMessage, schema: MessageSchema, registry: SchemaRegistry
) -> None:
    for field in schema.fields:
        _encode_field(writer, schema, field, getattr(message, field.name, None), registry)

    # Units an earlier decode did not recognise go back out unchanged
    writer.write_raw(message.unknown_fields)


def _encode_field(
    writer: WireWriter,
    schema: MessageSchema,
    field: FieldDescriptor,
    value: Any,
    registry: SchemaRegistry,
) -> None:
    """Encode every field unit of one field (none if absent).

    Raises:
        UnencodableField: If the value does not match the descriptor
    """
    if value is None:
        return

    if not field.repeated:
        _encode_value(writer, schema, field, value, registry)
        return

    if not isinstance(value, (list, tuple)):
        raise UnencodableField(
            schema.type_name, field.name, f"expected a list, got {type(value).__name__}"
        )
    for item in value:
        if item is None:
            raise UnencodableField(schema.type_name, field.name, "repeated field holds None")
        _encode_value(writer, schema, field, item, registry)


def _encode_value(
    writer: WireWriter,
    schema: MessageSchema,
    field: FieldDescriptor,
    value: Any,
    registry: SchemaRegistry,
) -> None:
    """Encode one field unit: header, then payload."""
    if field.kind is FieldKind.SCALAR:
        _encode_scalar(writer, schema, field, value)
        return

    if field.kind is FieldKind.ENUM:
        assert field.enum is not None
        if isinstance(value, bool) or not isinstance(value, int):
            raise UnencodableField(
                schema.type_name,
                field.name,
                f"expected {field.enum.name}, got {type(value).__name__}",
            )
        if isinstance(value, enum.Enum) and not isinstance(value, field.enum.enum_type):
            raise UnencodableField(
                schema.type_name,
                field.name,
                f"expected {field.enum.name}, got {type(value).__name__}",
            )
        if field.enum.member(int(value)) is None:
            raise UnencodableField(
                schema.type_name, field.name, f"{value} is not a {field.enum.name} value"
            )
        writer.write_header(field.tag, field.wire_kind)
        writer.write_varint(int(value))
        return

    # Nested message: length-prefixed, recursively encoded
    expected = field.message_name
    if not isinstance(value, BaseMessage) or value.type_name() != expected:
        got = value.type_name() if isinstance(value, BaseMessage) else type(value).__name__
        raise UnencodableField(schema.type_name, field.name, f"expected {expected}, got {got}")

    nested_schema = registry.resolve(type(value))
    nested = WireWriter()
    _encode_message(nested, value, nested_schema, registry)
    writer.write_header(field.tag, field.wire_kind)
    writer.write_length_delimited(nested.to_bytes())


def _encode_scalar(
    writer: WireWriter, schema: MessageSchema, field: FieldDescriptor, value: Any
) -> None:
    assert field.scalar_type is not None
    scalar_type = field.scalar_type
    spec = SCALAR_TYPES[scalar_type]

    def mismatch(reason: str) -> UnencodableField:
        return UnencodableField(schema.type_name, field.name, reason)

    if scalar_type == "bool":
        if not isinstance(value, bool):
            raise mismatch(f"expected bool, got {type(value).__name__}")
        writer.write_header(field.tag, spec.wire_kind)
        writer.write_varint(1 if value else 0)
        return

    if scalar_type == "string":
        if not isinstance(value, str):
            raise mismatch(f"expected str, got {type(value).__name__}")
        try:
            payload = value.encode("utf-8")
        except UnicodeEncodeError as err:
            raise mismatch(f"not encodable as UTF-8: {err}") from err
        writer.write_header(field.tag, spec.wire_kind)
        writer.write_length_delimited(payload)
        return

    if scalar_type == "bytes":
        if not isinstance(value, (bytes, bytearray)):
            raise mismatch(f"expected bytes, got {type(value).__name__}")
        writer.write_header(field.tag, spec.wire_kind)
        writer.write_length_delimited(bytes(value))
        return

    assert spec.fmt is not None
    if spec.python_type is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise mismatch(f"expected int, got {type(value).__name__}")
        low, high = INTEGER_RANGES[scalar_type]
        if not low <= value <= high:
            raise mismatch(f"value {value} out of {scalar_type} range [{low}, {high}]")
        writer.write_header(field.tag, spec.wire_kind)
        writer.write_fixed(value, spec.fmt)
        return

    # float / double
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise mismatch(f"expected float, got {type(value).__name__}")
    try:
        packed = struct.pack(spec.fmt, value)
    except (OverflowError, struct.error) as err:
        raise mismatch(f"value {value} does not fit a {scalar_type}: {err}") from err
    writer.write_header(field.tag, spec.wire_kind)
    writer.write_raw(packed)
