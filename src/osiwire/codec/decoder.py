"""Tagged-field decoder for Pydantic messages.

This module provides the decode() function that parses the tagged-field wire
format back into a message instance.

Compatibility rules applied here, once, for every message type:

- Unknown tags are skipped by their wire kind. Their raw units are kept on the
  record (``unknown_fields``) unless ``CodecConfig.retain_unknown_fields`` is
  off, so a relay re-encodes what it did not understand.
- Enum integers the schema does not define decode to the enum's 0 value.
- An InterfaceVersion whose major number is newer than the registry's raises
  IncompatibleVersion.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Dict, Optional, TypeVar, Union, overload

from pydantic import ValidationError

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import IncompatibleVersion, MalformedInput, TypeMismatch
from ..models.base import BaseMessage
from .registry import SchemaRegistry, resolve
from .schema import SCALAR_TYPES, EnumDescriptor, FieldDescriptor, FieldKind, MessageSchema
from .wire import WireReader

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseMessage)


@overload
def decode(
    message_type: type[T],
    data: bytes,
    *,
    registry: Optional[SchemaRegistry] = ...,
    config: Optional[CodecConfig] = ...,
) -> T: ...


@overload
def decode(
    message_type: str,
    data: bytes,
    *,
    registry: Optional[SchemaRegistry] = ...,
    config: Optional[CodecConfig] = ...,
) -> BaseMessage: ...


def decode(
    message_type: Union[str, type[BaseMessage]],
    data: bytes,
    *,
    registry: Optional[SchemaRegistry] = None,
    config: Optional[CodecConfig] = None,
) -> BaseMessage:
    """Decode tagged-field data into a message.

    Args:
        message_type: Registered type name or message class to decode as
        data: Encoded bytes (one whole message, no outer framing)
        registry: Registry used for type lookup and nested dispatch; defaults to
            the built-in osi3 registry (for names) or one built from the class
        config: Codec options (unknown-field retention, version check, depth)

    Returns:
        Decoded message instance. Fields absent on the wire are None (or an
        empty list for repeated fields).

    Raises:
        UnknownType: If the type name is not registered
        TruncatedInput: If the data ends inside a field unit
        TypeMismatch: If a known tag arrives with the wrong wire kind
        IncompatibleVersion: If the interface major version is too new
        MalformedInput: If the data is structurally invalid

    Examples:
        ```python
        from osiwire import decode
        from osiwire.messages import Pedalry

        pedalry = decode(Pedalry, data)
        pedalry.pedal_position_brake is None    # absent, not 0.0

        traffic = decode("osi3.Traffic", data)
        ```
    """
    config = config or DEFAULT_CONFIG
    registry, schema = resolve(message_type, registry)
    return _decode_message(WireReader(data), schema, registry, config, depth=1)


def _decode_message(
    reader: WireReader,
    schema: MessageSchema,
    registry: SchemaRegistry,
    config: CodecConfig,
    depth: int,
) -> BaseMessage:
    if depth > config.max_depth:
        raise MalformedInput(
            f"{schema.type_name}: nesting deeper than max_depth={config.max_depth}"
        )

    values: Dict[str, Any] = {}
    unknown = bytearray()

    while not reader.at_end():
        start = reader.position()
        tag, kind = reader.read_header()
        field = schema.field_by_tag(tag)

        if field is None:
            reader.skip(kind)
            logger.debug(
                "%s: skipped unknown tag %d (%s, %d bytes)",
                schema.type_name,
                tag,
                kind.name,
                reader.position() - start,
            )
            if config.retain_unknown_fields:
                unknown += reader.slice(start, reader.position())
            continue

        if kind is not field.wire_kind:
            raise TypeMismatch(
                f"{schema.type_name}.{field.name} (tag {tag}): expected wire kind "
                f"{field.wire_kind.name}, got {kind.name}"
            )

        value = _decode_value(reader, schema, field, registry, config, depth)
        if field.repeated:
            values.setdefault(field.name, []).append(value)
        else:
            # Last occurrence wins for singular fields
            values[field.name] = value

    try:
        record = schema.model_class(**values)
    except ValidationError as err:
        raise MalformedInput(f"Failed to construct {schema.type_name}: {err}") from err

    if unknown:
        record._unknown_fields = bytes(unknown)

    if config.check_version and schema.type_name == registry.version_type:
        _check_version(record, registry)

    return record


def _decode_value(
    reader: WireReader,
    schema: MessageSchema,
    field: FieldDescriptor,
    registry: SchemaRegistry,
    config: CodecConfig,
    depth: int,
) -> Any:
    if field.kind is FieldKind.ENUM:
        assert field.enum is not None
        where = f"{schema.type_name}.{field.name}"
        return enum_value(field.enum, reader.read_varint(), where=where)

    if field.kind is FieldKind.MESSAGE:
        payload = reader.read_length_delimited()
        assert field.message_type is not None
        nested_schema = registry.resolve(field.message_type)
        return _decode_message(WireReader(payload), nested_schema, registry, config, depth + 1)

    assert field.scalar_type is not None
    scalar_type = field.scalar_type

    if scalar_type == "bool":
        return reader.read_varint() != 0

    if scalar_type == "string":
        raw = reader.read_length_delimited()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as err:
            raise MalformedInput(
                f"{schema.type_name}.{field.name}: invalid UTF-8 encoding: {err}"
            ) from err

    if scalar_type == "bytes":
        return reader.read_length_delimited()

    fmt = SCALAR_TYPES[scalar_type].fmt
    assert fmt is not None
    return reader.read_fixed(fmt)


def enum_value(descriptor: EnumDescriptor, raw: int, where: str = "") -> enum.IntEnum:
    """Map a wire integer to an enum member, or to the 0 sentinel if undefined.

    This is the single unknown-enum policy for every message type.
    """
    member = descriptor.member(raw)
    if member is None:
        logger.debug(
            "%s: unknown %s value %d, using %s",
            where,
            descriptor.name,
            raw,
            descriptor.sentinel.name,
        )
        return descriptor.sentinel
    return member


def _check_version(record: BaseMessage, registry: SchemaRegistry) -> None:
    received = (
        getattr(record, "version_major", None) or 0,
        getattr(record, "version_minor", None) or 0,
        getattr(record, "version_patch", None) or 0,
    )
    supported = registry.interface_version

    if received[0] > supported[0]:
        raise IncompatibleVersion(received, supported)

    if received[:2] > supported[:2]:
        logger.warning(
            "Message uses interface version %d.%d.%d, newer than compiled %d.%d.%d; "
            "unknown fields will be skipped",
            *received,
            *supported,
        )

