"""Protobuf schema generation.

This module renders registered message types as proto2 ``.proto`` text, for
documentation and for sharing the schema with non-Python tools. Field numbers
and names match the osiwire catalog, but osiwire's wire format (explicit wire
kind byte, fixed-width integers) is NOT protobuf's: the text describes the
schema, not the bytes.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Type

from ..codec.registry import SchemaRegistry, default_registry
from ..codec.schema import EnumDescriptor, FieldDescriptor, FieldKind, MessageSchema
from ..exceptions import SchemaError

_INDENT = "  "


class _Node:
    """One message scope in the nesting tree built from dotted type names."""

    def __init__(self, name: str, path: str) -> None:
        self.name = name
        self.path = path
        self.schema: Optional[MessageSchema] = None
        self.children: Dict[str, _Node] = {}
        self.enums: List[EnumDescriptor] = []

    def child(self, name: str) -> _Node:
        if name not in self.children:
            path = f"{self.path}.{name}" if self.path else name
            self.children[name] = _Node(name, path)
        return self.children[name]


def to_proto_schema(
    type_name: str,
    registry: Optional[SchemaRegistry] = None,
    package: str = "osi3",
) -> str:
    """Generate proto2 schema text for a registered type and everything it references.

    Nesting follows the dotted names: ``osi3.VehicleClass.Wheel`` becomes
    message ``Wheel`` inside message ``VehicleClass``. Parents that are not
    registered types themselves (``osi3.MovingObject.VehicleClassification``)
    become empty wrapper messages. Each enum is declared once, inside the first
    message (by name) that uses it, with its values prefixed by the enum name
    in UPPER_SNAKE_CASE so values of sibling enums cannot clash.

    Args:
        type_name: Registered type name to export
        registry: Registry to read from; defaults to the built-in osi3 registry
        package: Protobuf package; type names must start with ``package + "."``

    Returns:
        .proto schema as a string

    Raises:
        UnknownType: If type_name (or a referenced type) is not registered
        SchemaError: If a referenced type lies outside ``package``

    Example:
        >>> print(to_proto_schema("osi3.Pedalry"))
        syntax = "proto2";
        <BLANKLINE>
        package osi3;
        ...
    """
    registry = registry or default_registry()
    schemas = _closure(registry, type_name)

    root = _Node("", "")
    for name in sorted(schemas):
        node = root
        for part in _relative_name(name, package).split("."):
            node = node.child(part)
        node.schema = schemas[name]

    enum_owner: Dict[Type, str] = {}
    for name in sorted(schemas):
        for field in schemas[name].fields:
            if field.enum is None or field.enum.enum_type in enum_owner:
                continue
            owner_path = _relative_name(name, package)
            enum_owner[field.enum.enum_type] = owner_path
            _find(root, owner_path).enums.append(field.enum)

    lines = ['syntax = "proto2";', ""]
    if package:
        lines.extend([f"package {package};", ""])

    for name in sorted(root.children):
        lines.extend(_render_message(root.children[name], enum_owner, package, depth=0))
        lines.append("")

    return "\n".join(lines).rstrip("\n") + "\n"


def _closure(registry: SchemaRegistry, type_name: str) -> Dict[str, MessageSchema]:
    found: Dict[str, MessageSchema] = {}
    pending = [type_name]
    while pending:
        name = pending.pop()
        if name in found:
            continue
        schema = registry.catalog(name)
        found[name] = schema
        pending.extend(
            field.message_name for field in schema.fields if field.message_name is not None
        )
    return found


def _relative_name(type_name: str, package: str) -> str:
    if not package:
        return type_name
    prefix = package + "."
    if not type_name.startswith(prefix):
        raise SchemaError(f"Type {type_name} is not in package {package}")
    return type_name[len(prefix) :]


def _find(root: _Node, path: str) -> _Node:
    node = root
    for part in path.split("."):
        node = node.children[part]
    return node


def _render_message(
    node: _Node, enum_owner: Dict[Type, str], package: str, depth: int
) -> List[str]:
    pad = _INDENT * depth
    inner = _INDENT * (depth + 1)
    lines = [f"{pad}message {node.name} {{"]
    body: List[List[str]] = []

    for descriptor in node.enums:
        body.append(_render_enum(descriptor, depth + 1))

    for name in sorted(node.children):
        body.append(_render_message(node.children[name], enum_owner, package, depth + 1))

    if node.schema is not None and node.schema.fields:
        body.append(
            [
                f"{inner}{_field_line(field, enum_owner, package)}"
                for field in node.schema.fields
            ]
        )

    for i, block in enumerate(body):
        if i:
            lines.append("")
        lines.extend(block)

    lines.append(f"{pad}}}")
    return lines


def _render_enum(descriptor: EnumDescriptor, depth: int) -> List[str]:
    pad = _INDENT * depth
    prefix = _upper_snake(descriptor.name)
    lines = [f"{pad}enum {descriptor.name} {{"]
    for member, value in descriptor.values:
        lines.append(f"{pad}{_INDENT}{prefix}_{member} = {value};")
    lines.append(f"{pad}}}")
    return lines


def _field_line(field: FieldDescriptor, enum_owner: Dict[Type, str], package: str) -> str:
    label = "repeated" if field.repeated else "optional"
    if field.kind is FieldKind.SCALAR:
        proto_type = str(field.scalar_type)
    elif field.kind is FieldKind.ENUM:
        assert field.enum is not None
        proto_type = f"{enum_owner[field.enum.enum_type]}.{field.enum.name}"
    else:
        proto_type = _relative_name(str(field.message_name), package)
    return f"{label} {proto_type} {field.name} = {field.tag};"


def _upper_snake(name: str) -> str:
    """``PowertrainMode`` -> ``POWERTRAIN_MODE``."""
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).upper()
