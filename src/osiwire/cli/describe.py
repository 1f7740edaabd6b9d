"""Schema listing and description CLI commands."""

from __future__ import annotations

from ..codec.registry import SchemaRegistry
from ..codec.schema import FieldKind


def list_types(registry: SchemaRegistry) -> None:
    """Print every registered type name with its field count."""
    print(f"{len(registry)} message type{'s' if len(registry) != 1 else ''} registered.")
    print()
    for schema in registry:
        print(f"  {schema.type_name:<60} {len(schema.fields):>3} fields")


def describe_type(registry: SchemaRegistry, type_name: str) -> None:
    """Print the field catalog of one registered type.

    Args:
        registry: Registry to read from
        type_name: Fully qualified type name, e.g. ``osi3.VehicleClass``

    Raises:
        UnknownType: If the name is not registered
    """
    schema = registry.catalog(type_name)

    print(f"{'=' * 19} {schema.type_name} {'=' * 19}")
    print(f"Model: {schema.model_class.__module__}.{schema.model_class.__qualname__}")
    print()
    print(f"{'Tag':>4}  {'Field':<40} {'Type':<50} Wire kind")
    print("-" * 110)
    for field in schema.fields:
        print(
            f"{field.tag:>4}  {field.name:<40} {field.type_label:<50} {field.wire_kind.name}"
        )

    enums = {
        field.enum.name: field.enum
        for field in schema.fields
        if field.kind is FieldKind.ENUM and field.enum is not None
    }
    for name, descriptor in sorted(enums.items()):
        print()
        print(f"enum {name}:")
        for member, value in descriptor.values:
            print(f"  {value:>4}  {member}")
