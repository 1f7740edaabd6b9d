#!/usr/bin/env python3
"""Protobuf schema generation example for osiwire.

This example demonstrates:
1. Listing the registered osi3 types
2. Generating proto2 schema text for one of them
3. Writing the full vehicle schema to a .proto file
"""

from __future__ import annotations

import sys
from pathlib import Path

from osiwire import default_registry, to_proto_schema


def main() -> None:
    """Run the protobuf schema generation example."""
    print("=" * 60)
    print("osiwire Protobuf Schema Generation Example")
    print("=" * 60)
    print()

    registry = default_registry()
    version = ".".join(str(part) for part in registry.interface_version)
    print(f"1. {len(registry)} registered types, compiled interface version {version}")
    for name in registry.names():
        print(f"   {name}")
    print()

    print("2. Schema for osi3.VehicleClass.VehiclePowertrain:")
    print()
    print(to_proto_schema("osi3.VehicleClass.VehiclePowertrain"))

    output = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("osi_traffic.proto")
    output.write_text(to_proto_schema("osi3.Traffic"))
    print(f"3. Full schema written to {output}")
    print()

    print("Note: field numbers match the osiwire wire format, but the binary")
    print("encoding itself is not protobuf's.")
    print()
    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
