#!/usr/bin/env python3
"""Basic usage example for osiwire.

This example demonstrates:
1. Building an osi3 vehicle message
2. Encoding to the tagged-field wire format
3. Decoding back to a Pydantic model
4. Absent fields versus zero values
5. Reading a message from a newer sender
"""

from __future__ import annotations

from osiwire import decode, encode, encoded_size, field_sizes
from osiwire.messages import (
    GearLeverState,
    Pedalry,
    PowertrainMode,
    VehiclePowertrain,
)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("osiwire Basic Usage Example")
    print("=" * 60)
    print()

    # Create a message instance
    print("1. Creating a powertrain message...")
    msg = VehiclePowertrain(
        pedalry=Pedalry(pedal_position_acceleration=0.5, pedal_position_clutch=0.0),
        engine_rpm=2400.0,
        gear_lever_state=GearLeverState(gear=4),
        powertrain_mode=PowertrainMode.REAR_WHEEL_DRIVE,
    )
    print(f"   {msg!r}")
    print()

    # Analyze field sizes
    print("2. Analyzing field sizes...")
    for field_name, size in field_sizes(msg).items():
        if size:
            print(f"   {field_name}: {size} bytes")
    print(f"   Total: {encoded_size(msg)} bytes")
    print()

    # Encode the message
    print("3. Encoding...")
    encoded_data = encode(msg)
    print(f"   Encoded size: {len(encoded_data)} bytes")
    print(f"   Hex: {encoded_data.hex()}")
    print()

    # Decode the message
    print("4. Decoding...")
    decoded_msg = decode(VehiclePowertrain, encoded_data)
    pedalry = decoded_msg.pedalry
    assert pedalry is not None
    print(f"   Accelerator: {pedalry.pedal_position_acceleration}")
    print(f"   Brake:       {pedalry.pedal_position_brake}  (absent, not 0.0)")
    print(f"   Clutch:      {pedalry.pedal_position_clutch}  (present, released)")
    print()

    # Verify round-trip
    print("5. Verifying round-trip...")
    if decoded_msg == msg:
        print("   ✓ Round-trip successful! Messages match.")
    else:
        print("   ✗ Round-trip failed! Messages don't match.")
    print()

    # A newer sender adds tag 20 (varint) and an enum value we do not know
    print("6. Decoding a message from a newer sender...")
    new_field = b"\x14\x00\x01"
    newer = encoded_data.replace(b"\x09\x00\x04", b"\x09\x00\x07") + new_field
    decoded_newer = decode(VehiclePowertrain, newer)
    re_emitted = encode(decoded_newer).endswith(new_field)
    print(f"   Powertrain mode: {decoded_newer.powertrain_mode!r}")
    print(f"   Unknown fields kept: {decoded_newer.unknown_fields.hex()}")
    print(f"   Unknown fields re-emitted: {re_emitted}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
