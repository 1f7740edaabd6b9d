#!/usr/bin/env python3
"""Message framing example for osiwire.

This example demonstrates:
1. Framing encoded messages with length prefix and CRC
2. Splitting a byte stream back into messages
3. Error detection with CRC checksums and length prefixes
"""

from __future__ import annotations

import struct

from osiwire import OsiwireError, decode_framed, encode_framed
from osiwire.messages import (
    Identifier,
    InterfaceVersion,
    Pedalry,
    Timestamp,
    Traffic,
    VehicleClass,
    VehiclePowertrain,
)


def make_traffic(step: int) -> Traffic:
    return Traffic(
        version=InterfaceVersion(version_major=3, version_minor=1, version_patch=0),
        timestamp=Timestamp(seconds=step, nanos=0),
        host_vehicle_id=Identifier(value=1),
        vehicle=[
            VehicleClass(
                vehicle_powertrain=VehiclePowertrain(
                    pedalry=Pedalry(pedal_position_acceleration=0.1 * step),
                    engine_rpm=1000.0 + 250.0 * step,
                )
            )
        ],
    )


def split_stream(stream: bytes, crc_size: int) -> list[bytes]:
    """Cut a stream of length-prefixed frames into single frames."""
    frames = []
    position = 0
    while position < len(stream):
        (length,) = struct.unpack(">I", stream[position : position + 4])
        end = position + 4 + length + crc_size
        frames.append(stream[position:end])
        position = end
    return frames


def main() -> None:
    """Run the framing example."""
    print("=" * 60)
    print("osiwire Message Framing Example")
    print("=" * 60)
    print()

    # Frame three simulation steps with CRC-32
    print("1. Framing three Traffic messages with CRC-32...")
    frames = [encode_framed(make_traffic(step), crc="crc32") for step in range(1, 4)]
    for step, frame in enumerate(frames, 1):
        print(f"   Step {step}: {len(frame)} bytes")
    print()

    # Concatenate into one byte stream, as over a socket
    print("2. Sending as one byte stream...")
    stream = b"".join(frames)
    print(f"   Stream: {len(stream)} bytes")
    print()

    # Receive: split and decode
    print("3. Receiving...")
    for frame in split_stream(stream, crc_size=4):
        traffic = decode_framed(Traffic, frame, crc="crc32")
        assert isinstance(traffic, Traffic) and traffic.timestamp is not None
        powertrain = traffic.vehicle[0].vehicle_powertrain
        assert powertrain is not None
        print(f"   t={traffic.timestamp.seconds}s  engine_rpm={powertrain.engine_rpm}")
    print()

    # Demonstrate error detection
    print("4. Demonstrating error detection...")
    corrupted = bytearray(frames[0])
    corrupted[10] ^= 0xFF
    for label, frame in [("Corrupted byte", bytes(corrupted)), ("Cut short", frames[0][:-6])]:
        try:
            decode_framed(Traffic, frame, crc="crc32")
            print(f"   ✗ {label}: not detected!")
        except OsiwireError as e:
            print(f"   ✓ {label}: {type(e).__name__}: {e}")
    print()

    print("=" * 60)
    print("Example complete!")
    print("=" * 60)


if __name__ == "__main__":
    main()
