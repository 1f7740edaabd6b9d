"""Unit tests for forward compatibility and malformed input handling."""

from __future__ import annotations

import logging
import struct
import threading

import pytest

from osiwire import CodecConfig, decode, default_registry, encode
from osiwire.codec.decoder import enum_value
from osiwire.codec.schema import EnumDescriptor
from osiwire.exceptions import IncompatibleVersion, MalformedInput, TruncatedInput, TypeMismatch
from osiwire.messages import (
    InterfaceVersion,
    Intentions,
    LaneChangeRequest,
    Notification,
    Pedalry,
    PowertrainMode,
    Traffic,
    VehiclePowertrain,
)

# Field units with tags Pedalry does not define, one per wire kind
UNKNOWN_VARINT = b"\x0f\x00\x07"
UNKNOWN_FIXED32 = b"\x10\x01" + struct.pack("<I", 0xDEADBEEF)
UNKNOWN_FIXED64 = b"\x11\x02" + struct.pack("<d", 2.5)
UNKNOWN_BYTES = b"\xc8\x01\x03\x04abcd"


def double_unit(tag: int, value: float) -> bytes:
    return bytes([tag, 2]) + struct.pack("<d", value)


class TestUnknownFields:
    """Test skipping and retaining unknown fields."""

    @pytest.mark.parametrize(
        "unit", [UNKNOWN_VARINT, UNKNOWN_FIXED32, UNKNOWN_FIXED64, UNKNOWN_BYTES]
    )
    def test_unknown_field_skipped(self, pedalry_bytes: bytes, unit: bytes) -> None:
        decoded = decode(Pedalry, unit + pedalry_bytes)

        assert decoded.pedal_position_acceleration == 0.5
        assert decoded.pedal_position_brake is None
        assert decoded.pedal_position_clutch == 0.0
        assert decoded.unknown_fields == unit

    def test_unknown_fields_re_emitted(self, pedalry_bytes: bytes) -> None:
        data = pedalry_bytes + UNKNOWN_VARINT + UNKNOWN_BYTES
        decoded = decode(Pedalry, data)

        assert encode(decoded) == data

    def test_unknown_fields_move_after_known(self, pedalry_bytes: bytes) -> None:
        decoded = decode(Pedalry, UNKNOWN_FIXED32 + pedalry_bytes)
        assert encode(decoded) == pedalry_bytes + UNKNOWN_FIXED32

    def test_unknown_fields_dropped_when_disabled(self, pedalry_bytes: bytes) -> None:
        config = CodecConfig(retain_unknown_fields=False)
        decoded = decode(Pedalry, pedalry_bytes + UNKNOWN_VARINT, config=config)

        assert decoded.unknown_fields == b""
        assert encode(decoded) == pedalry_bytes

    def test_unknown_fields_in_nested_message(self, pedalry_bytes: bytes) -> None:
        inner = pedalry_bytes + UNKNOWN_VARINT
        data = b"\x01\x03" + bytes([len(inner)]) + inner
        decoded = decode(VehiclePowertrain, data)

        assert decoded.unknown_fields == b""
        assert decoded.pedalry.unknown_fields == UNKNOWN_VARINT
        assert encode(decoded) == data

    def test_clear_unknown_fields(self, pedalry_bytes: bytes) -> None:
        decoded = decode(Pedalry, pedalry_bytes + UNKNOWN_VARINT)
        decoded.clear_unknown_fields()

        assert encode(decoded) == pedalry_bytes

    def test_skipped_field_logged(
        self, pedalry_bytes: bytes, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="osiwire.codec.decoder"):
            decode(Pedalry, pedalry_bytes + UNKNOWN_VARINT)

        assert "skipped unknown tag 15" in caplog.text


class TestUnknownEnumValues:
    """Test the unknown enum sentinel."""

    def test_unknown_enum_decodes_to_unknown(self) -> None:
        decoded = decode(VehiclePowertrain, b"\x09\x00\x2a")
        assert decoded.powertrain_mode is PowertrainMode.UNKNOWN

    def test_lane_change_sentinel_is_ego_lane(self) -> None:
        decoded = decode(Intentions, b"\x08\x00\x09")
        assert decoded.lane_change_request is LaneChangeRequest.EGO_LANE

    def test_known_enum_unchanged(self) -> None:
        decoded = decode(VehiclePowertrain, b"\x09\x00\x04")
        assert decoded.powertrain_mode is PowertrainMode.REAR_WHEEL_DRIVE

    def test_enum_value_helper(self) -> None:
        descriptor = EnumDescriptor.from_enum(PowertrainMode)

        assert enum_value(descriptor, 2) is PowertrainMode.ALL_WHEEL_DRIVE
        assert enum_value(descriptor, 2**40) is PowertrainMode.UNKNOWN


class TestTruncation:
    """Test input cut short."""

    def test_every_cut_inside_a_unit_raises(self, pedalry_bytes: bytes) -> None:
        for cut in range(1, len(pedalry_bytes)):
            if cut == 10:
                continue
            with pytest.raises(TruncatedInput):
                decode(Pedalry, pedalry_bytes[:cut])

    def test_cut_on_unit_boundary_decodes_prefix(self, pedalry_bytes: bytes) -> None:
        decoded = decode(Pedalry, pedalry_bytes[:10])

        assert decoded.pedal_position_acceleration == 0.5
        assert decoded.pedal_position_clutch is None

    def test_truncated_nested_payload(self) -> None:
        data = encode(VehiclePowertrain(pedalry=Pedalry(pedal_position_brake=1.0)))

        with pytest.raises(TruncatedInput):
            decode(VehiclePowertrain, data[:-1])

    def test_truncated_unknown_field(self, pedalry_bytes: bytes) -> None:
        with pytest.raises(TruncatedInput):
            decode(Pedalry, pedalry_bytes + UNKNOWN_BYTES[:-2])


class TestMalformedInput:
    """Test structurally invalid input."""

    def test_wire_kind_mismatch(self) -> None:
        with pytest.raises(TypeMismatch, match="pedal_position_acceleration"):
            decode(Pedalry, b"\x01\x00\x01")

    def test_invalid_wire_kind(self) -> None:
        with pytest.raises(MalformedInput, match="wire kind"):
            decode(Pedalry, b"\x01\x05")

    def test_invalid_utf8(self) -> None:
        with pytest.raises(MalformedInput, match="UTF-8"):
            decode(Notification, b"\x01\x03\x02\xff\xfe")

    def test_max_depth(self) -> None:
        data = encode(VehiclePowertrain(pedalry=Pedalry(pedal_position_brake=1.0)))

        decode(VehiclePowertrain, data, config=CodecConfig(max_depth=2))
        with pytest.raises(MalformedInput, match="max_depth=1"):
            decode(VehiclePowertrain, data, config=CodecConfig(max_depth=1))

    def test_last_singular_value_wins(self) -> None:
        data = double_unit(1, 0.1) + double_unit(1, 0.9)
        assert decode(Pedalry, data).pedal_position_acceleration == 0.9


class TestInterfaceVersion:
    """Test the interface version check."""

    def _traffic(self, major: int, minor: int = 0, patch: int = 0) -> bytes:
        version = InterfaceVersion(version_major=major, version_minor=minor, version_patch=patch)
        return encode(Traffic(version=version))

    def test_same_version_accepted(self) -> None:
        decoded = decode(Traffic, self._traffic(3, 1, 0))
        assert decoded.version.version_major == 3

    def test_older_version_accepted(self) -> None:
        decoded = decode(Traffic, self._traffic(2, 9, 9))
        assert decoded.version.version_minor == 9

    def test_newer_major_rejected(self) -> None:
        with pytest.raises(IncompatibleVersion) as exc_info:
            decode(Traffic, self._traffic(4))

        assert exc_info.value.received == (4, 0, 0)
        assert exc_info.value.supported == (3, 1, 0)

    def test_newer_minor_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="osiwire.codec.decoder"):
            decoded = decode(Traffic, self._traffic(3, 2, 0))

        assert decoded.version.version_minor == 2
        assert "newer than compiled 3.1.0" in caplog.text

    def test_check_disabled(self) -> None:
        config = CodecConfig(check_version=False)
        decoded = decode(Traffic, self._traffic(9), config=config)

        assert decoded.version.version_major == 9

    def test_standalone_version_checked(self) -> None:
        data = encode(InterfaceVersion(version_major=4))

        with pytest.raises(IncompatibleVersion):
            decode(InterfaceVersion, data)


class TestDecodeIsolation:
    """Failed decodes leave nothing behind, and decoding shares only the frozen registry."""

    def test_failed_decodes_leave_registry_unchanged(self, pedalry_bytes: bytes) -> None:
        registry = default_registry()
        names = registry.names()
        size = len(registry)

        with pytest.raises(TruncatedInput):
            decode(Pedalry, pedalry_bytes[:-3])
        with pytest.raises(MalformedInput):
            decode(Pedalry, b"\x01\x05")

        assert registry.names() == names
        assert len(registry) == size
        decoded = decode(Pedalry, pedalry_bytes)
        assert decoded == Pedalry(pedal_position_acceleration=0.5, pedal_position_clutch=0.0)
        assert decoded.unknown_fields == b""

    def test_concurrent_decodes(self, sample_traffic: Traffic) -> None:
        data = encode(sample_traffic)
        registry = default_registry()
        results: list[Traffic] = []
        errors: list[Exception] = []
        lock = threading.Lock()

        def worker() -> None:
            try:
                for _ in range(20):
                    decoded = decode(Traffic, data, registry=registry)
                    with lock:
                        results.append(decoded)
            except Exception as e:
                with lock:
                    errors.append(e)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(results) == 160
        assert all(result == sample_traffic for result in results)
