"""Unit tests for Protobuf schema generation."""

from __future__ import annotations

from typing import ClassVar, List, Optional

import pytest

from osiwire import BaseMessage, Nested, Repeated, Scalar, SchemaRegistry
from osiwire.exceptions import SchemaError, UnknownType
from osiwire.protobuf import to_proto_schema


class Reading(BaseMessage):
    wire_name: ClassVar[Optional[str]] = "lab.Reading"

    value: Optional[float] = Scalar("float", tag=1)
    raw: Optional[bytes] = Scalar("bytes", tag=2)


class Batch(BaseMessage):
    wire_name: ClassVar[Optional[str]] = "lab.Batch"

    readings: List[Reading] = Repeated(tag=1)
    counts: List[int] = Repeated(tag=2, scalar="uint32")
    first: Optional[Reading] = Nested(tag=3)


class TestProtoSchemaGeneration:
    """Test Protobuf schema generation."""

    def test_pedalry_exact(self) -> None:
        assert to_proto_schema("osi3.Pedalry") == (
            'syntax = "proto2";\n'
            "\n"
            "package osi3;\n"
            "\n"
            "message Pedalry {\n"
            "  optional double pedal_position_acceleration = 1;\n"
            "  optional double pedal_position_brake = 2;\n"
            "  optional double pedal_position_clutch = 3;\n"
            "}\n"
        )

    def test_nested_names_become_nested_messages(self) -> None:
        proto = to_proto_schema("osi3.VehicleClass.VehiclePowertrain")

        assert "message VehicleClass {\n  message VehiclePowertrain {" in proto
        assert "    optional Pedalry pedalry = 1;" in proto
        assert "    optional GearLeverState gear_lever_state = 6;" in proto
        assert "message Pedalry {" in proto
        assert "message GearLeverState {" in proto

    def test_enum_declared_in_owner_with_prefixed_values(self) -> None:
        proto = to_proto_schema("osi3.VehicleClass.VehiclePowertrain")

        assert "    enum PowertrainMode {" in proto
        assert "      POWERTRAIN_MODE_UNKNOWN = 0;" in proto
        assert "      POWERTRAIN_MODE_REAR_WHEEL_DRIVE = 4;" in proto
        assert (
            "optional VehicleClass.VehiclePowertrain.PowertrainMode powertrain_mode = 9;" in proto
        )

    def test_shared_enum_declared_once(self) -> None:
        proto = to_proto_schema("osi3.MovingObject.VehicleClassification.LightState")

        assert proto.count("enum GenericLightState {") == 1
        assert "message MovingObject {" in proto
        assert "GENERIC_LIGHT_STATE_FLASHING_AMBER = 6;" in proto
        assert (
            "optional MovingObject.VehicleClassification.LightState.GenericLightState "
            "head_light = 4;" in proto
        )

    def test_full_traffic_schema(self) -> None:
        proto = to_proto_schema("osi3.Traffic")

        assert "optional InterfaceVersion version = 1;" in proto
        assert "repeated VehicleClass vehicle = 4;" in proto
        assert "repeated VehicleClass.VehicleAutomatedDrivingFunction " in proto
        assert "LANE_CHANGE_REQUEST_EGO_LANE = 0;" in proto
        assert proto.count("{") == proto.count("}")

    def test_custom_registry_and_package(self) -> None:
        registry = SchemaRegistry()
        registry.register(Batch)

        proto = to_proto_schema("lab.Batch", registry, package="lab")

        assert "package lab;" in proto
        assert "repeated Reading readings = 1;" in proto
        assert "repeated uint32 counts = 2;" in proto
        assert "optional Reading first = 3;" in proto
        assert "optional float value = 1;" in proto
        assert "optional bytes raw = 2;" in proto

    def test_no_package(self) -> None:
        registry = SchemaRegistry()
        registry.register(Reading)

        proto = to_proto_schema("lab.Reading", registry, package="")

        assert "package" not in proto
        assert "message lab {\n  message Reading {" in proto

    def test_type_outside_package(self) -> None:
        registry = SchemaRegistry()
        registry.register(Reading)

        with pytest.raises(SchemaError, match="not in package osi3"):
            to_proto_schema("lab.Reading", registry)

    def test_unknown_type(self) -> None:
        with pytest.raises(UnknownType):
            to_proto_schema("osi3.Nope")
