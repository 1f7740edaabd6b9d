"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import struct

import pytest
from hypothesis import settings

from osiwire.codec.registry import SchemaRegistry
from osiwire.messages import (
    AutomaticTransmissionMode,
    FunctionName,
    FunctionState,
    GearLeverState,
    Identifier,
    Intentions,
    InterfaceVersion,
    LaneChangeRequest,
    Pedalry,
    PowertrainMode,
    StateDefinition,
    Timestamp,
    Traffic,
    VehicleAutomatedDrivingFunction,
    VehicleBasics,
    VehicleClass,
    VehiclePowertrain,
)

# The first example pays for building the default registry
settings.register_profile("osiwire", deadline=None)
settings.load_profile("osiwire")


@pytest.fixture
def pedalry() -> Pedalry:
    """Accelerator half pressed, clutch explicitly released, brake absent."""
    return Pedalry(pedal_position_acceleration=0.5, pedal_position_clutch=0.0)


@pytest.fixture
def pedalry_bytes() -> bytes:
    """Wire form of the ``pedalry`` fixture."""
    return b"\x01\x02" + struct.pack("<d", 0.5) + b"\x03\x02" + struct.pack("<d", 0.0)


@pytest.fixture
def registry() -> SchemaRegistry:
    """Fresh, open registry."""
    return SchemaRegistry()


@pytest.fixture
def sample_traffic() -> Traffic:
    """Traffic message with one fully populated host vehicle."""
    powertrain = VehiclePowertrain(
        pedalry=Pedalry(pedal_position_acceleration=0.3, pedal_position_brake=0.0),
        engine_rpm=2100.0,
        engine_torque=180.5,
        gear_lever_state=GearLeverState(
            gear=3,
            controls_automatic_transmission=True,
            automatic_transmission_mode=AutomaticTransmissionMode.DRIVE,
        ),
        gear_transmission=3,
        powertrain_mode=PowertrainMode.FRONT_WHEEL_DRIVE,
    )
    functions = [
        VehicleAutomatedDrivingFunction(
            function_name=FunctionName.LEVEL_1_ADAPTIVE_CRUISE_CONTROL,
            states=StateDefinition(function_state=FunctionState.RUNNING, targeted_speed=27.8),
        ),
        VehicleAutomatedDrivingFunction(
            function_name=FunctionName.LEVEL_1_LANE_KEEP_ASSISTANT,
            intentions=Intentions(
                steering_override_factor=0.25,
                lane_change_request=LaneChangeRequest.LC_LEFT,
                driver_take_over_request=False,
            ),
        ),
    ]
    vehicle = VehicleClass(
        vehicle_basics=VehicleBasics(id=Identifier(value=7), license_plate="OSI-3"),
        vehicle_powertrain=powertrain,
        vehicle_automated_driving_function=functions,
    )
    return Traffic(
        version=InterfaceVersion(version_major=3, version_minor=1, version_patch=0),
        timestamp=Timestamp(seconds=1_700_000_000, nanos=250_000_000),
        host_vehicle_id=Identifier(value=7),
        vehicle=[vehicle],
    )
