"""osi3 vehicle schema as osiwire message models.

All types register under their fully qualified osi3 names; registering
``Traffic`` pulls in every other type. ``default_registry()`` returns a frozen
registry holding the whole set.
"""

from __future__ import annotations

from .common import (
    BaseMoving,
    Dimension3d,
    Identifier,
    InterfaceVersion,
    Orientation3d,
    Timestamp,
    Vector2d,
    Vector3d,
)
from .object import BrakeLightState, GenericLightState, IndicatorState, LightState, SteeringControl
from .vehicle import (
    AutomaticTransmissionMode,
    FunctionName,
    FunctionState,
    GearLeverState,
    Intentions,
    InterpolationMethod,
    LaneChangeRequest,
    ManualOverrideRequest,
    Notification,
    NotificationType,
    Pedalry,
    PowertrainMode,
    StateDefinition,
    SteeringWheel,
    Traffic,
    Trajectory,
    VehicleAutomatedDrivingFunction,
    VehicleBasics,
    VehicleClass,
    VehicleKinematics,
    VehicleLocalization,
    VehiclePowertrain,
    VehicleSteeringWheel,
    VehicleWheels,
    Wheel,
)

__all__ = [
    # Common types
    "BaseMoving",
    "Dimension3d",
    "Identifier",
    "InterfaceVersion",
    "Orientation3d",
    "Timestamp",
    "Vector2d",
    "Vector3d",
    # Lights and occupant
    "BrakeLightState",
    "GenericLightState",
    "IndicatorState",
    "LightState",
    "SteeringControl",
    # Vehicle
    "AutomaticTransmissionMode",
    "FunctionName",
    "FunctionState",
    "GearLeverState",
    "Intentions",
    "InterpolationMethod",
    "LaneChangeRequest",
    "ManualOverrideRequest",
    "Notification",
    "NotificationType",
    "Pedalry",
    "PowertrainMode",
    "StateDefinition",
    "SteeringWheel",
    "Traffic",
    "Trajectory",
    "VehicleAutomatedDrivingFunction",
    "VehicleBasics",
    "VehicleClass",
    "VehicleKinematics",
    "VehicleLocalization",
    "VehiclePowertrain",
    "VehicleSteeringWheel",
    "VehicleWheels",
    "Wheel",
]
