"""Light state and steering control types shared with the object and occupant schemas."""

from __future__ import annotations

import enum
from typing import ClassVar, Optional

from ..models import BaseMessage, EnumField


class IndicatorState(enum.IntEnum):
    UNKNOWN = 0
    OTHER = 1
    OFF = 2
    LEFT = 3
    RIGHT = 4
    WARNING = 5


class GenericLightState(enum.IntEnum):
    UNKNOWN = 0
    OTHER = 1
    OFF = 2
    ON = 3
    FLASHING_BLUE = 4
    FLASHING_BLUE_AND_RED = 5
    FLASHING_AMBER = 6


class BrakeLightState(enum.IntEnum):
    UNKNOWN = 0
    OTHER = 1
    OFF = 2
    NORMAL = 3
    STRONG = 4


class LightState(BaseMessage):
    """States of the vehicle's lights."""

    wire_name: ClassVar[Optional[str]] = "osi3.MovingObject.VehicleClassification.LightState"

    indicator_state: Optional[IndicatorState] = EnumField(tag=1)
    front_fog_light: Optional[GenericLightState] = EnumField(tag=2)
    rear_fog_light: Optional[GenericLightState] = EnumField(tag=3)
    head_light: Optional[GenericLightState] = EnumField(tag=4)
    high_beam: Optional[GenericLightState] = EnumField(tag=5)
    reversing_light: Optional[GenericLightState] = EnumField(tag=6)
    brake_light_state: Optional[BrakeLightState] = EnumField(tag=7)
    license_plate_illumination_rear: Optional[GenericLightState] = EnumField(tag=8)
    emergency_vehicle_illumination: Optional[GenericLightState] = EnumField(tag=9)
    service_vehicle_illumination: Optional[GenericLightState] = EnumField(tag=10)


class SteeringControl(enum.IntEnum):
    """Where the driver's hands are relative to the steering wheel."""

    UNKNOWN = 0
    OTHER = 1
    NO_HAND = 2
    ONE_HAND = 3
    BOTH_HANDS = 4
    LEFT_HAND = 5
    RIGHT_HAND = 6
