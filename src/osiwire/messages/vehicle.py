"""Vehicle dynamics messages.

``Traffic`` is the top-level message: the sender's interface version, a
timestamp, the host vehicle id and one ``VehicleClass`` per described vehicle.
A ``VehicleClass`` groups basics, kinematics, powertrain, steering wheel,
wheels, light state, localization and automated-driving-function states.

Types that the schema nests inside ``VehicleClass`` are plain classes here;
only their wire names (``osi3.VehicleClass.VehiclePowertrain``) carry the
nesting.

Enums follow the shared convention: 0 is UNKNOWN (the value undefined
integers decode to) and 1 is OTHER.
"""

from __future__ import annotations

import enum
from typing import ClassVar, List, Optional

from ..models import BaseMessage, EnumField, Nested, Repeated, Scalar
from .common import BaseMoving, Identifier, InterfaceVersion, Orientation3d, Timestamp, Vector3d
from .object import LightState, SteeringControl


class SteeringWheel(BaseMessage):
    """Steering wheel angle, angular speed and torque.

    0 is central (straight), left is positive.
    """

    wire_name: ClassVar[Optional[str]] = "osi3.SteeringWheel"

    angle: Optional[float] = Scalar("double", tag=1)
    angular_speed: Optional[float] = Scalar("double", tag=2)
    torque: Optional[float] = Scalar("double", tag=3)


class Pedalry(BaseMessage):
    """Pedal positions, 0 (unpressed) to 1 (fully pressed)."""

    wire_name: ClassVar[Optional[str]] = "osi3.Pedalry"

    pedal_position_acceleration: Optional[float] = Scalar("double", tag=1)
    pedal_position_brake: Optional[float] = Scalar("double", tag=2)
    pedal_position_clutch: Optional[float] = Scalar("double", tag=3)


class InterpolationMethod(enum.IntEnum):
    UNKNOWN = 0
    OTHER = 1
    LINEAR = 2
    CUBIC = 3


class Trajectory(BaseMessage):
    """A trajectory point the vehicle should reach at ``timestamp``."""

    wire_name: ClassVar[Optional[str]] = "osi3.Trajectory"

    timestamp: Optional[Timestamp] = Nested(tag=1)
    targeted_pos_x: Optional[float] = Scalar("double", tag=2)
    targeted_pos_y: Optional[float] = Scalar("double", tag=3)
    track_angle: Optional[float] = Scalar("double", tag=4)
    curvature: Optional[float] = Scalar("double", tag=5)
    curvature_change: Optional[float] = Scalar("double", tag=6)
    velocity: Optional[float] = Scalar("double", tag=7)
    acceleration: Optional[float] = Scalar("double", tag=8)
    interpolation_method: Optional[InterpolationMethod] = EnumField(tag=9)


class AutomaticTransmissionMode(enum.IntEnum):
    UNKNOWN = 0
    OTHER = 1
    PARK = 2
    REVERSE = 3
    NEUTRAL = 4
    DRIVE = 5
    MANUAL_OVERRIDE = 6


class ManualOverrideRequest(enum.IntEnum):
    UNKNOWN = 0
    OTHER = 1
    GEAR_DOWN = 2
    GEAR_MID = 3
    GEAR_UP = 4


class GearLeverState(BaseMessage):
    """Gear lever position.

    ``gear`` is 0 for neutral, positive for forward gears and negative for
    reverse gears.
    """

    wire_name: ClassVar[Optional[str]] = "osi3.GearLeverState"

    gear: Optional[int] = Scalar("int32", tag=1)
    controls_automatic_transmission: Optional[bool] = Scalar("bool", tag=2)
    automatic_transmission_mode: Optional[AutomaticTransmissionMode] = EnumField(tag=3)
    manual_override_request: Optional[ManualOverrideRequest] = EnumField(tag=4)


class NotificationType(enum.IntEnum):
    UNKNOWN = 0
    OTHER = 1
    ERROR = 2
    WARNING = 3
    INFORMATION = 4
    DEBUG = 5


class Notification(BaseMessage):
    wire_name: ClassVar[Optional[str]] = "osi3.Notification"

    notification: Optional[str] = Scalar("string", tag=1)
    notification_type: Optional[NotificationType] = EnumField(tag=2)


class VehicleBasics(BaseMessage):
    wire_name: ClassVar[Optional[str]] = "osi3.VehicleClass.VehicleBasics"

    id: Optional[Identifier] = Nested(tag=1)
    reference_string: Optional[str] = Scalar("string", tag=2)
    license_plate: Optional[str] = Scalar("string", tag=3)


class VehicleKinematics(BaseMessage):
    """How the vehicle moves; ``weight`` is the curb weight in kg."""

    wire_name: ClassVar[Optional[str]] = "osi3.VehicleClass.VehicleKinematics"

    base: Optional[BaseMoving] = Nested(tag=1)
    weight: Optional[float] = Scalar("double", tag=2)


class PowertrainMode(enum.IntEnum):
    UNKNOWN = 0
    OTHER = 1
    ALL_WHEEL_DRIVE = 2
    FRONT_WHEEL_DRIVE = 3
    REAR_WHEEL_DRIVE = 4


class VehiclePowertrain(BaseMessage):
    """Powertrain state.

    Units: engine_rpm [1/min], engine_torque [N*m], fuel_consumption
    [l/100km], electrical_energy_consumption [kW/100km], handbrake_position [%].
    """

    wire_name: ClassVar[Optional[str]] = "osi3.VehicleClass.VehiclePowertrain"

    pedalry: Optional[Pedalry] = Nested(tag=1)
    engine_rpm: Optional[float] = Scalar("double", tag=2)
    engine_torque: Optional[float] = Scalar("double", tag=3)
    fuel_consumption: Optional[float] = Scalar("double", tag=4)
    electrical_energy_consumption: Optional[float] = Scalar("double", tag=5)
    gear_lever_state: Optional[GearLeverState] = Nested(tag=6)
    gear_transmission: Optional[int] = Scalar("int32", tag=7)
    handbrake_position: Optional[float] = Scalar("double", tag=8)
    powertrain_mode: Optional[PowertrainMode] = EnumField(tag=9)


class VehicleSteeringWheel(BaseMessage):
    wire_name: ClassVar[Optional[str]] = "osi3.VehicleClass.VehicleSteeringWheel"

    steering_wheel: Optional[SteeringWheel] = Nested(tag=1)
    steering_springstiffness: Optional[float] = Scalar("double", tag=2)
    steering_damping: Optional[float] = Scalar("double", tag=3)
    steering_friction: Optional[float] = Scalar("double", tag=4)
    steering_control: Optional[SteeringControl] = EnumField(tag=5)


class Wheel(BaseMessage):
    """Physical description of one wheel, relative to the vehicle centre."""

    wire_name: ClassVar[Optional[str]] = "osi3.VehicleClass.Wheel"

    kinetic_friction_coefficient: Optional[float] = Scalar("double", tag=1)
    contact_point: Optional[Vector3d] = Nested(tag=2)
    rotational_speed: Optional[float] = Scalar("double", tag=3)
    steeringangle: Optional[float] = Scalar("double", tag=4)
    camber: Optional[float] = Scalar("double", tag=5)
    tirepressure: Optional[float] = Scalar("double", tag=6)
    springdeflection: Optional[float] = Scalar("double", tag=7)
    position: Optional[Vector3d] = Nested(tag=8)
    orientation: Optional[Orientation3d] = Nested(tag=9)
    slip: Optional[float] = Scalar("double", tag=10)
    slipangle: Optional[float] = Scalar("double", tag=11)


class VehicleWheels(BaseMessage):
    wire_name: ClassVar[Optional[str]] = "osi3.VehicleClass.VehicleWheels"

    wheel_front_left: Optional[Wheel] = Nested(tag=1)
    wheel_front_right: Optional[Wheel] = Nested(tag=2)
    wheel_rear_left: Optional[Wheel] = Nested(tag=3)
    wheel_rear_right: Optional[Wheel] = Nested(tag=4)


class VehicleLocalization(BaseMessage):
    """Localization solution in decimal degrees and metres."""

    wire_name: ClassVar[Optional[str]] = "osi3.VehicleClass.VehicleLocalization"

    longitude: Optional[float] = Scalar("double", tag=1)
    latitude: Optional[float] = Scalar("double", tag=2)
    altitude: Optional[float] = Scalar("double", tag=3)
    heading: Optional[float] = Scalar("double", tag=4)
    localization_accuracy: Optional[float] = Scalar("double", tag=5)
    number_of_satellites: Optional[int] = Scalar("int32", tag=6)


class FunctionState(enum.IntEnum):
    UNKNOWN = 0
    OTHER = 1
    OFF = 2
    INITIALIZING = 3
    UNAVAILABLE = 4
    AVAILABLE = 5
    STARTING = 6
    RUNNING = 7
    STOPPING = 8
    FAILURE = 9


class StateDefinition(BaseMessage):
    """Internal or requested state of an automated-driving function."""

    wire_name: ClassVar[Optional[str]] = (
        "osi3.VehicleClass.VehicleAutomatedDrivingFunction.StateDefinition"
    )

    function_state: Optional[FunctionState] = EnumField(tag=1)
    targeted_speed: Optional[float] = Scalar("double", tag=2)
    timegap: Optional[float] = Scalar("double", tag=3)
    notification: Optional[Notification] = Nested(tag=4)


class LaneChangeRequest(enum.IntEnum):
    # No UNKNOWN member here: staying on the ego lane is the 0 value
    EGO_LANE = 0
    LC_LEFT = 1
    LC_RIGHT = 2


class Intentions(BaseMessage):
    """Requests from an automated-driving function to change the vehicle state.

    steering_override_factor and handbrake_position range over [0, 1].
    """

    wire_name: ClassVar[Optional[str]] = (
        "osi3.VehicleClass.VehicleAutomatedDrivingFunction.Intentions"
    )

    trajectory: Optional[Trajectory] = Nested(tag=1)
    steering_wheel: Optional[SteeringWheel] = Nested(tag=2)
    steering_override_factor: Optional[float] = Scalar("double", tag=3)
    pedalry: Optional[Pedalry] = Nested(tag=4)
    handbrake_position: Optional[float] = Scalar("double", tag=5)
    light_state: Optional[LightState] = Nested(tag=6)
    driver_take_over_request: Optional[bool] = Scalar("bool", tag=7)
    lane_change_request: Optional[LaneChangeRequest] = EnumField(tag=8)


class FunctionName(enum.IntEnum):
    UNKNOWN = 0
    OTHER = 1
    LEVEL_4_URBAN_DRIVING = 2
    LEVEL_4_VALET_PARKING = 3
    LEVEL_3_HIGHWAY_DRIVING = 4
    LEVEL_3_TRAFFIC_JAM_DRIVING = 5
    LEVEL_2_PARKING_ASSISTANT = 6
    LEVEL_1_PARKING_STEERING_ASSISTANT = 7
    LEVEL_1_ADAPTIVE_CRUISE_CONTROL = 8
    LEVEL_1_LANE_KEEP_ASSISTANT = 9
    LEVEL_1_CRUISE_CONTROL = 10
    LEVEL_1_LIMIT = 11
    LEVEL_0_LANE_DEPARTURE_WARNING = 12
    LEVEL_0_BLIND_SPOT_MONITORING = 13
    LEVEL_0_FORWARD_COLLISION_WARNING = 14


class VehicleAutomatedDrivingFunction(BaseMessage):
    """States and intentions of one automated-driving function."""

    wire_name: ClassVar[Optional[str]] = "osi3.VehicleClass.VehicleAutomatedDrivingFunction"

    function_name: Optional[FunctionName] = EnumField(tag=1)
    states: Optional[StateDefinition] = Nested(tag=2)
    external_state_requests: Optional[StateDefinition] = Nested(tag=3)
    intentions: Optional[Intentions] = Nested(tag=4)


class VehicleClass(BaseMessage):
    """Full description of one vehicle."""

    wire_name: ClassVar[Optional[str]] = "osi3.VehicleClass"

    vehicle_basics: Optional[VehicleBasics] = Nested(tag=1)
    vehicle_kinematics: Optional[VehicleKinematics] = Nested(tag=2)
    vehicle_powertrain: Optional[VehiclePowertrain] = Nested(tag=3)
    vehicle_steering_wheel: Optional[VehicleSteeringWheel] = Nested(tag=4)
    vehicle_wheels: Optional[VehicleWheels] = Nested(tag=5)
    vehicle_light_state: Optional[LightState] = Nested(tag=6)
    vehicle_localization: Optional[VehicleLocalization] = Nested(tag=7)
    vehicle_automated_driving_function: List[VehicleAutomatedDrivingFunction] = Repeated(tag=8)


class Traffic(BaseMessage):
    """Top-level message exchanged between simulators."""

    wire_name: ClassVar[Optional[str]] = "osi3.Traffic"

    version: Optional[InterfaceVersion] = Nested(tag=1)
    timestamp: Optional[Timestamp] = Nested(tag=2)
    host_vehicle_id: Optional[Identifier] = Nested(tag=3)
    vehicle: List[VehicleClass] = Repeated(tag=4)
