"""Common osi3 types referenced by the vehicle messages.

Versioning, timestamps, identifiers and the basic geometry types. Units follow
the osi3 conventions: metres, radians, seconds.
"""

from __future__ import annotations

from typing import ClassVar, List, Optional

from ..models import BaseMessage, Nested, Repeated, Scalar


class InterfaceVersion(BaseMessage):
    """Interface version of the sender (semantic versioning)."""

    wire_name: ClassVar[Optional[str]] = "osi3.InterfaceVersion"

    version_major: Optional[int] = Scalar("uint32", tag=1)
    version_minor: Optional[int] = Scalar("uint32", tag=2)
    version_patch: Optional[int] = Scalar("uint32", tag=3)


class Timestamp(BaseMessage):
    """Point in time since an arbitrary, shared zero point."""

    wire_name: ClassVar[Optional[str]] = "osi3.Timestamp"

    seconds: Optional[int] = Scalar("int64", tag=1)
    nanos: Optional[int] = Scalar("uint32", tag=2)


class Identifier(BaseMessage):
    wire_name: ClassVar[Optional[str]] = "osi3.Identifier"

    value: Optional[int] = Scalar("uint64", tag=1)


class Vector3d(BaseMessage):
    wire_name: ClassVar[Optional[str]] = "osi3.Vector3d"

    x: Optional[float] = Scalar("double", tag=1)
    y: Optional[float] = Scalar("double", tag=2)
    z: Optional[float] = Scalar("double", tag=3)


class Vector2d(BaseMessage):
    wire_name: ClassVar[Optional[str]] = "osi3.Vector2d"

    x: Optional[float] = Scalar("double", tag=1)
    y: Optional[float] = Scalar("double", tag=2)


class Dimension3d(BaseMessage):
    wire_name: ClassVar[Optional[str]] = "osi3.Dimension3d"

    length: Optional[float] = Scalar("double", tag=1)
    width: Optional[float] = Scalar("double", tag=2)
    height: Optional[float] = Scalar("double", tag=3)


class Orientation3d(BaseMessage):
    wire_name: ClassVar[Optional[str]] = "osi3.Orientation3d"

    roll: Optional[float] = Scalar("double", tag=1)
    pitch: Optional[float] = Scalar("double", tag=2)
    yaw: Optional[float] = Scalar("double", tag=3)


class BaseMoving(BaseMessage):
    """Position, orientation and motion of a moving object's bounding box.

    All values are relative to the global ground truth coordinate system.
    """

    wire_name: ClassVar[Optional[str]] = "osi3.BaseMoving"

    dimension: Optional[Dimension3d] = Nested(tag=1)
    position: Optional[Vector3d] = Nested(tag=2)
    orientation: Optional[Orientation3d] = Nested(tag=3)
    velocity: Optional[Vector3d] = Nested(tag=4)
    acceleration: Optional[Vector3d] = Nested(tag=5)
    orientation_rate: Optional[Orientation3d] = Nested(tag=6)
    base_polygon: List[Vector2d] = Repeated(tag=7)
    orientation_acceleration: Optional[Orientation3d] = Nested(tag=8)
