"""Field declaration helpers.

Each helper wraps Pydantic's Field() and records the wire tag (and, for
scalars, the declared wire type) as extra metadata that the schema
introspection in ``osiwire.codec.schema`` reads back.
"""

from __future__ import annotations

from typing import Any, Optional, cast

from pydantic import Field
from pydantic.fields import FieldInfo

TAG_KEY = "osiwire_tag"
SCALAR_KEY = "osiwire_scalar"


def _extra(tag: int, scalar: Optional[str] = None) -> dict[str, Any]:
    extra: dict[str, Any] = {TAG_KEY: tag}
    if scalar is not None:
        extra[SCALAR_KEY] = scalar
    return extra


def Scalar(scalar_type: str, *, tag: int, **kwargs: Any) -> FieldInfo:
    """Declare an optional scalar field.

    Args:
        scalar_type: Declared wire type: int32, int64, uint32, uint64,
            float, double, bool, string or bytes
        tag: Field number, unique within the message
        **kwargs: Additional Field() arguments (description, etc.)

    Example:
        >>> class Message(BaseMessage):
        ...     engine_rpm: Optional[float] = Scalar("double", tag=2)
        ...     gear: Optional[int] = Scalar("int32", tag=7)
    """
    return cast(FieldInfo, Field(default=None, json_schema_extra=_extra(tag, scalar_type), **kwargs))


def EnumField(*, tag: int, **kwargs: Any) -> FieldInfo:
    """Declare an optional enum field; the enum class comes from the annotation.

    Example:
        >>> class Message(BaseMessage):
        ...     powertrain_mode: Optional[PowertrainMode] = EnumField(tag=9)
    """
    return cast(FieldInfo, Field(default=None, json_schema_extra=_extra(tag), **kwargs))


def Nested(*, tag: int, **kwargs: Any) -> FieldInfo:
    """Declare an optional nested message field.

    Example:
        >>> class Message(BaseMessage):
        ...     pedalry: Optional[Pedalry] = Nested(tag=1)
    """
    return cast(FieldInfo, Field(default=None, json_schema_extra=_extra(tag), **kwargs))


def Repeated(*, tag: int, scalar: Optional[str] = None, **kwargs: Any) -> FieldInfo:
    """Declare a repeated field (empty list by default).

    The element kind comes from the ``list[...]`` annotation; numeric
    elements also need ``scalar`` to fix their wire width.

    Example:
        >>> class Message(BaseMessage):
        ...     vehicle: list[VehicleClass] = Repeated(tag=4)
        ...     samples: list[float] = Repeated(tag=5, scalar="float")
    """
    return cast(
        FieldInfo, Field(default_factory=list, json_schema_extra=_extra(tag, scalar), **kwargs)
    )
