"""Base message class and osiwire-specific Pydantic configuration.

This module provides the BaseMessage class that all osiwire messages should inherit from.
"""

from __future__ import annotations

from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, PrivateAttr


class BaseMessage(BaseModel):
    """Base class for all osiwire messages.

    Messages should inherit from this class and declare every field with one of
    the tag helpers from ``osiwire.models.fields`` (Scalar, EnumField, Nested,
    Repeated). Singular fields default to None, which means "absent" on the
    wire and is never confused with a zero value.

    osiwire-specific options are configured as ClassVar attributes:

    Example:
        >>> from typing import ClassVar, Optional
        >>> class Pedalry(BaseMessage):
        ...     wire_name: ClassVar[Optional[str]] = "osi3.Pedalry"
        ...
        ...     pedal_position_acceleration: Optional[float] = Scalar("double", tag=1)
        ...     pedal_position_brake: Optional[float] = Scalar("double", tag=2)

    Attributes:
        wire_name: Fully qualified type name used by the schema registry
            (defaults to the class name)
    """

    model_config = ConfigDict(
        strict=False,
        # Records are mutated before encoding, keep them valid
        validate_assignment=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    wire_name: ClassVar[Optional[str]] = None

    # Field units this schema did not recognise when the record was decoded
    _unknown_fields: bytes = PrivateAttr(default=b"")

    @classmethod
    def type_name(cls) -> str:
        """Return the fully qualified name this message registers under."""
        return cls.wire_name or cls.__name__

    @property
    def unknown_fields(self) -> bytes:
        """Raw field units preserved from decoding, re-emitted on encode."""
        return self._unknown_fields

    def clear_unknown_fields(self) -> None:
        self._unknown_fields = b""
