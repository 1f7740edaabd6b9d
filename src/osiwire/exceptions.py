"""Exception hierarchy for osiwire.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from OsiwireError for easy catching of any osiwire-specific error.

Schema errors are raised while models are introspected or registered and are
fatal to startup. Encode and decode errors concern a single message: the caller
can drop that message and carry on.
"""

from __future__ import annotations


class OsiwireError(Exception):
    """Base exception for all osiwire errors."""

    pass


class SchemaError(OsiwireError):
    """Raised when a message schema is invalid.

    Examples:
        - Field declared without a tag
        - Unsupported field annotation
        - Enum without a 0 (unknown) value
    """

    pass


class UnknownType(SchemaError):
    """Raised when a message type name was never registered."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"Unknown message type: {type_name}")
        self.type_name = type_name


class SchemaConflict(SchemaError):
    """Raised when schema definitions contradict each other.

    Examples:
        - Two fields of one message share a tag
        - A type name is registered twice with different field sets
        - Registration attempted on a frozen registry
    """

    pass


class EncodeError(OsiwireError):
    """Raised when encoding a message fails.

    Examples:
        - Message exceeds max_message_bytes
    """

    pass


class UnencodableField(EncodeError):
    """Raised when a field's runtime value does not match its descriptor."""

    def __init__(self, type_name: str, field_name: str, reason: str) -> None:
        super().__init__(f"{type_name}.{field_name}: {reason}")
        self.type_name = type_name
        self.field_name = field_name


class DecodeError(OsiwireError):
    """Raised when decoding binary data fails."""

    pass


class TruncatedInput(DecodeError):
    """Raised when the input ends in the middle of a field unit."""

    pass


class TypeMismatch(DecodeError):
    """Raised when a known tag arrives with the wrong wire kind."""

    pass


class IncompatibleVersion(DecodeError):
    """Raised when a message's interface major version is newer than ours."""

    def __init__(self, received: tuple[int, int, int], supported: tuple[int, int, int]) -> None:
        super().__init__(
            "Interface version {}.{}.{} is not supported (compiled {}.{}.{})".format(
                *received, *supported
            )
        )
        self.received = received
        self.supported = supported


class MalformedInput(DecodeError):
    """Raised when the input is structurally invalid.

    Examples:
        - Wire kind byte outside 0-3
        - Varint longer than 10 bytes
        - Invalid UTF-8 in a string field
        - Nesting deeper than the configured limit
    """

    pass


class FramingError(OsiwireError):
    """Raised when framing operations fail.

    Examples:
        - CRC checksum mismatch
        - Payload longer than its length prefix
        - Frame too short to hold its header
    """

    pass
