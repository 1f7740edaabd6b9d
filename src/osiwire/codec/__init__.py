"""Tagged-field binary codec for osiwire.

This module provides the field catalog (schema introspection), the schema
registry, and the encode/decode functions built on them.
"""

from __future__ import annotations

from .decoder import decode
from .encoder import encode
from .registry import SchemaRegistry, default_registry
from .schema import EnumDescriptor, FieldDescriptor, FieldKind, MessageSchema
from .wire import WireKind

__all__ = [
    "encode",
    "decode",
    "SchemaRegistry",
    "default_registry",
    "MessageSchema",
    "FieldDescriptor",
    "FieldKind",
    "EnumDescriptor",
    "WireKind",
]
