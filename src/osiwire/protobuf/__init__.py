"""Protobuf interoperability for osiwire.

This module generates .proto schema text from registered message types.
"""

from __future__ import annotations

from .convert import to_proto_schema

__all__ = [
    "to_proto_schema",
]
