"""Pydantic message modeling for osiwire.

This module provides the BaseMessage class and the helpers that attach wire
tags to message fields.
"""

from __future__ import annotations

from .base import BaseMessage
from .fields import EnumField, Nested, Repeated, Scalar

__all__ = [
    "BaseMessage",
    "EnumField",
    "Nested",
    "Repeated",
    "Scalar",
]
