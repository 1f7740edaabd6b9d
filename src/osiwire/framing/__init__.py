"""Message framing utilities for osiwire.

This module provides length-prefixed, optionally CRC-protected frames for
carrying encoded messages over byte streams.
"""

from __future__ import annotations

from .basic import decode_framed, encode_framed, frame_message, unframe_message

__all__ = [
    "frame_message",
    "unframe_message",
    "encode_framed",
    "decode_framed",
]
