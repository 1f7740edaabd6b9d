"""Codec configuration.

This module provides the configuration dataclass shared by the encoder and
decoder.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class CodecConfig:
    """Configuration for encoding and decoding.

    Attributes:
        retain_unknown_fields: Keep field units with unrecognised tags on the
            decoded record so they are re-emitted on encode (default True).
            When False they are dropped.

        check_version: Reject messages whose InterfaceVersion major number is
            newer than the registry's compiled version (default True).

        max_depth: Maximum nesting depth accepted by the decoder (default 64).
            Deeper input raises MalformedInput.

        max_message_bytes: Upper bound on encoded message size, or None for
            no limit (default None).

    Examples:
        ```python
        from osiwire import CodecConfig, decode

        # Relay that must not forward fields it does not understand
        config = CodecConfig(retain_unknown_fields=False)
        traffic = decode("osi3.Traffic", data, config=config)
        ```
    """

    retain_unknown_fields: bool = True
    check_version: bool = True
    max_depth: int = 64
    max_message_bytes: Optional[int] = None

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")

        if self.max_message_bytes is not None and self.max_message_bytes <= 0:
            raise ValueError(f"max_message_bytes must be > 0, got {self.max_message_bytes}")


DEFAULT_CONFIG = CodecConfig()
