"""Unit tests for framing utilities."""

from __future__ import annotations

import struct

import pytest

from osiwire import encode
from osiwire.exceptions import FramingError, TruncatedInput
from osiwire.framing import decode_framed, encode_framed, frame_message, unframe_message
from osiwire.messages import Pedalry
from osiwire.utils.crc import crc32_bytes


class TestBasicFraming:
    """Test basic message framing."""

    def test_frame_no_options(self) -> None:
        payload = b"Hello, World!"
        assert frame_message(payload, length_prefix=False, crc=None) == payload

    def test_frame_with_length(self) -> None:
        framed = frame_message(b"Hello", length_prefix=True, crc=None)

        assert framed == b"\x00\x00\x00\x05Hello"
        assert unframe_message(framed, length_prefix=True, crc=None) == b"Hello"

    def test_frame_with_crc16(self) -> None:
        payload = b"Test data"
        framed = frame_message(payload, length_prefix=False, crc="crc16")

        assert len(framed) == len(payload) + 2
        assert unframe_message(framed, length_prefix=False, crc="crc16") == payload

    def test_frame_with_crc32(self) -> None:
        payload = b"Test data"
        framed = frame_message(payload, length_prefix=False, crc="crc32")

        assert len(framed) == len(payload) + 4
        assert unframe_message(framed, length_prefix=False, crc="crc32") == payload

    def test_crc_covers_length_prefix(self) -> None:
        framed = frame_message(b"abc", length_prefix=True, crc="crc32")
        assert framed[-4:] == crc32_bytes(b"\x00\x00\x00\x03abc")

    def test_empty_payload_with_length(self) -> None:
        framed = frame_message(b"", length_prefix=True, crc="crc16")

        assert len(framed) == 6
        assert unframe_message(framed, length_prefix=True, crc="crc16") == b""

    def test_empty_payload_needs_prefix_or_crc(self) -> None:
        framed = frame_message(b"", length_prefix=False, crc="crc32")
        assert unframe_message(framed, length_prefix=False, crc="crc32") == b""

        with pytest.raises(TruncatedInput):
            unframe_message(frame_message(b"", length_prefix=False), length_prefix=False)


class TestFramingErrors:
    """Test framing error handling."""

    def test_unframe_empty_data(self) -> None:
        with pytest.raises(TruncatedInput, match="empty"):
            unframe_message(b"", length_prefix=False, crc=None)

    def test_unframe_truncated_length(self) -> None:
        with pytest.raises(TruncatedInput, match="too short"):
            unframe_message(b"\x00\x01", length_prefix=True, crc=None)

    def test_unframe_truncated_payload(self) -> None:
        framed = b"\x00\x00\x00\x10" + b"Short"

        with pytest.raises(TruncatedInput, match="prefix says 16 bytes"):
            unframe_message(framed, length_prefix=True, crc=None)

    def test_unframe_overlong_payload(self) -> None:
        framed = b"\x00\x00\x00\x02" + b"Longer"

        with pytest.raises(FramingError, match="[Ll]ength mismatch"):
            unframe_message(framed, length_prefix=True, crc=None)

    def test_unframe_crc_mismatch(self) -> None:
        framed = frame_message(b"Test", length_prefix=False, crc="crc16")
        corrupted = framed[:-1] + bytes([framed[-1] ^ 0xFF])

        with pytest.raises(FramingError, match="CRC-16 verification failed"):
            unframe_message(corrupted, length_prefix=False, crc="crc16")

    def test_corrupted_payload_detected(self) -> None:
        framed = bytearray(frame_message(b"Test", length_prefix=True, crc="crc32"))
        framed[5] ^= 0x01

        with pytest.raises(FramingError, match="CRC-32"):
            unframe_message(bytes(framed), length_prefix=True, crc="crc32")

    def test_invalid_crc_type(self) -> None:
        with pytest.raises(ValueError, match="Invalid CRC type"):
            frame_message(b"Test", crc="crc64")  # type: ignore[arg-type]

        with pytest.raises(ValueError, match="Invalid CRC type"):
            unframe_message(b"Test", crc="crc64")  # type: ignore[arg-type]


class TestFramedCodec:
    """Test encode_framed / decode_framed."""

    def test_roundtrip(self, pedalry: Pedalry, pedalry_bytes: bytes) -> None:
        framed = encode_framed(pedalry)

        assert framed[:4] == struct.pack(">I", len(pedalry_bytes))
        assert framed[4:-4] == pedalry_bytes
        assert decode_framed(Pedalry, framed) == pedalry

    def test_roundtrip_by_name_without_crc(self, pedalry: Pedalry) -> None:
        framed = encode_framed(pedalry, "osi3.Pedalry", crc=None)
        assert decode_framed("osi3.Pedalry", framed, crc=None) == pedalry

    def test_boundary_cut_detected(self, pedalry: Pedalry) -> None:
        """A cut between two field units decodes unframed, but not framed."""
        framed = frame_message(encode(pedalry), length_prefix=True, crc=None)

        with pytest.raises(TruncatedInput):
            decode_framed(Pedalry, framed[: 4 + 10], crc=None)

    def test_every_cut_raises(self, pedalry: Pedalry) -> None:
        framed = encode_framed(pedalry)

        for cut in range(len(framed)):
            with pytest.raises(TruncatedInput):
                decode_framed(Pedalry, framed[:cut])

