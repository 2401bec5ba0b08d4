"""IEEE-754 helpers for big-endian float payloads."""

from __future__ import annotations

import struct

from .source import ByteSource

_F32 = struct.Struct(">f")
_F64 = struct.Struct(">d")


def decode_f32_bits(source: ByteSource) -> float:
    """Read a 4-byte big-endian single precision float."""
    return float(_F32.unpack(source.read_exact(4))[0])


def decode_f64_bits(source: ByteSource) -> float:
    """Read an 8-byte big-endian double precision float."""
    return float(_F64.unpack(source.read_exact(8))[0])
