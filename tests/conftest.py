"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import struct
from typing import Callable

import pytest


def _pack_signed(value: int) -> bytes:
    """Encode an integer with signed tags only (negative fixint or int 8-64)."""
    if -32 <= value < 0:
        return bytes([value & 0xFF])
    for tag, fmt, bits in ((0xD0, ">b", 8), (0xD1, ">h", 16), (0xD2, ">i", 32)):
        limit = 1 << (bits - 1)
        if -limit <= value < limit:
            return bytes([tag]) + struct.pack(fmt, value)
    return b"\xd3" + struct.pack(">q", value)


def _pack_str(text: str) -> bytes:
    """Encode a string with fixstr, str 16 or str 32 headers."""
    raw = text.encode("utf-8")
    if len(raw) < 32:
        return bytes([0xA0 | len(raw)]) + raw
    if len(raw) < 1 << 16:
        return b"\xda" + struct.pack(">H", len(raw)) + raw
    return b"\xdb" + struct.pack(">I", len(raw)) + raw


@pytest.fixture(scope="session")
def pack_signed() -> Callable[[int], bytes]:
    """Encoder for signed integers as written for signed fields."""
    return _pack_signed


@pytest.fixture(scope="session")
def pack_str() -> Callable[[str], bytes]:
    """Encoder for strings restricted to the supported string headers."""
    return _pack_str


@pytest.fixture
def greeting_map() -> bytes:
    """Two-entry map {"a": 1, "b": 2}."""
    return b"\x82\xa1a\x01\xa1b\x02"
