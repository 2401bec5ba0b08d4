"""MessagePack tag table.

Every value on the wire starts with a tag byte. Fixed-width families embed a
small value or length in the tag's low bits; extended families are followed
by ``width`` bytes holding the value or length, big-endian.

    0x00-0x7f  positive fixint       0xc0       nil
    0x80-0x8f  fixmap                0xc2/0xc3  false/true
    0x90-0x9f  fixarray              0xca/0xcb  float 32/64
    0xa0-0xbf  fixstr                0xcc-0xcf  uint 8/16/32/64
    0xe0-0xff  negative fixint       0xd0-0xd3  int 8/16/32/64
                                     0xda/0xdb  str 16/32
                                     0xdc/0xdd  array 16/32
                                     0xde/0xdf  map 16/32

Anything else is reserved and never accepted by a reader.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

NIL = 0xC0
FALSE = 0xC2
TRUE = 0xC3
FLOAT32 = 0xCA
FLOAT64 = 0xCB
UINT8 = 0xCC
UINT16 = 0xCD
UINT32 = 0xCE
UINT64 = 0xCF
INT8 = 0xD0
INT16 = 0xD1
INT32 = 0xD2
INT64 = 0xD3
STR16 = 0xDA
STR32 = 0xDB
ARRAY16 = 0xDC
ARRAY32 = 0xDD
MAP16 = 0xDE
MAP32 = 0xDF


class Family(enum.Enum):
    """Format family of a tag byte."""

    NIL = "nil"
    BOOL = "boolean"
    UINT = "unsigned integer"
    INT = "signed integer"
    FLOAT = "float"
    STR = "string"
    ARRAY = "array"
    MAP = "map"
    RESERVED = "reserved"


@dataclass(frozen=True)
class TagInfo:
    """Classification of a single tag byte.

    Attributes:
        tag: The tag byte
        family: Format family
        payload: Value or length embedded in the tag (fixed families and
            booleans), None when the tag is followed by a value or length
        width: Number of bytes following the tag that hold the value or
            length (0 for fixed families)
    """

    tag: int
    family: Family
    payload: int | None = None
    width: int = 0

    @property
    def is_fixed(self) -> bool:
        return self.payload is not None


_EXTENDED: dict[int, tuple[Family, int]] = {
    FLOAT32: (Family.FLOAT, 4),
    FLOAT64: (Family.FLOAT, 8),
    UINT8: (Family.UINT, 1),
    UINT16: (Family.UINT, 2),
    UINT32: (Family.UINT, 4),
    UINT64: (Family.UINT, 8),
    INT8: (Family.INT, 1),
    INT16: (Family.INT, 2),
    INT32: (Family.INT, 4),
    INT64: (Family.INT, 8),
    STR16: (Family.STR, 2),
    STR32: (Family.STR, 4),
    ARRAY16: (Family.ARRAY, 2),
    ARRAY32: (Family.ARRAY, 4),
    MAP16: (Family.MAP, 2),
    MAP32: (Family.MAP, 4),
}


def _build(tag: int) -> TagInfo:
    if tag <= 0x7F:
        return TagInfo(tag, Family.UINT, payload=tag)
    if tag >= 0xE0:
        return TagInfo(tag, Family.INT, payload=tag - 0x100)
    if tag <= 0x8F:
        return TagInfo(tag, Family.MAP, payload=tag & 0x0F)
    if tag <= 0x9F:
        return TagInfo(tag, Family.ARRAY, payload=tag & 0x0F)
    if tag <= 0xBF:
        return TagInfo(tag, Family.STR, payload=tag & 0x1F)
    if tag == NIL:
        return TagInfo(tag, Family.NIL)
    if tag in (FALSE, TRUE):
        return TagInfo(tag, Family.BOOL, payload=tag - FALSE)
    if tag in _EXTENDED:
        family, width = _EXTENDED[tag]
        return TagInfo(tag, family, width=width)
    return TagInfo(tag, Family.RESERVED)


_TABLE: tuple[TagInfo, ...] = tuple(_build(tag) for tag in range(256))


def classify(tag: int) -> TagInfo:
    """Classify a tag byte.

    Args:
        tag: Byte value (0-255)

    Returns:
        TagInfo describing the tag's family and embedded payload or width

    Example:
        >>> classify(0x93)
        TagInfo(tag=147, family=<Family.ARRAY: 'array'>, payload=3, width=0)
        >>> classify(0xcd).width
        2
    """
    return _TABLE[tag]


def describe(tag: int) -> str:
    """Human readable form of a tag byte, e.g. ``0xc0 (nil)``."""
    return f"0x{tag:02x} ({_TABLE[tag].family.value})"
