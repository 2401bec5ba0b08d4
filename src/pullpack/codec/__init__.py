"""Pull-based MessagePack decoding for pullpack.

This module provides the byte source, the tag table, the primitive reader
and the generic decode protocol, plus the schema-driven decode() for
Pydantic messages.
"""

from __future__ import annotations

from .decoder import Decoder, decode, decode_with
from .protocol import DecodeProtocol
from .reader import PrimitiveReader, narrow_signed, narrow_unsigned
from .schema import FieldSchema, MessageSchema, TypeSchema
from .source import ByteSource
from .tags import Family, TagInfo, classify

__all__ = [
    "decode",
    "decode_with",
    "Decoder",
    "DecodeProtocol",
    "PrimitiveReader",
    "ByteSource",
    "Family",
    "TagInfo",
    "classify",
    "narrow_signed",
    "narrow_unsigned",
    "MessageSchema",
    "FieldSchema",
    "TypeSchema",
]
