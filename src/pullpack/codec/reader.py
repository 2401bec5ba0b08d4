"""Primitive MessagePack reads.

This module provides PrimitiveReader, which reads tag bytes, fixed-width
big-endian integers and raw byte runs, and keeps one byte of lookahead for
optional-value decoding. It also provides the narrowing checks used when a
64-bit decoded integer is requested at a smaller width.
"""

from __future__ import annotations

from ..exceptions import InvalidEncoding, InvalidTag, NumericOverflow, UnexpectedEndOfStream
from . import tags
from .floats import decode_f32_bits, decode_f64_bits
from .source import ByteSource
from .tags import Family, TagInfo


def narrow_unsigned(value: int, bits: int) -> int:
    """Check that value fits an unsigned integer of the given width.

    Raises:
        NumericOverflow: If value is negative or needs more than ``bits`` bits
    """
    if value < 0 or value >= 1 << bits:
        raise NumericOverflow(value, bits, signed=False)
    return value


def narrow_signed(value: int, bits: int) -> int:
    """Check that value fits a two's complement integer of the given width.

    Raises:
        NumericOverflow: If value is outside [-2**(bits-1), 2**(bits-1))
    """
    limit = 1 << (bits - 1)
    if value < -limit or value >= limit:
        raise NumericOverflow(value, bits, signed=True)
    return value


class PrimitiveReader:
    """Reads MessagePack primitives from a ByteSource.

    The reader holds at most one byte of lookahead. A peeked byte is returned
    by the next read instead of pulling from the source, exactly once.

    Example:
        >>> reader = PrimitiveReader(ByteSource.from_bytes(b"\\xcd\\x01\\x00"))
        >>> hex(reader.peek_byte())
        '0xcd'
        >>> reader.read_unsigned()
        256
    """

    def __init__(self, source: ByteSource) -> None:
        self._source = source
        self._next_byte: int | None = None

    @property
    def source(self) -> ByteSource:
        return self._source

    def peek_byte(self) -> int:
        """Return the next byte without consuming it.

        Raises:
            UnexpectedEndOfStream: If the source is exhausted
        """
        if self._next_byte is None:
            self._next_byte = self._source.read_byte()
            if self._next_byte is None:
                raise UnexpectedEndOfStream("Unexpected end of stream while peeking a tag")
        return self._next_byte

    def read_byte(self) -> int:
        """Read and consume the next byte, preferring the lookahead.

        Raises:
            UnexpectedEndOfStream: If the source is exhausted
        """
        if self._next_byte is not None:
            byte = self._next_byte
            self._next_byte = None
            return byte

        byte = self._source.read_byte()
        if byte is None:
            raise UnexpectedEndOfStream("Unexpected end of stream while reading a tag")
        return byte

    def has_lookahead(self) -> bool:
        return self._next_byte is not None

    def _read_tag(self, family: Family) -> TagInfo:
        tag = self.read_byte()
        info = tags.classify(tag)
        if info.family is not family:
            raise InvalidTag(family.value, tag, tags.describe(tag))
        return info

    def _read_width(self, width: int, signed: bool = False) -> int:
        # Only called right after a tag was consumed, so the lookahead is empty.
        source = self._source
        if signed:
            if width == 1:
                return source.read_i8()
            if width == 2:
                return source.read_be_i16()
            if width == 4:
                return source.read_be_i32()
            return source.read_be_i64()
        if width == 1:
            return source.read_u8()
        if width == 2:
            return source.read_be_u16()
        if width == 4:
            return source.read_be_u32()
        return source.read_be_u64()

    def read_unsigned(self) -> int:
        """Read a positive fixint or uint 8/16/32/64.

        Raises:
            InvalidTag: If the tag is not an unsigned integer tag
        """
        info = self._read_tag(Family.UINT)
        if info.payload is not None:
            return info.payload
        return self._read_width(info.width)

    def read_signed(self) -> int:
        """Read a negative fixint or int 8/16/32/64.

        Positive fixints are unsigned tags and are rejected here.

        Raises:
            InvalidTag: If the tag is not a signed integer tag
        """
        info = self._read_tag(Family.INT)
        if info.payload is not None:
            return info.payload
        return self._read_width(info.width, signed=True)

    def read_nil(self) -> None:
        self._read_tag(Family.NIL)

    def read_bool(self) -> bool:
        info = self._read_tag(Family.BOOL)
        return info.tag == tags.TRUE

    def read_f32(self) -> float:
        tag = self.read_byte()
        if tag != tags.FLOAT32:
            raise InvalidTag("float32", tag, tags.describe(tag))
        return decode_f32_bits(self._source)

    def read_f64(self) -> float:
        tag = self.read_byte()
        if tag != tags.FLOAT64:
            raise InvalidTag("float64", tag, tags.describe(tag))
        return decode_f64_bits(self._source)

    def read_raw(self, length: int) -> bytes:
        """Read exactly length bytes.

        Raises:
            UnexpectedEndOfStream: If fewer than length bytes remain
        """
        if length == 0:
            return b""
        if self._next_byte is not None:
            head = bytes([self.read_byte()])
            return head + self._source.read_exact(length - 1)
        return self._source.read_exact(length)

    def read_string(self, length: int) -> str:
        """Read exactly length bytes and decode them as UTF-8.

        Raises:
            UnexpectedEndOfStream: If fewer than length bytes remain
            InvalidEncoding: If the bytes are not valid UTF-8
        """
        raw = self.read_raw(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidEncoding(f"Invalid UTF-8 in {length}-byte string: {e}") from e

    def read_string_length(self) -> int:
        info = self._read_tag(Family.STR)
        if info.payload is not None:
            return info.payload
        return self._read_width(info.width)

    def read_sequence_length(self) -> int:
        """Read a fixarray, array 16 or array 32 header.

        Raises:
            InvalidTag: If the tag is not an array header
        """
        tag = self.read_byte()
        info = tags.classify(tag)
        if info.family is not Family.ARRAY:
            raise InvalidTag("sequence length", tag, tags.describe(tag))
        if info.payload is not None:
            return info.payload
        return self._read_width(info.width)

    def read_map_length(self) -> int:
        """Read a fixmap, map 16 or map 32 header.

        Raises:
            InvalidTag: If the tag is not a map header
        """
        tag = self.read_byte()
        info = tags.classify(tag)
        if info.family is not Family.MAP:
            raise InvalidTag("map length", tag, tags.describe(tag))
        if info.payload is not None:
            return info.payload
        return self._read_width(info.width)
