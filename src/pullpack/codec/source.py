"""Byte source for the decoder.

This module provides ByteSource, the byte-level reader the decoder pulls from.
All multi-byte integers are big-endian, as MessagePack requires.
"""

from __future__ import annotations

import io
import struct
from typing import BinaryIO

from ..exceptions import UnexpectedEndOfStream

_U16 = struct.Struct(">H")
_U32 = struct.Struct(">I")
_U64 = struct.Struct(">Q")
_I8 = struct.Struct(">b")
_I16 = struct.Struct(">h")
_I32 = struct.Struct(">i")
_I64 = struct.Struct(">q")

# Largest single read() issued to the stream
CHUNK_SIZE = 65536


class ByteSource:
    """Reads bytes on demand from a binary stream.

    The source never buffers ahead of what the caller asks for, so a decoder
    reading from a socket or pipe consumes exactly the bytes of one value.

    Example:
        >>> source = ByteSource.from_bytes(b"\\x00\\x2a\\xff")
        >>> source.read_be_u16()
        42
        >>> source.read_byte()
        255
        >>> source.read_byte() is None
        True
    """

    def __init__(self, stream: BinaryIO) -> None:
        """Initialize a byte source over a binary stream.

        Args:
            stream: Object with a ``read(n)`` method returning bytes
        """
        self._stream = stream
        self._position = 0

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> ByteSource:
        """Create a byte source over an in-memory buffer."""
        return cls(io.BytesIO(bytes(data)))

    def read_byte(self) -> int | None:
        """Read a single byte.

        Returns:
            The byte value, or None at end of stream
        """
        chunk = self._stream.read(1)
        if not chunk:
            return None
        self._position += 1
        return chunk[0]

    def read_exact(self, num_bytes: int) -> bytes:
        """Read exactly num_bytes bytes.

        Args:
            num_bytes: Number of bytes to read

        Returns:
            Bytes read from the stream

        Raises:
            UnexpectedEndOfStream: If the stream ends before num_bytes are read
        """
        if num_bytes < 0:
            raise ValueError(f"num_bytes must be non-negative, got {num_bytes}")

        result = bytearray()
        while len(result) < num_bytes:
            chunk = self._stream.read(min(num_bytes - len(result), CHUNK_SIZE))
            if not chunk:
                break
            result.extend(chunk)

        self._position += len(result)
        if len(result) < num_bytes:
            raise UnexpectedEndOfStream(
                f"Not enough bytes at offset {self._position}: "
                f"need {num_bytes}, have {len(result)}"
            )
        return bytes(result)

    def read_u8(self) -> int:
        return self.read_exact(1)[0]

    def read_be_u16(self) -> int:
        return _U16.unpack(self.read_exact(2))[0]

    def read_be_u32(self) -> int:
        return _U32.unpack(self.read_exact(4))[0]

    def read_be_u64(self) -> int:
        return _U64.unpack(self.read_exact(8))[0]

    def read_i8(self) -> int:
        return _I8.unpack(self.read_exact(1))[0]

    def read_be_i16(self) -> int:
        return _I16.unpack(self.read_exact(2))[0]

    def read_be_i32(self) -> int:
        return _I32.unpack(self.read_exact(4))[0]

    def read_be_i64(self) -> int:
        return _I64.unpack(self.read_exact(8))[0]

    def position(self) -> int:
        """Return the number of bytes consumed so far.

        Returns:
            Current read position in bytes
        """
        return self._position
