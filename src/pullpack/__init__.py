"""pullpack: pull-based MessagePack decoding

A Python library that decodes MessagePack straight into native values. The
caller's expected shape drives the decoder through a generic decode
protocol, so no intermediate value tree is ever built.

Key Features:
- Complete tag table for nil, bool, int, float, str, array and map
- One byte of lookahead for optional values
- Explicit errors for truncation, bad tags, bad UTF-8, arity and overflow
- Pydantic-based message modeling for schema-driven decoding

Quick Start:
    >>> from typing import Optional
    >>> from pullpack import BaseMessage, FixedInt, decode
    >>>
    >>> class StatusReport(BaseMessage):
    ...     vehicle_id: int = FixedInt(bits=8)
    ...     depth: float
    ...     label: Optional[str] = None
    >>>
    >>> report = decode(StatusReport, data)

Hand-written routines use the protocol directly:
    >>> from pullpack import decode_with
    >>> decode_with(lambda d: d.decode_map(lambda d, n: [
    ...     (d.decode_map_key(i, lambda d: d.decode_string()),
    ...      d.decode_map_value(i, lambda d: d.decode_u8()))
    ...     for i in range(n)
    ... ]), b"\\x82\\xa1a\\x01\\xa1b\\x02")
    [('a', 1), ('b', 2)]
"""

from __future__ import annotations

from .codec import ByteSource, Decoder, DecodeProtocol, PrimitiveReader, decode, decode_with
from .exceptions import (
    ArityMismatch,
    DecodeError,
    InvalidEncoding,
    InvalidTag,
    NumericOverflow,
    PullpackError,
    SchemaError,
    UnexpectedEndOfStream,
    UnsupportedOperation,
)
from .models import BaseMessage, BoundedInt, FixedFloat, FixedInt

__version__ = "0.1.0"

__all__ = [
    # Core API
    "decode",
    "decode_with",
    "Decoder",
    "DecodeProtocol",
    "PrimitiveReader",
    "ByteSource",
    # Models
    "BaseMessage",
    "BoundedInt",
    "FixedInt",
    "FixedFloat",
    # Exceptions
    "PullpackError",
    "SchemaError",
    "DecodeError",
    "UnexpectedEndOfStream",
    "InvalidTag",
    "InvalidEncoding",
    "ArityMismatch",
    "NumericOverflow",
    "UnsupportedOperation",
    # Version
    "__version__",
]
