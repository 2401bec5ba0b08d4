"""Exception hierarchy for pullpack.

All exceptions inherit from PullpackError for easy catching of any
pullpack-specific error. Wire-level failures are DecodeError subclasses;
none of them is recoverable, a decoder that raised one must be discarded.
"""

from __future__ import annotations


class PullpackError(Exception):
    """Base exception for all pullpack errors."""

    pass


class SchemaError(PullpackError):
    """Raised when a message model cannot be decoded from MessagePack.

    Examples:
        - Unsupported field annotation (bytes, non-Optional unions)
        - Conflicting width metadata on a field
    """

    pass


class DecodeError(PullpackError):
    """Raised when decoding MessagePack data fails.

    Examples:
        - Truncated data (insufficient bytes)
        - Tag byte of the wrong format family
        - Trailing bytes after the top-level value
    """

    pass


class UnexpectedEndOfStream(DecodeError):
    """The byte source ran out in the middle of a value."""

    pass


class InvalidTag(DecodeError):
    """A tag byte does not belong to the format family being read."""

    def __init__(self, context: str, tag: int, description: str | None = None) -> None:
        self.context = context
        self.tag = tag
        observed = description if description is not None else f"0x{tag:02x}"
        super().__init__(f"expected {context}, got {observed}")


class InvalidEncoding(DecodeError):
    """String bytes are not well-formed UTF-8 text."""

    pass


class ArityMismatch(DecodeError):
    """A struct's field count disagrees with the wire map length."""

    def __init__(self, name: str, expected: int, actual: int) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"{name}: expected {expected} fields, wire declares {actual}")


class NumericOverflow(DecodeError):
    """A decoded integer does not fit the requested width."""

    def __init__(self, value: int, bits: int, signed: bool) -> None:
        self.value = value
        self.bits = bits
        self.signed = signed
        kind = "i" if signed else "u"
        super().__init__(f"value {value} does not fit in {kind}{bits}")


class UnsupportedOperation(DecodeError):
    """Raised for protocol operations this decoder does not implement."""

    pass
