"""Field type helpers.

This module provides convenience functions for pinning the wire width of
numeric message fields.
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo


def BoundedInt(*, ge: int | None = None, le: int | None = None, **kwargs: Any) -> FieldInfo:
    """Create a bounded integer field.

    This is a convenience wrapper around Pydantic's Field(). A field with
    ``ge >= 0`` decodes from unsigned tags, any other from signed tags, at the
    smallest of 8/16/32/64 bits that holds both bounds.

    Args:
        ge: Minimum value (inclusive)
        le: Maximum value (inclusive)
        **kwargs: Additional Field() arguments (description, default, etc.)

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class Message(BaseMessage):
        ...     channel: int = BoundedInt(ge=0, le=255)    # u8
        ...     offset: int = BoundedInt(ge=-1000, le=1000)  # i16
    """
    return cast(FieldInfo, Field(ge=ge, le=le, **kwargs))


def FixedInt(*, bits: int, signed: bool = False, **kwargs: Any) -> FieldInfo:
    """Create a fixed-width integer field.

    Args:
        bits: Number of bits (8, 16, 32 or 64)
        signed: Whether the integer travels with signed tags (default False)
        **kwargs: Additional Field() arguments

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Raises:
        ValueError: If bits is not a supported width

    Example:
        >>> class Message(BaseMessage):
        ...     temperature: int = FixedInt(bits=16, signed=True)

    Note:
        A decoded value that does not fit ``bits`` raises NumericOverflow.
    """
    if bits not in (8, 16, 32, 64):
        raise ValueError("bits must be 8, 16, 32 or 64")

    return cast(FieldInfo, Field(json_schema_extra={"bits": bits, "signed": signed}, **kwargs))


def FixedFloat(*, bits: int = 64, **kwargs: Any) -> FieldInfo:
    """Create a float field decoded as float32 or float64.

    Args:
        bits: 32 or 64 (default 64)
        **kwargs: Additional Field() arguments

    Raises:
        ValueError: If bits is not 32 or 64

    Example:
        >>> class Message(BaseMessage):
        ...     heading: float = FixedFloat(bits=32)
    """
    if bits not in (32, 64):
        raise ValueError("bits must be 32 or 64")

    return cast(FieldInfo, Field(json_schema_extra={"bits": bits}, **kwargs))
