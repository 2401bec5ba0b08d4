"""Base message class and pullpack-specific Pydantic configuration.

This module provides the BaseMessage class that structured records decoded
with pullpack should inherit from.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class BaseMessage(BaseModel):
    """Base class for all pullpack messages.

    A message travels as a MessagePack map whose length equals the number of
    fields, followed by the field values in declaration order. Field
    annotations select the decode operation for each value; integer and
    float widths can be pinned with FixedInt / FixedFloat.

    Example:
        >>> from typing import ClassVar, Optional
        >>> class Telemetry(BaseMessage):
        ...     vehicle_id: int = FixedInt(bits=16)
        ...     depth: float
        ...     label: Optional[str] = None
        ...
        ...     pullpack_name: ClassVar[Optional[str]] = "telemetry"

    Attributes:
        pullpack_name: Struct name reported to the decode protocol
            (defaults to the class name)
    """

    model_config = ConfigDict(
        # Decoded values already have the right Python types
        strict=False,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    pullpack_name: ClassVar[str | None] = None
