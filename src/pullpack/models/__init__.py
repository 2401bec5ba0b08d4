"""Message modeling for pullpack.

This module provides the BaseMessage class and field helpers for defining
records that decode straight from MessagePack.
"""

from __future__ import annotations

from .base import BaseMessage
from .fields import BoundedInt, FixedFloat, FixedInt

__all__ = [
    "BaseMessage",
    "BoundedInt",
    "FixedFloat",
    "FixedInt",
]
