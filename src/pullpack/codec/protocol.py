"""Generic decode protocol.

A structured type decodes itself by calling these operations in the order of
its own schema. Primitives are returned directly. Compound values first yield
their length or arity, then the caller decodes one element, entry or field at
a time, recursing back into the same protocol. Nothing is parsed ahead of the
caller beyond the one-byte lookahead needed by ``decode_option``.

Index and name arguments are informational only: position in the stream is
determined entirely by call order.

Example:
    >>> def read_point(d: DecodeProtocol) -> tuple[int, int]:
    ...     return d.decode_struct("Point", 2, lambda d: (
    ...         d.decode_struct_field("x", 0, lambda d: d.decode_i32()),
    ...         d.decode_struct_field("y", 1, lambda d: d.decode_i32()),
    ...     ))
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Sequence, TypeVar

from ..exceptions import InvalidEncoding
from .reader import narrow_signed, narrow_unsigned

T = TypeVar("T")

Element = Callable[["DecodeProtocol"], T]
WithLength = Callable[["DecodeProtocol", int], T]
WithPresence = Callable[["DecodeProtocol", bool], T]


class DecodeProtocol(ABC):
    """Operations a decode routine calls to pull values out of a stream."""

    # Primitives

    @abstractmethod
    def decode_nil(self) -> None:
        """Consume a nil value."""

    @abstractmethod
    def decode_bool(self) -> bool:
        """Decode a boolean."""

    @abstractmethod
    def decode_u64(self) -> int:
        """Decode an unsigned integer of any wire width."""

    @abstractmethod
    def decode_i64(self) -> int:
        """Decode a signed integer of any wire width."""

    @abstractmethod
    def decode_f32(self) -> float:
        """Decode a single precision float."""

    @abstractmethod
    def decode_f64(self) -> float:
        """Decode a double precision float."""

    @abstractmethod
    def decode_string(self) -> str:
        """Decode a UTF-8 string."""

    # Compound headers

    @abstractmethod
    def begin_option(self) -> bool:
        """Report whether an optional value is present without consuming it."""

    @abstractmethod
    def begin_sequence(self) -> int:
        """Consume an array header and return its length."""

    @abstractmethod
    def begin_map(self) -> int:
        """Consume a map header and return its entry count."""

    @abstractmethod
    def begin_struct(self, name: str, field_count: int) -> None:
        """Consume a struct header, checking its arity."""

    # Tagged unions

    @abstractmethod
    def decode_enum(self, name: str, f: Element[T]) -> T:
        ...

    @abstractmethod
    def decode_enum_variant(self, names: Sequence[str], f: WithLength[T]) -> T:
        ...

    @abstractmethod
    def decode_enum_variant_arg(self, index: int, f: Element[T]) -> T:
        ...

    # Positional hooks, called before each element is decoded

    def sequence_element(self, index: int) -> None:
        pass

    def map_key(self, index: int) -> None:
        pass

    def map_value(self, index: int) -> None:
        pass

    def struct_field(self, name: str, index: int) -> None:
        pass

    # Narrowed primitives

    def decode_u8(self) -> int:
        return narrow_unsigned(self.decode_u64(), 8)

    def decode_u16(self) -> int:
        return narrow_unsigned(self.decode_u64(), 16)

    def decode_u32(self) -> int:
        return narrow_unsigned(self.decode_u64(), 32)

    def decode_uint(self) -> int:
        return self.decode_u64()

    def decode_i8(self) -> int:
        return narrow_signed(self.decode_i64(), 8)

    def decode_i16(self) -> int:
        return narrow_signed(self.decode_i64(), 16)

    def decode_i32(self) -> int:
        return narrow_signed(self.decode_i64(), 32)

    def decode_int(self) -> int:
        return self.decode_i64()

    def decode_char(self) -> str:
        """Decode a string and return its first character.

        Raises:
            InvalidEncoding: If the string is empty
        """
        text = self.decode_string()
        if not text:
            raise InvalidEncoding("Expected a non-empty string for a char")
        return text[0]

    # Continuation-style compound decoding

    def decode_option(self, f: WithPresence[T]) -> T:
        """Decode an optional value.

        ``f`` receives ``present=False`` when the next value is nil; the nil
        byte is still unread and ``f`` is expected to consume it with
        ``decode_nil``. Otherwise ``f`` receives ``present=True`` and decodes
        the value itself.
        """
        return f(self, self.begin_option())

    def decode_sequence(self, f: WithLength[T]) -> T:
        """Decode an array; ``f`` must decode exactly ``length`` elements."""
        return f(self, self.begin_sequence())

    def decode_sequence_element(self, index: int, f: Element[T]) -> T:
        self.sequence_element(index)
        return f(self)

    def decode_map(self, f: WithLength[T]) -> T:
        """Decode a map; ``f`` must decode a key then a value per entry."""
        return f(self, self.begin_map())

    def decode_map_key(self, index: int, f: Element[T]) -> T:
        self.map_key(index)
        return f(self)

    def decode_map_value(self, index: int, f: Element[T]) -> T:
        self.map_value(index)
        return f(self)

    def decode_struct(self, name: str, field_count: int, f: Element[T]) -> T:
        """Decode a struct of exactly field_count fields.

        Structs travel as maps whose length equals the field count; the
        fields follow in declared order.

        Raises:
            ArityMismatch: If the wire map length differs from field_count
        """
        self.begin_struct(name, field_count)
        return f(self)

    def decode_struct_field(self, name: str, index: int, f: Element[T]) -> T:
        self.struct_field(name, index)
        return f(self)

    def decode_tuple(self, f: WithLength[T]) -> T:
        return self.decode_sequence(f)

    def decode_tuple_arg(self, index: int, f: Element[T]) -> T:
        return self.decode_sequence_element(index, f)

    def decode_tuple_struct(self, name: str, f: WithLength[T]) -> T:
        return self.decode_tuple(f)

    def decode_tuple_struct_arg(self, index: int, f: Element[T]) -> T:
        return self.decode_tuple_arg(index, f)

    def decode_enum_struct_variant(self, names: Sequence[str], f: WithLength[T]) -> T:
        return self.decode_enum_variant(names, f)

    def decode_enum_struct_variant_field(self, name: str, index: int, f: Element[T]) -> T:
        return self.decode_enum_variant_arg(index, f)
