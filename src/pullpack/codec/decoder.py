"""MessagePack decoder.

This module provides the Decoder, which implements the generic decode
protocol over a byte source, and the decode() function that drives it from
the schema of a Pydantic message, building the message without any
intermediate value tree.
"""

from __future__ import annotations

import logging
from operator import methodcaller
from typing import Any, BinaryIO, Callable, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from ..exceptions import ArityMismatch, DecodeError, UnexpectedEndOfStream, UnsupportedOperation
from . import tags
from .protocol import DecodeProtocol, Element, WithLength
from .reader import PrimitiveReader
from .schema import MessageSchema, TypeSchema
from .source import ByteSource

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

Data = bytes | bytearray | memoryview | BinaryIO


def _as_source(data: Data) -> ByteSource:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return ByteSource.from_bytes(data)
    return ByteSource(data)


class Decoder(DecodeProtocol):
    """Decodes MessagePack values from a byte source on demand.

    A decoder is bound to one source and serves one top-level decode. After
    any DecodeError the decoder is in an undefined position and must be
    discarded.

    Example:
        >>> decoder = Decoder.from_bytes(b"\\x92\\x01\\xa2hi")
        >>> decoder.decode_sequence(lambda d, n: [
        ...     d.decode_sequence_element(0, lambda d: d.decode_u8()),
        ...     d.decode_sequence_element(1, lambda d: d.decode_string()),
        ... ])
        [1, 'hi']
    """

    def __init__(self, source: ByteSource) -> None:
        self._reader = PrimitiveReader(source)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> Decoder:
        return cls(ByteSource.from_bytes(data))

    @property
    def reader(self) -> PrimitiveReader:
        return self._reader

    def position(self) -> int:
        """Return the number of bytes consumed from the source."""
        consumed = self._reader.source.position()
        return consumed - 1 if self._reader.has_lookahead() else consumed

    def at_end(self) -> bool:
        """Check whether the source is exhausted.

        A remaining byte is held in the lookahead, so decoding can continue
        after a False result.
        """
        try:
            self._reader.peek_byte()
        except UnexpectedEndOfStream:
            return True
        return False

    def decode_nil(self) -> None:
        self._reader.read_nil()

    def decode_bool(self) -> bool:
        return self._reader.read_bool()

    def decode_u64(self) -> int:
        return self._reader.read_unsigned()

    def decode_i64(self) -> int:
        return self._reader.read_signed()

    def decode_f32(self) -> float:
        return self._reader.read_f32()

    def decode_f64(self) -> float:
        return self._reader.read_f64()

    def decode_string(self) -> str:
        length = self._reader.read_string_length()
        return self._reader.read_string(length)

    def begin_option(self) -> bool:
        return self._reader.peek_byte() != tags.NIL

    def begin_sequence(self) -> int:
        length = self._reader.read_sequence_length()
        logger.debug("array header: %d elements", length)
        return length

    def begin_map(self) -> int:
        length = self._reader.read_map_length()
        logger.debug("map header: %d entries", length)
        return length

    def begin_struct(self, name: str, field_count: int) -> None:
        actual = self._reader.read_map_length()
        if actual != field_count:
            logger.debug("struct %s arity mismatch: %d != %d", name, actual, field_count)
            raise ArityMismatch(name, field_count, actual)
        logger.debug("struct %s: %d fields", name, field_count)

    def decode_enum(self, name: str, f: Element[T]) -> T:
        raise UnsupportedOperation(
            f"Cannot decode enum {name}: no tagged-union wire representation is defined"
        )

    def decode_enum_variant(self, names: Sequence[str], f: WithLength[T]) -> T:
        raise UnsupportedOperation("Enum variants cannot be decoded")

    def decode_enum_variant_arg(self, index: int, f: Element[T]) -> T:
        raise UnsupportedOperation("Enum variant arguments cannot be decoded")


def decode_with(routine: Callable[[Decoder], T], data: Data) -> T:
    """Run a hand-written decode routine over bytes or a binary stream.

    Args:
        routine: Function that pulls one value out of the decoder
        data: Bytes or a binary file-like object

    Returns:
        Whatever the routine returns

    Raises:
        DecodeError: If the data does not match what the routine expects

    Example:
        >>> decode_with(lambda d: d.decode_option(
        ...     lambda d, present: d.decode_string() if present else d.decode_nil()
        ... ), b"\\xc0") is None
        True
    """
    return routine(Decoder(_as_source(data)))


def decode(message_class: type[M], data: Data, *, allow_trailing: bool = False) -> M:
    """Decode MessagePack data to a Pydantic message.

    The message is read as a struct: a map header whose length equals the
    number of fields, then each field value in declaration order.

    Args:
        message_class: Pydantic message class to decode to
        data: Bytes or a binary file-like object
        allow_trailing: If False, bytes left after the message are an error

    Returns:
        Decoded message instance

    Raises:
        SchemaError: If the message schema cannot be decoded
        DecodeError: If data is truncated, malformed, or doesn't match schema

    Examples:
        ```python
        from typing import Optional
        from pullpack import BaseMessage, FixedInt, decode

        class Reading(BaseMessage):
            sensor: int = FixedInt(bits=8)
            value: float
            note: Optional[str] = None

        reading = decode(Reading, payload)
        ```
    """
    schema = MessageSchema.from_model(message_class)
    decoder = Decoder(_as_source(data))

    logger.debug("decoding %s (%d fields)", schema.name, schema.field_count)
    message = _decode_message(decoder, schema)

    if not allow_trailing and not decoder.at_end():
        raise DecodeError(
            f"Trailing data after {message_class.__name__} at offset {decoder.position()}"
        )

    logger.debug("decoded %s from %d bytes", schema.name, decoder.position())
    return message


def _decode_message(decoder: DecodeProtocol, schema: MessageSchema) -> Any:
    """Decode one message struct and construct the model."""

    def read_fields(d: DecodeProtocol) -> dict[str, Any]:
        values: dict[str, Any] = {}
        for field_schema in schema.fields:
            values[field_schema.name] = d.decode_struct_field(
                field_schema.name,
                field_schema.index,
                lambda d, ts=field_schema.type_schema: _decode_value(d, ts),
            )
        return values

    field_values = decoder.decode_struct(schema.name, schema.field_count, read_fields)

    try:
        return schema.model_class(**field_values)
    except ValidationError as e:
        raise DecodeError(f"Failed to construct {schema.model_class.__name__}: {e}") from e


_UNSIGNED = {
    8: methodcaller("decode_u8"),
    16: methodcaller("decode_u16"),
    32: methodcaller("decode_u32"),
    64: methodcaller("decode_u64"),
}

_SIGNED = {
    8: methodcaller("decode_i8"),
    16: methodcaller("decode_i16"),
    32: methodcaller("decode_i32"),
    64: methodcaller("decode_i64"),
}


def _decode_value(decoder: DecodeProtocol, ts: TypeSchema) -> Any:
    """Decode a single value according to its type schema.

    Args:
        decoder: Protocol to pull from
        ts: Schema information for the value

    Returns:
        Decoded value

    Raises:
        DecodeError: If data is invalid
    """
    kind = ts.kind

    if kind == "bool":
        return decoder.decode_bool()

    if kind == "uint":
        return _UNSIGNED[ts.bits](decoder)

    if kind == "int":
        return _SIGNED[ts.bits](decoder)

    if kind == "float":
        return decoder.decode_f32() if ts.bits == 32 else decoder.decode_f64()

    if kind == "str":
        return decoder.decode_string()

    if kind == "optional":
        (inner,) = ts.args

        def read_option(d: DecodeProtocol, present: bool) -> Any:
            if not present:
                d.decode_nil()
                return None
            return _decode_value(d, inner)

        return decoder.decode_option(read_option)

    if kind == "list":
        (element,) = ts.args

        def read_elements(d: DecodeProtocol, length: int) -> Any:
            return ts.python_type(
                d.decode_sequence_element(i, lambda d: _decode_value(d, element))
                for i in range(length)
            )

        return decoder.decode_sequence(read_elements)

    if kind == "tuple":

        def read_args(d: DecodeProtocol, length: int) -> tuple[Any, ...]:
            if length != len(ts.args):
                raise ArityMismatch("tuple", len(ts.args), length)
            return tuple(
                d.decode_tuple_arg(i, lambda d, arg=arg: _decode_value(d, arg))
                for i, arg in enumerate(ts.args)
            )

        return decoder.decode_tuple(read_args)

    if kind == "dict":
        key_schema, value_schema = ts.args

        def read_entries(d: DecodeProtocol, length: int) -> dict[Any, Any]:
            entries: dict[Any, Any] = {}
            for i in range(length):
                key = d.decode_map_key(i, lambda d: _decode_value(d, key_schema))
                entries[key] = d.decode_map_value(i, lambda d: _decode_value(d, value_schema))
            return entries

        return decoder.decode_map(read_entries)

    if kind == "message":
        return _decode_message(decoder, MessageSchema.from_model(ts.python_type))

    if kind == "enum":
        return decoder.decode_enum(ts.python_type.__name__, lambda d: None)

    raise DecodeError(f"Unsupported value kind {kind}")
