"""Unit tests for schema introspection."""

from __future__ import annotations

import enum
from typing import Annotated, ClassVar, Optional, Union

import pytest
from pydantic import Field

from pullpack import BaseMessage, BoundedInt, FixedFloat, FixedInt, SchemaError
from pullpack.codec.schema import MessageSchema, TypeSchema, type_schema


class Mode(enum.Enum):
    """Test enum."""

    IDLE = 1
    ACTIVE = 2


class Widths(BaseMessage):
    """Message covering integer and float width selection."""

    small: int = BoundedInt(ge=0, le=255)
    medium: int = BoundedInt(ge=0, le=256)
    offset: int = BoundedInt(ge=-1000, le=1000)
    counter: int = Field(ge=0)
    plain: int
    pinned: int = FixedInt(bits=32, signed=True)
    heading: float = FixedFloat(bits=32)
    depth: float


class Nested(BaseMessage):
    """Message covering container annotations."""

    label: Optional[str] = None
    channel: Optional[int] = FixedInt(bits=8, default=None)
    samples: list[Annotated[int, Field(ge=0, le=100)]]
    history: tuple[float, ...]
    pair: tuple[bool, str]
    table: dict[str, list[int]]
    child: Widths
    mode: Mode

    pullpack_name: ClassVar[Optional[str]] = "nested"


class TestWidths:
    """Test integer and float width selection."""

    @pytest.fixture
    def schema(self) -> dict[str, TypeSchema]:
        return {f.name: f.type_schema for f in MessageSchema.from_model(Widths).fields}

    def test_unsigned_from_bounds(self, schema: dict[str, TypeSchema]) -> None:
        assert schema["small"] == TypeSchema("uint", int, bits=8)
        assert schema["medium"] == TypeSchema("uint", int, bits=16)
        assert schema["counter"] == TypeSchema("uint", int, bits=64)

    def test_signed_from_bounds(self, schema: dict[str, TypeSchema]) -> None:
        assert schema["offset"] == TypeSchema("int", int, bits=16)
        assert schema["plain"] == TypeSchema("int", int, bits=64)

    def test_exclusive_bounds(self) -> None:
        assert type_schema(Annotated[int, Field(gt=-1)]) == TypeSchema("uint", int, bits=64)
        assert type_schema(Annotated[int, Field(gt=-1, lt=256)]) == TypeSchema("uint", int, bits=8)
        assert type_schema(Annotated[int, Field(gt=-129, lt=128)]) == TypeSchema("int", int, bits=8)
        assert type_schema(Annotated[int, Field(ge=0, lt=65537)]) == TypeSchema("uint", int, bits=32)

    def test_fixed_int(self, schema: dict[str, TypeSchema]) -> None:
        assert schema["pinned"] == TypeSchema("int", int, bits=32)

    def test_floats(self, schema: dict[str, TypeSchema]) -> None:
        assert schema["heading"].bits == 32
        assert schema["depth"] == TypeSchema("float", float, bits=64)


class TestMessageSchema:
    """Test whole-message introspection."""

    def test_field_order(self) -> None:
        schema = MessageSchema.from_model(Widths)

        assert schema.name == "Widths"
        assert schema.field_count == 8
        assert [f.index for f in schema.fields] == list(range(8))
        assert schema.fields[0].name == "small"

    def test_containers(self) -> None:
        fields = {f.name: f.type_schema for f in MessageSchema.from_model(Nested).fields}

        assert fields["label"].kind == "optional"
        assert fields["label"].args == (TypeSchema("str", str),)
        assert fields["channel"].args == (TypeSchema("uint", int, bits=8),)
        assert fields["samples"] == TypeSchema("list", list, args=(TypeSchema("uint", int, bits=8),))
        assert fields["history"].kind == "list"
        assert fields["history"].python_type is tuple
        assert fields["pair"].kind == "tuple"
        assert [a.kind for a in fields["pair"].args] == ["bool", "str"]
        assert fields["table"].args[1].kind == "list"
        assert fields["child"] == TypeSchema("message", Widths)
        assert fields["mode"] == TypeSchema("enum", Mode)

    def test_tuple_dict_keys(self) -> None:
        pair_key = type_schema(dict[tuple[int, str], float])
        variadic_key = type_schema(dict[tuple[int, ...], str])

        assert pair_key.args[0].kind == "tuple"
        assert variadic_key.args[0] == TypeSchema("list", tuple, args=(TypeSchema("int", int),))

    def test_custom_name(self) -> None:
        assert MessageSchema.from_model(Nested).name == "nested"


class TestUnsupported:
    """Test annotations that cannot be decoded."""

    @pytest.mark.parametrize(
        "annotation",
        [
            bytes,
            Union[int, str],
            Optional[Union[int, str]],
            list,
            dict[list[int], int],
            dict[tuple[list[int], int], int],
            dict[tuple[dict[str, int], ...], int],
            dict[tuple[int, tuple[str, list[int]]], int],
            set[int],
        ],
    )
    def test_rejected(self, annotation: object) -> None:
        with pytest.raises(SchemaError):
            type_schema(annotation)

    def test_unhashable_tuple_key_names_the_key(self) -> None:
        with pytest.raises(SchemaError, match="table.key"):
            type_schema(dict[tuple[list[int], int], int], where="table")

    def test_bad_int_width(self) -> None:
        with pytest.raises(SchemaError, match="width"):
            type_schema(int, extra={"bits": 12})

    def test_bytes_field(self) -> None:
        class Blob(BaseMessage):
            payload: bytes

        with pytest.raises(SchemaError, match="Blob.payload"):
            MessageSchema.from_model(Blob)


class TestFieldHelpers:
    """Test field helper validation."""

    def test_fixed_int_width(self) -> None:
        with pytest.raises(ValueError, match="bits"):
            FixedInt(bits=24)

    def test_fixed_float_width(self) -> None:
        with pytest.raises(ValueError, match="bits"):
            FixedFloat(bits=16)
