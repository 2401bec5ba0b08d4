"""Schema introspection for Pydantic models.

This module analyzes Pydantic models and type annotations and extracts the
information the model decoder needs: which protocol operation decodes each
field, at what integer or float width, and the element schemas of
containers.
"""

from __future__ import annotations

import enum
import math
import types
from dataclasses import dataclass, field
from typing import Annotated, Any, Iterable, List, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import SchemaError

INT_WIDTHS = (8, 16, 32, 64)
HASHABLE_KINDS = ("bool", "uint", "int", "float", "str")


@dataclass(frozen=True)
class TypeSchema:
    """Decoding plan for a single annotation.

    Attributes:
        kind: One of bool, uint, int, float, str, optional, list, tuple,
            dict, message, enum
        python_type: Concrete Python type produced (list/tuple for
            sequences, the model class for messages, the enum class)
        bits: Integer or float width on the Python side
        args: Element schemas (optional: 1, list: 1, dict: 2, tuple: n)
    """

    kind: str
    python_type: Any
    bits: int = 64
    args: tuple[TypeSchema, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class FieldSchema:
    """Schema information for a single message field.

    Attributes:
        name: Field name
        index: Position of the field in declaration order
        type_schema: How the field's value is decoded
    """

    name: str
    index: int
    type_schema: TypeSchema


def _is_hashable(ts: TypeSchema) -> bool:
    if ts.kind == "tuple":
        return all(_is_hashable(arg) for arg in ts.args)
    # tuple[T, ...] decodes as a sequence but builds a tuple
    if ts.kind == "list" and ts.python_type is tuple:
        return _is_hashable(ts.args[0])
    return ts.kind in HASHABLE_KINDS


def _smallest_width(low: int, high: int, signed: bool) -> int:
    for bits in INT_WIDTHS:
        if signed:
            limit = 1 << (bits - 1)
            if -limit <= low and high < limit:
                return bits
        elif high < 1 << bits:
            return bits
    return 64


def _int_schema(ge: Any, le: Any, extra: dict[str, Any]) -> TypeSchema:
    if "bits" in extra:
        bits = extra["bits"]
        if bits not in INT_WIDTHS:
            raise SchemaError(f"Integer width must be one of {INT_WIDTHS}, got {bits}")
        kind = "int" if extra.get("signed", False) else "uint"
        return TypeSchema(kind, int, bits=bits)

    # Non-negative lower bound means the value travels with unsigned tags
    if ge is not None and ge >= 0:
        bits = _smallest_width(int(ge), int(le), signed=False) if le is not None else 64
        return TypeSchema("uint", int, bits=bits)

    if ge is not None and le is not None:
        return TypeSchema("int", int, bits=_smallest_width(int(ge), int(le), signed=True))
    return TypeSchema("int", int, bits=64)


def _constraints(metadata: Iterable[Any]) -> tuple[Any, Any, dict[str, Any]]:
    ge = None
    le = None
    extra: dict[str, Any] = {}
    for constraint in metadata:
        if isinstance(constraint, FieldInfo):
            nested_ge, nested_le, nested_extra = _constraints(constraint.metadata)
            ge = nested_ge if nested_ge is not None else ge
            le = nested_le if nested_le is not None else le
            if isinstance(constraint.json_schema_extra, dict):
                extra.update(constraint.json_schema_extra)
            extra.update(nested_extra)
            continue
        if getattr(constraint, "ge", None) is not None:
            ge = constraint.ge
        if getattr(constraint, "le", None) is not None:
            le = constraint.le
        # Exclusive bounds only feed integer widths
        if getattr(constraint, "gt", None) is not None:
            ge = math.floor(constraint.gt) + 1
        if getattr(constraint, "lt", None) is not None:
            le = math.ceil(constraint.lt) - 1
    return ge, le, extra


def type_schema(
    annotation: Any,
    metadata: Iterable[Any] = (),
    where: str = "value",
    extra: dict[str, Any] | None = None,
) -> TypeSchema:
    """Build the decoding plan for a type annotation.

    Args:
        annotation: Type annotation (may be Annotated, Optional, generic)
        metadata: Constraint objects attached to the annotation
        where: Field path used in error messages
        extra: Width hints from the field's json_schema_extra

    Returns:
        TypeSchema for the annotation

    Raises:
        SchemaError: If the annotation cannot be decoded from MessagePack
    """
    metadata = list(metadata)

    origin = get_origin(annotation)
    if origin is Annotated:
        inner, *extra_metadata = get_args(annotation)
        return type_schema(inner, metadata + extra_metadata, where, extra)

    args = get_args(annotation)

    # Optional[T] / T | None
    if origin is Union or origin is types.UnionType:
        non_none_args = [arg for arg in args if arg is not type(None)]
        if len(non_none_args) != 1 or len(args) != 2:
            raise SchemaError(f"{where}: only Optional[T] unions are supported")
        inner_schema = type_schema(non_none_args[0], metadata, where, extra)
        return TypeSchema("optional", Optional, args=(inner_schema,))

    if origin is list:
        if len(args) != 1:
            raise SchemaError(f"{where}: list annotations need an element type")
        return TypeSchema("list", list, args=(type_schema(args[0], (), f"{where}[]"),))

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return TypeSchema("list", tuple, args=(type_schema(args[0], (), f"{where}[]"),))
        if not args:
            raise SchemaError(f"{where}: tuple annotations need element types")
        return TypeSchema(
            "tuple",
            tuple,
            args=tuple(type_schema(arg, (), f"{where}[{i}]") for i, arg in enumerate(args)),
        )

    if origin is dict:
        if len(args) != 2:
            raise SchemaError(f"{where}: dict annotations need key and value types")
        key_schema = type_schema(args[0], (), f"{where}.key")
        if not _is_hashable(key_schema):
            raise SchemaError(f"{where}.key: {args[0]} cannot be a dict key")
        return TypeSchema(
            "dict",
            dict,
            args=(key_schema, type_schema(args[1], (), f"{where}.value")),
        )

    if origin is not None:
        raise SchemaError(f"{where}: unsupported generic type {annotation}")

    ge, le, hints = _constraints(metadata)
    hints.update(extra or {})

    # bool before int: bool is an int subclass
    if annotation is bool:
        return TypeSchema("bool", bool)

    if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
        return TypeSchema("enum", annotation)

    if annotation is int:
        return _int_schema(ge, le, hints)

    if annotation is float:
        bits = hints.get("bits", 64)
        if bits not in (32, 64):
            raise SchemaError(f"{where}: float width must be 32 or 64, got {bits}")
        return TypeSchema("float", float, bits=bits)

    if annotation is str:
        return TypeSchema("str", str)

    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return TypeSchema("message", annotation)

    if annotation in (list, tuple, dict):
        raise SchemaError(f"{where}: bare {annotation.__name__} needs element types")

    raise SchemaError(
        f"{where}: unsupported type {annotation}. "
        f"Supported: bool, int, float, str, enum, Optional, list, tuple, dict, messages."
    )


class MessageSchema:
    """Schema information for an entire message.

    This class introspects a Pydantic model and builds the decoding plan for
    each field. Fields decode in declaration order.

    Example:
        >>> schema = MessageSchema.from_model(Telemetry)
        >>> for field in schema.fields:
        ...     print(f"{field.index} {field.name}: {field.type_schema.kind}")
    """

    def __init__(self, model_class: Type[BaseModel]) -> None:
        """Initialize schema from a Pydantic model.

        Args:
            model_class: Pydantic model class to introspect
        """
        self.model_class = model_class
        self.name: str = getattr(model_class, "pullpack_name", None) or model_class.__name__
        self.fields: List[FieldSchema] = []
        self._introspect()

    @classmethod
    def from_model(cls, model_class: Type[BaseModel]) -> MessageSchema:
        """Create a schema from a Pydantic model."""
        return cls(model_class)

    def _introspect(self) -> None:
        """Introspect the model and populate field schemas."""
        for index, (field_name, field_info) in enumerate(self.model_class.model_fields.items()):
            self.fields.append(self._extract_field_schema(index, field_name, field_info))

    def _extract_field_schema(self, index: int, name: str, field_info: FieldInfo) -> FieldSchema:
        annotation = field_info.annotation
        if annotation is None:
            raise SchemaError(f"Field {name} has no type annotation")

        # FixedInt / FixedFloat width hints live in json_schema_extra
        extra = field_info.json_schema_extra if isinstance(field_info.json_schema_extra, dict) else None

        where = f"{self.model_class.__name__}.{name}"
        return FieldSchema(
            name=name,
            index=index,
            type_schema=type_schema(annotation, field_info.metadata, where, extra),
        )

    @property
    def field_count(self) -> int:
        return len(self.fields)
