"""Runtime shape descriptors for bytevec serialization.

These dataclasses describe how a value is laid out in a buffer. They carry no
encoding logic themselves; the codecs register one implementation per
descriptor class with the dispatchers in :mod:`bytevec.proto.dispatch`.

A :class:`~bytevec.proto.serialization.Struct` subclass may be used anywhere a shape
is accepted and stands for the record derived from its fields.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum, auto
from typing import Any, TypeAlias


class ScalarKind(StrEnum):
    """Interpretation of a fixed-width scalar."""

    UNSIGNED = auto()
    SIGNED = auto()
    FLOAT = auto()
    CHAR = auto()


class Shape:
    """Base class for shape descriptors."""

    __slots__ = ()


ShapeLike: TypeAlias = Shape | type


@dataclass(frozen=True, slots=True)
class Primitive(Shape):
    """A fixed-width scalar with no length prefix."""

    name: str
    size: int
    kind: ScalarKind


@dataclass(frozen=True, slots=True)
class Text(Shape):
    """UTF-8 text that fills the whole slice handed to it."""


@dataclass(frozen=True, slots=True)
class Bytes(Shape):
    """Raw bytes that fill the whole slice handed to them."""


@dataclass(frozen=True, slots=True)
class Sequence(Shape):
    """An ordered homogeneous collection."""

    element: ShapeLike
    builder: Callable[[list[Any]], Any] = list


@dataclass(frozen=True, slots=True)
class SetOf(Shape):
    """An unordered collection of unique elements."""

    element: ShapeLike
    builder: Callable[[list[Any]], Any] = set


@dataclass(frozen=True, slots=True)
class MapOf(Shape):
    """An associative map, written as alternating key and value elements."""

    key: ShapeLike
    value: ShapeLike
    builder: Callable[[list[tuple[Any, Any]]], Any] = dict


@dataclass(frozen=True, slots=True)
class Tuple(Shape):
    """A fixed-arity heterogeneous tuple, laid out like a record."""

    items: tuple[ShapeLike, ...]


@dataclass(frozen=True, slots=True)
class RecordField:
    """A field that is written to and read from the stream."""

    name: str
    shape: ShapeLike
    accessor: Callable[[Any], Any] | None = None

    def get(self, value: Any) -> Any:
        if self.accessor is not None:
            return self.accessor(value)
        return getattr(value, self.name)


@dataclass(frozen=True, slots=True)
class SkippedField:
    """A field of the target structure that never touches the stream."""

    name: str
    default_factory: Callable[[], Any]


@dataclass(frozen=True, slots=True)
class Record(Shape):
    """A fixed-arity record of named fields.

    ``fields`` are the declared fields, in wire order. ``skipped`` are the
    remaining fields of the target structure; on decode they are filled from
    their default factory. ``factory`` receives every field as a keyword
    argument; without one the decoded record is a ``dict``.
    """

    name: str
    fields: tuple[RecordField, ...]
    factory: Callable[..., Any] | None = None
    skipped: tuple[SkippedField, ...] = ()


U8 = Primitive("u8", 1, ScalarKind.UNSIGNED)
U16 = Primitive("u16", 2, ScalarKind.UNSIGNED)
U32 = Primitive("u32", 4, ScalarKind.UNSIGNED)
U64 = Primitive("u64", 8, ScalarKind.UNSIGNED)
I8 = Primitive("i8", 1, ScalarKind.SIGNED)
I16 = Primitive("i16", 2, ScalarKind.SIGNED)
I32 = Primitive("i32", 4, ScalarKind.SIGNED)
I64 = Primitive("i64", 8, ScalarKind.SIGNED)
F32 = Primitive("f32", 4, ScalarKind.FLOAT)
F64 = Primitive("f64", 8, ScalarKind.FLOAT)
CHAR = Primitive("char", 4, ScalarKind.CHAR)
TEXT = Text()
BYTES = Bytes()

PRIMITIVES: dict[str, Primitive] = {
    p.name: p for p in (U8, U16, U32, U64, I8, I16, I32, I64, F32, F64, CHAR)
}

__all__ = [
    "BYTES",
    "CHAR",
    "F32",
    "F64",
    "I8",
    "I16",
    "I32",
    "I64",
    "PRIMITIVES",
    "TEXT",
    "U8",
    "U16",
    "U32",
    "U64",
    "Bytes",
    "MapOf",
    "Primitive",
    "Record",
    "RecordField",
    "ScalarKind",
    "Sequence",
    "SetOf",
    "Shape",
    "ShapeLike",
    "SkippedField",
    "Text",
    "Tuple",
]
