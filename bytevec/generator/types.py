"""Type definitions for schema parsing and code generation."""

from dataclasses import dataclass, field
from typing import Any

from dataclasses_json import DataClassJsonMixin


@dataclass
class SchemaType(DataClassJsonMixin):
    """Represents a primitive, generic or struct type.

    For generics (list, set, map, tuple) ``args`` holds the type arguments;
    it is empty for everything else.
    """

    name: str
    args: list["SchemaType"] = field(default_factory=list)

    def __str__(self) -> str:
        if not self.args:
            return self.name
        return f"{self.name}<{', '.join(str(a) for a in self.args)}>"


@dataclass
class SchemaAnnotation(DataClassJsonMixin):
    """Represents an annotation on a schema element."""

    name: str
    arguments: list[Any]


@dataclass
class SchemaMember(DataClassJsonMixin):
    """Represents a member of a struct.

    Members annotated with ``@skip`` are part of the generated class but are
    never written to or read from the stream.
    """

    type: SchemaType
    name: str
    value: Any | None
    annotations: list[SchemaAnnotation]

    @property
    def skipped(self) -> bool:
        return any(a.name == "skip" for a in self.annotations)


@dataclass
class SchemaStruct(DataClassJsonMixin):
    """Represents a struct type definition."""

    members: list[SchemaMember]
    name: str

    @property
    def declared(self) -> list[SchemaMember]:
        return [m for m in self.members if not m.skipped]


PRIMITIVE_TYPES = frozenset(
    [
        "u8",
        "u16",
        "u32",
        "u64",
        "i8",
        "i16",
        "i32",
        "i64",
        "f32",
        "f64",
        "char",
        "string",
        "bytes",
    ]
)

# Generic name -> number of type arguments (None = one or more)
GENERIC_TYPES: dict[str, int | None] = {
    "list": 1,
    "set": 1,
    "map": 2,
    "tuple": None,
}

ANNOTATIONS = frozenset(["skip"])


def is_primitive(t: SchemaType) -> bool:
    """Check if a type is a primitive type."""
    return t.name in PRIMITIVE_TYPES


def is_generic(t: SchemaType) -> bool:
    """Check if a type is a generic container or tuple."""
    return t.name in GENERIC_TYPES
