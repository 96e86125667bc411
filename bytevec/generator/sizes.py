"""Size calculation for schema types and structs."""

from dataclasses import dataclass
from enum import StrEnum, auto

from bytevec.proto.types import PRIMITIVES
from bytevec.proto.width import SizeWidth

from .types import SchemaMember, SchemaStruct, SchemaType


class SizeKind(StrEnum):
    """Classification of size characteristics."""

    FIXED = auto()  # Min == Max
    VARIABLE = auto()  # Depends on content (text, bytes, collections)


@dataclass(frozen=True)
class SizeInfo:
    """Size information for a type or struct."""

    min_size: int
    max_size: int | None  # None means unbounded
    kind: SizeKind

    @property
    def is_fixed(self) -> bool:
        return self.kind == SizeKind.FIXED


@dataclass(frozen=True)
class StructSizeInfo:
    """Complete size information for a struct."""

    name: str
    size: SizeInfo
    declared_fields: int
    skipped_fields: int


@dataclass(frozen=True)
class SchemaSizeInfo:
    """Size information for an entire schema."""

    width: SizeWidth
    structs: dict[str, StructSizeInfo]


def _fixed(size: int) -> SizeInfo:
    return SizeInfo(size, size, SizeKind.FIXED)


def _combine(header: int, parts: list[SizeInfo]) -> SizeInfo:
    """Size of a record-like layout: a header followed by every part."""
    total_min = header + sum(p.min_size for p in parts)
    if all(p.max_size is not None for p in parts):
        total_max: int | None = header + sum(p.max_size for p in parts if p.max_size is not None)
    else:
        total_max = None

    kind = SizeKind.FIXED if all(p.is_fixed for p in parts) else SizeKind.VARIABLE
    return SizeInfo(total_min, total_max, kind)


class SizeCalculator:
    """Calculate encoded sizes for schema types under a size width."""

    def __init__(self, structs: list[SchemaStruct], width: SizeWidth = SizeWidth.U32):
        self.structs = {s.name: s for s in structs}
        self.width = width
        self._cache: dict[str, SizeInfo] = {}

    def calc_type_size(self, t: SchemaType) -> SizeInfo:
        """Calculate size for any type (primitive, generic, or struct)."""
        if t.name in PRIMITIVES:
            return _fixed(PRIMITIVES[t.name].size)

        if t.name in ("string", "bytes"):
            # Fills whatever span its container gives it
            return SizeInfo(0, None, SizeKind.VARIABLE)

        if t.name in ("list", "set", "map"):
            # Count prefix, then any number of length-prefixed elements
            return SizeInfo(self.width.value, None, SizeKind.VARIABLE)

        if t.name == "tuple":
            items = [self.calc_type_size(arg) for arg in t.args]
            return _combine(len(items) * self.width.value, items)

        if t.name in self.structs:
            return self.calc_struct_size(t.name).size

        raise ValueError(f"Unknown type: {t.name}")

    def calc_member_size(self, member: SchemaMember) -> SizeInfo:
        return self.calc_type_size(member.type)

    def calc_struct_size(self, name: str) -> StructSizeInfo:
        """Calculate size for a struct (with caching)."""
        struct = self.structs[name]
        declared = struct.declared

        if name not in self._cache:
            parts = [self.calc_member_size(m) for m in declared]
            self._cache[name] = _combine(len(parts) * self.width.value, parts)

        return StructSizeInfo(
            name=name,
            size=self._cache[name],
            declared_fields=len(declared),
            skipped_fields=len(struct.members) - len(declared),
        )

    def calc_schema_info(self) -> SchemaSizeInfo:
        return SchemaSizeInfo(
            width=self.width,
            structs={name: self.calc_struct_size(name) for name in self.structs},
        )


def calculate_sizes(
    structs: list[SchemaStruct], width: SizeWidth = SizeWidth.U32
) -> SchemaSizeInfo:
    """Calculate size information for a schema definition."""
    return SizeCalculator(structs, width).calc_schema_info()
