"""Schema definition parser using Lark."""

import json
import os
from dataclasses import dataclass
from typing import Any, TypeVar

from lark import Lark
from lark.visitors import Transformer

from bytevec.proto.types import PRIMITIVES, ScalarKind

from .types import (
    ANNOTATIONS,
    GENERIC_TYPES,
    SchemaAnnotation,
    SchemaMember,
    SchemaStruct,
    SchemaType,
    is_generic,
    is_primitive,
)

_g_parser: Lark | None = None

CONTAINER_TYPES = frozenset(["list", "set", "map"])
INT_TYPES = frozenset(["u8", "u16", "u32", "u64", "i8", "i16", "i32", "i64"])
FLOAT_TYPES = frozenset(["f32", "f64"])


class ValidationError(RuntimeError):
    """Raised when schema validation fails."""


@dataclass
class _Value:
    value: Any


TFilter = TypeVar("TFilter", bound=object)


def _filter(args: list[Any], class_type: type[TFilter]) -> list[TFilter]:
    return [v for v in args if isinstance(v, class_type)]


def _find_one(args: list[Any], class_type: type[object]) -> Any:
    filtered = _filter(args, class_type)
    if len(filtered) == 0:
        return None
    if len(filtered) > 1:
        raise RuntimeError(f"Found more than one {class_type}")
    return filtered[0]


class TreeTransformer(Transformer):
    """Transform parse tree into schema types."""

    def start(self, args: list[Any]) -> list[SchemaStruct]:
        return list(args)

    def struct(self, args: list[Any]) -> SchemaStruct:
        return SchemaStruct(
            name=str(_find_names(args)[0]),
            members=_filter(args, SchemaMember),
        )

    def member(self, args: list[Any]) -> SchemaMember:
        value = _find_one(args, _Value)
        return SchemaMember(
            name=str(_find_names(args)[0]),
            type=_find_one(args, SchemaType),
            value=value.value if value else None,
            annotations=_filter(args, SchemaAnnotation),
        )

    def annotation(self, args: list[Any]) -> SchemaAnnotation:
        return SchemaAnnotation(
            name=str(args[0]), arguments=[v.value for v in _filter(args, _Value)]
        )

    def generic(self, args: list[Any]) -> SchemaType:
        return SchemaType(name=str(args[0]), args=_filter(args, SchemaType))

    def simple(self, args: list[Any]) -> SchemaType:
        return SchemaType(name=str(args[0]))

    def number(self, args: list[Any]) -> _Value:
        text = str(args[0])
        try:
            return _Value(int(text))
        except ValueError:
            return _Value(float(text))

    def string(self, args: list[Any]) -> _Value:
        return _Value(json.loads(str(args[0])))

    def true(self, args: list[Any]) -> _Value:
        return _Value(True)

    def false(self, args: list[Any]) -> _Value:
        return _Value(False)


def _find_names(args: list[Any]) -> list[Any]:
    # Tokens are the only children that are plain strings
    return [a for a in args if isinstance(a, str)]


def _validate_type(t: SchemaType, struct_map: dict[str, SchemaStruct], where: str) -> None:
    if is_generic(t):
        arity = GENERIC_TYPES[t.name]
        if not t.args:
            raise ValidationError(f"{where}: {t.name} requires type arguments")
        if arity is not None and len(t.args) != arity:
            raise ValidationError(
                f"{where}: {t.name} takes {arity} type argument{'s' if arity != 1 else ''}, "
                f"got {len(t.args)}"
            )
        for arg in t.args:
            _validate_type(arg, struct_map, where)
        if t.name == "set":
            _validate_hashable(t.args[0], where, "set element")
        if t.name == "map":
            _validate_hashable(t.args[0], where, "map key")
        return

    if t.args:
        raise ValidationError(f"{where}: {t.name} does not take type arguments")
    if not is_primitive(t) and t.name not in struct_map:
        raise ValidationError(f"{where}: unknown type {t.name}")


def _validate_hashable(t: SchemaType, where: str, role: str) -> None:
    if is_primitive(t):
        return
    if t.name == "tuple":
        for arg in t.args:
            _validate_hashable(arg, where, role)
        return
    raise ValidationError(f"{where}: {t} cannot be used as a {role}")


def _int_range(name: str) -> range:
    bits = PRIMITIVES[name].size * 8
    if PRIMITIVES[name].kind == ScalarKind.SIGNED:
        return range(-(1 << (bits - 1)), 1 << (bits - 1))
    return range(1 << bits)


def _validate_default(member: SchemaMember, where: str) -> None:
    t = member.type
    value = member.value

    if value is None:
        if member.skipped and t.name not in CONTAINER_TYPES:
            raise ValidationError(f"{where}: skipped members need a default value")
        return

    if t.name in INT_TYPES:
        ok = isinstance(value, int) and int(value) in _int_range(t.name)
    elif t.name in FLOAT_TYPES:
        ok = isinstance(value, (int, float)) and not isinstance(value, bool)
    elif t.name == "char":
        ok = isinstance(value, str) and len(value) == 1
    elif t.name in ("string", "bytes"):
        ok = isinstance(value, str)
    else:
        ok = False

    if not ok:
        raise ValidationError(f"{where}: default {value!r} is not valid for {t}")


def _referenced_structs(t: SchemaType, struct_map: dict[str, SchemaStruct]) -> list[str]:
    if t.name in struct_map:
        return [t.name]
    return [name for arg in t.args for name in _referenced_structs(arg, struct_map)]


def dependencies(struct: SchemaStruct, struct_map: dict[str, SchemaStruct]) -> list[str]:
    """Names of the structs a struct refers to, in member order."""
    names: list[str] = []
    for member in struct.members:
        for name in _referenced_structs(member.type, struct_map):
            if name not in names:
                names.append(name)
    return names


def _check_recursion(struct_map: dict[str, SchemaStruct]) -> None:
    done: set[str] = set()

    def visit(name: str, path: list[str]) -> None:
        if name in path:
            cycle = " -> ".join(path[path.index(name) :] + [name])
            raise ValidationError(f"Recursive structs are not supported: {cycle}")
        if name in done:
            return
        for dep in dependencies(struct_map[name], struct_map):
            visit(dep, path + [name])
        done.add(name)

    for name in struct_map:
        visit(name, [])


def validate(structs: list[SchemaStruct]) -> None:
    """Validate parsed schema definition."""
    struct_map: dict[str, SchemaStruct] = {}
    for struct in structs:
        if struct.name in struct_map:
            raise ValidationError(f"Struct {struct.name} declared more than once")
        struct_map[struct.name] = struct

    for struct in structs:
        seen: set[str] = set()
        for member in struct.members:
            where = f"{struct.name}.{member.name}"
            if member.name in seen:
                raise ValidationError(f"{where} declared more than once")
            seen.add(member.name)

            for annotation in member.annotations:
                if annotation.name not in ANNOTATIONS:
                    raise ValidationError(f"{where}: unknown annotation @{annotation.name}")
                if annotation.arguments:
                    raise ValidationError(f"{where}: @{annotation.name} takes no arguments")

            _validate_type(member.type, struct_map, where)
            _validate_default(member, where)

    _check_recursion(struct_map)


def parse(text: str) -> list[SchemaStruct]:
    """Parse a schema definition file."""
    global _g_parser

    if not _g_parser:
        with open(f"{os.path.dirname(__file__)}/schema.lark", encoding="utf-8") as f:
            grammar = f.read()
        _g_parser = Lark(grammar, parser="lalr")

    tree = _g_parser.parse(text)
    structs = TreeTransformer().transform(tree)

    validate(structs)

    return structs
