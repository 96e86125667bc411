"""Python code generator for bytevec schemas."""

from jinja2 import Environment, PackageLoader

from .parser import dependencies
from .types import SchemaMember, SchemaStruct, SchemaType

env = Environment(
    loader=PackageLoader("bytevec.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

template = env.get_template("python.py.j2")

# Map schema types to Python type annotations
PRIMITIVE_TYPE_MAP = {
    "u8": "int",
    "u16": "int",
    "u32": "int",
    "u64": "int",
    "i8": "int",
    "i16": "int",
    "i32": "int",
    "i64": "int",
    "f32": "float",
    "f64": "float",
    "char": "str",
    "string": "str",
    "bytes": "bytes",
}

# Map schema types to the runtime shape constants
PRIMITIVE_SHAPES = {
    "u8": "U8",
    "u16": "U16",
    "u32": "U32",
    "u64": "U64",
    "i8": "I8",
    "i16": "I16",
    "i32": "I32",
    "i64": "I64",
    "f32": "F32",
    "f64": "F64",
    "char": "CHAR",
    "string": "TEXT",
    "bytes": "BYTES",
}

CONTAINER_FACTORIES = {"list": "list", "set": "set", "map": "dict"}


def _map_type(t: SchemaType) -> str:
    """Map a schema type to a Python type annotation."""
    if t.name in PRIMITIVE_TYPE_MAP:
        return PRIMITIVE_TYPE_MAP[t.name]

    args = [_map_type(a) for a in t.args]
    if t.name == "list":
        return f"list[{args[0]}]"
    if t.name == "set":
        return f"set[{args[0]}]"
    if t.name == "map":
        return f"dict[{args[0]}, {args[1]}]"
    if t.name == "tuple":
        return f"tuple[{', '.join(args)}]"
    return t.name


def _shape_expr(t: SchemaType) -> str:
    """Python expression building the runtime shape of a type."""
    if t.name in PRIMITIVE_SHAPES:
        return PRIMITIVE_SHAPES[t.name]

    args = [_shape_expr(a) for a in t.args]
    if t.name == "list":
        return f"Sequence({args[0]})"
    if t.name == "set":
        return f"SetOf({args[0]})"
    if t.name == "map":
        return f"MapOf({args[0]}, {args[1]})"
    if t.name == "tuple":
        items = args[0] + "," if len(args) == 1 else ", ".join(args)
        return f"Tuple(({items}))"
    # Struct classes are shapes themselves
    return t.name


def _default_literal(member: SchemaMember) -> str:
    value = member.value
    name = member.type.name

    if name in ("f32", "f64"):
        return repr(float(value))
    if name == "bytes":
        return repr(value.encode("utf-8"))
    if isinstance(value, bool):
        return repr(int(value))
    return repr(value)


def _field_expr(member: SchemaMember) -> str:
    """Generate the dataclass field initializer for a member."""
    if member.skipped:
        if member.value is None:
            return f"field(default_factory={CONTAINER_FACTORIES[member.type.name]})"
        return f"field(default={_default_literal(member)})"

    if member.value is None:
        return f"bytevec_field({_shape_expr(member.type)})"
    return f"bytevec_field({_shape_expr(member.type)}, default={_default_literal(member)})"


def _ordered(structs: list[SchemaStruct]) -> list[SchemaStruct]:
    """Order structs so every struct follows the structs it refers to."""
    struct_map = {s.name: s for s in structs}
    ordered: list[SchemaStruct] = []
    placed: set[str] = set()

    def place(struct: SchemaStruct) -> None:
        if struct.name in placed:
            return
        placed.add(struct.name)
        for name in dependencies(struct, struct_map):
            place(struct_map[name])
        ordered.append(struct)

    for struct in structs:
        place(struct)
    return ordered


def render(structs: list[SchemaStruct], runtime_import: str = "bytevec.proto") -> str:
    """Render a schema definition to Python source code."""
    return template.render(
        structs=_ordered(structs),
        map_type=_map_type,
        field_expr=_field_expr,
        runtime_import=runtime_import,
    )
