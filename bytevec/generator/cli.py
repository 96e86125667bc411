"""Command-line interface for bytevec code generation."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.table import Table
from structlog import get_logger

from bytevec.generator import parse, python
from bytevec.generator.sizes import SchemaSizeInfo, calculate_sizes
from bytevec.generator.types import SchemaStruct
from bytevec.proto.width import DEFAULT_SIZE_WIDTH, SizeWidth

logger = get_logger()


class SizeWidthParam(click.ParamType):
    """Click parameter accepting 8/16/32/64 or u8/u16/u32/u64."""

    name = "size-width"

    def convert(self, value, param, ctx) -> SizeWidth:
        try:
            return SizeWidth.parse(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


@click.group()
def cli() -> None:
    """bytevec schema compiler."""


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input schema file")
@click.option("--output", "-o", "output_file", required=True, help="Output Python file")
@click.option(
    "--runtime-import",
    "runtime_import",
    default="bytevec.proto",
    show_default=True,
    help="Module the generated code imports the runtime from",
)
def gen(input_file: str, output_file: str, runtime_import: str) -> None:
    """Generate Python dataclasses from a schema file."""
    with open(input_file, encoding="utf-8") as f:
        schema = f.read()

    structs = parse(schema)
    generated_file = python.render(structs, runtime_import=runtime_import)

    with open(output_file, "w", encoding="utf-8") as f:
        f.write(generated_file)

    logger.debug("generated python module", output=output_file, structs=len(structs))


@cli.command()
@click.option("--input", "-i", "input_file", required=True, help="Input schema file")
@click.option(
    "--size-width",
    "-w",
    "width",
    type=SizeWidthParam(),
    default=DEFAULT_SIZE_WIDTH.bits,
    show_default=True,
    envvar="BYTEVEC_SIZE_WIDTH",
    help="Bits per count/length prefix (8, 16, 32, 64)",
)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def info(input_file: str, width: SizeWidth, output_json: bool) -> None:
    """Display struct layouts and encoded sizes."""
    with open(input_file, encoding="utf-8") as f:
        schema = f.read()

    structs = parse(schema)
    size_info = calculate_sizes(structs, width)

    if output_json:
        _output_json(size_info, structs)
    else:
        _output_plain(size_info)


def _format_size(size: int | None) -> str:
    """Format a size value, handling None for unbounded."""
    return "unbounded" if size is None else str(size)


def _output_json(size_info: SchemaSizeInfo, structs: list[SchemaStruct]) -> None:
    """Output schema info as JSON."""
    data: dict = {
        "size_width": size_info.width.bits,
        "structs": {},
        "schema": [struct.to_dict() for struct in structs],
    }

    for name, struct_info in size_info.structs.items():
        data["structs"][name] = {
            "min_size": struct_info.size.min_size,
            "max_size": struct_info.size.max_size,
            "kind": struct_info.size.kind.value,
            "declared_fields": struct_info.declared_fields,
            "skipped_fields": struct_info.skipped_fields,
        }

    print(json.dumps(data, indent=2))


def _output_plain(size_info: SchemaSizeInfo) -> None:
    """Output schema info using rich text formatting."""
    console = Console()

    console.print(f"[bold cyan]Size prefixes[/bold cyan]  u{size_info.width.bits}")
    console.print()

    console.print("[bold cyan]Structs[/bold cyan]")
    struct_table = Table(show_header=True, box=None, padding=(0, 2, 0, 0))
    struct_table.add_column("Name", style="white")
    struct_table.add_column("Size", style="yellow", justify="right")
    struct_table.add_column("Kind", style="dim")
    struct_table.add_column("Fields", style="green", justify="right")

    for name, struct_info in size_info.structs.items():
        min_size = struct_info.size.min_size
        max_size = struct_info.size.max_size

        if min_size == max_size:
            size_str = f"{min_size} bytes"
        else:
            size_str = f"{min_size}-{_format_size(max_size)} bytes"

        fields_str = str(struct_info.declared_fields)
        if struct_info.skipped_fields:
            fields_str += f" (+{struct_info.skipped_fields} skipped)"
        struct_table.add_row(name, size_str, struct_info.size.kind.value, fields_str)

    console.print(struct_table)


def main() -> None:
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
