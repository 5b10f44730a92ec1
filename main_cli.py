#!/usr/bin/env python3
"""regconv CLI - decode and encode Modbus register words.

Examples:
    # Two registers as an IEEE float in ABCD order
    python main_cli.py decode 0x3F80 0x0000 --type float32_abcd

    # Every interpretation of a register block
    python main_cli.py decode 0x1234 0x5678 0x9ABC 0xDEF0 --type all

    # Registers a CDAB device sends for 123456
    python main_cli.py encode 123456 --type uint32_cdab

    # Decode a polled block with a register map
    python main_cli.py map examples/inverter.yaml 2301 0x0008 0x0001 0x0002 0x4120 0x0000
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from regconv.core import __version__
from regconv.core.converter import Value, convert
from regconv.core.data_types import (
    DATA_TYPE_PROPERTIES,
    DataType,
    TypeCategory,
    parse_data_type,
    types_in_category,
)
from regconv.errors import ConversionError
from regconv.register_map import decode_block, load_register_map
from regconv.utils.byteorder import layout_for, reorder
from regconv.utils.encoding import EncodingError, encode, parse_value_text
from regconv.utils.ieee754 import describe_float
from regconv.utils.parsing import format_registers, parse_register_values

app = typer.Typer(
    name="regconv",
    help="Decode and encode Modbus register words",
    add_completion=False,
)
console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich output."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, console=console)],
    )


def _fail(message: str) -> None:
    console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(code=1)


def _format_value(value: Value) -> str:
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, float):
        return describe_float(value)
    return str(value)


def _value_bytes(registers: List[int], dtype: DataType) -> str:
    """Hex of the value bytes after reordering, e.g. "0x3F800000"."""
    props = DATA_TYPE_PROPERTIES[dtype]
    if props.layout is None:
        return f"0x{registers[0] & 0xFFFF:04X}"
    return "0x" + reorder(registers, layout_for(props.layout)).hex().upper()


def _parse_registers(values: List[str]) -> List[int]:
    try:
        regs = parse_register_values(values)
    except ValueError as exc:
        _fail(str(exc))
    if not regs:
        _fail("Provide at least one register value (decimal or 0xHEX)")
    return regs


def _present_all(regs: List[int], scale: float, bit: int, overflow: str) -> None:
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Type")
    table.add_column("Bytes")
    table.add_column("Value", justify="right")
    for dtype, props in DATA_TYPE_PROPERTIES.items():
        if props.register_count > len(regs):
            continue
        try:
            value = convert(regs, dtype, bit, scale, overflow=overflow)
        except ConversionError as exc:
            table.add_row(dtype.value, _value_bytes(regs, dtype), f"[red]{exc.description}[/red]")
            continue
        table.add_row(dtype.value, _value_bytes(regs, dtype), _format_value(value))
    console.print(table)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Decode and encode Modbus register words."""
    setup_logging(verbose)


@app.command()
def decode(
    values: List[str] = typer.Argument(..., help="Register values (decimal or 0xHEX), e.g. '0x3F80 0x0000'"),
    type_: str = typer.Option("uint16", "--type", "-t", help="Data type name or alias (see `types`), or 'all'"),
    scale: float = typer.Option(1.0, "--scale", "-s", help="Scaling factor applied to the decoded value"),
    bit: int = typer.Option(0, "--bit", "-b", help="Bit position (0-15) for boolean types"),
    overflow: str = typer.Option("wrap", "--overflow", help="Scaled integer overflow: wrap|error"),
) -> None:
    """Decode register words as the given data type.

    With `--type all` every data type that fits the supplied words is shown.
    """
    regs = _parse_registers(values)

    if type_.strip().lower() == "all":
        try:
            _present_all(regs, scale, bit, overflow)
        except ValueError as exc:
            _fail(str(exc))
        return

    try:
        dtype = parse_data_type(type_)
        value = convert(regs, dtype, bit, scale, overflow=overflow)
    except ConversionError as exc:
        _fail(f"{exc.description}: {exc}")
    except ValueError as exc:
        _fail(str(exc))

    props = DATA_TYPE_PROPERTIES[dtype]
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Type")
    table.add_column("Registers")
    table.add_column("Bytes")
    table.add_column("Value", justify="right")
    table.add_row(
        props.label,
        format_registers(regs[:props.register_count]),
        _value_bytes(regs, dtype),
        _format_value(value),
    )
    console.print(table)


@app.command(name="encode")
def encode_command(
    value: str = typer.Argument(..., help="Value to encode (int, 0xHEX, float, or true/false)"),
    type_: str = typer.Option("uint16", "--type", "-t", help="Data type name or alias (see `types`)"),
    scale: float = typer.Option(1.0, "--scale", "-s", help="Scaling factor the decoder will apply"),
    bit: int = typer.Option(0, "--bit", "-b", help="Bit position (0-15) for boolean types"),
) -> None:
    """Show the register words a device sends for VALUE."""
    try:
        parsed = parse_value_text(value, type_)
        regs = encode(parsed, type_, bit, scale)
    except EncodingError as exc:
        _fail(str(exc))

    dtype = parse_data_type(type_)
    console.print(f"{DATA_TYPE_PROPERTIES[dtype].label}: {format_registers(regs)}")
    console.print(f"Decimal: {' '.join(str(r) for r in regs)}")


@app.command(name="types")
def list_types(
    category: Optional[str] = typer.Option(
        None, "--category", "-c", help="Only list one category: bit, int8, int16, int32, int64, float32, float64"
    ),
) -> None:
    """List every supported data type."""
    if category is None:
        dtypes = list(DATA_TYPE_PROPERTIES)
    else:
        try:
            dtypes = types_in_category(TypeCategory(category.strip().lower()))
        except ValueError:
            _fail(f"Unknown category '{category}'")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Name")
    table.add_column("Label")
    table.add_column("Bits", justify="right")
    table.add_column("Regs", justify="right")
    table.add_column("Signed")
    for dtype in dtypes:
        props = DATA_TYPE_PROPERTIES[dtype]
        if props.signed is None:
            signed = "-"
        else:
            signed = "yes" if props.signed else "no"
        table.add_row(dtype.value, props.label, str(props.bits), str(props.register_count), signed)
    console.print(table)


@app.command(name="map")
def decode_map(
    config: Path = typer.Argument(..., help="Register map file (.yaml/.yml/.json)"),
    values: List[str] = typer.Argument(..., help="Register block starting at the map's base address"),
) -> None:
    """Decode a register block with a register map file."""
    try:
        register_map = load_register_map(config)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        _fail(f"Failed to load register map: {exc}")

    regs = _parse_registers(values)
    if len(regs) < register_map.span:
        console.print(
            f"[yellow]Block has {len(regs)} word(s), map spans {register_map.span}[/yellow]"
        )

    table = Table(title=register_map.name or None, show_header=True, header_style="bold magenta")
    table.add_column("Name")
    table.add_column("Address", justify="right")
    table.add_column("Type")
    table.add_column("Value", justify="right")
    table.add_column("Unit")
    failed = 0
    for decoded in decode_block(register_map, regs):
        point = decoded.point
        if decoded.ok:
            shown = _format_value(decoded.value)
        else:
            failed += 1
            shown = f"[red]{decoded.error.description}[/red]"
        table.add_row(point.name, str(point.address), point.data_type.value, shown, point.unit)
    console.print(table)
    if failed:
        console.print(f"[red]{failed} point(s) failed to decode[/red]")
        raise typer.Exit(code=1)


@app.command()
def version() -> None:
    """Print the regconv version."""
    console.print(__version__)


if __name__ == "__main__":
    app()
