"""Inspect the chunk layout of a single PNG file."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.table import Table

from pngstrip.application.use_cases.inspect_image import inspect_image

app = typer.Typer(help="Inspect PNG chunk layout and integrity")
console = Console()


@app.command()
def file(
    path: str = typer.Argument(..., help="PNG file to inspect"),
    strict_signature: bool = typer.Option(
        False,
        "--strict-signature",
        help="Classify the signature as not-a-PNG when either the 0x89 marker or the PNG name is wrong",
    ),
) -> None:
    """
    List every chunk with its offset, length, CRC and CRC status.

    Examples:
        pngstrip inspect file images/logo.png
    """
    try:
        report = inspect_image(path, strict_signature=strict_signature)
    except OSError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    signature = report.signature_status
    if report.line_ending_direction:
        signature += f" ({report.line_ending_direction})"
    console.print(f"\n[bold cyan]{report.path}[/bold cyan]")
    console.print(f"  Signature: {signature}")

    table = Table(title="Chunks", show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Offset", justify="right")
    table.add_column("Type", style="cyan")
    table.add_column("Length", justify="right")
    table.add_column("CRC")
    table.add_column("Kind")

    for row in report.chunks:
        crc_text = f"0x{row.crc:08X}" + ("" if row.crc_ok else " [red][BAD][/red]")
        table.add_row(
            str(row.index),
            str(row.offset),
            row.type,
            str(row.length),
            crc_text,
            "critical" if row.critical else "[dim]ancillary[/dim]",
        )

    console.print(table)

    if report.error:
        console.print(f"[red]Stopped: {report.error}[/red]")
    elif not report.complete:
        console.print("[yellow]No IEND chunk found[/yellow]")
    if report.trailing_bytes:
        console.print(f"[yellow]{report.trailing_bytes} bytes after IEND[/yellow]")
