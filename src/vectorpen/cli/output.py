"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from collections.abc import Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from vectorpen.domain import Command, Document, Point, format_number
from vectorpen.io import ImportResult
from vectorpen.utils import SessionStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Vectorpen[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_path_data(d: str) -> None:
    """Print path-description text verbatim, without wrapping."""
    console.print(Text(d), soft_wrap=True)


def print_commands(commands: Sequence[Command], d: str) -> None:
    """Print a table of decoded commands followed by the canonical text.

    Args:
        commands: Decoded path commands
        d: Canonical path-description text
    """
    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right")
    table.add_column("Cmd")
    table.add_column("Values")

    for i, command in enumerate(commands):
        values = [format_number(v) for k, v in command.to_dict().items() if k != "cmd"]
        table.add_row(str(i), command.letter, " ".join(values))

    console.print(table)
    line = Text("  ")
    line.append(d, style="bold")
    console.print(line, soft_wrap=True)


def print_points(points: Sequence[Point]) -> None:
    """Print generated vertices, one per line."""
    for i, point in enumerate(points):
        console.print(
            f"  {i:>2} {SYM_DOT} {format_number(round(point.x, 6))} "
            f"{format_number(round(point.y, 6))}"
        )


def print_session_summary(stats: SessionStats, document: Document) -> None:
    """Print what a replayed editing session did.

    Args:
        stats: Session statistics
        document: Resulting document
    """
    console.print(f"\n[bold green]{SYM_OK} Replay complete[/bold green]")
    console.print(
        f"  {len(document)} shapes {SYM_DOT} {len(document.paths())} paths {SYM_DOT} "
        f"{stats.edit_count} edits"
    )
    console.print(
        f"  {stats.points_added} points {SYM_DOT} {stats.connections} connections {SYM_DOT} "
        f"{stats.promotions} promotions {SYM_DOT} {stats.handle_drags} drags"
    )
    error_style = "red" if stats.text_edits_rejected else "green"
    console.print(
        f"  {stats.text_edits_applied} text edits {SYM_DOT} "
        f"[{error_style}]{stats.text_edits_rejected} rejected[/{error_style}]"
    )


def print_import_report(result: ImportResult, source: str) -> None:
    """Print the outcome of importing a document.

    Args:
        result: Import result
        source: Where the document came from
    """
    line = Text("  ")
    line.append(source)
    line.append(f" ({len(result.document)} shapes)")
    console.print(line)

    dropped_style = "red" if result.dropped else "green"
    console.print(
        f"  [{dropped_style}]{len(result.dropped)} dropped[/{dropped_style}] {SYM_DOT} "
        f"{len(result.repaired)} repaired"
    )
    for reason in result.dropped:
        console.print(Text(f"    {SYM_ERR} {reason}"))
    for shape_id in result.repaired:
        console.print(Text(f"    {SYM_DOT} {shape_id}: path data rebuilt from commands"))


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] ", end="")
    console.print(Text(message))
    if details:
        console.print(Text(f"  {details}"))
