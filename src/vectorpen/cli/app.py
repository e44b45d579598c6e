"""CLI application entry point for vectorpen.

This module provides the main CLI interface using Typer.
"""

from pathlib import Path
from typing import Annotated

import typer

from vectorpen import __version__
from vectorpen.cli.output import (
    SYM_OK,
    console,
    print_commands,
    print_error,
    print_header,
    print_import_report,
    print_path_data,
    print_points,
    print_session_summary,
    print_step,
)
from vectorpen.config import EditorSettings, LoggingConfig, PenConfig
from vectorpen.core import Editor, promote_line_to_curve, regular_polygon_points, star_points
from vectorpen.domain import Document, Point, parse, serialize
from vectorpen.exceptions import (
    DocumentLoadError,
    DocumentSaveError,
    EventScriptError,
    PathParseError,
    VectorPenError,
)
from vectorpen.io import export_document, load_document, load_event_script, save_document
from vectorpen.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="vectorpen",
    help="Edit vector paths: parse path data, generate shapes and replay pen sessions.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Vectorpen[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_options(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Vector path editing tools."""
    if log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        print_error(
            f"Invalid log level: {log_level}",
            details="Valid values: DEBUG, INFO, WARNING, ERROR",
        )
        raise typer.Exit(code=1)

    logging_config = LoggingConfig(log_file=log_file, log_level=log_level.upper())
    configure_logging(
        log_file=logging_config.log_file,
        console_level=logging_config.log_level,
        file_level=logging_config.file_log_level,
        quiet=quiet,
    )
    ctx.obj = {"quiet": quiet, "logging": logging_config}


def _is_quiet(ctx: typer.Context) -> bool:
    return bool(ctx.obj and ctx.obj.get("quiet"))


@app.command("parse")
def parse_command(
    text: Annotated[
        str,
        typer.Argument(help="Path data, e.g. 'M 10 10 L 100 10'", show_default=False),
    ],
) -> None:
    """Decode path data and print its commands and canonical form.

    Example:
        vectorpen parse "M10,10 L100,10"
    """
    try:
        commands = parse(text)
    except PathParseError as e:
        print_error(f"Could not parse path data: {e.reason}", details=repr(e.text))
        raise typer.Exit(code=1)

    print_commands(commands, serialize(commands))


@app.command("promote")
def promote_command(
    text: Annotated[
        str,
        typer.Argument(help="Path data containing the line to promote", show_default=False),
    ],
    index: Annotated[
        int,
        typer.Argument(help="Index of the LineTo command", show_default=False),
    ],
) -> None:
    """Promote a line to an equivalent, editable curve.

    Example:
        vectorpen promote "M 0 0 L 30 0" 1
    """
    try:
        commands = parse(text)
    except PathParseError as e:
        print_error(f"Could not parse path data: {e.reason}", details=repr(e.text))
        raise typer.Exit(code=1)

    print_path_data(serialize(promote_line_to_curve(commands, index)))


@app.command("polygon")
def polygon_command(
    cx: Annotated[float, typer.Argument(help="Centre X", show_default=False)],
    cy: Annotated[float, typer.Argument(help="Centre Y", show_default=False)],
    sides: Annotated[
        int,
        typer.Option("--sides", "-n", help="Number of sides", min=3),
    ] = 5,
    radius: Annotated[
        float,
        typer.Option("--radius", "-r", help="Circumradius", min=0.0),
    ] = 50.0,
) -> None:
    """Print the vertices of a regular polygon, top vertex first."""
    print_points(regular_polygon_points(Point(cx, cy), sides, radius))


@app.command("star")
def star_command(
    cx: Annotated[float, typer.Argument(help="Centre X", show_default=False)],
    cy: Annotated[float, typer.Argument(help="Centre Y", show_default=False)],
    points: Annotated[
        int,
        typer.Option("--points", "-n", help="Number of star points", min=3),
    ] = 5,
    outer: Annotated[
        float,
        typer.Option("--outer", help="Radius of the tips", min=0.0),
    ] = 50.0,
    inner: Annotated[
        float,
        typer.Option("--inner", help="Radius of the notches", min=0.0),
    ] = 25.0,
) -> None:
    """Print the vertices of a star, alternating outer and inner radius."""
    print_points(star_points(Point(cx, cy), points, outer, inner))


@app.command("replay")
def replay_command(
    ctx: typer.Context,
    script: Annotated[
        Path,
        typer.Argument(help="Event script (JSON array of events)", show_default=False),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the resulting document here (default: print it)",
        ),
    ] = None,
    input_document: Annotated[
        Path | None,
        typer.Option(
            "--input",
            "-i",
            help="Document to start editing from",
        ),
    ] = None,
    curve_mode: Annotated[
        bool,
        typer.Option(
            "--curve-mode",
            help="Connect points with curves without holding Shift",
        ),
    ] = False,
) -> None:
    """Replay a recorded editing session and write the resulting document.

    Example:
        vectorpen replay session.json --output drawing.json
    """
    quiet = _is_quiet(ctx)

    try:
        events = load_event_script(script)
    except FileNotFoundError:
        print_error(
            f"Event script not found: {script}",
            details=f"The file '{script}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)
    except EventScriptError as e:
        print_error(f"Invalid event script: {e}")
        raise typer.Exit(code=1)

    document = Document()
    try:
        if input_document is not None:
            result = load_document(input_document)
            document = result.document
            if not quiet:
                print_step("Loaded document")
                print_import_report(result, str(input_document))

        settings = EditorSettings(pen=PenConfig(curve_mode=curve_mode))
        editor = Editor(settings=settings, document=document)
        for event in events:
            editor.handle(event)
        editor.finalize()

        if not quiet:
            print_session_summary(editor.stats, editor.document)

        if output is not None:
            save_document(editor.document, output)
            if not quiet:
                console.print(f"\n[bold green]{SYM_OK} Saved[/bold green] ", end="")
                console.print(str(output), markup=False, highlight=False)
        else:
            print_path_data(export_document(editor.document))

    except DocumentLoadError as e:
        print_error(f"Could not load document: {e.reason}")
        raise typer.Exit(code=1)
    except DocumentSaveError as e:
        print_error(f"Could not save document: {e.reason}")
        raise typer.Exit(code=1)
    except VectorPenError as e:
        print_error(str(e))
        raise typer.Exit(code=1)


@app.command("check")
def check_command(
    ctx: typer.Context,
    document: Annotated[
        Path,
        typer.Argument(help="Document JSON file", show_default=False),
    ],
) -> None:
    """Import a document and report dropped and repaired records.

    Exits with code 2 when records had to be dropped.
    """
    try:
        result = load_document(document)
    except DocumentLoadError as e:
        print_error(f"Could not load document: {e.reason}")
        raise typer.Exit(code=1)

    if not _is_quiet(ctx):
        print_header(__version__)
        print_import_report(result, str(document))

    if result.dropped:
        raise typer.Exit(code=2)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
