"""CLI application entry point for penscript.

This module provides the main CLI interface using Typer.
"""

import random
import sys
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from penscript import __version__
from penscript.cli.output import (
    console,
    print_error,
    print_font_info,
    print_glyph_table,
    print_header,
    print_missing,
    print_render_summary,
    print_step,
)
from penscript.config import LoggingConfig, PenscriptSettings, RenderConfig
from penscript.core import DocumentAssembler
from penscript.domain import FontDocument
from penscript.exceptions import (
    FontDataFormatError,
    FontDataLoadError,
    RenderPreconditionError,
)
from penscript.io import FontStore
from penscript.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="penscript",
    help="Render text as SVG using your own captured handwriting.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Penscript[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
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
    """Render text as SVG using your own captured handwriting."""


def _load_document(font_data: Path) -> FontDocument:
    """Load font data or exit with an error message."""
    if not font_data.exists():
        print_error(
            f"Font data not found: {font_data}",
            details=f"The file '{font_data}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    try:
        return FontStore(font_data).read()
    except FontDataLoadError as e:
        print_error(f"Could not read font data: {e.reason}")
        raise typer.Exit(code=1)
    except FontDataFormatError as e:
        print_error("Invalid font data", details=e.details)
        raise typer.Exit(code=1)


@app.command()
def render(
    font_data: Annotated[
        Path,
        typer.Argument(
            help="Path to the handwriting JSON document",
            show_default=False,
        ),
    ],
    text: Annotated[
        str,
        typer.Argument(
            help="Text to render ('\\n' starts a new line)",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output SVG path (default: print to stdout)",
        ),
    ] = None,
    font_size: Annotated[
        float,
        typer.Option("--font-size", "-s", help="Font size (20-200)", min=20.0, max=200.0),
    ] = 60.0,
    letter_spacing: Annotated[
        float,
        typer.Option("--letter-spacing", help="Letter spacing (-10 to 50)", min=-10.0, max=50.0),
    ] = 5.0,
    line_height: Annotated[
        float,
        typer.Option("--line-height", help="Line height multiplier (1-3)", min=1.0, max=3.0),
    ] = 1.5,
    variation: Annotated[
        float,
        typer.Option("--variation", help="Natural variation level (0-10)", min=0.0, max=10.0),
    ] = 2.0,
    cursive: Annotated[
        bool,
        typer.Option("--cursive/--no-cursive", help="Join consecutive glyphs"),
    ] = True,
    color: Annotated[
        str,
        typer.Option("--color", "-c", help="Stroke color (#rrggbb or name)"),
    ] = "#000000",
    seed: Annotated[
        int | None,
        typer.Option("--seed", help="Random seed for reproducible output"),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Write detailed logs to file"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Logging level (DEBUG|INFO|WARNING|ERROR)"),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Minimal console output"),
    ] = False,
) -> None:
    """Render TEXT with the glyphs captured in FONT_DATA.

    Example:
        penscript render handwriting.json "Dear Sam," -o letter.svg
    """
    text = text.replace("\\n", "\n")
    # SVG on stdout must not be mixed with status output
    show_status = not quiet and output is not None

    try:
        settings = PenscriptSettings(
            render=RenderConfig(
                font_size=font_size,
                letter_spacing=letter_spacing,
                line_height=line_height,
                variation=variation,
                connect_cursive=cursive,
                stroke_color=color,
            ),
            logging=LoggingConfig(log_file=log_file, log_level=log_level),
        )
    except ValidationError as e:
        print_error("Invalid render options", details=str(e.errors()[0]["msg"]))
        raise typer.Exit(code=1)

    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )

    if show_status:
        print_header(__version__)
        print_step("Loading font data")

    document = _load_document(font_data)

    if show_status:
        print_font_info(str(font_data), document.statistics())
        print_step("Rendering")

    assembler = DocumentAssembler(settings.render, logger=logger)
    rng = random.Random(seed)

    try:
        result = assembler.assemble(document, text, rng)
    except RenderPreconditionError as e:
        print_error(str(e))
        raise typer.Exit(code=1)

    if output is None:
        sys.stdout.write(result.svg + "\n")
        return

    try:
        assembler.writer.save(result.svg, output)
    except OSError as e:
        print_error(f"Could not write SVG: {e}")
        raise typer.Exit(code=1)

    if show_status and result.stats is not None:
        print_render_summary(
            output_path=str(output),
            width=result.width,
            height=result.height,
            glyphs=result.stats.glyphs_placed,
            joins=result.stats.joins_drawn,
            total_time_s=result.stats.duration_seconds,
        )
        print_missing(result.missing)


@app.command()
def info(
    font_data: Annotated[
        Path,
        typer.Argument(
            help="Path to the handwriting JSON document",
            show_default=False,
        ),
    ],
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="List every captured and missing glyph"),
    ] = False,
) -> None:
    """Show what FONT_DATA contains and which standard characters are missing."""
    print_header(__version__)
    print_step("Loading font data")

    document = _load_document(font_data)
    stats = document.statistics()
    print_font_info(str(font_data), stats)

    print_step("Glyphs")
    print_glyph_table(stats.characters, document.missing_characters(), verbose)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
