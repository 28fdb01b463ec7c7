"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with formatted messages and summary tables.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from penscript.domain import DocumentStatistics

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
    console.print(f"\n[bold]Penscript[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_font_info(font_path: str, stats: DocumentStatistics) -> None:
    """Print font data information.

    Args:
        font_path: Path to the font data file
        stats: Document statistics
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(font_path)
    console.print(line)
    console.print(
        f"  {stats.captured_count:,} glyphs {SYM_DOT} {stats.total_strokes:,} strokes "
        f"{SYM_DOT} modified {stats.modified}"
    )


def _format_keys(keys: list[str], limit: int = 20) -> str:
    shown = ", ".join(repr(k) for k in keys[:limit])
    if len(keys) > limit:
        shown += f" {SYM_DOT}{SYM_DOT}{SYM_DOT} (+{len(keys) - limit} more)"
    return shown


def print_glyph_table(keys: list[str], missing: list[str], verbose: bool) -> None:
    """Print captured and missing glyph keys.

    Args:
        keys: Captured glyph keys
        missing: Standard characters not captured yet
        verbose: Whether to list every key
    """
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold")
    table.add_column()

    ligatures = [k for k in keys if len(k) > 1]
    table.add_row("Captured", str(len(keys)))
    table.add_row("Ligatures", str(len(ligatures)))
    table.add_row("Missing", f"[{'red' if missing else 'green'}]{len(missing)}[/]")
    console.print(table)

    if verbose:
        if keys:
            console.print(f"\n  [bold]Glyphs[/bold] {_format_keys(keys, limit=len(keys))}")
        if missing:
            console.print(f"  [bold]Missing[/bold] {_format_keys(missing, limit=len(missing))}")
    elif missing:
        console.print(f"\n  Missing: {_format_keys(missing)}")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.1f}s"


def print_render_summary(
    output_path: str | None,
    width: float,
    height: float,
    glyphs: int,
    joins: int,
    total_time_s: float,
) -> None:
    """Print success message with summary.

    Args:
        output_path: Path of the written SVG (None when printed to stdout)
        width: Canvas width
        height: Canvas height
        glyphs: Number of glyphs placed
        joins: Number of cursive joins drawn
        total_time_s: Total render time in seconds
    """
    console.print(
        f"\n[bold green]{SYM_OK} Rendered[/bold green] in {_format_time(total_time_s)}"
    )
    if output_path:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)
    console.print(
        f"  {width:.0f}×{height:.0f} {SYM_DOT} {glyphs} glyphs {SYM_DOT} {joins} joins"
    )


def print_missing(missing: set[str]) -> None:
    """Print glyph keys that were not in the font data.

    Args:
        missing: Missing glyph keys
    """
    if not missing:
        return
    console.print(
        f"  [yellow]{len(missing)} missing[/yellow] {SYM_DOT} {_format_keys(sorted(missing))}"
    )


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
