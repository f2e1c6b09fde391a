"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from fontmaker.core.typesetting import LayoutEntry, total_width
from fontmaker.utils import ExportStats

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
    console.print(f"\n[bold]FontMaker[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_ok(message: str) -> None:
    """Print a one-line success message."""
    console.print(f"[green]{SYM_OK}[/green] {message}")


def print_state_info(path: str, artwork_count: int, kerning_count: int, family: str) -> None:
    """Print a summary of a session state file.

    Args:
        path: Path to the state file
        artwork_count: Number of glyphs with artwork
        kerning_count: Number of kerning pairs
        family: Font family name
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(path)
    line.append(f" ({family})")
    console.print(line)
    console.print(f"  {artwork_count} glyphs with artwork {SYM_DOT} {kerning_count} kerning pairs")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_export_result(output_path: str, file_size: str, stats: ExportStats | None) -> None:
    """Print the outcome of one exported style.

    Args:
        output_path: Path to output file
        file_size: Human-readable file size string
        stats: Export statistics of the style, if available
    """
    line = Text(f"  {SYM_OK} ", style="green")
    line.append(output_path, style="bold")
    line.append(f" ({file_size})", style="default")
    console.print(line)

    if stats is None:
        return

    console.print(
        f"    {stats.exported_count} glyphs {SYM_DOT} {stats.skipped_count} without artwork "
        f"{SYM_DOT} {stats.kerning_pairs} kerning pairs"
    )
    if stats.skipped_kerning_pairs:
        console.print(f"    [yellow]{stats.skipped_kerning_pairs} kerning pairs skipped[/yellow]")
    if stats.avg_glyph_time_ms is not None:
        console.print(
            f"    {stats.avg_glyph_time_ms:.1f}ms avg per glyph {SYM_DOT} "
            f"{_format_time(stats.duration_seconds)} total"
        )


def print_layout(entries: list[LayoutEntry], mode: str) -> None:
    """Print a layout as a table, highlighting collisions.

    Args:
        entries: Laid-out characters
        mode: Layout mode name
    """
    table = Table(title=f"Layout ({mode})", title_justify="left")
    table.add_column("#", justify="right")
    table.add_column("Char")
    table.add_column("Start", justify="right")
    table.add_column("Advance", justify="right")
    table.add_column("Left", justify="right")
    table.add_column("Width", justify="right")
    table.add_column("Right", justify="right")
    table.add_column("Collision")

    for entry in entries:
        style = "bold red" if entry.collision else None
        table.add_row(
            str(entry.index),
            repr(entry.char),
            f"{entry.start:.0f}",
            f"{entry.advance:.0f}",
            f"{entry.left_bearing:.0f}",
            f"{entry.width:.0f}",
            f"{entry.right_bearing:.0f}",
            "yes" if entry.collision else "",
            style=style,
        )
    console.print(table)

    collisions = sum(1 for entry in entries if entry.collision)
    collision_style = "red" if collisions else "green"
    console.print(
        f"  Total width {total_width(entries):.0f} {SYM_DOT} "
        f"[{collision_style}]{collisions} collisions[/{collision_style}]"
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
