"""CLI application entry point for fontmaker.

This module provides the main CLI interface using Typer.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated

import typer

from fontmaker import __version__
from fontmaker.cli.output import (
    console,
    print_error,
    print_export_result,
    print_header,
    print_layout,
    print_ok,
    print_state_info,
    print_step,
)
from fontmaker.config import FontMakerSettings, LoggingConfig
from fontmaker.core import FontSession, LayoutMode
from fontmaker.domain import GLYPHS, StyleVariant, is_supported
from fontmaker.exceptions import (
    ArtworkLoadError,
    FontLoadError,
    FontMakerError,
    FontSaveError,
    StateLoadError,
    StateSaveError,
)
from fontmaker.io import FontImporter, ProjectState, load_state, save_state
from fontmaker.io.image import is_raster
from fontmaker.utils import configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

# Create the Typer app
app = typer.Typer(
    name="fontmaker",
    help="Assemble a typeface from glyph artwork and export OpenType fonts.",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass
class CliContext:
    """Options shared by every command."""

    settings: FontMakerSettings
    quiet: bool = False


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]FontMaker[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def configure(
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
    """Assemble a typeface from glyph artwork and export OpenType fonts.

    Example:
        fontmaker init project.json
        fontmaker add project.json A a.png --lock-cap --center
        fontmaker export project.json --style Regular --style Bold
    """
    if log_level.upper() not in LOG_LEVELS:
        print_error(
            f"Invalid log level: {log_level}",
            details=f"Valid values: {', '.join(LOG_LEVELS)}",
        )
        raise typer.Exit(code=1)

    settings = FontMakerSettings(
        logging=LoggingConfig(log_file=log_file, log_level=log_level.upper()),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    ctx.obj = CliContext(settings=settings, quiet=quiet)


def _context(ctx: typer.Context) -> CliContext:
    if isinstance(ctx.obj, CliContext):
        return ctx.obj
    return CliContext(settings=FontMakerSettings())


@contextmanager
def _reporting_errors() -> Iterator[None]:
    """Map library errors to a red error line and exit code 1."""
    try:
        yield
    except FontLoadError as e:
        print_error(f"Could not load font: {e.reason}")
        raise typer.Exit(code=1)
    except FontSaveError as e:
        print_error(f"Could not save font: {e.reason}")
        raise typer.Exit(code=1)
    except StateLoadError as e:
        print_error(f"Could not load session: {e.reason}")
        raise typer.Exit(code=1)
    except StateSaveError as e:
        print_error(f"Could not save session: {e.reason}")
        raise typer.Exit(code=1)
    except ArtworkLoadError as e:
        print_error(f"Could not load artwork: {e.reason}")
        raise typer.Exit(code=1)
    except FontMakerError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        # Re-raise typer.Exit to allow clean exits
        raise
    except Exception as e:
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


def _require_char(value: str, label: str) -> str:
    if len(value) != 1 or not is_supported(value):
        print_error(
            f"Unsupported {label}: {value!r}",
            details=f"Characters must be one of: {''.join(GLYPHS)}",
        )
        raise typer.Exit(code=1)
    return value


def _refuse_overwrite(path: Path, force: bool) -> None:
    if path.exists() and not force:
        print_error(
            f"State file already exists: {path}",
            details="Use --force to overwrite it.",
        )
        raise typer.Exit(code=1)


def _load_session(path: Path, settings: FontMakerSettings) -> FontSession:
    return FontSession.from_state(load_state(path), settings)


StateArgument = Annotated[
    Path,
    typer.Argument(
        help="Path to the session state file (JSON)",
        show_default=False,
    ),
]


@app.command()
def init(
    ctx: typer.Context,
    state: StateArgument,
    family: Annotated[
        str,
        typer.Option(
            "--family",
            "-f",
            help="Font family name",
        ),
    ] = "MyFont",
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite an existing state file",
        ),
    ] = False,
) -> None:
    """Create a fresh session state file."""
    options = _context(ctx)
    _refuse_overwrite(state, force)

    with _reporting_errors():
        session = FontSession(options.settings)
        session.override_metadata(family_name=family)
        save_state(session.to_state(), state)

    if not options.quiet:
        print_ok(f"Created session {state.name} ({family})")


@app.command()
def add(
    ctx: typer.Context,
    state: StateArgument,
    char: Annotated[
        str,
        typer.Argument(
            help="Character the artwork belongs to",
            show_default=False,
        ),
    ],
    artwork: Annotated[
        Path,
        typer.Argument(
            help="Raster image (PNG, JPEG, ...) or SVG file",
            show_default=False,
        ),
    ],
    scale: Annotated[
        float | None,
        typer.Option(
            "--scale",
            help="Uniform scale of the artwork",
            min=0.01,
        ),
    ] = None,
    x: Annotated[
        float | None,
        typer.Option("--x", help="Horizontal offset in font units"),
    ] = None,
    y: Annotated[
        float | None,
        typer.Option("--y", help="Vertical offset in font units"),
    ] = None,
    rotate: Annotated[
        float | None,
        typer.Option("--rotate", help="Rotation in degrees, counter-clockwise"),
    ] = None,
    lock_cap: Annotated[
        bool,
        typer.Option("--lock-cap", help="Scale to cap height and seat on the baseline"),
    ] = False,
    lock_x: Annotated[
        bool,
        typer.Option("--lock-x", help="Scale to x-height and seat on the baseline"),
    ] = False,
    center: Annotated[
        bool,
        typer.Option("--center", help="Center the ink within the advance width"),
    ] = False,
) -> None:
    """Trace or parse artwork and attach it to a character."""
    options = _context(ctx)
    _require_char(char, "character")

    if not artwork.is_file():
        print_error(
            f"Artwork file not found: {artwork}",
            details=f"The file '{artwork}' does not exist or is not accessible.",
        )
        raise typer.Exit(code=1)

    is_svg = artwork.suffix.lower() == ".svg"
    if not is_svg and not is_raster(artwork):
        print_error(
            f"Unsupported artwork format: {artwork.suffix or artwork.name}",
            details="Use an SVG document or a raster image (PNG, JPEG, GIF, BMP, TIFF, WebP).",
        )
        raise typer.Exit(code=1)

    with _reporting_errors():
        session = _load_session(state, options.settings)

        if is_svg:
            session.attach_svg(char, artwork)
        else:
            result = session.attach_image(char, artwork)
            if result.used_fallback and not options.quiet:
                console.print(
                    "[yellow]  No ink found in artwork; using a placeholder rectangle[/yellow]"
                )

        changes = {"scale": scale, "x": x, "y": y, "rotate": rotate}
        changes = {key: value for key, value in changes.items() if value is not None}
        if changes:
            session.update_glyph(char, **changes)
        if lock_cap:
            session.lock_cap_height(char)
        if lock_x:
            session.lock_x_height(char)
        if center:
            session.normalize_center(char)

        save_state(session.to_state(), state)

    if not options.quiet:
        print_ok(f"Attached {artwork.name} to {char!r}")


@app.command(context_settings={"ignore_unknown_options": True})
def kern(
    ctx: typer.Context,
    state: StateArgument,
    left: Annotated[str, typer.Argument(help="Left character", show_default=False)],
    right: Annotated[str, typer.Argument(help="Right character", show_default=False)],
    value: Annotated[
        float,
        typer.Argument(help="Adjustment in font units (negative tightens)", show_default=False),
    ],
) -> None:
    """Set the kerning adjustment of an ordered character pair.

    A value of 0 removes the pair.
    """
    options = _context(ctx)
    _require_char(left, "left character")
    _require_char(right, "right character")

    with _reporting_errors():
        session = _load_session(state, options.settings)
        if value == 0:
            session.remove_kerning(left, right)
        else:
            session.set_kerning(left, right, value)
        save_state(session.to_state(), state)

    if not options.quiet:
        print_ok(f"Kerning {left!r} {right!r} = {value:g}")


@app.command()
def preview(
    ctx: typer.Context,
    state: StateArgument,
    text: Annotated[str, typer.Argument(help="Text to lay out", show_default=False)],
    mode: Annotated[
        str,
        typer.Option(
            "--mode",
            "-m",
            help="Layout mode (typeset|monospace|grid|bounding)",
        ),
    ] = "typeset",
) -> None:
    """Lay out text and show advances, positions and collisions."""
    options = _context(ctx)
    try:
        layout_mode = LayoutMode(mode.lower())
    except ValueError:
        print_error(
            f"Invalid mode: {mode}",
            details=f"Valid values: {', '.join(m.value for m in LayoutMode)}",
        )
        raise typer.Exit(code=1)

    with _reporting_errors():
        session = _load_session(state, options.settings)
        entries = session.layout(text, layout_mode)

    print_layout(entries, layout_mode.value)


@app.command()
def export(
    ctx: typer.Context,
    state: StateArgument,
    style: Annotated[
        list[str] | None,
        typer.Option(
            "--style",
            "-s",
            help="Style to export (Regular|Bold|Italic|BoldItalic); repeatable",
        ),
    ] = None,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output-dir",
            "-o",
            help="Directory for the exported fonts (default: current directory)",
        ),
    ] = None,
    family: Annotated[
        str | None,
        typer.Option(
            "--family",
            "-f",
            help="Override the family name for this export",
        ),
    ] = None,
) -> None:
    """Export one OpenType font per requested style.

    Fonts are named {family}-{style}.otf. A glyph that cannot be measured
    aborts the export of its style without writing a file.
    """
    options = _context(ctx)

    styles: list[StyleVariant] = []
    for name in style or [StyleVariant.REGULAR.value]:
        try:
            styles.append(StyleVariant.parse(name))
        except ValueError:
            print_error(
                f"Invalid style: {name}",
                details=f"Valid values: {', '.join(s.value for s in StyleVariant)}",
            )
            raise typer.Exit(code=1)

    export_config = options.settings.export
    if output_dir is not None:
        export_config = export_config.model_copy(update={"output_dir": output_dir})
    settings = options.settings.model_copy(update={"export": export_config})

    with _reporting_errors():
        session = _load_session(state, settings)
        if family:
            session.override_metadata(family_name=family)

        if not options.quiet:
            print_header(__version__)
            print_state_info(
                path=str(state),
                artwork_count=sum(1 for r in session.records.values() if r.has_outline),
                kerning_count=len(session.kerning),
                family=session.metadata.family_name,
            )
            print_step(f"Exporting {len(styles)} style{'s' if len(styles) != 1 else ''}")

        for variant in styles:
            path = session.export(variant)
            if not options.quiet:
                print_export_result(
                    output_path=str(path),
                    file_size=_format_file_size(path),
                    stats=session.assembler.last_stats,
                )


@app.command("import")
def import_font(
    ctx: typer.Context,
    font: Annotated[
        Path,
        typer.Argument(
            help="Path to an existing TTF/OTF font file",
            show_default=False,
        ),
    ],
    state: StateArgument,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Overwrite an existing state file",
        ),
    ] = False,
) -> None:
    """Build a session state from the outlines of an existing font."""
    options = _context(ctx)
    _refuse_overwrite(state, force)

    with _reporting_errors():
        with FontImporter(font) as importer:
            result = importer.import_glyphs()

        session = FontSession.from_state(ProjectState(records=result.records), options.settings)
        if result.family_name:
            session.override_metadata(family_name=result.family_name)
        save_state(session.to_state(), state)

    if not options.quiet:
        print_ok(
            f"Imported {len(result.records)} glyphs from {font.name} "
            f"({len(result.skipped)} skipped)"
        )


def _format_file_size(path: Path) -> str:
    """Format file size in human-readable form.

    Args:
        path: Path to file

    Returns:
        Human-readable file size (e.g., "428 KB")
    """
    try:
        size_bytes = path.stat().st_size
    except OSError:
        return "unknown"
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.0f} KB"
    else:
        return f"{size_bytes / (1024 * 1024):.1f} MB"


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
