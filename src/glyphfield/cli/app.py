"""Typer command for rendering glyph distance fields from a font."""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from glyphfield import __version__
from glyphfield.cli.output import (
    console,
    create_progress,
    print_error,
    print_font_info,
    print_glyph_errors,
    print_header,
    print_render_info,
    print_step,
    print_success,
)
from glyphfield.config import (
    ColoringConfig,
    ColoringStrategy,
    CorrectionConfig,
    FieldMode,
    GenerationConfig,
    GlyphfieldSettings,
    LoggingConfig,
    OutputConfig,
    OutputFormat,
    ProcessingConfig,
)
from glyphfield.core import FieldProcessor
from glyphfield.exceptions import FontLoadError, GlyphfieldError
from glyphfield.io import FontReader
from glyphfield.utils import ProcessingStats

app = typer.Typer(
    name="glyphfield",
    help="Generate multi-channel signed distance fields for font glyphs.",
    add_completion=False,
    no_args_is_help=True,
)


def _show_version(value: bool) -> None:
    if value:
        console.print(f"glyphfield {__version__}")
        raise typer.Exit()


def _fail(message: str, details: str | None = None) -> typer.Exit:
    print_error(message, details=details)
    return typer.Exit(code=1)


def _parse_choice(enum_type, value: str, option: str):
    """Convert an option string to its enum member."""
    try:
        return enum_type(value.lower())
    except ValueError:
        choices = "|".join(member.value for member in enum_type)
        raise _fail(f"Unknown {option} '{value}'", details=f"Expected one of {choices}") from None


def _check_font_path(path: Path) -> None:
    if not path.exists():
        raise _fail(f"Font not found: {path}")
    if not path.is_file():
        raise _fail(f"Not a font file: {path}", details="Expected a .ttf or .otf file")


def _render(
    processor: FieldProcessor, font: Path, characters: str, output_dir: Path, quiet: bool
) -> ProcessingStats:
    if quiet:
        return processor.render_font(font_path=font, characters=characters, output_dir=output_dir)

    with create_progress() as progress:
        task = progress.add_task("Rendering", total=len(dict.fromkeys(characters)))
        return processor.render_font(
            font_path=font,
            characters=characters,
            output_dir=output_dir,
            progress_callback=lambda completed, *_: progress.update(task, completed=completed),
        )


@app.command()
def render(
    input_font: Annotated[
        Path,
        typer.Argument(help="TrueType or OpenType font to read", show_default=False),
    ],
    characters: Annotated[
        str,
        typer.Argument(help="Characters whose glyphs are rendered", show_default=False),
    ],
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory for the generated files"),
    ] = Path("glyphfield-out"),
    size: Annotated[
        int,
        typer.Option("--size", "-s", help="Bitmap edge length in pixels", min=4, max=4096),
    ] = 32,
    pixel_range: Annotated[
        float,
        typer.Option("--range", "-r", help="Width of the distance falloff in pixels"),
    ] = 4.0,
    mode: Annotated[
        str,
        typer.Option("--mode", help="msdf, sdf or psdf"),
    ] = "msdf",
    output_format: Annotated[
        str,
        typer.Option("--format", help="png (8-bit) or npy (float32)"),
    ] = "png",
    angle_threshold: Annotated[
        float,
        typer.Option("--angle-threshold", help="Corner angle threshold in radians"),
    ] = 3.0,
    seed: Annotated[
        int,
        typer.Option("--seed", help="Seed for edge coloring", min=0),
    ] = 0,
    coloring: Annotated[
        str,
        typer.Option("--coloring", help="simple or ink_trap"),
    ] = "simple",
    no_correction: Annotated[
        bool,
        typer.Option("--no-correction", help="Keep MSDF clashes uncorrected"),
    ] = False,
    no_sign_correction: Annotated[
        bool,
        typer.Option("--no-sign-correction", help="Keep distance signs as generated"),
    ] = False,
    orient: Annotated[
        bool,
        typer.Option("--orient", help="Fix contour orientation before coloring"),
    ] = False,
    workers: Annotated[
        int | None,
        typer.Option("--workers", "-j", help="Worker processes (default: one per CPU)", min=1),
    ] = None,
    log_file: Annotated[
        Path | None,
        typer.Option("--log-file", help="Also write JSON logs to this file"),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option("--log-level", help="Console log level"),
    ] = "WARNING",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log debug output to the console"),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option("--quiet", "-q", help="Only print errors"),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Print the version and exit",
            callback=_show_version,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Render a distance field bitmap for each character of a font.

    Every distinct character is looked up in the font's cmap, fitted into a
    SIZE x SIZE bitmap and written to OUTPUT_DIR as <glyph name>.<format>.
    A shader reconstructs the outline at 0.5 of median(R, G, B).

    Example:
        glyphfield Roboto-Regular.ttf ABC -o atlas --size 48
    """
    if verbose and quiet:
        raise _fail("--verbose and --quiet are mutually exclusive")
    _check_font_path(input_font)
    if not characters:
        raise _fail("Nothing to render", details="Pass at least one character")

    field_mode = _parse_choice(FieldMode, mode, "mode")
    file_format = _parse_choice(OutputFormat, output_format, "format")
    strategy = _parse_choice(ColoringStrategy, coloring, "coloring")

    try:
        settings = GlyphfieldSettings(
            coloring=ColoringConfig(strategy=strategy, angle_threshold=angle_threshold, seed=seed),
            generation=GenerationConfig(
                mode=field_mode, size=size, pixel_range=pixel_range, orient_contours=orient
            ),
            correction=CorrectionConfig(
                enabled=not no_correction, sign_correction=not no_sign_correction
            ),
            processing=ProcessingConfig(max_workers=workers),
            output=OutputConfig(format=file_format),
            logging=LoggingConfig(log_file=log_file, log_level="DEBUG" if verbose else log_level),
        )
    except ValidationError as e:
        raise _fail("Invalid option value", details=str(e)) from None

    try:
        if not quiet:
            print_header(__version__)
            print_step("Font")
            with FontReader(input_font) as reader:
                print_font_info(
                    str(input_font), reader.format, reader.glyph_count, reader.units_per_em
                )
            print_step("Rendering")
            print_render_info(field_mode.value, size, pixel_range, file_format.value)

        processor = FieldProcessor(settings, quiet=quiet)
        stats = _render(processor, input_font, characters, output_dir, quiet)
    except FontLoadError as e:
        raise _fail("Could not load font", details=e.reason) from None
    except GlyphfieldError as e:
        raise _fail(str(e)) from None

    if not quiet:
        print_success(
            output_dir=str(output_dir),
            total_time_s=stats.duration_seconds,
            rendered=stats.rendered_count,
            skipped=stats.skipped_count,
            corrected=stats.corrected_texels,
            errors=stats.error_count,
            avg_time_ms=stats.average_glyph_ms if stats.glyph_timings_ms else None,
        )
    if stats.errors:
        print_glyph_errors(stats.errors)
        raise typer.Exit(code=1)


def cli() -> None:
    """Console script entry point."""
    app()


def main() -> None:
    """Alias of ``cli`` for ``python -m`` style launchers."""
    cli()


if __name__ == "__main__":
    cli()
