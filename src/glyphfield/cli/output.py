"""Rich console output for the glyphfield CLI.

Everything the command prints goes through the shared ``console`` so that
progress bars, summaries and errors interleave cleanly.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

console = Console()

MARK_STEP = "▸"
MARK_OK = "✓"
MARK_FAIL = "✗"
SEP = "·"


def create_progress() -> Progress:
    """Progress bar counting rendered glyphs."""
    return Progress(
        TextColumn("  [progress.description]{task.description}"),
        BarColumn(bar_width=32, complete_style="cyan", finished_style="green"),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
    )


def print_header(version: str) -> None:
    """Print the program name and version."""
    console.print(f"\n[bold]Glyphfield[/bold] [dim]v{version}[/dim]")
    console.rule(style="dim")


def print_step(message: str) -> None:
    """Print the start of a pipeline step."""
    console.print(f"\n[bold]{MARK_STEP}[/bold] {message}")


def print_font_info(font_path: str, font_type: str, glyph_count: int, upm: int) -> None:
    """Print the loaded font's path and basic metrics.

    Args:
        font_path: Path to the font file
        font_type: "TrueType" or "OpenType"
        glyph_count: Number of glyphs in the font
        upm: Units per em
    """
    # Text avoids markup interpretation of brackets in paths.
    console.print(Text.assemble("  ", (font_path, "bold"), f" [{font_type}]"))
    console.print(f"  [dim]{glyph_count:,} glyphs {SEP} {upm:,} units per em[/dim]")


def print_render_info(mode: str, size: int, pixel_range: float, output_format: str) -> None:
    """Print the field settings as a compact table."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="dim")
    table.add_column()
    table.add_row("field", mode.upper())
    table.add_row("bitmap", f"{size} x {size} px")
    table.add_row("range", f"{pixel_range:g} px")
    table.add_row("output", f".{output_format}")
    console.print(table)


def _elapsed(seconds: float) -> str:
    if seconds >= 60:
        minutes, rest = divmod(seconds, 60)
        return f"{int(minutes)}m {rest:.1f}s"
    if seconds >= 1:
        return f"{seconds:.1f}s"
    return f"{seconds * 1000:.0f}ms"


def print_success(
    output_dir: str,
    total_time_s: float,
    rendered: int,
    skipped: int,
    corrected: int,
    errors: int,
    avg_time_ms: float | None = None,
) -> None:
    """Print the end-of-run summary.

    Args:
        output_dir: Directory holding the written bitmaps
        total_time_s: Wall time of the run
        rendered: Glyphs written
        skipped: Glyphs without outline
        corrected: Texels changed by clash correction
        errors: Glyphs that failed
        avg_time_ms: Mean render time per glyph, omitted if None
    """
    status = "[bold green]Done[/bold green]" if errors == 0 else "[bold yellow]Done[/bold yellow]"
    console.print(f"\n{MARK_OK} {status} in {_elapsed(total_time_s)} {SEP} ", end="")
    console.print(Text(output_dir, style="bold"))

    counts = f"  {rendered} rendered {SEP} {skipped} skipped {SEP} {corrected} texels corrected"
    if errors:
        counts += f" {SEP} [red]{errors} failed[/red]"
    console.print(counts)

    if avg_time_ms is not None:
        console.print(f"  [dim]{avg_time_ms:.1f}ms per glyph[/dim]")


def print_glyph_errors(errors: list[tuple[str, str]]) -> None:
    """List the glyphs that failed with their messages."""
    for glyph_name, message in errors:
        console.print(Text.assemble(("  " + MARK_FAIL + " ", "red"), (glyph_name, "bold"), f" {message}"))


def print_error(message: str, details: str | None = None) -> None:
    """Print a fatal error.

    Args:
        message: One line description
        details: Extra context printed below it
    """
    console.print(f"\n[bold red]{MARK_FAIL} {message}[/bold red]")
    if details:
        console.print(Text(details, style="dim"), soft_wrap=True)
