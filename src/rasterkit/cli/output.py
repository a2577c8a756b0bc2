"""Rich console output helpers for the CLI.

Status messages go to stderr so that pixel and segment data written to stdout
can be piped into other tools.
"""

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.text import Text

console = Console(stderr=True)

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def create_progress() -> Progress:
    """Create a rich progress bar for batch processing.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"{SYM_STEP} {message}")


def print_clamped(original: tuple[int, int], clamped: tuple[int, int]) -> None:
    """Report an endpoint that was moved onto the surface."""
    console.print(
        f"  [yellow]endpoint {original[0]},{original[1]} clamped to "
        f"{clamped[0]},{clamped[1]}[/yellow]"
    )


def print_pixel_summary(count: int, bbox: tuple[int, int, int, int] | None) -> None:
    """Print the size of a rasterized result.

    Args:
        count: Number of unique pixels
        bbox: Bounding box (min_x, min_y, max_x, max_y) or None when empty
    """
    line = f"[bold green]{SYM_OK}[/bold green] {count:,} pixels"
    if bbox is not None:
        line += f" {SYM_DOT} x {bbox[0]}..{bbox[2]} {SYM_DOT} y {bbox[1]}..{bbox[3]}"
    console.print(line)


def print_clip_summary(total: int, visible: int) -> None:
    """Print how many segments survived clipping.

    Args:
        total: Number of input segments
        visible: Number of visible clipped segments
    """
    console.print(
        f"[bold green]{SYM_OK}[/bold green] {visible} of {total} segments visible "
        f"{SYM_DOT} {total - visible} rejected"
    )


def print_batch_summary(
    processed: int,
    errors: int,
    pixels: int,
    total_time_s: float,
    avg_time_ms: float | None = None,
    max_time_ms: float | None = None,
) -> None:
    """Print batch summary.

    Args:
        processed: Number of strokes rasterized
        errors: Number of failed strokes
        pixels: Total unique pixels written
        total_time_s: Total processing time in seconds
        avg_time_ms: Average time per stroke in milliseconds
        max_time_ms: Slowest stroke in milliseconds
    """
    console.print(f"[bold green]{SYM_OK} Complete[/bold green] in {_format_time(total_time_s)}")
    error_style = "red" if errors > 0 else "green"
    console.print(
        f"  {processed} strokes {SYM_DOT} {pixels:,} pixels {SYM_DOT} "
        f"[{error_style}]{errors} errors[/{error_style}]"
    )
    if avg_time_ms is not None:
        line = f"  {avg_time_ms:.1f}ms avg per stroke"
        if max_time_ms is not None:
            line += f" {SYM_DOT} {max_time_ms:.1f}ms max"
        console.print(line)


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


def print_written(path: str) -> None:
    """Print the output file location."""
    line = Text("  ")
    line.append(path, style="bold")
    console.print(line)


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")


def print_cancellation_summary(processed: int, cancelled: int) -> None:
    """Print cancellation summary.

    Args:
        processed: Number of strokes completed before cancellation
        cancelled: Number of pending tasks that were cancelled
    """
    console.print(f"\n{SYM_DOT} [bold]Cancelled[/bold]")
    console.print(f"  {processed} strokes completed {SYM_DOT} {cancelled} tasks cancelled")
    console.print("  No output written")
