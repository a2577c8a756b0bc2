"""CLI application entry point for rasterkit.

This module provides the main CLI interface using Typer. Results are written
to stdout (or ``--output``); status and errors go to stderr.
"""

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Annotated

import structlog
import typer

from rasterkit import __version__
from rasterkit.cli.output import (
    console,
    create_progress,
    print_batch_summary,
    print_cancellation_summary,
    print_clamped,
    print_clip_summary,
    print_error,
    print_pixel_summary,
    print_step,
    print_written,
)
from rasterkit.config import (
    ClipConfig,
    LoggingConfig,
    OutputFormat,
    ProcessingConfig,
    RasterkitSettings,
    StrokeConfig,
    SurfaceConfig,
)
from rasterkit.core import (
    BatchProcessor,
    bresenham_line,
    build_thick_line,
    fill_disk,
)
from rasterkit.domain import IntPoint, PixelSet, RealSegment
from rasterkit.exceptions import (
    InputError,
    OutputError,
    ProcessingCancelledError,
    RasterkitError,
)
from rasterkit.io import (
    InputReader,
    ResultWriter,
    format_pixels,
    format_segments,
    parse_segments,
    parse_window,
)
from rasterkit.utils import configure_logging

# Create the Typer app
app = typer.Typer(
    name="rasterkit",
    help="Rasterize lines, disks and thick lines, and clip segments to a rectangle.",
    add_completion=False,
    no_args_is_help=True,
)

# Lets positional coordinates be negative (e.g. `line -5 0 20 0`)
NUMERIC_ARGS = {"ignore_unknown_options": True}


class CliState:
    """Settings and logger shared by all commands of one invocation."""

    def __init__(
        self,
        settings: RasterkitSettings,
        logger: structlog.stdlib.BoundLogger,
        output: Path | None,
        quiet: bool,
    ) -> None:
        self.settings = settings
        self.logger = logger
        self.output = output
        self.quiet = quiet


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Rasterkit[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    surface_width: Annotated[
        int,
        typer.Option(
            "--surface-width",
            help="Drawing surface width in pixels",
            min=1,
        ),
    ] = 900,
    surface_height: Annotated[
        int,
        typer.Option(
            "--surface-height",
            help="Drawing surface height in pixels",
            min=1,
        ),
    ] = 600,
    no_clamp: Annotated[
        bool,
        typer.Option(
            "--no-clamp",
            help="Do not clamp line endpoints onto the surface",
        ),
    ] = False,
    fmt: Annotated[
        OutputFormat | None,
        typer.Option(
            "--format",
            "-f",
            help="Output format (text|json; default: from --output extension, else text)",
        ),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write results to this file instead of stdout",
        ),
    ] = None,
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
            help="Only write results, no status output",
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
    """Rasterize lines, disks and thick lines, and clip segments to a rectangle."""
    if log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        print_error(
            f"Invalid log level: {log_level}",
            details="Valid values: DEBUG, INFO, WARNING, ERROR",
        )
        raise typer.Exit(code=1)

    if fmt is None:
        fmt = ResultWriter.format_for_path(output) if output is not None else OutputFormat.TEXT

    settings = RasterkitSettings(
        surface=SurfaceConfig(
            width=surface_width,
            height=surface_height,
            clamp_endpoints=not no_clamp,
        ),
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level,
        ),
        output_format=fmt,
    )
    logger = configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    ctx.obj = CliState(settings=settings, logger=logger, output=output, quiet=quiet)


def _prepare_endpoint(state: CliState, x: int, y: int) -> IntPoint:
    """Clamp an endpoint onto the surface when clamping is enabled."""
    point = IntPoint(x, y)
    if not state.settings.surface.clamp_endpoints:
        return point
    clamped = state.settings.surface.to_surface().clamp(point)
    if clamped != point:
        state.logger.info("Endpoint clamped", original=[x, y], clamped=list(clamped.to_tuple()))
        if not state.quiet:
            print_clamped(point.to_tuple(), clamped.to_tuple())
    return clamped


def _emit_pixels(state: CliState, pixels: PixelSet) -> None:
    """Write pixels to the output file or stdout."""
    if not state.quiet:
        print_pixel_summary(len(pixels), pixels.bounding_box())
    if state.output is None:
        typer.echo(format_pixels(pixels, state.settings.output_format), nl=False)
        return
    ResultWriter(state.output, state.settings.output_format).write_pixels(pixels)
    if not state.quiet:
        print_written(str(state.output))


def _emit_segments(state: CliState, segments: list[RealSegment]) -> None:
    """Write segments to the output file or stdout."""
    if state.output is None:
        typer.echo(format_segments(segments, state.settings.output_format), nl=False)
        return
    ResultWriter(state.output, state.settings.output_format).write_segments(segments)
    if not state.quiet:
        print_written(str(state.output))


def _run(state: CliState, action: Callable[[], None]) -> None:
    """Run a command body, mapping errors to exit codes."""
    try:
        action()
    except InputError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except OutputError as e:
        print_error(f"Could not write results: {e.reason}")
        raise typer.Exit(code=1)
    except RasterkitError as e:
        print_error(str(e))
        raise typer.Exit(code=1)
    except typer.Exit:
        raise
    except Exception as e:
        state.logger.exception("Unexpected error")
        print_error(f"Unexpected error: {e}")
        raise typer.Exit(code=1)


@app.command(context_settings=NUMERIC_ARGS)
def line(
    ctx: typer.Context,
    x0: Annotated[int, typer.Argument(help="Start x")],
    y0: Annotated[int, typer.Argument(help="Start y")],
    x1: Annotated[int, typer.Argument(help="End x")],
    y1: Annotated[int, typer.Argument(help="End y")],
) -> None:
    """Rasterize a one pixel line with Bresenham's algorithm.

    Example:
        rasterkit line 0 0 4 2
    """
    state: CliState = ctx.obj

    def action() -> None:
        p0 = _prepare_endpoint(state, x0, y0)
        p1 = _prepare_endpoint(state, x1, y1)
        pixels = PixelSet.from_points(bresenham_line(p0, p1))
        state.logger.info("Line rasterized", start=[p0.x, p0.y], end=[p1.x, p1.y], pixels=len(pixels))
        _emit_pixels(state, pixels)

    _run(state, action)


@app.command(context_settings=NUMERIC_ARGS)
def thick(
    ctx: typer.Context,
    x0: Annotated[int, typer.Argument(help="Start x")],
    y0: Annotated[int, typer.Argument(help="Start y")],
    x1: Annotated[int, typer.Argument(help="End x")],
    y1: Annotated[int, typer.Argument(help="End y")],
    width: Annotated[
        int,
        typer.Option(
            "--width",
            "-w",
            help="Stroke width in pixels (values below 1 are treated as 1)",
        ),
    ] = 1,
) -> None:
    """Rasterize a thick line by stamping disks along its centerline.

    Example:
        rasterkit thick 50 50 700 500 --width 7
    """
    state: CliState = ctx.obj

    def action() -> None:
        p0 = _prepare_endpoint(state, x0, y0)
        p1 = _prepare_endpoint(state, x1, y1)
        surface = state.settings.surface.to_surface()
        pixels = build_thick_line(p0, p1, width, surface)
        state.logger.info(
            "Thick line rasterized",
            start=[p0.x, p0.y],
            end=[p1.x, p1.y],
            width=width,
            pixels=len(pixels),
        )
        _emit_pixels(state, pixels)

    _run(state, action)


@app.command(context_settings=NUMERIC_ARGS)
def disk(
    ctx: typer.Context,
    cx: Annotated[int, typer.Argument(help="Center x")],
    cy: Annotated[int, typer.Argument(help="Center y")],
    radius: Annotated[int, typer.Argument(help="Radius in pixels", min=0)],
) -> None:
    """Rasterize a filled disk with the midpoint circle algorithm.

    Pixels outside the drawing surface are dropped.
    """
    state: CliState = ctx.obj

    def action() -> None:
        surface = state.settings.surface.to_surface()
        pixels = PixelSet.from_points(fill_disk(IntPoint(cx, cy), radius, surface))
        state.logger.info("Disk rasterized", center=[cx, cy], radius=radius, pixels=len(pixels))
        _emit_pixels(state, pixels)

    _run(state, action)


@app.command()
def clip(
    ctx: typer.Context,
    segments_file: Annotated[
        Path | None,
        typer.Argument(
            help="File of 'x0 y0 x1 y1' records (default: read stdin)",
            show_default=False,
        ),
    ] = None,
    window: Annotated[
        tuple[float, float, float, float],
        typer.Option(
            "--window",
            help="Clip window as XMIN YMIN XMAX YMAX (reversed bounds are swapped)",
        ),
    ] = (-50.0, -50.0, 50.0, 50.0),
    epsilon: Annotated[
        float,
        typer.Option(
            "--epsilon",
            help="Treat direction components up to this size as parallel (0 = exact)",
            min=0.0,
            max=1.0,
        ),
    ] = 0.0,
) -> None:
    """Clip segments to a rectangle with the Liang-Barsky algorithm.

    Only the visible parts are written, in input order.
    """
    state: CliState = ctx.obj

    def action() -> None:
        clip_window = parse_window(list(window))
        if segments_file is None:
            segments: list[RealSegment] = parse_segments(sys.stdin.read(), "<stdin>")
        else:
            segments = InputReader(segments_file).read_segments()

        settings = state.settings.model_copy(
            update={
                "clip": ClipConfig(
                    xmin=clip_window.xmin,
                    ymin=clip_window.ymin,
                    xmax=clip_window.xmax,
                    ymax=clip_window.ymax,
                    parallel_epsilon=epsilon,
                )
            }
        )
        processor = BatchProcessor(settings, logger=state.logger)
        results = processor.clip(segments)
        visible = [r.segment for r in results if r.visible and r.segment is not None]

        if not state.quiet:
            print_clip_summary(len(results), len(visible))
        _emit_segments(state, visible)

    _run(state, action)


@app.command()
def batch(
    ctx: typer.Context,
    strokes_file: Annotated[
        Path,
        typer.Argument(
            help="File of 'x0 y0 x1 y1 [W]' records",
            show_default=False,
        ),
    ],
    default_width: Annotated[
        int,
        typer.Option(
            "--width",
            "-w",
            help="Width for records that omit one",
            min=1,
        ),
    ] = 1,
    workers: Annotated[
        int | None,
        typer.Option(
            "--workers",
            "-j",
            help="Number of parallel workers (default: auto)",
            min=1,
        ),
    ] = None,
) -> None:
    """Rasterize every stroke in a file and write the merged pixel set."""
    state: CliState = ctx.obj
    settings = state.settings.model_copy(
        update={
            "stroke": StrokeConfig(default_width=default_width),
            "processing": ProcessingConfig(max_workers=workers),
        }
    )

    def action() -> None:
        strokes = InputReader(strokes_file).read_strokes(settings.stroke.default_width)
        processor = BatchProcessor(settings, logger=state.logger)

        if not state.quiet:
            print_step(f"Rasterizing {len(strokes)} strokes")

        try:
            if not state.quiet:
                with create_progress() as progress:
                    task_id = progress.add_task("strokes", total=len(strokes))

                    def update_progress(completed: int, *_: object) -> None:
                        progress.update(task_id, completed=completed)

                    result = processor.rasterize_strokes(
                        strokes, max_workers=workers, progress_callback=update_progress
                    )
            else:
                result = processor.rasterize_strokes(strokes, max_workers=workers)
        except (KeyboardInterrupt, ProcessingCancelledError):
            stats = processor.run_logger.stats
            if not state.quiet:
                print_cancellation_summary(stats.processed_count, stats.cancelled_count)
            raise typer.Exit(code=130) from None  # Standard Unix SIGINT exit code

        pixels = result.merged()
        stats = result.stats
        if not state.quiet:
            print_batch_summary(
                processed=stats.processed_count,
                errors=stats.error_count,
                pixels=len(pixels),
                total_time_s=stats.duration_seconds,
                avg_time_ms=stats.avg_job_time_ms,
                max_time_ms=stats.max_job_time_ms,
            )
        _emit_pixels(state, pixels)

    _run(state, action)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
