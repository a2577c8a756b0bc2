"""Batch processing of stroke and clip jobs.

Strokes are independent, so a batch can be rasterized in worker processes
using ProcessPoolExecutor. Results are always returned in input order.

Key components:
- process_stroke: Top-level picklable function for parallel execution
- BatchProcessor: Orchestrator for stroke and clip batches
"""

import time
import traceback
from collections.abc import Callable, Sequence
from concurrent.futures import Future, ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any

import structlog

from rasterkit.config import RasterkitSettings
from rasterkit.core.clipping import clip_segment
from rasterkit.core.thick import build_stroke
from rasterkit.domain import ClipResult, IntPoint, PixelSet, RealSegment, StrokeSpec, Surface
from rasterkit.exceptions import ProcessingCancelledError
from rasterkit.utils import RunLogger, RunStats, configure_logging


def process_stroke(
    stroke_dict: dict[str, Any],
    surface_size: tuple[int, int] | None,
) -> dict[str, Any]:
    """Rasterize a single stroke.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        stroke_dict: Serialized stroke (from StrokeSpec.to_dict())
        surface_size: (width, height) of the drawing surface, or None

    Returns:
        Dictionary containing either:
        - Success: {"pixels": [[x, y], ...], "duration_ms": float}
        - Error: {"error": str, "traceback": str, "duration_ms": float}
    """
    start_time = time.time()

    try:
        stroke = StrokeSpec.from_dict(stroke_dict)
        surface = Surface(*surface_size) if surface_size is not None else None
        pixels = build_stroke(stroke, surface)

        duration_ms = (time.time() - start_time) * 1000
        return {
            "pixels": [list(p) for p in pixels.to_tuples()],
            "duration_ms": duration_ms,
        }

    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        return {
            "error": str(e),
            "traceback": traceback.format_exc(),
            "duration_ms": duration_ms,
        }


@dataclass
class StrokeBatchResult:
    """Pixels produced by a stroke batch.

    Attributes:
        pixel_sets: One entry per input stroke, None where the stroke failed
        stats: Counts and timing for the run
    """

    pixel_sets: list[PixelSet | None] = field(default_factory=list)
    stats: RunStats = field(default_factory=RunStats)

    def merged(self) -> PixelSet:
        """Union of all successfully rasterized strokes."""
        points = []
        for pixels in self.pixel_sets:
            if pixels is not None:
                points.extend(pixels)
        return PixelSet.from_points(points)


class BatchProcessor:
    """Orchestrates batches of thick-line and clip jobs.

    Example:
        settings = RasterkitSettings()
        processor = BatchProcessor(settings)
        result = processor.rasterize_strokes(strokes, max_workers=4)
        pixels = result.merged()
    """

    def __init__(
        self,
        config: RasterkitSettings,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the batch processor with configuration.

        Args:
            config: Rasterkit settings containing surface, clip and logging config
            logger: Already configured logger; logging is configured from
                ``config.logging`` when omitted
        """
        self.config = config
        if logger is None:
            logger = configure_logging(
                log_file=config.logging.log_file,
                console_level=config.logging.log_level,
                file_level=config.logging.file_log_level,
            )
        self.logger = logger
        self.run_logger = RunLogger(self.logger)

    def _surface_size(self) -> tuple[int, int]:
        return (self.config.surface.width, self.config.surface.height)

    def _prepare(self, stroke: StrokeSpec) -> StrokeSpec:
        """Clamp stroke endpoints onto the surface when configured."""
        if not self.config.surface.clamp_endpoints:
            return stroke
        surface = self.config.surface.to_surface()
        return StrokeSpec(surface.clamp(stroke.start), surface.clamp(stroke.end), stroke.width)

    def rasterize_strokes(
        self,
        strokes: Sequence[StrokeSpec],
        max_workers: int | None = None,
        progress_callback: Callable[[int, int], None] | None = None,
    ) -> StrokeBatchResult:
        """Rasterize a batch of strokes.

        Args:
            strokes: Strokes to rasterize
            max_workers: Maximum worker processes (None = config, 1 = in-process)
            progress_callback: Optional callback(completed, total)

        Returns:
            StrokeBatchResult with per-stroke pixel sets in input order

        Raises:
            ProcessingCancelledError: If a parallel run is interrupted by the user
            KeyboardInterrupt: If an in-process run is interrupted by the user
        """
        if max_workers is None:
            max_workers = self.config.processing.max_workers

        self.run_logger = RunLogger(self.logger)
        stats = self.run_logger.stats
        stats.start_time = time.time()

        tasks = [self._prepare(stroke).to_dict() for stroke in strokes]
        self.logger.info(
            "Starting stroke batch",
            stroke_count=len(tasks),
            max_workers=max_workers,
        )

        if max_workers == 1 or len(tasks) <= 1:
            results = self._run_sequential(tasks, progress_callback)
        else:
            results = self._run_parallel(tasks, max_workers, progress_callback)

        stats.end_time = time.time()
        self.logger.info(
            "Stroke batch complete",
            processed=stats.processed_count,
            errors=stats.error_count,
            pixels=stats.pixel_count,
            duration_seconds=round(stats.duration_seconds, 3),
        )
        return StrokeBatchResult(pixel_sets=results, stats=stats)

    def _collect(self, index: int, result: dict[str, Any]) -> PixelSet | None:
        """Convert one worker result, recording statistics."""
        if "error" in result:
            self.run_logger.log_job_error(
                index=index,
                error=result["error"],
                traceback=result.get("traceback"),
            )
            return None

        pixels = PixelSet.from_points(IntPoint.from_tuple(p) for p in result["pixels"])
        self.run_logger.log_stroke_complete(
            index=index,
            pixel_count=len(pixels),
            duration_ms=result.get("duration_ms", 0.0),
        )
        return pixels

    def _run_sequential(
        self,
        tasks: list[dict[str, Any]],
        progress_callback: Callable[[int, int], None] | None,
    ) -> list[PixelSet | None]:
        results: list[PixelSet | None] = []
        surface_size = self._surface_size()
        for index, task in enumerate(tasks):
            self.run_logger.log_job_start(index, "stroke")
            results.append(self._collect(index, process_stroke(task, surface_size)))
            if progress_callback is not None:
                progress_callback(index + 1, len(tasks))
        return results

    def _run_parallel(
        self,
        tasks: list[dict[str, Any]],
        max_workers: int | None,
        progress_callback: Callable[[int, int], None] | None,
    ) -> list[PixelSet | None]:
        results: list[PixelSet | None] = [None] * len(tasks)
        surface_size = self._surface_size()
        total = len(tasks)
        completed = 0
        pending_futures: dict[Future[dict[str, Any]], int] = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for index, task in enumerate(tasks):
                future = executor.submit(process_stroke, task, surface_size)
                pending_futures[future] = index

            try:
                for future in as_completed(list(pending_futures)):
                    index = pending_futures.pop(future)
                    try:
                        results[index] = self._collect(index, future.result())
                    except Exception as e:
                        # Executor-level error
                        self.run_logger.log_job_error(
                            index=index,
                            error=str(e),
                            traceback=traceback.format_exc(),
                        )

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total)

            except KeyboardInterrupt:
                self.run_logger.log_cancelled(len(pending_futures))
                executor.shutdown(wait=True, cancel_futures=True)
                raise ProcessingCancelledError(completed, len(pending_futures)) from None

        return results

    def clip(self, segments: Sequence[RealSegment]) -> list[ClipResult]:
        """Clip a batch of segments against the configured window.

        Clipping is constant time per segment, so it always runs in-process.

        Args:
            segments: Segments to clip

        Returns:
            One ClipResult per input segment, in input order
        """
        self.run_logger = RunLogger(self.logger)
        stats = self.run_logger.stats
        stats.start_time = time.time()

        window = self.config.clip.to_window()
        epsilon = self.config.clip.parallel_epsilon

        results: list[ClipResult] = []
        for index, segment in enumerate(segments):
            job_start = time.time()
            result = clip_segment(segment, window, epsilon)
            self.run_logger.log_clip_complete(
                index=index,
                visible=result.visible,
                duration_ms=(time.time() - job_start) * 1000,
            )
            results.append(result)

        stats.end_time = time.time()
        self.logger.info(
            "Clip batch complete",
            segments=len(results),
            visible=stats.segment_count,
            window=list(window.to_tuple()),
        )
        return results
