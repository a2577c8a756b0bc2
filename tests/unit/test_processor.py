"""Unit tests for batch processing."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
import structlog

from rasterkit.config import (
    ClipConfig,
    LoggingConfig,
    ProcessingConfig,
    RasterkitSettings,
    SurfaceConfig,
)
from rasterkit.core.processor import BatchProcessor, StrokeBatchResult, process_stroke
from rasterkit.core.thick import build_thick_line
from rasterkit.domain import IntPoint, PixelSet, RealSegment, StrokeSpec, Surface
from rasterkit.exceptions import ProcessingCancelledError


@pytest.fixture
def logger():
    """A plain structlog logger so tests do not touch global handlers."""
    return structlog.get_logger("rasterkit.test")


@pytest.fixture
def strokes() -> list[StrokeSpec]:
    return [
        StrokeSpec(IntPoint(10, 10), IntPoint(40, 25), 3),
        StrokeSpec(IntPoint(5, 80), IntPoint(60, 2), 1),
        StrokeSpec(IntPoint(100, 100), IntPoint(100, 100), 9),
        StrokeSpec(IntPoint(0, 0), IntPoint(30, 0), 5),
    ]


class TestProcessStroke:
    """Tests for the picklable worker function."""

    def test_success(self):
        """A valid stroke returns its pixels as lists."""
        stroke = StrokeSpec(IntPoint(0, 0), IntPoint(4, 2), 1)
        result = process_stroke(stroke.to_dict(), None)
        assert "error" not in result
        assert result["pixels"] == [[0, 0], [1, 0], [2, 1], [3, 1], [4, 2]]
        assert result["duration_ms"] >= 0

    def test_surface_applied(self):
        """The surface size bounds the pixels."""
        stroke = StrokeSpec(IntPoint(0, 0), IntPoint(5, 0), 5)
        result = process_stroke(stroke.to_dict(), (10, 10))
        assert all(x >= 0 and y >= 0 for x, y in result["pixels"])

    def test_error_is_returned(self):
        """Malformed input is reported, not raised."""
        result = process_stroke({"start": [0, 0]}, None)
        assert "error" in result
        assert "traceback" in result
        assert "pixels" not in result


class TestRasterizeStrokes:
    """Tests for BatchProcessor.rasterize_strokes."""

    def test_sequential_matches_kernel(self, logger, strokes):
        """In-process results equal direct kernel calls."""
        settings = RasterkitSettings()
        processor = BatchProcessor(settings, logger=logger)
        result = processor.rasterize_strokes(strokes, max_workers=1)

        surface = Surface(900, 600)
        expected = [build_thick_line(s.start, s.end, s.width, surface) for s in strokes]
        assert result.pixel_sets == expected

    def test_parallel_keeps_input_order(self, logger, strokes):
        """Worker processes return results in input order."""
        processor = BatchProcessor(RasterkitSettings(), logger=logger)
        sequential = processor.rasterize_strokes(strokes, max_workers=1)
        parallel = processor.rasterize_strokes(strokes, max_workers=2)
        assert parallel.pixel_sets == sequential.pixel_sets

    def test_workers_from_config(self, logger, strokes):
        """max_workers falls back to the processing config."""
        settings = RasterkitSettings(processing=ProcessingConfig(max_workers=1))
        result = BatchProcessor(settings, logger=logger).rasterize_strokes(strokes)
        assert result.stats.processed_count == len(strokes)

    def test_stats(self, logger, strokes):
        """Counts and timings are recorded."""
        result = BatchProcessor(RasterkitSettings(), logger=logger).rasterize_strokes(
            strokes, max_workers=1
        )
        stats = result.stats
        assert stats.processed_count == 4
        assert stats.error_count == 0
        assert stats.pixel_count == sum(len(p) for p in result.pixel_sets if p is not None)
        assert len(stats.job_times_ms) == 4
        assert stats.avg_job_time_ms is not None
        assert stats.max_job_time_ms == max(stats.job_times_ms)
        assert stats.duration_seconds >= 0

    def test_progress_callback(self, logger, strokes):
        """Progress is reported once per stroke."""
        calls: list[tuple[int, int]] = []
        BatchProcessor(RasterkitSettings(), logger=logger).rasterize_strokes(
            strokes, max_workers=1, progress_callback=lambda done, total: calls.append((done, total))
        )
        assert calls == [(1, 4), (2, 4), (3, 4), (4, 4)]

    def test_endpoints_clamped(self, logger):
        """Endpoints off the surface are moved onto it before rasterizing."""
        settings = RasterkitSettings(surface=SurfaceConfig(width=50, height=50))
        stroke = StrokeSpec(IntPoint(-10, -10), IntPoint(80, 20), 1)
        result = BatchProcessor(settings, logger=logger).rasterize_strokes([stroke])
        pixels = result.pixel_sets[0]
        assert pixels is not None
        assert IntPoint(0, 0) in pixels
        assert IntPoint(49, 20) in pixels

    def test_clamping_disabled(self, logger):
        """Without clamping, off-surface pixels are still dropped."""
        settings = RasterkitSettings(
            surface=SurfaceConfig(width=50, height=50, clamp_endpoints=False)
        )
        stroke = StrokeSpec(IntPoint(-10, 0), IntPoint(80, 0), 1)
        result = BatchProcessor(settings, logger=logger).rasterize_strokes([stroke])
        pixels = result.pixel_sets[0]
        assert pixels is not None
        assert pixels.to_tuples() == [(x, 0) for x in range(50)]

    def test_interrupt_cancels_parallel_run(self, logger, strokes):
        """Ctrl-C during a parallel run cancels every pending stroke."""
        processor = BatchProcessor(RasterkitSettings(), logger=logger)
        with patch(
            "rasterkit.core.processor.as_completed", side_effect=KeyboardInterrupt
        ):
            with pytest.raises(ProcessingCancelledError) as exc_info:
                processor.rasterize_strokes(strokes, max_workers=2)

        assert exc_info.value.processed_count == 0
        assert exc_info.value.pending_count == len(strokes)
        assert processor.run_logger.stats.cancelled_count == len(strokes)

    def test_interrupt_in_process_propagates(self, logger, strokes):
        """An in-process run lets KeyboardInterrupt through."""
        processor = BatchProcessor(RasterkitSettings(), logger=logger)
        with patch(
            "rasterkit.core.processor.process_stroke", side_effect=KeyboardInterrupt
        ):
            with pytest.raises(KeyboardInterrupt):
                processor.rasterize_strokes(strokes, max_workers=1)

    def test_empty_batch(self, logger):
        """An empty batch produces an empty result."""
        result = BatchProcessor(RasterkitSettings(), logger=logger).rasterize_strokes([])
        assert result.pixel_sets == []
        assert len(result.merged()) == 0


class TestStrokeBatchResult:
    """Tests for merging batch results."""

    def test_merged_unions_and_skips_failures(self):
        """Failed strokes are skipped and overlaps collapse."""
        a = PixelSet.from_points([IntPoint(0, 0), IntPoint(1, 0)])
        b = PixelSet.from_points([IntPoint(1, 0), IntPoint(2, 0)])
        result = StrokeBatchResult(pixel_sets=[a, None, b])
        assert result.merged().to_tuples() == [(0, 0), (1, 0), (2, 0)]


class TestClip:
    """Tests for BatchProcessor.clip."""

    def test_clip_uses_configured_window(self, logger):
        """Segments are clipped against the configured window."""
        settings = RasterkitSettings(clip=ClipConfig(xmin=0, ymin=0, xmax=10, ymax=10))
        segments = [
            RealSegment.from_coords(-5, 5, 15, 5),
            RealSegment.from_coords(20, 20, 30, 30),
        ]
        results = BatchProcessor(settings, logger=logger).clip(segments)
        assert results[0].segment == RealSegment.from_coords(0, 5, 10, 5)
        assert not results[1].visible

    def test_clip_stats(self, logger):
        """Visible segments are counted."""
        processor = BatchProcessor(RasterkitSettings(), logger=logger)
        processor.clip(
            [
                RealSegment.from_coords(0, 0, 1, 1),
                RealSegment.from_coords(100, 100, 200, 100),
                RealSegment.from_coords(-80, 0, 80, 0),
            ]
        )
        stats = processor.run_logger.stats
        assert stats.processed_count == 3
        assert stats.segment_count == 2


class TestLoggingSetup:
    """Tests for logging configured by the processor."""

    def test_log_file_written(self, tmp_path: Path):
        """Without a logger, the processor logs to the configured file."""
        log_file = tmp_path / "run.log"
        settings = RasterkitSettings(logging=LoggingConfig(log_file=log_file))
        processor = BatchProcessor(settings)
        processor.rasterize_strokes([StrokeSpec(IntPoint(0, 0), IntPoint(3, 3), 1)])

        lines = log_file.read_text().splitlines()
        events = [json.loads(line.split(" | ", 3)[3])["event"] for line in lines]
        assert "Starting stroke batch" in events
        assert "Stroke rasterized" in events
