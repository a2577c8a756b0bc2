"""Core rasterization algorithms for rasterkit.

This module contains the kernel algorithms for:

- Line rasterization (Bresenham)
- Filled disk rasterization (midpoint circle with span filling)
- Thick line composition (disk stamping along the centerline)
- Segment clipping against a rectangle (Liang-Barsky)
- Batch processing of many jobs

All kernel functions are:
- Stateless (safe for use in worker processes)
- Pure (each call returns a freshly owned result)

Key functions:
- bresenham_line: Pixels of an integer segment
- fill_disk: Pixels of a filled disk
- build_thick_line: Deduplicated pixels of a thick line
- clip_segment: Visible part of a segment inside a rectangle
- clip_segments: Visible parts of a batch of segments

Key classes:
- BatchProcessor: Runs stroke and clip batches with statistics
"""

from rasterkit.core.circle import clip_span, disk_spans, fill_disk
from rasterkit.core.clipping import clip_segment, clip_segments
from rasterkit.core.line import bresenham_line, rasterize_segment
from rasterkit.core.processor import BatchProcessor, StrokeBatchResult, process_stroke
from rasterkit.core.thick import build_stroke, build_thick_line, stroke_radius

__all__ = [
    # Processor classes
    "BatchProcessor",
    "StrokeBatchResult",
    # Line functions
    "bresenham_line",
    # Thick line functions
    "build_stroke",
    "build_thick_line",
    # Clipping functions
    "clip_segment",
    "clip_segments",
    # Circle functions
    "clip_span",
    "disk_spans",
    "fill_disk",
    "process_stroke",
    "rasterize_segment",
    "stroke_radius",
]
