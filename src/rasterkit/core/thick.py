"""Thick line composition.

A thick line is built by stamping a filled disk of radius ``width // 2`` on
every pixel of the Bresenham centerline. Neighbouring disks overlap heavily,
so the stamped pixels are merged into a single deduplicated PixelSet.
"""

import logging

from rasterkit.core.circle import fill_disk
from rasterkit.core.line import bresenham_line
from rasterkit.domain import IntPoint, PixelSet, StrokeSpec, Surface

logger = logging.getLogger(__name__)


def stroke_radius(width: int) -> int:
    """Return the disk radius used for a stroke width.

    Widths below 1 are clamped to 1.

    Args:
        width: Requested stroke width in pixels

    Returns:
        ``max(width, 1) // 2``
    """
    return max(width, 1) // 2


def build_thick_line(
    p0: IntPoint,
    p1: IntPoint,
    width: int,
    surface: Surface | None = None,
) -> PixelSet:
    """Rasterize a line of the given width.

    Args:
        p0: First endpoint
        p1: Second endpoint
        width: Stroke width in pixels; values below 1 are treated as 1
        surface: Optional drawing surface; off-surface pixels are dropped

    Returns:
        Unique pixels of the stroke in canonical order

    Examples:
        >>> build_thick_line(IntPoint(0, 0), IntPoint(2, 0), 1).to_tuples()
        [(0, 0), (1, 0), (2, 0)]
    """
    if width < 1:
        logger.debug("Stroke width %d clamped to 1", width)
        width = 1

    radius = stroke_radius(width)
    centers = bresenham_line(p0, p1)

    pixels: set[IntPoint] = set()
    for center in centers:
        pixels |= fill_disk(center, radius, surface)

    return PixelSet.from_points(pixels)


def build_stroke(stroke: StrokeSpec, surface: Surface | None = None) -> PixelSet:
    """Rasterize a StrokeSpec. See ``build_thick_line``."""
    return build_thick_line(stroke.start, stroke.end, stroke.width, surface)
