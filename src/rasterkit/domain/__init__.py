"""Domain models for rasterkit.

This module contains the value types consumed and produced by the
rasterization kernel. All models are designed to be:

- Immutable (frozen dataclasses or read-only containers)
- Serializable for inter-process communication (batch processing)
- Free of any rendering or windowing concerns

Key classes:
- IntPoint / RealPoint: Integer pixel and floating-point coordinates
- Segment / RealSegment: Ordered endpoint pairs
- Surface: Bounded drawing surface
- Span: Horizontal run of pixels
- PixelSet: Unique pixels in canonical order
- StrokeSpec: One thick-line job
- ClipWindow / ClipResult: Clipping rectangle and outcome
"""

from rasterkit.domain.clip import ClipResult, ClipWindow
from rasterkit.domain.geometry import IntPoint, RealPoint, RealSegment, Segment
from rasterkit.domain.raster import PixelSet, Span, StrokeSpec, Surface

__all__: list[str] = [
    # Points and segments
    "IntPoint",
    "RealPoint",
    "Segment",
    "RealSegment",
    # Raster types
    "Surface",
    "Span",
    "PixelSet",
    "StrokeSpec",
    # Clipping
    "ClipWindow",
    "ClipResult",
]
