"""Core geometric types for rasterization and clipping.

This module defines the point and segment types used throughout rasterkit:
- IntPoint: An integer pixel coordinate
- RealPoint: A floating-point coordinate used by the clipper
- Segment: An integer segment, input to the line rasterizer
- RealSegment: A floating-point segment, input and output of the clipper
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class IntPoint:
    """An integer pixel coordinate.

    Immutable and hashable for use in sets/dicts. Ordering compares x first,
    then y, which is the canonical pixel order.

    Attributes:
        x: Column
        y: Row
    """

    x: int
    y: int

    def to_tuple(self) -> tuple[int, int]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def transposed(self) -> "IntPoint":
        """Return the point with x and y swapped."""
        return IntPoint(self.y, self.x)

    @classmethod
    def from_tuple(cls, data: tuple[int, int] | list[int]) -> "IntPoint":
        """Build a point from an (x, y) pair."""
        return cls(int(data[0]), int(data[1]))


@dataclass(frozen=True, slots=True)
class RealPoint:
    """A floating-point coordinate.

    Attributes:
        x: X coordinate
        y: Y coordinate
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class Segment:
    """An ordered pair of integer endpoints.

    ``start == end`` is valid and rasterizes to a single pixel.
    """

    start: IntPoint
    end: IntPoint

    @property
    def is_degenerate(self) -> bool:
        """True when both endpoints coincide."""
        return self.start == self.end


@dataclass(frozen=True, slots=True)
class RealSegment:
    """An ordered pair of floating-point endpoints."""

    start: RealPoint
    end: RealPoint

    @classmethod
    def from_coords(cls, x0: float, y0: float, x1: float, y1: float) -> "RealSegment":
        """Build a segment from four coordinates."""
        return cls(RealPoint(float(x0), float(y0)), RealPoint(float(x1), float(y1)))

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (x0, y0, x1, y1)."""
        return (self.start.x, self.start.y, self.end.x, self.end.y)

    @property
    def is_degenerate(self) -> bool:
        """True when both endpoints coincide."""
        return self.start == self.end
