"""Raster types: drawing surface, spans, pixel sets and stroke jobs."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from rasterkit.domain.geometry import IntPoint


@dataclass(frozen=True, slots=True)
class Surface:
    """A bounded drawing surface.

    A pixel is on the surface when ``0 <= x < width`` and ``0 <= y < height``.

    Attributes:
        width: Number of columns
        height: Number of rows
    """

    width: int
    height: int

    def contains(self, point: IntPoint) -> bool:
        """Check whether a pixel lies on the surface."""
        return 0 <= point.x < self.width and 0 <= point.y < self.height

    def clamp(self, point: IntPoint) -> IntPoint:
        """Clamp a point onto the surface."""
        x = min(max(point.x, 0), self.width - 1)
        y = min(max(point.y, 0), self.height - 1)
        return IntPoint(x, y)


@dataclass(frozen=True, slots=True)
class Span:
    """A horizontal run of pixels on one row, both ends inclusive.

    Attributes:
        y: Row
        x_start: First column
        x_end: Last column
    """

    y: int
    x_start: int
    x_end: int

    def __len__(self) -> int:
        return max(0, self.x_end - self.x_start + 1)

    def pixels(self) -> Iterator[IntPoint]:
        """Iterate over the pixels of the span, left to right."""
        for x in range(self.x_start, self.x_end + 1):
            yield IntPoint(x, self.y)


class PixelSet:
    """Immutable collection of unique pixels in canonical order.

    Canonical order is ascending by x, then by y. The constructor deduplicates
    and sorts its input. Two pixel sets are equal when they hold the same
    pixels.

    Example:
        pixels = PixelSet.from_points([IntPoint(1, 0), IntPoint(0, 0), IntPoint(1, 0)])
        assert pixels.to_tuples() == [(0, 0), (1, 0)]
    """

    __slots__ = ("_points", "_lookup")

    def __init__(self, points: Iterable[IntPoint] = ()) -> None:
        self._lookup = frozenset(points)
        self._points = tuple(sorted(self._lookup))

    @classmethod
    def from_points(cls, points: Iterable[IntPoint]) -> "PixelSet":
        """Deduplicate and sort arbitrary pixels into a pixel set."""
        return cls(points)

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[IntPoint]:
        return iter(self._points)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, tuple):
            item = IntPoint(*item)
        return item in self._lookup

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelSet):
            return NotImplemented
        return self._points == other._points

    def __hash__(self) -> int:
        return hash(self._points)

    def __repr__(self) -> str:
        return f"PixelSet({len(self._points)} pixels)"

    @property
    def points(self) -> tuple[IntPoint, ...]:
        """The pixels in canonical order."""
        return self._points

    def as_set(self) -> frozenset[IntPoint]:
        """Return the pixels as a frozenset."""
        return self._lookup

    def to_tuples(self) -> list[tuple[int, int]]:
        """Return the pixels as (x, y) tuples in canonical order."""
        return [p.to_tuple() for p in self._points]

    def bounding_box(self) -> tuple[int, int, int, int] | None:
        """Calculate bounding box of the pixels.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y), or None when empty
        """
        if not self._points:
            return None
        xs = [p.x for p in self._points]
        ys = [p.y for p in self._points]
        return (min(xs), min(ys), max(xs), max(ys))


@dataclass(frozen=True, slots=True)
class StrokeSpec:
    """Parameters of one thick line.

    Attributes:
        start: First endpoint
        end: Second endpoint
        width: Stroke width in pixels (clamped to at least 1 when built)
    """

    start: IntPoint
    end: IntPoint
    width: int = 1

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with start, end and width fields
        """
        return {
            "start": list(self.start.to_tuple()),
            "end": list(self.end.to_tuple()),
            "width": self.width,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StrokeSpec":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with start, end and width fields

        Returns:
            StrokeSpec instance
        """
        return cls(
            start=IntPoint.from_tuple(data["start"]),
            end=IntPoint.from_tuple(data["end"]),
            width=int(data.get("width", 1)),
        )
