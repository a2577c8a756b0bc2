"""Clip window and clip result types.

The clip window is an axis-aligned rectangle. Callers may build it with
reversed bounds; ``normalized()`` swaps them so that ``xmin <= xmax`` and
``ymin <= ymax``.
"""

from dataclasses import dataclass

from rasterkit.domain.geometry import RealSegment


@dataclass(frozen=True, slots=True)
class ClipWindow:
    """Axis-aligned clipping rectangle.

    Attributes:
        xmin: Left edge
        ymin: Bottom edge
        xmax: Right edge
        ymax: Top edge
    """

    xmin: float
    ymin: float
    xmax: float
    ymax: float

    @property
    def is_normalized(self) -> bool:
        """True when the bounds are ordered."""
        return self.xmin <= self.xmax and self.ymin <= self.ymax

    def normalized(self) -> "ClipWindow":
        """Return the window with reversed bounds swapped."""
        if self.is_normalized:
            return self
        xmin, xmax = sorted((self.xmin, self.xmax))
        ymin, ymax = sorted((self.ymin, self.ymax))
        return ClipWindow(xmin, ymin, xmax, ymax)

    def contains(self, x: float, y: float) -> bool:
        """Check whether a point lies inside or on the window boundary."""
        window = self.normalized()
        return window.xmin <= x <= window.xmax and window.ymin <= y <= window.ymax

    def to_tuple(self) -> tuple[float, float, float, float]:
        """Convert to (xmin, ymin, xmax, ymax)."""
        return (self.xmin, self.ymin, self.xmax, self.ymax)


@dataclass(frozen=True, slots=True)
class ClipResult:
    """Outcome of clipping one segment.

    Attributes:
        segment: The visible part, or None when the segment is rejected
        visible: Whether any part of the segment lies inside the window
    """

    segment: RealSegment | None
    visible: bool

    @classmethod
    def rejected(cls) -> "ClipResult":
        """Result for a segment entirely outside the window."""
        return cls(segment=None, visible=False)
