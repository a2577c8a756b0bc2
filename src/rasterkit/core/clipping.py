"""Parametric segment clipping against a rectangle (Liang-Barsky).

The segment is written as ``start + t * (end - start)`` for ``t`` in [0, 1].
Each window edge is a half-plane inequality ``p * t <= q``; entering edges
(``p < 0``) raise the lower bound of ``t`` and leaving edges (``p > 0``) lower
the upper bound. The visible part is the remaining ``t`` interval.
"""

from collections.abc import Iterable

from rasterkit.domain import ClipResult, ClipWindow, RealPoint, RealSegment


def _boundaries(
    segment: RealSegment, window: ClipWindow
) -> tuple[tuple[float, float], ...]:
    """Return the (p, q) pairs for the left, right, bottom and top edges."""
    x0, y0 = segment.start.x, segment.start.y
    dx = segment.end.x - x0
    dy = segment.end.y - y0
    return (
        (-dx, x0 - window.xmin),
        (dx, window.xmax - x0),
        (-dy, y0 - window.ymin),
        (dy, window.ymax - y0),
    )


def _point_at(segment: RealSegment, u: float) -> RealPoint:
    """Evaluate the segment at parameter u, returning exact endpoints at 0 and 1."""
    if u == 0.0:
        return segment.start
    if u == 1.0:
        return segment.end
    x0, y0 = segment.start.x, segment.start.y
    dx = segment.end.x - x0
    dy = segment.end.y - y0
    return RealPoint(x0 + u * dx, y0 + u * dy)


def clip_segment(
    segment: RealSegment,
    window: ClipWindow,
    epsilon: float = 0.0,
) -> ClipResult:
    """Clip a segment to a rectangle.

    Reversed window bounds are swapped before clipping. A segment that only
    touches the window (for example at a corner) is visible with a
    zero-length clipped segment.

    Args:
        segment: Segment to clip
        window: Clipping rectangle
        epsilon: A direction component with ``abs(p) <= epsilon`` counts as
            parallel to the edge. The default 0.0 is an exact zero test.

    Returns:
        ClipResult with the visible part, or a rejected result

    Examples:
        >>> window = ClipWindow(-50, -50, 50, 50)
        >>> clip_segment(RealSegment.from_coords(0, 0, 10, 10), window).visible
        True
        >>> clip_segment(RealSegment.from_coords(100, 100, 200, 100), window).visible
        False
    """
    window = window.normalized()

    umin = 0.0
    umax = 1.0

    for p, q in _boundaries(segment, window):
        if abs(p) <= epsilon:
            # Parallel to this edge: either fully outside or unconstrained
            if q < 0:
                return ClipResult.rejected()
            continue

        t = q / p
        if p < 0:
            umin = max(umin, t)
        else:
            umax = min(umax, t)

    if umin > umax:
        return ClipResult.rejected()

    clipped = RealSegment(_point_at(segment, umin), _point_at(segment, umax))
    return ClipResult(segment=clipped, visible=True)


def clip_segments(
    segments: Iterable[RealSegment],
    window: ClipWindow,
    epsilon: float = 0.0,
) -> list[RealSegment]:
    """Clip a batch of segments and keep the visible parts.

    Degenerate (zero-length) visible parts are kept.

    Args:
        segments: Segments to clip
        window: Clipping rectangle
        epsilon: Parallel tolerance, see ``clip_segment``

    Returns:
        Newly allocated list of visible clipped segments, in input order
    """
    clipped: list[RealSegment] = []
    for segment in segments:
        result = clip_segment(segment, window, epsilon)
        if result.visible and result.segment is not None:
            clipped.append(result.segment)
    return clipped
