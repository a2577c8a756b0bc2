"""Integer line rasterization (Bresenham).

Handles all octants by transposing steep lines and always walking the major
axis left to right. Only integer arithmetic is used.
"""

from rasterkit.domain import IntPoint, Segment


def bresenham_line(p0: IntPoint, p1: IntPoint) -> list[IntPoint]:
    """Rasterize the segment between two integer endpoints.

    The result contains exactly ``max(|dx|, |dy|) + 1`` pixels. Swapping the
    endpoints yields the same pixel set.

    Args:
        p0: First endpoint
        p1: Second endpoint

    Returns:
        Pixels along the segment, in traversal order of the major axis

    Examples:
        >>> [p.to_tuple() for p in bresenham_line(IntPoint(0, 0), IntPoint(4, 2))]
        [(0, 0), (1, 0), (2, 1), (3, 1), (4, 2)]
    """
    if p0 == p1:
        return [p0]

    x0, y0, x1, y1 = p0.x, p0.y, p1.x, p1.y

    steep = abs(y1 - y0) > abs(x1 - x0)
    if steep:
        x0, y0 = y0, x0
        x1, y1 = y1, x1

    if x0 > x1:
        x0, x1 = x1, x0
        y0, y1 = y1, y0

    dx = x1 - x0
    dy = abs(y1 - y0)
    error = dx // 2
    ystep = 1 if y0 < y1 else -1
    y = y0

    points: list[IntPoint] = []
    for x in range(x0, x1 + 1):
        point = IntPoint(x, y)
        points.append(point.transposed() if steep else point)

        error -= dy
        if error < 0:
            y += ystep
            error += dx

    return points


def rasterize_segment(segment: Segment) -> list[IntPoint]:
    """Rasterize a Segment. See ``bresenham_line``."""
    return bresenham_line(segment.start, segment.end)
