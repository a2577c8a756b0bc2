"""Filled disk rasterization (midpoint circle with span filling).

The midpoint circle algorithm walks one octant with integer arithmetic and
uses 8-way symmetry to turn each step into horizontal spans. Spans are clipped
to an optional drawing surface; off-surface pixels are dropped silently.
"""

from collections.abc import Iterator

from rasterkit.domain import IntPoint, Span, Surface


def disk_spans(center: IntPoint, radius: int) -> Iterator[Span]:
    """Generate the horizontal spans covering a filled disk.

    Rows may be produced more than once when the octant walk revisits a row;
    consumers that need unique pixels must deduplicate.

    Args:
        center: Disk center
        radius: Disk radius in pixels (values <= 0 give the center pixel)

    Yields:
        Spans in octant-walk order
    """
    cx, cy = center.x, center.y

    if radius <= 0:
        yield Span(cy, cx, cx)
        return

    x = radius
    y = 0
    d = 1 - radius

    while x >= y:
        # Pair (x, y): rows cy +/- y, columns cx - x .. cx + x
        yield Span(cy + y, cx - x, cx + x)
        if y != 0:
            yield Span(cy - y, cx - x, cx + x)

        # Pair (y, x): rows cy +/- x, columns cx - y .. cx + y
        if x != y:
            yield Span(cy + x, cx - y, cx + y)
            yield Span(cy - x, cx - y, cx + y)

        y += 1
        if d < 0:
            d += 2 * y + 1
        else:
            x -= 1
            d += 2 * (y - x) + 1


def clip_span(span: Span, surface: Surface | None) -> Span | None:
    """Clip a span to the drawing surface.

    Args:
        span: Span to clip
        surface: Drawing surface, or None for an unbounded surface

    Returns:
        The clipped span, or None when nothing of it lies on the surface
    """
    if surface is None:
        return span
    if span.y < 0 or span.y >= surface.height:
        return None
    if span.x_end < 0 or span.x_start > surface.width - 1:
        return None
    x_start = max(span.x_start, 0)
    x_end = min(span.x_end, surface.width - 1)
    return Span(span.y, x_start, x_end)


def fill_disk(
    center: IntPoint,
    radius: int,
    surface: Surface | None = None,
) -> set[IntPoint]:
    """Rasterize a filled disk.

    Args:
        center: Disk center
        radius: Disk radius in pixels; 0 yields the center pixel only
        surface: Optional drawing surface to clip against

    Returns:
        Set of pixels covering the disk

    Examples:
        >>> fill_disk(IntPoint(3, 3), 0) == {IntPoint(3, 3)}
        True
        >>> len(fill_disk(IntPoint(0, 0), 1))
        5
    """
    pixels: set[IntPoint] = set()
    for span in disk_spans(center, radius):
        clipped = clip_span(span, surface)
        if clipped is not None:
            pixels.update(clipped.pixels())
    return pixels
