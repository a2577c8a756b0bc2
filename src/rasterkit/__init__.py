"""Rasterkit - Integer line, disk and thick-line rasterization with segment clipping.

Rasterkit is a small computational-geometry kernel with a CLI around it. It
rasterizes lines with Bresenham's algorithm, fills disks with the midpoint
circle algorithm, composes the two into thick lines, and clips segments against
rectangles with the Liang-Barsky algorithm.

Example:
    $ rasterkit thick 50 50 700 500 --width 7

This prints the deduplicated pixel list of a 7 pixel wide line.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
