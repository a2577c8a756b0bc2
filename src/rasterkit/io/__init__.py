"""Input and output layer for rasterkit.

This module handles the boundary between callers and the kernel: parsing
numeric input with line-numbered errors, and serializing pixel and segment
lists.

Key classes:
- InputReader: Read stroke and segment records from a file
- ResultWriter: Write pixel and segment lists to a file
"""

from rasterkit.io.reader import (
    InputReader,
    parse_segments,
    parse_strokes,
    parse_window,
)
from rasterkit.io.writer import ResultWriter, format_pixels, format_segments

__all__ = [
    "InputReader",
    "ResultWriter",
    "format_pixels",
    "format_segments",
    "parse_segments",
    "parse_strokes",
    "parse_window",
]
