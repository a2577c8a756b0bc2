"""Result writer for pixel and segment lists.

Results are serialized as plain text (one record per line) or JSON. The
writer only reads the collections it is given.
"""

import json
from collections.abc import Iterable
from pathlib import Path

from rasterkit.config import OutputFormat
from rasterkit.domain import IntPoint, RealSegment
from rasterkit.exceptions import OutputError


def _format_number(value: float) -> str:
    """Format a coordinate, dropping a trailing .0 on whole numbers."""
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def format_pixels(pixels: Iterable[IntPoint], fmt: OutputFormat = OutputFormat.TEXT) -> str:
    """Serialize pixels.

    Args:
        pixels: Pixels in the order they should be written
        fmt: Output format

    Returns:
        ``x y`` lines for text, ``{"pixels": [[x, y], ...]}`` for JSON
    """
    if fmt is OutputFormat.JSON:
        return json.dumps({"pixels": [[p.x, p.y] for p in pixels]})
    return "".join(f"{p.x} {p.y}\n" for p in pixels)


def format_segments(
    segments: Iterable[RealSegment], fmt: OutputFormat = OutputFormat.TEXT
) -> str:
    """Serialize segments.

    Args:
        segments: Segments in the order they should be written
        fmt: Output format

    Returns:
        ``x0 y0 x1 y1`` lines for text, ``{"segments": [[x0, y0, x1, y1], ...]}``
        for JSON
    """
    if fmt is OutputFormat.JSON:
        return json.dumps({"segments": [list(s.to_tuple()) for s in segments]})
    return "".join(
        " ".join(_format_number(v) for v in s.to_tuple()) + "\n" for s in segments
    )


class ResultWriter:
    """Writes serialized results to a file.

    Example:
        writer = ResultWriter(Path("pixels.json"), OutputFormat.JSON)
        writer.write_pixels(pixel_set)
    """

    def __init__(self, output_path: Path, fmt: OutputFormat = OutputFormat.TEXT) -> None:
        """Initialize the result writer.

        Args:
            output_path: Path where results will be saved
            fmt: Output format
        """
        self._output_path = output_path
        self._format = fmt

    def _write(self, content: str) -> None:
        try:
            self._output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputError(str(self._output_path), str(e)) from e

    def write_pixels(self, pixels: Iterable[IntPoint]) -> None:
        """Write pixels to the output path.

        Raises:
            OutputError: If the file cannot be written
        """
        self._write(format_pixels(pixels, self._format))

    def write_segments(self, segments: Iterable[RealSegment]) -> None:
        """Write segments to the output path.

        Raises:
            OutputError: If the file cannot be written
        """
        self._write(format_segments(segments, self._format))

    @staticmethod
    def format_for_path(path: Path) -> OutputFormat:
        """Guess the output format from a file extension (``.json`` or text)."""
        return OutputFormat.JSON if path.suffix.lower() == ".json" else OutputFormat.TEXT
