"""Input parsing for strokes, segments and clip windows.

Input is plain text: whitespace-separated numbers, one record per line.
Blank lines and ``#`` comments are ignored. Every record is validated before
anything is returned, so the kernel is never called with partial data.
"""

import math
from collections.abc import Iterator, Sequence
from pathlib import Path

from rasterkit.domain import ClipWindow, IntPoint, RealSegment, StrokeSpec
from rasterkit.exceptions import InputFileError, InputParseError


def _records(text: str) -> Iterator[tuple[int, list[str]]]:
    """Yield (line number, fields) for every non-empty, non-comment line."""
    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if line:
            yield line_no, line.split()


def parse_int(value: str, source: str = "<input>", line: int = 1) -> int:
    """Parse one integer field.

    Raises:
        InputParseError: If the field is not an integer
    """
    try:
        return int(value)
    except ValueError:
        raise InputParseError(source, line, f"expected an integer, got '{value}'") from None


def parse_float(value: str, source: str = "<input>", line: int = 1) -> float:
    """Parse one finite floating-point field.

    Raises:
        InputParseError: If the field is not a finite number
    """
    try:
        number = float(value)
    except ValueError:
        raise InputParseError(source, line, f"expected a number, got '{value}'") from None
    if not math.isfinite(number):
        raise InputParseError(source, line, f"expected a finite number, got '{value}'")
    return number


def parse_strokes(
    text: str,
    source: str = "<input>",
    default_width: int = 1,
) -> list[StrokeSpec]:
    """Parse stroke records of the form ``x0 y0 x1 y1 [W]``.

    Args:
        text: Input text
        source: Name used in error messages
        default_width: Width used when a record omits it

    Returns:
        Parsed strokes in input order

    Raises:
        InputParseError: If a record is malformed
    """
    strokes: list[StrokeSpec] = []
    for line_no, fields in _records(text):
        if len(fields) not in (4, 5):
            raise InputParseError(
                source, line_no, f"expected 'x0 y0 x1 y1 [W]', got {len(fields)} values"
            )
        x0, y0, x1, y1 = (parse_int(f, source, line_no) for f in fields[:4])
        width = parse_int(fields[4], source, line_no) if len(fields) == 5 else default_width
        strokes.append(StrokeSpec(IntPoint(x0, y0), IntPoint(x1, y1), width))
    return strokes


def parse_segments(text: str, source: str = "<input>") -> list[RealSegment]:
    """Parse segment records of the form ``x0 y0 x1 y1``.

    Args:
        text: Input text
        source: Name used in error messages

    Returns:
        Parsed segments in input order

    Raises:
        InputParseError: If a record is malformed
    """
    segments: list[RealSegment] = []
    for line_no, fields in _records(text):
        if len(fields) != 4:
            raise InputParseError(
                source, line_no, f"expected 'x0 y0 x1 y1', got {len(fields)} values"
            )
        x0, y0, x1, y1 = (parse_float(f, source, line_no) for f in fields)
        segments.append(RealSegment.from_coords(x0, y0, x1, y1))
    return segments


def parse_window(values: Sequence[str | float], source: str = "--window") -> ClipWindow:
    """Parse ``xmin ymin xmax ymax`` into a normalized clip window.

    Reversed bounds are swapped.

    Raises:
        InputParseError: If there are not four finite numbers
    """
    if len(values) != 4:
        raise InputParseError(
            source, 1, f"expected 'xmin ymin xmax ymax', got {len(values)} values"
        )
    xmin, ymin, xmax, ymax = (parse_float(str(v), source, 1) for v in values)
    return ClipWindow(xmin, ymin, xmax, ymax).normalized()


class InputReader:
    """Reads stroke and segment records from a file.

    Example:
        reader = InputReader(Path("strokes.txt"))
        strokes = reader.read_strokes(default_width=3)
    """

    def __init__(self, path: Path) -> None:
        """Initialize the reader.

        Args:
            path: Path to a text file of records
        """
        self._path = path
        self._text: str | None = None

    @property
    def path(self) -> Path:
        """The input file path."""
        return self._path

    def load(self) -> str:
        """Read the file contents.

        Raises:
            InputFileError: If the file does not exist or cannot be read
        """
        if self._text is not None:
            return self._text
        if not self._path.exists():
            raise InputFileError(str(self._path), "file not found")
        if not self._path.is_file():
            raise InputFileError(str(self._path), "not a file")
        try:
            self._text = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise InputFileError(str(self._path), str(e)) from e
        return self._text

    def read_strokes(self, default_width: int = 1) -> list[StrokeSpec]:
        """Read all stroke records. See ``parse_strokes``."""
        return parse_strokes(self.load(), str(self._path), default_width)

    def read_segments(self) -> list[RealSegment]:
        """Read all segment records. See ``parse_segments``."""
        return parse_segments(self.load(), str(self._path))
