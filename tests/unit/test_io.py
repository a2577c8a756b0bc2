"""Tests for input parsing and result writing."""

import json
from pathlib import Path

import pytest

from rasterkit.config import OutputFormat
from rasterkit.domain import ClipWindow, IntPoint, RealSegment, StrokeSpec
from rasterkit.exceptions import InputFileError, InputParseError, OutputError
from rasterkit.io import (
    InputReader,
    ResultWriter,
    format_pixels,
    format_segments,
    parse_segments,
    parse_strokes,
    parse_window,
)


class TestParseStrokes:
    """Tests for stroke record parsing."""

    def test_parse_with_and_without_width(self):
        """Width is optional and falls back to the default."""
        text = "0 0 10 5 3\n1 2 3 4\n"
        strokes = parse_strokes(text, default_width=2)
        assert strokes == [
            StrokeSpec(IntPoint(0, 0), IntPoint(10, 5), 3),
            StrokeSpec(IntPoint(1, 2), IntPoint(3, 4), 2),
        ]

    def test_comments_and_blank_lines(self):
        """Comments and blank lines are skipped."""
        text = "# header\n\n  5 5 6 6  # trailing\n\n"
        assert parse_strokes(text) == [StrokeSpec(IntPoint(5, 5), IntPoint(6, 6), 1)]

    def test_negative_coordinates(self):
        """Negative integers are accepted."""
        strokes = parse_strokes("-3 -4 -5 -6")
        assert strokes[0].start == IntPoint(-3, -4)

    def test_non_integer_field(self):
        """Non-integers are rejected with the line number."""
        with pytest.raises(InputParseError) as exc_info:
            parse_strokes("0 0 1 1\n0 0 x 1\n", source="strokes.txt")
        assert exc_info.value.line == 2
        assert exc_info.value.source == "strokes.txt"
        assert "'x'" in str(exc_info.value)

    def test_float_is_not_an_integer(self):
        """Fractional coordinates are not valid stroke input."""
        with pytest.raises(InputParseError):
            parse_strokes("0 0 1.5 1")

    @pytest.mark.parametrize("text", ["1 2 3", "1 2 3 4 5 6"])
    def test_wrong_field_count(self, text):
        """Records must have 4 or 5 values."""
        with pytest.raises(InputParseError, match="x0 y0 x1 y1"):
            parse_strokes(text)

    def test_empty_input(self):
        """Empty input yields no strokes."""
        assert parse_strokes("") == []


class TestParseSegments:
    """Tests for segment record parsing."""

    def test_parse_floats(self):
        """Segments accept integer and decimal values."""
        segments = parse_segments("0 0 10 10\n-80.5 0 80 0.25\n")
        assert segments == [
            RealSegment.from_coords(0, 0, 10, 10),
            RealSegment.from_coords(-80.5, 0, 80, 0.25),
        ]

    def test_non_finite_rejected(self):
        """NaN and infinity are rejected."""
        with pytest.raises(InputParseError, match="finite"):
            parse_segments("0 0 nan 1")
        with pytest.raises(InputParseError, match="finite"):
            parse_segments("0 0 inf 1")

    def test_wrong_field_count(self):
        """Segment records need exactly 4 values."""
        with pytest.raises(InputParseError) as exc_info:
            parse_segments("# comment\n1 2 3 4 5\n")
        assert exc_info.value.line == 2


class TestParseWindow:
    """Tests for clip window parsing."""

    def test_parse(self):
        """Four values make a window."""
        assert parse_window(["-1", "-2", "3", "4"]) == ClipWindow(-1, -2, 3, 4)

    def test_reversed_bounds_normalized(self):
        """Reversed bounds are swapped."""
        assert parse_window([50, 50, -50, -50]) == ClipWindow(-50, -50, 50, 50)

    def test_wrong_count(self):
        """Exactly four values are required."""
        with pytest.raises(InputParseError, match="--window"):
            parse_window([1, 2, 3])


class TestInputReader:
    """Tests for InputReader."""

    def test_read_strokes(self, tmp_path: Path):
        """Strokes are read from a file."""
        path = tmp_path / "strokes.txt"
        path.write_text("0 0 4 2\n1 1 9 9 5\n")
        strokes = InputReader(path).read_strokes(default_width=3)
        assert [s.width for s in strokes] == [3, 5]

    def test_read_segments(self, tmp_path: Path):
        """Segments are read from a file."""
        path = tmp_path / "segments.txt"
        path.write_text("-80 0 80 0\n")
        assert InputReader(path).read_segments() == [RealSegment.from_coords(-80, 0, 80, 0)]

    def test_parse_error_names_file(self, tmp_path: Path):
        """Parse errors carry the file path."""
        path = tmp_path / "bad.txt"
        path.write_text("0 0 a 1\n")
        with pytest.raises(InputParseError) as exc_info:
            InputReader(path).read_strokes()
        assert exc_info.value.source == str(path)

    def test_missing_file(self, tmp_path: Path):
        """A missing file raises InputFileError."""
        with pytest.raises(InputFileError, match="file not found"):
            InputReader(tmp_path / "missing.txt").load()

    def test_directory(self, tmp_path: Path):
        """A directory is not a valid input file."""
        with pytest.raises(InputFileError, match="not a file"):
            InputReader(tmp_path).load()

    def test_load_is_cached(self, tmp_path: Path):
        """The file is read once."""
        path = tmp_path / "strokes.txt"
        path.write_text("0 0 1 1\n")
        reader = InputReader(path)
        first = reader.load()
        path.write_text("garbage\n")
        assert reader.load() == first


class TestFormatting:
    """Tests for result serialization."""

    def test_pixels_text(self):
        """Text output is one 'x y' line per pixel."""
        assert format_pixels([IntPoint(0, 0), IntPoint(-1, 2)]) == "0 0\n-1 2\n"

    def test_pixels_json(self):
        """JSON output wraps pixels in an object."""
        out = format_pixels([IntPoint(0, 0), IntPoint(1, 0)], OutputFormat.JSON)
        assert json.loads(out) == {"pixels": [[0, 0], [1, 0]]}

    def test_empty_pixels(self):
        """No pixels gives empty text and an empty JSON list."""
        assert format_pixels([]) == ""
        assert json.loads(format_pixels([], OutputFormat.JSON)) == {"pixels": []}

    def test_segments_text(self):
        """Whole numbers drop their decimal part."""
        segments = [RealSegment.from_coords(-50, 0, 50, 0.25)]
        assert format_segments(segments) == "-50 0 50 0.25\n"

    def test_segments_json(self):
        """JSON segments are [x0, y0, x1, y1] lists."""
        out = format_segments([RealSegment.from_coords(0, 0, 1.5, 2)], OutputFormat.JSON)
        assert json.loads(out) == {"segments": [[0.0, 0.0, 1.5, 2.0]]}


class TestResultWriter:
    """Tests for ResultWriter."""

    def test_write_pixels(self, tmp_path: Path):
        """Pixels are written to the output file."""
        path = tmp_path / "out.txt"
        ResultWriter(path).write_pixels([IntPoint(3, 4)])
        assert path.read_text() == "3 4\n"

    def test_write_segments_json(self, tmp_path: Path):
        """Segments are written as JSON."""
        path = tmp_path / "out.json"
        ResultWriter(path, OutputFormat.JSON).write_segments(
            [RealSegment.from_coords(0, 0, 1, 1)]
        )
        assert json.loads(path.read_text()) == {"segments": [[0.0, 0.0, 1.0, 1.0]]}

    def test_unwritable_path(self, tmp_path: Path):
        """Write failures raise OutputError."""
        path = tmp_path / "missing-dir" / "out.txt"
        with pytest.raises(OutputError) as exc_info:
            ResultWriter(path).write_pixels([IntPoint(0, 0)])
        assert exc_info.value.path == str(path)

    @pytest.mark.parametrize(
        ("name", "fmt"),
        [("a.json", OutputFormat.JSON), ("a.JSON", OutputFormat.JSON), ("a.txt", OutputFormat.TEXT)],
    )
    def test_format_for_path(self, name, fmt):
        """Format is chosen from the extension."""
        assert ResultWriter.format_for_path(Path(name)) is fmt
