"""Exception hierarchy for Rasterkit."""


class RasterkitError(Exception):
    """Base exception for all Rasterkit errors."""

    pass


class InputError(RasterkitError):
    """Errors related to reading caller-supplied input."""

    pass


class InputParseError(InputError):
    """Malformed numeric input (non-numeric or missing values)."""

    def __init__(self, source: str, line: int, reason: str) -> None:
        self.source = source
        self.line = line
        self.reason = reason
        super().__init__(f"Invalid input in '{source}' line {line}: {reason}")


class InputFileError(InputError):
    """Error opening or reading an input file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read input '{path}': {reason}")


class OutputError(RasterkitError):
    """Error writing results."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to write output '{path}': {reason}")


class BatchError(RasterkitError):
    """Errors related to batch processing."""

    pass


class ProcessingCancelledError(BatchError):
    """Processing was cancelled by user."""

    def __init__(self, processed_count: int, pending_count: int) -> None:
        self.processed_count = processed_count
        self.pending_count = pending_count
        super().__init__(
            f"Processing cancelled: {processed_count} completed, {pending_count} pending"
        )
