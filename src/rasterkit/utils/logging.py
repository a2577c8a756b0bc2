"""Logging utilities for Rasterkit."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog


@dataclass
class RunStats:
    """Statistics from a batch run."""

    processed_count: int = 0
    error_count: int = 0
    cancelled_count: int = 0
    pixel_count: int = 0
    segment_count: int = 0
    errors: list[tuple[int, str]] = field(default_factory=list)
    job_times_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_job_time_ms(self) -> float | None:
        """Average time per job, or None when nothing ran."""
        if not self.job_times_ms:
            return None
        return sum(self.job_times_ms) / len(self.job_times_ms)

    @property
    def max_job_time_ms(self) -> float | None:
        """Slowest job time, or None when nothing ran."""
        return max(self.job_times_ms) if self.job_times_ms else None


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Console output goes to stderr so that results written to stdout stay
    machine-readable.

    Args:
        log_file: Path to log file (no file logging if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    for handler in list(root_logger.handlers):
        if getattr(handler, "_rasterkit", False):
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        file_handler._rasterkit = True  # type: ignore[attr-defined]
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(
        logging.ERROR if quiet else getattr(logging, console_level.upper())
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler._rasterkit = True  # type: ignore[attr-defined]
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("rasterkit")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class RunLogger:
    """Logger for tracking batch progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = RunStats()

    def log_job_start(self, index: int, kind: str) -> None:
        """Log start of a job."""
        self._logger.debug("Processing job", index=index, kind=kind)

    def log_stroke_complete(
        self,
        index: int,
        pixel_count: int,
        duration_ms: float,
    ) -> None:
        """Log a rasterized stroke."""
        self._logger.info(
            "Stroke rasterized",
            index=index,
            pixels=pixel_count,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.processed_count += 1
        self._stats.pixel_count += pixel_count
        self._stats.job_times_ms.append(duration_ms)

    def log_clip_complete(self, index: int, visible: bool, duration_ms: float) -> None:
        """Log a clipped segment."""
        self._logger.debug(
            "Segment clipped",
            index=index,
            visible=visible,
            duration_ms=round(duration_ms, 3),
        )
        self._stats.processed_count += 1
        if visible:
            self._stats.segment_count += 1
        self._stats.job_times_ms.append(duration_ms)

    def log_job_error(
        self,
        index: int,
        error: str,
        traceback: str | None = None,
    ) -> None:
        """Log job processing error."""
        self._logger.error(
            "Job failed",
            index=index,
            error=error,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((index, error))

    def log_cancelled(self, pending: int) -> None:
        """Log cancellation of pending jobs."""
        self._logger.warning("Batch cancelled", pending=pending)
        self._stats.cancelled_count += pending

    @property
    def stats(self) -> RunStats:
        """Get current run statistics."""
        return self._stats
