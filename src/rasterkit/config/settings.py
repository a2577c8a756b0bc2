"""Configuration settings for Rasterkit."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from rasterkit.domain import ClipWindow, Surface


class OutputFormat(str, Enum):
    """Serialization format for pixel and segment lists."""

    TEXT = "text"
    JSON = "json"


class SurfaceConfig(BaseModel):
    """Configuration for the bounded drawing surface.

    Pixels outside ``[0, width) x [0, height)`` are dropped by the disk stamp.
    """

    width: int = Field(
        default=900,
        ge=1,
        description="Surface width in pixels",
    )
    height: int = Field(
        default=600,
        ge=1,
        description="Surface height in pixels",
    )
    clamp_endpoints: bool = Field(
        default=True,
        description="Clamp line endpoints onto the surface before rasterizing",
    )

    def to_surface(self) -> Surface:
        """Build the domain surface for these dimensions."""
        return Surface(width=self.width, height=self.height)


class StrokeConfig(BaseModel):
    """Configuration for thick-line strokes."""

    default_width: int = Field(
        default=1,
        ge=1,
        description="Stroke width used when an input line omits one",
    )


class ClipConfig(BaseModel):
    """Configuration for segment clipping."""

    xmin: float = Field(default=-50.0, description="Left edge of the clip window")
    ymin: float = Field(default=-50.0, description="Bottom edge of the clip window")
    xmax: float = Field(default=50.0, description="Right edge of the clip window")
    ymax: float = Field(default=50.0, description="Top edge of the clip window")
    parallel_epsilon: float = Field(
        default=0.0,
        ge=0.0,
        le=1.0,
        description="Tolerance below which a direction component counts as parallel (0 = exact)",
    )

    def to_window(self) -> ClipWindow:
        """Build the normalized clip window."""
        return ClipWindow(self.xmin, self.ymin, self.xmax, self.ymax).normalized()


class ProcessingConfig(BaseModel):
    """Configuration for batch processing."""

    max_workers: int | None = Field(
        default=None,
        description="Max worker processes (None = auto)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class RasterkitSettings(BaseModel):
    """Main application settings."""

    surface: SurfaceConfig = Field(default_factory=SurfaceConfig)
    stroke: StrokeConfig = Field(default_factory=StrokeConfig)
    clip: ClipConfig = Field(default_factory=ClipConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    output_format: OutputFormat = Field(
        default=OutputFormat.TEXT,
        description="Format used when writing results",
    )


def get_default_settings() -> RasterkitSettings:
    """Get default application settings."""
    return RasterkitSettings()
