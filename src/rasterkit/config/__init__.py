"""Configuration management for rasterkit.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- SurfaceConfig: Drawing surface bounds and endpoint clamping
- StrokeConfig: Thick-line defaults
- ClipConfig: Clip window and parallel tolerance
- ProcessingConfig: Batch processing settings
- LoggingConfig: Logging settings
- RasterkitSettings: Main application settings
"""

from rasterkit.config.settings import (
    ClipConfig,
    LoggingConfig,
    OutputFormat,
    ProcessingConfig,
    RasterkitSettings,
    StrokeConfig,
    SurfaceConfig,
    get_default_settings,
)

__all__ = [
    "ClipConfig",
    "LoggingConfig",
    "OutputFormat",
    "ProcessingConfig",
    "RasterkitSettings",
    "StrokeConfig",
    "SurfaceConfig",
    "get_default_settings",
]
