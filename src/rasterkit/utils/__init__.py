"""Utility functions for rasterkit.

This module provides utility functions including:

- Logging setup and configuration
- Batch statistics tracking
"""

from rasterkit.utils.logging import (
    RunLogger,
    RunStats,
    configure_logging,
)

__all__ = [
    "RunLogger",
    "RunStats",
    "configure_logging",
]
