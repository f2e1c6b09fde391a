"""Utility functions for fontmaker.

This module provides utility functions including:

- Logging setup and configuration
- Export statistics tracking
"""

from fontmaker.utils.logging import (
    ExportLogger,
    ExportStats,
    configure_logging,
)

__all__ = [
    "ExportLogger",
    "ExportStats",
    "configure_logging",
]
