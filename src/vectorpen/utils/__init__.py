"""Utility functions for vectorpen.

This module provides utility functions including:

- Logging setup and configuration
- Editing-session statistics
"""

from vectorpen.utils.logging import (
    SessionLogger,
    SessionStats,
    configure_logging,
    get_logger,
)

__all__ = [
    "SessionLogger",
    "SessionStats",
    "configure_logging",
    "get_logger",
]
