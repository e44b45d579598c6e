"""Configuration management for vectorpen.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- PenConfig: Pen-tool pick radii and drag thresholds
- HitTestConfig: Stroke hit-test tolerances and sampling
- ShapeToolConfig: Polygon/star generator defaults
- StyleConfig: Default colours for new shapes
- LoggingConfig: Logging settings
- EditorSettings: Main application settings
"""

from vectorpen.config.settings import (
    EditorSettings,
    HitTestConfig,
    LoggingConfig,
    PenConfig,
    ShapeToolConfig,
    StyleConfig,
    get_default_settings,
)

__all__ = [
    "EditorSettings",
    "HitTestConfig",
    "LoggingConfig",
    "PenConfig",
    "ShapeToolConfig",
    "StyleConfig",
    "get_default_settings",
]
