"""Configuration management for fontmaker.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- TracerConfig: Raster tracing thresholds
- StyleConfig: Bold/Italic geometry modifiers
- LayoutConfig: Typesetting fallbacks and grid size
- GlyphDefaults: Metrics for new glyph records
- ExportConfig: Font export settings
- LoggingConfig: Logging settings
- FontMakerSettings: Main application settings
"""

from fontmaker.config.settings import (
    ExportConfig,
    FontMakerSettings,
    GlyphDefaults,
    LayoutConfig,
    LoggingConfig,
    StyleConfig,
    StyleModifiers,
    TracerConfig,
    get_default_settings,
)

__all__ = [
    "ExportConfig",
    "FontMakerSettings",
    "GlyphDefaults",
    "LayoutConfig",
    "LoggingConfig",
    "StyleConfig",
    "StyleModifiers",
    "TracerConfig",
    "get_default_settings",
]
