"""Configuration management for glyphfield.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ColoringConfig: Edge coloring settings
- GenerationConfig: Field kind, bitmap size and distance range
- CorrectionConfig: Clash correction settings
- ProcessingConfig: Parallel generation settings
- OutputConfig: Output file settings
- LoggingConfig: Logging settings
- GlyphfieldSettings: Main application settings
"""

from glyphfield.config.settings import (
    ColoringConfig,
    ColoringStrategy,
    CorrectionConfig,
    FieldMode,
    GenerationConfig,
    GlyphfieldSettings,
    LoggingConfig,
    OutputConfig,
    OutputFormat,
    ProcessingConfig,
    get_default_settings,
)

__all__ = [
    "ColoringConfig",
    "ColoringStrategy",
    "CorrectionConfig",
    "FieldMode",
    "GenerationConfig",
    "GlyphfieldSettings",
    "LoggingConfig",
    "OutputConfig",
    "OutputFormat",
    "ProcessingConfig",
    "get_default_settings",
]
