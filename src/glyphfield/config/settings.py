"""Configuration settings for Glyphfield."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class FieldMode(str, Enum):
    """Kind of distance field to generate."""

    MSDF = "msdf"
    SDF = "sdf"
    PSDF = "psdf"


class ColoringStrategy(str, Enum):
    """Edge coloring algorithm."""

    SIMPLE = "simple"
    INK_TRAP = "ink_trap"


class OutputFormat(str, Enum):
    """File format of written bitmaps."""

    PNG = "png"
    NPY = "npy"


class ColoringConfig(BaseModel):
    """Configuration for edge coloring."""

    strategy: ColoringStrategy = Field(
        default=ColoringStrategy.SIMPLE,
        description="Edge coloring algorithm",
    )
    angle_threshold: float = Field(
        default=3.0,
        gt=0.0,
        le=3.2,
        description="Maximum turning angle in radians still treated as smooth",
    )
    seed: int = Field(
        default=0,
        ge=0,
        lt=2**64,
        description="64-bit seed selecting among valid colorings",
    )


class GenerationConfig(BaseModel):
    """Configuration for distance field generation."""

    mode: FieldMode = Field(
        default=FieldMode.MSDF,
        description="Distance field kind",
    )
    size: int = Field(
        default=32,
        ge=4,
        le=4096,
        description="Width and height of each glyph bitmap in pixels",
    )
    pixel_range: float = Field(
        default=4.0,
        gt=0.0,
        le=64.0,
        description="Total distance range covered by the field, in pixels",
    )
    orient_contours: bool = Field(
        default=False,
        description="Reorient contours to the non-zero fill rule before coloring",
    )


class CorrectionConfig(BaseModel):
    """Configuration for corrections applied after generation."""

    enabled: bool = Field(
        default=True,
        description="Run error correction after MSDF generation",
    )
    sign_correction: bool = Field(
        default=True,
        description="Flip texels whose sign disagrees with the non-zero fill",
    )
    edge_threshold: float = Field(
        default=1.001,
        gt=0.0,
        le=10.0,
        description="Clash tolerance relative to one pixel of distance",
    )


class ProcessingConfig(BaseModel):
    """Configuration for parallel generation."""

    max_workers: int | None = Field(
        default=None,
        ge=1,
        description="Max worker processes (None = auto)",
    )
    rows_per_task: int = Field(
        default=8,
        ge=1,
        le=1024,
        description="Bitmap rows evaluated per worker task",
    )


class OutputConfig(BaseModel):
    """Configuration for written bitmaps."""

    format: OutputFormat = Field(
        default=OutputFormat.PNG,
        description="Output file format",
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


class GlyphfieldSettings(BaseModel):
    """Main application settings."""

    coloring: ColoringConfig = Field(default_factory=ColoringConfig)
    generation: GenerationConfig = Field(default_factory=GenerationConfig)
    correction: CorrectionConfig = Field(default_factory=CorrectionConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphfieldSettings:
    """Get default application settings."""
    return GlyphfieldSettings()
