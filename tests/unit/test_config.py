"""Unit tests for configuration settings."""

import pytest
from pydantic import ValidationError

from glyphfield.config import (
    ColoringStrategy,
    CorrectionConfig,
    FieldMode,
    GenerationConfig,
    GlyphfieldSettings,
    OutputFormat,
    ProcessingConfig,
    get_default_settings,
)


class TestDefaults:
    """Tests for default settings."""

    def test_default_settings(self):
        """Test defaults match the documented behaviour."""
        settings = get_default_settings()
        assert settings.generation.mode is FieldMode.MSDF
        assert settings.generation.size == 32
        assert settings.generation.pixel_range == 4.0
        assert settings.coloring.strategy is ColoringStrategy.SIMPLE
        assert settings.coloring.angle_threshold == 3.0
        assert settings.coloring.seed == 0
        assert settings.correction.enabled
        assert settings.correction.edge_threshold == 1.001
        assert settings.correction.sign_correction
        assert settings.processing.max_workers is None
        assert settings.output.format is OutputFormat.PNG
        assert settings.logging.log_file is None

    def test_sections_independent(self):
        """Test each settings object gets its own sections."""
        first = GlyphfieldSettings()
        second = GlyphfieldSettings()
        first.generation.size = 64
        assert second.generation.size == 32


class TestValidation:
    """Tests for field constraints."""

    def test_enum_from_string(self):
        """Test enums accept their string values."""
        config = GenerationConfig(mode="psdf")
        assert config.mode is FieldMode.PSDF

    @pytest.mark.parametrize(
        "kwargs",
        [{"size": 2}, {"size": 10000}, {"pixel_range": 0.0}, {"mode": "bitmap"}],
    )
    def test_generation_rejects(self, kwargs):
        """Test out of range generation values."""
        with pytest.raises(ValidationError):
            GenerationConfig(**kwargs)

    def test_processing_rejects(self):
        """Test worker and band limits."""
        with pytest.raises(ValidationError):
            ProcessingConfig(max_workers=0)
        with pytest.raises(ValidationError):
            ProcessingConfig(rows_per_task=0)

    def test_correction_rejects(self):
        """Test the clash tolerance must be positive."""
        with pytest.raises(ValidationError):
            CorrectionConfig(edge_threshold=0.0)

    def test_nested_from_dict(self):
        """Test building settings from plain data."""
        settings = GlyphfieldSettings.model_validate(
            {"coloring": {"strategy": "ink_trap", "seed": 2**63}, "output": {"format": "npy"}}
        )
        assert settings.coloring.strategy is ColoringStrategy.INK_TRAP
        assert settings.coloring.seed == 2**63
        assert settings.output.format is OutputFormat.NPY
