"""Unit tests for logging utilities."""

import logging

import structlog

from glyphfield.utils import ProcessingLogger, ProcessingStats, configure_logging


class TestProcessingStats:
    """Tests for ProcessingStats."""

    def test_duration(self):
        """Test duration needs both timestamps."""
        stats = ProcessingStats()
        assert stats.duration_seconds == 0.0
        stats.start_time = 10.0
        stats.end_time = 12.5
        assert stats.duration_seconds == 2.5

    def test_average_glyph_time(self):
        """Test mean glyph time."""
        stats = ProcessingStats()
        assert stats.average_glyph_ms == 0.0
        stats.glyph_timings_ms.extend([2.0, 4.0])
        assert stats.average_glyph_ms == 3.0


class TestProcessingLogger:
    """Tests for ProcessingLogger counters."""

    def test_counts(self):
        """Test each event updates its counter."""
        logger = ProcessingLogger(structlog.get_logger("test"))
        logger.log_glyph_start("A")
        logger.log_glyph_complete("A", corrected_texels=3, duration_ms=1.5)
        logger.log_glyph_skipped("space", "empty glyph")
        logger.log_glyph_error("B", ValueError("broken"))

        stats = logger.stats
        assert stats.rendered_count == 1
        assert stats.corrected_texels == 3
        assert stats.skipped_count == 1
        assert stats.error_count == 1
        assert stats.errors == [("B", "broken")]


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_file_output(self, tmp_path):
        """Test records are written as JSON to the log file."""
        log_file = tmp_path / "glyphfield.log"
        logger = configure_logging(log_file=log_file, console_level="ERROR")
        logger.info("Glyph rendered", glyph="A")
        configure_logging(console_level="ERROR")

        content = log_file.read_text(encoding="utf-8")
        assert '"event": "Glyph rendered"' in content
        assert '"glyph": "A"' in content

    def test_handlers_replaced(self):
        """Test repeated configuration does not stack handlers."""
        configure_logging(quiet=True)
        count = len(logging.getLogger().handlers)
        configure_logging(quiet=True)
        assert len(logging.getLogger().handlers) == count
