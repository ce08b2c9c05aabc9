"""Logging utilities for Glyphfield."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_HANDLER_MARKER = "_glyphfield_handler"


@dataclass
class ProcessingStats:
    """Statistics from a rendering run."""

    rendered_count: int = 0
    skipped_count: int = 0
    error_count: int = 0
    corrected_texels: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    glyph_timings_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate processing duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def average_glyph_ms(self) -> float:
        """Mean time spent per rendered glyph."""
        if not self.glyph_timings_ms:
            return 0.0
        return sum(self.glyph_timings_ms) / len(self.glyph_timings_ms)


def _install_handler(root_logger: logging.Logger, handler: logging.Handler) -> None:
    setattr(handler, _HANDLER_MARKER, True)
    root_logger.addHandler(handler)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure structured logging to the console and an optional file.

    Calling this again replaces the handlers installed by a previous call, so
    repeated processor construction does not duplicate output.

    Args:
        log_file: Path to log file (no file logging if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if getattr(handler, _HANDLER_MARKER, False):
            root_logger.removeHandler(handler)
            handler.close()
    root_logger.setLevel(logging.DEBUG)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        _install_handler(root_logger, file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    _install_handler(root_logger, console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("glyphfield")
    logger.debug(
        "Logging initialized",
        log_file=str(log_file) if log_file is not None else None,
        level=file_level,
    )

    return logger


class ProcessingLogger:
    """Logger for tracking rendering progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = ProcessingStats()

    def log_glyph_start(self, glyph_name: str) -> None:
        """Log start of glyph rendering."""
        self._logger.debug("Rendering glyph", glyph=glyph_name)

    def log_glyph_complete(
        self,
        glyph_name: str,
        corrected_texels: int,
        duration_ms: float,
    ) -> None:
        """Log successful glyph rendering."""
        self._logger.info(
            "Glyph rendered",
            glyph=glyph_name,
            corrected=corrected_texels,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.rendered_count += 1
        self._stats.corrected_texels += corrected_texels

    def log_glyph_skipped(self, glyph_name: str, reason: str) -> None:
        """Log skipped glyph."""
        self._logger.debug("Glyph skipped", glyph=glyph_name, reason=reason)
        self._stats.skipped_count += 1

    def log_glyph_error(
        self,
        glyph_name: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log glyph rendering error."""
        self._logger.error(
            "Glyph rendering failed",
            glyph=glyph_name,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((glyph_name, str(error)))

    def log_shape_summary(
        self,
        glyph_name: str,
        contour_count: int,
        edge_count: int,
    ) -> None:
        """Log outline size after normalization."""
        self._logger.debug(
            "Shape prepared",
            glyph=glyph_name,
            contours=contour_count,
            edges=edge_count,
        )

    @property
    def stats(self) -> ProcessingStats:
        """Get current processing statistics."""
        return self._stats
