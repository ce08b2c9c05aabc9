"""Rendering orchestration for the distance field pipeline.

This module runs the complete workflow for one shape or a set of font
glyphs: outline preparation, edge coloring, framing, field generation, sign and
error correction.

Key components:
- RenderResult: Bitmap and placement of one rendered shape
- FieldProcessor: Main orchestrator class
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import Executor, ProcessPoolExecutor
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path

from glyphfield.config import ColoringStrategy, FieldMode, GlyphfieldSettings
from glyphfield.core.coloring import color_ink_trap, color_simple
from glyphfield.core.correction import clash_threshold, correct_distance_sign, correct_errors
from glyphfield.core.framing import Framing, frame_shape
from glyphfield.core.generator import channels_for_mode, generate_field
from glyphfield.core.outline import edge_count, normalize_shape, orient_contours, validate_shape
from glyphfield.domain import MsdfBitmap, Shape
from glyphfield.exceptions import GlyphfieldError, GlyphProcessingError
from glyphfield.io import BitmapWriter, FontReader
from glyphfield.utils import ProcessingLogger, ProcessingStats, configure_logging

_COLORING = {
    ColoringStrategy.SIMPLE: color_simple,
    ColoringStrategy.INK_TRAP: color_ink_trap,
}


@dataclass
class RenderResult:
    """Output of rendering a single shape.

    Attributes:
        bitmap: Generated (and possibly corrected) field
        framing: Projection and range used for generation
        corrected_texels: Texels changed by error correction
        flipped_texels: Texels flipped to match the outline's fill
        duration_ms: Wall time spent rendering
    """

    bitmap: MsdfBitmap
    framing: Framing
    corrected_texels: int = 0
    flipped_texels: int = 0
    duration_ms: float = 0.0


class FieldProcessor:
    """Orchestrates distance field rendering.

    Manages the complete workflow:
    1. Validate and normalize the outline
    2. Optionally reorient contours to the non-zero rule
    3. Color edges (MSDF only)
    4. Fit the shape into the bitmap
    5. Generate the field, in parallel row bands when configured
    6. Flip texels whose sign disagrees with the fill
    7. Correct clashes (MSDF only)

    Example:
        settings = GlyphfieldSettings()
        processor = FieldProcessor(settings)
        stats = processor.render_font(
            font_path=Path("font.ttf"),
            characters="ABC",
            output_dir=Path("out"),
        )
    """

    def __init__(self, config: GlyphfieldSettings, quiet: bool = False) -> None:
        """Initialize the processor with configuration.

        Args:
            config: Glyphfield settings
            quiet: Suppress console log output except errors
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )
        self.processing_logger = ProcessingLogger(self.logger)

    def prepare_shape(self, shape: Shape) -> None:
        """Validate, normalize, orient and color a shape in place.

        Raises:
            InvalidShapeError: If a contour is not closed
        """
        validate_shape(shape)
        normalize_shape(shape)

        generation = self.config.generation
        if generation.orient_contours:
            orient_contours(shape)

        if generation.mode == FieldMode.MSDF:
            coloring = self.config.coloring
            _COLORING[coloring.strategy](
                shape, angle_threshold=coloring.angle_threshold, seed=coloring.seed
            )

    def render_shape(
        self,
        shape: Shape,
        width: int | None = None,
        height: int | None = None,
        executor: Executor | None = None,
    ) -> RenderResult:
        """Render a shape into a new bitmap.

        The shape is mutated by preparation (normalization, orientation,
        coloring). Unless disabled, texels are then flipped to agree with the
        non-zero fill, so the inside of the outline reads above 0.5 whatever
        the contour direction.

        Args:
            shape: Outline to render
            width: Bitmap width (defaults to the configured size)
            height: Bitmap height (defaults to the configured size)
            executor: Worker pool shared across calls, created per call if None

        Returns:
            RenderResult with the bitmap and its framing

        Raises:
            InvalidShapeError: If a contour is not closed
            InvalidDimensionsError: If width or height is not positive
            GenerationError: If the shape cannot be framed or generated
        """
        start_time = time.time()
        generation = self.config.generation
        width = generation.size if width is None else width
        height = generation.size if height is None else height
        mode = FieldMode(generation.mode).value

        bitmap = MsdfBitmap(width, height, channels_for_mode(mode))
        self.prepare_shape(shape)
        framing = frame_shape(shape, width, height, generation.pixel_range)

        generate_field(
            mode,
            bitmap,
            shape,
            framing.range,
            framing.projection,
            max_workers=self.config.processing.max_workers,
            rows_per_task=self.config.processing.rows_per_task,
            executor=executor,
        )

        correction = self.config.correction
        flipped = 0
        if correction.sign_correction:
            flipped = correct_distance_sign(bitmap, shape, framing.projection)

        corrected = 0
        if mode == FieldMode.MSDF.value and correction.enabled:
            threshold = clash_threshold(
                framing.projection.scale, framing.range, correction.edge_threshold
            )
            corrected = correct_errors(bitmap, threshold)

        duration_ms = (time.time() - start_time) * 1000
        return RenderResult(
            bitmap=bitmap,
            framing=framing,
            corrected_texels=corrected,
            flipped_texels=flipped,
            duration_ms=duration_ms,
        )

    def render_font(
        self,
        font_path: Path,
        characters: str,
        output_dir: Path,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> ProcessingStats:
        """Render the glyphs of a set of characters and write them to files.

        A failure on one glyph is logged and counted; the remaining glyphs
        are still rendered. Glyphs without outlines (such as space) are
        skipped.

        Args:
            font_path: Path to input font file (TTF or OTF)
            characters: Characters to render, duplicates ignored
            output_dir: Directory receiving one file per glyph
            progress_callback: Optional callback(completed, total, glyph_name, success)
                for progress updates

        Returns:
            ProcessingStats with counts, timing, and error details

        Raises:
            FontLoadError: If the font cannot be loaded
        """
        stats = ProcessingStats()
        stats.start_time = time.time()

        unique_characters = list(dict.fromkeys(characters))
        writer = BitmapWriter(output_dir, self.config.output.format.value)

        self.logger.info(
            "Starting font rendering",
            input=str(font_path),
            output_dir=str(output_dir),
            characters=len(unique_characters),
            mode=FieldMode(self.config.generation.mode).value,
            size=self.config.generation.size,
        )

        with FontReader(font_path) as reader, self._worker_pool() as executor:
            self.logger.info(
                "Font loaded",
                format=reader.format,
                upm=reader.units_per_em,
                glyph_count=reader.glyph_count,
            )

            total = len(unique_characters)
            for completed, character in enumerate(unique_characters, start=1):
                glyph_name = character
                success = False
                try:
                    glyph_name, shape = reader.get_character_shape(character)
                    success = self._render_glyph(glyph_name, shape, writer, stats, executor)
                except GlyphfieldError as e:
                    self.processing_logger.log_glyph_error(
                        glyph_name=glyph_name,
                        error=e,
                        traceback=traceback.format_exc(),
                    )
                    stats.error_count += 1
                    stats.errors.append((glyph_name, str(e)))

                if progress_callback is not None:
                    progress_callback(completed, total, glyph_name, success)

        stats.end_time = time.time()

        self.logger.info(
            "Rendering complete",
            rendered=stats.rendered_count,
            skipped=stats.skipped_count,
            errors=stats.error_count,
            corrected_texels=stats.corrected_texels,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def _worker_pool(self) -> ProcessPoolExecutor | nullcontext:
        """One pool for a whole batch; no pool when generation is serial."""
        max_workers = self.config.processing.max_workers
        if max_workers == 1:
            return nullcontext()
        return ProcessPoolExecutor(max_workers=max_workers)

    def _render_glyph(
        self,
        glyph_name: str,
        shape: Shape,
        writer: BitmapWriter,
        stats: ProcessingStats,
        executor: Executor | None = None,
    ) -> bool:
        """Render one glyph and write it.

        Returns:
            True if a file was written, False if the glyph was skipped
        """
        if shape.is_empty():
            stats.skipped_count += 1
            self.processing_logger.log_glyph_skipped(glyph_name, "empty glyph")
            return False

        self.processing_logger.log_glyph_start(glyph_name)
        self.processing_logger.log_shape_summary(
            glyph_name, len(shape.contours), edge_count(shape)
        )

        try:
            result = self.render_shape(shape, executor=executor)
        except (ArithmeticError, ValueError) as e:
            raise GlyphProcessingError(glyph_name, str(e)) from e
        path = writer.write(glyph_name, result.bitmap)

        stats.rendered_count += 1
        stats.corrected_texels += result.corrected_texels
        stats.glyph_timings_ms.append(result.duration_ms)
        self.processing_logger.log_glyph_complete(
            glyph_name=glyph_name,
            corrected_texels=result.corrected_texels,
            duration_ms=result.duration_ms,
        )
        self.logger.debug(
            "Bitmap written",
            glyph=glyph_name,
            path=str(path),
            flipped_texels=result.flipped_texels,
        )
        return True
