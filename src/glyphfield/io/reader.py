"""Font reader for loading TTF/OTF outlines.

This module provides the FontReader class for loading font files
and extracting glyph outlines as Shapes.
"""

from pathlib import Path

from fontTools.ttLib import TTFont, TTLibError

from glyphfield.domain import Shape
from glyphfield.exceptions import FontLoadError, GlyphNotFoundError
from glyphfield.io.pen import ShapePen


class FontReader:
    """Loads TTF/OTF fonts and converts glyph outlines to Shapes.

    Font outlines are y-up, so every Shape is created with
    ``inverse_y_axis`` set and generated bitmaps come out upright.

    Example:
        with FontReader(Path("font.ttf")) as reader:
            shape = reader.get_shape("A")
    """

    def __init__(self, font_path: Path) -> None:
        """Initialize the font reader.

        Args:
            font_path: Path to the TTF or OTF font file
        """
        self._font_path = font_path
        self._font: TTFont | None = None

    def load(self) -> None:
        """Load the font file.

        Raises:
            FontLoadError: If the file does not exist or is not a font
        """
        if not self._font_path.exists():
            raise FontLoadError(str(self._font_path), "file not found")

        try:
            self._font = TTFont(str(self._font_path))
        except (TTLibError, OSError) as e:
            raise FontLoadError(str(self._font_path), str(e)) from e

    def _require_font(self) -> TTFont:
        if self._font is None:
            raise RuntimeError("Font not loaded. Call load() first.")
        return self._font

    @property
    def format(self) -> str:
        """Return font format.

        Returns:
            'TrueType' for TTF fonts, 'OpenType' for OTF fonts
        """
        font = self._require_font()
        if "CFF " in font or "CFF2" in font:
            return "OpenType"
        return "TrueType"

    @property
    def units_per_em(self) -> int:
        """Return font's units per em."""
        return self._require_font()["head"].unitsPerEm  # type: ignore[attr-defined]

    @property
    def glyph_count(self) -> int:
        """Return total number of glyphs in the font."""
        return self._require_font()["maxp"].numGlyphs

    def glyph_name_for(self, character: str) -> str:
        """Resolve a character to its glyph name through the cmap.

        Raises:
            GlyphNotFoundError: If the font does not map the character
        """
        cmap = self._require_font().getBestCmap() or {}
        name = cmap.get(ord(character))
        if name is None:
            raise GlyphNotFoundError(f"U+{ord(character):04X}")
        return name

    def get_shape(self, glyph_name: str) -> Shape:
        """Draw a glyph into a Shape.

        Args:
            glyph_name: Name of the glyph to draw

        Returns:
            Shape in font units, empty for glyphs without outlines

        Raises:
            GlyphNotFoundError: If the glyph is not in the font
        """
        glyph_set = self._require_font().getGlyphSet()
        if glyph_name not in glyph_set:
            raise GlyphNotFoundError(glyph_name)

        pen = ShapePen(glyph_set, inverse_y_axis=True)
        glyph_set[glyph_name].draw(pen)
        return pen.shape

    def get_character_shape(self, character: str) -> tuple[str, Shape]:
        """Resolve a character and draw its glyph.

        Returns:
            Tuple of (glyph name, shape)
        """
        name = self.glyph_name_for(character)
        return name, self.get_shape(name)

    def close(self) -> None:
        """Close the font file and free resources."""
        if self._font is not None:
            self._font.close()
            self._font = None

    def __enter__(self) -> "FontReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
