"""Exception hierarchy for Glyphfield."""


class GlyphfieldError(Exception):
    """Base exception for all Glyphfield errors."""

    pass


class ShapeError(GlyphfieldError):
    """Errors related to outline geometry."""

    pass


class InvalidShapeError(ShapeError):
    """A contour is not a closed loop of edges."""

    def __init__(self, contour_index: int, edge_index: int) -> None:
        self.contour_index = contour_index
        self.edge_index = edge_index
        super().__init__(
            f"Contour {contour_index} is not closed: edge {edge_index} does not "
            "start where the previous edge ends"
        )


class BitmapError(GlyphfieldError):
    """Errors related to distance field bitmaps."""

    pass


class InvalidDimensionsError(BitmapError):
    """Bitmap width, height or channel count is not usable."""

    def __init__(self, width: int, height: int, channels: int) -> None:
        self.width = width
        self.height = height
        self.channels = channels
        super().__init__(
            f"Invalid bitmap dimensions {width}x{height} with {channels} channel(s)"
        )


class GenerationError(GlyphfieldError):
    """Invalid parameters for distance field generation."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Distance field generation failed: {reason}")


class FontError(GlyphfieldError):
    """Errors related to font loading."""

    pass


class FontLoadError(FontError):
    """Error loading a font file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load font '{path}': {reason}")


class GlyphNotFoundError(FontError):
    """Requested glyph not found in font."""

    def __init__(self, glyph_name: str) -> None:
        self.glyph_name = glyph_name
        super().__init__(f"Glyph '{glyph_name}' not found in font")


class GlyphProcessingError(GlyphfieldError):
    """Error rendering a specific glyph."""

    def __init__(self, glyph_name: str, reason: str) -> None:
        self.glyph_name = glyph_name
        self.reason = reason
        super().__init__(f"Error rendering glyph '{glyph_name}': {reason}")


class OutputError(GlyphfieldError):
    """Errors related to writing results."""

    pass


class BitmapSaveError(OutputError):
    """Error saving a bitmap file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save bitmap '{path}': {reason}")
