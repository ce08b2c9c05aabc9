"""Font and bitmap I/O layer for glyphfield.

This module handles reading glyph outlines with fonttools and writing
generated bitmaps. It provides a clean abstraction layer between fonttools
and the domain models.

Key responsibilities:
- Load TTF/OTF fonts
- Convert glyph drawing commands to Shapes
- Write bitmaps as .npy arrays or .png images

Key classes:
- ShapePen: fonttools pen producing a Shape
- FontReader: Load fonts and extract glyph shapes
- BitmapWriter: Save bitmaps
"""

from glyphfield.io.pen import ShapePen
from glyphfield.io.reader import FontReader
from glyphfield.io.writer import BitmapWriter

__all__ = [
    "BitmapWriter",
    "FontReader",
    "ShapePen",
]
