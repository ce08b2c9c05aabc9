"""Glyphfield - Multi-channel signed distance fields for vector outlines.

Glyphfield converts glyph and vector-art outlines made of line, quadratic and
cubic segments into multi-channel signed distance field (MSDF) bitmaps. Each
texel stores three directional distances whose median reconstructs sharp
corners at any scale.

Example:
    $ glyphfield Roboto-Regular.ttf "AB@"

This writes A.png, B.png and at.png MSDF bitmaps into ./glyphfield-out.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
