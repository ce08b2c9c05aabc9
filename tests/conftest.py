"""Shared fixtures: small outlines and a generated test font."""

from collections.abc import Callable
from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from glyphfield.domain import Contour, EdgeSegment, Shape, Vector2

# Cubic control point offset approximating a quarter circle.
KAPPA = 0.5522847498


def _square(size: float = 4.0, x: float = 0.0, y: float = 0.0) -> Shape:
    """Counter-clockwise (y-up) axis aligned square."""
    a = Vector2(x, y)
    b = Vector2(x + size, y)
    c = Vector2(x + size, y + size)
    d = Vector2(x, y + size)
    contour = Contour(
        [
            EdgeSegment.linear(a, b),
            EdgeSegment.linear(b, c),
            EdgeSegment.linear(c, d),
            EdgeSegment.linear(d, a),
        ]
    )
    return Shape([contour])


def _circle(radius: float = 3.0, cx: float = 4.0, cy: float = 4.0) -> Shape:
    """Counter-clockwise circle made of four cubic arcs."""
    k = KAPPA * radius
    right = Vector2(cx + radius, cy)
    top = Vector2(cx, cy + radius)
    left = Vector2(cx - radius, cy)
    bottom = Vector2(cx, cy - radius)
    contour = Contour(
        [
            EdgeSegment.cubic(right, right + Vector2(0, k), top + Vector2(k, 0), top),
            EdgeSegment.cubic(top, top - Vector2(k, 0), left + Vector2(0, k), left),
            EdgeSegment.cubic(left, left - Vector2(0, k), bottom - Vector2(k, 0), bottom),
            EdgeSegment.cubic(bottom, bottom + Vector2(k, 0), right - Vector2(0, k), right),
        ]
    )
    return Shape([contour])


@pytest.fixture
def make_square() -> Callable[..., Shape]:
    """Factory for square shapes."""
    return _square


@pytest.fixture
def make_circle() -> Callable[..., Shape]:
    """Factory for circle shapes."""
    return _circle


@pytest.fixture
def square_shape() -> Shape:
    """A 4x4 square at the origin."""
    return _square()


@pytest.fixture
def circle_shape() -> Shape:
    """A radius 3 circle centered at (4, 4)."""
    return _circle()


def _draw_box(pen: TTGlyphPen, x0: int, y0: int, x1: int, y1: int, clockwise: bool) -> None:
    pen.moveTo((x0, y0))
    if clockwise:
        pen.lineTo((x0, y1))
        pen.lineTo((x1, y1))
        pen.lineTo((x1, y0))
    else:
        pen.lineTo((x1, y0))
        pen.lineTo((x1, y1))
        pen.lineTo((x0, y1))
    pen.closePath()


def build_test_font(path: Path) -> Path:
    """Write a small TrueType font.

    Glyphs:
    - space: no outline
    - H: solid box (one contour)
    - O: box with a square counter (two contours)
    - o: quadratic ellipse
    """
    empty = TTGlyphPen(None).glyph()

    pen = TTGlyphPen(None)
    _draw_box(pen, 100, 0, 500, 700, clockwise=True)
    box = pen.glyph()

    pen = TTGlyphPen(None)
    _draw_box(pen, 100, 0, 500, 700, clockwise=True)
    _draw_box(pen, 200, 100, 400, 600, clockwise=False)
    ring = pen.glyph()

    pen = TTGlyphPen(None)
    pen.moveTo((300, 0))
    pen.qCurveTo((100, 0), (100, 250))
    pen.qCurveTo((100, 500), (300, 500))
    pen.qCurveTo((500, 500), (500, 250))
    pen.qCurveTo((500, 0), (300, 0))
    pen.closePath()
    ellipse = pen.glyph()

    glyph_order = [".notdef", "space", "H", "O", "o"]
    glyphs = {".notdef": empty, "space": TTGlyphPen(None).glyph(), "H": box, "O": ring, "o": ellipse}

    fb = FontBuilder(1000, isTTF=True)
    fb.setupGlyphOrder(glyph_order)
    fb.setupCharacterMap({0x20: "space", 0x48: "H", 0x4F: "O", 0x6F: "o"})
    fb.setupGlyf(glyphs)
    glyph_table = fb.font["glyf"]
    fb.setupHorizontalMetrics(
        {name: (600, getattr(glyph_table[name], "xMin", 0)) for name in glyph_order}
    )
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "Glyphfield Test", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture
def font_path(tmp_path: Path) -> Path:
    """Path to a freshly built test font."""
    return build_test_font(tmp_path / "GlyphfieldTest.ttf")
