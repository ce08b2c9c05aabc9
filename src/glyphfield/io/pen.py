"""fontTools pen that builds a Shape from glyph drawing commands.

fontTools decomposes TrueType implied on-curve points and composite glyphs
before the segment callbacks below are called, so every callback receives
a single explicit segment.
"""

from fontTools.pens.basePen import BasePen

from glyphfield.domain import Contour, EdgeSegment, Shape, Vector2


def _point(pt) -> Vector2:
    return Vector2(float(pt[0]), float(pt[1]))


class ShapePen(BasePen):
    """Pen that records outlines as a Shape of linear, quadratic and cubic edges.

    Zero-length lines are dropped. Contours that are not explicitly closed
    back to their start point get a closing line.

    Example:
        pen = ShapePen(glyph_set)
        glyph_set["A"].draw(pen)
        shape = pen.shape
    """

    def __init__(self, glyph_set=None, inverse_y_axis: bool = False) -> None:
        super().__init__(glyph_set)
        self.shape = Shape(inverse_y_axis=inverse_y_axis)
        self._contour: Contour | None = None
        self._start: Vector2 | None = None
        self._current: Vector2 | None = None

    def _moveTo(self, pt) -> None:
        self._finish_contour()
        self._contour = Contour()
        self._start = self._current = _point(pt)

    def _lineTo(self, pt) -> None:
        end = _point(pt)
        if end != self._current:
            self._contour.add_edge(EdgeSegment.linear(self._current, end))
        self._current = end

    def _qCurveToOne(self, pt1, pt2) -> None:
        end = _point(pt2)
        self._contour.add_edge(EdgeSegment.quadratic(self._current, _point(pt1), end))
        self._current = end

    def _curveToOne(self, pt1, pt2, pt3) -> None:
        end = _point(pt3)
        self._contour.add_edge(
            EdgeSegment.cubic(self._current, _point(pt1), _point(pt2), end)
        )
        self._current = end

    def _closePath(self) -> None:
        self._finish_contour()

    def _endPath(self) -> None:
        self._finish_contour()

    def _finish_contour(self) -> None:
        if self._contour is None:
            return
        if self._current != self._start:
            self._contour.add_edge(EdgeSegment.linear(self._current, self._start))
        if not self._contour.is_empty():
            self.shape.add_contour(self._contour)
        self._contour = None
        self._start = self._current = None
