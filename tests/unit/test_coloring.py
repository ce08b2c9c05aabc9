"""Unit tests for edge coloring."""

import math

import pytest

from glyphfield.core.coloring import (
    _Seed,
    color_ink_trap,
    color_simple,
    find_corners,
    is_corner,
    switch_color,
    symmetrical_trichotomy,
)
from glyphfield.core.outline import normalize_shape, validate_shape
from glyphfield.domain import Contour, EdgeColor, EdgeSegment, Shape, Vector2

CROSS_THRESHOLD = math.sin(3.0)


def _polygon(*points: tuple[float, float]) -> Shape:
    vertices = [Vector2(x, y) for x, y in points]
    contour = Contour(
        [
            EdgeSegment.linear(vertices[i], vertices[(i + 1) % len(vertices)])
            for i in range(len(vertices))
        ]
    )
    return Shape([contour])


def _teardrop() -> Shape:
    a = Vector2(0, 0)
    return Shape([Contour([EdgeSegment.cubic(a, Vector2(4, 0), Vector2(4, 4), a)])])


def _colors(shape: Shape) -> list[EdgeColor]:
    return [edge.color for edge in shape.iter_edges()]


class TestColorPrimitives:
    """Tests for corner detection and color switching."""

    def test_is_corner(self) -> None:
        """Test straight joins are smooth and right angles are corners."""
        right = Vector2(1, 0)
        assert not is_corner(right, right, CROSS_THRESHOLD)
        assert is_corner(right, Vector2(0, 1), CROSS_THRESHOLD)
        assert is_corner(right, Vector2(-1, 0), CROSS_THRESHOLD)

    def test_find_corners_square(self, square_shape) -> None:
        """Test every vertex of a square is a corner."""
        assert find_corners(square_shape.contours[0], CROSS_THRESHOLD) == [0, 1, 2, 3]

    def test_find_corners_circle(self, circle_shape) -> None:
        """Test a tangent-continuous circle has no corner."""
        assert find_corners(circle_shape.contours[0], CROSS_THRESHOLD) == []

    def test_switch_color_stays_two_channel(self) -> None:
        """Test switching always yields a two-channel color."""
        seed = _Seed(0b1011)
        color = EdgeColor.CYAN
        for _ in range(4):
            new_color = switch_color(color, seed)
            assert new_color in (EdgeColor.CYAN, EdgeColor.MAGENTA, EdgeColor.YELLOW)
            assert new_color != color
            color = new_color

    def test_switch_color_avoids_banned(self) -> None:
        """Test a single shared channel with the banned color is dropped."""
        assert switch_color(EdgeColor.YELLOW, _Seed(0), EdgeColor.CYAN) == EdgeColor.MAGENTA

    def test_symmetrical_trichotomy(self) -> None:
        """Test positions map to three symmetric bands."""
        assert [symmetrical_trichotomy(i, 5) for i in range(5)] == [-1, -1, 0, 1, 1]


class TestColorSimple:
    """Tests for color_simple."""

    def test_deterministic(self, make_square) -> None:
        """Test equal seeds give equal colorings."""
        first = make_square()
        second = make_square()
        color_simple(first, seed=42)
        color_simple(second, seed=42)
        assert _colors(first) == _colors(second)

    @pytest.mark.parametrize("seed", [0, 1, 7, 12345, 2**64 - 1])
    def test_square_corners_get_different_colors(self, square_shape, seed) -> None:
        """Test edges meeting at a corner never share a color."""
        color_simple(square_shape, seed=seed)
        colors = _colors(square_shape)
        assert EdgeColor.BLACK not in colors
        for i in range(len(colors)):
            assert colors[i] != colors[(i + 1) % len(colors)]

    def test_square_colors_cover_channels(self, square_shape) -> None:
        """Test every channel is driven by some edge."""
        color_simple(square_shape)
        combined = EdgeColor.BLACK
        for color in _colors(square_shape):
            combined |= color
        assert combined == EdgeColor.WHITE

    def test_smooth_contour_single_color(self, circle_shape) -> None:
        """Test a contour without corners gets one two-channel color."""
        color_simple(circle_shape)
        colors = set(_colors(circle_shape))
        assert len(colors) == 1
        assert colors.pop() in (EdgeColor.CYAN, EdgeColor.MAGENTA, EdgeColor.YELLOW)

    def test_teardrop_single_edge_split(self) -> None:
        """Test a one-edge teardrop is split into three colored parts."""
        shape = _teardrop()
        color_simple(shape)
        colors = _colors(shape)
        assert len(colors) == 3
        assert colors[1] == EdgeColor.WHITE
        assert colors[0] != colors[2]
        assert EdgeColor.BLACK not in colors
        validate_shape(shape)

    def test_teardrop_two_edges_split(self) -> None:
        """Test a two-edge teardrop is split into six parts."""
        a = Vector2(0, 0)
        b = Vector2(4, 4)
        shape = Shape(
            [
                Contour(
                    [
                        EdgeSegment.quadratic(a, Vector2(4, 0), b),
                        EdgeSegment.quadratic(b, Vector2(4, 8), a),
                    ]
                )
            ]
        )
        color_simple(shape)
        assert len(shape.contours[0].edges) == 6
        assert EdgeColor.BLACK not in _colors(shape)
        validate_shape(shape)

    def test_normalized_teardrop(self) -> None:
        """Test a normalized teardrop keeps three edges."""
        shape = _teardrop()
        normalize_shape(shape)
        color_simple(shape)
        colors = _colors(shape)
        assert len(colors) == 3
        assert EdgeColor.BLACK not in colors

    def test_multiple_contours(self, make_square, circle_shape) -> None:
        """Test every contour of a shape is colored."""
        shape = make_square(size=10.0)
        shape.add_contour(circle_shape.contours[0])
        color_simple(shape, seed=3)
        assert EdgeColor.BLACK not in _colors(shape)

    def test_empty_contour_ignored(self, square_shape) -> None:
        """Test an empty contour does not fail coloring."""
        square_shape.add_contour()
        color_simple(square_shape)
        assert EdgeColor.BLACK not in _colors(square_shape)


class TestColorInkTrap:
    """Tests for color_ink_trap."""

    def test_square_matches_simple(self, make_square) -> None:
        """Test equal spline lengths give the same result as color_simple."""
        simple = make_square()
        ink_trap = make_square()
        color_simple(simple, seed=9)
        color_ink_trap(ink_trap, seed=9)
        assert _colors(simple) == _colors(ink_trap)

    def test_notch_colored(self) -> None:
        """Test a contour with a short notch is fully colored."""
        shape = _polygon((0, 0), (10, 0), (10, 10), (6, 10), (5, 9), (4, 10), (0, 10))
        color_ink_trap(shape, seed=5)
        assert EdgeColor.BLACK not in _colors(shape)

    def test_deterministic(self) -> None:
        """Test equal seeds give equal colorings."""
        points = ((0, 0), (10, 0), (10, 10), (6, 10), (5, 9), (4, 10), (0, 10))
        first = _polygon(*points)
        second = _polygon(*points)
        color_ink_trap(first, seed=77)
        color_ink_trap(second, seed=77)
        assert _colors(first) == _colors(second)

    def test_smooth_and_teardrop(self, circle_shape) -> None:
        """Test the contour cases without several corners."""
        color_ink_trap(circle_shape)
        assert len(set(_colors(circle_shape))) == 1

        teardrop = _teardrop()
        color_ink_trap(teardrop)
        assert len(teardrop.contours[0].edges) == 3
