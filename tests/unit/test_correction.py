"""Unit tests for clash and sign correction."""

import numpy as np
import pytest

from glyphfield.core.coloring import color_simple
from glyphfield.core.correction import (
    clash_threshold,
    correct_distance_sign,
    correct_errors,
    detect_clash,
    fill_mask,
)
from glyphfield.core.framing import frame_shape
from glyphfield.core.generator import generate_msdf, generate_pseudo_sdf
from glyphfield.core.outline import reverse_contour
from glyphfield.domain import MsdfBitmap, Projection, Shape, Vector2
from glyphfield.exceptions import GenerationError

IDENTITY = Projection()


def _texel(*values: float) -> np.ndarray:
    return np.array(values, dtype=np.float32)


class TestDetectClash:
    """Tests for detect_clash on single texel pairs."""

    def test_opposite_channels_clash(self) -> None:
        """Test swapped channels with an equally certain third channel clash."""
        a = _texel(0.0, 1.0, 0.6)
        b = _texel(1.0, 0.0, 0.6)
        assert bool(detect_clash(a, b, 0.5))
        assert bool(detect_clash(b, a, 0.5))

    def test_below_threshold(self) -> None:
        """Test small channel jumps are not clashes."""
        assert not bool(detect_clash(_texel(0.0, 1.0, 0.6), _texel(1.0, 0.0, 0.6), 1.5))

    def test_equalized_neighbour(self) -> None:
        """Test a neighbour whose channels already agree is never blamed."""
        assert not bool(detect_clash(_texel(0.0, 1.0, 0.6), _texel(0.3, 0.3, 0.3), 0.2))

    def test_only_less_certain_texel_flagged(self) -> None:
        """Test the texel nearer to the edge value is kept."""
        near_edge = _texel(0.0, 1.0, 0.5)
        far_from_edge = _texel(1.0, 0.0, 0.9)
        assert not bool(detect_clash(near_edge, far_from_edge, 0.5))
        assert bool(detect_clash(far_from_edge, near_edge, 0.5))

    def test_largest_difference_in_blue(self) -> None:
        """Test channels are reordered when blue differs most."""
        # Differences (0.05, 0.6, 0.9): the least different channel is red.
        a = _texel(0.55, 0.6, 0.9)
        b = _texel(0.5, 0.0, 0.0)
        assert bool(detect_clash(a, b, 0.5))
        assert not bool(detect_clash(b, a, 0.5))

    def test_second_swap_skipped(self) -> None:
        """Test red and green stay in place when red still differs most."""
        # Differences (0.9, 0.1, 0.6): only green and blue trade places.
        a = _texel(0.0, 0.4, 0.0)
        b = _texel(0.9, 0.5, 0.6)
        assert bool(detect_clash(a, b, 0.5))

    def test_second_largest_difference_decides(self) -> None:
        """Test a single large channel jump is not a clash."""
        a = _texel(0.0, 0.45, 0.4)
        b = _texel(0.9, 0.5, 0.6)
        assert not bool(detect_clash(a, b, 0.5))

    def test_vectorized(self) -> None:
        """Test rows of texels are compared element-wise."""
        a = np.stack([_texel(0.0, 1.0, 0.6), _texel(0.0, 1.0, 0.6)])
        b = np.stack([_texel(1.0, 0.0, 0.6), _texel(0.0, 1.0, 0.6)])
        assert detect_clash(a, b, 0.5).tolist() == [True, False]


class TestClashThreshold:
    """Tests for clash_threshold."""

    def test_per_axis(self) -> None:
        """Test one pixel of distance in normalized units per axis."""
        assert clash_threshold(Vector2(2.0, 4.0), 0.5, 1.0) == Vector2(1.0, 0.5)

    def test_rejects_non_positive(self) -> None:
        """Test invalid scale or range."""
        with pytest.raises(GenerationError):
            clash_threshold(Vector2(1.0, 1.0), 0.0)
        with pytest.raises(GenerationError):
            clash_threshold(Vector2(0.0, 1.0), 1.0)


class TestCorrectErrors:
    """Tests for correct_errors."""

    def test_clashing_pair_collapsed_to_median(self) -> None:
        """Test both texels of a clashing pair become their medians."""
        bitmap = MsdfBitmap(2, 1)
        bitmap.pixels[0, 0] = (0.0, 1.0, 0.6)
        bitmap.pixels[0, 1] = (1.0, 0.0, 0.6)

        changed = correct_errors(bitmap, Vector2(0.5, 0.5))

        assert changed == 2
        expected = np.float32(0.6)
        assert np.all(bitmap.pixels == expected)

    def test_idempotent(self) -> None:
        """Test a second pass finds nothing left to change."""
        bitmap = MsdfBitmap(2, 1)
        bitmap.pixels[0, 0] = (0.0, 1.0, 0.6)
        bitmap.pixels[0, 1] = (1.0, 0.0, 0.6)
        correct_errors(bitmap, Vector2(0.5, 0.5))
        snapshot = bitmap.pixels.copy()

        assert correct_errors(bitmap, Vector2(0.5, 0.5)) == 0
        np.testing.assert_array_equal(bitmap.pixels, snapshot)

    def test_vertical_pair_uses_y_threshold(self) -> None:
        """Test vertical neighbours are compared against the y threshold."""
        bitmap = MsdfBitmap(1, 2)
        bitmap.pixels[0, 0] = (0.0, 1.0, 0.6)
        bitmap.pixels[1, 0] = (1.0, 0.0, 0.6)

        assert correct_errors(bitmap.copy(), Vector2(0.5, 2.0)) == 0
        assert correct_errors(bitmap, Vector2(2.0, 0.5)) == 2

    def test_diagonal_pair(self) -> None:
        """Test diagonal neighbours use the summed threshold."""
        bitmap = MsdfBitmap(2, 2)
        bitmap.pixels[...] = 0.9
        bitmap.pixels[0, 0] = (0.0, 1.0, 0.6)
        bitmap.pixels[1, 1] = (1.0, 0.0, 0.6)

        assert correct_errors(bitmap.copy(), Vector2(0.5, 0.6)) == 0
        assert correct_errors(bitmap, Vector2(0.25, 0.25)) == 2
        assert np.all(bitmap.pixels[0, 0] == np.float32(0.6))

    def test_smooth_field_untouched(self, make_circle) -> None:
        """Test a field without channel disagreement is left alone."""
        shape = make_circle()
        framing = frame_shape(shape, 12, 12, 4.0)
        bitmap = MsdfBitmap(12, 12)
        generate_msdf(bitmap, shape, framing.range, framing.projection)
        snapshot = bitmap.pixels.copy()

        threshold = clash_threshold(framing.projection.scale, framing.range)
        assert correct_errors(bitmap, threshold) == 0
        np.testing.assert_array_equal(bitmap.pixels, snapshot)

    def test_median_preserved(self, square_shape) -> None:
        """Test correction never changes the median a shader reconstructs."""
        color_simple(square_shape)
        framing = frame_shape(square_shape, 16, 16, 4.0)
        bitmap = MsdfBitmap(16, 16)
        generate_msdf(bitmap, square_shape, framing.range, framing.projection)
        before = bitmap.median()

        correct_errors(bitmap, clash_threshold(framing.projection.scale, framing.range))

        np.testing.assert_array_equal(bitmap.median(), before)

    def test_rejects_single_channel(self) -> None:
        """Test correction needs three channels."""
        with pytest.raises(GenerationError):
            correct_errors(MsdfBitmap(2, 2, channels=1), Vector2(0.5, 0.5))


def _clockwise(shape: Shape) -> Shape:
    for contour in shape.contours:
        reverse_contour(contour)
    return shape


class TestFillMask:
    """Tests for fill_mask."""

    def test_square(self, make_square) -> None:
        """Test pixel centers inside the outline are filled."""
        mask = fill_mask(make_square(size=4.0, x=1.0, y=1.0), 6, 6, IDENTITY)
        expected = np.zeros((6, 6), dtype=bool)
        expected[1:5, 1:5] = True
        np.testing.assert_array_equal(mask, expected)

    def test_direction_does_not_matter(self, make_square) -> None:
        """Test both contour directions fill the same pixels."""
        ccw = fill_mask(make_square(size=4.0, x=1.0, y=1.0), 6, 6, IDENTITY)
        cw = fill_mask(_clockwise(make_square(size=4.0, x=1.0, y=1.0)), 6, 6, IDENTITY)
        np.testing.assert_array_equal(ccw, cw)

    def test_inverse_y_axis(self, make_square) -> None:
        """Test rows are stored in the generators' order."""
        shape = make_square(size=2.0, x=1.0, y=0.0)
        shape.inverse_y_axis = True
        mask = fill_mask(shape, 5, 5, IDENTITY)
        expected = np.zeros((5, 5), dtype=bool)
        expected[3:5, 1:3] = True
        np.testing.assert_array_equal(mask, expected)

    def test_hole(self, make_square) -> None:
        """Test an oppositely wound inner contour leaves a hole."""
        outer = _clockwise(make_square(size=6.0))
        inner = make_square(size=2.0, x=2.0, y=2.0)
        mask = fill_mask(Shape(outer.contours + inner.contours), 6, 6, IDENTITY)
        assert mask[0, 0]
        assert not mask[2, 2]
        assert not mask[3, 3]
        assert mask[2, 4]


class TestCorrectDistanceSign:
    """Tests for correct_distance_sign."""

    def test_consistent_field_untouched(self, make_square) -> None:
        """Test a clockwise outline already reads inside above 0.5."""
        shape = _clockwise(make_square(size=4.0, x=1.0, y=1.0))
        bitmap = MsdfBitmap(6, 6, channels=1)
        generate_pseudo_sdf(bitmap, shape, 2.0, IDENTITY)
        snapshot = bitmap.pixels.copy()

        assert correct_distance_sign(bitmap, shape, IDENTITY) == 0
        np.testing.assert_array_equal(bitmap.pixels, snapshot)

    def test_reversed_contour_flipped(self, make_square) -> None:
        """Test a counter-clockwise outline is mirrored around the edge value."""
        shape = make_square(size=4.0, x=1.0, y=1.0)
        bitmap = MsdfBitmap(6, 6, channels=1)
        generate_pseudo_sdf(bitmap, shape, 2.0, IDENTITY)
        raw = bitmap.pixels.copy()

        assert correct_distance_sign(bitmap, shape, IDENTITY) == 36
        np.testing.assert_array_equal(bitmap.pixels, np.float32(1.0) - raw)
        assert bitmap.pixels[2, 2, 0] > 0.5
        assert bitmap.pixels[0, 0, 0] < 0.5

    def test_overlapping_contours(self, make_square) -> None:
        """Test texels inside the union follow the fill, not the nearest contour."""
        a = _clockwise(make_square(size=4.0, x=1.0, y=1.0))
        b = _clockwise(make_square(size=4.0, x=3.0, y=3.0))
        shape = Shape(a.contours + b.contours)
        bitmap = MsdfBitmap(8, 8, channels=1)
        generate_pseudo_sdf(bitmap, shape, 2.0, IDENTITY)
        # Inside the first square, half a unit left of the second one.
        assert bitmap.pixels[3, 2, 0] == np.float32(0.25)

        assert correct_distance_sign(bitmap, shape, IDENTITY) > 0
        assert bitmap.pixels[3, 2, 0] == np.float32(0.75)
        np.testing.assert_array_equal(
            bitmap.pixels[..., 0] > 0.5, fill_mask(shape, 8, 8, IDENTITY)
        )

    def test_ambiguous_texel_follows_flipped_neighbours(self, make_square) -> None:
        """Test a texel on the edge value is flipped with its neighbours."""
        shape = make_square(size=10.0, x=-2.0, y=-2.0)
        bitmap = MsdfBitmap(3, 3)
        bitmap.pixels[...] = (0.2, 0.3, 0.4)
        bitmap.pixels[1, 1] = (0.2, 0.5, 0.9)

        assert correct_distance_sign(bitmap, shape, IDENTITY) == 9
        np.testing.assert_array_equal(
            bitmap.pixels[1, 1], np.float32(1.0) - _texel(0.2, 0.5, 0.9)
        )
        np.testing.assert_array_equal(
            bitmap.pixels[0, 0], np.float32(1.0) - _texel(0.2, 0.3, 0.4)
        )

    def test_ambiguous_texel_kept_with_matching_neighbours(self, make_square) -> None:
        """Test a texel on the edge value stays when its neighbours agree."""
        shape = make_square(size=10.0, x=-2.0, y=-2.0)
        bitmap = MsdfBitmap(3, 3)
        bitmap.pixels[...] = (0.6, 0.7, 0.8)
        bitmap.pixels[1, 1] = (0.2, 0.5, 0.9)
        snapshot = bitmap.pixels.copy()

        assert correct_distance_sign(bitmap, shape, IDENTITY) == 0
        np.testing.assert_array_equal(bitmap.pixels, snapshot)
