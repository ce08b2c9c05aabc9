"""Clash correction for multi-channel distance fields.

Bilinear interpolation between two texels whose channels disagree can
reconstruct an edge that does not exist in the outline. The corrector finds
such texel pairs and collapses the less certain texel of each pair to the
median of its channels, which turns it into a plain pseudo-distance texel.

Two passes run in order: cardinal neighbours, then diagonal neighbours.
Each pass detects on an unchanged snapshot of the bitmap and only then
applies the medians, so a correction never influences detection within the
same pass.

Before clash correction, ``correct_distance_sign`` makes the field agree
with the non-zero fill of the outline: overlapping or mis-wound contours
otherwise give texels that lie inside the glyph a distance on the outside
of some nearer contour.
"""

import numpy as np

from glyphfield.core.segments import scanline_intersections
from glyphfield.domain import EdgeSegment, MsdfBitmap, Projection, Shape, Vector2
from glyphfield.exceptions import GenerationError

DEFAULT_EDGE_THRESHOLD = 1.001

_HALF = np.float32(0.5)

_CARDINAL = ((-1, 0), (1, 0), (0, -1), (0, 1))
_DIAGONAL = ((-1, -1), (1, -1), (-1, 1), (1, 1))


def clash_threshold(
    scale: Vector2, range_: float, edge_threshold: float = DEFAULT_EDGE_THRESHOLD
) -> Vector2:
    """Per-axis clash threshold in normalized field units.

    A channel jump between neighbouring texels larger than the change a
    single pixel step can cause (scaled by ``edge_threshold``) is a clash.

    Args:
        scale: Projection scale (pixels per shape unit)
        range_: Total distance range in shape units
        edge_threshold: Tolerance factor above one pixel of distance

    Raises:
        GenerationError: If scale or range is not positive
    """
    if not range_ > 0 or not scale.x > 0 or not scale.y > 0:
        raise GenerationError("clash threshold needs a positive scale and range")
    return Vector2(edge_threshold / (scale.x * range_), edge_threshold / (scale.y * range_))


def _swap(cond: np.ndarray, u: np.ndarray, v: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    return np.where(cond, v, u), np.where(cond, u, v)


def detect_clash(a: np.ndarray, b: np.ndarray, threshold: float) -> np.ndarray:
    """Check whether texel ``a`` clashes with its neighbour ``b``.

    Both arguments are float32 arrays with the channels on the last axis, so
    whole bitmaps can be compared with shifted copies of themselves.

    Channel pairs are first reordered by descending absolute difference
    (swap 0/1, swap 1/2, then 0/1 again only after a 1/2 swap). ``a`` is
    flagged when the second largest difference reaches ``threshold``, ``b``
    is not already equalized, and ``a``'s least different channel is at
    least as far from the edge value 0.5 as ``b``'s.

    Returns:
        Boolean array with the channel axis removed
    """
    a = np.asarray(a, dtype=np.float32)
    b = np.asarray(b, dtype=np.float32)
    a0, a1, a2 = a[..., 0], a[..., 1], a[..., 2]
    b0, b1, b2 = b[..., 0], b[..., 1], b[..., 2]

    with np.errstate(over="ignore", invalid="ignore"):
        swap = np.abs(b0 - a0) < np.abs(b1 - a1)
        a0, a1 = _swap(swap, a0, a1)
        b0, b1 = _swap(swap, b0, b1)

        swap = np.abs(b1 - a1) < np.abs(b2 - a2)
        a1, a2 = _swap(swap, a1, a2)
        b1, b2 = _swap(swap, b1, b2)
        swap &= np.abs(b0 - a0) < np.abs(b1 - a1)
        a0, a1 = _swap(swap, a0, a1)
        b0, b1 = _swap(swap, b0, b1)

        # The difference is taken in float32, the comparison in float64.
        large = np.abs(b1 - a1).astype(np.float64) >= threshold
        equalized = (b0 == b1) & (b0 == b2)
        farther = np.abs(a2 - _HALF) >= np.abs(b2 - _HALF)

    return large & ~equalized & farther


def _axis_slices(offset: int, size: int) -> tuple[slice, slice]:
    if offset < 0:
        return slice(1, size), slice(0, size - 1)
    if offset > 0:
        return slice(0, size - 1), slice(1, size)
    return slice(0, size), slice(0, size)


def _detect_pass(
    pixels: np.ndarray, offsets: tuple[tuple[int, int], ...], thresholds: tuple[float, ...]
) -> np.ndarray:
    h, w = pixels.shape[:2]
    clashes = np.zeros((h, w), dtype=bool)
    for (dx, dy), threshold in zip(offsets, thresholds):
        own_x, other_x = _axis_slices(dx, w)
        own_y, other_y = _axis_slices(dy, h)
        clashes[own_y, own_x] |= detect_clash(
            pixels[own_y, own_x], pixels[other_y, other_x], threshold
        )
    return clashes


def _median3(pixels: np.ndarray) -> np.ndarray:
    r, g, b = pixels[..., 0], pixels[..., 1], pixels[..., 2]
    return np.maximum(np.minimum(r, g), np.minimum(np.maximum(r, g), b))


def _apply_median(pixels: np.ndarray, clashes: np.ndarray) -> int:
    r, g, b = pixels[..., 0], pixels[..., 1], pixels[..., 2]
    med = _median3(pixels)
    changed = clashes & ~((r == med) & (g == med) & (b == med))
    pixels[clashes] = med[clashes][:, np.newaxis]
    return int(np.count_nonzero(changed))


def correct_errors(bitmap: MsdfBitmap, threshold: Vector2) -> int:
    """Remove interpolation artifacts from a multi-channel field in place.

    Args:
        bitmap: 3-channel bitmap produced by ``generate_msdf``
        threshold: Per-axis clash threshold, see ``clash_threshold``

    Returns:
        Number of texels whose channels were changed

    Raises:
        GenerationError: If the bitmap is not a 3-channel bitmap
    """
    if bitmap.channels != 3:
        raise GenerationError(
            f"error correction needs a 3-channel bitmap, got {bitmap.channels}"
        )

    pixels = bitmap.pixels
    changed = 0

    cardinal = (threshold.x, threshold.x, threshold.y, threshold.y)
    changed += _apply_median(pixels, _detect_pass(pixels, _CARDINAL, cardinal))

    diagonal = (threshold.x + threshold.y,) * len(_DIAGONAL)
    changed += _apply_median(pixels, _detect_pass(pixels, _DIAGONAL, diagonal))

    return changed


def _row_fill(edges: list[EdgeSegment], y: float, xs: np.ndarray) -> np.ndarray:
    crossings = sorted(
        (crossing for edge in edges for crossing in scanline_intersections(edge, y)),
        key=lambda crossing: crossing[0],
    )
    if not crossings:
        return np.zeros(xs.shape, dtype=bool)

    positions = np.array([x for x, _ in crossings])
    winding = np.cumsum([direction for _, direction in crossings])
    # Winding left of each sample is the running sum up to the last crossing at or before it.
    last = np.searchsorted(positions, xs, side="right") - 1
    return (last >= 0) & (winding[np.maximum(last, 0)] != 0)


def fill_mask(shape: Shape, width: int, height: int, projection: Projection) -> np.ndarray:
    """Non-zero fill of the shape sampled at pixel centers.

    Rows are stored the way the generators store them, flipped when
    ``shape.inverse_y_axis`` is set.

    Returns:
        ``(height, width)`` boolean array, True inside the outline
    """
    edges = list(shape.iter_edges())
    xs = (np.arange(width) + 0.5) / projection.scale.x - projection.translate.x
    mask = np.empty((height, width), dtype=bool)
    for y in range(height):
        row = height - 1 - y if shape.inverse_y_axis else y
        mask[row] = _row_fill(edges, (y + 0.5) / projection.scale.y - projection.translate.y, xs)
    return mask


def correct_distance_sign(bitmap: MsdfBitmap, shape: Shape, projection: Projection) -> int:
    """Flip texels whose inside/outside reading disagrees with the fill.

    A texel reads as inside when its median lies above 0.5. Texels on the
    wrong side are mirrored around 0.5 in every channel. A texel whose
    median is exactly 0.5 follows the majority of its four neighbours and
    is flipped only if more of them were flipped than kept.

    Works on 1- and 3-channel bitmaps; call it before ``correct_errors``.

    Args:
        bitmap: Generated bitmap, modified in place
        shape: Shape the bitmap was generated from
        projection: Projection used for generation

    Returns:
        Number of flipped texels
    """
    pixels = bitmap.pixels
    inside = fill_mask(shape, bitmap.width, bitmap.height, projection)
    sd = _median3(pixels) if bitmap.channels == 3 else pixels[..., 0]

    ambiguous = sd == _HALF
    flipped = ~ambiguous & ((sd > _HALF) != inside)

    match = np.where(flipped, -1, 1).astype(np.int8)
    match[ambiguous] = 0
    votes = np.zeros(match.shape, dtype=np.int8)
    votes[:, 1:] += match[:, :-1]
    votes[:, :-1] += match[:, 1:]
    votes[1:, :] += match[:-1, :]
    votes[:-1, :] += match[1:, :]
    flipped |= ambiguous & (votes < 0)

    pixels[flipped] = np.float32(1.0) - pixels[flipped]
    return int(np.count_nonzero(flipped))
