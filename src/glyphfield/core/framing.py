"""Automatic placement of a shape inside a bitmap."""

import math
from dataclasses import dataclass

from glyphfield.core.outline import shape_bounds
from glyphfield.domain import Projection, Shape, Vector2
from glyphfield.exceptions import GenerationError


@dataclass(frozen=True)
class Framing:
    """Projection and distance range fitted to a shape.

    Attributes:
        projection: Pixel to shape space mapping
        range: Total distance range in shape units
    """

    projection: Projection
    range: float


def frame_shape(shape: Shape, width: int, height: int, pixel_range: float) -> Framing:
    """Fit a shape into a bitmap, centered, with room for the distance range.

    The shape is scaled uniformly so that its bounding box fits in the bitmap
    with ``pixel_range / 2`` pixels of margin on every side, which keeps the
    full falloff of the field around the outline inside the texture.

    Args:
        shape: Shape to frame
        width: Bitmap width in pixels
        height: Bitmap height in pixels
        pixel_range: Total distance range in pixels

    Returns:
        Framing with the projection and the range in shape units

    Raises:
        GenerationError: If the range is not positive, leaves no room for the
            shape, or the shape has no extent
    """
    if pixel_range <= 0:
        raise GenerationError(f"pixel range must be positive, got {pixel_range}")

    left, bottom, right, top = shape_bounds(shape)
    if not (math.isfinite(left) and math.isfinite(bottom)):
        raise GenerationError("cannot frame an empty shape")

    frame_w = width - pixel_range
    frame_h = height - pixel_range
    if frame_w <= 0 or frame_h <= 0:
        raise GenerationError(
            f"pixel range {pixel_range} leaves no room in a {width}x{height} bitmap"
        )

    shape_w = right - left
    shape_h = top - bottom
    if shape_w <= 0 and shape_h <= 0:
        raise GenerationError("cannot frame a shape without extent")

    candidates = []
    if shape_w > 0:
        candidates.append(frame_w / shape_w)
    if shape_h > 0:
        candidates.append(frame_h / shape_h)
    scale = min(candidates)

    translate = Vector2(
        0.5 * (width / scale - shape_w) - left,
        0.5 * (height / scale - shape_h) - bottom,
    )
    return Framing(projection=Projection.uniform(scale, translate), range=pixel_range / scale)
