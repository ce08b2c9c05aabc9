"""Distance field generation.

Fills a bitmap by querying, for every pixel center, the nearest edges of a
colored shape. Three generators share the same row kernel:
- generate_msdf: one nearest edge per color channel, pseudo-distance corrected
- generate_pseudo_sdf: single channel, pseudo-distance corrected
- generate_sdf: single channel, true Euclidean distance

Rows have no data dependency on each other. With ``max_workers`` above one,
contiguous bands of rows are evaluated in worker processes and copied back
by band, so the result is identical to a serial run. Callers rendering many
shapes pass one ``executor`` so the worker pool is created only once.
"""

from concurrent.futures import Executor, ProcessPoolExecutor
from typing import Any

import numpy as np

from glyphfield.core.segments import distance_to_perpendicular_distance, signed_distance
from glyphfield.domain import (
    EdgeColor,
    EdgeSegment,
    MsdfBitmap,
    Projection,
    Shape,
    SignedDistance,
    Vector2,
)
from glyphfield.exceptions import GenerationError

MODE_MSDF = "msdf"
MODE_PSDF = "psdf"
MODE_SDF = "sdf"

_CHANNELS = {MODE_MSDF: 3, MODE_PSDF: 1, MODE_SDF: 1}

# Stored values are clamped to the finite float32 range.
_FLOAT32_MAX = float(np.finfo(np.float32).max)

DEFAULT_ROWS_PER_TASK = 8


def _msdf_pixel(edges: list[EdgeSegment], p: Vector2) -> tuple[float, float, float]:
    r_min = g_min = b_min = SignedDistance()
    r_edge = g_edge = b_edge = None
    r_param = g_param = b_param = 0.0

    for edge in edges:
        distance, param = signed_distance(edge, p)
        color = edge.color
        if color & EdgeColor.RED and distance < r_min:
            r_min, r_edge, r_param = distance, edge, param
        if color & EdgeColor.GREEN and distance < g_min:
            g_min, g_edge, g_param = distance, edge, param
        if color & EdgeColor.BLUE and distance < b_min:
            b_min, b_edge, b_param = distance, edge, param

    if r_edge is not None:
        r_min = distance_to_perpendicular_distance(r_edge, r_min, p, r_param)
    if g_edge is not None:
        g_min = distance_to_perpendicular_distance(g_edge, g_min, p, g_param)
    if b_edge is not None:
        b_min = distance_to_perpendicular_distance(b_edge, b_min, p, b_param)

    return r_min.distance, g_min.distance, b_min.distance


def _pseudo_sdf_pixel(edges: list[EdgeSegment], p: Vector2) -> tuple[float]:
    min_distance = SignedDistance()
    near_edge = None
    near_param = 0.0
    for edge in edges:
        distance, param = signed_distance(edge, p)
        if distance < min_distance:
            min_distance, near_edge, near_param = distance, edge, param
    if near_edge is not None:
        min_distance = distance_to_perpendicular_distance(near_edge, min_distance, p, near_param)
    return (min_distance.distance,)


def _sdf_pixel(edges: list[EdgeSegment], p: Vector2) -> tuple[float]:
    min_distance = SignedDistance()
    for edge in edges:
        distance, _ = signed_distance(edge, p)
        if distance < min_distance:
            min_distance = distance
    return (min_distance.distance,)


_PIXEL_KERNELS = {
    MODE_MSDF: _msdf_pixel,
    MODE_PSDF: _pseudo_sdf_pixel,
    MODE_SDF: _sdf_pixel,
}


def _fill_band(
    shape: Shape,
    mode: str,
    range_: float,
    projection: Projection,
    width: int,
    y_start: int,
    y_stop: int,
) -> np.ndarray:
    """Evaluate rows ``y_start`` to ``y_stop`` (exclusive) of the field.

    Returns:
        float32 array of shape (y_stop - y_start, width, channels), rows in
        generation order (before any y flip)
    """
    kernel = _PIXEL_KERNELS[mode]
    edges = list(shape.iter_edges())
    channels = _CHANNELS[mode]
    band = np.empty((y_stop - y_start, width, channels), dtype=np.float64)

    dist_scale = 1.0 / range_
    dist_translate = 0.5 * range_
    for y in range(y_start, y_stop):
        row = band[y - y_start]
        for x in range(width):
            p = projection.unproject(Vector2(x + 0.5, y + 0.5))
            row[x] = kernel(edges, p)

    # Channels without a contributing edge overflow to +-inf here.
    with np.errstate(over="ignore"):
        band = dist_scale * (band + dist_translate)
    np.clip(band, -_FLOAT32_MAX, _FLOAT32_MAX, out=band)
    return band.astype(np.float32)


def generate_band(
    shape_dict: dict[str, Any],
    mode: str,
    range_: float,
    scale: tuple[float, float],
    translate: tuple[float, float],
    width: int,
    y_start: int,
    y_stop: int,
) -> np.ndarray:
    """Generate one band of rows from serialized inputs.

    Top-level function designed to be picklable for use with
    ProcessPoolExecutor.

    Args:
        shape_dict: Serialized colored shape (from Shape.to_dict())
        mode: One of "msdf", "psdf", "sdf"
        range_: Total distance range in shape units
        scale: Pixels per shape unit (x, y)
        translate: Shape-space offset (x, y)
        width: Bitmap width in pixels
        y_start: First row of the band
        y_stop: Row after the last row of the band

    Returns:
        float32 array with the band's pixels
    """
    projection = Projection(Vector2(*scale), Vector2(*translate))
    return _fill_band(Shape.from_dict(shape_dict), mode, range_, projection, width, y_start, y_stop)


def _generate(
    mode: str,
    bitmap: MsdfBitmap,
    shape: Shape,
    range_: float,
    projection: Projection,
    max_workers: int | None,
    rows_per_task: int,
    executor: Executor | None,
) -> None:
    if bitmap.channels != _CHANNELS[mode]:
        raise GenerationError(
            f"{mode} output needs {_CHANNELS[mode]} channel(s), bitmap has {bitmap.channels}"
        )
    if not range_ > 0:
        raise GenerationError(f"distance range must be positive, got {range_}")
    if projection.scale.x == 0 or projection.scale.y == 0:
        raise GenerationError("projection scale must be non-zero")
    if rows_per_task < 1:
        raise GenerationError(f"rows per task must be at least 1, got {rows_per_task}")

    w, h = bitmap.width, bitmap.height
    bands = [(y, min(y + rows_per_task, h)) for y in range(0, h, rows_per_task)]

    def store(y_start: int, y_stop: int, band: np.ndarray) -> None:
        for y in range(y_start, y_stop):
            row = h - 1 - y if shape.inverse_y_axis else y
            bitmap.pixels[row] = band[y - y_start]

    if len(bands) == 1 or (executor is None and max_workers == 1):
        for y_start, y_stop in bands:
            store(y_start, y_stop, _fill_band(shape, mode, range_, projection, w, y_start, y_stop))
        return

    shape_dict = shape.to_dict()
    scale = projection.scale.to_tuple()
    translate = projection.translate.to_tuple()

    def run(pool: Executor) -> None:
        futures = [
            pool.submit(
                generate_band, shape_dict, mode, range_, scale, translate, w, y_start, y_stop
            )
            for y_start, y_stop in bands
        ]
        for (y_start, y_stop), future in zip(bands, futures):
            store(y_start, y_stop, future.result())

    if executor is not None:
        run(executor)
        return
    with ProcessPoolExecutor(max_workers=max_workers) as pool:
        run(pool)


def generate_msdf(
    bitmap: MsdfBitmap,
    shape: Shape,
    range_: float,
    projection: Projection,
    max_workers: int | None = 1,
    rows_per_task: int = DEFAULT_ROWS_PER_TASK,
    executor: Executor | None = None,
) -> None:
    """Fill a 3-channel bitmap with the multi-channel distance field.

    For every pixel center, each channel takes the nearest edge whose color
    includes that channel (ties broken by SignedDistance ordering), applies
    the pseudo-distance correction for that edge and stores
    ``(distance + range / 2) / range``, so 0.5 lies on the outline. A
    channel with no contributing edge keeps the sentinel distance and stores
    the largest representable magnitude.

    The shape must already be colored.

    Args:
        bitmap: 3-channel output bitmap
        shape: Colored shape
        range_: Total distance range in shape units
        projection: Pixel to shape space mapping
        max_workers: Worker processes (1 = serial, None = CPU count)
        rows_per_task: Rows per parallel band
        executor: Shared pool for the bands (overrides max_workers)

    Raises:
        GenerationError: If the bitmap or parameters cannot be used
    """
    _generate(MODE_MSDF, bitmap, shape, range_, projection, max_workers, rows_per_task, executor)


def generate_pseudo_sdf(
    bitmap: MsdfBitmap,
    shape: Shape,
    range_: float,
    projection: Projection,
    max_workers: int | None = 1,
    rows_per_task: int = DEFAULT_ROWS_PER_TASK,
    executor: Executor | None = None,
) -> None:
    """Fill a 1-channel bitmap with the pseudo signed distance field.

    Same as one channel of ``generate_msdf`` with every edge counted, so a
    shape whose edges are all WHITE yields identical values.
    """
    _generate(MODE_PSDF, bitmap, shape, range_, projection, max_workers, rows_per_task, executor)


def generate_sdf(
    bitmap: MsdfBitmap,
    shape: Shape,
    range_: float,
    projection: Projection,
    max_workers: int | None = 1,
    rows_per_task: int = DEFAULT_ROWS_PER_TASK,
    executor: Executor | None = None,
) -> None:
    """Fill a 1-channel bitmap with the true signed distance field."""
    _generate(MODE_SDF, bitmap, shape, range_, projection, max_workers, rows_per_task, executor)


def generate_field(
    mode: str,
    bitmap: MsdfBitmap,
    shape: Shape,
    range_: float,
    projection: Projection,
    max_workers: int | None = 1,
    rows_per_task: int = DEFAULT_ROWS_PER_TASK,
    executor: Executor | None = None,
) -> None:
    """Dispatch to the generator selected by ``mode``.

    Raises:
        GenerationError: If the mode is unknown
    """
    if mode not in _CHANNELS:
        raise GenerationError(f"unknown field mode '{mode}'")
    _generate(mode, bitmap, shape, range_, projection, max_workers, rows_per_task, executor)


def channels_for_mode(mode: str) -> int:
    """Number of bitmap channels a field mode writes."""
    if mode not in _CHANNELS:
        raise GenerationError(f"unknown field mode '{mode}'")
    return _CHANNELS[mode]
