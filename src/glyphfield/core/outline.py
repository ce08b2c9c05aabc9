"""Contour and shape level operations.

This module provides whole-outline helpers used before coloring and
generation:
- Bounding boxes of contours and shapes
- Winding direction and contour reversal
- Closure validation
- Normalization of single-edge contours
- Orientation of contours to the non-zero fill rule
"""

import math

from glyphfield.core.segments import (
    EMPTY_BOUNDS,
    Bounds,
    bound,
    point_at,
    reverse_edge,
    scanline_intersections,
    split_in_thirds,
)
from glyphfield.domain import Contour, Shape, Vector2
from glyphfield.exceptions import InvalidShapeError

# Relative tolerance when checking that consecutive edges share an endpoint.
CLOSURE_TOLERANCE = 1e-9


def _shoelace(a: Vector2, b: Vector2) -> float:
    return (b.x - a.x) * (a.y + b.y)


def contour_bounds(contour: Contour, bounds: Bounds = EMPTY_BOUNDS) -> Bounds:
    """Grow ``bounds`` to include every edge of the contour."""
    for edge in contour.edges:
        bounds = bound(edge, bounds)
    return bounds


def shape_bounds(shape: Shape) -> Bounds:
    """Bounding box (x_min, y_min, x_max, y_max) of the whole shape.

    An empty shape returns infinite bounds with x_min > x_max.
    """
    bounds = EMPTY_BOUNDS
    for contour in shape.contours:
        bounds = contour_bounds(contour, bounds)
    return bounds


def edge_count(shape: Shape) -> int:
    """Total number of edges in the shape."""
    return sum(len(contour.edges) for contour in shape.contours)


def contour_winding(contour: Contour) -> int:
    """Winding direction of a contour.

    Uses the shoelace sum over the edge start points. Contours with one or
    two edges are sampled at intermediate parameters so curved loops still
    enclose an area.

    Returns:
        1 or -1 for the two orientations, 0 for an empty or degenerate contour
    """
    edges = contour.edges
    if not edges:
        return 0

    total = 0.0
    if len(edges) == 1:
        a = point_at(edges[0], 0)
        b = point_at(edges[0], 1.0 / 3.0)
        c = point_at(edges[0], 2.0 / 3.0)
        total += _shoelace(a, b) + _shoelace(b, c) + _shoelace(c, a)
    elif len(edges) == 2:
        a = point_at(edges[0], 0)
        b = point_at(edges[0], 0.5)
        c = point_at(edges[1], 0)
        d = point_at(edges[1], 0.5)
        total += _shoelace(a, b) + _shoelace(b, c) + _shoelace(c, d) + _shoelace(d, a)
    else:
        prev = point_at(edges[-1], 0)
        for edge in edges:
            cur = point_at(edge, 0)
            total += _shoelace(prev, cur)
            prev = cur

    return (0.0 < total) - (total < 0.0)


def reverse_contour(contour: Contour) -> None:
    """Reverse the drawing direction of a contour in place."""
    contour.edges.reverse()
    for edge in contour.edges:
        reverse_edge(edge)


def _same_point(a: Vector2, b: Vector2) -> bool:
    return math.isclose(a.x, b.x, rel_tol=CLOSURE_TOLERANCE, abs_tol=CLOSURE_TOLERANCE) and (
        math.isclose(a.y, b.y, rel_tol=CLOSURE_TOLERANCE, abs_tol=CLOSURE_TOLERANCE)
    )


def validate_shape(shape: Shape) -> None:
    """Check that every contour is a closed loop.

    Raises:
        InvalidShapeError: If an edge does not start where the previous ends
    """
    for contour_index, contour in enumerate(shape.contours):
        if not contour.edges:
            continue
        corner = contour.edges[-1].end
        for edge_index, edge in enumerate(contour.edges):
            if not _same_point(edge.start, corner):
                raise InvalidShapeError(contour_index, edge_index)
            corner = edge.end


def normalize_shape(shape: Shape) -> None:
    """Split single-edge contours into thirds.

    Edge coloring needs at least three edges to give a closed curve three
    distinct colors.
    """
    for contour in shape.contours:
        if len(contour.edges) == 1:
            contour.edges = list(split_in_thirds(contour.edges[0]))


def orient_contours(shape: Shape) -> None:
    """Reverse contours so the shape follows the non-zero winding rule.

    For outlines authored with the even-odd rule, where contour direction
    carries no meaning. A horizontal scanline is cast through each contour
    and the parity of the crossings to the left of each of its crossings
    tells whether the contour bounds filled area on the correct side.
    """
    ratio = 0.5 * (math.sqrt(5) - 1)
    orientations = [0] * len(shape.contours)

    for i, contour in enumerate(shape.contours):
        if orientations[i] != 0 or not contour.edges:
            continue

        y0 = point_at(contour.edges[0], 0).y
        y1 = y0
        for edge in contour.edges:
            if y0 != y1:
                break
            y1 = point_at(edge, 1).y
        for edge in contour.edges:
            if y0 != y1:
                break
            y1 = point_at(edge, ratio).y
        y = (1.0 - ratio) * y0 + ratio * y1

        intersections: list[list] = []
        for j, other in enumerate(shape.contours):
            for edge in other.edges:
                for x, direction in scanline_intersections(edge, y):
                    intersections.append([x, direction, j])

        if not intersections:
            continue

        intersections.sort(key=lambda item: item[0])
        for j in range(1, len(intersections)):
            if intersections[j][0] == intersections[j - 1][0]:
                intersections[j][1] = 0
                intersections[j - 1][1] = 0

        for j, (_, direction, contour_index) in enumerate(intersections):
            if direction != 0:
                flipped = (j & 1) ^ (1 if direction > 0 else 0)
                orientations[contour_index] += 2 * flipped - 1

    for contour, orientation in zip(shape.contours, orientations):
        if orientation < 0:
            reverse_contour(contour)
