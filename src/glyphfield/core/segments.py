"""Geometric queries on edge segments.

Every public function dispatches on ``EdgeSegment.kind`` to the matching
linear, quadratic or cubic implementation. Distance queries return a
parameter extrapolated outside [0, 1] when the nearest feature is an
endpoint; the pseudo-distance correction relies on it.
"""

import math

from glyphfield.core.geometry import (
    cross,
    dot,
    get_orthonormal,
    length,
    non_zero_sign,
    normalize,
    solve_cubic,
    solve_quadratic,
    vec_mix,
)
from glyphfield.domain import EdgeKind, EdgeSegment, SignedDistance, Vector2

# Newton iteration starting points and steps for the cubic nearest point.
CUBIC_SEARCH_STARTS = 4
CUBIC_SEARCH_STEPS = 4

Bounds = tuple[float, float, float, float]

EMPTY_BOUNDS: Bounds = (math.inf, math.inf, -math.inf, -math.inf)

ONE_THIRD = 1.0 / 3.0
TWO_THIRDS = 2.0 / 3.0


def _projection_param(v: Vector2, direction: Vector2) -> float:
    """Parameter of ``v`` projected on ``direction``, 0 for a zero direction."""
    denominator = dot(direction, direction)
    if denominator == 0:
        return 0.0
    return dot(v, direction) / denominator


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


def point_at(edge: EdgeSegment, param: float) -> Vector2:
    """Point on the edge at parameter ``param``."""
    p = edge.points
    if edge.kind is EdgeKind.LINEAR:
        return vec_mix(p[0], p[1], param)
    if edge.kind is EdgeKind.QUADRATIC:
        return vec_mix(vec_mix(p[0], p[1], param), vec_mix(p[1], p[2], param), param)
    p12 = vec_mix(p[1], p[2], param)
    return vec_mix(
        vec_mix(vec_mix(p[0], p[1], param), p12, param),
        vec_mix(p12, vec_mix(p[2], p[3], param), param),
        param,
    )


def direction_at(edge: EdgeSegment, param: float) -> Vector2:
    """Tangent direction (not normalized) at parameter ``param``.

    Degenerate Bezier control points that would give a zero tangent at an
    endpoint fall back to the chord towards the next distinct control point.
    """
    p = edge.points
    if edge.kind is EdgeKind.LINEAR:
        return p[1] - p[0]
    if edge.kind is EdgeKind.QUADRATIC:
        tangent = vec_mix(p[1] - p[0], p[2] - p[1], param)
        if tangent.is_zero():
            return p[2] - p[0]
        return tangent
    tangent = vec_mix(
        vec_mix(p[1] - p[0], p[2] - p[1], param),
        vec_mix(p[2] - p[1], p[3] - p[2], param),
        param,
    )
    if tangent.is_zero():
        if param == 0:
            return p[2] - p[0]
        if param == 1:
            return p[3] - p[1]
    return tangent


# ---------------------------------------------------------------------------
# Signed distance
# ---------------------------------------------------------------------------


def _linear_signed_distance(edge: EdgeSegment, origin: Vector2) -> tuple[SignedDistance, float]:
    p0, p1 = edge.points
    aq = origin - p0
    ab = p1 - p0
    param = _projection_param(aq, ab)
    eq = (p1 if param > 0.5 else p0) - origin
    endpoint_distance = length(eq)
    if 0 < param < 1:
        ortho_distance = dot(get_orthonormal(ab, False), aq)
        if abs(ortho_distance) < endpoint_distance:
            return SignedDistance(ortho_distance, 0.0), param
    return (
        SignedDistance(
            non_zero_sign(cross(aq, ab)) * endpoint_distance,
            abs(dot(normalize(ab), normalize(eq))),
        ),
        param,
    )


def _quadratic_signed_distance(
    edge: EdgeSegment, origin: Vector2
) -> tuple[SignedDistance, float]:
    p0, p1, p2 = edge.points
    qa = p0 - origin
    ab = p1 - p0
    br = p2 - p1 - ab
    a = dot(br, br)
    b = 3 * dot(ab, br)
    c = 2 * dot(ab, ab) + dot(qa, br)
    d = dot(qa, ab)
    solutions = solve_cubic(a, b, c, d) or []

    ep_dir = direction_at(edge, 0)
    min_distance = non_zero_sign(cross(ep_dir, qa)) * length(qa)
    param = -_projection_param(qa, ep_dir)
    distance = length(p2 - origin)
    if distance < abs(min_distance):
        ep_dir = direction_at(edge, 1)
        min_distance = non_zero_sign(cross(ep_dir, p2 - origin)) * distance
        param = _projection_param(origin - p1, ep_dir)

    for t in solutions:
        if 0 < t < 1:
            qe = qa + 2 * t * ab + t * t * br
            distance = length(qe)
            if distance <= abs(min_distance):
                min_distance = non_zero_sign(cross(ab + t * br, qe)) * distance
                param = t

    if 0 <= param <= 1:
        return SignedDistance(min_distance, 0.0), param
    if param < 0.5:
        return (
            SignedDistance(min_distance, abs(dot(normalize(direction_at(edge, 0)), normalize(qa)))),
            param,
        )
    return (
        SignedDistance(
            min_distance, abs(dot(normalize(direction_at(edge, 1)), normalize(p2 - origin)))
        ),
        param,
    )


def _cubic_signed_distance(edge: EdgeSegment, origin: Vector2) -> tuple[SignedDistance, float]:
    p0, p1, p2, p3 = edge.points
    qa = p0 - origin
    ab = p1 - p0
    br = p2 - p1 - ab
    as_ = (p3 - p2) - (p2 - p1) - br

    ep_dir = direction_at(edge, 0)
    min_distance = non_zero_sign(cross(ep_dir, qa)) * length(qa)
    param = -_projection_param(qa, ep_dir)
    distance = length(p3 - origin)
    if distance < abs(min_distance):
        ep_dir = direction_at(edge, 1)
        min_distance = non_zero_sign(cross(ep_dir, p3 - origin)) * distance
        param = _projection_param(ep_dir - (p3 - origin), ep_dir)

    for i in range(CUBIC_SEARCH_STARTS + 1):
        t = 1.0 / CUBIC_SEARCH_STARTS * i
        qe = qa + 3 * t * ab + 3 * t * t * br + t * t * t * as_
        d1 = 3 * ab + 6 * t * br + 3 * t * t * as_
        d2 = 6 * br + 6 * t * as_
        denominator = dot(d1, d1) + dot(qe, d2)
        if denominator == 0:
            continue
        improved_t = t - dot(qe, d1) / denominator
        if not 0 < improved_t < 1:
            continue

        remaining_steps = CUBIC_SEARCH_STEPS
        while True:
            t = improved_t
            qe = qa + 3 * t * ab + 3 * t * t * br + t * t * t * as_
            d1 = 3 * ab + 6 * t * br + 3 * t * t * as_
            remaining_steps -= 1
            if remaining_steps == 0:
                break
            d2 = 6 * br + 6 * t * as_
            denominator = dot(d1, d1) + dot(qe, d2)
            if denominator == 0:
                break
            improved_t = t - dot(qe, d1) / denominator
            if not 0 < improved_t < 1:
                break

        distance = length(qe)
        if distance < abs(min_distance):
            min_distance = non_zero_sign(cross(d1, qe)) * distance
            param = t

    if 0 <= param <= 1:
        return SignedDistance(min_distance, 0.0), param
    if param < 0.5:
        return (
            SignedDistance(min_distance, abs(dot(normalize(direction_at(edge, 0)), normalize(qa)))),
            param,
        )
    return (
        SignedDistance(
            min_distance, abs(dot(normalize(direction_at(edge, 1)), normalize(p3 - origin)))
        ),
        param,
    )


_SIGNED_DISTANCE = {
    EdgeKind.LINEAR: _linear_signed_distance,
    EdgeKind.QUADRATIC: _quadratic_signed_distance,
    EdgeKind.CUBIC: _cubic_signed_distance,
}


def signed_distance(edge: EdgeSegment, origin: Vector2) -> tuple[SignedDistance, float]:
    """Signed distance from ``origin`` to the nearest point of the edge.

    The sign tells which side of the edge the point lies on, from the cross
    product of the edge tangent and the offset to the nearest point.

    Args:
        edge: Edge to measure
        origin: Query point in shape space

    Returns:
        Tuple of (signed distance, parameter of the nearest point). The
        parameter lies outside [0, 1] when an endpoint is nearest and the
        point is beyond it along the tangent.
    """
    return _SIGNED_DISTANCE[edge.kind](edge, origin)


def distance_to_perpendicular_distance(
    edge: EdgeSegment,
    distance: SignedDistance,
    origin: Vector2,
    param: float,
) -> SignedDistance:
    """Convert an endpoint distance into a pseudo-distance.

    Beyond an endpoint the true distance bends around the corner and makes
    the field discontinuous where two edges meet. Measuring instead the
    distance to the tangent line extended past the endpoint gives a value
    that continues smoothly. The replacement only happens when it is not
    larger than the true distance.

    Args:
        edge: Edge that won the nearest-distance search
        distance: Its true signed distance
        origin: Query point in shape space
        param: Parameter returned with ``distance``

    Returns:
        Pseudo-distance with dot 0, or ``distance`` unchanged
    """
    if param < 0:
        direction = normalize(direction_at(edge, 0))
        aq = origin - edge.start
        if dot(aq, direction) < 0:
            perpendicular_distance = cross(aq, direction)
            if abs(perpendicular_distance) <= abs(distance.distance):
                return SignedDistance(perpendicular_distance, 0.0)
    elif param > 1:
        direction = normalize(direction_at(edge, 1))
        bq = origin - edge.end
        if dot(bq, direction) > 0:
            perpendicular_distance = cross(bq, direction)
            if abs(perpendicular_distance) <= abs(distance.distance):
                return SignedDistance(perpendicular_distance, 0.0)
    return distance


# ---------------------------------------------------------------------------
# Subdivision and transformation
# ---------------------------------------------------------------------------


def split_in_thirds(edge: EdgeSegment) -> tuple[EdgeSegment, EdgeSegment, EdgeSegment]:
    """Split an edge into three parts at parameters 1/3 and 2/3.

    The parts trace exactly the original curve and keep its color.
    """
    p = edge.points
    color = edge.color
    a = point_at(edge, ONE_THIRD)
    b = point_at(edge, TWO_THIRDS)

    if edge.kind is EdgeKind.LINEAR:
        return (
            EdgeSegment.linear(p[0], a, color),
            EdgeSegment.linear(a, b, color),
            EdgeSegment.linear(b, p[1], color),
        )

    if edge.kind is EdgeKind.QUADRATIC:
        return (
            EdgeSegment.quadratic(p[0], vec_mix(p[0], p[1], ONE_THIRD), a, color),
            EdgeSegment.quadratic(
                a,
                vec_mix(vec_mix(p[0], p[1], 5.0 / 9.0), vec_mix(p[1], p[2], 4.0 / 9.0), 0.5),
                b,
                color,
            ),
            EdgeSegment.quadratic(b, vec_mix(p[1], p[2], TWO_THIRDS), p[2], color),
        )

    return (
        EdgeSegment.cubic(
            p[0],
            p[0] if p[0] == p[1] else vec_mix(p[0], p[1], ONE_THIRD),
            vec_mix(vec_mix(p[0], p[1], ONE_THIRD), vec_mix(p[1], p[2], ONE_THIRD), ONE_THIRD),
            a,
            color,
        ),
        EdgeSegment.cubic(
            a,
            vec_mix(
                vec_mix(
                    vec_mix(p[0], p[1], ONE_THIRD), vec_mix(p[1], p[2], ONE_THIRD), ONE_THIRD
                ),
                vec_mix(
                    vec_mix(p[1], p[2], ONE_THIRD), vec_mix(p[2], p[3], ONE_THIRD), ONE_THIRD
                ),
                TWO_THIRDS,
            ),
            vec_mix(
                vec_mix(
                    vec_mix(p[0], p[1], TWO_THIRDS), vec_mix(p[1], p[2], TWO_THIRDS), TWO_THIRDS
                ),
                vec_mix(
                    vec_mix(p[1], p[2], TWO_THIRDS), vec_mix(p[2], p[3], TWO_THIRDS), TWO_THIRDS
                ),
                ONE_THIRD,
            ),
            b,
            color,
        ),
        EdgeSegment.cubic(
            b,
            vec_mix(vec_mix(p[1], p[2], TWO_THIRDS), vec_mix(p[2], p[3], TWO_THIRDS), TWO_THIRDS),
            p[3] if p[2] == p[3] else vec_mix(p[2], p[3], TWO_THIRDS),
            p[3],
            color,
        ),
    )


def reverse_edge(edge: EdgeSegment) -> None:
    """Reverse the direction of an edge in place."""
    edge.points = tuple(reversed(edge.points))


def convert_to_cubic(edge: EdgeSegment) -> EdgeSegment:
    """Exact cubic representation of a quadratic edge.

    Raises:
        ValueError: If the edge is not quadratic
    """
    if edge.kind is not EdgeKind.QUADRATIC:
        raise ValueError(f"Cannot degree-elevate a {edge.kind.name.lower()} edge")
    p0, p1, p2 = edge.points
    return EdgeSegment.cubic(
        p0, vec_mix(p0, p1, TWO_THIRDS), vec_mix(p1, p2, ONE_THIRD), p2, edge.color
    )


# ---------------------------------------------------------------------------
# Bounds
# ---------------------------------------------------------------------------


def _include(bounds: Bounds, p: Vector2) -> Bounds:
    x_min, y_min, x_max, y_max = bounds
    return (min(x_min, p.x), min(y_min, p.y), max(x_max, p.x), max(y_max, p.y))


def bound(edge: EdgeSegment, bounds: Bounds = EMPTY_BOUNDS) -> Bounds:
    """Grow ``bounds`` to include the whole edge, curve extrema included.

    Args:
        edge: Edge to include
        bounds: Current (x_min, y_min, x_max, y_max)

    Returns:
        Updated bounds tuple
    """
    p = edge.points
    bounds = _include(_include(bounds, edge.start), edge.end)

    if edge.kind is EdgeKind.QUADRATIC:
        bot = (p[1] - p[0]) - (p[2] - p[1])
        if bot.x != 0:
            param = (p[1].x - p[0].x) / bot.x
            if 0 < param < 1:
                bounds = _include(bounds, point_at(edge, param))
        if bot.y != 0:
            param = (p[1].y - p[0].y) / bot.y
            if 0 < param < 1:
                bounds = _include(bounds, point_at(edge, param))

    elif edge.kind is EdgeKind.CUBIC:
        a0 = p[1] - p[0]
        a1 = 2 * (p[2] - p[1] - a0)
        a2 = p[3] - 3 * p[2] + 3 * p[1] - p[0]
        for params in (solve_quadratic(a2.x, a1.x, a0.x), solve_quadratic(a2.y, a1.y, a0.y)):
            for param in params or []:
                if 0 < param < 1:
                    bounds = _include(bounds, point_at(edge, param))

    return bounds


# ---------------------------------------------------------------------------
# Scanline intersections
# ---------------------------------------------------------------------------


def _linear_scanline(edge: EdgeSegment, y: float) -> list[tuple[float, int]]:
    p0, p1 = edge.points
    if (p0.y <= y < p1.y) or (p1.y <= y < p0.y):
        param = (y - p0.y) / (p1.y - p0.y)
        x = (1.0 - param) * p0.x + param * p1.x
        return [(x, 1 if p1.y > p0.y else -1)]
    return []


def _quadratic_scanline(edge: EdgeSegment, y: float) -> list[tuple[float, int]]:
    p0, p1, p2 = edge.points
    xs = [0.0, 0.0, 0.0]
    dys = [0, 0, 0]
    total = 0
    next_dy = 1 if y > p0.y else -1
    xs[total] = p0.x
    if p0.y == y:
        if p0.y < p1.y or (p0.y == p1.y and p0.y < p2.y):
            dys[total] = 1
            total += 1
        else:
            next_dy = 1

    ab = p1 - p0
    br = p2 - p1 - ab
    for t in sorted(solve_quadratic(br.y, 2 * ab.y, p0.y - y) or []):
        if total >= 2:
            break
        if 0 <= t <= 1:
            xs[total] = p0.x + 2 * t * ab.x + t * t * br.x
            if next_dy * (ab.y + t * br.y) >= 0:
                dys[total] = next_dy
                total += 1
                next_dy = -next_dy

    if p2.y == y:
        if next_dy > 0 and total > 0:
            total -= 1
            next_dy = -1
        if (p2.y < p1.y or (p2.y == p1.y and p2.y < p0.y)) and total < 2:
            xs[total] = p2.x
            if next_dy < 0:
                dys[total] = -1
                total += 1
                next_dy = 1

    if next_dy != (1 if y >= p2.y else -1):
        if total > 0:
            total -= 1
        else:
            if abs(p2.y - y) < abs(p0.y - y):
                xs[total] = p2.x
            dys[total] = next_dy
            total += 1

    return list(zip(xs[:total], dys[:total]))


def _cubic_scanline(edge: EdgeSegment, y: float) -> list[tuple[float, int]]:
    p0, p1, p2, p3 = edge.points
    xs = [0.0, 0.0, 0.0]
    dys = [0, 0, 0]
    total = 0
    next_dy = 1 if y > p0.y else -1
    xs[total] = p0.x
    if p0.y == y:
        if p0.y < p1.y or (
            p0.y == p1.y and (p0.y < p2.y or (p0.y == p2.y and p0.y < p3.y))
        ):
            dys[total] = 1
            total += 1
        else:
            next_dy = 1

    ab = p1 - p0
    br = p2 - p1 - ab
    as_ = (p3 - p2) - (p2 - p1) - br
    for t in sorted(solve_cubic(as_.y, 3 * br.y, 3 * ab.y, p0.y - y) or []):
        if total >= 3:
            break
        if 0 <= t <= 1:
            xs[total] = p0.x + 3 * t * ab.x + 3 * t * t * br.x + t * t * t * as_.x
            if next_dy * (ab.y + 2 * t * br.y + t * t * as_.y) >= 0:
                dys[total] = next_dy
                total += 1
                next_dy = -next_dy

    if p3.y == y:
        if next_dy > 0 and total > 0:
            total -= 1
            next_dy = -1
        if (
            p3.y < p2.y
            or (p3.y == p2.y and (p3.y < p1.y or (p3.y == p1.y and p3.y < p0.y)))
        ) and total < 3:
            xs[total] = p3.x
            if next_dy < 0:
                dys[total] = -1
                total += 1
                next_dy = 1

    if next_dy != (1 if y >= p3.y else -1):
        if total > 0:
            total -= 1
        else:
            if abs(p3.y - y) < abs(p0.y - y):
                xs[total] = p3.x
            dys[total] = next_dy
            total += 1

    return list(zip(xs[:total], dys[:total]))


_SCANLINE = {
    EdgeKind.LINEAR: _linear_scanline,
    EdgeKind.QUADRATIC: _quadratic_scanline,
    EdgeKind.CUBIC: _cubic_scanline,
}


def scanline_intersections(edge: EdgeSegment, y: float) -> list[tuple[float, int]]:
    """Crossings of the horizontal line at ``y`` with the edge.

    Returns:
        List of (x, direction) pairs, direction +1 when the edge crosses
        upwards and -1 downwards
    """
    return _SCANLINE[edge.kind](edge, y)
