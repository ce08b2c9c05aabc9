"""Edge coloring for multi-channel distance fields.

Each edge gets a channel mask so that the two edges meeting at a sharp
corner never share all of their channels. The median of the three channel
fields then reconstructs the corner exactly.

Coloring mutates the shape in place and may replace the edge list of a
contour when edges have to be split. It is deterministic: the same seed
always produces the same colors.

Key functions:
- color_simple: Corner-to-corner coloring
- color_ink_trap: Variant that derives colors for short splines between corners
"""

import math
from dataclasses import dataclass

from glyphfield.core.geometry import cross, dot, length, normalize
from glyphfield.core.segments import direction_at, point_at, split_in_thirds
from glyphfield.domain import Contour, EdgeColor, EdgeSegment, Shape, Vector2

# Maximum angle in radians still considered smooth, about 172 degrees.
DEFAULT_ANGLE_THRESHOLD = 3.0

# Number of chords used to estimate an edge's length.
EDGE_LENGTH_PRECISION = 4

SEED_MASK = (1 << 64) - 1

_INITIAL_COLORS = (EdgeColor.CYAN, EdgeColor.MAGENTA, EdgeColor.YELLOW)


class _Seed:
    """64-bit seed consumed digit by digit."""

    def __init__(self, value: int) -> None:
        self.value = value & SEED_MASK

    def extract2(self) -> int:
        v = self.value & 1
        self.value >>= 1
        return v

    def extract3(self) -> int:
        v = self.value % 3
        self.value //= 3
        return v


def is_corner(a_dir: Vector2, b_dir: Vector2, cross_threshold: float) -> bool:
    """Check if two unit directions meet at a corner.

    Args:
        a_dir: Normalized direction at the end of the previous edge
        b_dir: Normalized direction at the start of the next edge
        cross_threshold: Sine of the angle threshold

    Returns:
        True for a turn back (dot <= 0) or a turn sharper than the threshold
    """
    return dot(a_dir, b_dir) <= 0 or abs(cross(a_dir, b_dir)) > cross_threshold


def _init_color(seed: _Seed) -> EdgeColor:
    return _INITIAL_COLORS[seed.extract3()]


def switch_color(color: EdgeColor, seed: _Seed, banned: EdgeColor = EdgeColor.BLACK) -> EdgeColor:
    """Pick the next two-channel color after ``color``.

    With a single channel shared between ``color`` and ``banned``, the result
    is the complement of that channel, so it shares nothing further with
    ``banned``. Otherwise the two set bits are rotated by one or two
    positions depending on the next seed bit.
    """
    combined = EdgeColor(color & banned)
    if combined in (EdgeColor.RED, EdgeColor.GREEN, EdgeColor.BLUE):
        return EdgeColor(combined ^ EdgeColor.WHITE)
    shifted = int(color) << (1 + seed.extract2())
    return EdgeColor((shifted | shifted >> 3) & EdgeColor.WHITE)


def symmetrical_trichotomy(position: int, n: int) -> int:
    """Map edge ``position`` of ``n`` to a band -1, 0 or 1 around a corner."""
    return int(3 + 2.875 * position / (n - 1) - 1.4375 + 0.5) - 3


def estimate_edge_length(edge: EdgeSegment) -> float:
    """Approximate arc length of an edge by a short polyline."""
    total = 0.0
    prev = point_at(edge, 0)
    for i in range(1, EDGE_LENGTH_PRECISION + 1):
        cur = point_at(edge, 1.0 / EDGE_LENGTH_PRECISION * i)
        total += length(cur - prev)
        prev = cur
    return total


def find_corners(contour: Contour, cross_threshold: float) -> list[int]:
    """Indices of edges whose start is a corner."""
    corners: list[int] = []
    prev_direction = direction_at(contour.edges[-1], 1)
    for index, edge in enumerate(contour.edges):
        if is_corner(normalize(prev_direction), normalize(direction_at(edge, 0)), cross_threshold):
            corners.append(index)
        prev_direction = direction_at(edge, 1)
    return corners


def _color_smooth(contour: Contour, color: EdgeColor, seed: _Seed) -> EdgeColor:
    color = switch_color(color, seed)
    for edge in contour.edges:
        edge.color = color
    return color


def _color_teardrop(contour: Contour, corner: int, color: EdgeColor, seed: _Seed) -> EdgeColor:
    color = switch_color(color, seed)
    colors = [color, EdgeColor.WHITE, EdgeColor.BLACK]
    color = switch_color(color, seed)
    colors[2] = color

    m = len(contour.edges)
    if m >= 3:
        for i in range(m):
            contour.edges[(corner + i) % m].color = colors[1 + symmetrical_trichotomy(i, m)]
        return color

    # Fewer than three edges for three colors: split them.
    parts: list[EdgeSegment | None] = [None] * 7
    parts[0 + 3 * corner], parts[1 + 3 * corner], parts[2 + 3 * corner] = split_in_thirds(
        contour.edges[0]
    )
    if m >= 2:
        parts[3 - 3 * corner], parts[4 - 3 * corner], parts[5 - 3 * corner] = split_in_thirds(
            contour.edges[1]
        )
        for i in range(6):
            parts[i].color = colors[i // 2]
    else:
        for i in range(3):
            parts[i].color = colors[i]

    new_edges: list[EdgeSegment] = []
    for part in parts:
        if part is None:
            break
        new_edges.append(part)
    contour.edges = new_edges
    return color


def color_simple(shape: Shape, angle_threshold: float = DEFAULT_ANGLE_THRESHOLD, seed: int = 0) -> None:
    """Assign channel colors to every edge of the shape.

    Each contour is handled by its number of corners:
    - No corner: the whole contour gets one color
    - One corner (teardrop): three color bands spread symmetrically around
      the contour, splitting edges when there are fewer than three
    - Several corners: one color per spline between corners, switching at
      each corner; the last spline never shares a channel pair with the first

    Args:
        shape: Shape to color in place
        angle_threshold: Maximum turning angle (radians) that is still smooth
        seed: 64-bit seed selecting among the valid colorings
    """
    cross_threshold = math.sin(angle_threshold)
    stream = _Seed(seed)
    color = _init_color(stream)

    for contour in shape.contours:
        if not contour.edges:
            continue

        corners = find_corners(contour, cross_threshold)

        if not corners:
            color = _color_smooth(contour, color, stream)
        elif len(corners) == 1:
            color = _color_teardrop(contour, corners[0], color, stream)
        else:
            corner_count = len(corners)
            spline = 0
            start = corners[0]
            m = len(contour.edges)
            color = switch_color(color, stream)
            initial_color = color
            for i in range(m):
                index = (start + i) % m
                if spline + 1 < corner_count and corners[spline + 1] == index:
                    spline += 1
                    banned = initial_color if spline == corner_count - 1 else EdgeColor.BLACK
                    color = switch_color(color, stream, banned)
                contour.edges[index].color = color


@dataclass
class _InkTrapCorner:
    index: int
    prev_edge_length_estimate: float
    minor: bool = False
    color: EdgeColor = EdgeColor.BLACK


def color_ink_trap(
    shape: Shape, angle_threshold: float = DEFAULT_ANGLE_THRESHOLD, seed: int = 0
) -> None:
    """Edge coloring that treats short splines between corners as ink traps.

    Like ``color_simple``, but on contours with more than three corners a
    spline shorter than both of its neighbours marks a minor corner. Minor
    corners do not consume a color switch; their spline takes the complement
    of the channels shared by the surrounding colors. This avoids artifacts
    at tight notches such as the inner vertex of an M.

    Args:
        shape: Shape to color in place
        angle_threshold: Maximum turning angle (radians) that is still smooth
        seed: 64-bit seed selecting among the valid colorings
    """
    cross_threshold = math.sin(angle_threshold)
    stream = _Seed(seed)
    color = _init_color(stream)

    for contour in shape.contours:
        if not contour.edges:
            continue

        corners: list[_InkTrapCorner] = []
        spline_length = 0.0
        prev_direction = direction_at(contour.edges[-1], 1)
        for index, edge in enumerate(contour.edges):
            if is_corner(normalize(prev_direction), normalize(direction_at(edge, 0)), cross_threshold):
                corners.append(_InkTrapCorner(index=index, prev_edge_length_estimate=spline_length))
                spline_length = 0.0
            spline_length += estimate_edge_length(edge)
            prev_direction = direction_at(edge, 1)

        if not corners:
            color = _color_smooth(contour, color, stream)
            continue
        if len(corners) == 1:
            color = _color_teardrop(contour, corners[0].index, color, stream)
            continue

        corner_count = len(corners)
        major_corner_count = corner_count

        if corner_count > 3:
            corners[0].prev_edge_length_estimate += spline_length
            for i in range(corner_count):
                a = corners[i]
                b = corners[(i + 1) % corner_count]
                c = corners[(i + 2) % corner_count]
                if (
                    a.prev_edge_length_estimate > b.prev_edge_length_estimate
                    and b.prev_edge_length_estimate < c.prev_edge_length_estimate
                ):
                    b.minor = True
                    major_corner_count -= 1

        initial_color = EdgeColor.BLACK
        for corner in corners:
            if not corner.minor:
                major_corner_count -= 1
                banned = initial_color if major_corner_count == 0 else EdgeColor.BLACK
                color = switch_color(color, stream, banned)
                corner.color = color
                if initial_color == EdgeColor.BLACK:
                    initial_color = color

        for i, corner in enumerate(corners):
            if corner.minor:
                next_color = corners[(i + 1) % corner_count].color
                corner.color = EdgeColor((color & next_color) ^ EdgeColor.WHITE)
            else:
                color = corner.color

        spline = 0
        start = corners[0].index
        color = corners[0].color
        m = len(contour.edges)
        for i in range(m):
            index = (start + i) % m
            if spline + 1 < corner_count and corners[spline + 1].index == index:
                spline += 1
                color = corners[spline].color
            contour.edges[index].color = color
