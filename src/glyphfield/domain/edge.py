"""Edge segment representation.

Edges are a tagged sum type: one dataclass whose ``kind`` selects how its
control points are interpreted. The geometric queries live in
``glyphfield.core.segments`` and dispatch on ``kind``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from glyphfield.domain.color import EdgeColor
from glyphfield.domain.vector import Vector2


class EdgeKind(Enum):
    """Edge variant, valued by its number of control points."""

    LINEAR = 2
    QUADRATIC = 3
    CUBIC = 4


@dataclass(slots=True)
class EdgeSegment:
    """A single line or Bezier segment of a contour.

    The color is mutable: edge coloring assigns it once per shape.

    Attributes:
        kind: Segment variant
        points: Control points, first and last are the endpoints
        color: Channels this edge contributes to
    """

    kind: EdgeKind
    points: tuple[Vector2, ...]
    color: EdgeColor = field(default=EdgeColor.WHITE)

    def __post_init__(self) -> None:
        if len(self.points) != self.kind.value:
            raise ValueError(
                f"{self.kind.name.lower()} edge needs {self.kind.value} points, "
                f"got {len(self.points)}"
            )

    @classmethod
    def linear(
        cls, p0: Vector2, p1: Vector2, color: EdgeColor = EdgeColor.WHITE
    ) -> "EdgeSegment":
        """Create a straight line segment."""
        return cls(EdgeKind.LINEAR, (p0, p1), color)

    @classmethod
    def quadratic(
        cls,
        p0: Vector2,
        p1: Vector2,
        p2: Vector2,
        color: EdgeColor = EdgeColor.WHITE,
    ) -> "EdgeSegment":
        """Create a quadratic Bezier segment.

        A control point collinear with the endpoints is moved to their
        midpoint so the tangent at either end is never zero.
        """
        ax, ay = p1.x - p0.x, p1.y - p0.y
        bx, by = p2.x - p1.x, p2.y - p1.y
        if ax * by - ay * bx == 0:
            p1 = Vector2(0.5 * (p0.x + p2.x), 0.5 * (p0.y + p2.y))
        return cls(EdgeKind.QUADRATIC, (p0, p1, p2), color)

    @classmethod
    def cubic(
        cls,
        p0: Vector2,
        p1: Vector2,
        p2: Vector2,
        p3: Vector2,
        color: EdgeColor = EdgeColor.WHITE,
    ) -> "EdgeSegment":
        """Create a cubic Bezier segment."""
        return cls(EdgeKind.CUBIC, (p0, p1, p2, p3), color)

    @property
    def start(self) -> Vector2:
        """First endpoint (parameter 0)."""
        return self.points[0]

    @property
    def end(self) -> Vector2:
        """Last endpoint (parameter 1)."""
        return self.points[-1]

    def clone(self) -> "EdgeSegment":
        """Copy of this edge with the same points and color."""
        return EdgeSegment(self.kind, self.points, self.color)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with kind, points and color fields
        """
        return {
            "kind": self.kind.value,
            "points": [p.to_dict() for p in self.points],
            "color": int(self.color),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EdgeSegment":
        """Deserialize from dictionary.

        Control points are restored as stored, without the quadratic
        control point adjustment applied by ``quadratic()``.

        Args:
            data: Dictionary representation of an edge

        Returns:
            EdgeSegment instance
        """
        return cls(
            kind=EdgeKind(data["kind"]),
            points=tuple(Vector2.from_dict(p) for p in data["points"]),
            color=EdgeColor(data["color"]),
        )
