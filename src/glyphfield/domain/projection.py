"""Mapping between bitmap pixel space and shape space."""

from dataclasses import dataclass

from glyphfield.domain.vector import Vector2


@dataclass(frozen=True, slots=True)
class Projection:
    """Scale and translation relating shape units to pixels.

    A shape-space point ``p`` lands on pixel coordinate
    ``(p + translate) * scale``.

    Attributes:
        scale: Pixels per shape unit along each axis
        translate: Shape-space offset applied before scaling
    """

    scale: Vector2 = Vector2(1.0, 1.0)
    translate: Vector2 = Vector2(0.0, 0.0)

    @classmethod
    def uniform(cls, scale: float, translate: Vector2 | None = None) -> "Projection":
        """Create a projection with the same scale on both axes."""
        return cls(Vector2(scale, scale), translate or Vector2(0.0, 0.0))

    def project(self, coord: Vector2) -> Vector2:
        """Map a shape-space point to pixel coordinates."""
        return Vector2(
            self.scale.x * (coord.x + self.translate.x),
            self.scale.y * (coord.y + self.translate.y),
        )

    def unproject(self, coord: Vector2) -> Vector2:
        """Map pixel coordinates to a shape-space point."""
        return coord / self.scale - self.translate
