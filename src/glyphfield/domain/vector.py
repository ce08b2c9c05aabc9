"""Double precision 2D vector used for all outline geometry."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class Vector2:
    """A point or direction in 2D space.

    Immutable and hashable. Arithmetic operators are provided so that
    geometry code reads like the formulas it implements.

    Attributes:
        x: X component in shape units
        y: Y component in shape units
    """

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)

    def __mul__(self, factor: float) -> "Vector2":
        return Vector2(self.x * factor, self.y * factor)

    __rmul__ = __mul__

    def __truediv__(self, divisor: "float | Vector2") -> "Vector2":
        if isinstance(divisor, Vector2):
            return Vector2(self.x / divisor.x, self.y / divisor.y)
        return Vector2(self.x / divisor, self.y / divisor)

    def is_zero(self) -> bool:
        """Check if both components are exactly zero."""
        return self.x == 0 and self.y == 0

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple.

        Returns:
            Tuple of (x, y) components
        """
        return (self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary with x and y fields
        """
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Vector2":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Vector2 instance
        """
        return cls(x=data["x"], y=data["y"])
