"""Contour and shape containers.

A shape is the input of distance field generation: a set of closed contours,
each an ordered cyclic list of edge segments.
"""

from dataclasses import dataclass, field
from typing import Any

from glyphfield.domain.edge import EdgeSegment


@dataclass
class Contour:
    """A closed loop of edge segments.

    Edge ``i`` ends where edge ``i + 1`` (modulo the edge count) starts.
    Edge coloring may replace the edge list when it has to split edges.

    Attributes:
        edges: Edge segments in drawing order
    """

    edges: list[EdgeSegment] = field(default_factory=list)

    def add_edge(self, edge: EdgeSegment) -> None:
        """Append an edge to the contour."""
        self.edges.append(edge)

    def is_empty(self) -> bool:
        """Check if the contour has no edges."""
        return len(self.edges) == 0

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the contour
        """
        return {"edges": [e.to_dict() for e in self.edges]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Contour":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a contour

        Returns:
            Contour instance
        """
        return cls(edges=[EdgeSegment.from_dict(e) for e in data["edges"]])


@dataclass
class Shape:
    """An outline made of closed contours.

    Coloring a shape is a one-time mutation of its edges; parse a fresh
    shape for an independent coloring.

    Attributes:
        contours: Contours of the outline
        inverse_y_axis: Write generated rows bottom-up (for y-up outlines)
    """

    contours: list[Contour] = field(default_factory=list)
    inverse_y_axis: bool = False

    def add_contour(self, contour: Contour | None = None) -> Contour:
        """Append a contour and return it.

        Args:
            contour: Contour to add, a new empty one if None

        Returns:
            The added contour
        """
        if contour is None:
            contour = Contour()
        self.contours.append(contour)
        return contour

    def iter_edges(self):
        """Iterate over every edge of every contour."""
        for contour in self.contours:
            yield from contour.edges

    def is_empty(self) -> bool:
        """Check if the shape has no edges at all."""
        return all(contour.is_empty() for contour in self.contours)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for IPC.

        Returns:
            Dictionary representation of the shape
        """
        return {
            "contours": [c.to_dict() for c in self.contours],
            "inverse_y_axis": self.inverse_y_axis,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Shape":
        """Deserialize from dictionary.

        Args:
            data: Dictionary representation of a shape

        Returns:
            Shape instance
        """
        return cls(
            contours=[Contour.from_dict(c) for c in data["contours"]],
            inverse_y_axis=data.get("inverse_y_axis", False),
        )
