"""Signed distance with a tie-breaking orthogonality term."""

import sys
from dataclasses import dataclass

# Distance reported before any edge has been measured.
FAR_DISTANCE = -sys.float_info.max


@dataclass(frozen=True, slots=True)
class SignedDistance:
    """Distance from a point to an edge with a secondary ordering key.

    Two values are ordered by absolute distance first. When two edges are
    exactly equidistant (typically at a shared corner), the one with the
    smaller ``dot`` is closer: ``dot`` measures how parallel the query
    direction is to the edge tangent at the endpoint, so a smaller value means
    the point lies more squarely in front of that edge.

    Attributes:
        distance: Signed distance, the sign tells which side of the edge
        dot: Orthogonality term used to break ties
    """

    distance: float = FAR_DISTANCE
    dot: float = 0.0

    def __lt__(self, other: "SignedDistance") -> bool:
        a, b = abs(self.distance), abs(other.distance)
        return a < b or (a == b and self.dot < other.dot)

    def __gt__(self, other: "SignedDistance") -> bool:
        a, b = abs(self.distance), abs(other.distance)
        return a > b or (a == b and self.dot > other.dot)

    def __le__(self, other: "SignedDistance") -> bool:
        a, b = abs(self.distance), abs(other.distance)
        return a < b or (a == b and self.dot <= other.dot)

    def __ge__(self, other: "SignedDistance") -> bool:
        a, b = abs(self.distance), abs(other.distance)
        return a > b or (a == b and self.dot >= other.dot)
