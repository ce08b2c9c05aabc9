"""Domain models for glyphfield.

This module contains the data types shared by every stage of distance field
generation. All models are designed to be:

- Free of algorithms (geometric queries live in ``glyphfield.core``)
- Serializable for inter-process communication (parallel row generation)
- Independent of fonttools implementation details

Key classes:
- Vector2: A double precision 2D point or direction
- EdgeColor: Channel mask of an edge
- EdgeSegment: A line, quadratic or cubic segment
- Contour: A closed loop of edge segments
- Shape: An outline made of contours
- SignedDistance: Distance with a tie-breaking orthogonality term
- MsdfBitmap: The generated float bitmap
- Projection: Pixel to shape space mapping
"""

from glyphfield.domain.bitmap import MsdfBitmap
from glyphfield.domain.color import CHANNEL_MASKS, EdgeColor
from glyphfield.domain.distance import FAR_DISTANCE, SignedDistance
from glyphfield.domain.edge import EdgeKind, EdgeSegment
from glyphfield.domain.projection import Projection
from glyphfield.domain.shape import Contour, Shape
from glyphfield.domain.vector import Vector2

__all__: list[str] = [
    # Enums
    "EdgeColor",
    "EdgeKind",
    # Constants
    "CHANNEL_MASKS",
    "FAR_DISTANCE",
    # Core types
    "Vector2",
    "EdgeSegment",
    "Contour",
    "Shape",
    "SignedDistance",
    "MsdfBitmap",
    "Projection",
]
