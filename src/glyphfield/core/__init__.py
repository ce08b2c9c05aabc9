"""Core algorithms for glyphfield.

This module contains the core algorithms for:

- Numeric helpers (vector products, polynomial root solving)
- Edge geometry (evaluation, signed distance, bounds, subdivision)
- Outline operations (winding, validation, normalization, orientation)
- Edge coloring (simple and ink trap strategies)
- Field generation (MSDF, pseudo-SDF, SDF) and framing
- Clash correction of multi-channel fields

All algorithms are designed to be:
- Deterministic (same input and seed, same output)
- Free of logging and I/O (the processor reports progress)
- Safe for use in worker processes

Key functions:
- signed_distance: Nearest signed distance from a point to an edge
- color_simple: Assign channel colors to a shape
- generate_msdf: Fill a bitmap with a multi-channel distance field
- correct_errors: Remove interpolation clashes from a bitmap

Key classes:
- FieldProcessor: Runs the complete rendering pipeline
"""

from glyphfield.core.coloring import color_ink_trap, color_simple
from glyphfield.core.correction import (
    clash_threshold,
    correct_distance_sign,
    correct_errors,
    detect_clash,
    fill_mask,
)
from glyphfield.core.framing import Framing, frame_shape
from glyphfield.core.generator import (
    generate_band,
    generate_field,
    generate_msdf,
    generate_pseudo_sdf,
    generate_sdf,
)
from glyphfield.core.geometry import solve_cubic, solve_quadratic
from glyphfield.core.outline import (
    contour_winding,
    edge_count,
    normalize_shape,
    orient_contours,
    reverse_contour,
    shape_bounds,
    validate_shape,
)
from glyphfield.core.processor import FieldProcessor, RenderResult
from glyphfield.core.segments import (
    bound,
    direction_at,
    distance_to_perpendicular_distance,
    point_at,
    signed_distance,
    split_in_thirds,
)

__all__ = [
    # Processor classes
    "FieldProcessor",
    "Framing",
    "RenderResult",
    # Numeric functions
    "solve_cubic",
    "solve_quadratic",
    # Edge functions
    "bound",
    "direction_at",
    "distance_to_perpendicular_distance",
    "point_at",
    "signed_distance",
    "split_in_thirds",
    # Outline functions
    "contour_winding",
    "edge_count",
    "normalize_shape",
    "orient_contours",
    "reverse_contour",
    "shape_bounds",
    "validate_shape",
    # Coloring
    "color_ink_trap",
    "color_simple",
    # Generation
    "frame_shape",
    "generate_band",
    "generate_field",
    "generate_msdf",
    "generate_pseudo_sdf",
    "generate_sdf",
    # Correction
    "clash_threshold",
    "correct_distance_sign",
    "correct_errors",
    "detect_clash",
    "fill_mask",
]
