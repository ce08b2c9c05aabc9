"""Vector algebra and polynomial root solvers.

This module provides the math kernel used by every distance query:
- Dot and cross products, lengths, normalization
- Orthonormal vectors and linear interpolation
- Quadratic and cubic equation solvers with degenerate-case fallbacks

All functions are pure, stateless, and designed for use in parallel processing.

The numeric tolerances below are part of the output contract: changing them
changes generated fields.
"""

import math

from glyphfield.domain import Vector2

# Above this |b|/|a| ratio a quadratic is solved as linear.
QUADRATIC_DEGENERACY_RATIO = 1e12

# Normalized cubics whose x^2 coefficient reaches this are solved as quadratic.
CUBIC_NORMALIZATION_LIMIT = 1e6

# Relative tolerance for detecting the double root in Cardano's form.
CUBIC_DOUBLE_ROOT_TOLERANCE = 1e-12

# Returned by the solvers when every x is a solution (0 == 0).
INFINITE_SOLUTIONS = None


def dot(a: Vector2, b: Vector2) -> float:
    """Dot product of two vectors."""
    return a.x * b.x + a.y * b.y


def cross(a: Vector2, b: Vector2) -> float:
    """Z component of the cross product of two vectors."""
    return a.x * b.y - a.y * b.x


def squared_length(v: Vector2) -> float:
    """Squared Euclidean length."""
    return v.x * v.x + v.y * v.y


def length(v: Vector2) -> float:
    """Euclidean length."""
    return math.sqrt(v.x * v.x + v.y * v.y)


def normalize(v: Vector2) -> Vector2:
    """Unit vector in the direction of ``v``.

    A zero-length vector normalizes to (0, 1), so callers that compare
    directions always get a usable unit vector.

    Examples:
        >>> normalize(Vector2(3.0, 4.0))
        Vector2(x=0.6, y=0.8)
        >>> normalize(Vector2(0.0, 0.0))
        Vector2(x=0.0, y=1.0)
    """
    n = length(v)
    if n != 0:
        return Vector2(v.x / n, v.y / n)
    return Vector2(0.0, 1.0)


def normalize_allow_zero(v: Vector2) -> Vector2:
    """Unit vector in the direction of ``v``, or (0, 0) for a zero vector.

    Examples:
        >>> normalize_allow_zero(Vector2(0.0, 0.0))
        Vector2(x=0.0, y=0.0)
    """
    n = length(v)
    if n != 0:
        return Vector2(v.x / n, v.y / n)
    return Vector2(0.0, 0.0)


def get_orthonormal(v: Vector2, polarity: bool = True, allow_zero: bool = False) -> Vector2:
    """Unit vector perpendicular to ``v``.

    Args:
        v: Input vector
        polarity: True rotates 90 degrees counter-clockwise, False clockwise
        allow_zero: Return a zero vector instead of (0, +-1) for zero input

    Returns:
        Rotated unit vector
    """
    n = length(v)
    if n != 0:
        if polarity:
            return Vector2(-v.y / n, v.x / n)
        return Vector2(v.y / n, -v.x / n)
    if polarity:
        return Vector2(0.0, 0.0 if allow_zero else 1.0)
    return Vector2(0.0, 0.0 if allow_zero else -1.0)


def mix(a: float, b: float, weight: float) -> float:
    """Linear interpolation between two scalars."""
    return (1.0 - weight) * a + weight * b


def vec_mix(a: Vector2, b: Vector2, weight: float) -> Vector2:
    """Linear interpolation between two vectors."""
    return Vector2(
        (1.0 - weight) * a.x + weight * b.x,
        (1.0 - weight) * a.y + weight * b.y,
    )


def median(a: float, b: float, c: float) -> float:
    """Median of three values."""
    return max(min(a, b), min(max(a, b), c))


def clamp(n: float, lower: float, upper: float) -> float:
    """Clamp ``n`` into [lower, upper]."""
    if lower <= n <= upper:
        return n
    return lower if n < lower else upper


def sign(n: float) -> int:
    """Sign of ``n`` as -1, 0 or 1."""
    return (0.0 < n) - (n < 0.0)


def non_zero_sign(n: float) -> int:
    """Sign of ``n`` as -1 or 1, zero counts as negative."""
    return 1 if n > 0.0 else -1


def solve_quadratic(a: float, b: float, c: float) -> list[float] | None:
    """Solve ax^2 + bx + c = 0 for real x.

    Nearly-linear equations (``a == 0`` or ``|b| > 1e12 |a|``) are solved as
    ``bx + c = 0``. With two real roots the larger-numerator root
    ``(-b + sqrt(D)) / 2a`` comes first.

    Args:
        a: Quadratic coefficient
        b: Linear coefficient
        c: Constant term

    Returns:
        List of 0-2 roots, or INFINITE_SOLUTIONS when a, b and c are all zero

    Examples:
        >>> solve_quadratic(1.0, 0.0, -4.0)
        [2.0, -2.0]
        >>> solve_quadratic(0.0, 0.0, 0.0) is INFINITE_SOLUTIONS
        True
    """
    if a == 0 or abs(b) > QUADRATIC_DEGENERACY_RATIO * abs(a):
        if b == 0:
            if c == 0:
                return INFINITE_SOLUTIONS
            return []
        return [-c / b]

    dscr = b * b - 4 * a * c
    if dscr > 0:
        dscr = math.sqrt(dscr)
        return [(-b + dscr) / (2 * a), (-b - dscr) / (2 * a)]
    if dscr == 0:
        return [-b / (2 * a)]
    return []


def _solve_cubic_normed(a: float, b: float, c: float) -> list[float]:
    """Solve x^3 + ax^2 + bx + c = 0."""
    a2 = a * a
    q = 1.0 / 9.0 * (a2 - 3 * b)
    r = 1.0 / 54.0 * (a * (2 * a2 - 9 * b) + 27 * c)
    r2 = r * r
    q3 = q * q * q
    a_div3 = a * (1.0 / 3.0)

    if r2 < q3:
        t = r / math.sqrt(q3)
        t = clamp(t, -1.0, 1.0)
        t = math.acos(t)
        q = -2 * math.sqrt(q)
        return [
            q * math.cos(1.0 / 3.0 * t) - a_div3,
            q * math.cos(1.0 / 3.0 * (t + 2 * math.pi)) - a_div3,
            q * math.cos(1.0 / 3.0 * (t - 2 * math.pi)) - a_div3,
        ]

    u = (1 if r < 0 else -1) * math.pow(abs(r) + math.sqrt(r2 - q3), 1.0 / 3.0)
    v = 0.0 if u == 0 else q / u
    roots = [(u + v) - a_div3]
    if u == v or abs(u - v) < CUBIC_DOUBLE_ROOT_TOLERANCE * abs(u + v):
        roots.append(-0.5 * (u + v) - a_div3)
    return roots


def solve_cubic(a: float, b: float, c: float, d: float) -> list[float] | None:
    """Solve ax^3 + bx^2 + cx + d = 0 for real x.

    The equation is normalized by ``a``. When that is impossible or
    numerically unstable (``|b/a| >= 1e6``) it is solved as the quadratic
    bx^2 + cx + d = 0 instead, which in turn may degrade to linear.

    Args:
        a: Cubic coefficient
        b: Quadratic coefficient
        c: Linear coefficient
        d: Constant term

    Returns:
        List of 0-3 roots in no particular order, or INFINITE_SOLUTIONS
    """
    if a != 0:
        bn = b / a
        if abs(bn) < CUBIC_NORMALIZATION_LIMIT:
            return _solve_cubic_normed(bn, c / a, d / a)
    return solve_quadratic(b, c, d)
