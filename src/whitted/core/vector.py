"""Vector3 value type and vector utility functions.

This module provides the immutable 3-component vector used for positions,
directions and normals throughout the tracer, along with the small set of
vector operations the intersection, shading and recursion code need.

Vectors are plain Python floats so that the recursive tracer stays exact
(float64) and deterministic across threads.

Example:
    >>> from whitted.core.vector import Vector3, length, normalize
    >>> v = Vector3(3.0, 0.0, 4.0)
    >>> length(v)
    5.0
    >>> normalize(v)
    Vector3(x=0.6, y=0.0, z=0.8)
"""

from __future__ import annotations

import math
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Vector3:
    """An immutable (x, y, z) triple.

    Attributes:
        x: The x component.
        y: The y component.
        z: The z component.
    """

    x: float
    y: float
    z: float

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scalar: float) -> Vector3:
        return Vector3(self.x * scalar, self.y * scalar, self.z * scalar)

    def __rmul__(self, scalar: float) -> Vector3:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Vector3:
        return Vector3(self.x / scalar, self.y / scalar, self.z / scalar)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def as_tuple(self) -> tuple[float, float, float]:
        """Return the components as a plain tuple."""
        return (self.x, self.y, self.z)

    @classmethod
    def of(cls, value: Vector3 | tuple[float, float, float]) -> Vector3:
        """Coerce a Vector3 or a 3-tuple into a Vector3."""
        if isinstance(value, Vector3):
            return value
        x, y, z = value
        return cls(float(x), float(y), float(z))


ORIGIN = Vector3(0.0, 0.0, 0.0)


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Vector3, b: Vector3) -> float:
    """Compute the dot product of two vectors."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vector3, b: Vector3) -> Vector3:
    """Compute the cross product a x b."""
    return Vector3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def length_squared(v: Vector3) -> float:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return dot(v, v)


def length(v: Vector3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(dot(v, v))


def normalize(v: Vector3) -> Vector3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v. The zero vector is
        returned unchanged.
    """
    n = length(v)
    if n == 0.0:
        return ORIGIN
    return v / n


def reflect(v: Vector3, normal: Vector3) -> Vector3:
    """Mirror a vector about a normal.

    Unlike the incident-ray convention, ``v`` points *away* from the surface
    (toward the viewer or the light), so the result also points away:
    ``2 * n * dot(n, v) - v``.

    Args:
        v: The vector to mirror, pointing away from the surface.
        normal: The surface normal (unit length for a length-preserving
            reflection).

    Returns:
        The mirrored vector.
    """
    return normal * (2.0 * dot(normal, v)) - v


def lerp(a: Vector3, b: Vector3, t: float) -> Vector3:
    """Linearly interpolate between two vectors."""
    return a * (1.0 - t) + b * t
