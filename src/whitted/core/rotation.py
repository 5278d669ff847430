"""Unit quaternions for camera orientation.

The camera orientation rotates every primary-ray direction from camera space
(looking down +z, y up) into world space. Quaternions are kept normalized by
the constructors; ``rotate`` assumes a unit quaternion.

Example:
    >>> from whitted.core.rotation import Quaternion
    >>> from whitted.core.vector import Vector3
    >>> q = Quaternion.from_axis_angle(Vector3(0.0, 1.0, 0.0), 90.0)
    >>> q.rotate(Vector3(0.0, 0.0, 1.0))  # doctest: +SKIP
    Vector3(x=1.0, y=0.0, z=0.0)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from whitted.core.vector import Vector3, cross, normalize


@dataclass(frozen=True, slots=True)
class Quaternion:
    """A rotation quaternion ``w + xi + yj + zk``.

    Attributes:
        w: Scalar part.
        x: i component of the vector part.
        y: j component of the vector part.
        z: k component of the vector part.
    """

    w: float
    x: float
    y: float
    z: float

    @classmethod
    def identity(cls) -> Quaternion:
        """The rotation that leaves every vector unchanged."""
        return cls(1.0, 0.0, 0.0, 0.0)

    @classmethod
    def from_axis_angle(cls, axis: Vector3, degrees: float) -> Quaternion:
        """Rotation of ``degrees`` about ``axis`` (right-handed).

        A zero axis yields the identity rotation.
        """
        axis = normalize(axis)
        if axis == Vector3(0.0, 0.0, 0.0):
            return cls.identity()
        half = math.radians(degrees) * 0.5
        s = math.sin(half)
        return cls(math.cos(half), axis.x * s, axis.y * s, axis.z * s)

    @classmethod
    def from_euler(cls, yaw: float, pitch: float, roll: float) -> Quaternion:
        """Compose yaw (about y), then pitch (about x), then roll (about z).

        All angles are in degrees. Positive yaw turns the view from +z
        toward +x, positive pitch tilts it downward.
        """
        q_yaw = cls.from_axis_angle(Vector3(0.0, 1.0, 0.0), yaw)
        q_pitch = cls.from_axis_angle(Vector3(1.0, 0.0, 0.0), pitch)
        q_roll = cls.from_axis_angle(Vector3(0.0, 0.0, 1.0), roll)
        return (q_yaw * q_pitch * q_roll).normalized()

    def __mul__(self, other: Quaternion) -> Quaternion:
        # Hamilton product; (a * b).rotate(v) == a.rotate(b.rotate(v))
        return Quaternion(
            self.w * other.w - self.x * other.x - self.y * other.y - self.z * other.z,
            self.w * other.x + self.x * other.w + self.y * other.z - self.z * other.y,
            self.w * other.y - self.x * other.z + self.y * other.w + self.z * other.x,
            self.w * other.z + self.x * other.y - self.y * other.x + self.z * other.w,
        )

    def norm(self) -> float:
        """Length of the quaternion as a 4-vector."""
        return math.sqrt(self.w * self.w + self.x * self.x + self.y * self.y + self.z * self.z)

    def normalized(self) -> Quaternion:
        """Return the unit quaternion for this rotation.

        A zero quaternion normalizes to the identity.
        """
        n = self.norm()
        if n == 0.0:
            return Quaternion.identity()
        return Quaternion(self.w / n, self.x / n, self.y / n, self.z / n)

    def rotate(self, v: Vector3) -> Vector3:
        """Rotate a vector by this (unit) quaternion.

        Uses the expanded form ``v + 2w(u x v) + 2u x (u x v)`` with ``u``
        the vector part, which avoids building intermediate quaternions.
        """
        u = Vector3(self.x, self.y, self.z)
        uv = cross(u, v)
        uuv = cross(u, uv)
        return v + uv * (2.0 * self.w) + uuv * 2.0

    def to_matrix(self) -> tuple[tuple[float, float, float], ...]:
        """Return the equivalent 3x3 row-major rotation matrix."""
        w, x, y, z = self.w, self.x, self.y, self.z
        return (
            (1.0 - 2.0 * (y * y + z * z), 2.0 * (x * y - w * z), 2.0 * (x * z + w * y)),
            (2.0 * (x * y + w * z), 1.0 - 2.0 * (x * x + z * z), 2.0 * (y * z - w * x)),
            (2.0 * (x * z - w * y), 2.0 * (y * z + w * x), 1.0 - 2.0 * (x * x + y * y)),
        )
