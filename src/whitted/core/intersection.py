"""Ray-sphere intersection and closest-hit search.

The ray-sphere test substitutes the parametric ray ``origin + t * direction``
into the implicit sphere equation ``|p - center|^2 = radius^2``, giving

    a*t^2 + b*t + c = 0

with

    a = dot(direction, direction)
    b = 2 * dot(origin - center, direction)
    c = dot(origin - center, origin - center) - radius^2

Both roots are returned; when the discriminant is negative the sentinel pair
``(-inf, -inf)`` is returned instead. Callers decide validity by checking a
root against their own ``[t_min, t_max]`` window, never by the sign alone.

The closest-hit search is a plain linear scan over the sphere list. There is
no acceleration structure.

Example:
    >>> from whitted.core.intersection import closest_intersection
    >>> hit = closest_intersection(origin, direction, 1.0, math.inf, scene.spheres)
    >>> if hit is not None:
    ...     sphere = scene.spheres[hit.index]
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import NamedTuple

from whitted.core.vector import Vector3, dot
from whitted.scene.model import Sphere

NO_INTERSECTION = (-math.inf, -math.inf)


class Hit(NamedTuple):
    """The closest sphere along a ray.

    Attributes:
        index: Position of the sphere in the scene's sphere list.
        t: Ray parameter of the intersection.
    """

    index: int
    t: float


def intersect_ray_sphere(
    origin: Vector3,
    direction: Vector3,
    sphere: Sphere,
) -> tuple[float, float]:
    """Solve for the two ray parameters where a ray meets a sphere.

    Args:
        origin: The ray origin.
        direction: The ray direction. Need not be normalized; t is measured
            in multiples of this vector.
        sphere: The sphere to test.

    Returns:
        ``(t1, t2)`` with ``t1 <= t2`` for a real intersection (equal for a
        tangent ray), or ``(-inf, -inf)`` if the ray misses the sphere.
    """
    co = origin - sphere.center
    a = dot(direction, direction)
    b = 2.0 * dot(co, direction)
    c = dot(co, co) - sphere.radius * sphere.radius

    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return NO_INTERSECTION

    sqrt_d = math.sqrt(discriminant)
    t1 = (-b - sqrt_d) / (2.0 * a)
    t2 = (-b + sqrt_d) / (2.0 * a)
    return t1, t2


def closest_intersection(
    origin: Vector3,
    direction: Vector3,
    t_min: float,
    t_max: float,
    spheres: Sequence[Sphere],
    ignore: int | None = None,
) -> Hit | None:
    """Find the nearest sphere hit within ``[t_min, t_max]``.

    Both roots of every sphere are considered. The window is inclusive at
    both ends. When two spheres share the smallest t, the one with the lower
    index wins because later candidates must be strictly closer to replace it.

    Args:
        origin: The ray origin.
        direction: The ray direction.
        t_min: Smallest acceptable ray parameter.
        t_max: Largest acceptable ray parameter.
        spheres: The spheres to search, in scene order.
        ignore: Index of a sphere to skip (used by transparency rays to
            avoid re-hitting the surface they just passed through).

    Returns:
        The closest Hit, or None if no root falls inside the window.
    """
    closest: Hit | None = None
    closest_t = math.inf

    for i, sphere in enumerate(spheres):
        if i == ignore:
            continue
        for t in intersect_ray_sphere(origin, direction, sphere):
            if t_min <= t <= t_max and t < closest_t:
                closest_t = t
                closest = Hit(i, t)

    return closest
