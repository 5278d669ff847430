"""Recursive Whitted ray tracing.

trace_ray() returns the color seen along a single ray:

1. Find the closest sphere in ``[t_min, t_max]``, skipping ``ignore``.
   Nothing hit: return the background color.
2. Shade the hit locally: ``sphere.color * compute_lighting(...)``.
3. Reflective sphere and depth left: trace the mirror ray from the hit point
   and blend it in by ``reflective``.
4. Transparent sphere and depth left: continue the same ray past the hit
   point (excluding the sphere just hit) and blend it in by ``transparency``.

Reflection and transparency share a single depth budget. Each spawned ray
costs one level, so a ray tree holds at most ``2^(depth + 1) - 1`` rays and
a sphere reached with no depth left is treated as opaque and non-reflective.

Example:
    >>> from whitted.core.tracer import MAX_DEPTH, trace_ray
    >>> color = trace_ray(camera_pos, direction, 1.0, math.inf, scene, depth=MAX_DEPTH)
"""

from __future__ import annotations

import math

from whitted.core.color import Color
from whitted.core.intersection import closest_intersection
from whitted.core.shading import EPSILON, compute_lighting
from whitted.core.vector import Vector3, normalize, reflect
from whitted.scene.model import Scene

# Default recursion budget shared by reflection and transparency rays
MAX_DEPTH = 3


def trace_ray(
    origin: Vector3,
    direction: Vector3,
    t_min: float,
    t_max: float,
    scene: Scene,
    ignore: int | None = None,
    depth: int = MAX_DEPTH,
    epsilon: float = EPSILON,
) -> Color:
    """Trace one ray through the scene and return its color.

    Args:
        origin: The ray origin.
        direction: The ray direction (need not be normalized).
        t_min: Nearest acceptable hit distance, in multiples of ``direction``.
        t_max: Farthest acceptable hit distance.
        scene: The scene to trace against. Must not change during the call.
        ignore: Index of a sphere the ray must not hit.
        depth: Remaining recursion budget. At 0 no secondary rays are cast.
        epsilon: Near distance for secondary and shadow rays.

    Returns:
        The color along the ray, every channel in [0, 1] for in-range scene
        colors.
    """
    hit = closest_intersection(origin, direction, t_min, t_max, scene.spheres, ignore)
    if hit is None:
        return scene.specs.background_color

    sphere = scene.spheres[hit.index]
    point = origin + direction * hit.t
    normal = normalize(point - sphere.center)
    view = -direction

    intensity = compute_lighting(point, normal, view, sphere.specular, scene, epsilon)
    color = sphere.color.scale(intensity)

    if depth <= 0:
        return color

    if sphere.reflective > 0.0:
        mirrored = reflect(view, normal)
        reflected = trace_ray(point, mirrored, epsilon, math.inf, scene, None, depth - 1, epsilon)
        color = color.lerp(reflected, sphere.reflective)

    if sphere.transparency > 0.0:
        behind = trace_ray(point, direction, epsilon, t_max, scene, hit.index, depth - 1, epsilon)
        color = color.lerp(behind, sphere.transparency)

    return color
