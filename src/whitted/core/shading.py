"""Local illumination: diffuse + specular with shadow attenuation.

compute_lighting() returns a scalar intensity, not a color. The tracer
multiplies the hit sphere's base color by it and the color arithmetic clamps
the product, so intensities above 1 simply saturate.

For every light:
    - Ambient lights add their intensity unconditionally.
    - Point and directional lights build a light vector ``l`` (point:
      ``position - p``, unnormalized so that t = 1 lands on the light;
      directional: ``direction`` as given) and cast a shadow ray along it.
      The diffuse term is ``I * n.l / (|n||l|)`` and the specular term is
      ``I * (r.v / (|r||v|))^s`` with ``r`` the mirror of ``l`` about ``n``.

Shadowing attenuates rather than zeroes: the closest occluder on the shadow
ray lets through ``occluder.transparency`` of the light, so an opaque
occluder blocks it completely and a half-transparent one halves it.
"""

from __future__ import annotations

import math

from whitted.core.intersection import closest_intersection
from whitted.core.vector import Vector3, dot, length, reflect
from whitted.scene.model import AmbientLight, DirectionalLight, PointLight, Scene

# Minimum distance for shadow and secondary rays, in world units.
# Keeps a ray from immediately re-hitting the surface it starts on.
EPSILON = 1e-3


def shadow_transmission(
    point: Vector3,
    light_vector: Vector3,
    t_max: float,
    scene: Scene,
    epsilon: float = EPSILON,
) -> float:
    """Fraction of a light that reaches ``point`` past the scene's spheres.

    Args:
        point: The shaded point.
        light_vector: Vector from the point toward the light.
        t_max: Upper bound of the shadow ray (1.0 for point lights,
            infinity for directional lights).
        scene: The scene whose spheres may occlude the light.
        epsilon: Lower bound of the shadow ray.

    Returns:
        1.0 if nothing blocks the light, otherwise the transparency of the
        closest occluder (0.0 for an opaque one).
    """
    hit = closest_intersection(point, light_vector, epsilon, t_max, scene.spheres)
    if hit is None:
        return 1.0
    return scene.spheres[hit.index].transparency


def compute_lighting(
    point: Vector3,
    normal: Vector3,
    view: Vector3,
    specular: float,
    scene: Scene,
    epsilon: float = EPSILON,
) -> float:
    """Sum the light intensity arriving at a surface point.

    Args:
        point: The point being shaded.
        normal: The surface normal at ``point``.
        view: Vector from the point back toward the viewer.
        specular: Shininess exponent of the surface. Negative disables the
            specular term.
        scene: The scene supplying lights and occluders.
        epsilon: Lower bound for shadow rays.

    Returns:
        The total intensity. Never negative when every light intensity is
        non-negative; not clamped.
    """
    total = 0.0

    for light in scene.lights:
        match light:
            case AmbientLight(intensity=intensity):
                total += intensity
                continue
            case PointLight(intensity=intensity, position=position):
                light_vector = position - point
                t_max = 1.0
            case DirectionalLight(intensity=intensity, direction=direction):
                light_vector = direction
                t_max = math.inf
            case _:
                raise TypeError(f"Unknown light type: {type(light).__name__}")

        transmission = shadow_transmission(point, light_vector, t_max, scene, epsilon)
        if transmission <= 0.0:
            continue

        contribution = 0.0

        # Diffuse
        n_dot_l = dot(normal, light_vector)
        if n_dot_l > 0.0:
            contribution += intensity * n_dot_l / (length(normal) * length(light_vector))

        # Specular
        if specular >= 0.0:
            r = reflect(light_vector, normal)
            r_dot_v = dot(r, view)
            if r_dot_v > 0.0:
                contribution += intensity * (r_dot_v / (length(r) * length(view))) ** specular

        total += contribution * transmission

    return total
