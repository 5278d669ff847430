"""Taichi kernel back end for the Whitted ray tracer.

This module renders the same image as whitted.core.renderer.render(), but
runs every output cell in parallel inside one Taichi kernel (CPU threads or
GPU). The scene is uploaded into module-level Taichi fields first.

Taichi functions cannot call themselves, so the recursive blend of
trace_ray() is evaluated as a weighted sum over the paths of the ray tree.
For a node hit on sphere s with reflectivity r and transparency tr (and
depth left):

    color = local * (1 - r) * (1 - tr) + reflected * r * (1 - tr) + behind * tr

so a node contributes ``weight * local * (1 - r) * (1 - tr)`` and passes
``weight * r * (1 - tr)`` to its reflection child and ``weight * tr`` to its
transparency child. A path is a bit string (0 = reflect, 1 = continue
through) of length at most ``max_depth``; the kernel replays each path from
the primary ray and adds the contribution of the node it ends on. Every
intermediate color of the recursive form lies in [0, 1], so its clamping is
a no-op and the two forms agree up to float32 rounding.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.gpu)
    >>> from whitted.core.integrator import render_kernel
    >>> from whitted.surface.field import FieldSurface
    >>> surface = FieldSurface(640, 480)
    >>> render_kernel(scene, surface)
"""

import logging
import threading
import time

import numpy as np
import taichi as ti
import taichi.math as tm

from whitted.core.color import Color
from whitted.core.renderer import RenderSettings, projection
from whitted.scene.model import AmbientLight, DirectionalLight, PointLight, Scene
from whitted.scene.shared import SharedScene, as_shared
from whitted.surface.arrays import ArraySurface
from whitted.surface.base import Surface
from whitted.surface.field import FieldSurface

logger = logging.getLogger(__name__)

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Maximum number of primitives and lights supported in a scene
MAX_SPHERES = 256
MAX_LIGHTS = 32

# Light kinds stored in light_kinds
LIGHT_AMBIENT = 0
LIGHT_POINT = 1
LIGHT_DIRECTIONAL = 2

# Stand-in for infinity in float32 kernels
T_MAX = 1e30

# Sphere storage: Structure of Arrays layout for GPU efficiency
sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
sphere_speculars = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_reflectives = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
sphere_transparencies = ti.field(dtype=ti.f32, shape=MAX_SPHERES)
num_spheres = ti.field(dtype=ti.i32, shape=())

# Light storage; light_vectors holds the position (point) or direction (directional)
light_kinds = ti.field(dtype=ti.i32, shape=MAX_LIGHTS)
light_intensities = ti.field(dtype=ti.f32, shape=MAX_LIGHTS)
light_vectors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_LIGHTS)
num_lights = ti.field(dtype=ti.i32, shape=())

# Camera and background
_camera_pos = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_rotation = ti.Matrix.field(3, 3, dtype=ti.f32, shape=())
_background = ti.Vector.field(3, dtype=ti.f32, shape=())

# The fields above are global, so uploads and kernel launches are serialized
_kernel_lock = threading.Lock()


# =============================================================================
# Scene Upload (Python-side)
# =============================================================================


def clear_scene() -> None:
    """Remove all spheres and lights from the kernel scene."""
    num_spheres[None] = 0
    num_lights[None] = 0


def load_scene(scene: Scene) -> None:
    """Upload a scene into the kernel fields.

    Args:
        scene: The scene to upload. Read only.

    Raises:
        RuntimeError: If the scene has more than MAX_SPHERES spheres or
            MAX_LIGHTS lights.
    """
    if len(scene.spheres) > MAX_SPHERES:
        raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
    if len(scene.lights) > MAX_LIGHTS:
        raise RuntimeError(f"Maximum number of lights ({MAX_LIGHTS}) exceeded")

    for i, sphere in enumerate(scene.spheres):
        sphere_centers[i] = list(sphere.center.as_tuple())
        sphere_radii[i] = sphere.radius
        sphere_colors[i] = list(sphere.color.as_tuple())
        sphere_speculars[i] = sphere.specular
        sphere_reflectives[i] = sphere.reflective
        sphere_transparencies[i] = sphere.transparency
    num_spheres[None] = len(scene.spheres)

    for i, light in enumerate(scene.lights):
        match light:
            case AmbientLight(intensity=intensity):
                light_kinds[i] = LIGHT_AMBIENT
                light_vectors[i] = [0.0, 0.0, 0.0]
            case PointLight(intensity=intensity, position=position):
                light_kinds[i] = LIGHT_POINT
                light_vectors[i] = list(position.as_tuple())
            case DirectionalLight(intensity=intensity, direction=direction):
                light_kinds[i] = LIGHT_DIRECTIONAL
                light_vectors[i] = list(direction.as_tuple())
            case _:
                raise TypeError(f"Unknown light type: {type(light).__name__}")
        light_intensities[i] = intensity
    num_lights[None] = len(scene.lights)

    specs = scene.specs
    _camera_pos[None] = list(specs.camera_pos.as_tuple())
    _camera_rotation[None] = [list(row) for row in specs.camera_orientation.to_matrix()]
    _background[None] = list(specs.background_color.as_tuple())


def get_sphere_count() -> int:
    """Get the number of spheres currently uploaded."""
    return int(num_spheres[None])


def get_light_count() -> int:
    """Get the number of lights currently uploaded."""
    return int(num_lights[None])


# =============================================================================
# Intersection and Shading (Taichi functions)
# =============================================================================


@ti.func
def intersect_sphere(origin: vec3, direction: vec3, i: ti.i32):
    """Both roots of the ray-sphere quadratic for sphere i.

    Returns:
        Tuple (t1, t2) with t1 <= t2, or (-T_MAX, -T_MAX) on a miss.
    """
    co = origin - sphere_centers[i]
    r = sphere_radii[i]
    a = tm.dot(direction, direction)
    b = 2.0 * tm.dot(co, direction)
    c = tm.dot(co, co) - r * r
    discriminant = b * b - 4.0 * a * c

    t1 = -T_MAX
    t2 = -T_MAX
    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t1 = (-b - sqrt_d) / (2.0 * a)
        t2 = (-b + sqrt_d) / (2.0 * a)
    return t1, t2


@ti.func
def closest_hit(origin: vec3, direction: vec3, t_min: ti.f32, t_max: ti.f32, ignore: ti.i32):
    """Closest sphere with a root in [t_min, t_max], skipping ``ignore``.

    Returns:
        Tuple (index, t); index is -1 when nothing qualifies.
    """
    closest_i = -1
    closest_t = T_MAX
    for i in range(num_spheres[None]):
        if i != ignore:
            t1, t2 = intersect_sphere(origin, direction, i)
            if t1 >= t_min and t1 <= t_max and t1 < closest_t:
                closest_t = t1
                closest_i = i
            if t2 >= t_min and t2 <= t_max and t2 < closest_t:
                closest_t = t2
                closest_i = i
    return closest_i, closest_t


@ti.func
def compute_lighting(p: vec3, n: vec3, v: vec3, s: ti.f32, epsilon: ti.f32) -> ti.f32:
    """Kernel version of whitted.core.shading.compute_lighting."""
    total = 0.0
    for k in range(num_lights[None]):
        kind = light_kinds[k]
        intensity = light_intensities[k]
        if kind == LIGHT_AMBIENT:
            total += intensity
        else:
            l = light_vectors[k]
            t_max = T_MAX
            if kind == LIGHT_POINT:
                l = light_vectors[k] - p
                t_max = 1.0

            # Shadow: the closest occluder passes its transparency
            transmission = 1.0
            occluder, _t = closest_hit(p, l, epsilon, t_max, -1)
            if occluder >= 0:
                transmission = sphere_transparencies[occluder]

            if transmission > 0.0:
                contribution = 0.0

                # Diffuse
                n_dot_l = tm.dot(n, l)
                if n_dot_l > 0.0:
                    contribution += intensity * n_dot_l / (tm.length(n) * tm.length(l))

                # Specular
                if s >= 0.0:
                    r = 2.0 * tm.dot(n, l) * n - l
                    r_dot_v = tm.dot(r, v)
                    if r_dot_v > 0.0:
                        contribution += intensity * (r_dot_v / (tm.length(r) * tm.length(v))) ** s

                total += contribution * transmission
    return total


@ti.func
def trace_tree(origin: vec3, direction: vec3, t_min: ti.f32, max_depth: ti.i32, epsilon: ti.f32) -> vec3:
    """Color of a primary ray, summed over every path of its ray tree."""
    color = vec3(0.0, 0.0, 0.0)

    for level in range(max_depth + 1):
        for path in range(1 << level):
            ray_o = origin
            ray_d = direction
            lo = t_min
            hi = T_MAX
            ignore = -1
            weight = 1.0
            alive = 1

            # Replay the path; bit (level - 1 - step) picks the branch at each step
            for step in range(level):
                if alive == 1:
                    i, t = closest_hit(ray_o, ray_d, lo, hi, ignore)
                    if i < 0:
                        alive = 0
                    else:
                        p = ray_o + t * ray_d
                        n = tm.normalize(p - sphere_centers[i])
                        refl = ti.max(sphere_reflectives[i], 0.0)
                        trans = ti.max(sphere_transparencies[i], 0.0)
                        if ((path >> (level - 1 - step)) & 1) == 0:
                            if refl > 0.0:
                                weight *= refl * (1.0 - trans)
                                ray_d = ray_d - 2.0 * tm.dot(ray_d, n) * n
                                ray_o = p
                                lo = epsilon
                                hi = T_MAX
                                ignore = -1
                            else:
                                alive = 0
                        else:
                            if trans > 0.0:
                                weight *= trans
                                ray_o = p
                                lo = epsilon
                                ignore = i
                            else:
                                alive = 0

            # Contribution of the node the path ends on
            if alive == 1:
                i, t = closest_hit(ray_o, ray_d, lo, hi, ignore)
                if i < 0:
                    color += weight * _background[None]
                else:
                    p = ray_o + t * ray_d
                    n = tm.normalize(p - sphere_centers[i])
                    intensity = compute_lighting(p, n, -ray_d, sphere_speculars[i], epsilon)
                    local = tm.clamp(sphere_colors[i] * intensity, 0.0, 1.0)
                    keep = 1.0
                    if level < max_depth:
                        refl = ti.max(sphere_reflectives[i], 0.0)
                        trans = ti.max(sphere_transparencies[i], 0.0)
                        keep = (1.0 - refl) * (1.0 - trans)
                    color += weight * keep * local

    return color


@ti.kernel
def _render(
    out: ti.template(),
    width: ti.i32,
    height: ti.i32,
    half_width: ti.f32,
    half_height: ti.f32,
    x_scale: ti.f32,
    y_scale: ti.f32,
    distance: ti.f32,
    t_min: ti.f32,
    max_depth: ti.i32,
    epsilon: ti.f32,
):
    """Render every cell of ``out`` (shape (width, height), indexed [x, y])."""
    for ix, iy in ti.ndrange(width, height):
        # Cell center on the canvas, y flipped
        cx = -half_width + 2.0 * half_width * ((ix + 0.5) / width)
        cy = half_height - 2.0 * half_height * ((iy + 0.5) / height)
        d = vec3(cx * x_scale, cy * y_scale, distance)
        direction = _camera_rotation[None] @ d
        out[ix, iy] = trace_tree(_camera_pos[None], direction, t_min, max_depth, epsilon)


# =============================================================================
# Rendering Entry Point
# =============================================================================


def render_kernel(
    scene: Scene | SharedScene,
    surface: Surface,
    settings: RenderSettings | None = None,
) -> None:
    """Render the full frame with the Taichi kernel.

    The scene's read lock is held while the scene is uploaded and while the
    kernel runs, so no writer can change it mid-frame. A FieldSurface is
    rendered into directly, any other surface is filled from a temporary
    field.

    Args:
        scene: The scene, plain or shared.
        surface: Destination surface.
        settings: Render parameters (``workers`` is ignored; Taichi
            schedules the kernel itself).

    Raises:
        RuntimeError: If the scene exceeds the kernel's capacity.
    """
    settings = settings or RenderSettings()
    width, height = surface.width, surface.height
    target = surface if isinstance(surface, FieldSurface) else FieldSurface(width, height)

    start = time.perf_counter()
    with _kernel_lock:
        with as_shared(scene).read() as snapshot:
            load_scene(snapshot)
            proj = projection(snapshot.specs, width, height)
            _render(
                target.field,
                width,
                height,
                proj.half_width,
                proj.half_height,
                proj.x_scale,
                proj.y_scale,
                proj.distance,
                settings.t_min,
                settings.max_depth,
                settings.epsilon,
            )

    if target is not surface:
        image = target.to_numpy().astype(np.float64)
        if isinstance(surface, ArraySurface):
            surface.data[:, :] = image
        else:
            for y in range(height):
                for x in range(width):
                    r, g, b = image[y, x]
                    surface.set_value(x, y, Color(float(r), float(g), float(b)))

    logger.debug(
        "Kernel rendered %dx%d frame in %.3fs", width, height, time.perf_counter() - start
    )
