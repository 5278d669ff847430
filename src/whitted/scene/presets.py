"""Ready-made scenes.

create_demo_scene() builds the classic four-sphere test scene (red, blue and
green spheres resting on a huge yellow "floor" sphere, lit by an ambient,
a point and a directional light) and adds a glass-like transparent sphere
in front.

create_single_sphere_scene() is the smallest useful scene: one sphere, one
ambient light. It is what the renderer tests use to pin down exact pixels.

orbit_point_light() is a simple animation step: it swings the first point
light on a circle and bobs the first sphere. Apply it under the scene's
write lock when other threads may be rendering:

    >>> shared = SharedScene(create_demo_scene())
    >>> shared.update(lambda scene: orbit_point_light(scene, t))
"""

from __future__ import annotations

import math

from whitted.core.color import Color
from whitted.core.vector import Vector3
from whitted.scene.model import (
    AmbientLight,
    DirectionalLight,
    PointLight,
    Scene,
    Specs,
    Sphere,
)


def create_demo_scene() -> Scene:
    """Create the four-sphere scene plus one transparent sphere.

    The camera sits at the origin looking down +z.

    Returns:
        A new Scene instance.
    """
    specs = Specs(background_color=Color(0.0, 0.0, 0.0))

    spheres = [
        Sphere(
            center=Vector3(0.0, -1.0, 3.0),
            radius=1.0,
            color=Color(1.0, 0.0, 0.0),
            specular=500.0,
            reflective=0.2,
        ),
        Sphere(
            center=Vector3(2.0, 0.0, 4.0),
            radius=1.0,
            color=Color(0.0, 0.0, 1.0),
            specular=500.0,
            reflective=0.3,
        ),
        Sphere(
            center=Vector3(-2.0, 0.0, 4.0),
            radius=1.0,
            color=Color(0.0, 1.0, 0.0),
            specular=10.0,
            reflective=0.4,
        ),
        Sphere(
            center=Vector3(0.0, -5001.0, 0.0),
            radius=5000.0,
            color=Color(1.0, 1.0, 0.0),
            specular=1000.0,
            reflective=0.5,
        ),
        Sphere(
            center=Vector3(0.6, 0.4, 2.2),
            radius=0.35,
            color=Color(0.8, 0.9, 1.0),
            specular=200.0,
            reflective=0.1,
            transparency=0.7,
        ),
    ]

    lights = [
        AmbientLight(intensity=0.2),
        PointLight(intensity=0.6, position=Vector3(2.0, 1.0, 0.0)),
        DirectionalLight(intensity=0.2, direction=Vector3(1.0, 4.0, 4.0)),
    ]

    return Scene(specs=specs, lights=lights, spheres=spheres)


def create_single_sphere_scene(
    color: Color = Color(0.2, 0.6, 0.9),
    background: Color = Color(1.0, 1.0, 1.0),
) -> Scene:
    """Create a scene with one unit sphere at (0, 0, 3) and full ambient light.

    With ambient intensity 1.0 and no other lights, every pixel that sees the
    sphere is exactly ``color`` and every other pixel is ``background``.
    """
    scene = Scene(specs=Specs(background_color=background))
    scene.add_light(AmbientLight(intensity=1.0))
    scene.add_sphere(Sphere(center=Vector3(0.0, 0.0, 3.0), radius=1.0, color=color))
    return scene


def orbit_point_light(scene: Scene, time: float) -> None:
    """Advance the scene's simple animation to ``time`` (in frames).

    Moves the first point light on a radius-3 circle in the xz plane around
    (2, _, -3) and bobs the first sphere up and down around y = -1. Scenes
    without a point light or without spheres are left partly untouched.
    """
    for light in scene.lights:
        if isinstance(light, PointLight):
            angle = math.radians(time * 2.5)
            light.position = Vector3(
                2.0 + math.sin(angle) * 3.0,
                light.position.y,
                -3.0 + math.cos(angle) * 3.0,
            )
            break

    if scene.spheres:
        sphere = scene.spheres[0]
        angle = math.radians(time * 1.25)
        sphere.center = Vector3(sphere.center.x, -1.0 + math.sin(angle), sphere.center.z)
