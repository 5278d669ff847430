"""Scene data model: camera specs, lights and spheres.

A Scene is built by the caller (or by one of the presets) before a render
and is treated as read-only while a render is in flight. Between renders it
may be mutated freely, typically through ``SharedScene.write()`` so that a
concurrent render never observes a half-updated scene.

No validation is performed here: a non-positive radius or NaN coordinate
produces garbage pixels rather than an error.

Lights form a tagged union of three dataclasses (``Light``); the shading code
matches on it exhaustively.

Example:
    >>> from whitted.core.color import Color
    >>> from whitted.core.vector import Vector3
    >>> from whitted.scene.model import AmbientLight, Scene, Specs, Sphere
    >>> scene = Scene(
    ...     specs=Specs(),
    ...     lights=[AmbientLight(intensity=1.0)],
    ...     spheres=[Sphere(Vector3(0.0, 0.0, 3.0), 1.0, Color(1.0, 0.0, 0.0))],
    ... )
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Union

from whitted.core.color import WHITE, Color
from whitted.core.rotation import Quaternion
from whitted.core.vector import ORIGIN, Vector3

# Sentinel specular exponent meaning "matte, no specular highlight"
NO_SPECULAR = -1.0


@dataclass
class Sphere:
    """A sphere and its surface properties.

    Attributes:
        center: Center of the sphere in world space.
        radius: Radius of the sphere (expected > 0, not checked).
        color: Base color, scaled by the lighting intensity at each hit.
        specular: Shininess exponent. Negative disables the specular term.
        reflective: Fraction of the local color replaced by the mirror
            reflection, in [0, 1].
        transparency: Fraction of the local color replaced by whatever lies
            behind the sphere along the same ray, in [0, 1].
    """

    center: Vector3
    radius: float
    color: Color
    specular: float = NO_SPECULAR
    reflective: float = 0.0
    transparency: float = 0.0


@dataclass
class AmbientLight:
    """Light that reaches every point regardless of geometry."""

    intensity: float


@dataclass
class PointLight:
    """Light emitted from a single position.

    Attributes:
        intensity: Non-negative intensity.
        position: World-space position of the light.
    """

    intensity: float
    position: Vector3


@dataclass
class DirectionalLight:
    """Light arriving from infinitely far away.

    Attributes:
        intensity: Non-negative intensity.
        direction: Vector from a lit point *toward* the light. Used as-is,
            it does not need to be normalized.
    """

    intensity: float
    direction: Vector3


Light = Union[AmbientLight, PointLight, DirectionalLight]


@dataclass
class Specs:
    """Camera, viewport and background settings for a render.

    Attributes:
        canvas_width: Logical canvas width in world units (scaling only).
        canvas_height: Logical canvas height in world units (scaling only).
        viewport_width: Viewport width in world units.
        viewport_height: Viewport height in world units.
        viewport_distance: Camera-to-viewport distance along the view axis.
        pixel_ar: Aspect ratio of one output cell. 1.0 for square pixels;
            roughly 0.4-0.8 for terminal character cells.
        camera_pos: Camera position in world space.
        camera_orientation: Rotation applied to every primary-ray direction.
        background_color: Color returned by rays that hit nothing.
    """

    canvas_width: float = 1.0
    canvas_height: float = 1.0
    viewport_width: float = 1.0
    viewport_height: float = 1.0
    viewport_distance: float = 1.0
    pixel_ar: float = 1.0
    camera_pos: Vector3 = ORIGIN
    camera_orientation: Quaternion = field(default_factory=Quaternion.identity)
    background_color: Color = WHITE


@dataclass
class Scene:
    """Everything needed to render one frame.

    Sphere order matters only as a transient handle during a single trace
    (the index passed to exclude a sphere from a transparency ray).

    Attributes:
        specs: Camera and viewport configuration.
        lights: Lights whose contributions are summed at each hit.
        spheres: The scene geometry.
    """

    specs: Specs = field(default_factory=Specs)
    lights: list[Light] = field(default_factory=list)
    spheres: list[Sphere] = field(default_factory=list)

    def add_sphere(self, sphere: Sphere) -> int:
        """Append a sphere and return its index."""
        self.spheres.append(sphere)
        return len(self.spheres) - 1

    def add_light(self, light: Light) -> int:
        """Append a light and return its index."""
        self.lights.append(light)
        return len(self.lights) - 1

    def copy(self) -> Scene:
        """Return a deep copy that shares no mutable state with this scene."""
        return copy.deepcopy(self)
