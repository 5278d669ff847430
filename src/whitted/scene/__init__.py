"""Scene module for scene description and sharing.

This module handles scene representation and access from render workers:

Components:
    model: Specs, Sphere, the Light union and the Scene container
    shared: ReadWriteLock and SharedScene for concurrent render/update
    presets: Demo scenes and a simple animation step

Scenes are plain dataclasses. They are built by the caller, read-only while
a render is in flight, and may be mutated between renders (under the write
lock when wrapped in a SharedScene).
"""

from .model import (
    NO_SPECULAR,
    AmbientLight,
    DirectionalLight,
    Light,
    PointLight,
    Scene,
    Specs,
    Sphere,
)
from .presets import create_demo_scene, create_single_sphere_scene, orbit_point_light
from .shared import ReadWriteLock, SharedScene, as_shared

__all__ = [
    # Model
    "Scene",
    "Specs",
    "Sphere",
    "Light",
    "AmbientLight",
    "PointLight",
    "DirectionalLight",
    "NO_SPECULAR",
    # Sharing
    "ReadWriteLock",
    "SharedScene",
    "as_shared",
    # Presets
    "create_demo_scene",
    "create_single_sphere_scene",
    "orbit_point_light",
]
