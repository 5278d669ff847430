"""Pytest configuration for whitted tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    The kernel back end allocates module-level fields on import, so Taichi
    must be initialized before any test imports whitted.core.integrator.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def single_sphere_scene():
    """One sphere at (0, 0, 3), full ambient light, white background."""
    from whitted.scene.presets import create_single_sphere_scene

    return create_single_sphere_scene()


@pytest.fixture
def demo_scene():
    """The demo scene with the giant floor sphere."""
    from whitted.scene.presets import create_demo_scene

    return create_demo_scene()


@pytest.fixture
def small_scene():
    """Three small spheres lit by every light type, no floor.

    Used where float32 kernel output is compared against the float64
    tracer; the demo scene's 5000-radius floor makes that comparison
    needlessly sensitive to precision.
    """
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

    return Scene(
        specs=Specs(background_color=Color(0.1, 0.1, 0.2)),
        lights=[
            AmbientLight(intensity=0.2),
            PointLight(intensity=0.5, position=Vector3(2.0, 2.0, 0.0)),
            DirectionalLight(intensity=0.3, direction=Vector3(-1.0, 3.0, -2.0)),
        ],
        spheres=[
            Sphere(Vector3(0.0, 0.0, 4.0), 1.0, Color(0.9, 0.2, 0.2), specular=50.0, reflective=0.3),
            Sphere(Vector3(1.6, 0.3, 5.0), 0.8, Color(0.2, 0.8, 0.3), specular=10.0),
            Sphere(
                Vector3(-0.8, -0.3, 2.8),
                0.4,
                Color(0.7, 0.7, 1.0),
                specular=200.0,
                reflective=0.1,
                transparency=0.6,
            ),
        ],
    )
