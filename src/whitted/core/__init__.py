"""Core rendering module.

This module contains the building blocks of the Whitted ray tracer:

Components:
    vector: Vector3 value type and vector utilities
    color: Color value type with clamped arithmetic
    rotation: Quaternion camera orientation
    intersection: Ray-sphere roots and closest-hit search
    shading: Diffuse + specular lighting with shadow attenuation
    tracer: Recursive trace_ray with reflection and transparency
    renderer: Viewport projection, full-frame, band and parallel rendering
    integrator: Taichi kernel version of the same algorithm

Only the leaf value types are imported here. The modules that depend on
the scene model are imported directly to avoid circular imports:
    from whitted.core.renderer import render, render_parallel
    from whitted.core.integrator import render_kernel
"""

from .color import BLACK, WHITE, Color
from .rotation import Quaternion
from .vector import (
    ORIGIN,
    Vector3,
    cross,
    dot,
    length,
    length_squared,
    lerp,
    normalize,
    reflect,
)

__all__ = [
    "Vector3",
    "ORIGIN",
    "dot",
    "cross",
    "length",
    "length_squared",
    "normalize",
    "reflect",
    "lerp",
    "Color",
    "BLACK",
    "WHITE",
    "Quaternion",
]
