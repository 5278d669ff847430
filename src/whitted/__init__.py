"""Recursive Whitted ray tracer for sphere scenes.

This package renders scenes made of spheres and ambient, point and
directional lights into a 2D grid of colors, with support for:
- Diffuse + specular local shading with (transparency-aware) hard shadows
- Recursive reflection and transparency with a bounded depth
- Row-band parallel rendering over a read-locked shared scene
- A Taichi kernel back end for the same algorithm

Subpackages:
    core: Vectors, colors, intersection, shading, tracing and rendering
    scene: Scene data model, shared scene locking and preset scenes
    surface: Output surfaces (NumPy arrays, 8-bit RGBA, Taichi fields)
    preview: Image conversion and PNG export
"""

__version__ = "0.1.0"
