"""Surface module: the 2D color grids renderers write into.

Components:
    base: Surface abstract base class with bounds checking and row copies
    arrays: NumPy-backed ArraySurface (float64) and U8Surface (8-bit RGBA)
    field: Taichi field-backed FieldSurface for the GPU integrator

FieldSurface is NOT imported here because it needs an initialized Taichi
runtime. Import it from whitted.surface.field when needed.
"""

from .arrays import ArraySurface, U8Surface
from .base import Surface

__all__ = [
    "Surface",
    "ArraySurface",
    "U8Surface",
]
