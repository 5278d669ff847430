"""Preview module for output of rendered surfaces.

Components:
    export: Gamma encoding, 8-bit conversion, PNG export and RMSE comparison

Example:
    >>> from whitted.preview import save_png
    >>> save_png(surface, "output.png")
"""

from whitted.preview.export import (
    apply_gamma,
    compute_rmse,
    image_to_uint8,
    save_png,
    surface_to_uint8,
)

__all__ = [
    "apply_gamma",
    "image_to_uint8",
    "surface_to_uint8",
    "save_png",
    "compute_rmse",
]
