"""Image export utilities for rendered surfaces.

This module converts surfaces into 8-bit images and saves them to disk.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from whitted.preview.export import save_png
    >>> from whitted.surface import ArraySurface
    >>>
    >>> surface = ArraySurface(320, 240)
    >>> render(scene, surface)
    >>> save_png(surface, "output.png")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from whitted.surface.base import Surface


def apply_gamma(
    image: npt.NDArray[np.float32],
    gamma: float = 1.0,
) -> npt.NDArray[np.float32]:
    """Clamp an image to [0, 1] and apply gamma encoding.

    Tracer output is already display-referred, so the default gamma of 1.0
    only clamps.

    Args:
        image: Image array of shape (H, W, 3).
        gamma: Gamma value. Must be positive.

    Returns:
        The encoded image as float32.

    Raises:
        ValueError: If gamma is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"gamma must be positive, got {gamma}")

    # Clamp before gamma to avoid NaN from negative values
    result = np.clip(image, 0.0, 1.0)
    if gamma != 1.0:
        result = np.power(result, 1.0 / gamma)
    return result.astype(np.float32)


def image_to_uint8(
    image: npt.NDArray[np.float32],
    *,
    gamma: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a float image in [0, 1] to uint8 with rounding."""
    encoded = apply_gamma(image, gamma)
    return np.rint(encoded * 255.0).astype(np.uint8)


def surface_to_uint8(
    surface: Surface,
    *,
    gamma: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a surface to an 8-bit image of shape (height, width, 3)."""
    return image_to_uint8(surface.to_numpy(), gamma=gamma)


def save_png(
    surface: Surface,
    filepath: str | Path,
    *,
    gamma: float = 1.0,
) -> None:
    """Save a surface as an 8-bit RGB PNG file.

    Args:
        surface: The rendered surface.
        filepath: Output path (should end in .png).
        gamma: Gamma encoding applied before quantization.
    """
    image_uint8 = surface_to_uint8(surface, gamma=gamma)
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath)


def compute_rmse(
    image_a: npt.NDArray[np.floating[npt.NBitBase]],
    image_b: npt.NDArray[np.floating[npt.NBitBase]],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
