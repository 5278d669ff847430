"""Taichi field-backed surface.

FieldSurface stores its colors in a ``ti.Vector.field(3, ti.f32)`` of shape
(width, height), indexed ``[x, y]`` like the integrator's frame buffers. The
Taichi integrator renders into it directly from a kernel; Python-side
get_value / set_value work too, but go through Taichi's Python-scope field
access and are slow for large surfaces.

Taichi must be initialized (``ti.init``) before a FieldSurface is created.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import numpy.typing as npt
import taichi as ti

from whitted.core.color import BLACK, Color
from whitted.surface.base import Surface


class FieldSurface(Surface):
    """Surface backed by a Taichi vector field.

    Values are stored as float32; they are not clamped.
    """

    def __init__(self, width: int, height: int, fill: Color = BLACK) -> None:
        super().__init__(width, height)
        self._field = ti.Vector.field(3, dtype=ti.f32, shape=(self.width, self.height))
        self.fill(fill)

    @property
    def field(self) -> Any:
        """The backing Taichi field, shape (width, height), indexed [x, y]."""
        return self._field

    def get_value(self, x: int, y: int) -> Color:
        self.check_bounds(x, y)
        v = self._field[x, y]
        return Color(float(v[0]), float(v[1]), float(v[2]))

    def set_value(self, x: int, y: int, color: Color) -> None:
        self.check_bounds(x, y)
        self._field[x, y] = [color.r, color.g, color.b]

    def to_numpy(self) -> npt.NDArray[np.float32]:
        # Field layout is (width, height, 3); images are (height, width, 3)
        return np.ascontiguousarray(
            np.transpose(self._field.to_numpy(), (1, 0, 2)).astype(np.float32)
        )

    def from_numpy(self, image: npt.NDArray[np.floating[Any]]) -> None:
        """Load a (height, width, 3) image into the field.

        Raises:
            ValueError: If the image shape does not match the surface.
        """
        if image.shape != (self.height, self.width, 3):
            raise ValueError(
                f"Image shape {image.shape} does not match surface "
                f"({self.height}, {self.width}, 3)"
            )
        self._field.from_numpy(np.ascontiguousarray(np.transpose(image, (1, 0, 2)), dtype=np.float32))

    def fill(self, color: Color) -> None:
        image = np.empty((self.height, self.width, 3), dtype=np.float32)
        image[:, :] = color.as_tuple()
        self.from_numpy(image)
