"""The 2D color surface the renderer writes into.

A Surface is a width x height grid of colors addressed by 0-indexed
``(x, y)`` with y growing downward. Renderers only need ``width``,
``height`` and ``set_value``; ``get_value`` is used when merging band
sub-surfaces into a full frame.

An out-of-range coordinate is a bug in the caller's loop bounds, so it
raises IndexError instead of being clipped.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
import numpy.typing as npt

from whitted.core.color import Color


class Surface(ABC):
    """Abstract base class for color surfaces."""

    def __init__(self, width: int, height: int) -> None:
        """Record and validate the surface dimensions.

        Raises:
            ValueError: If either dimension is not a positive integer.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface dimensions must be positive, got {width}x{height}")
        self._width = int(width)
        self._height = int(height)

    @property
    def width(self) -> int:
        """Number of columns."""
        return self._width

    @property
    def height(self) -> int:
        """Number of rows."""
        return self._height

    def check_bounds(self, x: int, y: int) -> None:
        """Raise IndexError unless ``(x, y)`` lies on the surface."""
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(
                f"Coordinate ({x}, {y}) outside {self._width}x{self._height} surface"
            )

    @abstractmethod
    def get_value(self, x: int, y: int) -> Color:
        """Return the color stored at ``(x, y)``."""

    @abstractmethod
    def set_value(self, x: int, y: int, color: Color) -> None:
        """Store ``color`` at ``(x, y)``."""

    def to_numpy(self) -> npt.NDArray[np.float32]:
        """Return the surface as a float32 array of shape (height, width, 3).

        Subclasses backed by arrays override this with a vectorized copy.
        """
        image = np.zeros((self._height, self._width, 3), dtype=np.float32)
        for y in range(self._height):
            for x in range(self._width):
                image[y, x] = self.get_value(x, y).as_tuple()
        return image

    def fill(self, color: Color) -> None:
        """Set every cell to ``color``."""
        for y in range(self._height):
            for x in range(self._width):
                self.set_value(x, y, color)

    def copy_rows_from(self, source: Surface, row_start: int) -> None:
        """Copy every row of ``source`` into this surface starting at ``row_start``.

        Raises:
            ValueError: If the widths differ.
            IndexError: If the source rows do not fit.
        """
        if source.width != self._width:
            raise ValueError(f"Width mismatch: {source.width} vs {self._width}")
        self.check_bounds(0, row_start + source.height - 1)
        for y in range(source.height):
            for x in range(source.width):
                self.set_value(x, row_start + y, source.get_value(x, y))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(width={self._width}, height={self._height})"
