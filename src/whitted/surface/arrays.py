"""NumPy-backed surfaces.

ArraySurface keeps full float64 precision and is what the parallel
dispatcher hands each worker as its private band buffer. U8Surface stores
8-bit RGBA bytes, the layout expected by most pixel-buffer consumers.
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from whitted.core.color import BLACK, Color
from whitted.surface.base import Surface


class ArraySurface(Surface):
    """Surface backed by a float64 array of shape (height, width, 3).

    Colors are stored exactly as given (no clamping, no quantization).

    Attributes:
        data: The backing array, indexed ``data[y, x, channel]``.
    """

    def __init__(self, width: int, height: int, fill: Color = BLACK) -> None:
        super().__init__(width, height)
        self.data = np.empty((self.height, self.width, 3), dtype=np.float64)
        self.data[:, :] = fill.as_tuple()

    def get_value(self, x: int, y: int) -> Color:
        self.check_bounds(x, y)
        r, g, b = self.data[y, x]
        return Color(float(r), float(g), float(b))

    def set_value(self, x: int, y: int, color: Color) -> None:
        self.check_bounds(x, y)
        self.data[y, x] = (color.r, color.g, color.b)

    def to_numpy(self) -> npt.NDArray[np.float32]:
        return self.data.astype(np.float32)

    def fill(self, color: Color) -> None:
        self.data[:, :] = color.as_tuple()

    def copy_rows_from(self, source: Surface, row_start: int) -> None:
        if isinstance(source, ArraySurface):
            if source.width != self.width:
                raise ValueError(f"Width mismatch: {source.width} vs {self.width}")
            self.check_bounds(0, row_start + source.height - 1)
            self.data[row_start : row_start + source.height] = source.data
            return
        super().copy_rows_from(source, row_start)


class U8Surface(Surface):
    """Surface backed by 8-bit RGBA bytes.

    Colors are clamped and quantized to 8 bits per channel when stored; the
    alpha byte is always 255.

    Attributes:
        data: The backing uint8 array of shape (height, width, 4).
    """

    def __init__(self, width: int, height: int, fill: Color = BLACK) -> None:
        super().__init__(width, height)
        self.data = np.zeros((self.height, self.width, 4), dtype=np.uint8)
        self.fill(fill)

    def get_value(self, x: int, y: int) -> Color:
        self.check_bounds(x, y)
        r, g, b, _ = self.data[y, x]
        return Color.from_u8(int(r), int(g), int(b))

    def set_value(self, x: int, y: int, color: Color) -> None:
        self.check_bounds(x, y)
        r, g, b = color.to_u8()
        self.data[y, x] = (r, g, b, 255)

    def to_numpy(self) -> npt.NDArray[np.float32]:
        return self.data[:, :, :3].astype(np.float32) / 255.0

    def fill(self, color: Color) -> None:
        r, g, b = color.to_u8()
        self.data[:, :] = (r, g, b, 255)

    def to_bytes(self) -> bytes:
        """Return the raw RGBA buffer, row-major from the top-left cell."""
        return self.data.tobytes()
