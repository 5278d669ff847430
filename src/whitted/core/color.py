"""Color value type with clamped arithmetic.

Colors carry three float channels conceptually in [0, 1]. Channel values
outside that range are accepted at construction time and only clamped when
colors are combined (add, scale, lerp), so scaling a base color by an
un-clamped lighting intensity saturates instead of overflowing.

An 8-bit encoding is available through from_u8() / to_u8() for surfaces
that store bytes.

Example:
    >>> from whitted.core.color import Color
    >>> red = Color(1.0, 0.0, 0.0)
    >>> red * 0.5
    Color(r=0.5, g=0.0, b=0.0)
    >>> red * 3.0
    Color(r=1.0, g=0.0, b=0.0)
"""

from __future__ import annotations

from dataclasses import dataclass


def _clamp(value: float) -> float:
    if value < 0.0:
        return 0.0
    if value > 1.0:
        return 1.0
    return value


@dataclass(frozen=True, slots=True)
class Color:
    """An RGB color with float channels.

    Attributes:
        r: Red channel, nominally in [0, 1].
        g: Green channel, nominally in [0, 1].
        b: Blue channel, nominally in [0, 1].
    """

    r: float
    g: float
    b: float

    @classmethod
    def from_u8(cls, r: int, g: int, b: int) -> Color:
        """Build a color from 8-bit channel values (0-255)."""
        return cls(r / 255.0, g / 255.0, b / 255.0)

    @classmethod
    def from_hex(cls, code: str) -> Color:
        """Build a color from a ``#rrggbb`` string.

        Raises:
            ValueError: If the string is not six hex digits (with optional #).
        """
        digits = code.lstrip("#")
        if len(digits) != 6:
            raise ValueError(f"Expected a #rrggbb color, got {code!r}")
        value = int(digits, 16)
        return cls.from_u8((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)

    @classmethod
    def of(cls, value: Color | tuple[float, float, float]) -> Color:
        """Coerce a Color or an (r, g, b) float tuple into a Color."""
        if isinstance(value, Color):
            return value
        r, g, b = value
        return cls(float(r), float(g), float(b))

    def to_u8(self) -> tuple[int, int, int]:
        """Encode the clamped channels as 8-bit integers."""
        c = self.clamped()
        return (round(c.r * 255.0), round(c.g * 255.0), round(c.b * 255.0))

    def as_tuple(self) -> tuple[float, float, float]:
        """Return the channels as a plain (r, g, b) tuple."""
        return (self.r, self.g, self.b)

    def clamped(self) -> Color:
        """Return this color with every channel clamped into [0, 1]."""
        return Color(_clamp(self.r), _clamp(self.g), _clamp(self.b))

    def add(self, other: Color) -> Color:
        """Add two colors channel-wise, clamping the result."""
        return Color(
            _clamp(self.r + other.r),
            _clamp(self.g + other.g),
            _clamp(self.b + other.b),
        )

    def scale(self, factor: float) -> Color:
        """Multiply every channel by a scalar, clamping the result."""
        return Color(
            _clamp(self.r * factor),
            _clamp(self.g * factor),
            _clamp(self.b * factor),
        )

    def lerp(self, other: Color, t: float) -> Color:
        """Blend toward ``other`` by ``t``: ``other * t + self * (1 - t)``.

        The result is clamped.
        """
        s = 1.0 - t
        return Color(
            _clamp(self.r * s + other.r * t),
            _clamp(self.g * s + other.g * t),
            _clamp(self.b * s + other.b * t),
        )

    def __add__(self, other: Color) -> Color:
        return self.add(other)

    def __mul__(self, factor: float) -> Color:
        return self.scale(factor)

    def __rmul__(self, factor: float) -> Color:
        return self.scale(factor)


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
