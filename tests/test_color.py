"""Unit tests for the Color value type.

Tests cover:
- Clamped add, scale and lerp
- 8-bit and hex encodings
"""

import pytest


class TestColorArithmetic:
    """Tests for clamped color arithmetic."""

    def test_scale_within_range(self):
        from whitted.core.color import Color

        assert Color(1.0, 0.5, 0.0).scale(0.5) == Color(0.5, 0.25, 0.0)

    def test_scale_saturates(self):
        """Intensities above 1 saturate instead of overflowing."""
        from whitted.core.color import Color

        assert Color(1.0, 0.6, 0.25) * 2.0 == Color(1.0, 1.0, 0.5)
        assert 3.0 * Color(0.5, 0.5, 0.5) == Color(1.0, 1.0, 1.0)

    def test_negative_scale_clamps_to_black(self):
        from whitted.core.color import BLACK, Color

        assert Color(0.3, 0.3, 0.3).scale(-1.0) == BLACK

    def test_add_clamps(self):
        from whitted.core.color import Color

        assert Color(0.75, 0.5, 0.0) + Color(0.5, 0.25, 0.0) == Color(1.0, 0.75, 0.0)

    def test_lerp_endpoints(self):
        from whitted.core.color import Color

        a = Color(1.0, 0.0, 0.0)
        b = Color(0.0, 1.0, 0.0)
        assert a.lerp(b, 0.0) == a
        assert a.lerp(b, 1.0) == b

    def test_lerp_midpoint(self):
        """lerp(other, t) is other * t + self * (1 - t)."""
        from whitted.core.color import Color

        a = Color(1.0, 0.0, 0.0)
        b = Color(0.0, 1.0, 0.0)
        assert a.lerp(b, 0.25) == Color(0.75, 0.25, 0.0)

    def test_construction_does_not_clamp(self):
        from whitted.core.color import Color

        c = Color(2.0, -1.0, 0.5)
        assert c.r == 2.0
        assert c.clamped() == Color(1.0, 0.0, 0.5)


class TestColorEncoding:
    """Tests for 8-bit and hex conversions."""

    def test_to_u8_rounds(self):
        from whitted.core.color import Color

        assert Color(1.0, 0.0, 0.5).to_u8() == (255, 0, 128)

    def test_to_u8_clamps(self):
        from whitted.core.color import Color

        assert Color(1.5, -0.2, 0.0).to_u8() == (255, 0, 0)

    def test_from_u8(self):
        from whitted.core.color import Color

        c = Color.from_u8(255, 0, 51)
        assert c == Color(1.0, 0.0, 0.2)

    @pytest.mark.parametrize("code", ["#ff8000", "ff8000"])
    def test_from_hex(self, code):
        from whitted.core.color import Color

        assert Color.from_hex(code).to_u8() == (255, 128, 0)

    @pytest.mark.parametrize("code", ["#fff", "", "#ff80001"])
    def test_from_hex_rejects_bad_length(self, code):
        from whitted.core.color import Color

        with pytest.raises(ValueError):
            Color.from_hex(code)
