"""Tests for the surfaces renderers write into."""

import numpy as np
import pytest


class TestArraySurface:
    """Tests for the float64 NumPy surface."""

    def test_dimensions_and_fill(self):
        from whitted.core.color import Color
        from whitted.surface import ArraySurface

        surface = ArraySurface(3, 2, fill=Color(0.1, 0.2, 0.3))
        assert (surface.width, surface.height) == (3, 2)
        assert surface.data.shape == (2, 3, 3)
        assert surface.get_value(2, 1) == Color(0.1, 0.2, 0.3)

    def test_set_and_get(self):
        from whitted.core.color import Color
        from whitted.surface import ArraySurface

        surface = ArraySurface(4, 3)
        surface.set_value(3, 0, Color(0.25, 0.5, 0.75))
        assert surface.get_value(3, 0) == Color(0.25, 0.5, 0.75)
        # data is indexed [y, x]
        assert tuple(surface.data[0, 3]) == (0.25, 0.5, 0.75)

    def test_values_are_not_clamped(self):
        from whitted.core.color import Color
        from whitted.surface import ArraySurface

        surface = ArraySurface(1, 1)
        surface.set_value(0, 0, Color(2.0, -1.0, 0.5))
        assert surface.get_value(0, 0) == Color(2.0, -1.0, 0.5)

    @pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (4, 0), (0, 3)])
    def test_out_of_bounds(self, x, y):
        from whitted.core.color import BLACK
        from whitted.surface import ArraySurface

        surface = ArraySurface(4, 3)
        with pytest.raises(IndexError):
            surface.set_value(x, y, BLACK)
        with pytest.raises(IndexError):
            surface.get_value(x, y)

    @pytest.mark.parametrize("width, height", [(0, 1), (1, 0), (-2, 3)])
    def test_invalid_dimensions(self, width, height):
        from whitted.surface import ArraySurface

        with pytest.raises(ValueError):
            ArraySurface(width, height)

    def test_copy_rows_from(self):
        from whitted.core.color import Color
        from whitted.surface import ArraySurface

        target = ArraySurface(2, 5)
        band = ArraySurface(2, 2, fill=Color(1.0, 0.0, 0.0))
        target.copy_rows_from(band, 2)
        assert np.all(target.data[2:4] == (1.0, 0.0, 0.0))
        assert np.all(target.data[:2] == 0.0)
        assert np.all(target.data[4:] == 0.0)

    def test_copy_rows_rejects_bad_fit(self):
        from whitted.surface import ArraySurface

        target = ArraySurface(2, 5)
        with pytest.raises(ValueError):
            target.copy_rows_from(ArraySurface(3, 2), 0)
        with pytest.raises(IndexError):
            target.copy_rows_from(ArraySurface(2, 2), 4)

    def test_to_numpy(self):
        from whitted.core.color import Color
        from whitted.surface import ArraySurface

        surface = ArraySurface(2, 1)
        surface.set_value(1, 0, Color(0.5, 0.25, 1.0))
        image = surface.to_numpy()
        assert image.dtype == np.float32
        assert image.shape == (1, 2, 3)
        np.testing.assert_allclose(image[0, 1], [0.5, 0.25, 1.0])


class TestU8Surface:
    """Tests for the 8-bit RGBA surface."""

    def test_quantizes_and_clamps(self):
        from whitted.core.color import Color
        from whitted.surface import U8Surface

        surface = U8Surface(2, 1)
        surface.set_value(0, 0, Color(1.0, 0.5, 0.0))
        surface.set_value(1, 0, Color(1.7, -0.3, 0.2))
        assert tuple(surface.data[0, 0]) == (255, 128, 0, 255)
        assert tuple(surface.data[0, 1]) == (255, 0, 51, 255)

    def test_get_value_reads_back_bytes(self):
        from whitted.core.color import Color
        from whitted.surface import U8Surface

        surface = U8Surface(1, 1)
        surface.set_value(0, 0, Color(1.0, 0.2, 0.0))
        assert surface.get_value(0, 0) == Color(1.0, 0.2, 0.0)

    def test_to_bytes_layout(self):
        from whitted.core.color import Color
        from whitted.surface import U8Surface

        surface = U8Surface(2, 2, fill=Color(0.0, 0.0, 0.0))
        surface.set_value(1, 0, Color(1.0, 1.0, 1.0))
        raw = surface.to_bytes()
        assert len(raw) == 2 * 2 * 4
        assert raw[:8] == bytes([0, 0, 0, 255, 255, 255, 255, 255])

    def test_copy_rows_from_float_surface(self):
        from whitted.core.color import Color
        from whitted.surface import ArraySurface, U8Surface

        target = U8Surface(2, 3)
        target.copy_rows_from(ArraySurface(2, 1, fill=Color(0.0, 1.0, 0.0)), 1)
        assert tuple(target.data[1, 0]) == (0, 255, 0, 255)
        assert tuple(target.data[0, 0]) == (0, 0, 0, 255)

    def test_out_of_bounds(self):
        from whitted.core.color import BLACK
        from whitted.surface import U8Surface

        with pytest.raises(IndexError):
            U8Surface(2, 2).set_value(2, 0, BLACK)


class TestFieldSurface:
    """Tests for the Taichi field-backed surface."""

    def test_set_and_get(self):
        from whitted.core.color import Color
        from whitted.surface.field import FieldSurface

        surface = FieldSurface(3, 2)
        surface.set_value(2, 1, Color(0.25, 0.5, 1.0))
        assert surface.get_value(2, 1) == Color(0.25, 0.5, 1.0)

    def test_field_indexed_x_y(self):
        from whitted.surface.field import FieldSurface

        surface = FieldSurface(3, 2)
        assert surface.field.shape == (3, 2)

    def test_to_numpy_is_row_major_image(self):
        from whitted.core.color import Color
        from whitted.surface.field import FieldSurface

        surface = FieldSurface(3, 2)
        surface.set_value(2, 0, Color(1.0, 0.0, 0.0))
        image = surface.to_numpy()
        assert image.shape == (2, 3, 3)
        np.testing.assert_array_equal(image[0, 2], [1.0, 0.0, 0.0])
        assert image[1, 2].sum() == 0.0

    def test_from_numpy(self):
        from whitted.surface.field import FieldSurface

        surface = FieldSurface(3, 2)
        image = np.random.default_rng(0).random((2, 3, 3)).astype(np.float32)
        surface.from_numpy(image)
        np.testing.assert_array_equal(surface.to_numpy(), image)

    def test_from_numpy_shape_mismatch(self):
        from whitted.surface.field import FieldSurface

        with pytest.raises(ValueError):
            FieldSurface(3, 2).from_numpy(np.zeros((3, 2, 3), dtype=np.float32))

    def test_fill(self):
        from whitted.core.color import Color
        from whitted.surface.field import FieldSurface

        surface = FieldSurface(2, 2, fill=Color(0.5, 0.5, 0.5))
        np.testing.assert_array_equal(surface.to_numpy(), np.full((2, 2, 3), 0.5, dtype=np.float32))

    def test_out_of_bounds(self):
        from whitted.core.color import BLACK
        from whitted.surface.field import FieldSurface

        with pytest.raises(IndexError):
            FieldSurface(2, 2).get_value(0, 2)
