"""Unit tests for ray-sphere intersection and the closest-hit search.

Tests cover:
- Roots of a ray through the sphere center
- Tangent rays (one double root)
- Misses (sentinel pair)
- Inclusive window bounds, ties and the ignore index
"""

import math

import pytest


def make_sphere(x, y, z, radius=1.0):
    from whitted.core.color import Color
    from whitted.core.vector import Vector3
    from whitted.scene.model import Sphere

    return Sphere(Vector3(x, y, z), radius, Color(1.0, 1.0, 1.0))


class TestIntersectRaySphere:
    """Tests for the two-root quadratic solver."""

    def test_ray_through_center(self):
        """A ray through the center hits at distance d - r and d + r."""
        from whitted.core.intersection import intersect_ray_sphere
        from whitted.core.vector import Vector3

        t1, t2 = intersect_ray_sphere(
            Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 1.0), make_sphere(0.0, 0.0, 5.0, 2.0)
        )
        assert t1 == pytest.approx(3.0)
        assert t2 == pytest.approx(7.0)

    def test_roots_scale_with_direction_length(self):
        """t is measured in multiples of the (unnormalized) direction."""
        from whitted.core.intersection import intersect_ray_sphere
        from whitted.core.vector import Vector3

        t1, t2 = intersect_ray_sphere(
            Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 2.0), make_sphere(0.0, 0.0, 5.0, 1.0)
        )
        assert t1 == pytest.approx(2.0)
        assert t2 == pytest.approx(3.0)

    def test_tangent_ray_gives_equal_roots(self):
        from whitted.core.intersection import intersect_ray_sphere
        from whitted.core.vector import Vector3

        t1, t2 = intersect_ray_sphere(
            Vector3(1.0, 0.0, 0.0), Vector3(0.0, 0.0, 1.0), make_sphere(0.0, 0.0, 5.0, 1.0)
        )
        assert t1 == t2 == pytest.approx(5.0)

    def test_miss_returns_sentinel(self):
        from whitted.core.intersection import NO_INTERSECTION, intersect_ray_sphere
        from whitted.core.vector import Vector3

        roots = intersect_ray_sphere(
            Vector3(0.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0), make_sphere(0.0, 0.0, 5.0, 1.0)
        )
        assert roots == NO_INTERSECTION
        assert roots == (-math.inf, -math.inf)

    def test_origin_inside_sphere(self):
        """One root behind the origin, one in front."""
        from whitted.core.intersection import intersect_ray_sphere
        from whitted.core.vector import Vector3

        t1, t2 = intersect_ray_sphere(
            Vector3(0.0, 0.0, 0.0), Vector3(1.0, 0.0, 0.0), make_sphere(0.0, 0.0, 0.0, 2.0)
        )
        assert t1 == pytest.approx(-2.0)
        assert t2 == pytest.approx(2.0)


class TestClosestIntersection:
    """Tests for the linear closest-hit scan."""

    def test_picks_nearest_sphere(self):
        from whitted.core.intersection import closest_intersection
        from whitted.core.vector import Vector3

        spheres = [make_sphere(0.0, 0.0, 10.0), make_sphere(0.0, 0.0, 4.0)]
        hit = closest_intersection(
            Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 1.0), 1.0, math.inf, spheres
        )
        assert hit is not None
        assert hit.index == 1
        assert hit.t == pytest.approx(3.0)

    def test_no_spheres(self):
        from whitted.core.intersection import closest_intersection
        from whitted.core.vector import Vector3

        assert (
            closest_intersection(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 1.0), 1.0, math.inf, [])
            is None
        )

    def test_both_roots_outside_window(self):
        from whitted.core.intersection import closest_intersection
        from whitted.core.vector import Vector3

        spheres = [make_sphere(0.0, 0.0, 5.0)]
        hit = closest_intersection(
            Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 1.0), 1.0, 3.0, spheres
        )
        assert hit is None

    def test_far_root_used_when_near_root_below_t_min(self):
        """From inside a sphere the exit point is the closest valid hit."""
        from whitted.core.intersection import closest_intersection
        from whitted.core.vector import Vector3

        spheres = [make_sphere(0.0, 0.0, 0.0, 2.0)]
        hit = closest_intersection(
            Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 1.0), 0.001, math.inf, spheres
        )
        assert hit is not None
        assert hit.t == pytest.approx(2.0)

    def test_window_is_inclusive(self):
        from whitted.core.intersection import closest_intersection
        from whitted.core.vector import Vector3

        spheres = [make_sphere(0.0, 0.0, 5.0, 2.0)]
        origin = Vector3(0.0, 0.0, 0.0)
        direction = Vector3(0.0, 0.0, 1.0)

        at_min = closest_intersection(origin, direction, 3.0, 3.0, spheres)
        assert at_min is not None and at_min.t == 3.0
        at_max = closest_intersection(origin, direction, 4.0, 7.0, spheres)
        assert at_max is not None and at_max.t == 7.0

    def test_tie_goes_to_lower_index(self):
        from whitted.core.intersection import closest_intersection
        from whitted.core.vector import Vector3

        spheres = [make_sphere(0.0, 0.0, 5.0), make_sphere(0.0, 0.0, 5.0)]
        hit = closest_intersection(
            Vector3(0.0, 0.0, 0.0), Vector3(0.0, 0.0, 1.0), 1.0, math.inf, spheres
        )
        assert hit is not None
        assert hit.index == 0

    def test_ignore_skips_sphere(self):
        from whitted.core.intersection import closest_intersection
        from whitted.core.vector import Vector3

        spheres = [make_sphere(0.0, 0.0, 4.0), make_sphere(0.0, 0.0, 10.0)]
        origin = Vector3(0.0, 0.0, 0.0)
        direction = Vector3(0.0, 0.0, 1.0)

        hit = closest_intersection(origin, direction, 1.0, math.inf, spheres, ignore=0)
        assert hit is not None
        assert hit.index == 1
        assert hit.t == pytest.approx(9.0)

        assert closest_intersection(origin, direction, 1.0, math.inf, spheres[:1], ignore=0) is None
