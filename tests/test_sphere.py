"""Unit tests for the sphere primitive.

Tests cover:
- Direct hits, misses and tangent rays
- Rays starting inside the sphere (outward normal)
- Exclusive t_min / t_max bounds
- Non-unit ray directions
"""

import pytest
import taichi as ti


def _hit(origin, direction, center, radius, t_min=0.0, t_max=1e30):
    """Run hit_sphere once and return (hit, t, point, normal) on the host."""
    from src.pathtracer.core.ray import Ray, vec3
    from src.pathtracer.geometry.sphere import Sphere, hit_sphere

    hit = ti.field(dtype=ti.i32, shape=())
    t = ti.field(dtype=ti.f32, shape=())
    point = ti.field(dtype=ti.math.vec3, shape=())
    normal = ti.field(dtype=ti.math.vec3, shape=())

    @ti.kernel
    def test_kernel(
        ox: ti.f32, oy: ti.f32, oz: ti.f32,
        dx: ti.f32, dy: ti.f32, dz: ti.f32,
        cx: ti.f32, cy: ti.f32, cz: ti.f32,
        r: ti.f32, lo: ti.f32, hi: ti.f32,
    ):
        ray = Ray(origin=vec3(ox, oy, oz), direction=vec3(dx, dy, dz))
        sphere = Sphere(center=vec3(cx, cy, cz), radius=r)
        rec = hit_sphere(ray, sphere, lo, hi)
        hit[None] = rec.hit
        t[None] = rec.t
        point[None] = rec.point
        normal[None] = rec.normal

    test_kernel(*origin, *direction, *center, radius, t_min, t_max)
    p = point[None]
    n = normal[None]
    return hit[None], t[None], (p[0], p[1], p[2]), (n[0], n[1], n[2])


class TestSphereIntersection:
    """Tests for hit_sphere."""

    def test_direct_hit(self):
        """Test a ray aimed at the center hits the near surface."""
        hit, t, point, normal = _hit((0.0, 0.0, 5.0), (0.0, 0.0, -1.0), (0.0, 0.0, 0.0), 1.0)

        assert hit == 1
        assert abs(t - 4.0) < 1e-5
        assert point == pytest.approx((0.0, 0.0, 1.0), abs=1e-5)
        assert normal == pytest.approx((0.0, 0.0, 1.0), abs=1e-5)

    def test_perpendicular_miss(self):
        """Test a ray passing far from the sphere misses."""
        hit, _, _, _ = _hit((5.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, 0.0), 1.0)
        assert hit == 0

    def test_tangent_ray_misses(self):
        """Test that a grazing ray (zero discriminant) is a miss."""
        hit, _, _, _ = _hit((1.0, 0.0, -5.0), (0.0, 0.0, 1.0), (0.0, 0.0, 0.0), 1.0)
        assert hit == 0

    def test_ray_from_inside_keeps_outward_normal(self):
        """Test that the normal is not flipped for rays starting inside."""
        hit, t, point, normal = _hit((0.0, 0.0, 0.0), (0.0, 0.0, 1.0), (0.0, 0.0, 0.0), 1.0)

        assert hit == 1
        assert abs(t - 1.0) < 1e-5
        assert point == pytest.approx((0.0, 0.0, 1.0), abs=1e-5)
        # Points outward, same direction as the ray
        assert normal == pytest.approx((0.0, 0.0, 1.0), abs=1e-5)

    def test_sphere_behind_ray_misses(self):
        """Test that both roots behind the origin give no hit."""
        hit, _, _, _ = _hit((0.0, 0.0, 5.0), (0.0, 0.0, 1.0), (0.0, 0.0, 0.0), 1.0)
        assert hit == 0

    def test_non_unit_direction(self):
        """Test that t is measured in units of the direction length."""
        hit, t, point, normal = _hit((0.0, 0.0, 5.0), (0.0, 0.0, -2.0), (0.0, 0.0, 0.0), 1.0)

        assert hit == 1
        assert abs(t - 2.0) < 1e-5
        assert point == pytest.approx((0.0, 0.0, 1.0), abs=1e-5)
        assert normal == pytest.approx((0.0, 0.0, 1.0), abs=1e-5)

    def test_normal_has_unit_length(self):
        """Test that the normal is unit length for an off-center hit."""
        hit, _, _, normal = _hit((0.3, 0.4, 5.0), (0.0, 0.0, -1.0), (0.0, 0.0, 0.0), 2.0)

        assert hit == 1
        assert sum(c * c for c in normal) == pytest.approx(1.0, abs=1e-5)


class TestIntervalBounds:
    """Tests for the open (t_min, t_max) interval."""

    def test_t_min_excludes_near_root(self):
        """Test that a near root equal to t_min falls through to the far root."""
        hit, t, point, normal = _hit(
            (0.0, 0.0, 5.0), (0.0, 0.0, -1.0), (0.0, 0.0, 0.0), 1.0, t_min=4.0
        )

        assert hit == 1
        assert abs(t - 6.0) < 1e-5
        assert point == pytest.approx((0.0, 0.0, -1.0), abs=1e-5)
        assert normal == pytest.approx((0.0, 0.0, -1.0), abs=1e-5)

    def test_t_max_is_exclusive(self):
        """Test that a hit exactly at t_max is rejected."""
        hit, _, _, _ = _hit(
            (0.0, 0.0, 5.0), (0.0, 0.0, -1.0), (0.0, 0.0, 0.0), 1.0, t_max=4.0
        )
        assert hit == 0

    def test_both_roots_outside_interval(self):
        """Test a miss when neither root lies inside the interval."""
        hit, _, _, _ = _hit(
            (0.0, 0.0, 5.0), (0.0, 0.0, -1.0), (0.0, 0.0, 0.0), 1.0, t_min=7.0
        )
        assert hit == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
