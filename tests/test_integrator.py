"""Tests for the path tracing integrator.

This module tests the core path tracing functionality including:
- Render target setup and validation
- Sky gradient for escaping rays
- Diffuse bounce attenuation and the depth cap
- Frame kernel output layout

Note: Imports are done inside test methods to avoid Taichi initialization issues.
The conftest.py fixture initializes Taichi before tests run, so module-level
imports of modules containing ti.field() declarations would fail.
"""

import numpy as np
import pytest


class TestRenderTargetSetup:
    """Test render target initialization and management."""

    def test_setup_render_target_sets_dimensions(self):
        """Test that setup_render_target records the active size."""
        from src.pathtracer.core.integrator import get_image_dimensions, setup_render_target

        setup_render_target(64, 48)
        assert get_image_dimensions() == (64, 48)

    @pytest.mark.parametrize("width, height", [(0, 10), (10, 0), (-1, 10)])
    def test_rejects_non_positive_dimensions(self, width, height):
        """Test that empty or negative sizes raise ValueError."""
        from src.pathtracer.core.integrator import setup_render_target

        with pytest.raises(ValueError, match="must be positive"):
            setup_render_target(width, height)

    def test_rejects_oversized_dimensions(self):
        """Test that sizes beyond the preallocated buffer raise ValueError."""
        from src.pathtracer.core.config import MAX_IMAGE_WIDTH
        from src.pathtracer.core.integrator import setup_render_target

        with pytest.raises(ValueError, match="exceed maximum"):
            setup_render_target(MAX_IMAGE_WIDTH + 1, 10)

    def test_image_layout(self, default_viewport):
        """Test that get_image_numpy returns (height, width, 3) float32."""
        from src.pathtracer.core.integrator import (
            get_image_numpy,
            render_image,
            seed_streams,
            setup_render_target,
        )

        setup_render_target(8, 4)
        seed_streams(np.random.default_rng(0))
        render_image(samples=1)

        image = get_image_numpy()
        assert image.shape == (4, 8, 3)
        assert image.dtype == np.float32
        assert np.all(np.isfinite(image))

    def test_seed_streams_draws_active_region_only(self):
        """Test that seeding consumes width * height states from the generator."""
        from src.pathtracer.core.integrator import (
            _stream_states,
            seed_streams,
            setup_render_target,
        )
        from src.pathtracer.core.sampling import make_stream_states

        setup_render_target(4, 2)
        rng = np.random.default_rng(5)
        seed_streams(rng)

        reference = np.random.default_rng(5)
        expected = make_stream_states(reference, (4, 2))

        assert np.array_equal(_stream_states.to_numpy()[:4, :2], expected)
        # Both generators advanced by the same number of draws
        assert rng.integers(0, 2**31) == reference.integers(0, 2**31)


class TestSky:
    """Test the background gradient seen by escaping rays."""

    def test_straight_up_is_light_blue(self):
        """Test that an upward ray in an empty scene sees (0.5, 0.7, 1.0)."""
        from src.pathtracer.core.integrator import trace_ray

        color = trace_ray((0.0, 0.0, 0.0), (0.0, 1.0, 0.0))
        assert color == pytest.approx((0.5, 0.7, 1.0), abs=1e-6)

    def test_straight_down_is_white(self):
        """Test that a downward ray in an empty scene sees white."""
        from src.pathtracer.core.integrator import trace_ray

        color = trace_ray((0.0, 0.0, 0.0), (0.0, -1.0, 0.0))
        assert color == pytest.approx((1.0, 1.0, 1.0), abs=1e-6)

    def test_horizontal_is_midpoint(self):
        """Test that a horizontal ray sees the midpoint of the gradient."""
        from src.pathtracer.core.integrator import trace_ray

        color = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -3.0))
        assert color == pytest.approx((0.75, 0.85, 1.0), abs=1e-6)


class TestDiffuseBounces:
    """Test radiance along rays that hit geometry."""

    def test_depth_cap_gives_black(self):
        """Test that a path still hitting geometry at max_depth is black."""
        from src.pathtracer.core.integrator import trace_ray
        from src.pathtracer.scene.default_scene import create_default_scene

        create_default_scene().upload()

        color = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), max_depth=1)
        assert color == (0.0, 0.0, 0.0)

    @pytest.mark.parametrize("seed", [1, 2, 3, 42, 1234])
    def test_single_bounce_halves_radiance(self, seed):
        """Test that any hit keeps at most half of the sky radiance."""
        from src.pathtracer.core.integrator import trace_ray
        from src.pathtracer.scene.default_scene import create_default_scene

        create_default_scene().upload()

        color = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), seed=seed)
        for channel in color:
            assert 0.0 <= channel <= 0.5 + 1e-6

    def test_blue_channel_is_attenuation(self):
        """Test that each bounce halves the radiance exactly.

        The sky is always fully blue, so the blue channel equals the
        accumulated attenuation, which is a power of two.
        """
        from src.pathtracer.core.integrator import trace_ray
        from src.pathtracer.scene.hittable_list import HittableList, SphereSpec

        HittableList([SphereSpec(center=(0.0, 0.0, -1.0), radius=0.5)]).upload()

        r, g, b = trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), seed=7)

        assert b == 0.0 or any(b == pytest.approx(0.5**k, rel=1e-5) for k in range(1, 51))
        # Red and green never drop below their top-of-sky values
        assert r >= 0.5 * b - 1e-6
        assert g >= 0.7 * b - 1e-6

    def test_same_seed_same_radiance(self):
        """Test that the probe is deterministic for a fixed seed."""
        from src.pathtracer.core.integrator import trace_ray
        from src.pathtracer.scene.default_scene import create_default_scene

        create_default_scene().upload()

        a = trace_ray((0.0, 0.0, 0.0), (0.1, 0.3, -1.0), seed=99)
        b = trace_ray((0.0, 0.0, 0.0), (0.1, 0.3, -1.0), seed=99)
        assert a == b

    def test_zero_seed_rejected(self):
        """Test that a zero stream state is refused."""
        from src.pathtracer.core.integrator import trace_ray

        with pytest.raises(ValueError, match="non-zero"):
            trace_ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), seed=0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
