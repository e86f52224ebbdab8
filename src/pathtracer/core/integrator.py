"""Diffuse path tracing integrator.

This module implements the radiance estimator and the frame kernel.

Light transport model:
    - A ray that hits a sphere scatters diffusely: a new ray leaves the hit
      point toward ``point + normal + s`` where ``s`` is uniform in the unit
      ball. Every bounce keeps half of the incoming radiance.
    - A ray that escapes sees a vertical sky gradient blending white
      (straight down) into light blue (straight up).

The estimator is written as a loop that carries the accumulated attenuation
instead of recursing, since Taichi functions cannot recurse. Because the
attenuation factor is a power of two, the loop reproduces the recursive
product exactly. A path that is still hitting geometry after ``max_depth``
intersections contributes black.

The frame kernel averages ``samples`` jittered rays per pixel, applies a
gamma-2 encoding (per-channel square root) and stores the result in a
preallocated color buffer. Quantization to bytes happens on the host, see
``src.pathtracer.output.raster``.

Example:
    >>> import numpy as np
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.pathtracer.core.integrator import (
    ...     render_image, seed_streams, setup_render_target
    ... )
    >>> setup_render_target(200, 100)
    >>> seed_streams(np.random.default_rng(0))
    >>> render_image(samples=100)
"""

import logging

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.pathtracer.camera.pinhole import get_ray_jittered
from src.pathtracer.core.config import DEFAULT_MAX_DEPTH, MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH
from src.pathtracer.core.ray import Ray
from src.pathtracer.core.sampling import make_stream_states, random_in_unit_sphere
from src.pathtracer.core.vec3 import lerp, sqrt_components, unit_vector, vec3
from src.pathtracer.scene.intersection import intersect_scene

logger = logging.getLogger(__name__)

# =============================================================================
# Rendering Constants
# =============================================================================

# Fraction of radiance kept at each diffuse bounce
BOUNCE_ATTENUATION = 0.5

# Upper bound for intersection queries (largest finite f32)
T_MAX = 3.4028234663852886e38

# Sky gradient end points
SKY_BOTTOM_COLOR = vec3(1.0, 1.0, 1.0)
SKY_TOP_COLOR = vec3(0.5, 0.7, 1.0)

# =============================================================================
# Render Target
# =============================================================================

# Active image dimensions
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Gamma-encoded average color per pixel, indexed [x, y]
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# One xorshift stream state per pixel, indexed [x, y]
_stream_states = ti.field(dtype=ti.u32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# Stream state used by single-ray probes
_probe_state = ti.field(dtype=ti.u32, shape=())

_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Set the active image dimensions and clear the color buffer.

    Args:
        width: Image width in pixels (max MAX_IMAGE_WIDTH).
        height: Image height in pixels (max MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1
    _color_buffer.fill(0.0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions as (width, height)."""
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


@ti.kernel
def _load_stream_states(states: ti.types.ndarray(dtype=ti.u32, ndim=2)):
    """Copy host-drawn states into the active region of the state field."""
    for x, y in ti.ndrange(states.shape[0], states.shape[1]):
        _stream_states[x, y] = states[x, y]


def seed_streams(rng: np.random.Generator) -> None:
    """Seed the random stream of every active pixel from a numpy generator.

    Exactly width * height states are drawn, indexed [x, y].

    Args:
        rng: Generator supplying the stream seeds.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    _load_stream_states(make_stream_states(rng, (width, height)))


# =============================================================================
# Radiance Estimation
# =============================================================================


@ti.func
def sky_color(direction: vec3) -> vec3:
    """Background radiance seen along an escaping ray.

    Blends white into light blue by t = 0.5 * (unit_direction.y + 1).
    """
    unit_direction = unit_vector(direction)
    t = 0.5 * (unit_direction.y + 1.0)
    return lerp(SKY_BOTTOM_COLOR, SKY_TOP_COLOR, t)


@ti.func
def radiance(ray: Ray, max_depth: ti.i32, t_min: ti.f32, state: ti.u32):
    """Estimate the radiance arriving along a ray.

    Args:
        ray: The ray to trace.
        max_depth: Maximum number of scene intersections along the path.
        t_min: Exclusive lower bound of accepted hit distances.
        state: Random stream state.

    Returns:
        A tuple (color, new_state). The color is not clamped.
    """
    s = state
    origin = ray.origin
    direction = ray.direction
    attenuation = 1.0
    color = vec3(0.0, 0.0, 0.0)

    # Active flag for path continuation (no break inside ti.func loops)
    active = 1

    for _ in range(max_depth):
        if active == 1:
            rec = intersect_scene(Ray(origin=origin, direction=direction), t_min, T_MAX)
            if rec.hit == 0:
                color = sky_color(direction) * attenuation
                active = 0
            else:
                offset, s = random_in_unit_sphere(s)
                target = rec.point + rec.normal + offset
                origin = rec.point
                direction = target - rec.point
                attenuation *= BOUNCE_ATTENUATION

    return color, s


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_frame(
    width: ti.i32,
    height: ti.i32,
    samples: ti.i32,
    max_depth: ti.i32,
    t_min: ti.f32,
):
    """Render every pixel of the active region.

    Each pixel reads its stream state, averages ``samples`` jittered
    radiance estimates, gamma-encodes the average and writes the advanced
    state back.
    """
    for x, y in ti.ndrange(width, height):
        state = _stream_states[x, y]
        total = vec3(0.0, 0.0, 0.0)

        for _ in range(samples):
            ray, state = get_ray_jittered(x, y, width, height, state)
            color, state = radiance(ray, max_depth, t_min, state)
            total += color

        average = total / ti.cast(samples, ti.f32)
        _color_buffer[x, y] = sqrt_components(average)
        _stream_states[x, y] = state


@ti.kernel
def _trace_single(
    ox: ti.f32,
    oy: ti.f32,
    oz: ti.f32,
    dx: ti.f32,
    dy: ti.f32,
    dz: ti.f32,
    max_depth: ti.i32,
    t_min: ti.f32,
) -> vec3:
    """Trace one ray using the probe stream."""
    ray = Ray(origin=vec3(ox, oy, oz), direction=vec3(dx, dy, dz))
    color, state = radiance(ray, max_depth, t_min, _probe_state[None])
    _probe_state[None] = state
    return color


# =============================================================================
# Public Rendering API
# =============================================================================


def render_image(
    samples: int,
    max_depth: int = DEFAULT_MAX_DEPTH,
    t_min: float = 0.0,
) -> None:
    """Render the active region into the color buffer.

    The scene, the viewport and the pixel streams must already be set up.

    Args:
        samples: Jittered samples averaged per pixel.
        max_depth: Maximum number of intersections along each path.
        t_min: Exclusive lower bound of accepted hit distances.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    logger.debug(
        "Rendering %dx%d at %d spp (max depth %d)", width, height, samples, max_depth
    )
    _render_frame(width, height, samples, max_depth, t_min)


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    t_min: float = 0.0,
    seed: int = 1,
) -> tuple[float, float, float]:
    """Estimate the radiance along a single ray.

    Python-callable probe for debugging and tests; uses the currently
    uploaded scene.

    Args:
        origin: Ray origin.
        direction: Ray direction (need not be normalized).
        max_depth: Maximum number of intersections along the path.
        t_min: Exclusive lower bound of accepted hit distances.
        seed: Non-zero initial stream state.

    Returns:
        Tuple of (R, G, B) radiance.
    """
    if seed == 0:
        raise ValueError("seed must be non-zero")
    _probe_state[None] = seed
    color = _trace_single(
        origin[0], origin[1], origin[2],
        direction[0], direction[1], direction[2],
        max_depth, t_min,
    )
    return (float(color[0]), float(color[1]), float(color[2]))


def get_image_numpy() -> npt.NDArray[np.float32]:
    """Get the gamma-encoded image as a NumPy array.

    Rows are ordered by pixel row index: row 0 of the returned array is
    pixel row y = 0 (the lower viewport edge). Values are not clamped.

    Returns:
        NumPy array of shape (height, width, 3) with dtype float32.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()

    # Extract active region and transpose from (width, height, 3)
    image = _color_buffer.to_numpy()[:width, :height, :]
    image = np.transpose(image, (1, 0, 2))

    return np.ascontiguousarray(image, dtype=np.float32)
