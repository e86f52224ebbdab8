"""Core rendering module.

Components:
    vec3: Vector algebra on taichi.math.vec3
    ray: Ray data structure
    sampling: Explicit per-pixel random streams
    config: Render settings
    integrator: Radiance estimator and frame kernel
    frame: Frame driver returning a raster

All compute-intensive operations are Taichi functions and kernels.
"""

from .config import (
    DEFAULT_MAX_DEPTH,
    MAX_IMAGE_HEIGHT,
    MAX_IMAGE_WIDTH,
    RenderSettings,
)
from .ray import Ray, make_ray, point_at
from .sampling import (
    make_stream_states,
    next_float,
    random_in_unit_sphere,
    resolve_generator,
    xorshift32,
)
from .vec3 import (
    cross,
    dot,
    hadamard,
    length,
    length_squared,
    lerp,
    sqrt_components,
    unit_vector,
    vec3,
)

# Note: integrator and frame are NOT imported here to avoid circular imports
# (the camera module depends on core.ray and core.sampling).
# Import directly from src.pathtracer.core.integrator or src.pathtracer.core.frame.

__all__ = [
    "vec3",
    "dot",
    "cross",
    "length",
    "length_squared",
    "unit_vector",
    "sqrt_components",
    "hadamard",
    "lerp",
    "Ray",
    "make_ray",
    "point_at",
    "xorshift32",
    "next_float",
    "random_in_unit_sphere",
    "make_stream_states",
    "resolve_generator",
    "RenderSettings",
    "DEFAULT_MAX_DEPTH",
    "MAX_IMAGE_WIDTH",
    "MAX_IMAGE_HEIGHT",
]
