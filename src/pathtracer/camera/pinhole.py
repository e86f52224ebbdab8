"""Fixed pinhole camera for primary ray generation.

The camera is a single eye point looking through an axis-aligned viewport
rectangle. A viewport point is addressed by normalized coordinates (u, v):

    point(u, v) = lower_left_corner + u * horizontal + v * vertical

and the primary ray runs from ``origin`` toward that point. The ray direction
is ``point - origin`` and is not normalized.

The default viewport spans x in [-2, 2] and y in [-1, 1] at z = -1, which
matches the 2:1 aspect ratio of the default 200x100 frame.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.pathtracer.camera.pinhole import Viewport, setup_viewport
    >>> setup_viewport(Viewport())
    >>> # Within a Taichi kernel:
    >>> # ray = get_ray(0.5, 0.5)  # through the viewport center
"""

from dataclasses import dataclass

import taichi as ti

from src.pathtracer.core.ray import Ray, make_ray
from src.pathtracer.core.sampling import next_float
from src.pathtracer.core.vec3 import vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class Viewport:
    """Geometry of the pinhole camera.

    Attributes:
        origin: Eye position in world space.
        lower_left_corner: World-space position of viewport coordinate (0, 0).
        horizontal: Vector spanning the full viewport width (u from 0 to 1).
        vertical: Vector spanning the full viewport height (v from 0 to 1).
    """

    origin: tuple[float, float, float] = (0.0, 0.0, 0.0)
    lower_left_corner: tuple[float, float, float] = (-2.0, -1.0, -1.0)
    horizontal: tuple[float, float, float] = (4.0, 0.0, 0.0)
    vertical: tuple[float, float, float] = (0.0, 2.0, 0.0)


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_lower_left_corner = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_horizontal = ti.Vector.field(3, dtype=ti.f32, shape=())
_viewport_vertical = ti.Vector.field(3, dtype=ti.f32, shape=())


def setup_viewport(viewport: Viewport) -> None:
    """Copy the viewport geometry into the Taichi camera fields.

    Must be called from Python scope before any kernel generates rays.
    A degenerate viewport (zero-length spanning vectors) is accepted and
    produces degenerate rays.
    """
    _camera_origin[None] = list(viewport.origin)
    _lower_left_corner[None] = list(viewport.lower_left_corner)
    _viewport_horizontal[None] = list(viewport.horizontal)
    _viewport_vertical[None] = list(viewport.vertical)


# =============================================================================
# Ray Generation
# =============================================================================


@ti.func
def get_ray(u: ti.f32, v: ti.f32) -> Ray:
    """Generate the ray through normalized viewport coordinates (u, v).

    Args:
        u: Horizontal coordinate, 0 at the left edge and 1 at the right.
        v: Vertical coordinate, 0 at the lower edge and 1 at the upper.

    Returns:
        A Ray from the camera origin toward the viewport point.
    """
    origin = _camera_origin[None]
    target = (
        _lower_left_corner[None] + _viewport_horizontal[None] * u + _viewport_vertical[None] * v
    )
    return make_ray(origin, target - origin)


@ti.func
def get_ray_jittered(
    pixel_x: ti.i32,
    pixel_y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    state: ti.u32,
):
    """Generate a ray through a random point inside pixel (pixel_x, pixel_y).

    Draws the horizontal jitter first, then the vertical one, each uniform
    in [0, 1).

    Args:
        pixel_x: Column index.
        pixel_y: Row index; maps to v, so row 0 is the lower viewport edge.
        width: Image width in pixels.
        height: Image height in pixels.
        state: Random stream state of the pixel.

    Returns:
        A tuple (ray, new_state).
    """
    jitter_u, s = next_float(state)
    jitter_v, s = next_float(s)

    u = (ti.cast(pixel_x, ti.f32) + jitter_u) / ti.cast(width, ti.f32)
    v = (ti.cast(pixel_y, ti.f32) + jitter_v) / ti.cast(height, ti.f32)

    return get_ray(u, v), s


# =============================================================================
# Utility Functions
# =============================================================================


def get_viewport_info() -> dict[str, tuple[float, float, float]]:
    """Get the active camera vectors for debugging.

    Returns:
        Dictionary with origin, lower_left, horizontal and vertical.
    """
    fields = {
        "origin": _camera_origin,
        "lower_left": _lower_left_corner,
        "horizontal": _viewport_horizontal,
        "vertical": _viewport_vertical,
    }
    info = {}
    for name, field in fields.items():
        vec = field[None]
        info[name] = (float(vec[0]), float(vec[1]), float(vec[2]))
    return info
