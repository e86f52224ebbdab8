"""Camera module for primary ray generation.

Components:
    pinhole: Fixed pinhole camera looking through a viewport rectangle

Ray generation uses normalized viewport coordinates:
    u in [0, 1]: left to right across the viewport
    v in [0, 1]: lower to upper edge of the viewport
"""

from .pinhole import (
    Viewport,
    get_ray,
    get_ray_jittered,
    get_viewport_info,
    setup_viewport,
)

__all__ = [
    "Viewport",
    "setup_viewport",
    "get_ray",
    "get_ray_jittered",
    "get_viewport_info",
]
