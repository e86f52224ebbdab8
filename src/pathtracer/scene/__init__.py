"""Scene module for scene storage and closest-hit queries.

Components:
    intersection: Sphere storage in Taichi fields and intersect_scene
    hittable_list: Host-side collection of shared sphere descriptions
    default_scene: The four-sphere reference scene
"""

from .default_scene import create_default_scene
from .hittable_list import HittableList, SphereSpec
from .intersection import (
    MAX_SPHERES,
    add_sphere,
    clear_scene,
    get_sphere_count,
    intersect_scene,
)

__all__ = [
    "HittableList",
    "SphereSpec",
    "create_default_scene",
    "add_sphere",
    "clear_scene",
    "get_sphere_count",
    "intersect_scene",
    "MAX_SPHERES",
]
