"""The four-sphere reference scene.

Three small spheres sit side by side at z = -1 and a very large sphere
centered at y = +100.5 acts as the ground. Raster row 0 samples the lower
viewport edge (v = 0) and is written first, so a ground on the +y side ends
up at the bottom of the stored image.
"""

from src.pathtracer.scene.hittable_list import HittableList, SphereSpec

CENTER_SPHERE = SphereSpec(center=(0.0, 0.0, -1.0), radius=0.5)
RIGHT_SPHERE = SphereSpec(center=(1.0, 0.0, -1.0), radius=0.5)
LEFT_SPHERE = SphereSpec(center=(-1.0, 0.0, -1.0), radius=0.5)
GROUND_SPHERE = SphereSpec(center=(0.0, 100.5, -1.0), radius=100.0)


def create_default_scene() -> HittableList:
    """Build the reference scene.

    Returns:
        A HittableList referencing the module-level sphere constants.
    """
    return HittableList([CENTER_SPHERE, RIGHT_SPHERE, LEFT_SPHERE, GROUND_SPHERE])
