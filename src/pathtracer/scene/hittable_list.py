"""Host-side collection of scene primitives.

``HittableList`` is the Python-side view of a scene. It keeps references to
caller-owned ``SphereSpec`` values (frozen, so they can be shared between
several lists and tests) and uploads them into the Taichi scene fields right
before a render. Primitives never point back at the list.

Example:
    >>> ground = SphereSpec(center=(0.0, 100.5, -1.0), radius=100.0)
    >>> world = HittableList()
    >>> world.push(SphereSpec(center=(0.0, 0.0, -1.0), radius=0.5))
    >>> world.push(ground)
    >>> len(world)
    2
    >>> world.upload()  # writes into src.pathtracer.scene.intersection fields
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from src.pathtracer.scene.intersection import MAX_SPHERES, add_sphere, clear_scene

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SphereSpec:
    """Immutable description of a sphere.

    Attributes:
        center: The center of the sphere (x, y, z).
        radius: The radius of the sphere. Not validated; a non-positive
            radius renders with NaN/inf normals.
    """

    center: tuple[float, float, float]
    radius: float


class HittableList:
    """An ordered collection of sphere references.

    The order of primitives only affects which of two exactly equidistant
    hits is reported; closest-hit results are otherwise order independent.
    """

    def __init__(self, spheres: Iterable[SphereSpec] = ()) -> None:
        self._spheres: list[SphereSpec] = []
        self.extend(spheres)

    def push(self, sphere: SphereSpec) -> None:
        """Append a sphere reference.

        Raises:
            RuntimeError: If the list would exceed the scene capacity.
        """
        if len(self._spheres) >= MAX_SPHERES:
            raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
        self._spheres.append(sphere)

    def extend(self, spheres: Iterable[SphereSpec]) -> None:
        """Append several sphere references."""
        for sphere in spheres:
            self.push(sphere)

    def clear(self) -> None:
        """Drop every reference (the spheres themselves are untouched)."""
        self._spheres.clear()

    def upload(self) -> None:
        """Replace the Taichi scene contents with this list's spheres."""
        clear_scene()
        for sphere in self._spheres:
            add_sphere(sphere.center, sphere.radius)
        logger.debug("Uploaded %d sphere(s) to the scene", len(self._spheres))

    def __len__(self) -> int:
        return len(self._spheres)

    def __iter__(self) -> Iterator[SphereSpec]:
        return iter(self._spheres)

    def __repr__(self) -> str:
        return f"HittableList(spheres={len(self._spheres)})"
