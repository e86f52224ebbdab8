"""Frame driver producing a finished byte raster.

``FrameRenderer`` wraps the integrator's render target and kernels behind a
small object interface:

1. upload the scene and the viewport,
2. seed one random stream per pixel from the injected numpy generator,
3. run the frame kernel (jitter, average, gamma-encode),
4. quantize the result into a ``Raster``.

The generator is a dependency of the renderer. Passing the same seed (or a
generator in the same state) reproduces the image bit for bit.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.pathtracer.core.config import RenderSettings
    >>> from src.pathtracer.core.frame import FrameRenderer
    >>> from src.pathtracer.scene.default_scene import create_default_scene
    >>>
    >>> renderer = FrameRenderer(RenderSettings(seed=42))
    >>> raster = renderer.render(create_default_scene())
"""

from __future__ import annotations

import logging
import time

import numpy as np

from src.pathtracer.camera.pinhole import Viewport, setup_viewport
from src.pathtracer.core.config import RenderSettings
from src.pathtracer.core.integrator import (
    get_image_numpy,
    render_image,
    seed_streams,
    setup_render_target,
)
from src.pathtracer.core.sampling import resolve_generator
from src.pathtracer.output.raster import Raster
from src.pathtracer.scene.hittable_list import HittableList

logger = logging.getLogger(__name__)


class FrameRenderer:
    """Renders scenes into rasters with fixed settings.

    Attributes:
        settings: The render configuration.
        viewport: The pinhole camera geometry.
    """

    def __init__(
        self,
        settings: RenderSettings | None = None,
        viewport: Viewport | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        """Initialize the renderer.

        Args:
            settings: Render configuration. Defaults to RenderSettings().
            viewport: Camera geometry. Defaults to Viewport().
            rng: Generator seeding the pixel streams. When omitted, one is
                built from settings.seed.
        """
        self.settings = settings if settings is not None else RenderSettings()
        self.viewport = viewport if viewport is not None else Viewport()
        self._rng = rng if rng is not None else resolve_generator(self.settings.seed)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self.settings.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self.settings.height

    def render(self, world: HittableList) -> Raster:
        """Render one frame of a scene.

        Every call draws fresh stream seeds from the generator, so repeated
        calls on one renderer produce independent noise.

        Args:
            world: The scene to render; it replaces any uploaded scene.

        Returns:
            The quantized raster; row y holds pixels whose rays pass through
            viewport coordinate v in [y / height, (y + 1) / height).
        """
        settings = self.settings
        logger.info(
            "Rendering %d sphere(s) at %dx%d, %d spp",
            len(world),
            settings.width,
            settings.height,
            settings.samples,
        )
        start_time = time.perf_counter()

        world.upload()
        setup_viewport(self.viewport)
        setup_render_target(settings.width, settings.height)
        seed_streams(self._rng)

        render_image(settings.samples, max_depth=settings.max_depth, t_min=settings.t_min)
        raster = Raster.from_float_image(get_image_numpy())

        logger.info("Frame finished in %.2fs", time.perf_counter() - start_time)
        return raster

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"FrameRenderer(width={self.width}, height={self.height}, "
            f"samples={self.settings.samples})"
        )
