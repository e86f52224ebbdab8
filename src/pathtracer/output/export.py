"""PNG export for finished rasters.

Example:
    >>> from src.pathtracer.output.export import save_png
    >>> save_png(raster, "spheres.png")
"""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image as PILImage

from src.pathtracer.output.raster import Raster

logger = logging.getLogger(__name__)


def raster_to_pil(raster: Raster) -> PILImage.Image:
    """Convert a raster to a Pillow RGB image.

    Raster row 0 becomes the top row of the Pillow image, matching the PPM
    sink.
    """
    return PILImage.fromarray(raster.to_numpy())


def save_png(raster: Raster, filepath: str | Path) -> None:
    """Save a raster as an 8-bit RGB PNG.

    Raises:
        OSError: If the file cannot be written.
    """
    path = Path(filepath)
    raster_to_pil(raster).save(path, format="PNG")
    logger.info("Wrote %dx%d PNG to %s", raster.width, raster.height, path)
