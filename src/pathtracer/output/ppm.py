"""Plain-text PPM (P3) output sink.

Format:
    P3
    <width> <height>
    255
    <r> <g> <b>        one line per pixel, row-major from row 0

Example:
    >>> import io
    >>> raster = Raster(1, 1, background=Color(1, 2, 3))
    >>> buf = io.StringIO()
    >>> write_ppm(raster, buf)
    >>> buf.getvalue()
    'P3\\n1 1\\n255\\n1 2 3\\n'
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from src.pathtracer.output.raster import Raster

logger = logging.getLogger(__name__)

MAGIC_NUMBER = "P3"
MAX_COLOR = 255


def write_ppm(raster: Raster, handle: TextIO) -> None:
    """Write a raster to a text stream in P3 format.

    Args:
        raster: The finished raster.
        handle: Writable text stream (e.g. sys.stdout or an open file).

    Raises:
        OSError: Propagated unchanged from the stream.
    """
    handle.write(f"{MAGIC_NUMBER}\n")
    handle.write(f"{raster.width} {raster.height}\n")
    handle.write(f"{MAX_COLOR}\n")
    for r, g, b in raster.iter_pixels():
        handle.write(f"{r} {g} {b}\n")


def save_ppm(raster: Raster, filepath: str | Path) -> None:
    """Create or truncate a file and write the raster into it.

    Raises:
        OSError: If the file cannot be created or written.
    """
    path = Path(filepath)
    with path.open("w", encoding="ascii", newline="\n") as handle:
        write_ppm(raster, handle)
    logger.info("Wrote %dx%d PPM to %s", raster.width, raster.height, path)
