"""Output module for finished images.

Components:
    raster: Byte raster and continuous-to-byte quantization
    ppm: Plain-text P3 writer
    export: PNG export via Pillow
"""

from .export import raster_to_pil, save_png
from .ppm import save_ppm, write_ppm
from .raster import BLACK, Color, Raster, color_from_vec3, quantize_image

__all__ = [
    "Color",
    "BLACK",
    "Raster",
    "color_from_vec3",
    "quantize_image",
    "write_ppm",
    "save_ppm",
    "save_png",
    "raster_to_pil",
]
