"""Render configuration.

``RenderSettings`` groups every knob of a frame render. The defaults
reproduce the reference image: a 200x100 frame, 100 samples per pixel,
rays accepted from t = 0 onwards.

Example:
    >>> settings = RenderSettings(width=64, height=32, samples=4, seed=1)
    >>> settings.aspect_ratio
    2.0
"""

from __future__ import annotations

from dataclasses import dataclass

# Maximum supported image dimensions (render target is preallocated)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

DEFAULT_WIDTH = 200
DEFAULT_HEIGHT = 100
DEFAULT_SAMPLES = 100

# Bounce cap for the radiance estimator. Each bounce halves the contribution,
# so paths beyond this depth are far below one quantization step.
DEFAULT_MAX_DEPTH = 50


@dataclass
class RenderSettings:
    """Configuration for a single frame render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Jittered samples averaged per pixel.
        max_depth: Maximum number of diffuse bounces before a path is
            terminated with zero radiance.
        t_min: Lower (exclusive) bound of accepted intersection distances.
        seed: Seed for the per-pixel random streams. None draws fresh
            entropy, so two renders differ.
    """

    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    samples: int = DEFAULT_SAMPLES
    max_depth: int = DEFAULT_MAX_DEPTH
    t_min: float = 0.0
    seed: int | None = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.width > MAX_IMAGE_WIDTH or self.height > MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"Image dimensions ({self.width}x{self.height}) exceed maximum supported "
                f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
            )
        if self.samples <= 0:
            raise ValueError(f"Samples per pixel must be positive, got {self.samples}")
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {self.max_depth}")

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height
