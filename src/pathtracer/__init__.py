"""Diffuse sphere path tracer built on Taichi.

Renders a still image of a small scene of spheres with Monte Carlo path
tracing and writes it as an 8-bit raster.

Subpackages:
    core: Vector algebra, rays, sampling streams, configuration, the
        radiance integrator and the frame driver
    geometry: Sphere primitive and ray-sphere intersection
    scene: Scene storage, closest-hit queries and the default scene
    camera: Fixed pinhole camera with jittered ray generation
    output: Byte raster, color quantization and PPM/PNG sinks
"""

__version__ = "0.1.0"
