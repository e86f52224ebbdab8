#!/usr/bin/env python3
"""Render the four-sphere scene.

Writes the image as plain-text PPM to standard output, or to a file when a
destination is given. A destination ending in ``.png`` is written as PNG.

Usage:
    python -m examples.render_spheres [options] [DESTINATION]

Options:
    --width WIDTH         Image width in pixels (default: 200)
    --height HEIGHT       Image height in pixels (default: 100)
    --samples SAMPLES     Samples per pixel (default: 100)
    --max-depth DEPTH     Maximum bounces per path (default: 50)
    --seed SEED           Seed for reproducible noise (default: random)
    --arch {cpu,gpu}      Taichi backend (default: cpu)
    --verbose / --quiet   More or less log output on stderr

Exit status:
    0 on success, 64 on a usage error, the OS error code on I/O failure.

Example:
    python -m examples.render_spheres --samples 10 spheres.ppm
"""

from __future__ import annotations

import argparse
import contextlib
import logging
import sys
from pathlib import Path

logger = logging.getLogger("render_spheres")

# Exit status for command line usage errors (BSD sysexits EX_USAGE)
EXIT_USAGE = 64

# Exit status for I/O failures that carry no OS error code
EXIT_IO_FALLBACK = 1


class UsageError(Exception):
    """Raised for malformed command lines."""


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting with status 2."""

    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = _ArgumentParser(
        description="Render the four-sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "destination",
        nargs="?",
        default=None,
        help="Output file path (default: PPM on standard output)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=200,
        help="Image width in pixels (default: 200)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=100,
        help="Image height in pixels (default: 100)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=100,
        help="Number of samples per pixel (default: 100)",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=50,
        help="Maximum bounces per path (default: 50)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random streams (default: random)",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", action="store_true", help="Enable debug logging")
    verbosity.add_argument("--quiet", action="store_true", help="Only log warnings and errors")
    return parser


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Send log records to stderr; stdout may carry the image."""
    level = logging.INFO
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def init_taichi(arch: str, verbose: bool = False) -> None:
    """Initialize the Taichi runtime.

    Taichi prints a banner on import, which would corrupt a PPM written to
    stdout, so the import runs with stdout redirected to stderr.
    """
    with contextlib.redirect_stdout(sys.stderr):
        import taichi as ti

        ti.init(
            arch=ti.gpu if arch == "gpu" else ti.cpu,
            default_fp=ti.f32,
            fast_math=False,
            log_level=ti.INFO if verbose else ti.WARN,
        )


def render_spheres(
    destination: str | None,
    *,
    width: int = 200,
    height: int = 100,
    samples: int = 100,
    max_depth: int = 50,
    seed: int | None = None,
) -> None:
    """Render the default scene and hand the raster to the output sink.

    Args:
        destination: Output path, or None for standard output.
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Samples per pixel.
        max_depth: Maximum bounces per path.
        seed: Seed for the random streams.

    Raises:
        ValueError: If the settings are invalid.
        OSError: If the output cannot be written.
    """
    # Lazy imports to allow Taichi initialization first
    from src.pathtracer.core.config import RenderSettings
    from src.pathtracer.core.frame import FrameRenderer
    from src.pathtracer.output.export import save_png
    from src.pathtracer.output.ppm import save_ppm, write_ppm
    from src.pathtracer.scene.default_scene import create_default_scene

    settings = RenderSettings(
        width=width,
        height=height,
        samples=samples,
        max_depth=max_depth,
        seed=seed,
    )

    if destination is None:
        raster = FrameRenderer(settings).render(create_default_scene())
        write_ppm(raster, sys.stdout)
        sys.stdout.flush()
        return

    # Create the destination before rendering so a bad path fails fast
    output_file = Path(destination)
    output_file.touch()
    raster = FrameRenderer(settings).render(create_default_scene())
    if output_file.suffix.lower() == ".png":
        save_png(raster, output_file)
    else:
        save_ppm(raster, output_file)


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        argv: Command-line arguments without the program name.

    Returns:
        The process exit status.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return EXIT_USAGE

    configure_logging(verbose=args.verbose, quiet=args.quiet)

    init_taichi(args.arch, verbose=args.verbose)

    try:
        render_spheres(
            args.destination,
            width=args.width,
            height=args.height,
            samples=args.samples,
            max_depth=args.max_depth,
            seed=args.seed,
        )
    except ValueError as e:
        logger.error("Invalid settings: %s", e)
        return EXIT_USAGE
    except OSError as e:
        logger.error("Tried to write image to %s but there was a problem: %s", args.destination, e)
        return e.errno or EXIT_IO_FALLBACK
    return 0


if __name__ == "__main__":
    sys.exit(main())
