#!/usr/bin/env python3
"""Render the fireball scene.

This script renders a sphere displaced by fractal turbulence, shaded with
a fire palette, and writes it as an RGBA PNG. Every option has a default,
so running it without arguments reproduces the reference image.

Usage:
    python -m examples.render_fireball [options]

Options:
    --width WIDTH           Image width in pixels (default: 640)
    --height HEIGHT         Image height in pixels (default: 480)
    --fov-degrees DEGREES   Vertical field of view (default: 90)
    --radius RADIUS         Sphere radius (default: 1.5)
    --amplitude AMPLITUDE   Noise displacement amplitude (default: 0.2)
    --output OUTPUT         Output file path (default: fireball.png)
    --band-height ROWS      Rows per progress update (default: 48)
    --quiet                 Suppress progress output

Example:
    python -m examples.render_fireball --width 320 --height 240 --amplitude 0.3
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
import time
from pathlib import Path

import taichi as ti

logger = logging.getLogger("render_fireball")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the fireball scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=640,
        help="Image width in pixels (default: 640)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=480,
        help="Image height in pixels (default: 480)",
    )
    parser.add_argument(
        "--fov-degrees",
        type=float,
        default=90.0,
        help="Vertical field of view in degrees (default: 90)",
    )
    parser.add_argument(
        "--radius",
        type=float,
        default=1.5,
        help="Sphere radius (default: 1.5)",
    )
    parser.add_argument(
        "--amplitude",
        type=float,
        default=0.2,
        help="Noise displacement amplitude (default: 0.2)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="fireball.png",
        help="Output file path (default: fireball.png)",
    )
    parser.add_argument(
        "--band-height",
        type=int,
        default=48,
        help="Rows per progress update (default: 48)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_fireball(
    width: int = 640,
    height: int = 480,
    fov: float = math.pi / 2.0,
    sphere_radius: float = 1.5,
    noise_amplitude: float = 0.2,
    output_path: str = "fireball.png",
    band_height: int = 48,
) -> Path:
    """Render the fireball scene and save to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Vertical field of view in radians.
        sphere_radius: Radius of the undisplaced sphere.
        noise_amplitude: Displacement amplitude.
        output_path: Output file path (PNG).
        band_height: Number of rows to render between progress updates.

    Returns:
        Path to the saved image file.

    Raises:
        ValueError: If a scene parameter is out of range.
        OSError: If the output file cannot be written.
    """
    # Lazy imports to allow Taichi initialization first
    from src.spheretrace.core.renderer import FrameRenderer
    from src.spheretrace.output.export import save_png
    from src.spheretrace.scene.fireball import FireballParams, create_fireball_scene

    params = FireballParams(
        width=width,
        height=height,
        fov=fov,
        sphere_radius=sphere_radius,
        noise_amplitude=noise_amplitude,
    )

    logger.info("Creating fireball scene (%dx%d)...", width, height)
    create_fireball_scene(params)

    renderer = FrameRenderer(params.width, params.height)

    start_time = time.time()

    def progress_callback(done: int, total: int) -> None:
        progress_pct = (done / total) * 100 if total > 0 else 0
        logger.info("Progress: %d/%d rows (%.1f%%)", done, total, progress_pct)

    renderer.render(band_height=band_height, callback=progress_callback)

    output_file = Path(output_path)
    save_png(renderer, str(output_file))

    logger.info("Saved to: %s", output_file.absolute())
    logger.info("Total time: %.2fs", time.time() - start_time)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    # Use GPU if available, fall back to CPU
    try:
        ti.init(arch=ti.gpu)
        logger.info("Using GPU backend")
    except Exception:
        ti.init(arch=ti.cpu)
        logger.info("Using CPU backend")

    try:
        render_fireball(
            width=args.width,
            height=args.height,
            fov=math.radians(args.fov_degrees),
            sphere_radius=args.radius,
            noise_amplitude=args.amplitude,
            output_path=args.output,
            band_height=args.band_height,
        )
        return 0
    except (OSError, ValueError) as e:
        logger.error("Error: %s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
