#!/usr/bin/env python3
"""Render a preset scene to PNG.

This script renders the demo scene (or the single-sphere scene) with one of
the three back ends and writes the result as a PNG. With --frames > 1 it
animates the scene between frames, applying each update under the scene's
write lock.

Usage:
    python examples/render_scene.py [options]

Options:
    --width WIDTH       Image width in pixels (default: 320)
    --height HEIGHT     Image height in pixels (default: 240)
    --scene NAME        demo or single (default: demo)
    --backend NAME      serial, parallel or taichi (default: parallel)
    --workers N         Row bands for the parallel back end (default: CPU count)
    --depth N           Recursion budget (default: 3)
    --frames N          Number of animated frames (default: 1)
    --output OUTPUT     Output file path (default: scene.png)
    --quiet             Only log warnings

Example:
    python examples/render_scene.py --width 160 --height 120 --backend taichi
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from whitted.core.renderer import RenderSettings, default_worker_count, render, render_parallel
from whitted.preview.export import save_png
from whitted.scene import (
    SharedScene,
    create_demo_scene,
    create_single_sphere_scene,
    orbit_point_light,
)
from whitted.surface import ArraySurface

logger = logging.getLogger("render_scene")

SCENES = {
    "demo": create_demo_scene,
    "single": create_single_sphere_scene,
}


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a preset scene to PNG.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--width", type=int, default=320, help="Image width in pixels (default: 320)")
    parser.add_argument("--height", type=int, default=240, help="Image height in pixels (default: 240)")
    parser.add_argument("--scene", choices=sorted(SCENES), default="demo", help="Preset scene (default: demo)")
    parser.add_argument(
        "--backend",
        choices=["serial", "parallel", "taichi"],
        default="parallel",
        help="Rendering back end (default: parallel)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=default_worker_count(),
        help="Row bands for the parallel back end (default: CPU count)",
    )
    parser.add_argument("--depth", type=int, default=3, help="Recursion budget (default: 3)")
    parser.add_argument("--frames", type=int, default=1, help="Number of animated frames (default: 1)")
    parser.add_argument("--output", type=str, default="scene.png", help="Output file path (default: scene.png)")
    parser.add_argument("--quiet", action="store_true", help="Only log warnings")
    return parser.parse_args(argv)


def frame_path(output: Path, frame: int, frames: int) -> Path:
    """Output path for one frame; numbered only when animating."""
    if frames == 1:
        return output
    return output.with_name(f"{output.stem}_{frame:04d}{output.suffix}")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.WARNING if args.quiet else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.width <= 0 or args.height <= 0:
        logger.error("Image size must be positive, got %dx%d", args.width, args.height)
        return 2
    if args.frames < 1:
        logger.error("--frames must be at least 1, got %d", args.frames)
        return 2

    settings = RenderSettings(max_depth=args.depth, workers=args.workers)
    shared = SharedScene(SCENES[args.scene]())
    output = Path(args.output)

    if args.backend == "taichi":
        import taichi as ti

        ti.init(arch=ti.gpu)
        from whitted.core.integrator import render_kernel
        from whitted.surface.field import FieldSurface

        surface = FieldSurface(args.width, args.height)
    else:
        surface = ArraySurface(args.width, args.height)

    for frame in range(args.frames):
        start = time.perf_counter()
        if args.backend == "serial":
            render(shared, surface, settings)
        elif args.backend == "parallel":
            render_parallel(shared, surface, settings=settings)
        else:
            render_kernel(shared, surface, settings)
        elapsed = time.perf_counter() - start

        path = frame_path(output, frame, args.frames)
        save_png(surface, path)
        logger.info("Frame %d rendered in %.2fs -> %s", frame, elapsed, path)

        shared.update(lambda scene: orbit_point_light(scene, float(frame + 1)))

    return 0


if __name__ == "__main__":
    sys.exit(main())
