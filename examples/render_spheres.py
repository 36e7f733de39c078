#!/usr/bin/env python3
"""Render the three-spheres scene.

Creates the demo scene (ground, diffuse center, glass left, metal right) or
loads one from JSON, renders it and writes the gamma-corrected image.

Usage:
    python examples/render_spheres.py [options]

Options:
    --width WIDTH         Image width in pixels (default: 400)
    --height HEIGHT       Image height in pixels (default: 225)
    --samples SAMPLES     Number of samples per pixel (default: 100)
    --max-depth DEPTH     Maximum ray bounces (default: 50)
    --seed SEED           Random seed (default: 0)
    --threads N           Worker threads (default: all cores)
    --scene PATH          Scene JSON file (default: built-in demo scene)
    --output OUTPUT       Output file path (default: image.png)
    --quiet               Suppress progress output

Example:
    python examples/render_spheres.py --width 200 --height 112 --samples 20
"""

from __future__ import annotations

import argparse
import json
import sys
import time
from pathlib import Path

from raylight.config import RenderConfig, init_taichi


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    defaults = RenderConfig()
    parser = argparse.ArgumentParser(
        description="Render the three-spheres scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=defaults.width,
        help=f"Image width in pixels (default: {defaults.width})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=defaults.height,
        help=f"Image height in pixels (default: {defaults.height})",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=defaults.samples_per_pixel,
        help=f"Number of samples per pixel (default: {defaults.samples_per_pixel})",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=defaults.max_depth,
        help=f"Maximum ray bounces (default: {defaults.max_depth})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=defaults.seed,
        help=f"Random seed (default: {defaults.seed})",
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=None,
        help="Worker threads (default: all cores)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="Scene JSON file (default: built-in demo scene)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="image.png",
        help="Output file path (default: image.png)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_spheres(
    config: RenderConfig,
    scene_path: str | None = None,
    output_path: str = "image.png",
    quiet: bool = False,
) -> Path:
    """Render a scene and save it to file.

    Args:
        config: Render settings.
        scene_path: Optional scene JSON file. The built-in three-spheres
            scene is used when None.
        output_path: Output image path; the extension picks the format.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from raylight.output.image import save_image
    from raylight.scene.demo import create_three_spheres_scene
    from raylight.scene.scene import Scene

    if scene_path is None:
        scene = create_three_spheres_scene()
    else:
        with open(scene_path, encoding="utf-8") as f:
            scene = Scene.from_dict(json.load(f))

    camera = config.build_camera()

    if not quiet:
        print(
            f"Rendering {len(scene)} shapes at {config.width}x{config.height}, "
            f"{config.samples_per_pixel} samples per pixel..."
        )

    start_time = time.time()

    def progress_callback(rows_done: int, total_rows: int) -> None:
        if not quiet:
            print(f"\r{rows_done / total_rows * 100.0:.2f}%", end="", flush=True)

    pixels = camera.render_array(scene, progress=progress_callback)

    if not quiet:
        print("\rDone.       ")

    output_file = save_image(pixels, output_path)

    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    try:
        init_taichi(arch="cpu", num_threads=args.threads)
        config = RenderConfig(
            width=args.width,
            height=args.height,
            samples_per_pixel=args.samples,
            max_depth=args.max_depth,
            seed=args.seed,
        )
        render_spheres(
            config,
            scene_path=args.scene,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
