#!/usr/bin/env python3
"""Render the orrery scene.

This script renders the procedural solar system (star, rocky planet with
moon, gas giant) to PNG. By default it renders a single frame at the
current wall-clock time, wrapped to a 10000 second period.

Usage:
    python examples/render_orrery.py [options]

Options:
    --width WIDTH       Image width in pixels (default: 1400)
    --height HEIGHT     Image height in pixels (default: 900)
    --time SECONDS      Frame time (default: wall clock modulo 10000)
    --frames N          Number of frames to render (default: 1)
    --time-step SEC     Time between frames (default: 1/24)
    --config PATH       JSON scene configuration file
    --output OUTPUT     Output file path (default: output.png)
    --arch {cpu,gpu}    Taichi backend (default: cpu)
    --quiet             Suppress progress output

Example:
    python examples/render_orrery.py --width 640 --height 360 --frames 48
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the orrery scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1400,
        help="Image width in pixels (default: 1400)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=900,
        help="Image height in pixels (default: 900)",
    )
    parser.add_argument(
        "--time",
        type=float,
        default=None,
        help="Frame time in seconds (default: wall clock modulo 10000)",
    )
    parser.add_argument(
        "--frames",
        type=int,
        default=1,
        help="Number of frames to render (default: 1)",
    )
    parser.add_argument(
        "--time-step",
        type=float,
        default=1.0 / 24.0,
        help="Time between consecutive frames in seconds (default: 1/24)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="JSON scene configuration file (default: built-in scene)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="output.png",
        help="Output file path (default: output.png)",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_orrery(
    width: int = 1400,
    height: int = 900,
    start_time: float | None = None,
    num_frames: int = 1,
    time_step: float = 1.0 / 24.0,
    config_path: str | None = None,
    output_path: str = "output.png",
    quiet: bool = False,
) -> list[Path]:
    """Render the orrery scene and save the frames to disk.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        start_time: Time of the first frame; wall clock if None.
        num_frames: Number of frames. More than one produces a numbered
            sequence next to output_path.
        time_step: Seconds between frames.
        config_path: Optional JSON scene configuration.
        output_path: Output file path (PNG).
        quiet: If True, suppress progress output.

    Returns:
        Paths of the saved image files.

    Raises:
        ValueError: If num_frames is not positive or the scene is invalid.
    """
    # Lazy imports to allow Taichi initialization first
    from orrery.core.renderer import FrameRenderer
    from orrery.preview.export import frame_path, save_png
    from orrery.scene.config import SceneConfig, load_scene_config
    from orrery.scene.solar_system import wrap_time

    if num_frames <= 0:
        raise ValueError(f"frames must be positive, got {num_frames}")

    config = load_scene_config(config_path) if config_path else SceneConfig()

    if start_time is None:
        start_time = wrap_time(time.time())

    renderer = FrameRenderer(width, height, config)
    times = [start_time + i * time_step for i in range(num_frames)]

    if not quiet:
        print(f"Rendering {num_frames} frame(s) at {width}x{height}, time={start_time:.3f}")

    wall_start = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            elapsed = time.time() - wall_start
            fps = current / elapsed if elapsed > 0 else 0
            print(
                f"\r  Progress: {current}/{target} frames - {fps:.2f} frames/s",
                end="",
                flush=True,
            )

    saved: list[Path] = []
    for index, image in renderer.render_sequence(times, callback=progress_callback):
        target = Path(output_path) if num_frames == 1 else frame_path(output_path, index)
        saved.append(save_png(image, target))

    if not quiet:
        print()  # Newline after progress
        total_time = time.time() - wall_start
        if len(saved) == 1:
            print(f"Saved to: {saved[0].absolute()}")
        else:
            print(f"Saved {len(saved)} frames to: {saved[0].parent.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    return saved


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    ti.init(arch=ti.gpu if args.arch == "gpu" else ti.cpu)

    try:
        render_orrery(
            width=args.width,
            height=args.height,
            start_time=args.time,
            num_frames=args.frames,
            time_step=args.time_step,
            config_path=args.config,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
