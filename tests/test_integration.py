"""Integration tests for the end-to-end rendering pipeline.

This module tests the complete pipeline from scene configuration through
final PNG output, including the command-line example script. Tests use a
reduced resolution with the same aspect ratio as the default 1400x900 frame.

Note: Imports are done inside test methods to avoid Taichi initialization issues.
The conftest.py fixture initializes Taichi before tests run.
"""

from __future__ import annotations

import importlib.util
import json
import math
from pathlib import Path

import numpy as np
import pytest
from PIL import Image as PILImage

EXAMPLE_SCRIPT = Path(__file__).resolve().parent.parent / "examples" / "render_orrery.py"

WIDTH = 350
HEIGHT = 225


def _load_example_module():
    spec = importlib.util.spec_from_file_location("render_orrery", EXAMPLE_SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _pixel_of(config, point, width: int, height: int) -> tuple[int, int]:
    """Project a world point to its (row, column) in the image."""
    cx, cy, cz = config.camera_position
    dx, dy, dz = point[0] - cx, point[1] - cy, point[2] - cz
    tan_half = math.tan(math.radians(config.vfov) / 2.0)
    px, py = dx / -dz, dy / -dz
    nx = (px / (tan_half * width / height) + 1.0) / 2.0
    ny = (1.0 - py / tan_half) / 2.0
    return int(ny * height), int(nx * width)


class TestOrreryIntegration:
    """Integration tests for full-frame rendering."""

    def test_default_scene_renders(self) -> None:
        """Test the default scene renders a plausible frame."""
        from orrery.core.renderer import FrameRenderer

        renderer = FrameRenderer(WIDTH, HEIGHT)
        image = renderer.render(time=0.0)

        assert image.shape == (HEIGHT, WIDTH, 3)
        # Mostly dark space with some bright content
        assert image.mean() < 128
        assert image.max() > 200

    def test_bodies_appear_where_projected(self) -> None:
        """Test every body's center pixel differs from empty space."""
        from orrery.core.compositor import get_linear_image_numpy, render_frame
        from orrery.scene.config import SceneConfig
        from orrery.scene.solar_system import moon_center

        config = SceneConfig()
        render_frame(config, WIDTH, HEIGHT, time=0.0)
        image = get_linear_image_numpy()

        centers = [
            config.star_center,
            config.rocky_center,
            config.gas_giant_center,
            moon_center(config, 0.0),
        ]
        for center in centers:
            row, col = _pixel_of(config, center, WIDTH, HEIGHT)
            assert 0 <= row < HEIGHT and 0 <= col < WIDTH
            pixel = image[row, col]
            assert not np.allclose(pixel, (0.01, 0.01, 0.02), atol=1e-3)

    def test_star_is_warm(self) -> None:
        """Test the star's center pixel is a warm colour well above black."""
        from orrery.core.renderer import FrameRenderer
        from orrery.scene.config import SceneConfig

        config = SceneConfig()
        renderer = FrameRenderer(WIDTH, HEIGHT, config)
        image = renderer.render(time=0.0).astype(np.int32)

        row, col = _pixel_of(config, config.star_center, WIDTH, HEIGHT)
        star_pixel = image[row, col]
        assert star_pixel[0] > 80
        assert star_pixel[0] > star_pixel[2]

    def test_animation_moves_moon(self) -> None:
        """Test the moon's pixel changes between distant frame times."""
        from orrery.core.renderer import FrameRenderer

        renderer = FrameRenderer(WIDTH, HEIGHT)
        first = renderer.render(time=0.0).copy()
        second = renderer.render(time=3.0)

        assert not np.array_equal(first, second)

    def test_save_png(self, tmp_path: Path) -> None:
        """Test the rendered frame round trips through PNG."""
        from orrery.core.renderer import FrameRenderer

        renderer = FrameRenderer(WIDTH, HEIGHT)
        image = renderer.render(time=12.0)
        path = renderer.save_image(tmp_path / "output.png")

        with PILImage.open(path) as loaded:
            np.testing.assert_array_equal(np.asarray(loaded.convert("RGB")), image)


class TestRenderScript:
    """Tests for the command-line example script."""

    def test_parse_args_defaults(self) -> None:
        """Test default options."""
        module = _load_example_module()
        args = module.parse_args([])

        assert args.width == 1400
        assert args.height == 900
        assert args.time is None
        assert args.frames == 1
        assert args.output == "output.png"
        assert args.arch == "cpu"
        assert not args.quiet

    def test_render_single_frame(self, tmp_path: Path) -> None:
        """Test a single frame is written to the requested path."""
        module = _load_example_module()
        output = tmp_path / "single.png"

        saved = module.render_orrery(
            width=64, height=40, start_time=1.0, output_path=str(output), quiet=True
        )

        assert saved == [output]
        with PILImage.open(output) as loaded:
            assert loaded.size == (64, 40)

    def test_render_sequence_with_config(self, tmp_path: Path) -> None:
        """Test a multi-frame run with a JSON config writes numbered files."""
        module = _load_example_module()
        config_path = tmp_path / "scene.json"
        config_path.write_text(json.dumps({"gas_giant_radius": 1.4}))

        saved = module.render_orrery(
            width=32,
            height=20,
            start_time=0.0,
            num_frames=3,
            time_step=0.5,
            config_path=str(config_path),
            output_path=str(tmp_path / "orbit.png"),
            quiet=True,
        )

        assert [p.name for p in saved] == ["orbit_0000.png", "orbit_0001.png", "orbit_0002.png"]
        assert all(p.exists() for p in saved)

    def test_render_rejects_zero_frames(self, tmp_path: Path) -> None:
        """Test a non-positive frame count raises ValueError."""
        module = _load_example_module()

        with pytest.raises(ValueError):
            module.render_orrery(
                width=16, height=16, num_frames=0, output_path=str(tmp_path / "x.png"), quiet=True
            )
