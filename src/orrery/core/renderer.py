"""Frame renderer: the host-side entry point for producing images.

This module provides a convenient wrapper around the compositor kernels that
supports:
- Rendering a single frame at a given time
- Rendering a sequence of frames for animation, with progress callbacks
- Tone mapped 8-bit output and PNG export

Each frame is independent: the scene, including the moon's orbital
position, is rebuilt from the configuration and the frame time.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from orrery.core.renderer import FrameRenderer
    >>>
    >>> renderer = FrameRenderer(1400, 900)
    >>> image = renderer.render(time=3.0)  # (900, 1400, 3) uint8
    >>> renderer.save_image("output.png")
"""

from __future__ import annotations

from collections.abc import Callable, Generator, Iterable
from pathlib import Path

import numpy as np
import numpy.typing as npt

from orrery.core.compositor import (
    get_linear_image_numpy,
    render_frame,
    setup_render_target,
)
from orrery.preview.export import save_png
from orrery.preview.tonemap import DISPLAY_GAMMA, tone_map
from orrery.scene.config import SceneConfig

# Type alias for progress callback
# Callback receives (frames_done, total_frames)
ProgressCallback = Callable[[int, int], None]


class FrameRenderer:
    """Renders frames of the orrery scene at chosen times.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        config: The scene configuration used for every frame.
    """

    def __init__(
        self,
        width: int,
        height: int,
        config: SceneConfig | None = None,
        *,
        gamma: float = DISPLAY_GAMMA,
    ) -> None:
        """Initialize the renderer.

        Args:
            width: Image width in pixels (max 2048).
            height: Image height in pixels (max 2048).
            config: Scene configuration. Defaults to SceneConfig().
            gamma: Display gamma used for 8-bit output.

        Raises:
            ValueError: If dimensions are invalid or the configuration is
                invalid.
        """
        self.config = config if config is not None else SceneConfig()
        self.config.validate()
        self._gamma = gamma
        self._width = width
        self._height = height
        self._last_time: float | None = None
        self._last_image: npt.NDArray[np.uint8] | None = None
        setup_render_target(width, height)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def last_time(self) -> float | None:
        """Get the time of the most recently rendered frame, if any."""
        return self._last_time

    def resize(self, width: int, height: int) -> None:
        """Change the output dimensions.

        Raises:
            ValueError: If dimensions are invalid.
        """
        setup_render_target(width, height)
        self._width = width
        self._height = height
        self._last_time = None
        self._last_image = None

    def render_linear(self, time: float) -> npt.NDArray[np.float32]:
        """Render a frame and return the linear colour image.

        Args:
            time: The frame time in seconds.

        Returns:
            Float32 array of shape (height, width, 3).
        """
        frame_time = float(time)
        render_frame(self.config, self._width, self._height, frame_time)
        self._last_time = frame_time
        return get_linear_image_numpy()

    def render(self, time: float) -> npt.NDArray[np.uint8]:
        """Render a frame and return the tone mapped image.

        Args:
            time: The frame time in seconds.

        Returns:
            uint8 array of shape (height, width, 3), row 0 at the top.
        """
        image = tone_map(self.render_linear(time), gamma=self._gamma)
        self._last_image = image
        return image

    def render_sequence(
        self,
        times: Iterable[float],
        callback: ProgressCallback | None = None,
    ) -> Generator[tuple[int, npt.NDArray[np.uint8]], None, None]:
        """Render one frame per time value, yielding them as they finish.

        Args:
            times: Frame times in seconds.
            callback: Optional callback called after each frame.
                Receives (frames_done, total_frames).

        Yields:
            Tuple of (frame_index, image).

        Example:
            >>> times = [i / 24.0 for i in range(48)]
            >>> for index, image in renderer.render_sequence(times):
            ...     save_png(image, frame_path("orbit.png", index))
        """
        frame_times = [float(t) for t in times]
        total = len(frame_times)
        for index, frame_time in enumerate(frame_times):
            image = self.render(frame_time)
            if callback is not None:
                callback(index + 1, total)
            yield index, image

    def get_image_uint8(self) -> npt.NDArray[np.uint8]:
        """Get the most recently rendered frame.

        Raises:
            RuntimeError: If no frame has been rendered yet.
        """
        if self._last_image is None:
            raise RuntimeError("No frame rendered yet. Call render() first.")
        return self._last_image

    def save_image(self, filepath: str | Path) -> Path:
        """Save the most recently rendered frame as a PNG file.

        Args:
            filepath: Path to save the image (e.g., "output.png").

        Returns:
            The path that was written.

        Raises:
            RuntimeError: If no frame has been rendered yet.
            OSError: If the file cannot be written.
        """
        return save_png(self.get_image_uint8(), filepath)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"FrameRenderer(width={self.width}, height={self.height}, "
            f"last_time={self.last_time})"
        )
