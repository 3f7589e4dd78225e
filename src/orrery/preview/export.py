"""Image export utilities for rendered frames.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Write errors from Pillow or the filesystem are not caught here; a failed
save always reaches the caller.

Example:
    >>> from orrery.core.renderer import FrameRenderer
    >>> from orrery.preview.export import save_png
    >>>
    >>> renderer = FrameRenderer(1400, 900)
    >>> image = renderer.render(time=12.5)
    >>> save_png(image, "output.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def _check_rgb8(image: npt.NDArray[np.uint8]) -> None:
    """Raise ValueError unless image is a uint8 (H, W, 3) array."""
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")
    if image.dtype != np.uint8:
        raise ValueError(f"Expected a uint8 image, got dtype {image.dtype}")


def save_png(image: npt.NDArray[np.uint8], filepath: str | Path) -> Path:
    """Save an 8-bit RGB image as a PNG file.

    Args:
        image: Tone mapped image of shape (H, W, 3) with dtype uint8.
        filepath: Output file path (should end in .png).

    Returns:
        The path that was written.

    Raises:
        ValueError: If the image is not a uint8 (H, W, 3) array.
        OSError: If the file cannot be written.
    """
    _check_rgb8(image)

    path = Path(filepath)
    pil_image = PILImage.fromarray(np.ascontiguousarray(image))
    pil_image.save(path, format="PNG")
    return path


def frame_path(template: str | Path, index: int) -> Path:
    """Build the file name for frame index of an image sequence.

    "out.png" becomes "out_0000.png", "out_0001.png", ...

    Args:
        template: Base output path.
        index: Zero-based frame index.

    Returns:
        The numbered path next to the template.
    """
    path = Path(template)
    suffix = path.suffix or ".png"
    return path.with_name(f"{path.stem}_{index:04d}{suffix}")


def compute_rmse(
    image_a: npt.NDArray[np.generic],
    image_b: npt.NDArray[np.generic],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
