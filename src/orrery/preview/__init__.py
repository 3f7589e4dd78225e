"""Preview module for display-ready output.

Components:
    tonemap: Clamp, gamma correction and 8-bit quantization
    export: PNG writing via Pillow and image comparison

Example:
    >>> from orrery.preview import tone_map, save_png
    >>> save_png(tone_map(linear_image), "output.png")
"""

from orrery.preview.export import compute_rmse, frame_path, save_png
from orrery.preview.tonemap import (
    DISPLAY_GAMMA,
    apply_gamma,
    clamp_unit,
    quantize,
    tone_map,
)

__all__ = [
    "tone_map",
    "apply_gamma",
    "clamp_unit",
    "quantize",
    "DISPLAY_GAMMA",
    "save_png",
    "frame_path",
    "compute_rmse",
]
