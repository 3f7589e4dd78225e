"""Tone mapping from linear colour to 8-bit display values.

Per channel the display pipeline is:

1. Clamp to [0, 1]
2. Gamma encode: c^(1/2.2)
3. Scale by 255 and truncate to uint8

Every step is monotonic, so brighter linear input never produces darker
output. Black maps to 0 and white (or anything brighter) to 255.

Example:
    >>> import numpy as np
    >>> from orrery.preview.tonemap import tone_map
    >>> tone_map(np.array([[[0.0, 0.5, 1.0]]], dtype=np.float32))
    array([[[  0, 186, 255]]], dtype=uint8)
"""

import numpy as np
import numpy.typing as npt

# Display gamma (approximate sRGB)
DISPLAY_GAMMA = 2.2


def clamp_unit(image: npt.NDArray[np.floating]) -> npt.NDArray[np.float32]:
    """Clamp every channel to [0, 1].

    NaN inputs become 0.

    Args:
        image: Linear image array of any shape.

    Returns:
        Clamped float32 array of the same shape.
    """
    clamped = np.clip(np.nan_to_num(image, nan=0.0), 0.0, 1.0)
    return clamped.astype(np.float32)


def apply_gamma(
    image: npt.NDArray[np.float32],
    gamma: float = DISPLAY_GAMMA,
) -> npt.NDArray[np.float32]:
    """Apply gamma correction for display.

    Args:
        image: Linear image array in [0, 1].
        gamma: Gamma value (default 2.2).

    Returns:
        Gamma corrected image, image^(1/gamma).

    Raises:
        ValueError: If gamma is not positive.
    """
    if gamma <= 0.0:
        raise ValueError(f"gamma must be positive, got {gamma}")
    if gamma == 1.0:
        return image.astype(np.float32)

    # Clamp to [0, 1] before gamma to avoid NaN from negative values
    image = np.clip(image, 0.0, 1.0)
    return np.power(image, 1.0 / gamma).astype(np.float32)


def quantize(image: npt.NDArray[np.float32]) -> npt.NDArray[np.uint8]:
    """Scale [0, 1] values by 255 and truncate to uint8."""
    scaled = np.clip(image, 0.0, 1.0) * 255.0
    return np.floor(scaled).astype(np.uint8)


def tone_map(
    image: npt.NDArray[np.floating],
    gamma: float = DISPLAY_GAMMA,
) -> npt.NDArray[np.uint8]:
    """Convert a linear image to 8-bit display values.

    Args:
        image: Linear RGB image, typically of shape (H, W, 3). Values outside
            [0, 1] are allowed.
        gamma: Display gamma (default 2.2).

    Returns:
        uint8 array of the same shape.
    """
    return quantize(apply_gamma(clamp_unit(image), gamma))
