"""Pinhole camera model for perspective projection ray generation.

The camera sits at a configurable position and looks down the -z axis with
+y up. Each pixel (x, y), with y = 0 the top row, is mapped through its
center to normalized device coordinates and then onto an image plane at
unit distance:

    nx = (x + 0.5) / width,  ny = (y + 0.5) / height
    px = (2 nx - 1) * tan(vfov / 2) * aspect
    py = (1 - 2 ny) * tan(vfov / 2)
    direction = normalize(px, py, -1)

There is no jitter: every pixel gets exactly one ray through its center.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from orrery.camera.pinhole import PinholeCamera, setup_camera, get_ray
    >>>
    >>> camera = PinholeCamera(position=(0.0, 0.0, 6.0), vfov=60.0, aspect_ratio=1400 / 900)
    >>> setup_camera(camera)
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(700, 450, 1400, 900)  # Ray through image center
"""

import math
from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from orrery.core.ray import Ray, make_ray, normalize, vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for a forward-looking pinhole camera.

    Attributes:
        position: Camera position in world space (x, y, z).
        vfov: Vertical field of view in degrees.
        aspect_ratio: Width divided by height of the output image.
    """

    position: tuple[float, float, float]
    vfov: float
    aspect_ratio: float


# =============================================================================
# Taichi Fields for Camera State
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_tan_half_fov = ti.field(dtype=ti.f32, shape=())
_aspect_ratio = ti.field(dtype=ti.f32, shape=())


def setup_camera(camera: PinholeCamera) -> None:
    """Initialize camera state from configuration.

    Args:
        camera: Camera configuration with position, FOV and aspect ratio.

    Raises:
        ValueError: If the field of view is outside (0, 180) degrees or the
            aspect ratio is not positive.
    """
    if not 0.0 < camera.vfov < 180.0:
        raise ValueError(f"vfov must be in (0, 180) degrees, got {camera.vfov}")
    if camera.aspect_ratio <= 0.0:
        raise ValueError(f"aspect_ratio must be positive, got {camera.aspect_ratio}")

    _camera_origin[None] = list(camera.position)
    _tan_half_fov[None] = math.tan(math.radians(camera.vfov) / 2.0)
    _aspect_ratio[None] = camera.aspect_ratio


# =============================================================================
# Ray Generation
# =============================================================================


@ti.func
def pixel_direction(pixel_x: ti.i32, pixel_y: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """Compute the unit view direction through the center of a pixel.

    Args:
        pixel_x: Pixel column (0 = left).
        pixel_y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        The normalized camera-space direction, which is also the world-space
        direction since the camera is axis aligned.
    """
    nx = (ti.cast(pixel_x, ti.f32) + 0.5) / ti.cast(width, ti.f32)
    ny = (ti.cast(pixel_y, ti.f32) + 0.5) / ti.cast(height, ti.f32)
    tan_half = _tan_half_fov[None]
    px = (2.0 * nx - 1.0) * tan_half * _aspect_ratio[None]
    py = (1.0 - 2.0 * ny) * tan_half
    return normalize(vec3(px, py, -1.0))


@ti.func
def get_ray(pixel_x: ti.i32, pixel_y: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray through the center of a pixel.

    Args:
        pixel_x: Pixel column (0 = left).
        pixel_y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray from the camera position with a unit direction.
    """
    return make_ray(_camera_origin[None], pixel_direction(pixel_x, pixel_y, width, height))


@ti.func
def get_camera_origin() -> vec3:
    """Get the camera position in world space."""
    return _camera_origin[None]


def get_camera_info() -> dict[str, float | tuple[float, float, float]]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with origin, tan_half_fov and aspect_ratio.
    """
    origin = _camera_origin[None]
    return {
        "origin": (float(origin[0]), float(origin[1]), float(origin[2])),
        "tan_half_fov": float(_tan_half_fov[None]),
        "aspect_ratio": float(_aspect_ratio[None]),
    }
