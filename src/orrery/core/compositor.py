"""Frame compositor: per-pixel ray casting, shading dispatch and background.

This module implements the main rendering kernel. For every pixel it builds
the primary camera ray, resolves the nearest body, and hands the hit to the
shader selected by the body's material tag. Rays that miss every body get
the background: a near-black ambient colour plus a warm glow that grows as
the ray points closer to the star.

Every pixel depends only on its own coordinates, the read-only scene fields
and the frame time, which is passed once per frame as a kernel argument.
Taichi parallelizes the outermost pixel loop with no synchronization.

The output is linear RGB. Use orrery.preview.tonemap to convert it to
8-bit display values.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from orrery.core.compositor import render_frame, get_linear_image_numpy
    >>> from orrery.scene.config import SceneConfig
    >>>
    >>> render_frame(SceneConfig(), 320, 200, time=0.0)
    >>> image = get_linear_image_numpy()  # (200, 320, 3) float32
"""

import math

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from orrery.camera.pinhole import PinholeCamera, get_camera_origin, get_ray, setup_camera
from orrery.core.ray import normalize, sphere_uv
from orrery.materials.gas_giant import shade_gas_giant
from orrery.materials.moon import shade_moon
from orrery.materials.rocky import shade_rocky
from orrery.materials.star import shade_star
from orrery.scene.config import MaterialType, SceneConfig
from orrery.scene.intersection import SceneHitRecord, intersect_scene, set_bodies
from orrery.scene.solar_system import build_bodies, star_direction

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Scene Lighting State
# =============================================================================

_light_dir = ti.Vector.field(3, dtype=ti.f32, shape=())
_star_dir = ti.Vector.field(3, dtype=ti.f32, shape=())
_background_color = ti.Vector.field(3, dtype=ti.f32, shape=())
_glow_tint = ti.Vector.field(3, dtype=ti.f32, shape=())
_glow_strength = ti.field(dtype=ti.f32, shape=())
_glow_exponent = ti.field(dtype=ti.f32, shape=())


def upload_scene(config: SceneConfig, time: float, aspect_ratio: float = 1.0) -> None:
    """Write the scene for one frame into the kernel-visible fields.

    The moon's position is recomputed from time here; nothing from a
    previous frame is reused.

    Args:
        config: The scene configuration.
        time: The frame time in seconds.
        aspect_ratio: Width divided by height of the output image.

    Raises:
        ValueError: If the configuration is invalid.
    """
    config.validate()

    set_bodies(build_bodies(config, time))
    setup_camera(
        PinholeCamera(
            position=config.camera_position,
            vfov=config.vfov,
            aspect_ratio=aspect_ratio,
        )
    )

    _light_dir[None] = list(config.normalized_light_direction())
    _star_dir[None] = list(star_direction(config))
    _background_color[None] = list(config.background_color)
    _glow_tint[None] = list(config.glow_tint)
    _glow_strength[None] = config.glow_strength
    _glow_exponent[None] = config.glow_exponent


# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Linear colour buffer indexed [row, column], row 0 at the top
_color_buffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_HEIGHT, MAX_IMAGE_WIDTH))

_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Set the active image dimensions and clear the buffer.

    Args:
        width: Image width in pixels (1 to MAX_IMAGE_WIDTH).
        height: Image height in pixels (1 to MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If dimensions are not positive or exceed the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the colour buffer to black."""
    _color_buffer.fill(0.0)


def reset_render_target() -> None:
    """Forget the active dimensions; the target must be set up again."""
    _render_target_initialized[None] = 0
    clear_render_target()


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Shading
# =============================================================================


@ti.func
def background_color(direction: vec3) -> vec3:
    """Colour of empty space seen along a direction.

    ambient + max(dot(direction, star_dir), 0)^exponent * strength * tint
    """
    alignment = ti.max(tm.dot(direction, _star_dir[None]), 0.0)
    glow = alignment ** _glow_exponent[None] * _glow_strength[None]
    return _background_color[None] + glow * _glow_tint[None]


@ti.func
def shade_hit(rec: SceneHitRecord, time: ti.f32) -> vec3:
    """Dispatch a hit to the shader for its material tag.

    Args:
        rec: The nearest hit (hit == 1).
        time: The frame time in seconds.

    Returns:
        The linear RGB colour of the hit.
    """
    light_dir = _light_dir[None]
    normal = rec.normal
    color = vec3(0.0, 0.0, 0.0)

    if rec.material == int(MaterialType.STAR):
        color = shade_star(rec.point - rec.center, normal, time)

    elif rec.material == int(MaterialType.ROCKY):
        color = shade_rocky(normal, sphere_uv(normal), light_dir, time)

    elif rec.material == int(MaterialType.MOON):
        color = shade_moon(normal, sphere_uv(normal), light_dir, time)

    elif rec.material == int(MaterialType.GAS_GIANT):
        color = shade_gas_giant(normal, sphere_uv(normal), light_dir, time)

    return color


@ti.func
def trace_ray(origin: vec3, direction: vec3, time: ti.f32) -> vec3:
    """Colour seen along a ray: nearest body if any, background otherwise.

    Args:
        origin: The ray origin.
        direction: The unit ray direction.
        time: The frame time in seconds.

    Returns:
        The linear RGB colour.
    """
    rec = intersect_scene(origin, direction)
    color = vec3(0.0, 0.0, 0.0)
    if rec.hit == 1:
        color = shade_hit(rec, time)
    else:
        color = background_color(direction)
    return color


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_frame_kernel(width: ti.i32, height: ti.i32, time: ti.f32):
    """Shade every pixel of the active region."""
    for y, x in ti.ndrange(height, width):
        ray = get_ray(x, y, width, height)
        _color_buffer[y, x] = trace_ray(ray.origin, ray.direction, time)


_probe_color = ti.Vector.field(3, dtype=ti.f32, shape=())
_probe_material = ti.field(dtype=ti.i32, shape=())


@ti.kernel
def _probe_kernel(dx: ti.f32, dy: ti.f32, dz: ti.f32, time: ti.f32):
    """Trace a single ray from the camera and record colour and material."""
    origin = get_camera_origin()
    direction = normalize(vec3(dx, dy, dz))
    rec = intersect_scene(origin, direction)
    _probe_material[None] = rec.material
    _probe_color[None] = trace_ray(origin, direction, time)


# =============================================================================
# Public Rendering API
# =============================================================================


def render_frame(config: SceneConfig, width: int, height: int, time: float) -> None:
    """Render one frame into the colour buffer.

    time is read exactly once and shared by every pixel, so the frame is a
    consistent snapshot of the scene.

    Args:
        config: The scene configuration.
        width: Image width in pixels.
        height: Image height in pixels.
        time: The frame time in seconds.

    Raises:
        ValueError: If the dimensions or configuration are invalid.
    """
    setup_render_target(width, height)
    frame_time = float(time)
    upload_scene(config, frame_time, aspect_ratio=width / height)
    _render_frame_kernel(width, height, frame_time)


def probe_direction(
    config: SceneConfig,
    direction: tuple[float, float, float],
    time: float,
) -> tuple[tuple[float, float, float], MaterialType | None]:
    """Trace one ray from the camera in a given direction.

    Useful for inspecting a single view direction without rendering a frame.

    Args:
        config: The scene configuration.
        direction: The view direction (normalized here).
        time: The frame time in seconds.

    Returns:
        Tuple of (linear RGB colour, material of the nearest hit or None for
        a miss).

    Raises:
        ValueError: If direction is the zero vector or the configuration is
            invalid.
    """
    if math.hypot(*direction) == 0.0:
        raise ValueError("direction must be non-zero")

    upload_scene(config, float(time))
    _probe_kernel(direction[0], direction[1], direction[2], float(time))

    color = _probe_color[None]
    material = int(_probe_material[None])
    hit_material = MaterialType(material) if material >= 0 else None
    return (float(color[0]), float(color[1]), float(color[2])), hit_material


def get_linear_image_numpy() -> npt.NDArray[np.float32]:
    """Get the rendered linear image as a NumPy array.

    Values are not clamped; shaders may exceed 1.0 in the background glow.

    Returns:
        NumPy array of shape (height, width, 3), row 0 at the top.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    full_image = _color_buffer.to_numpy()
    return np.ascontiguousarray(full_image[:height, :width, :], dtype=np.float32)
