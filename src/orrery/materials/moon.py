"""Moon shader: cratered grey from a single noise sample."""

import taichi as ti
import taichi.math as tm

from orrery.core.noise import fractal_noise
from orrery.materials.lighting import lambert_term

# Type aliases for Taichi vectors
vec3 = tm.vec3
vec2 = tm.vec2

MOON_BASE = 0.45
MOON_VARIATION = 0.15
# Slightly warm tint applied to the grey
MOON_TINT = vec3(1.0, 0.95, 0.9)

AMBIENT = 0.2


@ti.func
def shade_moon(normal: vec3, uv: vec2, light_dir: vec3, time: ti.f32) -> vec3:
    """Shade a point on the moon.

    Args:
        normal: The unit surface normal.
        uv: The equirectangular coordinates of the normal.
        light_dir: Direction toward the light.
        time: The frame time in seconds.

    Returns:
        The lit linear RGB colour.
    """
    craters = fractal_noise(uv.x * 40.0 + uv.y * 40.0 - time * 0.05)
    grey = MOON_BASE + MOON_VARIATION * craters
    return MOON_TINT * grey * lambert_term(light_dir, normal, AMBIENT)
