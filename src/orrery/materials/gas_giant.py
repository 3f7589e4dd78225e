"""Banded gas giant shader.

Latitude bands come from mixing slowly drifting noise with a sine over
latitude:

    bands  = 0.6 * noise(12 lat + 0.1 t) + 0.4 * sin(6 lat)
    band_t = smoothstep(-0.7, 0.7, bands)

which blends a sandy and a teal palette colour. Storm spots are carved from
a high-frequency noise sample scrolling with time, thresholded with
smoothstep(0.85, 0.95, .), and pull the colour toward a dark storm tone.
The result is lit with a Lambert factor with a 0.2 ambient floor.
"""

import taichi as ti
import taichi.math as tm

from orrery.core.noise import fractal_noise, smoothstep
from orrery.materials.lighting import lambert_term

# Type aliases for Taichi vectors
vec3 = tm.vec3
vec2 = tm.vec2

BAND_COLOR_A = vec3(0.9, 0.75, 0.55)
BAND_COLOR_B = vec3(0.25, 0.55, 0.7)
STORM_COLOR = vec3(0.05, 0.02, 0.02)

BAND_LOW = -0.7
BAND_HIGH = 0.7
STORM_LOW = 0.85
STORM_HIGH = 0.95

AMBIENT = 0.2


@ti.func
def band_blend(latitude: ti.f32, time: ti.f32) -> ti.f32:
    """Blend factor between the two band colours at a latitude."""
    bands = fractal_noise(latitude * 12.0 + time * 0.1) * 0.6 + tm.sin(latitude * 6.0) * 0.4
    return smoothstep(BAND_LOW, BAND_HIGH, bands)


@ti.func
def storm_mask(uv: vec2, time: ti.f32) -> ti.f32:
    """1 inside a storm spot, 0 outside."""
    n = fractal_noise(uv.x * 40.0 + uv.y * 40.0 - time * 0.2)
    return smoothstep(STORM_LOW, STORM_HIGH, n)


@ti.func
def shade_gas_giant(normal: vec3, uv: vec2, light_dir: vec3, time: ti.f32) -> vec3:
    """Shade a point on the gas giant.

    Args:
        normal: The unit surface normal.
        uv: The equirectangular coordinates of the normal.
        light_dir: Direction toward the light.
        time: The frame time in seconds.

    Returns:
        The lit linear RGB colour, each channel in [0, 1].
    """
    base = tm.mix(BAND_COLOR_A, BAND_COLOR_B, band_blend(normal.y, time))
    mixed = tm.mix(base, STORM_COLOR, storm_mask(uv, time))
    lit = mixed * lambert_term(light_dir, normal, AMBIENT)
    return tm.clamp(lit, 0.0, 1.0)
