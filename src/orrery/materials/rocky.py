"""Rocky (terrestrial) planet shader.

Builds an Earth-like surface from noise:

1. A latitude gradient of bare rock colour (brighter toward +y).
2. Continents: smoothstep(0.35, 0.6, noise(uv)) blends rock into green land.
   The continent pattern is fixed to the surface.
3. A Phong highlight from the light direction, seen along the camera's
   forward axis.
4. A cloud layer from a second, phase-shifted noise sample scrolling with
   time, thresholded with smoothstep(0.65, 0.82, .) and added as white.

The composite is clamped to [0, 1] and then modulated by a Lambert factor
with a 0.1 ambient floor so the night side stays dimly visible.

Example:
    >>> # Within a Taichi kernel:
    >>> # uv = sphere_uv(normal)
    >>> # color = shade_rocky(normal, uv, light_dir, time)
"""

import taichi as ti
import taichi.math as tm

from orrery.core.noise import fractal_noise, smoothstep
from orrery.materials.lighting import lambert_term, specular_term

# Type aliases for Taichi vectors
vec3 = tm.vec3
vec2 = tm.vec2

ROCK_BASE_COLOR = vec3(0.35, 0.28, 0.25)
ROCK_LATITUDE_TINT = vec3(0.15, 0.12, 0.05)
LAND_COLOR = vec3(0.12, 0.5, 0.18)
SEA_COLOR = vec3(0.02, 0.08, 0.18)
CLOUD_COLOR = vec3(1.0, 1.0, 1.0)

# Surface and sea contributions to the final mix, per channel
SURFACE_WEIGHT = vec3(0.9, 0.9, 0.95)
SEA_WEIGHT = 0.1

# The camera looks down -z; highlights are evaluated along that axis
VIEW_DIR = vec3(0.0, 0.0, -1.0)
SHININESS = 32.0
SPECULAR_STRENGTH = 0.6

CONTINENT_LOW = 0.35
CONTINENT_HIGH = 0.6
CLOUD_LOW = 0.65
CLOUD_HIGH = 0.82
CLOUD_OPACITY = 0.6

AMBIENT = 0.1


@ti.func
def rock_color(latitude: ti.f32) -> vec3:
    """Bare rock colour for a latitude in [-1, 1]."""
    lat = tm.clamp(latitude, -1.0, 1.0)
    return ROCK_BASE_COLOR + ROCK_LATITUDE_TINT * (lat + 1.0) / 2.0


@ti.func
def continent_mask(uv: vec2) -> ti.f32:
    """1 over land, 0 over open rock, smooth along coastlines."""
    n = fractal_noise(uv.x * 8.0 + uv.y * 12.0)
    return smoothstep(CONTINENT_LOW, CONTINENT_HIGH, n)


@ti.func
def cloud_cover(uv: vec2, time: ti.f32) -> ti.f32:
    """Cloud opacity in [0, CLOUD_OPACITY] scrolling with time."""
    n = fractal_noise((uv.x + 0.1) * 20.0 + (uv.y - 0.05) * 17.0 - time * 0.02)
    return smoothstep(CLOUD_LOW, CLOUD_HIGH, n) * CLOUD_OPACITY


@ti.func
def shade_rocky(normal: vec3, uv: vec2, light_dir: vec3, time: ti.f32) -> vec3:
    """Shade a point on the rocky planet.

    Args:
        normal: The unit surface normal.
        uv: The equirectangular coordinates of the normal.
        light_dir: The unit direction toward the light.
        time: The frame time in seconds.

    Returns:
        The lit linear RGB colour, each channel in [0, 1].
    """
    mask = continent_mask(uv)
    surface = tm.mix(rock_color(normal.y), LAND_COLOR, mask)

    highlight = specular_term(VIEW_DIR, light_dir, normal, SHININESS)
    clouds = cloud_cover(uv, time)

    color = surface * SURFACE_WEIGHT + SEA_COLOR * SEA_WEIGHT
    color += highlight * SPECULAR_STRENGTH + clouds * CLOUD_COLOR
    color = tm.clamp(color, 0.0, 1.0)

    return color * lambert_term(light_dir, normal, AMBIENT)
