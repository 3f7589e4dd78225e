"""Emissive star shader.

The star is not lit by the scene light; it is its own source. Its colour
combines three terms:

    intensity = clamp(1 / (0.5 + 5 r), 0, 1)           radial falloff
    pulse     = 0.5 + 0.5 sin(3 t + noise(normal))      animated glow
    rim       = (1 - |normal.z|)^6                      limb brightening

and blends a warm base tone (weighted by intensity) with an orange glow tone
(weighted by pulse * rim). Each channel is capped at 1.

Example:
    >>> # Within a Taichi kernel:
    >>> # color = shade_star(hit_point - star_center, normal, time)
"""

import taichi as ti
import taichi.math as tm

from orrery.core.noise import fractal_noise
from orrery.core.ray import length

# Type alias for 3D vectors
vec3 = tm.vec3

STAR_BASE_COLOR = vec3(1.0, 0.85, 0.3)
STAR_GLOW_COLOR = vec3(1.0, 0.5, 0.1)

# Per-channel weights of the base and glow tones
BASE_WEIGHT = vec3(0.7, 0.7, 0.5)
GLOW_WEIGHT = vec3(0.6, 0.6, 0.4)

PULSE_SPEED = 3.0
RIM_EXPONENT = 6.0


@ti.func
def star_intensity(r: ti.f32) -> ti.f32:
    """Radial falloff 1 / (0.5 + 5 r), clamped to [0, 1]."""
    return tm.clamp(1.0 / (0.5 + r * 5.0), 0.0, 1.0)


@ti.func
def shade_star(surface_pos: vec3, normal: vec3, time: ti.f32) -> vec3:
    """Shade a point on the star.

    Args:
        surface_pos: The hit point relative to the star center.
        normal: The unit surface normal.
        time: The frame time in seconds.

    Returns:
        The linear RGB colour, each channel at most 1.
    """
    intensity = star_intensity(length(surface_pos))
    flicker = fractal_noise(normal.x * 10.0 + normal.y * 7.0)
    pulse = 0.5 + 0.5 * tm.sin(time * PULSE_SPEED + flicker)
    rim = (1.0 - ti.abs(normal.z)) ** RIM_EXPONENT

    color = STAR_BASE_COLOR * BASE_WEIGHT * intensity + STAR_GLOW_COLOR * GLOW_WEIGHT * pulse * rim
    return tm.min(color, vec3(1.0, 1.0, 1.0))
