"""Materials module: procedural shaders for the scene's bodies.

Components:
    lighting: Lambert and Phong terms shared by the shaders
    star: Emissive star with pulsing glow and limb brightening
    rocky: Rock, continents, specular highlight and drifting clouds
    gas_giant: Latitude bands and storm spots
    moon: Noise-grey cratered surface

Each shader is a pure Taichi function of the surface normal (and position,
uv, light direction, time as needed) returning linear RGB. The compositor
selects one per hit using the body's MaterialType.
"""

from .gas_giant import band_blend, shade_gas_giant, storm_mask
from .lighting import lambert_term, specular_term
from .moon import shade_moon
from .rocky import cloud_cover, continent_mask, rock_color, shade_rocky
from .star import shade_star, star_intensity

__all__ = [
    "lambert_term",
    "specular_term",
    "shade_star",
    "star_intensity",
    "shade_rocky",
    "rock_color",
    "continent_mask",
    "cloud_cover",
    "shade_gas_giant",
    "band_blend",
    "storm_mask",
    "shade_moon",
]
