"""Core rendering module.

Components:
    noise: Deterministic integer hash, value noise and fractal noise
    ray: Ray data structure, vector utilities and sphere (u, v) mapping
    compositor: Per-pixel ray casting, shading dispatch and background glow
    renderer: FrameRenderer host API (single frames and sequences)

All per-pixel operations are Taichi functions and run inside kernels.
"""

from .noise import (
    FRACTAL_NOISE_MAX,
    OCTAVES,
    fractal_noise,
    hash_u32,
    smoothstep,
    value_noise,
)
from .ray import (
    Ray,
    dot,
    length,
    make_ray,
    normalize,
    ray_at,
    reflect,
    sphere_uv,
    vec2,
    vec3,
)

# Note: compositor and renderer are NOT imported here because they declare
# Taichi fields at import time. Import them directly after ti.init():
#   from orrery.core.renderer import FrameRenderer

__all__ = [
    "hash_u32",
    "value_noise",
    "fractal_noise",
    "smoothstep",
    "OCTAVES",
    "FRACTAL_NOISE_MAX",
    "Ray",
    "ray_at",
    "make_ray",
    "vec2",
    "vec3",
    "dot",
    "length",
    "normalize",
    "reflect",
    "sphere_uv",
]
