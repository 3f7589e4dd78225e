"""Shared lighting terms used by the body shaders."""

import taichi as ti
import taichi.math as tm

from orrery.core.ray import normalize, reflect

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def lambert_term(light_dir: vec3, normal: vec3, ambient: ti.f32) -> ti.f32:
    """Diffuse factor with an ambient floor.

    Computes ambient + (1 - ambient) * max(dot(normalize(light_dir), normal), 0),
    so the night side of a body never drops below the ambient level.

    Args:
        light_dir: Direction toward the light (normalized here).
        normal: The unit surface normal.
        ambient: The factor returned for surfaces facing away from the light.

    Returns:
        A factor in [ambient, 1].
    """
    n_dot_l = ti.max(tm.dot(normalize(light_dir), normal), 0.0)
    return ambient + (1.0 - ambient) * n_dot_l


@ti.func
def specular_term(view_dir: vec3, light_dir: vec3, normal: vec3, shininess: ti.f32) -> ti.f32:
    """Phong highlight: max(dot(view_dir, reflect(-light_dir, normal)), 0)^shininess.

    Args:
        view_dir: The unit view direction.
        light_dir: The unit direction toward the light.
        normal: The unit surface normal.
        shininess: The Phong exponent.

    Returns:
        The highlight intensity in [0, 1].
    """
    reflect_dir = reflect(-light_dir, normal)
    return ti.max(tm.dot(view_dir, reflect_dir), 0.0) ** shininess
