"""Ray data structure and vector utilities for the scene renderer.

This module provides the Ray dataclass and the small set of vector helpers
the intersector and shaders need. All helpers are Taichi functions so they
can be called from inside rendering kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 6.0)
    >>> direction = ti.math.vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3
vec2 = tm.vec2


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Primary rays are
            always built normalized.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors."""
    return tm.dot(a, b)


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return tm.sqrt(tm.dot(v, v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    Unlike tm.normalize, a zero-length input does not produce NaNs.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v, or the zero vector if v
        has zero length.
    """
    result = vec3(0.0, 0.0, 0.0)
    l = length(v)
    if l > 0.0:
        result = v / l
    return result


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        incident - 2 * dot(incident, normal) * normal.
    """
    return incident - 2.0 * tm.dot(incident, normal) * normal


@ti.func
def sphere_uv(normal: vec3) -> vec2:
    """Map a unit surface normal to equirectangular (u, v) coordinates.

    u = 0.5 + atan2(n.z, n.x) / (2 pi)
    v = 0.5 - asin(n.y) / pi

    Args:
        normal: The unit surface normal.

    Returns:
        A vec2 (u, v), both components in [0, 1].
    """
    u = 0.5 + tm.atan2(normal.z, normal.x) / (2.0 * tm.pi)
    # Clamp guards asin against |n.y| drifting just above 1
    v = 0.5 - tm.asin(tm.clamp(normal.y, -1.0, 1.0)) / tm.pi
    return vec2(u, v)
