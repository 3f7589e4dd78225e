"""Scene-level nearest-hit resolution.

This module stores the bodies of the current frame in Taichi fields and
provides the scene query used by the frame kernel: test a ray against every
body and keep the nearest hit together with its material tag.

The result depends only on hit distances, not on the order bodies are
stored in. When two bodies report exactly the same distance, the one stored
first wins.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from orrery.scene.config import SceneConfig
    >>> from orrery.scene.intersection import set_bodies
    >>> from orrery.scene.solar_system import build_bodies
    >>> set_bodies(build_bodies(SceneConfig(), time=0.0))
    >>> # Use intersect_scene within a Taichi kernel
"""

from collections.abc import Sequence

import taichi as ti
import taichi.math as tm

from orrery.geometry.sphere import Sphere, hit_sphere
from orrery.scene.config import BodyInfo

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Material tag of a miss record
NO_MATERIAL = -1

# Upper bound on hit distance
T_MAX = 1e10


@ti.dataclass
class SceneHitRecord:
    """Record of a ray-scene intersection with material information.

    Attributes:
        hit: Whether the ray intersected any body (1 if hit, 0 if miss).
        t: The distance along the ray to the nearest hit.
            Only valid if hit == 1.
        point: The 3D point of the nearest hit. Only valid if hit == 1.
        normal: The outward unit normal at the hit. Only valid if hit == 1.
        center: The center of the body that was hit. Only valid if hit == 1.
        material: The MaterialType of the body that was hit, or
            NO_MATERIAL for a miss.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    center: vec3
    material: ti.i32


# Maximum number of bodies supported in the scene
MAX_BODIES = 16

# Body storage: Structure of Arrays layout
body_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_BODIES)
body_radii = ti.field(dtype=ti.f32, shape=MAX_BODIES)
body_materials = ti.field(dtype=ti.i32, shape=MAX_BODIES)
num_bodies = ti.field(dtype=ti.i32, shape=())


def clear_scene() -> None:
    """Remove all bodies from the scene."""
    num_bodies[None] = 0


def add_body(body: BodyInfo) -> int:
    """Add a body to the scene.

    Args:
        body: The body to append.

    Returns:
        The index of the added body.

    Raises:
        RuntimeError: If the maximum number of bodies is exceeded.
        ValueError: If the body's radius is not positive.
    """
    idx = num_bodies[None]
    if idx >= MAX_BODIES:
        raise RuntimeError(f"Maximum number of bodies ({MAX_BODIES}) exceeded")
    if body.radius <= 0.0:
        raise ValueError(f"Body radius must be positive, got {body.radius}")
    body_centers[idx] = list(body.center)
    body_radii[idx] = body.radius
    body_materials[idx] = int(body.material)
    num_bodies[None] = idx + 1
    return idx


def set_bodies(bodies: Sequence[BodyInfo]) -> None:
    """Replace the scene's bodies, keeping the given test order."""
    clear_scene()
    for body in bodies:
        add_body(body)


def get_body_count() -> int:
    """Get the number of bodies in the scene."""
    return int(num_bodies[None])


@ti.func
def _make_miss_record() -> SceneHitRecord:
    """Create a SceneHitRecord indicating no intersection."""
    return SceneHitRecord(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        center=vec3(0.0, 0.0, 0.0),
        material=NO_MATERIAL,
    )


@ti.func
def intersect_scene(ray_origin: vec3, ray_direction: vec3) -> SceneHitRecord:
    """Find the nearest body hit by a ray.

    Folds over every stored body, keeping the hit with the smallest
    distance. A later body replaces the current best only when strictly
    nearer.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.

    Returns:
        A SceneHitRecord for the nearest hit, or a miss record.
    """
    closest_t = T_MAX
    result = _make_miss_record()

    for i in range(num_bodies[None]):
        center = body_centers[i]
        sphere = Sphere(center=center, radius=body_radii[i])
        rec = hit_sphere(ray_origin, ray_direction, sphere)
        if rec.hit == 1 and rec.t < closest_t:
            closest_t = rec.t
            result = SceneHitRecord(
                hit=1,
                t=rec.t,
                point=rec.point,
                normal=rec.normal,
                center=center,
                material=body_materials[i],
            )

    return result
