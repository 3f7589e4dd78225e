"""The reference solar system scene.

This module turns a SceneConfig and a frame time into the ordered list of
bodies the frame kernel tests against. The moon has no stored position: its
center is recomputed from the rocky planet, the orbit parameters and the
time on every call, so any frame can be rendered independently of every
other frame.

Example:
    >>> from orrery.scene.config import SceneConfig
    >>> from orrery.scene.solar_system import build_bodies
    >>> bodies = build_bodies(SceneConfig(), time=0.0)
    >>> [body.material.name for body in bodies]
    ['STAR', 'ROCKY', 'MOON', 'GAS_GIANT']
"""

from __future__ import annotations

import math

from orrery.scene.config import BodyInfo, MaterialType, SceneConfig, Vector3

# Period used to bound wall-clock time before rendering
TIME_WRAP_PERIOD = 10000.0


def moon_orbit_angle(config: SceneConfig, time: float) -> float:
    """Get the moon's orbit angle in radians at a given time."""
    return time * config.moon_orbit_speed


def moon_center(config: SceneConfig, time: float) -> Vector3:
    """Compute the moon's center at a given time.

    The orbit is a circle of radius moon_orbit_radius squashed per axis by
    moon_orbit_scale and lifted by moon_orbit_lift:

        x = rocky.x + R * cos(a) * sx
        y = rocky.y + R * sin(a) * sy + lift
        z = rocky.z + R * sin(a) * sz

    Args:
        config: The scene configuration.
        time: The frame time in seconds.

    Returns:
        The moon center as (x, y, z).
    """
    angle = moon_orbit_angle(config, time)
    radius = config.moon_orbit_radius
    sx, sy, sz = config.moon_orbit_scale
    rx, ry, rz = config.rocky_center
    return (
        rx + radius * math.cos(angle) * sx,
        ry + radius * math.sin(angle) * sy + config.moon_orbit_lift,
        rz + radius * math.sin(angle) * sz,
    )


def build_bodies(config: SceneConfig, time: float) -> list[BodyInfo]:
    """Build the scene's bodies for one frame.

    Args:
        config: The scene configuration.
        time: The frame time in seconds.

    Returns:
        The bodies in test order: star, rocky planet, moon, gas giant.
    """
    return [
        BodyInfo(MaterialType.STAR, config.star_center, config.star_radius),
        BodyInfo(MaterialType.ROCKY, config.rocky_center, config.rocky_radius),
        BodyInfo(MaterialType.MOON, moon_center(config, time), config.moon_radius),
        BodyInfo(MaterialType.GAS_GIANT, config.gas_giant_center, config.gas_giant_radius),
    ]


def star_direction(config: SceneConfig) -> Vector3:
    """Get the unit direction from the camera toward the star's center.

    Raises:
        ValueError: If the camera sits at the star's center.
    """
    dx, dy, dz = (s - c for s, c in zip(config.star_center, config.camera_position))
    norm = math.sqrt(dx * dx + dy * dy + dz * dz)
    if norm == 0.0:
        raise ValueError("camera_position coincides with star_center")
    return (dx / norm, dy / norm, dz / norm)


def wrap_time(seconds: float, period: float = TIME_WRAP_PERIOD) -> float:
    """Bound a wall-clock time to [0, period).

    Keeps the time argument small so f32 shader math keeps its precision
    over long runs.

    Args:
        seconds: The unbounded time, e.g. seconds since the epoch.
        period: The wrap period in seconds.

    Returns:
        seconds modulo period.

    Raises:
        ValueError: If period is not positive.
    """
    if period <= 0.0:
        raise ValueError(f"period must be positive, got {period}")
    return seconds % period
