"""Scene configuration for the orrery renderer.

This module holds the read-only description of a scene: where the bodies
are, how large they are, where the light comes from, and where the camera
sits. A SceneConfig is passed explicitly to the renderer; nothing in the
package reads scene constants from module globals.

Configurations can be exported to and loaded from plain dictionaries, which
makes them easy to store as JSON next to rendered frames.

Example:
    >>> from orrery.scene.config import SceneConfig
    >>> config = SceneConfig(gas_giant_radius=1.5)
    >>> data = config.to_dict()
    >>> SceneConfig.from_dict(data) == config
    True
"""

from __future__ import annotations

import json
import math
from dataclasses import asdict, dataclass, fields, replace
from enum import IntEnum
from pathlib import Path
from typing import Any

Vector3 = tuple[float, float, float]


class MaterialType(IntEnum):
    """Enumeration of the body shaders.

    Used as the closed dispatch tag in the frame kernel to pick the shading
    function for the nearest hit.
    """

    STAR = 0
    ROCKY = 1
    MOON = 2
    GAS_GIANT = 3


@dataclass(frozen=True)
class BodyInfo:
    """One sphere of the scene for a single frame.

    Attributes:
        material: The shader used for this body.
        center: The center of the sphere.
        radius: The radius of the sphere.
    """

    material: MaterialType
    center: Vector3
    radius: float


@dataclass(frozen=True)
class SceneConfig:
    """Constants describing the scene.

    The defaults lay the scene out with a star on the far left, the
    rocky planet just right of the image center with its moon on a tilted
    elliptical orbit, and a gas giant on the right.

    Attributes:
        star_center: Center of the star.
        star_radius: Radius of the star.
        rocky_center: Center of the rocky planet.
        rocky_radius: Radius of the rocky planet.
        gas_giant_center: Center of the gas giant.
        gas_giant_radius: Radius of the gas giant.
        moon_radius: Radius of the moon.
        moon_orbit_radius: Orbit radius of the moon around the rocky planet.
        moon_orbit_speed: Angular speed of the moon in radians per second.
        moon_orbit_scale: Per-axis scale of the orbit (x cos, y sin, z sin).
        moon_orbit_lift: Vertical offset of the orbit plane.
        light_direction: Direction toward the light (normalized on use).
        camera_position: Camera position. The camera looks down -z.
        vfov: Vertical field of view in degrees.
        background_color: Ambient colour of empty space.
        glow_strength: Scale of the star glow seen in empty space.
        glow_exponent: Falloff exponent of the star glow.
        glow_tint: Per-channel tint of the star glow.
    """

    star_center: Vector3 = (-4.0, 1.5, 0.0)
    star_radius: float = 0.8
    rocky_center: Vector3 = (0.3, -0.4, 0.0)
    rocky_radius: float = 0.7
    gas_giant_center: Vector3 = (4.5, 0.5, -0.5)
    gas_giant_radius: float = 1.2
    moon_radius: float = 0.14
    moon_orbit_radius: float = 1.6
    moon_orbit_speed: float = 0.5
    moon_orbit_scale: Vector3 = (0.8, 0.4, 0.5)
    moon_orbit_lift: float = 0.15
    light_direction: Vector3 = (-0.6, 0.4, -1.0)
    camera_position: Vector3 = (0.0, 0.0, 6.0)
    vfov: float = 60.0
    background_color: Vector3 = (0.01, 0.01, 0.02)
    glow_strength: float = 2.5
    glow_exponent: float = 10.0
    glow_tint: Vector3 = (1.0, 0.6, 0.2)

    def validate(self) -> None:
        """Check the configuration for values the renderer cannot use.

        Raises:
            ValueError: If any radius is not positive, the light direction is
                zero, or the field of view is outside (0, 180) degrees.
        """
        for name in ("star_radius", "rocky_radius", "gas_giant_radius", "moon_radius"):
            value = getattr(self, name)
            if value <= 0.0:
                raise ValueError(f"{name} must be positive, got {value}")

        if self.moon_orbit_radius <= 0.0:
            raise ValueError(f"moon_orbit_radius must be positive, got {self.moon_orbit_radius}")

        if math.hypot(*self.light_direction) == 0.0:
            raise ValueError("light_direction must be non-zero")

        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {self.vfov}")

        if self.glow_exponent < 0.0:
            raise ValueError(f"glow_exponent must be non-negative, got {self.glow_exponent}")

    def normalized_light_direction(self) -> Vector3:
        """Get the unit direction toward the light."""
        lx, ly, lz = self.light_direction
        norm = math.sqrt(lx * lx + ly * ly + lz * lz)
        return (lx / norm, ly / norm, lz / norm)

    def with_changes(self, **changes: Any) -> SceneConfig:
        """Return a copy with some fields replaced."""
        return replace(self, **changes)

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_dict(self) -> dict[str, Any]:
        """Export the configuration to a JSON-compatible dictionary.

        Vectors are exported as lists.
        """
        data = asdict(self)
        for key, value in data.items():
            if isinstance(value, tuple):
                data[key] = list(value)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SceneConfig:
        """Build a configuration from a dictionary.

        Keys missing from data keep their default values.

        Args:
            data: Dictionary as produced by to_dict().

        Returns:
            The validated configuration.

        Raises:
            ValueError: If data contains unknown keys, a vector does not have
                three components, or the resulting configuration is invalid.
        """
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ValueError(f"Unknown scene config keys: {', '.join(unknown)}")

        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            default = getattr(cls, key)
            if isinstance(default, tuple):
                if len(value) != 3:
                    raise ValueError(f"{key} must have 3 components, got {len(value)}")
                kwargs[key] = (float(value[0]), float(value[1]), float(value[2]))
            else:
                kwargs[key] = float(value)

        config = cls(**kwargs)
        config.validate()
        return config

    def to_json(self) -> str:
        """Export the configuration as a JSON string."""
        return json.dumps(self.to_dict(), indent=2)


def load_scene_config(path: str | Path) -> SceneConfig:
    """Load a scene configuration from a JSON file.

    Args:
        path: Path to a JSON object in the to_dict() format.

    Returns:
        The validated configuration.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or the content is invalid.
    """
    with open(path, encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"Scene config must be a JSON object, got {type(data).__name__}")
    return SceneConfig.from_dict(data)
