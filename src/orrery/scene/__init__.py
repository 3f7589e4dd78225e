"""Scene module: configuration, body layout and nearest-hit resolution.

Components:
    config: SceneConfig, MaterialType and BodyInfo
    solar_system: Moon orbit and per-frame body list
    intersection: Body storage in Taichi fields and the nearest-hit query

intersection declares Taichi fields and is not imported here; import it
directly after ti.init().
"""

from .config import BodyInfo, MaterialType, SceneConfig, load_scene_config
from .solar_system import (
    TIME_WRAP_PERIOD,
    build_bodies,
    moon_center,
    moon_orbit_angle,
    star_direction,
    wrap_time,
)

__all__ = [
    "SceneConfig",
    "MaterialType",
    "BodyInfo",
    "load_scene_config",
    "build_bodies",
    "moon_center",
    "moon_orbit_angle",
    "star_direction",
    "wrap_time",
    "TIME_WRAP_PERIOD",
]
