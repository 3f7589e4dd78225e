"""Unit tests for SceneConfig validation, serialization and the solar system layout."""

import json
import math

import pytest


class TestSceneConfig:
    """Tests for SceneConfig defaults and validation."""

    def test_defaults(self):
        """Test default constants of the reference scene."""
        from orrery.scene.config import SceneConfig

        config = SceneConfig()
        assert config.star_center == (-4.0, 1.5, 0.0)
        assert config.star_radius == 0.8
        assert config.rocky_radius == 0.7
        assert config.gas_giant_center == (4.5, 0.5, -0.5)
        assert config.gas_giant_radius == 1.2
        assert config.moon_radius == 0.14
        assert config.moon_orbit_radius == 1.6
        assert config.camera_position == (0.0, 0.0, 6.0)
        assert config.vfov == 60.0
        config.validate()

    @pytest.mark.parametrize(
        "changes",
        [
            {"star_radius": 0.0},
            {"rocky_radius": -1.0},
            {"gas_giant_radius": 0.0},
            {"moon_radius": -0.1},
            {"moon_orbit_radius": 0.0},
            {"light_direction": (0.0, 0.0, 0.0)},
            {"vfov": 0.0},
            {"vfov": 180.0},
            {"glow_exponent": -1.0},
        ],
    )
    def test_validate_rejects_invalid(self, changes):
        """Test validate raises ValueError for unusable values."""
        from orrery.scene.config import SceneConfig

        with pytest.raises(ValueError):
            SceneConfig().with_changes(**changes).validate()

    def test_normalized_light_direction(self):
        """Test the light direction is returned as a unit vector."""
        from orrery.scene.config import SceneConfig

        lx, ly, lz = SceneConfig().normalized_light_direction()
        assert math.sqrt(lx * lx + ly * ly + lz * lz) == pytest.approx(1.0)
        assert lx < 0.0 and ly > 0.0 and lz < 0.0

    def test_config_is_frozen(self):
        """Test configurations cannot be mutated in place."""
        from dataclasses import FrozenInstanceError

        from orrery.scene.config import SceneConfig

        config = SceneConfig()
        with pytest.raises(FrozenInstanceError):
            config.star_radius = 2.0


class TestSceneConfigSerialization:
    """Tests for dictionary and JSON round trips."""

    def test_dict_round_trip(self):
        """Test from_dict(to_dict()) reproduces the configuration."""
        from orrery.scene.config import SceneConfig

        config = SceneConfig(gas_giant_radius=1.5, light_direction=(1.0, 1.0, -1.0))
        assert SceneConfig.from_dict(config.to_dict()) == config

    def test_to_dict_is_json_compatible(self):
        """Test vectors are exported as lists."""
        from orrery.scene.config import SceneConfig

        data = json.loads(SceneConfig().to_json())
        assert data["star_center"] == [-4.0, 1.5, 0.0]
        assert data["moon_radius"] == 0.14

    def test_from_dict_partial_uses_defaults(self):
        """Test missing keys keep their defaults."""
        from orrery.scene.config import SceneConfig

        config = SceneConfig.from_dict({"moon_radius": 0.2})
        assert config.moon_radius == 0.2
        assert config.star_radius == SceneConfig().star_radius

    def test_from_dict_unknown_key(self):
        """Test unknown keys are rejected."""
        from orrery.scene.config import SceneConfig

        with pytest.raises(ValueError, match="Unknown"):
            SceneConfig.from_dict({"planet_count": 7})

    def test_from_dict_bad_vector(self):
        """Test vectors must have three components."""
        from orrery.scene.config import SceneConfig

        with pytest.raises(ValueError, match="3 components"):
            SceneConfig.from_dict({"star_center": [1.0, 2.0]})

    def test_from_dict_validates(self):
        """Test invalid values are rejected on load."""
        from orrery.scene.config import SceneConfig

        with pytest.raises(ValueError):
            SceneConfig.from_dict({"star_radius": -1.0})

    def test_load_scene_config(self, tmp_path):
        """Test loading a configuration from a JSON file."""
        from orrery.scene.config import SceneConfig, load_scene_config

        path = tmp_path / "scene.json"
        path.write_text(json.dumps({"rocky_center": [0.0, 0.0, 0.0], "vfov": 45}))

        config = load_scene_config(path)
        assert config.rocky_center == (0.0, 0.0, 0.0)
        assert config.vfov == 45.0
        assert config.star_center == SceneConfig().star_center

    def test_load_scene_config_not_an_object(self, tmp_path):
        """Test a JSON array is rejected."""
        from orrery.scene.config import load_scene_config

        path = tmp_path / "scene.json"
        path.write_text("[1, 2, 3]")
        with pytest.raises(ValueError, match="JSON object"):
            load_scene_config(path)

    def test_load_scene_config_missing_file(self, tmp_path):
        """Test a missing file raises OSError."""
        from orrery.scene.config import load_scene_config

        with pytest.raises(OSError):
            load_scene_config(tmp_path / "missing.json")


class TestSolarSystem:
    """Tests for per-frame body layout and the moon orbit."""

    def test_moon_center_at_time_zero(self):
        """Test the moon starts on the +x side of the rocky planet."""
        from orrery.scene.config import SceneConfig
        from orrery.scene.solar_system import moon_center

        config = SceneConfig()
        rx, ry, rz = config.rocky_center
        mx, my, mz = moon_center(config, 0.0)
        assert mx == pytest.approx(rx + 1.6 * 0.8)
        assert my == pytest.approx(ry + 0.15)
        assert mz == pytest.approx(rz)

    def test_moon_center_quarter_orbit(self):
        """Test the moon position a quarter orbit later."""
        from orrery.scene.config import SceneConfig
        from orrery.scene.solar_system import moon_center

        config = SceneConfig()
        rx, ry, rz = config.rocky_center
        # Angle = time * 0.5, so time = pi gives a quarter orbit
        mx, my, mz = moon_center(config, math.pi)
        assert mx == pytest.approx(rx, abs=1e-9)
        assert my == pytest.approx(ry + 1.6 * 0.4 + 0.15)
        assert mz == pytest.approx(rz + 1.6 * 0.5)

    def test_moon_orbit_is_periodic(self):
        """Test the moon returns after one full orbit."""
        from orrery.scene.config import SceneConfig
        from orrery.scene.solar_system import moon_center

        config = SceneConfig()
        period = 2.0 * math.pi / config.moon_orbit_speed
        start = moon_center(config, 1.25)
        later = moon_center(config, 1.25 + period)
        assert later == pytest.approx(start)

    def test_build_bodies_order(self):
        """Test bodies are built in star, rocky, moon, gas giant order."""
        from orrery.scene.config import MaterialType, SceneConfig
        from orrery.scene.solar_system import build_bodies, moon_center

        config = SceneConfig()
        bodies = build_bodies(config, 2.0)
        assert [b.material for b in bodies] == [
            MaterialType.STAR,
            MaterialType.ROCKY,
            MaterialType.MOON,
            MaterialType.GAS_GIANT,
        ]
        assert bodies[2].center == moon_center(config, 2.0)
        assert bodies[2].radius == config.moon_radius

    def test_star_direction(self):
        """Test the direction from the camera toward the star."""
        from orrery.scene.config import SceneConfig
        from orrery.scene.solar_system import star_direction

        dx, dy, dz = star_direction(SceneConfig())
        norm = math.sqrt(4.0**2 + 1.5**2 + 6.0**2)
        assert dx == pytest.approx(-4.0 / norm)
        assert dy == pytest.approx(1.5 / norm)
        assert dz == pytest.approx(-6.0 / norm)

    def test_star_direction_degenerate(self):
        """Test a camera inside the star's center is rejected."""
        from orrery.scene.config import SceneConfig
        from orrery.scene.solar_system import star_direction

        config = SceneConfig(camera_position=(-4.0, 1.5, 0.0))
        with pytest.raises(ValueError):
            star_direction(config)

    def test_wrap_time(self):
        """Test wall-clock times are bounded to the wrap period."""
        from orrery.scene.solar_system import TIME_WRAP_PERIOD, wrap_time

        assert wrap_time(12345.5) == pytest.approx(2345.5)
        assert wrap_time(1.7e9 + 12.0) == pytest.approx(12.0)
        assert 0.0 <= wrap_time(-1.0) < TIME_WRAP_PERIOD
        with pytest.raises(ValueError):
            wrap_time(10.0, period=0.0)
