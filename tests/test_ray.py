"""Unit tests for the Ray dataclass and vector helpers."""

import math

import pytest
import taichi as ti


class TestRay:
    """Tests for Ray construction and evaluation."""

    def test_ray_at(self):
        """Test evaluating a point along a ray."""
        from orrery.core.ray import make_ray, ray_at, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 0.0, 6.0), vec3(0.0, 0.0, -1.0))
            result[None] = ray_at(ray, 2.5)

        test_kernel()
        p = result[None]
        assert p[0] == pytest.approx(0.0)
        assert p[1] == pytest.approx(0.0)
        assert p[2] == pytest.approx(3.5)


class TestVectorHelpers:
    """Tests for normalize, length and reflect."""

    def test_normalize_unit_length(self):
        """Test normalize returns a unit vector in the same direction."""
        from orrery.core.ray import length, normalize, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())
        result_len = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            n = normalize(vec3(3.0, 0.0, 4.0))
            result[None] = n
            result_len[None] = length(n)

        test_kernel()
        n = result[None]
        assert n[0] == pytest.approx(0.6, abs=1e-6)
        assert n[2] == pytest.approx(0.8, abs=1e-6)
        assert result_len[None] == pytest.approx(1.0, abs=1e-6)

    def test_normalize_zero_vector(self):
        """Test normalize of the zero vector gives zero, not NaN."""
        from orrery.core.ray import normalize, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = normalize(vec3(0.0, 0.0, 0.0))

        test_kernel()
        n = result[None]
        assert all(not math.isnan(n[i]) for i in range(3))
        assert all(n[i] == 0.0 for i in range(3))

    def test_reflect(self):
        """Test reflecting a 45 degree vector about +y."""
        from orrery.core.ray import reflect, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = reflect(vec3(1.0, -1.0, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        r = result[None]
        assert r[0] == pytest.approx(1.0)
        assert r[1] == pytest.approx(1.0)
        assert r[2] == pytest.approx(0.0)


class TestSphereUV:
    """Tests for equirectangular mapping of normals."""

    @pytest.mark.parametrize(
        "normal, expected",
        [
            ((1.0, 0.0, 0.0), (0.5, 0.5)),
            ((0.0, 0.0, 1.0), (0.75, 0.5)),
            ((0.0, 0.0, -1.0), (0.25, 0.5)),
            ((0.0, 1.0, 0.0), (0.5, 0.0)),
            ((0.0, -1.0, 0.0), (0.5, 1.0)),
        ],
    )
    def test_sphere_uv(self, normal, expected):
        """Test u from the azimuth and v from the latitude."""
        from orrery.core.ray import sphere_uv, vec3

        result = ti.Vector.field(2, dtype=ti.f32, shape=())
        nx, ny, nz = normal

        @ti.kernel
        def test_kernel():
            result[None] = sphere_uv(vec3(nx, ny, nz))

        test_kernel()
        uv = result[None]
        assert uv[0] == pytest.approx(expected[0], abs=1e-5)
        assert uv[1] == pytest.approx(expected[1], abs=1e-5)

    def test_sphere_uv_tolerates_unnormalized_y(self):
        """Test n.y slightly above 1 does not produce NaN."""
        from orrery.core.ray import sphere_uv, vec3

        result = ti.Vector.field(2, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = sphere_uv(vec3(0.0, 1.0000001, 0.0))

        test_kernel()
        assert not math.isnan(result[None][1])
