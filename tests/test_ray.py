"""Unit tests for the ray dataclass and vector utilities.

Tests cover:
- Ray construction and evaluation
- Length, normalization and dot product
- Clamped interpolation for scalars and vectors

Note: Imports are done inside test methods to avoid Taichi initialization issues.
The conftest.py fixture initializes Taichi before tests run.
"""

import taichi as ti


class TestRay:
    """Tests for Ray and ray_at."""

    def test_ray_at_moves_along_direction(self):
        """Test that ray_at returns origin + t * direction."""
        from src.spheretrace.core.ray import make_ray, ray_at, vec3

        point = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 0.0, 3.0), vec3(0.0, 0.0, -1.0))
            point[None] = ray_at(ray, 1.5)

        test_kernel()
        p = point[None]
        assert abs(p[0]) < 1e-6
        assert abs(p[1]) < 1e-6
        assert abs(p[2] - 1.5) < 1e-6

    def test_ray_at_zero_is_origin(self):
        """Test that t=0 gives the ray origin."""
        from src.spheretrace.core.ray import Ray, ray_at, vec3

        point = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(1.0, 2.0, 3.0), direction=vec3(1.0, 0.0, 0.0))
            point[None] = ray_at(ray, 0.0)

        test_kernel()
        p = point[None]
        assert abs(p[0] - 1.0) < 1e-6
        assert abs(p[1] - 2.0) < 1e-6
        assert abs(p[2] - 3.0) < 1e-6


class TestVectorUtilities:
    """Tests for length, normalize and dot."""

    def test_length_and_length_squared(self):
        """Test length of a 3-4-0 vector."""
        from src.spheretrace.core.ray import length, length_squared, vec3

        result = ti.field(dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel():
            v = vec3(3.0, 4.0, 0.0)
            result[0] = length(v)
            result[1] = length_squared(v)

        test_kernel()
        assert abs(result[0] - 5.0) < 1e-6
        assert abs(result[1] - 25.0) < 1e-5

    def test_normalize_produces_unit_vector(self):
        """Test that normalize returns a unit vector in the same direction."""
        from src.spheretrace.core.ray import dot, length, normalize, vec3

        result = ti.field(dtype=ti.f32, shape=2)

        @ti.kernel
        def test_kernel():
            v = vec3(-319.5, 239.5, -240.0)
            n = normalize(v)
            result[0] = length(n)
            result[1] = dot(n, v) / length(v)

        test_kernel()
        assert abs(result[0] - 1.0) < 1e-6
        assert abs(result[1] - 1.0) < 1e-5


class TestClampedLerp:
    """Tests for clamped_lerp."""

    def test_scalar_interpolation(self):
        """Test interior, end point and out-of-range parameters."""
        from src.spheretrace.core.ray import clamped_lerp

        result = ti.field(dtype=ti.f32, shape=5)

        @ti.kernel
        def test_kernel():
            result[0] = clamped_lerp(2.0, 4.0, 0.0)
            result[1] = clamped_lerp(2.0, 4.0, 0.5)
            result[2] = clamped_lerp(2.0, 4.0, 1.0)
            result[3] = clamped_lerp(2.0, 4.0, -3.0)
            result[4] = clamped_lerp(2.0, 4.0, 7.0)

        test_kernel()
        assert result[0] == 2.0
        assert abs(result[1] - 3.0) < 1e-6
        assert abs(result[2] - 4.0) < 1e-6
        assert result[3] == 2.0
        assert abs(result[4] - 4.0) < 1e-6

    def test_vector_interpolation(self):
        """Test interpolation between two vectors."""
        from src.spheretrace.core.ray import clamped_lerp, vec3

        result = ti.field(dtype=ti.math.vec3, shape=())

        @ti.kernel
        def test_kernel():
            result[None] = clamped_lerp(vec3(0.0, 1.0, 2.0), vec3(2.0, 1.0, 0.0), 0.25)

        test_kernel()
        v = result[None]
        assert abs(v[0] - 0.5) < 1e-6
        assert abs(v[1] - 1.0) < 1e-6
        assert abs(v[2] - 1.5) < 1e-6
