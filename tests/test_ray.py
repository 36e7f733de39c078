"""Unit tests for the kernel-side ray, vector helpers and intervals.

Tests cover:
- Ray evaluation at parameter t
- Dot, cross, length and normalize on vec3
- Reflect and refract (including total internal reflection)
- Near-zero detection at f32 precision
- Interval bounds excluded at both ends
"""

import math

import taichi as ti


class TestRay:
    """Tests for the Ray dataclass."""

    def test_ray_at(self):
        from raylight.core.ray import Ray, ray_at, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=3)

        @ti.kernel
        def test_kernel():
            ray = Ray(origin=vec3(1.0, 2.0, 3.0), direction=vec3(0.0, 0.0, -2.0))
            result[0] = ray_at(ray, 0.0)
            result[1] = ray_at(ray, 1.5)
            result[2] = ray_at(ray, -1.0)

        test_kernel()
        assert result[0].to_numpy().tolist() == [1.0, 2.0, 3.0]
        assert result[1].to_numpy().tolist() == [1.0, 2.0, 0.0]
        assert result[2].to_numpy().tolist() == [1.0, 2.0, 5.0]

    def test_make_ray_keeps_direction_length(self):
        """Directions are not normalized on construction."""
        from raylight.core.ray import length, make_ray, vec3

        result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            ray = make_ray(vec3(0.0, 0.0, 0.0), vec3(3.0, 4.0, 0.0))
            result[None] = length(ray.direction)

        test_kernel()
        assert abs(result[None] - 5.0) < 1e-6


class TestVectorHelpers:
    """Tests for dot, cross, length and normalize."""

    def test_dot_cross_length(self):
        from raylight.core.ray import cross, dot, length, length_squared, vec3

        dot_result = ti.field(dtype=ti.f32, shape=())
        len_result = ti.field(dtype=ti.f32, shape=2)
        cross_result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            a = vec3(1.0, 2.0, 3.0)
            b = vec3(4.0, 5.0, 6.0)
            dot_result[None] = dot(a, b)
            len_result[0] = length_squared(a)
            len_result[1] = length(vec3(0.0, 3.0, 4.0))
            cross_result[None] = cross(vec3(1.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0))

        test_kernel()
        assert dot_result[None] == 32.0
        assert len_result[0] == 14.0
        assert abs(len_result[1] - 5.0) < 1e-6
        assert cross_result[None].to_numpy().tolist() == [0.0, 0.0, 1.0]

    def test_normalize(self):
        from raylight.core.ray import length, normalize, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())
        result_len = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            n = normalize(vec3(2.0, -3.0, 6.0))
            result[None] = n
            result_len[None] = length(n)

        test_kernel()
        n = result[None]
        assert abs(n[0] - 2.0 / 7.0) < 1e-6
        assert abs(n[1] + 3.0 / 7.0) < 1e-6
        assert abs(n[2] - 6.0 / 7.0) < 1e-6
        assert abs(result_len[None] - 1.0) < 1e-6


class TestReflectRefract:
    """Tests for reflect and refract."""

    def test_reflect_negates_normal_component(self):
        """dot(reflect(v, n), n) == -dot(v, n)."""
        from raylight.core.ray import dot, normalize, reflect, vec3

        num = 8
        result = ti.field(dtype=ti.f32, shape=(num, 2))

        @ti.kernel
        def test_kernel():
            n = normalize(vec3(1.0, 2.0, 2.0))
            for i in range(num):
                v = vec3(ti.cast(i, ti.f32) - 3.0, 1.5, -0.5 * ti.cast(i, ti.f32))
                result[i, 0] = dot(reflect(v, n), n)
                result[i, 1] = -dot(v, n)

        test_kernel()
        for i in range(num):
            assert abs(result[i, 0] - result[i, 1]) < 1e-5

    def test_refract_unit_ratio_is_identity(self):
        from raylight.core.ray import normalize, refract, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())
        result_ok = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            v = normalize(vec3(1.0, -2.0, 0.5))
            direction, ok = refract(v, vec3(0.0, 1.0, 0.0), 1.0)
            result[None] = direction - v
            result_ok[None] = ok

        test_kernel()
        assert result_ok[None] == 1
        assert all(abs(c) < 1e-6 for c in result[None].to_numpy())

    def test_refract_snell(self):
        from raylight.core.ray import normalize, refract, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            v = normalize(vec3(1.0, -1.0, 0.0))
            direction, _ = refract(v, vec3(0.0, 1.0, 0.0), 1.0 / 1.5)
            result[None] = direction

        test_kernel()
        d = result[None]
        sin_t = math.sin(math.pi / 4.0) / 1.5
        assert abs(d[0] - sin_t) < 1e-5
        assert abs(d[1] + math.sqrt(1.0 - sin_t * sin_t)) < 1e-5
        assert abs(d[2]) < 1e-6

    def test_refract_total_internal_reflection(self):
        from raylight.core.ray import normalize, refract, vec3

        result_ok = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            v = normalize(vec3(1.0, -0.1, 0.0))
            _, ok = refract(v, vec3(0.0, 1.0, 0.0), 1.5)
            result_ok[None] = ok

        test_kernel()
        assert result_ok[None] == 0

    def test_near_zero(self):
        from raylight.core.ray import near_zero, vec3

        result = ti.field(dtype=ti.i32, shape=3)

        @ti.kernel
        def test_kernel():
            result[0] = near_zero(vec3(0.0, 0.0, 0.0))
            result[1] = near_zero(vec3(1e-9, -1e-9, 0.0))
            result[2] = near_zero(vec3(0.0, 1e-3, 0.0))

        test_kernel()
        assert result[0] == 1
        assert result[1] == 1
        assert result[2] == 0


class TestInterval:
    """Tests for the open Interval."""

    def test_contains_excludes_both_bounds(self):
        from raylight.core.interval import contains, make_interval

        result = ti.field(dtype=ti.i32, shape=5)

        @ti.kernel
        def test_kernel():
            interval = make_interval(1.0, 2.0)
            result[0] = contains(interval, 1.0)
            result[1] = contains(interval, 1.5)
            result[2] = contains(interval, 2.0)
            result[3] = contains(interval, 0.5)
            result[4] = contains(interval, 2.5)

        test_kernel()
        assert [result[i] for i in range(5)] == [0, 1, 0, 0, 0]

    def test_unbounded_interval(self):
        from raylight.core.interval import T_MAX, T_MIN, contains, make_interval

        result = ti.field(dtype=ti.i32, shape=3)

        @ti.kernel
        def test_kernel():
            interval = make_interval(T_MIN, T_MAX)
            result[0] = contains(interval, 1e30)
            result[1] = contains(interval, 0.0)
            result[2] = contains(interval, T_MIN)

        test_kernel()
        assert result[0] == 1
        assert result[1] == 0
        assert result[2] == 0
