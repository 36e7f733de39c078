"""Unit tests for runtime and render configuration.

Tests cover:
- Backend and thread validation in init_taichi
- RenderConfig dictionary round trip
- Building a camera from a RenderConfig
"""

import pytest


class TestInitTaichi:
    """Tests for init_taichi argument validation."""

    def test_unknown_arch(self):
        from raylight.config import init_taichi

        with pytest.raises(ValueError):
            init_taichi(arch="tpu")

    def test_invalid_thread_count(self):
        from raylight.config import init_taichi

        with pytest.raises(ValueError):
            init_taichi(arch="cpu", num_threads=0)


class TestRenderConfig:
    """Tests for RenderConfig."""

    def test_defaults(self):
        from raylight.config import RenderConfig

        config = RenderConfig()
        assert (config.width, config.height) == (400, 225)
        assert config.samples_per_pixel == 100
        assert config.max_depth == 50

    def test_dict_round_trip(self):
        from raylight.config import RenderConfig

        config = RenderConfig(width=64, height=32, look_from=(-2.0, 2.0, 1.0), seed=3)
        data = config.to_dict()
        assert data["look_from"] == [-2.0, 2.0, 1.0]
        assert RenderConfig.from_dict(data) == config

    def test_from_dict_ignores_unknown_keys(self):
        from raylight.config import RenderConfig

        config = RenderConfig.from_dict({"width": 10, "exposure": 2.0})
        assert config.width == 10
        assert config.height == 225

    def test_build_camera(self):
        from raylight.config import RenderConfig
        from raylight.core.vector import Point, Vector

        config = RenderConfig(
            width=32,
            height=16,
            samples_per_pixel=4,
            max_depth=6,
            vfov=20.0,
            look_from=(-2.0, 2.0, 1.0),
            look_at=(0.0, 0.0, -1.0),
            defocus_angle=10.0,
            focus_distance=3.4,
            seed=9,
        )
        camera = config.build_camera()
        assert (camera.image_width, camera.image_height) == (32, 16)
        assert camera.samples_per_pixel == 4
        assert camera.max_depth == 6
        assert camera.vfov == 20.0
        assert camera.look_from == Point(-2.0, 2.0, 1.0)
        assert camera.look_at == Point(0.0, 0.0, -1.0)
        assert camera.view_up == Vector(0.0, 1.0, 0.0)
        assert camera.defocus_angle == 10.0
        assert camera.focus_distance == 3.4
        assert camera.seed == 9

    def test_build_camera_rejects_empty_image(self):
        from raylight.config import RenderConfig

        with pytest.raises(ValueError):
            RenderConfig(width=0).build_camera()
