"""Pytest configuration for raylight tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    from raylight.config import init_taichi

    init_taichi(arch="cpu")
    yield
    # Note: We don't call ti.reset() here as it can cause issues
    # with subsequent tests if any cleanup happens after


@pytest.fixture
def two_spheres_scene():
    """Small grey sphere on a ground sphere, both Lambertian."""
    from raylight.scene.demo import create_two_spheres_scene

    return create_two_spheres_scene()


@pytest.fixture
def forward_camera():
    """Low-resolution camera at the origin looking down -z."""
    from raylight.camera.camera import Camera
    from raylight.core.vector import Point

    camera = Camera(16, 9)
    camera.look_from = Point(0.0, 0.0, 0.0)
    camera.look_at = Point(0.0, 0.0, -1.0)
    camera.samples_per_pixel = 1
    camera.max_depth = 1
    return camera
