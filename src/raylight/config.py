"""Runtime and render configuration.

Example:
    >>> from raylight.config import RenderConfig, init_taichi
    >>> init_taichi(arch="cpu", num_threads=4)
    >>> config = RenderConfig(width=200, height=100, samples_per_pixel=8)
    >>> camera = config.build_camera()
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any

import taichi as ti

from raylight.camera.camera import Camera
from raylight.core.vector import Point, Vector

# Backends accepted by init_taichi
ARCHS = {
    "cpu": ti.cpu,
    "gpu": ti.gpu,
    "cuda": ti.cuda,
    "vulkan": ti.vulkan,
    "metal": ti.metal,
}


def init_taichi(arch: str = "cpu", num_threads: int | None = None, debug: bool = False) -> None:
    """Initialize the Taichi runtime.

    Must run before any scene or camera is created, since both allocate
    Taichi fields.

    Args:
        arch: Backend name, one of ARCHS. Only "cpu" is exercised by tests.
        num_threads: Maximum number of CPU worker threads. None lets Taichi
            use every core.
        debug: Enable Taichi's debug mode (bounds checks).

    Raises:
        ValueError: If the backend name is unknown or num_threads < 1.
    """
    if arch not in ARCHS:
        raise ValueError(f"Unknown arch {arch!r}, expected one of {sorted(ARCHS)}")
    kwargs: dict[str, Any] = {"arch": ARCHS[arch], "default_fp": ti.f32, "debug": debug}
    if num_threads is not None:
        if num_threads < 1:
            raise ValueError(f"num_threads must be at least 1, got {num_threads}")
        kwargs["cpu_max_num_threads"] = num_threads
    ti.init(**kwargs)


@dataclass
class RenderConfig:
    """Render settings in plain, JSON-friendly values.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Random samples averaged per pixel.
        max_depth: Maximum number of ray bounces.
        vfov: Vertical field of view in degrees.
        look_from: Camera position (x, y, z).
        look_at: Point the camera is looking at (x, y, z).
        view_up: Camera-relative up direction (x, y, z).
        defocus_angle: Defocus cone angle in degrees. 0 disables it.
        focus_distance: Distance to the plane of perfect focus.
        seed: Seed of the per-row random streams.
    """

    width: int = 400
    height: int = 225
    samples_per_pixel: int = 100
    max_depth: int = 50
    vfov: float = 90.0
    look_from: tuple[float, float, float] = (0.0, 0.0, 0.0)
    look_at: tuple[float, float, float] = (0.0, 0.0, -1.0)
    view_up: tuple[float, float, float] = (0.0, 1.0, 0.0)
    defocus_angle: float = 0.0
    focus_distance: float = 1.0
    seed: int = 0

    def build_camera(self) -> Camera:
        """Create a camera with these settings.

        Raises:
            ValueError: If width or height is less than 1.
        """
        camera = Camera(self.width, self.height)
        camera.samples_per_pixel = self.samples_per_pixel
        camera.max_depth = self.max_depth
        camera.vfov = self.vfov
        camera.look_from = Point(*self.look_from)
        camera.look_at = Point(*self.look_at)
        camera.view_up = Vector(*self.view_up)
        camera.defocus_angle = self.defocus_angle
        camera.focus_distance = self.focus_distance
        camera.seed = self.seed
        return camera

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        for name in ("look_from", "look_at", "view_up"):
            data[name] = list(data[name])
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RenderConfig:
        """Build a config from a dictionary, ignoring unknown keys.

        Missing keys keep their defaults.
        """
        known = {f.name for f in fields(cls)}
        values = {key: value for key, value in data.items() if key in known}
        for name in ("look_from", "look_at", "view_up"):
            if name in values:
                values[name] = tuple(float(c) for c in values[name])
        return cls(**values)
