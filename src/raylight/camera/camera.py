"""Perspective camera with thin-lens defocus and the render loop.

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from look_at toward look_from (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The viewport lies on the plane of perfect focus, ``focus_distance`` in front
of the camera. Each sample jitters its target point inside the pixel square
and, when ``defocus_angle`` is positive, starts from a random point on the
defocus disk.

Rendering runs one kernel launch per batch of rows. Inside a launch the
outermost loop is over rows and is parallelized across CPU threads; pixels
in a row and samples in a pixel run serially. Each row draws from its own
random stream derived from (seed, row), so a render is reproducible for a
given seed regardless of thread count or batch size.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raylight.camera import Camera
    >>> from raylight.core import Point
    >>> from raylight.scene.demo import create_three_spheres_scene
    >>>
    >>> camera = Camera(200, 100)
    >>> camera.look_from = Point(0.0, 0.0, 0.0)
    >>> camera.look_at = Point(0.0, 0.0, -1.0)
    >>> pixels = camera.render(create_three_spheres_scene())
    >>> len(pixels)
    20000
"""

import math
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from raylight.core.color import Color
from raylight.core.interval import T_MAX, T_MIN, make_interval
from raylight.core.random import next_float, random_in_unit_disk, seed_stream
from raylight.core.ray import Ray, normalize
from raylight.core.vector import Point, Vector
from raylight.materials.scatter import scatter
from raylight.scene.scene import Scene

# Type alias for 3D vectors
vec3 = tm.vec3

# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


@dataclass(frozen=True)
class Viewport:
    """Derived viewport geometry.

    Attributes:
        pixel00: Center of the top-left pixel.
        pixel_delta_u: Offset to the pixel to the right.
        pixel_delta_v: Offset to the pixel below.
        defocus_disk_u: Horizontal radius vector of the defocus disk.
        defocus_disk_v: Vertical radius vector of the defocus disk.
        u: Camera right.
        v: Camera up.
        w: Camera backward (opposite the view direction).
    """

    pixel00: Point
    pixel_delta_u: Vector
    pixel_delta_v: Vector
    defocus_disk_u: Vector
    defocus_disk_v: Vector
    u: Vector
    v: Vector
    w: Vector


@ti.data_oriented
class Camera:
    """Perspective camera that renders a scene into linear RGB pixels.

    Set any of the attributes below before calling :meth:`render`; the
    viewport is rederived on every render.

    The pixel buffer is a Taichi field sized to the image and lives until
    the Taichi runtime is reset. Reuse one camera for repeated renders at
    the same resolution.

    Attributes:
        samples_per_pixel: Random samples averaged per pixel (>= 1).
        max_depth: Maximum number of ray bounces (>= 0).
        vfov: Vertical field of view in degrees.
        look_from: Camera position.
        look_at: Point the camera is looking at.
        view_up: Camera-relative up direction.
        defocus_angle: Cone angle in degrees of rays through each pixel.
            0 disables depth of field.
        focus_distance: Distance from look_from to the plane of focus.
        seed: Seed of the per-row random streams.
        rows_per_batch: Rows rendered per kernel launch, i.e. the progress
            reporting granularity.
    """

    def __init__(self, image_width: int, image_height: int) -> None:
        """Create a camera for the given resolution.

        Raises:
            ValueError: If either dimension is less than 1.
        """
        if image_width < 1 or image_height < 1:
            raise ValueError(
                f"Image dimensions must be at least 1x1, got {image_width}x{image_height}"
            )
        self._image_width = int(image_width)
        self._image_height = int(image_height)

        self.samples_per_pixel = 10
        self.max_depth = 10
        self.vfov = 90.0
        self.look_from = Point(0.0, 0.0, -1.0)
        self.look_at = Point(0.0, 0.0, 0.0)
        self.view_up = Vector(0.0, 1.0, 0.0)
        self.defocus_angle = 0.0
        self.focus_distance = 1.0
        self.seed = 0
        self.rows_per_batch = 64

        self.viewport: Viewport | None = None

        # Viewport state read by kernels
        self._origin = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._pixel00 = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._pixel_delta_u = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._pixel_delta_v = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._defocus_disk_u = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._defocus_disk_v = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._defocus_enabled = ti.field(dtype=ti.i32, shape=())

        # Row-major pixel buffer: _pixels[y, x]
        self._pixels = ti.Vector.field(3, dtype=ti.f32, shape=(self._image_height, self._image_width))

        # Single-ray sampling results
        self._sample_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._sample_direction = ti.Vector.field(3, dtype=ti.f32, shape=())

    @property
    def image_width(self) -> int:
        return self._image_width

    @property
    def image_height(self) -> int:
        return self._image_height

    # -------------------------------------------------------------------------
    # Setup (Python-side)
    # -------------------------------------------------------------------------

    def initialize(self) -> Viewport:
        """Derive the viewport from the current settings.

        Called by :meth:`render`. Computes the basis and pixel grid on the
        host in double precision and copies it into Taichi fields.

        Returns:
            The derived viewport, also stored as ``self.viewport``.

        Raises:
            ValueError: If samples_per_pixel < 1, max_depth < 0 or
                rows_per_batch < 1.
        """
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.rows_per_batch < 1:
            raise ValueError(f"rows_per_batch must be at least 1, got {self.rows_per_batch}")

        # Viewport dimensions on the focus plane
        aspect_ratio = self._image_width / self._image_height
        h = math.tan(math.radians(self.vfov) / 2.0)
        viewport_height = 2.0 * h * self.focus_distance
        viewport_width = viewport_height * aspect_ratio

        # Orthonormal basis
        w = (self.look_from - self.look_at).normalize()
        u = self.view_up.cross(w).normalize()
        v = w.cross(u)

        # Vectors across the horizontal and down the vertical viewport edges
        viewport_u = u * viewport_width
        viewport_v = -v * viewport_height

        pixel_delta_u = viewport_u / self._image_width
        pixel_delta_v = viewport_v / self._image_height

        viewport_top_left = (
            self.look_from - w * self.focus_distance - viewport_u / 2.0 - viewport_v / 2.0
        )
        pixel00 = viewport_top_left + (pixel_delta_u + pixel_delta_v) * 0.5

        defocus_radius = self.focus_distance * math.tan(math.radians(self.defocus_angle / 2.0))

        self.viewport = Viewport(
            pixel00=pixel00,
            pixel_delta_u=pixel_delta_u,
            pixel_delta_v=pixel_delta_v,
            defocus_disk_u=u * defocus_radius,
            defocus_disk_v=v * defocus_radius,
            u=u,
            v=v,
            w=w,
        )

        self._origin[None] = self.look_from.to_list()
        self._pixel00[None] = pixel00.to_list()
        self._pixel_delta_u[None] = pixel_delta_u.to_list()
        self._pixel_delta_v[None] = pixel_delta_v.to_list()
        self._defocus_disk_u[None] = self.viewport.defocus_disk_u.to_list()
        self._defocus_disk_v[None] = self.viewport.defocus_disk_v.to_list()
        self._defocus_enabled[None] = 1 if self.defocus_angle > 0.0 else 0

        return self.viewport

    # -------------------------------------------------------------------------
    # Rendering (Python-side)
    # -------------------------------------------------------------------------

    def render(self, scene: Scene, progress: ProgressCallback | None = None) -> list[Color]:
        """Render the scene.

        Args:
            scene: The :class:`raylight.scene.Scene` to render.
            progress: Optional callback called after each batch of rows with
                (rows_done, total_rows).

        Returns:
            width * height linear RGB colors, row-major from the top-left
            pixel. Values are neither clamped nor gamma-corrected.
        """
        array = self.render_array(scene, progress)
        return [Color(*rgb) for rgb in array.reshape(-1, 3).tolist()]

    def render_array(
        self, scene: Scene, progress: ProgressCallback | None = None
    ) -> npt.NDArray[np.float64]:
        """Render the scene into an array of shape (height, width, 3).

        Same as :meth:`render` without the per-pixel Color wrapping.
        """
        self.initialize()

        total = self._image_height
        seed = int(self.seed) & 0xFFFFFFFF
        for row_start in range(0, total, self.rows_per_batch):
            row_end = min(row_start + self.rows_per_batch, total)
            self._render_rows(
                scene, row_start, row_end, self.samples_per_pixel, self.max_depth, seed
            )
            if progress is not None:
                progress(row_end, total)

        return self._pixels.to_numpy().astype(np.float64)

    def get_ray(self, x: int, y: int, seed: int = 0) -> tuple[Point, Vector]:
        """Sample one camera ray through pixel (x, y).

        Uses the viewport from the last :meth:`initialize` call.

        Returns:
            The ray as (origin, direction).
        """
        self._sample_ray(x, y, int(seed) & 0xFFFFFFFF)
        origin = self._sample_origin[None].to_numpy().tolist()
        direction = self._sample_direction[None].to_numpy().tolist()
        return Point(*origin), Vector(*direction)

    # -------------------------------------------------------------------------
    # Taichi functions
    # -------------------------------------------------------------------------

    @ti.func
    def sample_ray(self, x: ti.i32, y: ti.i32, state: ti.u32):
        """Generate a jittered camera ray through pixel (x, y).

        Returns:
            A tuple (ray, state).
        """
        dx, s1 = next_float(state)
        dy, s2 = next_float(s1)
        pixel_sample = (
            self._pixel00[None]
            + (ti.cast(x, ti.f32) + dx - 0.5) * self._pixel_delta_u[None]
            + (ti.cast(y, ti.f32) + dy - 0.5) * self._pixel_delta_v[None]
        )

        origin = self._origin[None]
        new_state = s2
        if self._defocus_enabled[None] == 1:
            p, new_state = random_in_unit_disk(s2)
            origin = origin + p.x * self._defocus_disk_u[None] + p.y * self._defocus_disk_v[None]

        return Ray(origin=origin, direction=pixel_sample - origin), new_state

    @ti.func
    def ray_color(self, scene: ti.template(), ray: Ray, depth: ti.i32, state: ti.u32):
        """Estimate the radiance arriving along a ray.

        Follows scattered rays for at most ``depth`` bounces, carrying the
        running product of attenuations. A path that runs out of bounces or
        is absorbed contributes black; a path that escapes the scene picks
        up the sky color.

        Args:
            scene: The scene to intersect.
            ray: The ray to trace.
            depth: Remaining bounce budget.
            state: The caller's random stream.

        Returns:
            A tuple (color, state).
        """
        color = vec3(0.0, 0.0, 0.0)
        throughput = vec3(1.0, 1.0, 1.0)
        current = ray
        new_state = state

        # Active flag for path continuation (no break in ti.func loops)
        active = 1

        for _ in range(depth):
            if active == 1:
                hit = scene.intersect(current, make_interval(T_MIN, T_MAX))
                if hit.hit == 0:
                    color = throughput * sky_color(current.direction)
                    active = 0
                else:
                    scattered, attenuation, did_scatter, new_state = scatter(
                        hit.material, current, hit, new_state
                    )
                    if did_scatter == 0:
                        active = 0
                    else:
                        throughput = throughput * attenuation
                        current = scattered

        return color, new_state

    @ti.kernel
    def _render_rows(
        self,
        scene: ti.template(),
        row_start: ti.i32,
        row_end: ti.i32,
        samples: ti.i32,
        max_depth: ti.i32,
        seed: ti.u32,
    ):
        for y in range(row_start, row_end):
            state = seed_stream(seed, ti.cast(y, ti.u32))
            for x in range(self._image_width):
                total = vec3(0.0, 0.0, 0.0)
                for _ in range(samples):
                    ray, state = self.sample_ray(x, y, state)
                    radiance, state = self.ray_color(scene, ray, max_depth, state)
                    total += radiance
                self._pixels[y, x] = total / ti.cast(samples, ti.f32)

    @ti.kernel
    def _sample_ray(self, x: ti.i32, y: ti.i32, seed: ti.u32):
        state = seed_stream(seed, ti.cast(y, ti.u32))
        ray, state = self.sample_ray(x, y, state)
        self._sample_origin[None] = ray.origin
        self._sample_direction[None] = ray.direction


@ti.func
def sky_color(direction: vec3) -> vec3:
    """Vertical gradient from white at the horizon to pale blue overhead."""
    unit_direction = normalize(direction)
    a = 0.5 * (unit_direction.y + 1.0)
    return (1.0 - a) * vec3(1.0, 1.0, 1.0) + a * vec3(0.5, 0.7, 1.0)
