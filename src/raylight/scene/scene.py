"""Scene storage and nearest-hit search.

The scene keeps an ordered list of shapes on the host and mirrors it into
Taichi fields (structure of arrays) so kernels can scan it. The search is a
linear scan with a shrinking upper bound: each hit narrows the interval, so
only strictly closer hits replace the running result and the first shape
found at the minimal t wins ties.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raylight.core import Color, Point, Vector
    >>> from raylight.materials import lambertian
    >>> from raylight.scene.scene import Scene
    >>> scene = Scene()
    >>> scene.add_sphere(Point(0.0, 0.0, -1.0), 0.5, lambertian(Color(0.5, 0.5, 0.5)))
    0
    >>> hit = scene.query(Point(0.0, 0.0, 0.0), Vector(0.0, 0.0, -1.0))
    >>> round(hit.t, 3)
    0.5
"""

import math
from dataclasses import dataclass
from typing import Any

import taichi as ti
import taichi.math as tm

from raylight.core.interval import Interval, make_interval
from raylight.core.ray import Ray
from raylight.core.vector import Point, Vector
from raylight.geometry.intersection import Intersection, no_intersection
from raylight.geometry.shape import Shape, SphereInfo, intersect_shape, shape_from_dict
from raylight.materials.material import Material, MaterialInfo, MaterialKind

# Type alias for 3D vectors
vec3 = tm.vec3

# Default number of shapes a scene can hold
MAX_SHAPES = 1024


@dataclass(frozen=True)
class HitInfo:
    """Host-side copy of an intersection found by :meth:`Scene.query`.

    Attributes:
        t: The ray parameter of the hit.
        point: The hit point.
        normal: The outward unit normal at the hit point.
        material_kind: The material variant of the shape that was hit.
    """

    t: float
    point: Point
    normal: Vector
    material_kind: MaterialKind


@ti.data_oriented
class Scene:
    """An ordered collection of shapes with nearest-hit search.

    Shapes are appended in insertion order and read-only while a kernel
    runs. Call :meth:`intersect` from Taichi code and :meth:`query` from
    Python.

    Storage for ``capacity`` shapes is allocated as Taichi fields up front
    and is only released when the Taichi runtime is reset. To build many
    scenes in one session, reuse a scene through :meth:`clear` or pass a
    smaller capacity.

    Attributes:
        capacity: Maximum number of shapes the scene can hold.
    """

    def __init__(self, capacity: int = MAX_SHAPES) -> None:
        if capacity < 1:
            raise ValueError(f"Scene capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._shapes: list[SphereInfo] = []

        # Shape storage: Structure of Arrays layout
        self._kinds = ti.field(dtype=ti.i32, shape=capacity)
        self._centers = ti.Vector.field(3, dtype=ti.f32, shape=capacity)
        self._radii = ti.field(dtype=ti.f32, shape=capacity)
        self._material_kinds = ti.field(dtype=ti.i32, shape=capacity)
        self._albedos = ti.Vector.field(3, dtype=ti.f32, shape=capacity)
        self._fuzzes = ti.field(dtype=ti.f32, shape=capacity)
        self._iors = ti.field(dtype=ti.f32, shape=capacity)
        self._count = ti.field(dtype=ti.i32, shape=())

        # Single-ray query results
        self._query_hit = ti.field(dtype=ti.i32, shape=())
        self._query_t = ti.field(dtype=ti.f32, shape=())
        self._query_point = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._query_normal = ti.Vector.field(3, dtype=ti.f32, shape=())
        self._query_material = ti.field(dtype=ti.i32, shape=())

    # -------------------------------------------------------------------------
    # Host API
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._shapes)

    @property
    def shapes(self) -> tuple[SphereInfo, ...]:
        """The shapes in insertion order."""
        return tuple(self._shapes)

    def add(self, shape: SphereInfo) -> int:
        """Append a shape to the scene.

        Args:
            shape: The shape to add.

        Returns:
            The index of the added shape.

        Raises:
            RuntimeError: If the scene is full.
        """
        idx = len(self._shapes)
        if idx >= self.capacity:
            raise RuntimeError(f"Maximum number of shapes ({self.capacity}) exceeded")

        material = shape.material
        self._kinds[idx] = int(shape.kind)
        self._centers[idx] = shape.center.to_list()
        self._radii[idx] = shape.radius
        self._material_kinds[idx] = int(material.kind)
        self._albedos[idx] = material.albedo.to_list()
        self._fuzzes[idx] = material.fuzz
        self._iors[idx] = material.ior

        self._shapes.append(shape)
        self._count[None] = idx + 1
        return idx

    def add_sphere(self, center: Point, radius: float, material: MaterialInfo) -> int:
        """Append a sphere to the scene.

        Raises:
            ValueError: If the radius is not positive.
            RuntimeError: If the scene is full.
        """
        return self.add(SphereInfo(center=center, radius=radius, material=material))

    def clear(self) -> None:
        """Remove all shapes.

        Field data is left in place and overwritten by later additions.
        """
        self._shapes.clear()
        self._count[None] = 0

    def query(
        self,
        origin: Point,
        direction: Vector,
        start: float = 0.0,
        end: float = math.inf,
    ) -> HitInfo | None:
        """Find the nearest hit along a single ray.

        Args:
            origin: The ray origin.
            direction: The ray direction (need not be normalized).
            start: Exclusive lower bound on t.
            end: Exclusive upper bound on t.

        Returns:
            The nearest hit, or None if the ray misses every shape.
        """
        self._query(vec3(*origin.to_list()), vec3(*direction.to_list()), start, end)
        if self._query_hit[None] == 0:
            return None
        return HitInfo(
            t=float(self._query_t[None]),
            point=Point(*self._query_point[None].to_numpy().tolist()),
            normal=Vector(*self._query_normal[None].to_numpy().tolist()),
            material_kind=MaterialKind(int(self._query_material[None])),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-friendly dictionary."""
        return {"shapes": [shape.to_dict() for shape in self._shapes]}

    @classmethod
    def from_dict(cls, data: dict[str, Any], capacity: int = MAX_SHAPES) -> "Scene":
        """Build a scene from a dictionary produced by :meth:`to_dict`.

        Raises:
            ValueError: If a shape or material entry is invalid.
            RuntimeError: If there are more shapes than ``capacity``.
        """
        scene = cls(capacity=capacity)
        for entry in data.get("shapes", []):
            scene.add(shape_from_dict(entry))
        return scene

    # -------------------------------------------------------------------------
    # Taichi functions
    # -------------------------------------------------------------------------

    @ti.func
    def shape(self, i: ti.i32) -> Shape:
        """Assemble the kernel-side record of shape ``i``."""
        material = Material(
            kind=self._material_kinds[i],
            albedo=self._albedos[i],
            fuzz=self._fuzzes[i],
            ior=self._iors[i],
        )
        return Shape(
            kind=self._kinds[i],
            center=self._centers[i],
            radius=self._radii[i],
            material=material,
        )

    @ti.func
    def intersect(self, ray: Ray, interval: Interval) -> Intersection:
        """Find the nearest intersection of ``ray`` inside ``interval``.

        Args:
            ray: The ray to test.
            interval: Open range of accepted t values.

        Returns:
            The closest Intersection, or one with hit == 0 if nothing was hit.
        """
        closest = interval.end
        result = no_intersection()

        # The running bound must be updated in order
        ti.loop_config(serialize=True)
        for i in range(self._count[None]):
            rec = intersect_shape(self.shape(i), ray, make_interval(interval.start, closest))
            if rec.hit == 1:
                closest = rec.t
                result = rec

        return result

    @ti.kernel
    def _query(self, origin: vec3, direction: vec3, start: ti.f32, end: ti.f32):
        ray = Ray(origin=origin, direction=direction)
        rec = self.intersect(ray, make_interval(start, end))
        self._query_hit[None] = rec.hit
        self._query_t[None] = rec.t
        self._query_point[None] = rec.point
        self._query_normal[None] = rec.normal
        self._query_material[None] = rec.material.kind
