"""Shape variants: host description, kernel record and intersection dispatch.

Spheres are the only variant today. A new primitive adds a ShapeKind value,
the fields it needs on :class:`Shape`, and a branch in
:func:`intersect_shape`.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

import taichi as ti
import taichi.math as tm

from raylight.core.interval import Interval
from raylight.core.ray import Ray
from raylight.core.vector import Point
from raylight.geometry.intersection import Intersection, no_intersection
from raylight.geometry.sphere import intersect_sphere
from raylight.materials.material import Material, MaterialInfo

# Type alias for 3D vectors
vec3 = tm.vec3


class ShapeKind(IntEnum):
    """Enumeration of supported shape variants."""

    SPHERE = 0


@dataclass(frozen=True)
class SphereInfo:
    """Host-side description of a sphere in the scene.

    Attributes:
        center: The center of the sphere.
        radius: The radius of the sphere (positive).
        material: The material assigned to the sphere.
    """

    center: Point
    radius: float
    material: MaterialInfo

    kind = ShapeKind.SPHERE

    def __post_init__(self) -> None:
        if len(self.center) != 3:
            raise ValueError(f"Sphere center must be 3-dimensional, got {len(self.center)}")
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": "sphere",
            "center": self.center.to_list(),
            "radius": self.radius,
            "material": self.material.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SphereInfo":
        return cls(
            center=Point(*data["center"]),
            radius=float(data["radius"]),
            material=MaterialInfo.from_dict(data["material"]),
        )


def shape_from_dict(data: dict[str, Any]) -> SphereInfo:
    """Build a shape from its dictionary form.

    Raises:
        ValueError: If the shape type is unknown.
    """
    name = str(data.get("type", "")).lower()
    if name == "sphere":
        return SphereInfo.from_dict(data)
    raise ValueError(f"Unknown shape type: {data.get('type')!r}")


@ti.dataclass
class Shape:
    """Kernel-side shape record.

    Attributes:
        kind: The variant tag (see ShapeKind).
        center: Sphere center.
        radius: Sphere radius.
        material: The shape's material.
    """

    kind: ti.i32
    center: vec3
    radius: ti.f32
    material: Material


@ti.func
def intersect_shape(shape: Shape, ray: Ray, interval: Interval) -> Intersection:
    """Dispatch an intersection test on the shape's kind."""
    result = no_intersection()
    if shape.kind == int(ShapeKind.SPHERE):
        result = intersect_sphere(shape.center, shape.radius, shape.material, ray, interval)
    return result
