"""Ray-surface intersection record.

Example:
    >>> from raylight.geometry.intersection import Intersection, no_intersection
    >>> # Inside a Taichi function:
    >>> # hit = no_intersection()
    >>> # if hit.hit == 1: ...
"""

import taichi as ti
import taichi.math as tm

from raylight.materials.material import Material

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.dataclass
class Intersection:
    """Record of a ray-shape intersection.

    Attributes:
        hit: 1 if the ray intersected a shape, 0 if not. The remaining
            fields are only valid when hit == 1.
        t: The ray parameter of the intersection.
        point: The intersection point, ray_at(ray, t).
        normal: Unit surface normal, always pointing away from the shape's
            interior regardless of which side the ray arrived from.
        material: Copy of the material of the shape that was hit.
    """

    hit: ti.i32
    t: ti.f32
    point: vec3
    normal: vec3
    material: Material


@ti.func
def no_intersection() -> Intersection:
    """An empty record (hit == 0)."""
    return Intersection(
        hit=0,
        t=0.0,
        point=vec3(0.0, 0.0, 0.0),
        normal=vec3(0.0, 0.0, 0.0),
        material=Material(kind=0, albedo=vec3(0.0, 0.0, 0.0), fuzz=0.0, ior=1.0),
    )
