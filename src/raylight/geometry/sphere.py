"""Sphere primitive and ray-sphere intersection.

The intersection solves the half-b form of the ray-sphere quadratic and
accepts the nearer root that lies inside the search interval, falling back to
the farther root. The stored normal always points away from the center; the
dielectric material works out which side the ray arrived from by itself.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raylight.geometry.sphere import intersect_sphere
    >>> # Use intersect_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from raylight.core.interval import Interval, contains
from raylight.core.ray import Ray, dot, ray_at
from raylight.geometry.intersection import Intersection
from raylight.materials.material import Material

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def intersect_sphere(
    center: vec3,
    radius: ti.f32,
    material: Material,
    ray: Ray,
    interval: Interval,
) -> Intersection:
    """Test a ray against a sphere.

    With oc = origin - center the quadratic is a*t^2 + 2*half_b*t + c = 0
    where:
        a = dot(direction, direction)
        half_b = dot(direction, oc)
        c = dot(oc, oc) - radius^2

    Args:
        center: The center of the sphere.
        radius: The radius of the sphere (positive).
        material: The material copied into the record on a hit.
        ray: The ray to test. Its direction need not be normalized.
        interval: Open range of accepted t values.

    Returns:
        An Intersection. hit == 0 when the discriminant is negative or
        neither root lies strictly inside the interval.
    """
    oc = ray.origin - center
    a = dot(ray.direction, ray.direction)
    half_b = dot(ray.direction, oc)
    c = dot(oc, oc) - radius * radius
    discriminant = half_b * half_b - a * c

    # Taichi requires outer-scope declaration
    did_hit = 0
    hit_t = 0.0
    hit_point = vec3(0.0, 0.0, 0.0)
    hit_normal = vec3(0.0, 0.0, 0.0)

    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)

        # Nearer root first
        root = (-half_b - sqrt_d) / a
        valid = contains(interval, root)
        if valid == 0:
            root = (-half_b + sqrt_d) / a
            valid = contains(interval, root)

        if valid == 1:
            did_hit = 1
            hit_t = root
            hit_point = ray_at(ray, root)
            hit_normal = (hit_point - center) / radius

    return Intersection(
        hit=did_hit,
        t=hit_t,
        point=hit_point,
        normal=hit_normal,
        material=material,
    )
