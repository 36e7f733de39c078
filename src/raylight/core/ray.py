"""Ray data structure and vector utilities for use inside Taichi kernels.

This module provides the Ray dataclass and the vector helpers that the
intersection, scattering and camera code call from within kernels. The host
counterparts of the same operations live on :class:`raylight.core.vector.Vector`.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from raylight.core.ray import Ray, ray_at, vec3
    >>> @ti.kernel
    ... def probe() -> vec3:
    ...     ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -1.0))
    ...     return ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Machine epsilon of the kernel float type (f32)
F32_EPSILON = 1.1920929e-07


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Not normalized;
            consumers normalize where they need a unit direction.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors."""
    return a.x * b.x + a.y * b.y + a.z * b.z


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return dot(v, v)


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return ti.sqrt(length_squared(v))


@ti.func
def normalize(v: vec3) -> vec3:
    """Scale a vector to unit length.

    There is no zero guard: a zero-length input yields NaN components, so
    callers check near_zero() first where that can happen.
    """
    return v / length(v)


@ti.func
def cross(a: vec3, b: vec3) -> vec3:
    """Compute the right-handed cross product a x b."""
    return vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal.

    Args:
        incident: The incoming direction. Need not point toward the surface.
        normal: The surface normal (unit length).

    Returns:
        incident - 2 * dot(incident, normal) * normal
    """
    return incident - 2.0 * dot(incident, normal) * normal


@ti.func
def refract(incident: vec3, normal: vec3, eta: ti.f32):
    """Refract an incident vector through a surface using Snell's law.

    Args:
        incident: The incoming direction (unit length).
        normal: The surface normal (unit length, facing against incident).
        eta: The ratio of refractive indices (n_incident / n_transmitted).

    Returns:
        A tuple (direction, ok). ok is 0 on total internal reflection, in
        which case direction is the zero vector and must not be used.
    """
    cos_i = ti.min(-dot(normal, incident), 1.0)
    sin2_t = eta * eta * (1.0 - cos_i * cos_i)
    result = vec3(0.0, 0.0, 0.0)
    ok = 0
    if sin2_t <= 1.0:
        cos_t = ti.sqrt(1.0 - sin2_t)
        result = eta * incident + (eta * cos_i - cos_t) * normal
        ok = 1
    return result, ok


@ti.func
def near_zero(v: vec3) -> ti.i32:
    """Check if a vector is near zero in all components.

    Catches degenerate scatter directions before they are used.

    Returns:
        1 if every component is below the f32 machine epsilon, 0 otherwise.
    """
    s = F32_EPSILON
    result = 0
    if ti.abs(v.x) < s and ti.abs(v.y) < s and ti.abs(v.z) < s:
        result = 1
    return result
