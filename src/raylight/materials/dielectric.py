"""Dielectric (transparent refractive) material such as glass or water.

Light hitting a dielectric is either reflected or refracted. The choice is
made stochastically, weighting reflection by Schlick's approximation to the
Fresnel equations:
    R(theta) = R0 + (1 - R0)(1 - cos(theta))^5
    R0 = ((1 - eta) / (1 + eta))^2

where eta is the ratio of refractive indices across the boundary. When
Snell's law has no solution (total internal reflection) the ray reflects.

The surface normal passed in always points out of the object; this module
works out whether the ray is entering or leaving from the sign of its dot
product with that normal.

Common indices of refraction:
    - Air: 1.0
    - Water: 1.33
    - Glass: 1.5
    - Diamond: 2.4

Example:
    >>> # Within a Taichi function:
    >>> # direction, attenuation, did_scatter, state = scatter_dielectric(
    >>> #     1.5, incident_direction, normal, state
    >>> # )
"""

import taichi as ti
import taichi.math as tm

from raylight.core.random import next_float
from raylight.core.ray import dot, normalize, reflect, refract

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def schlick_reflectance(cos_i: ti.f32, eta: ti.f32) -> ti.f32:
    """Schlick's approximation of the Fresnel reflectance.

    Args:
        cos_i: Cosine of the angle of incidence, in [0, 1].
        eta: Ratio of refractive indices (n_incident / n_transmitted).

    Returns:
        The probability of reflection in [0, 1].
    """
    r0 = (1.0 - eta) / (1.0 + eta)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * ti.pow(1.0 - cos_i, 5)


@ti.func
def scatter_dielectric(
    ior: ti.f32,
    incident_direction: vec3,
    normal: vec3,
    state: ti.u32,
):
    """Reflect or refract through a dielectric surface.

    Args:
        ior: Index of refraction of the material.
        incident_direction: The incoming ray direction (any length).
        normal: The outward surface normal (unit length).
        state: The caller's random stream.

    Returns:
        A tuple (direction, attenuation, did_scatter, state). The
        attenuation is white and did_scatter is always 1.
    """
    # Flip the normal and the index ratio when leaving the object
    facing = normal
    eta = 1.0 / ior
    if dot(incident_direction, normal) > 0.0:
        facing = -normal
        eta = ior

    unit_incident = normalize(incident_direction)
    cos_i = ti.min(-dot(unit_incident, facing), 1.0)
    reflectance = schlick_reflectance(cos_i, eta)

    u, new_state = next_float(state)
    refracted, ok = refract(unit_incident, facing, eta)

    direction = refracted
    if u < reflectance or ok == 0:
        direction = reflect(unit_incident, facing)

    return direction, vec3(1.0, 1.0, 1.0), 1, new_state
