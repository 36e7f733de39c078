"""Metal (specular reflective) material.

The reflection formula is:
    R = I - 2(I . N)N

where I is the incident direction and N is the surface normal. The
normalized reflection is then pushed by ``fuzz`` times a random unit vector;
fuzz 0 gives a perfect mirror.

Example:
    >>> # Within a Taichi function:
    >>> # direction, attenuation, did_scatter, state = scatter_metal(
    >>> #     albedo, fuzz, incident_direction, normal, state
    >>> # )
"""

import taichi as ti
import taichi.math as tm

from raylight.core.random import random_unit_vector
from raylight.core.ray import dot, near_zero, normalize, reflect

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def scatter_metal(
    albedo: vec3,
    fuzz: ti.f32,
    incident_direction: vec3,
    normal: vec3,
    state: ti.u32,
):
    """Compute a fuzzy reflection direction.

    A direction that degenerates to zero falls back to the raw reflection.
    A direction below the surface (negative dot with the normal) absorbs the
    ray.

    Args:
        albedo: The reflective color (RGB, each component in [0, 1]).
        fuzz: Perturbation radius in [0, 1]. 0 = perfect mirror.
        incident_direction: The incoming ray direction (any length).
        normal: The outward surface normal (unit length).
        state: The caller's random stream.

    Returns:
        A tuple (direction, attenuation, did_scatter, state). did_scatter is
        0 when the ray is absorbed.
    """
    reflected = reflect(incident_direction, normal)

    # Drawn even for fuzz 0
    offset, new_state = random_unit_vector(state)
    direction = normalize(reflected) + fuzz * offset
    if near_zero(direction) == 1:
        direction = reflected

    did_scatter = 1
    if dot(direction, normal) < 0.0:
        did_scatter = 0

    return direction, albedo, did_scatter, new_state
