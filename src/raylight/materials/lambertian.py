"""Lambertian (ideal diffuse) material.

The scattered direction is the surface normal plus a random unit vector,
which approximates a cosine-weighted distribution about the normal without
rejection sampling or an explicit basis.

Example:
    >>> # Within a Taichi function:
    >>> # direction, attenuation, did_scatter, state = scatter_lambertian(
    >>> #     albedo, normal, state
    >>> # )
"""

import taichi as ti
import taichi.math as tm

from raylight.core.random import random_unit_vector
from raylight.core.ray import near_zero

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def scatter_lambertian(albedo: vec3, normal: vec3, state: ti.u32):
    """Compute a diffuse scatter direction.

    If the normal and the random vector cancel out, the direction falls back
    to the bare normal. A Lambertian surface never absorbs.

    Args:
        albedo: The surface color (RGB, each component in [0, 1]).
        normal: The outward surface normal (unit length).
        state: The caller's random stream.

    Returns:
        A tuple (direction, attenuation, did_scatter, state). did_scatter
        is always 1.
    """
    offset, new_state = random_unit_vector(state)
    direction = normal + offset
    if near_zero(direction) == 1:
        direction = normal
    return direction, albedo, 1, new_state
