"""Explicit random streams for Monte Carlo sampling inside kernels.

Every sampling function takes the caller's stream state and returns the
advanced state alongside its result, so each worker owns its own stream and
a render is reproducible for a given seed regardless of how rows are
scheduled across threads.

The generator is a 32-bit LCG step followed by the PCG RXS-M-XS output
permutation, which is cheap and statistically adequate for sampling.

Example:
    >>> @ti.kernel
    ... def draw(seed: ti.u32) -> ti.f32:
    ...     state = seed_stream(seed, ti.u32(7))
    ...     x, state = next_float(state)
    ...     return x
"""

import taichi as ti
import taichi.math as tm

vec3 = tm.vec3

# LCG constants (Numerical Recipes)
_LCG_MULTIPLIER = 1664525
_LCG_INCREMENT = 1013904223

# PCG RXS-M-XS output multiplier
_PCG_MULTIPLIER = 277803737

# 2^-24, maps the top 24 bits of a word onto [0, 1)
_INV_2_24 = 1.0 / 16777216.0


@ti.func
def _permute(state: ti.u32) -> ti.u32:
    shift = (state >> ti.u32(28)) + ti.u32(4)
    word = ((state >> shift) ^ state) * ti.u32(_PCG_MULTIPLIER)
    return (word >> ti.u32(22)) ^ word


@ti.func
def _advance(state: ti.u32) -> ti.u32:
    return state * ti.u32(_LCG_MULTIPLIER) + ti.u32(_LCG_INCREMENT)


@ti.func
def hash_u32(value: ti.u32) -> ti.u32:
    """Scramble a 32-bit value into a well-mixed one."""
    return _permute(_advance(value))


@ti.func
def seed_stream(seed: ti.u32, stream: ti.u32) -> ti.u32:
    """Derive the initial state of stream ``stream`` for a render seed.

    Args:
        seed: The render-wide seed.
        stream: Index of the independent stream (e.g. the pixel row).

    Returns:
        The stream state to pass to the sampling functions.
    """
    return hash_u32(stream + hash_u32(seed))


@ti.func
def next_float(state: ti.u32):
    """Draw a uniform float in [0, 1).

    Returns:
        A tuple (value, new_state).
    """
    new_state = _advance(state)
    word = _permute(new_state)
    value = ti.cast(word >> ti.u32(8), ti.f32) * _INV_2_24
    return value, new_state


@ti.func
def next_range(state: ti.u32, low: ti.f32, high: ti.f32):
    """Draw a uniform float in [low, high).

    Returns:
        A tuple (value, new_state).
    """
    u, new_state = next_float(state)
    return low + (high - low) * u, new_state


@ti.func
def random_unit_vector(state: ti.u32):
    """Random unit vector.

    Components are uniform in [-1, 1) and the result is normalized, without
    rejection sampling.

    Returns:
        A tuple (direction, new_state).
    """
    x, s1 = next_range(state, -1.0, 1.0)
    y, s2 = next_range(s1, -1.0, 1.0)
    z, s3 = next_range(s2, -1.0, 1.0)
    v = vec3(x, y, z)
    return v / ti.sqrt(v.x * v.x + v.y * v.y + v.z * v.z), s3


@ti.func
def random_in_unit_disk(state: ti.u32):
    """Random point in the unit disk of the xy-plane.

    A point sampled from the square [-1, 1)^2 that lands outside the disk is
    normalized back onto the unit circle.

    Returns:
        A tuple (point, new_state); point.z is always 0.
    """
    x, s1 = next_range(state, -1.0, 1.0)
    y, s2 = next_range(s1, -1.0, 1.0)
    p = vec3(x, y, 0.0)
    len2 = x * x + y * y
    if len2 > 1.0:
        p = p / ti.sqrt(len2)
    return p, s2
