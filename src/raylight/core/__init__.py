"""Core building blocks for ray tracing.

Components:
    vector: Host-side Vector and Point values (numpy-backed, immutable)
    color: Host-side linear RGB Color
    ray: Ray data structure and kernel-side vector helpers
    interval: Open parameter ranges for accepted hits
    random: Explicit, caller-owned random streams for kernel sampling

Host types describe scenes and camera placement; the kernel-side helpers
operate on ``vec3`` inside Taichi functions.
"""

from .color import Color
from .interval import T_MAX, T_MIN, Interval, contains, make_interval
from .random import (
    next_float,
    next_range,
    random_in_unit_disk,
    random_unit_vector,
    seed_stream,
)
from .ray import (
    Ray,
    cross,
    dot,
    length,
    length_squared,
    make_ray,
    near_zero,
    normalize,
    ray_at,
    reflect,
    refract,
    vec3,
)
from .vector import EPSILON, Point, Vector

__all__ = [
    # Host values
    "Vector",
    "Point",
    "Color",
    "EPSILON",
    # Rays
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "dot",
    "cross",
    "length",
    "length_squared",
    "normalize",
    "reflect",
    "refract",
    "near_zero",
    # Intervals
    "Interval",
    "make_interval",
    "contains",
    "T_MIN",
    "T_MAX",
    # Random streams
    "seed_stream",
    "next_float",
    "next_range",
    "random_unit_vector",
    "random_in_unit_disk",
]
