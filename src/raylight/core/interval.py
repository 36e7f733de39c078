"""Open parameter intervals for bounding ray hits."""

import math

import taichi as ti

# Lower bound used for secondary rays so a bounce cannot re-hit the surface
# it just left.
T_MIN = 0.001

T_MAX = math.inf


@ti.dataclass
class Interval:
    """The open range (start, end) of accepted ray parameters.

    Attributes:
        start: Exclusive lower bound.
        end: Exclusive upper bound. May be +inf.
    """

    start: ti.f32
    end: ti.f32


@ti.func
def make_interval(start: ti.f32, end: ti.f32) -> Interval:
    return Interval(start=start, end=end)


@ti.func
def contains(interval: Interval, x: ti.f32) -> ti.i32:
    """1 if start < x < end, 0 otherwise. Both bounds are excluded."""
    result = 0
    if interval.start < x and x < interval.end:
        result = 1
    return result
