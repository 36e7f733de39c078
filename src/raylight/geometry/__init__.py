"""Geometry module for intersectable primitives.

Components:
    intersection: The Intersection record returned by every test
    sphere: Ray-sphere intersection
    shape: Shape tags, host-side SphereInfo, and the Shape dispatch
"""

from .intersection import Intersection, no_intersection
from .shape import Shape, ShapeKind, SphereInfo, intersect_shape, shape_from_dict
from .sphere import intersect_sphere

__all__ = [
    "Intersection",
    "no_intersection",
    "intersect_sphere",
    "Shape",
    "ShapeKind",
    "SphereInfo",
    "intersect_shape",
    "shape_from_dict",
]
