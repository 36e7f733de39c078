"""Scene module for shape storage and intersection.

Components:
    scene: Scene class holding shapes in Taichi fields, nearest-hit search,
        and (de)serialization
    demo: Ready-made scenes used by the examples and tests
"""

from .demo import create_three_spheres_scene, create_two_spheres_scene
from .scene import MAX_SHAPES, HitInfo, Scene

__all__ = [
    "MAX_SHAPES",
    "HitInfo",
    "Scene",
    "create_three_spheres_scene",
    "create_two_spheres_scene",
]
