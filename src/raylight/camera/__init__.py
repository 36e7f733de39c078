"""Camera module for ray generation and rendering.

Components:
    camera: Perspective thin-lens Camera, its derived Viewport, and the
        row-parallel render loop
"""

from .camera import Camera, ProgressCallback, Viewport, sky_color

__all__ = [
    "Camera",
    "ProgressCallback",
    "Viewport",
    "sky_color",
]
