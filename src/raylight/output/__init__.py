"""Output module for turning rendered radiance into image files.

Components:
    image: Gamma 2 display mapping, 8-bit quantization and Pillow export
"""

from .image import DISPLAY_GAMMA, apply_gamma, pixels_to_array, save_image, to_display

__all__ = [
    "DISPLAY_GAMMA",
    "apply_gamma",
    "pixels_to_array",
    "save_image",
    "to_display",
]
