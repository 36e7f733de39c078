"""Display mapping and image export for rendered pixels.

The renderer produces linear, unclamped radiance. For display it is gamma
encoded with gamma 2 (a square root), clamped to [0, 1] and quantized to
8 bits.

Supported formats:
    - Anything Pillow can write (PNG, PPM, BMP, ...), chosen by extension

Example:
    >>> from raylight.output.image import save_image
    >>> pixels = camera.render_array(scene)
    >>> save_image(pixels, "spheres.png")
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from raylight.core.color import Color

# Gamma of the display encoding (out = in^(1/gamma))
DISPLAY_GAMMA = 2.0


def pixels_to_array(
    pixels: Sequence[Color], width: int, height: int
) -> npt.NDArray[np.float64]:
    """Reshape a row-major pixel sequence into an (H, W, 3) array.

    Raises:
        ValueError: If the number of pixels is not width * height.
    """
    if len(pixels) != width * height:
        raise ValueError(
            f"Expected {width * height} pixels for {width}x{height}, got {len(pixels)}"
        )
    flat = np.array([color.to_list() for color in pixels], dtype=np.float64)
    return flat.reshape(height, width, 3)


def apply_gamma(
    image: npt.NDArray[np.floating],
    gamma: float = DISPLAY_GAMMA,
) -> npt.NDArray[np.float64]:
    """Apply gamma encoding for display.

    Args:
        image: Linear image array of shape (H, W, 3).
        gamma: Gamma value (default 2, i.e. square root).

    Returns:
        Gamma encoded image in [0, 1]. NaN becomes 0.
    """
    # Clamp before gamma to avoid NaN from negative values
    image = np.clip(np.nan_to_num(image, nan=0.0, posinf=1.0, neginf=0.0), 0.0, 1.0)
    if gamma == 1.0:
        return image.astype(np.float64)
    return np.power(image, 1.0 / gamma)


def to_display(
    pixels: npt.NDArray[np.floating] | Sequence[Color],
    width: int | None = None,
    height: int | None = None,
) -> npt.NDArray[np.uint8]:
    """Map linear pixels to 8-bit display values.

    Args:
        pixels: Either an (H, W, 3) array or a row-major sequence of Colors
            (then width and height are required).
        width: Image width when ``pixels`` is a sequence.
        height: Image height when ``pixels`` is a sequence.

    Returns:
        uint8 array of shape (H, W, 3).

    Raises:
        ValueError: If a Color sequence is given without its dimensions.
    """
    if not isinstance(pixels, np.ndarray):
        if width is None or height is None:
            raise ValueError("width and height are required for a Color sequence")
        pixels = pixels_to_array(pixels, width, height)
    encoded = apply_gamma(pixels)
    return np.round(encoded * 255.0).astype(np.uint8)


def save_image(
    pixels: npt.NDArray[np.floating] | Sequence[Color],
    filepath: str | Path,
    width: int | None = None,
    height: int | None = None,
) -> Path:
    """Encode linear pixels for display and write them to an image file.

    The format follows the file extension.

    Returns:
        The path written.
    """
    image_uint8 = to_display(pixels, width, height)
    path = Path(filepath)
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(path)
    return path
