"""Image export utilities for rendered frames.

This module quantizes float framebuffers to 8-bit RGBA and writes them
as PNG files through Pillow.

Quantization is total: every component becomes round(255 * clamp(c, 0, 1))
with halves rounded up, NaN maps to 0 and +inf to 255. Alpha is always
opaque.

Example:
    >>> from src.spheretrace.output.export import save_png
    >>> from src.spheretrace.core.renderer import FrameRenderer
    >>>
    >>> renderer = FrameRenderer(640, 480)
    >>> renderer.render()
    >>> save_png(renderer, "fireball.png")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from src.spheretrace.core.renderer import FrameRenderer

logger = logging.getLogger(__name__)

OPAQUE_ALPHA = 255


def quantize_rgba(image: npt.NDArray[np.floating[npt.NBitBase]]) -> npt.NDArray[np.uint8]:
    """Convert a float RGB image to 8-bit RGBA.

    Args:
        image: Image array of shape (H, W, 3). Values may lie outside
            [0, 1] or be non-finite.

    Returns:
        Array of shape (H, W, 4) with dtype uint8 and alpha 255.

    Raises:
        ValueError: If the image is not of shape (H, W, 3).
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected image of shape (H, W, 3), got {image.shape}")

    rgb = np.nan_to_num(image.astype(np.float64), nan=0.0, posinf=1.0, neginf=0.0)
    rgb = np.clip(rgb, 0.0, 1.0)
    rgb = np.floor(rgb * 255.0 + 0.5).astype(np.uint8)

    alpha = np.full(rgb.shape[:2] + (1,), OPAQUE_ALPHA, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=2)


def save_png_from_array(
    image: npt.NDArray[np.floating[npt.NBitBase]],
    filepath: str,
) -> None:
    """Save a float RGB image as an RGBA PNG file.

    Args:
        image: Image array of shape (H, W, 3).
        filepath: Output file path (should end in .png).

    Raises:
        ValueError: If the image is not of shape (H, W, 3).
        OSError: If the file cannot be created or written.
    """
    rgba = quantize_rgba(image)

    PILImage.fromarray(rgba).save(filepath, format="PNG")
    logger.debug("Wrote %dx%d image to %s", rgba.shape[1], rgba.shape[0], filepath)


def save_png(renderer: FrameRenderer, filepath: str) -> None:
    """Save a renderer's completed frame as an RGBA PNG file.

    Args:
        renderer: The FrameRenderer whose frame to save.
        filepath: Output file path (should end in .png).

    Raises:
        RuntimeError: If the frame has not been fully rendered.
        OSError: If the file cannot be created or written.
    """
    save_png_from_array(renderer.get_image_numpy(), filepath)
