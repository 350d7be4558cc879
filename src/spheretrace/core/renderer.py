"""Frame renderer facade over the sphere tracing integrator.

This module provides a convenient wrapper around the integrator that supports:
- Whole-frame rendering in one call
- Banded rendering over disjoint row ranges with progress callbacks
- Generator-based progress for UI loops
- Image readout as float, 8-bit RGBA, or a PNG file

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.core.renderer import FrameRenderer
    >>> from src.spheretrace.scene.fireball import create_fireball_scene
    >>>
    >>> create_fireball_scene()
    >>> renderer = FrameRenderer(640, 480)
    >>> renderer.render()
    >>> image = renderer.get_image_numpy()
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Generator

import numpy as np
import numpy.typing as npt

from src.spheretrace.core.integrator import (
    clear_render_target,
    get_hit_mask_numpy,
    get_image_numpy,
    is_frame_complete,
    render_rows,
    setup_render_target,
)

logger = logging.getLogger(__name__)

# Type alias for progress callback
# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]


class FrameRenderer:
    """Renders the configured scene into the shared framebuffer.

    The renderer owns the image dimensions and delegates to the global
    integrator buffers (which are Taichi fields). Scene and camera must be
    set up before calling render().

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Initialize the renderer.

        Args:
            width: Image width in pixels (max 2048).
            height: Image height in pixels (max 2048).

        Raises:
            ValueError: If dimensions are not positive or exceed the
                maximum supported size.
        """
        self._width = width
        self._height = height
        setup_render_target(width, height)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def is_complete(self) -> bool:
        """Whether every pixel has been rendered since the last reset."""
        return is_frame_complete()

    def reset(self) -> None:
        """Discard the current frame without changing the dimensions."""
        clear_render_target()

    def resize(self, width: int, height: int) -> None:
        """Resize the render target and discard the current frame.

        Raises:
            ValueError: If dimensions are not positive or exceed the
                maximum supported size.
        """
        setup_render_target(width, height)
        self._width = width
        self._height = height

    def render(
        self,
        band_height: int | None = None,
        callback: ProgressCallback | None = None,
    ) -> None:
        """Render the full frame, optionally in row bands.

        Bands cover disjoint row ranges, so each pixel is still written
        exactly once. Within a band all pixels are evaluated in parallel.

        Args:
            band_height: Rows per kernel launch. None renders the whole
                frame in a single launch.
            callback: Optional callback function called after each band.
                Receives (rows_done, total_rows).

        Raises:
            ValueError: If band_height is not positive.

        Example:
            >>> def progress(done, total):
            ...     print(f"Progress: {done}/{total} rows")
            >>> renderer.render(band_height=32, callback=progress)
        """
        for rows_done, total_rows in self.render_progressive(band_height):
            if callback is not None:
                callback(rows_done, total_rows)

    def render_progressive(
        self,
        band_height: int | None = None,
    ) -> Generator[tuple[int, int], None, None]:
        """Render the frame band by band, yielding progress after each band.

        This is a generator-based alternative to render() with callbacks.

        Args:
            band_height: Rows per kernel launch. None means the whole frame.

        Yields:
            Tuple of (rows_done, total_rows).

        Raises:
            ValueError: If band_height is not positive.
        """
        if band_height is None:
            band_height = self._height
        if band_height <= 0:
            raise ValueError(f"Band height = {band_height} must be positive.")

        row = 0
        while row < self._height:
            band_end = min(row + band_height, self._height)
            render_rows(row, band_end)
            row = band_end
            yield (row, self._height)

        logger.debug("Rendered %dx%d frame", self._width, self._height)

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the rendered image as an unclamped float array.

        Returns:
            NumPy array of shape (height, width, 3) with dtype float32.

        Raises:
            RuntimeError: If the frame has not been fully rendered.
        """
        return get_image_numpy()

    def get_hit_mask(self) -> npt.NDArray[np.bool_]:
        """Get a boolean (height, width) mask of pixels that hit the sphere."""
        return get_hit_mask_numpy()

    def get_image_rgba(self) -> npt.NDArray[np.uint8]:
        """Get the rendered image quantized to 8-bit RGBA.

        Returns:
            NumPy array of shape (height, width, 4) with dtype uint8.
        """
        from src.spheretrace.output.export import quantize_rgba

        return quantize_rgba(self.get_image_numpy())

    def save_image(self, filepath: str) -> None:
        """Save the rendered image as an RGBA PNG.

        Raises:
            OSError: If the file cannot be created or written.
        """
        from src.spheretrace.output.export import save_png

        save_png(self, filepath)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"FrameRenderer(width={self.width}, height={self.height}, "
            f"complete={self.is_complete})"
        )
