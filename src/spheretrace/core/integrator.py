"""Per-pixel sphere tracing integrator and framebuffer.

This module implements the rendering kernel: for every pixel it builds the
primary camera ray, marches it against the displaced sphere, and shades
the hit with the fire palette or writes the background color on a miss.

Each pixel's color depends only on its (i, j) coordinates and the scene
parameters, so the outermost loop of the kernel is a plain Taichi
parallel range-for. Every framebuffer cell is written by exactly one loop
iteration; no locks or atomics are involved.

Key features:
    - Preallocated framebuffer and hit mask (no kernel recompilation on resize)
    - Row-band rendering over disjoint index ranges
    - Single-ray and single-pixel probes for testing and debugging
    - Completeness check before the framebuffer is read

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.core.integrator import render_image, setup_render_target
    >>> from src.spheretrace.scene.fireball import create_fireball_scene
    >>>
    >>> create_fireball_scene()
    >>> setup_render_target(640, 480)
    >>> render_image()
"""

import logging

import numpy as np
import numpy.typing as npt
import taichi as ti

from src.spheretrace.camera.pinhole import get_ray
from src.spheretrace.core.marcher import sphere_trace
from src.spheretrace.core.ray import vec3
from src.spheretrace.materials.fire import shade_fire

logger = logging.getLogger(__name__)

# =============================================================================
# Rendering Constants
# =============================================================================

# Color written for rays that miss the sphere
BACKGROUND_COLOR = vec3(0.2, 0.7, 0.8)

# Hit mask values
PIXEL_UNWRITTEN = -1
PIXEL_MISS = 0
PIXEL_HIT = 1

# =============================================================================
# Light Source Configuration
# =============================================================================

DEFAULT_LIGHT_POSITION = (10.0, 10.0, 10.0)

_light_position = ti.Vector.field(3, dtype=ti.f32, shape=())


def setup_light(position: tuple[float, float, float] = DEFAULT_LIGHT_POSITION) -> None:
    """Place the point light used for shading.

    Args:
        position: World-space light position.
    """
    _light_position[None] = [position[0], position[1], position[2]]


def get_light_position() -> tuple[float, float, float]:
    """Get the current light position."""
    p = _light_position[None]
    return (float(p[0]), float(p[1]), float(p[2]))


# =============================================================================
# Render Target (Framebuffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# Shaded color per pixel, indexed [column, row-from-top]
_framebuffer = ti.Vector.field(3, dtype=ti.f32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# PIXEL_UNWRITTEN, PIXEL_MISS or PIXEL_HIT per pixel
_hit_mask = ti.field(dtype=ti.i32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())

# Result slots for the probe kernels
_probe_color = ti.Vector.field(3, dtype=ti.f32, shape=())
_probe_hit = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target buffers.

    Sets the active image dimensions and marks every pixel unwritten.

    Args:
        width: Image width in pixels (1 to MAX_IMAGE_WIDTH).
        height: Image height in pixels (1 to MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If a dimension is not positive or exceeds the maximum.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions ({width}x{height}) must be positive")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Reset the framebuffer to black and mark every pixel unwritten."""
    _framebuffer.fill(0.0)
    _hit_mask.fill(PIXEL_UNWRITTEN)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def is_render_target_initialized() -> bool:
    return bool(_render_target_initialized[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


# =============================================================================
# Per-Pixel Evaluation
# =============================================================================


@ti.func
def trace_ray_impl(origin: vec3, direction: vec3):
    """Trace one ray and shade the result.

    Args:
        origin: Ray origin.
        direction: Unit ray direction.

    Returns:
        A tuple (hit, color) with hit being PIXEL_HIT or PIXEL_MISS.
    """
    result = sphere_trace(origin, direction)
    color = BACKGROUND_COLOR
    hit = PIXEL_MISS
    if result.hit == 1:
        color = shade_fire(result.point, _light_position[None])
        hit = PIXEL_HIT
    return hit, color


@ti.func
def shade_pixel(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32):
    """Compute the color of pixel (i, j) from its primary ray."""
    ray = get_ray(pixel_i, pixel_j, width, height)
    return trace_ray_impl(ray.origin, ray.direction)


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_rows(width: ti.i32, height: ti.i32, row_start: ti.i32, row_end: ti.i32):
    """Fill rows [row_start, row_end) of the framebuffer.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        row_start: First row to render (inclusive).
        row_end: Last row to render (exclusive).
    """
    for i, j in ti.ndrange(width, (row_start, row_end)):
        hit, color = shade_pixel(i, j, width, height)
        _framebuffer[i, j] = color
        _hit_mask[i, j] = hit


@ti.kernel
def _trace_single_ray(origin: vec3, direction: vec3):
    hit, color = trace_ray_impl(origin, direction)
    _probe_hit[None] = hit
    _probe_color[None] = color


@ti.kernel
def _render_single_pixel(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32):
    hit, color = shade_pixel(pixel_i, pixel_j, width, height)
    _probe_hit[None] = hit
    _probe_color[None] = color


# =============================================================================
# Public Rendering API
# =============================================================================


def trace_ray(
    origin: tuple[float, float, float],
    direction: tuple[float, float, float],
) -> tuple[bool, tuple[float, float, float]]:
    """Trace and shade a single ray.

    The direction must already be unit length.

    Args:
        origin: Ray origin.
        direction: Unit ray direction.

    Returns:
        Tuple of (hit, (R, G, B)).
    """
    _trace_single_ray(
        vec3(origin[0], origin[1], origin[2]),
        vec3(direction[0], direction[1], direction[2]),
    )
    color = _probe_color[None]
    return bool(_probe_hit[None] == PIXEL_HIT), (float(color[0]), float(color[1]), float(color[2]))


def render_pixel(pixel_i: int, pixel_j: int) -> tuple[bool, tuple[float, float, float]]:
    """Render a single pixel of the current render target.

    This is a Python-callable function for testing. For production rendering,
    use render_image() which processes all pixels in parallel. The
    framebuffer is not modified.

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).

    Returns:
        Tuple of (hit, (R, G, B)).

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    _render_single_pixel(pixel_i, pixel_j, width, height)

    color = _probe_color[None]
    return bool(_probe_hit[None] == PIXEL_HIT), (float(color[0]), float(color[1]), float(color[2]))


def render_rows(row_start: int, row_end: int) -> None:
    """Render a band of rows into the framebuffer.

    Args:
        row_start: First row (inclusive).
        row_end: Last row (exclusive), clipped to the image height.

    Raises:
        RuntimeError: If render target has not been set up.
        ValueError: If the band is empty or starts outside the image.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    row_end = min(row_end, height)
    if not 0 <= row_start < row_end:
        raise ValueError(f"Invalid row band [{row_start}, {row_end}) for height {height}")

    logger.debug("Rendering rows %d-%d of %d", row_start, row_end, height)
    _render_rows(width, height, row_start, row_end)


def render_image() -> None:
    """Render every pixel of the render target in one parallel pass.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    _, height = get_image_dimensions()
    render_rows(0, height)


def _active_hit_mask() -> npt.NDArray[np.int32]:
    """Hit mask of the active region as (height, width)."""
    width, height = get_image_dimensions()
    return _hit_mask.to_numpy()[:width, :height].T


def is_frame_complete() -> bool:
    """Check whether every pixel of the active region has been written.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    return bool(np.all(_active_hit_mask() != PIXEL_UNWRITTEN))


def _check_frame_complete() -> None:
    if not is_frame_complete():
        raise RuntimeError("Framebuffer is incomplete. Render every row before reading it.")


def get_image_numpy() -> npt.NDArray[np.float32]:
    """Get the rendered colors as a NumPy array.

    Colors are returned as computed, without clamping: the fire palette
    produces components above 1.0.

    Returns:
        NumPy array of shape (height, width, 3). Element [j, i] is pixel
        column i, row j counted from the top.

    Raises:
        RuntimeError: If render target has not been set up or the frame
            has not been fully rendered.
    """
    _check_render_target_initialized()
    _check_frame_complete()

    width, height = get_image_dimensions()

    # Field layout is (width, height, 3); rows already run top to bottom
    image = _framebuffer.to_numpy()[:width, :height, :]
    image = np.transpose(image, (1, 0, 2))

    return np.ascontiguousarray(image, dtype=np.float32)


def get_hit_mask_numpy() -> npt.NDArray[np.bool_]:
    """Get a boolean (height, width) mask of pixels that hit the sphere.

    Raises:
        RuntimeError: If render target has not been set up or the frame
            has not been fully rendered.
    """
    _check_render_target_initialized()
    _check_frame_complete()

    return _active_hit_mask() == PIXEL_HIT
