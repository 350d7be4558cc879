"""Pinhole camera model for per-pixel primary rays.

The camera sits at a configurable position and always looks down the -z
axis with +y up. Pixel (i, j) counts columns from the left and rows from
the top. The image plane is placed at the depth where one pixel spans one
world unit, so ray directions are built directly from pixel offsets:

    dir = normalize(i + 0.5 - W/2, -(j + 0.5) + H/2, -H / (2 tan(fov/2)))

fov is the vertical field of view in radians.

Example:
    >>> import math
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.camera.pinhole import PinholeCamera, setup_camera, get_ray
    >>>
    >>> setup_camera(PinholeCamera(position=(0.0, 0.0, 3.0), fov=math.pi / 2.0))
    >>>
    >>> @ti.kernel
    ... def render():
    ...     ray = get_ray(320, 240, 640, 480)  # Ray through image center
"""

import math
from dataclasses import dataclass

import taichi as ti

from src.spheretrace.core.ray import Ray, make_ray, normalize, vec3

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass
class PinholeCamera:
    """Configuration for the pinhole camera.

    Attributes:
        position: Camera position in world space (x, y, z).
        fov: Vertical field of view in radians, in (0, pi).
    """

    position: tuple[float, float, float] = (0.0, 0.0, 3.0)
    fov: float = math.pi / 2.0


# =============================================================================
# Taichi Fields for Camera State (GPU-accessible)
# =============================================================================

_camera_origin = ti.Vector.field(3, dtype=ti.f32, shape=())
_camera_fov = ti.field(dtype=ti.f32, shape=())


def setup_camera(camera: PinholeCamera) -> None:
    """Initialize camera state from configuration.

    Args:
        camera: Camera configuration with position and field of view.

    Raises:
        ValueError: If the field of view is not in (0, pi).
    """
    if not 0.0 < camera.fov < math.pi:
        raise ValueError(f"Field of view = {camera.fov} must be in (0, pi) radians.")

    _camera_origin[None] = [camera.position[0], camera.position[1], camera.position[2]]
    _camera_fov[None] = camera.fov


def get_camera_info() -> dict[str, object]:
    """Get current camera state for debugging.

    Returns:
        Dictionary with origin and fov.
    """
    origin = _camera_origin[None]
    return {
        "origin": (float(origin[0]), float(origin[1]), float(origin[2])),
        "fov": float(_camera_fov[None]),
    }


# =============================================================================
# Ray Generation (Taichi-compatible, GPU-callable)
# =============================================================================


@ti.func
def get_ray(pixel_i: ti.i32, pixel_j: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray through the center of pixel (i, j).

    Args:
        pixel_i: Pixel column (0 = left).
        pixel_j: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        A Ray from the camera position with a unit direction.
    """
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)
    dir_x = (ti.cast(pixel_i, ti.f32) + 0.5) - w / 2.0
    dir_y = -(ti.cast(pixel_j, ti.f32) + 0.5) + h / 2.0
    dir_z = -h / (2.0 * ti.tan(_camera_fov[None] / 2.0))
    return make_ray(_camera_origin[None], normalize(vec3(dir_x, dir_y, dir_z)))
