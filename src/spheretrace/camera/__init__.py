"""Camera module for primary ray generation.

Components:
    pinhole: Pinhole camera looking down -z with configurable position
        and vertical field of view

Pixel (i, j) counts columns from the left and rows from the top. Ray
generation runs inside Taichi kernels, one ray per pixel.
"""

from .pinhole import (
    PinholeCamera,
    get_camera_info,
    get_ray,
    setup_camera,
)

__all__ = [
    "PinholeCamera",
    "setup_camera",
    "get_ray",
    "get_camera_info",
]
