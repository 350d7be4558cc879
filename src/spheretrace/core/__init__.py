"""Core rendering module.

This module contains the fundamental building blocks for sphere tracing:

Components:
    ray: Ray data structure and vector utilities
    noise: Value noise and fractal Brownian motion
    marcher: Damped sphere tracing with a bounding-sphere early reject
    integrator: Per-pixel parallel fill of the framebuffer
    renderer: Frame renderer facade with banded progress

All per-pixel work runs in Taichi kernels.
"""

from .ray import (
    Ray,
    clamped_lerp,
    dot,
    length,
    length_squared,
    make_ray,
    normalize,
    ray_at,
    vec3,
)

# Note: noise, marcher, integrator and renderer are NOT imported here to avoid
# circular imports with geometry and materials. Import them directly, e.g.:
#   from src.spheretrace.core.renderer import FrameRenderer

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "length_squared",
    "normalize",
    "dot",
    "clamped_lerp",
]
