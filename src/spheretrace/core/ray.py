"""Ray data structure and vector utilities for sphere tracing.

This module provides the Ray dataclass and the small set of vector helpers
the marcher, SDF and shading code share. All functions are Taichi functions
and must be called from within Taichi kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, 3.0)
    >>> direction = ti.math.vec3(0.0, 0.0, -1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 1.5)  # Point 1.5 units along the ray
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). The marcher
            expects unit length and does not re-normalize it.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length of a vector."""
    return tm.length(v)


@ti.func
def length_squared(v: vec3) -> ti.f32:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return tm.dot(v, v)


@ti.func
def normalize(v: vec3) -> vec3:
    """Normalize a vector to unit length.

    A zero-length input produces non-finite components.
    """
    return tm.normalize(v)


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product a . b."""
    return tm.dot(a, b)


@ti.func
def clamped_lerp(v0, v1, t: ti.f32):
    """Linearly interpolate between two values with t clamped to [0, 1].

    Works for scalars and vectors alike. Both the value noise and the
    fire palette rely on the clamp: parameters outside [0, 1] saturate
    at the end points instead of extrapolating.

    Args:
        v0: Value returned for t <= 0.
        v1: Value returned for t >= 1.
        t: Interpolation parameter.

    Returns:
        v0 + (v1 - v0) * clamp(t, 0, 1).
    """
    return v0 + (v1 - v0) * tm.clamp(t, 0.0, 1.0)
