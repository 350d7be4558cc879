"""Signed distance field of a sphere displaced by FBM turbulence.

The surface is a sphere of radius R whose radius is pushed inward by the
turbulence field:

    signed_distance(p) = |p| - (R + displacement(p))
    displacement(p) = -fbm(p * K) * A

where K is the noise frequency and A the noise amplitude. Since fbm lies
in [0, 1), the displaced surface always lies inside the undisplaced
sphere of radius R, which the ray marcher uses as its bounding volume.

The sphere parameters live in Taichi fields so they can be changed
between renders without recompiling kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.geometry.displaced_sphere import setup_sphere
    >>> setup_sphere(radius=1.5, noise_amplitude=0.2)
"""

import taichi as ti

from src.spheretrace.core.noise import fbm
from src.spheretrace.core.ray import length, normalize, vec3

# =============================================================================
# Sphere Defaults
# =============================================================================

DEFAULT_SPHERE_RADIUS = 1.5
DEFAULT_NOISE_AMPLITUDE = 0.2
DEFAULT_NOISE_FREQUENCY = 3.4

# Forward-difference step for the normal estimator
NORMAL_EPSILON = 0.1

# =============================================================================
# Taichi Fields for Sphere State
# =============================================================================

_sphere_radius = ti.field(dtype=ti.f32, shape=())
_noise_amplitude = ti.field(dtype=ti.f32, shape=())
_noise_frequency = ti.field(dtype=ti.f32, shape=())


def setup_sphere(
    radius: float = DEFAULT_SPHERE_RADIUS,
    noise_amplitude: float = DEFAULT_NOISE_AMPLITUDE,
    noise_frequency: float = DEFAULT_NOISE_FREQUENCY,
) -> None:
    """Configure the displaced sphere.

    Args:
        radius: Radius of the undisplaced sphere. Must be positive.
        noise_amplitude: Maximum inward displacement. Zero gives a plain
            sphere. Must not be negative.
        noise_frequency: Scale applied to positions before sampling the
            turbulence. Must be positive.

    Raises:
        ValueError: If any parameter is out of range.
    """
    if radius <= 0.0:
        raise ValueError(f"Sphere radius = {radius} must be positive.")
    if noise_amplitude < 0.0:
        raise ValueError(f"Noise amplitude = {noise_amplitude} is negative.")
    if noise_frequency <= 0.0:
        raise ValueError(f"Noise frequency = {noise_frequency} must be positive.")

    _sphere_radius[None] = radius
    _noise_amplitude[None] = noise_amplitude
    _noise_frequency[None] = noise_frequency


def reset_sphere() -> None:
    """Restore the default sphere parameters."""
    setup_sphere(DEFAULT_SPHERE_RADIUS, DEFAULT_NOISE_AMPLITUDE, DEFAULT_NOISE_FREQUENCY)


def get_sphere_info() -> dict[str, float]:
    """Get the current sphere parameters for debugging.

    Returns:
        Dictionary with radius, noise_amplitude and noise_frequency.
    """
    return {
        "radius": float(_sphere_radius[None]),
        "noise_amplitude": float(_noise_amplitude[None]),
        "noise_frequency": float(_noise_frequency[None]),
    }


# =============================================================================
# Distance Field (Taichi-compatible)
# =============================================================================


@ti.func
def get_sphere_radius() -> ti.f32:
    """Radius of the undisplaced (bounding) sphere."""
    return _sphere_radius[None]


@ti.func
def get_noise_amplitude() -> ti.f32:
    return _noise_amplitude[None]


@ti.func
def displacement(p: vec3) -> ti.f32:
    """Radial displacement of the surface at p (never positive)."""
    return -fbm(p * _noise_frequency[None]) * _noise_amplitude[None]


@ti.func
def signed_distance(p: vec3) -> ti.f32:
    """Signed distance from p to the displaced surface.

    Negative inside, zero on the surface, positive outside. The value is
    a distance estimate rather than an exact distance once displacement
    is applied.

    Args:
        p: Query position.

    Returns:
        |p| - (R + displacement(p)).
    """
    return length(p) - (_sphere_radius[None] + displacement(p))


@ti.func
def estimate_normal(pos: vec3) -> vec3:
    """Estimate the surface normal from the SDF gradient.

    Uses forward differences along each axis with step NORMAL_EPSILON,
    then normalizes. Forward rather than centered differences give the
    expected shading; do not swap them.

    Args:
        pos: Position near the surface.

    Returns:
        Unit normal. Non-finite if the gradient vanishes.
    """
    d = signed_distance(pos)
    nx = signed_distance(pos + vec3(NORMAL_EPSILON, 0.0, 0.0)) - d
    ny = signed_distance(pos + vec3(0.0, NORMAL_EPSILON, 0.0)) - d
    nz = signed_distance(pos + vec3(0.0, 0.0, NORMAL_EPSILON)) - d
    return normalize(vec3(nx, ny, nz))
