"""Value noise and fractal Brownian motion for the fireball turbulence.

The turbulence is a sum of four octaves of 3D value noise. Before the
octaves are summed the domain is rotated by a fixed matrix so the lattice
axes of successive octaves do not line up.

All constants here (hash multiplier, lattice weights, rotation matrix,
octave multipliers) select one specific noise pattern. Changing any of
them changes the rendered image.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.core.noise import fbm
    >>>
    >>> @ti.kernel
    ... def sample() -> ti.f32:
    ...     return fbm(ti.math.vec3(0.3, 1.2, -0.7))
"""

import taichi as ti
import taichi.math as tm

from src.spheretrace.core.ray import clamped_lerp, vec3

# =============================================================================
# Noise Constants
# =============================================================================

HASH_MULTIPLIER = 43758.5453

# Weights folding a lattice point (x, y, z) into a single hash seed
LATTICE_WEIGHTS = (1.0, 57.0, 113.0)

# Octave amplitudes; they sum to FBM_NORMALIZATION
FBM_AMPLITUDES = (0.5, 0.25, 0.125, 0.0625)
FBM_NORMALIZATION = 0.9375

# Cumulative domain scale applied before each octave
FBM_FREQUENCY_STEPS = (1.0, 2.32, 3.03, 2.61)


@ti.func
def noise_hash(n: ti.f32) -> ti.f32:
    """Map a scalar seed to a pseudo-random value in [0, 1).

    Args:
        n: The seed. The same seed always gives the same value.

    Returns:
        fract(sin(n) * 43758.5453).
    """
    x = ti.sin(n) * HASH_MULTIPLIER
    return x - ti.floor(x)


@ti.func
def value_noise(x: vec3) -> ti.f32:
    """Evaluate 3D value noise at a point.

    Hashes the eight lattice corners around x and blends them
    trilinearly. The blend weights use f * dot(f, 3 - 2f) rather than a
    per-axis smoothstep, and the interpolation parameter is clamped, so
    the field is continuous but its derivative is not at lattice faces.

    Args:
        x: Sample position.

    Returns:
        Noise value in [0, 1).
    """
    p = ti.floor(x)
    f = x - p
    f = f * tm.dot(f, 3.0 - 2.0 * f)
    n = tm.dot(p, vec3(LATTICE_WEIGHTS[0], LATTICE_WEIGHTS[1], LATTICE_WEIGHTS[2]))
    return clamped_lerp(
        clamped_lerp(
            clamped_lerp(noise_hash(n + 0.0), noise_hash(n + 1.0), f.x),
            clamped_lerp(noise_hash(n + 57.0), noise_hash(n + 58.0), f.x),
            f.y,
        ),
        clamped_lerp(
            clamped_lerp(noise_hash(n + 113.0), noise_hash(n + 114.0), f.x),
            clamped_lerp(noise_hash(n + 170.0), noise_hash(n + 171.0), f.x),
            f.y,
        ),
        f.z,
    )


@ti.func
def rotate(v: vec3) -> vec3:
    """Apply the fixed octave-decorrelation matrix to a vector."""
    return vec3(
        tm.dot(vec3(0.0, 0.8, 0.6), v),
        tm.dot(vec3(-0.8, 0.36, -0.48), v),
        tm.dot(vec3(-0.6, -0.48, 0.64), v),
    )


@ti.func
def fbm(x: vec3) -> ti.f32:
    """Fractal Brownian motion: four rotated octaves of value noise.

    Args:
        x: Sample position.

    Returns:
        Normalized turbulence in [0, 1).
    """
    p = rotate(x)
    total = 0.0
    for k in ti.static(range(4)):
        p = p * FBM_FREQUENCY_STEPS[k]
        total += FBM_AMPLITUDES[k] * value_noise(p)
    return total / FBM_NORMALIZATION
