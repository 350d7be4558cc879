"""Fire palette and shading for the displaced sphere.

The color of a hit point depends on how deep the turbulence has pushed
the surface below the undisplaced radius: shallow points are gray smoke,
deep points glow red, orange and finally an over-bright yellow. A single
point light modulates the palette color, with an ambient floor so the
unlit side never goes black.

Palette colors are not clamped. YELLOW exceeds 1.0 on purpose and is
only clipped when the framebuffer is quantized for output.

Example:
    >>> @ti.kernel
    ... def sample() -> ti.math.vec3:
    ...     return palette_fire(0.6)
"""

import taichi as ti
import taichi.math as tm

from src.spheretrace.core.ray import clamped_lerp, length, normalize, vec3
from src.spheretrace.geometry.displaced_sphere import (
    estimate_normal,
    get_noise_amplitude,
    get_sphere_radius,
)

# =============================================================================
# Palette Control Colors
# =============================================================================

YELLOW = vec3(1.7, 1.3, 1.0)
ORANGE = vec3(1.0, 0.6, 0.0)
RED = vec3(1.0, 0.0, 0.0)
DARK_GRAY = vec3(0.2, 0.2, 0.2)
GRAY = vec3(0.4, 0.4, 0.4)

# Lower bound on the light term
AMBIENT_FLOOR = 0.4

# Affine remap of the noise level before the palette lookup
NOISE_LEVEL_OFFSET = 0.2
NOISE_LEVEL_SCALE = 2.0


@ti.func
def palette_fire(d: ti.f32) -> vec3:
    """Map a density in [0, 1] to a fire color.

    The range is split into four equal segments, each interpolating
    between two consecutive control colors:
    gray -> dark gray -> red -> orange -> yellow.

    Args:
        d: Density. Values outside [0, 1] are clamped.

    Returns:
        The unclamped RGB color.
    """
    x = tm.clamp(d, 0.0, 1.0)
    color = vec3(0.0, 0.0, 0.0)
    if x < 0.25:
        color = clamped_lerp(GRAY, DARK_GRAY, x * 4.0)
    elif x < 0.5:
        color = clamped_lerp(DARK_GRAY, RED, x * 4.0 - 1.0)
    elif x < 0.75:
        color = clamped_lerp(RED, ORANGE, x * 4.0 - 2.0)
    else:
        color = clamped_lerp(ORANGE, YELLOW, x * 4.0 - 3.0)
    return color


@ti.func
def noise_level(hit: vec3) -> ti.f32:
    """Depth of a hit point below the undisplaced radius, in amplitudes.

    Zero when the noise amplitude is zero.
    """
    level = 0.0
    amplitude = get_noise_amplitude()
    if amplitude > 0.0:
        level = (get_sphere_radius() - length(hit)) / amplitude
    return level


@ti.func
def shade_fire(hit: vec3, light_position: vec3) -> vec3:
    """Shade a surface hit with the fire palette and a point light.

    Args:
        hit: Hit point returned by the marcher.
        light_position: World-space position of the point light.

    Returns:
        palette_fire((noise_level - 0.2) * 2) * max(0.4, n . l).
    """
    light_dir = normalize(light_position - hit)
    intensity = ti.max(AMBIENT_FLOOR, tm.dot(light_dir, estimate_normal(hit)))
    density = (noise_level(hit) - NOISE_LEVEL_OFFSET) * NOISE_LEVEL_SCALE
    return palette_fire(density) * intensity
