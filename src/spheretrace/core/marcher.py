"""Sphere tracing against the displaced sphere distance field.

The marcher walks a ray forward using the signed distance as a step-size
oracle. Steps are a damped fraction of the distance estimate because the
noise displacement makes the field an overestimate of the true distance
near the surface; a floor on the step size keeps rays from stalling.

The hit point returned is the first sample found inside the surface, not
a refined intersection. Its error is bounded by the last step taken.

Example:
    >>> @ti.kernel
    ... def probe() -> ti.i32:
    ...     result = sphere_trace(vec3(0.0, 0.0, 3.0), vec3(0.0, 0.0, -1.0))
    ...     return result.hit
"""

import taichi as ti

from src.spheretrace.core.ray import dot, length_squared, vec3
from src.spheretrace.geometry.displaced_sphere import get_sphere_radius, signed_distance

# =============================================================================
# Marching Constants
# =============================================================================

# Iteration cap; guarantees termination
MAX_MARCH_STEPS = 128

# Fraction of the distance estimate advanced per step
STEP_SCALE = 0.1

# Smallest step taken, even when the distance estimate is tiny
MIN_STEP = 0.01


@ti.dataclass
class MarchHit:
    """Result of marching a single ray.

    Attributes:
        hit: 1 if the ray entered the surface, 0 otherwise.
        point: First sample position inside the surface.
            Only valid if hit == 1.
        steps: Number of distance evaluations performed.
    """

    hit: ti.i32
    point: vec3
    steps: ti.i32


@ti.func
def misses_bounding_sphere(origin: vec3, direction: vec3) -> ti.i32:
    """Analytic early reject against the undisplaced sphere.

    Compares the squared distance between the coordinate origin and the
    ray's supporting line with R^2. The displaced surface lies inside the
    undisplaced sphere, so a ray whose line misses the sphere cannot hit.

    Args:
        origin: Ray origin.
        direction: Unit ray direction.

    Returns:
        1 if the ray can be discarded, 0 otherwise.
    """
    radius = get_sphere_radius()
    along = dot(origin, direction)
    return ti.cast(length_squared(origin) - along * along > radius * radius, ti.i32)


@ti.func
def sphere_trace(origin: vec3, direction: vec3) -> MarchHit:
    """March a ray until it enters the surface or the step budget runs out.

    Args:
        origin: Ray origin.
        direction: Ray direction. Must be unit length; it is not
            re-normalized here.

    Returns:
        A MarchHit. hit == 0 means no intersection was found.
    """
    result = MarchHit(hit=0, point=origin, steps=0)

    if misses_bounding_sphere(origin, direction) == 0:
        pos = origin
        # Active flag instead of break so the loop shape stays fixed
        active = 1
        for _ in range(MAX_MARCH_STEPS):
            if active == 1:
                d = signed_distance(pos)
                result.steps += 1
                if d < 0.0:
                    result.hit = 1
                    result.point = pos
                    active = 0
                else:
                    pos = pos + direction * ti.max(d * STEP_SCALE, MIN_STEP)

    return result
