"""Fireball scene configuration.

This module provides a factory function that configures the single-object
fireball scene: a sphere displaced by FBM turbulence, lit by one point
light and seen through a pinhole camera looking down -z.

All parameters have defaults reproducing the reference image: a 640x480
frame, 90 degree vertical field of view, radius 1.5 sphere with 0.2
displacement amplitude, camera at (0, 0, 3) and light at (10, 10, 10).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.spheretrace.scene.fireball import FireballParams, create_fireball_scene
    >>>
    >>> params = FireballParams(noise_amplitude=0.0)  # Plain sphere
    >>> camera = create_fireball_scene(params)
"""

import math
from dataclasses import dataclass

from src.spheretrace.camera.pinhole import PinholeCamera, setup_camera
from src.spheretrace.core.integrator import DEFAULT_LIGHT_POSITION, setup_light
from src.spheretrace.geometry.displaced_sphere import (
    DEFAULT_NOISE_AMPLITUDE,
    DEFAULT_NOISE_FREQUENCY,
    DEFAULT_SPHERE_RADIUS,
    setup_sphere,
)

# =============================================================================
# Fireball Parameters
# =============================================================================


@dataclass
class FireballParams:
    """Parameters for configuring the fireball scene.

    Attributes:
        width: Image columns.
        height: Image rows.
        fov: Vertical field of view in radians.
        sphere_radius: Radius of the undisplaced sphere.
        noise_amplitude: Maximum inward displacement of the surface.
        noise_frequency: Spatial frequency of the displacement turbulence.
        camera_position: Camera position; the camera looks down -z.
        light_position: Position of the point light.

    Example:
        >>> params = FireballParams()
        >>> params.sphere_radius
        1.5
        >>> wide = FireballParams(fov=math.pi / 3.0, width=320, height=240)
    """

    width: int = 640
    height: int = 480
    fov: float = math.pi / 2.0
    sphere_radius: float = DEFAULT_SPHERE_RADIUS
    noise_amplitude: float = DEFAULT_NOISE_AMPLITUDE
    noise_frequency: float = DEFAULT_NOISE_FREQUENCY
    camera_position: tuple[float, float, float] = (0.0, 0.0, 3.0)
    light_position: tuple[float, float, float] = DEFAULT_LIGHT_POSITION


# =============================================================================
# Fireball Factory
# =============================================================================


def create_fireball_scene(params: FireballParams | None = None) -> PinholeCamera:
    """Configure sphere, light and camera for the fireball scene.

    Args:
        params: Optional FireballParams. If None, uses FireballParams().

    Returns:
        The PinholeCamera that was set up. Image dimensions are not applied
        here; pass params.width and params.height to the renderer.

    Raises:
        ValueError: If a sphere or camera parameter is out of range.
    """
    if params is None:
        params = FireballParams()

    setup_sphere(
        radius=params.sphere_radius,
        noise_amplitude=params.noise_amplitude,
        noise_frequency=params.noise_frequency,
    )
    setup_light(params.light_position)

    camera = PinholeCamera(position=params.camera_position, fov=params.fov)
    setup_camera(camera)

    return camera
