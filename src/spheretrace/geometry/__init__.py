"""Geometry module for the implicit surface.

Components:
    displaced_sphere: Signed distance field of a turbulence-displaced
        sphere, plus the finite-difference normal estimator
"""

from .displaced_sphere import (
    displacement,
    estimate_normal,
    get_sphere_info,
    reset_sphere,
    setup_sphere,
    signed_distance,
)

__all__ = [
    "setup_sphere",
    "reset_sphere",
    "get_sphere_info",
    "displacement",
    "signed_distance",
    "estimate_normal",
]
