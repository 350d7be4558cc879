"""Materials module for surface shading.

Components:
    fire: Five-color fire palette driven by displacement depth, lit by a
        point light with an ambient floor
"""

from .fire import (
    AMBIENT_FLOOR,
    DARK_GRAY,
    GRAY,
    ORANGE,
    RED,
    YELLOW,
    noise_level,
    palette_fire,
    shade_fire,
)

__all__ = [
    "palette_fire",
    "noise_level",
    "shade_fire",
    "GRAY",
    "DARK_GRAY",
    "RED",
    "ORANGE",
    "YELLOW",
    "AMBIENT_FLOOR",
]
