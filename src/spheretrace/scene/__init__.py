"""Scene module.

Components:
    fireball: Parameters and factory for the displaced-sphere scene
"""

from .fireball import FireballParams, create_fireball_scene

__all__ = [
    "FireballParams",
    "create_fireball_scene",
]
