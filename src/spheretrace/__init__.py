"""Taichi-based sphere tracer for a noise-displaced fireball.

This package renders an implicit surface by sphere tracing a signed
distance field on the CPU or GPU through Taichi, with support for:
- Fractal Brownian motion (FBM) turbulence built from value noise
- A sphere whose radius is displaced by the turbulence field
- Damped ray marching with an analytic bounding-sphere early reject
- Fire palette shading lit by a single point light

Subpackages:
    core: Vector utilities, noise, ray marching, parallel fill and renderer
    geometry: The displaced sphere signed distance field and normal estimator
    materials: Fire palette and shading
    scene: Fireball scene configuration
    camera: Pinhole camera with per-pixel primary rays
    output: Quantization and PNG export
"""

__version__ = "0.1.0"
