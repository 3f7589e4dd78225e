"""Procedural renderer for a small animated solar system.

This package renders a synthetic scene (a star, a rocky planet with an
orbiting moon, and a banded gas giant) with analytic ray-sphere intersection
and noise-driven shading, using Taichi kernels for the per-pixel work.
No textures or external assets are used.

Subpackages:
    core: Hash and fractal noise, vector utilities, frame compositor, renderer
    geometry: Sphere primitive and ray-sphere intersection
    materials: Star, rocky planet, gas giant and moon shaders
    scene: Scene configuration, moon orbit and nearest-hit resolution
    camera: Forward-looking pinhole camera
    preview: Tone mapping and PNG export

Modules that declare Taichi fields (compositor, renderer, scene.intersection,
camera.pinhole) must be imported after ti.init().
"""

__version__ = "0.1.0"
