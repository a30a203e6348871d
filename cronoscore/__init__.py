"""Core of a small 3D game engine: application loop, modules, game objects, components, camera, octree, timers and random numbers."""

__version__ = "0.1.0"