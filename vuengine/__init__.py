"""Rendering-engine building blocks: simulated allocators, camera math, transforms, physics and meshes."""

__version__ = "0.1.0"

__all__ = [
    "allocators",
    "memory_manager",
    "chunk_memory",
    "camera",
    "buffer",
    "gameobject",
    "systems",
    "model",
]