"""Textured first-person raycasting engine driven by .cub scene files."""

__version__ = "0.1.0"

__all__ = ["app", "mathutil", "player", "raycast", "render", "scene", "textures"]