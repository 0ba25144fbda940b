"""Wall textures decoded into packed 0xRRGGBBAA pixels."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import numpy as np
from PIL import Image

from .scene import SceneError

__all__ = ["Texture", "pack_rgba", "load_texture", "load_wall_textures"]


def pack_rgba(r: int, g: int, b: int, a: int) -> int:
    """Pack four 8-bit channels into one 0xRRGGBBAA integer."""
    return (r << 24) + (g << 16) + (b << 8) + a


@dataclass(frozen=True, eq=False)
class Texture:
    """An image as a (height, width) grid of packed colours."""

    path: str
    pixels: np.ndarray

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def sample(self, x: int, y: int) -> int:
        """Return the packed colour at column x, row y."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"texel ({x}, {y}) outside {self.width}x{self.height} texture")
        return int(self.pixels[y, x])


def load_texture(path: str | Path) -> Texture:
    """Decode an image file into a Texture."""
    try:
        with Image.open(path) as image:
            rgba = np.asarray(image.convert("RGBA"), dtype=np.uint32)
    except OSError as exc:
        raise SceneError(f"cannot load texture {path}") from exc
    packed = (
        (rgba[:, :, 0] << 24)
        | (rgba[:, :, 1] << 16)
        | (rgba[:, :, 2] << 8)
        | rgba[:, :, 3]
    )
    return Texture(path=str(path), pixels=packed.astype(np.uint32))


def load_wall_textures(
    north: str | Path, south: str | Path, west: str | Path, east: str | Path
) -> dict[str, Texture]:
    """Load the four wall textures, keyed by ``north``, ``south``, ``west``, ``east``."""
    textures: dict[str, Texture] = {}
    for key, label, path in (
        ("north", "NO", north),
        ("south", "SO", south),
        ("west", "WE", west),
        ("east", "EA", east),
    ):
        try:
            textures[key] = load_texture(path)
        except SceneError as exc:
            raise SceneError(f"{label} texture load") from exc
    return textures