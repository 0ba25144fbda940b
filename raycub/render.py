"""Drawing the 3D wall projection and the rotating minimap into a frame.

A frame is a ``(height, width)`` numpy array of packed 0xRRGGBBAA colours,
indexed as ``frame[row, column]``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Mapping, Sequence

import numpy as np

from .mathutil import MINI_R, PI, PLAYER_SIZE, TILE_SIZE, WINDOW_HEIGHT, WINDOW_WIDTH
from .player import Player
from .raycast import Ray
from .scene import GameMap
from .textures import Texture

__all__ = [
    "WallSlice",
    "project_wall",
    "wall_texture_column",
    "build_strip",
    "render_3d",
    "render_minimap",
    "draw_rectangle",
]

MINIMAP_FLOOR = 0xFFFFFFFF
MINIMAP_WALL = 0x000000FF
PLAYER_COLOR = 0xFF0000FF


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b > 0) else -quotient


def _trunc_mod(a: int, b: int) -> int:
    return a - b * _trunc_div(a, b)


@dataclass(frozen=True)
class WallSlice:
    """Screen extent of one projected wall column."""

    perp_distance: float
    projection_plane: float
    strip_height: float
    top: int
    bottom: int


def project_wall(ray: Ray, player: Player) -> WallSlice:
    """Project the wall hit by ``ray`` onto the screen, correcting fish-eye."""
    distance = ray.distance if ray.distance != 0 else 0.1
    perp = distance * math.cos(ray.angle - player.rotation_angle)
    plane = (WINDOW_WIDTH // 2) / math.tan(player.fov / 2)
    height = (TILE_SIZE / perp) * plane
    top = int((WINDOW_HEIGHT // 2) - height / 2)
    bottom = int((WINDOW_HEIGHT // 2) + height / 2)
    return WallSlice(
        perp_distance=perp,
        projection_plane=plane,
        strip_height=height,
        top=top,
        bottom=bottom,
    )


def wall_texture_column(ray: Ray) -> tuple[str, int]:
    """Choose the wall texture for a ray and the column within a tile it hit.

    Returns the texture key (``north``, ``south``, ``west`` or ``east``) and a
    column in ``[0, TILE_SIZE)``.
    """
    offset = _trunc_mod(int(ray.wall_hit_x + ray.wall_hit_y), TILE_SIZE)
    flipped = TILE_SIZE - 1 - offset
    if not ray.hit_vertical:
        if 0 < ray.angle < PI:
            return "south", flipped
        return "north", offset
    if PI * 1 / 2 < ray.angle < PI * 3 / 2:
        return "west", flipped
    return "east", offset


def build_strip(
    wall: WallSlice, texture: Texture, column: int, ceiling: int, floor: int
) -> np.ndarray:
    """Colours of one screen column: ceiling, textured wall, then floor."""
    strip = np.full(WINDOW_HEIGHT, floor, dtype=np.uint32)
    start = max(0, min(wall.top, WINDOW_HEIGHT))
    strip[:start] = ceiling

    img_x = 1 if column == 1 else _trunc_div(column * texture.width, TILE_SIZE)
    img_x = min(max(img_x, 0), texture.width - 1)
    anti_y = start + wall.top if wall.top < 0 else start
    end = min(wall.bottom, WINDOW_HEIGHT)
    span = wall.bottom - wall.top
    if end > start and span > 0:
        ys = np.arange(start, end, dtype=np.int64)
        img_y = np.clip(((ys - anti_y) * texture.height) // span, 0, texture.height - 1)
        strip[start:end] = texture.pixels[img_y, img_x]
    return strip


def render_3d(
    frame: np.ndarray,
    rays: Sequence[Ray],
    player: Player,
    textures: Mapping[str, Texture],
    ceiling: int,
    floor: int,
) -> None:
    """Draw one textured column per ray into ``frame``."""
    for index, ray in enumerate(rays):
        wall = project_wall(ray, player)
        key, column = wall_texture_column(ray)
        frame[:WINDOW_HEIGHT, index] = build_strip(wall, textures[key], column, ceiling, floor)


def _floor_grid(game_map: GameMap) -> np.ndarray:
    rows = game_map.rows
    width = max((len(row) for row in rows), default=0)
    grid = np.zeros((len(rows), max(width, 1)), dtype=bool)
    for row_index, row in enumerate(rows):
        for col_index, ch in enumerate(row):
            grid[row_index, col_index] = ch == "0"
    return grid


def _draw_player(frame: np.ndarray) -> None:
    radius_sq = (PLAYER_SIZE // 2) * (PLAYER_SIZE // 2)
    for x in range(-PLAYER_SIZE, PLAYER_SIZE // 2):
        for y in range(-PLAYER_SIZE, PLAYER_SIZE // 2):
            if x * x + y * y <= radius_sq:
                frame[MINI_R + y, MINI_R + x] = PLAYER_COLOR


def render_minimap(frame: np.ndarray, game_map: GameMap, player: Player) -> None:
    """Draw a circular minimap that turns with the player, in the top-left corner."""
    coords = np.arange(0, MINI_R * 2, 2)
    xs, ys = np.meshgrid(coords, coords)
    dx = xs - MINI_R
    dy = ys - MINI_R
    inside = dx * dx + dy * dy <= MINI_R * MINI_R

    angle = player.rotation_angle + PI / 2
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    rotated_x = dx * cos_a - dy * sin_a
    rotated_y = dx * sin_a + dy * cos_a
    map_x = np.trunc(rotated_x * 0.05 + player.x / TILE_SIZE).astype(np.int64)
    map_y = np.trunc(rotated_y * 0.05 + player.y / TILE_SIZE).astype(np.int64)

    grid = _floor_grid(game_map)
    valid = (map_y >= 0) & (map_y < len(game_map.rows)) & (map_x >= 0) & (map_x < grid.shape[1])
    safe_y = np.clip(map_y, 0, grid.shape[0] - 1) if grid.shape[0] else np.zeros_like(map_y)
    safe_x = np.clip(map_x, 0, grid.shape[1] - 1)
    is_floor = valid & (grid[safe_y, safe_x] if grid.shape[0] else False)

    colors = np.where(is_floor, MINIMAP_FLOOR, MINIMAP_WALL).astype(np.uint32)
    frame[ys[inside], xs[inside]] = colors[inside]
    _draw_player(frame)


def draw_rectangle(
    frame: np.ndarray, x: int, y: int, width: int, height: int, color: int
) -> None:
    """Fill a rectangle, clipped to the frame."""
    frame_height, frame_width = frame.shape[:2]
    x0, x1 = max(x, 0), min(x + width, frame_width)
    y0, y1 = max(y, 0), min(y + height, frame_height)
    if x1 > x0 and y1 > y0:
        frame[y0:y1, x0:x1] = color