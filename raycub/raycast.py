"""Grid ray casting against the walls of a GameMap."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .mathutil import FLOAT_MAX, NUM_RAYS, PI, TILE_SIZE, distance_between_points, normalize_angle
from .player import Player
from .scene import GameMap

__all__ = ["Ray", "cast_ray", "cast_all_rays"]


@dataclass(frozen=True)
class Ray:
    """The nearest wall hit along one viewing direction."""

    angle: float
    wall_hit_x: float
    wall_hit_y: float
    distance: float
    hit_vertical: bool
    facing_up: bool
    facing_down: bool
    facing_left: bool
    facing_right: bool


def _inside(game_map: GameMap, x: float, y: float) -> bool:
    return 0 <= x <= game_map.width and 0 <= y <= game_map.height


def _horizontal_hit(
    game_map: GameMap, px: float, py: float, angle: float, facing_down: bool, facing_right: bool
) -> tuple[float, float] | None:
    """First wall crossing on a horizontal grid line, if any."""
    tan_a = math.tan(angle)
    if tan_a == 0:
        return None
    y = math.floor(py / TILE_SIZE) * TILE_SIZE
    if facing_down:
        y += TILE_SIZE
    x = px + (y - py) / tan_a
    y_step = TILE_SIZE if facing_down else -TILE_SIZE
    x_step = TILE_SIZE / tan_a
    if (not facing_right and x_step > 0) or (facing_right and x_step < 0):
        x_step = -x_step
    while _inside(game_map, x, y):
        check_y = y if facing_down else y - 1
        if game_map.has_wall_at(x, check_y):
            return x, y
        x += x_step
        y += y_step
    return None


def _vertical_hit(
    game_map: GameMap, px: float, py: float, angle: float, facing_down: bool, facing_right: bool
) -> tuple[float, float] | None:
    """First wall crossing on a vertical grid line, if any."""
    tan_a = math.tan(angle)
    x = math.floor(px / TILE_SIZE) * TILE_SIZE
    if facing_right:
        x += TILE_SIZE
    y = py + (x - px) * tan_a
    x_step = TILE_SIZE if facing_right else -TILE_SIZE
    y_step = TILE_SIZE * tan_a
    if (not facing_down and y_step > 0) or (facing_down and y_step < 0):
        y_step = -y_step
    while _inside(game_map, x, y):
        check_x = x if facing_right else x - 1
        if game_map.has_wall_at(check_x, y):
            return x, y
        x += x_step
        y += y_step
    return None


def cast_ray(game_map: GameMap, x: float, y: float, angle: float) -> Ray:
    """Cast one ray from (x, y); a ray that hits nothing has distance FLOAT_MAX."""
    angle = normalize_angle(angle)
    facing_down = 0 < angle < PI
    facing_right = angle < 0.5 * PI or angle > 1.5 * PI

    horizontal = _horizontal_hit(game_map, x, y, angle, facing_down, facing_right)
    vertical = _vertical_hit(game_map, x, y, angle, facing_down, facing_right)
    hor_distance = distance_between_points(x, y, *horizontal) if horizontal else FLOAT_MAX
    ver_distance = distance_between_points(x, y, *vertical) if vertical else FLOAT_MAX

    hit_vertical = ver_distance < hor_distance
    if hit_vertical:
        hit, distance = vertical, ver_distance
    else:
        hit, distance = horizontal, hor_distance
    hit_x, hit_y = hit if hit else (0.0, 0.0)
    return Ray(
        angle=angle,
        wall_hit_x=hit_x,
        wall_hit_y=hit_y,
        distance=distance,
        hit_vertical=hit_vertical,
        facing_up=not facing_down,
        facing_down=facing_down,
        facing_left=not facing_right,
        facing_right=facing_right,
    )


def cast_all_rays(game_map: GameMap, player: Player, num_rays: int = NUM_RAYS) -> list[Ray]:
    """Cast ``num_rays`` rays spread evenly across the player's field of view."""
    angle = player.rotation_angle - player.fov / 2
    step = player.fov / num_rays
    rays = []
    for _ in range(num_rays):
        rays.append(cast_ray(game_map, player.x, player.y, angle))
        angle += step
    return rays