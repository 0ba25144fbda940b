"""The player: position, heading and movement with wall collision."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .mathutil import PI, PLAYER_SIZE, TILE_SIZE, TURN_SPEED, normalize_angle
from .scene import GameMap

__all__ = ["Player", "direction_to_radians"]


def direction_to_radians(direction: str) -> float:
    """Heading for a compass letter; -1 for anything else."""
    return {"N": 3 * PI / 2, "S": PI / 2, "E": 0.0, "W": PI}.get(direction, -1.0)


@dataclass
class Player:
    """A player in world units, steered by direction flags in -1, 0, 1."""

    x: float
    y: float
    direction: str = "N"
    turn_direction: int = 0
    walk_direction: int = 0
    strafe_direction: int = 0
    walk_speed: float = float(TILE_SIZE // 10)
    turn_speed: float = TURN_SPEED * (PI / 180)
    fov: float = 60 * PI / 180
    rotation_angle: float = field(init=False)

    def __post_init__(self) -> None:
        self.rotation_angle = normalize_angle(direction_to_radians(self.direction))

    def move(self, game_map: GameMap) -> None:
        """Turn, then walk and strafe, keeping each axis out of walls."""
        self.rotation_angle = normalize_angle(
            self.rotation_angle + self.turn_direction * self.turn_speed
        )
        move_step = self.walk_direction * self.walk_speed
        strafe_step = self.strafe_direction * self.walk_speed
        angle = self.rotation_angle
        new_x = self.x + math.cos(angle) * move_step + math.cos(angle + PI / 2) * strafe_step
        new_y = self.y + math.sin(angle) * move_step + math.sin(angle + PI / 2) * strafe_step

        lead_x = new_x - self.walk_direction * PLAYER_SIZE // 2
        if not game_map.blocks_player(lead_x, self.y) and not game_map.blocks_player(new_x, self.y):
            self.x = new_x
        lead_y = new_y - self.strafe_direction * PLAYER_SIZE // 2
        if not game_map.blocks_player(self.x, lead_y) and not game_map.blocks_player(self.x, new_y):
            self.y = new_y