"""The game loop: input handling, per-frame update and the window."""

from __future__ import annotations

import sys
from typing import Mapping, Sequence

import numpy as np

from .mathutil import FRAMES, NUM_RAYS, WINDOW_HEIGHT, WINDOW_WIDTH
from .player import Player
from .raycast import Ray, cast_all_rays
from .render import render_3d, render_minimap
from .scene import Scene, SceneError, load_scene
from .textures import Texture, load_wall_textures

__all__ = ["Game", "main"]

_WALK_KEYS = {"w": 1, "s": -1}
_STRAFE_KEYS = {"a": -1, "d": 1}
_TURN_KEYS = {"right": 1, "left": -1}


class Game:
    """A running scene: the player, the last cast rays and the frame buffer."""

    def __init__(
        self, scene: Scene, textures: Mapping[str, Texture], num_rays: int = NUM_RAYS
    ) -> None:
        self.scene = scene
        self.textures = dict(textures)
        self.num_rays = num_rays
        self.player = Player(x=scene.player_x, y=scene.player_y, direction=scene.player_dir)
        self.frame = np.zeros((WINDOW_HEIGHT, WINDOW_WIDTH), dtype=np.uint32)
        self.rays: list[Ray] = []
        self.last_tick = 0
        self.running = True

    def handle_key(self, key: str, pressed: bool) -> None:
        """Apply a key press or release; keys are named like ``w`` or ``left``."""
        if key == "escape" and pressed:
            self.running = False
        if key in _WALK_KEYS:
            self.player.walk_direction = _WALK_KEYS[key] if pressed else 0
        if key in _STRAFE_KEYS:
            self.player.strafe_direction = _STRAFE_KEYS[key] if pressed else 0
        if key in _TURN_KEYS:
            self.player.turn_direction = _TURN_KEYS[key] if pressed else 0

    def handle_mouse(self, x: float) -> None:
        """Turn toward the side of the window the cursor is on; the middle third stops."""
        half = WINDOW_WIDTH // 2
        self.player.turn_direction = (x > half) - (x < half)
        if WINDOW_WIDTH // 3 < x < WINDOW_WIDTH * 2 // 3:
            self.player.turn_direction = 0

    def update(self, now_ms: int) -> bool:
        """Advance and redraw if a frame interval has passed; True if redrawn."""
        if now_ms - self.last_tick <= 1000 // FRAMES:
            return False
        game_map = self.scene.game_map
        self.player.move(game_map)
        self.rays = cast_all_rays(game_map, self.player, self.num_rays)
        self.frame.fill(0)
        render_3d(
            self.frame, self.rays, self.player, self.textures, self.scene.ceiling, self.scene.floor
        )
        render_minimap(self.frame, game_map, self.player)
        self.last_tick = now_ms
        return True


def _run_window(game: Game) -> None:
    import pygame

    key_names = {
        pygame.K_w: "w",
        pygame.K_s: "s",
        pygame.K_a: "a",
        pygame.K_d: "d",
        pygame.K_LEFT: "left",
        pygame.K_RIGHT: "right",
        pygame.K_ESCAPE: "escape",
    }
    pygame.init()
    try:
        screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption("Cub3d")
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.running = False
                elif event.type in (pygame.KEYDOWN, pygame.KEYUP) and event.key in key_names:
                    game.handle_key(key_names[event.key], event.type == pygame.KEYDOWN)
                elif event.type == pygame.MOUSEMOTION:
                    game.handle_mouse(event.pos[0])
            if game.update(pygame.time.get_ticks()):
                data = game.frame.astype(">u4").tobytes()
                surface = pygame.image.frombuffer(data, (WINDOW_WIDTH, WINDOW_HEIGHT), "RGBA")
                screen.fill((0, 0, 0))
                screen.blit(surface, (0, 0))
                pygame.display.flip()
            pygame.time.wait(1)
    finally:
        pygame.quit()


def main(argv: Sequence[str] | None = None) -> int:
    """Load the scene named on the command line and run the game window."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Error, 2 arguments pls.")
        return 1
    try:
        scene = load_scene(args[0])
        textures = load_wall_textures(scene.north, scene.south, scene.west, scene.east)
    except SceneError as exc:
        print(f"Error: {exc}")
        return -1
    _run_window(Game(scene, textures))
    return 0


if __name__ == "__main__":
    sys.exit(main())